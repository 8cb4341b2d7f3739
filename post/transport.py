"""SMTP delivery. One attempt per call; failures surface as SmtpError subclasses."""

import logging
import smtplib
import ssl
from email.message import EmailMessage

from .core.errors import SmtpAuthError, SmtpConnectionError, SmtpError, SmtpRejectionError
from .core.models import Account, OutgoingMessage

logger = logging.getLogger(__name__)

SMTPS_PORT = 465


def _reply(e: smtplib.SMTPResponseException) -> str:
    text = e.smtp_error.decode(errors="replace") if isinstance(e.smtp_error, bytes) else str(e.smtp_error)
    return f"{e.smtp_code} {text}".strip()


def _translate(e: OSError, host: str, port: int) -> SmtpError:
    if isinstance(e, smtplib.SMTPAuthenticationError):
        return SmtpAuthError(host, port, _reply(e))
    if isinstance(e, smtplib.SMTPRecipientsRefused):
        refused = ", ".join(f"{addr} ({code})" for addr, (code, _) in e.recipients.items())
        return SmtpRejectionError(host, port, f"recipients refused: {refused}")
    if isinstance(e, smtplib.SMTPSenderRefused):
        return SmtpRejectionError(host, port, f"sender {e.sender} refused: {_reply(e)}")
    if isinstance(e, (smtplib.SMTPConnectError, smtplib.SMTPHeloError)):
        return SmtpConnectionError(host, port, _reply(e))
    if isinstance(e, smtplib.SMTPResponseException):
        return SmtpRejectionError(host, port, _reply(e))
    if isinstance(e, smtplib.SMTPNotSupportedError):
        return SmtpConnectionError(host, port, str(e) or "extension not supported by server")
    if isinstance(e, smtplib.SMTPServerDisconnected):
        return SmtpConnectionError(host, port, str(e) or "server disconnected")
    return SmtpConnectionError(host, port, str(e) or type(e).__name__)


def _connect(host: str, port: int, timeout: float | None) -> smtplib.SMTP:
    context = ssl.create_default_context()
    kwargs = {} if timeout is None else {"timeout": timeout}
    if port == SMTPS_PORT:
        logger.debug("connecting to %s:%s (ssl)", host, port)
        return smtplib.SMTP_SSL(host, port, context=context, **kwargs)
    logger.debug("connecting to %s:%s (starttls)", host, port)
    client = smtplib.SMTP(host, port, **kwargs)
    try:
        client.ehlo()
        client.starttls(context=context)
        client.ehlo()
    except BaseException:
        client.close()
        raise
    return client


def send(
    message: EmailMessage,
    outgoing: OutgoingMessage,
    account: Account,
    password: str,
    *,
    timeout: float | None = None,
) -> None:
    host, port = account.smtp.hostname, account.smtp.port
    recipients = outgoing.recipients
    try:
        with _connect(host, port, timeout) as client:
            try:
                client.login(account.smtp.username, password)
            except UnicodeEncodeError as e:
                # smtplib encodes AUTH responses as ASCII
                raise SmtpAuthError(host, port, "username and password must be ASCII for this server") from e
            client.send_message(message, from_addr=account.email, to_addrs=recipients)
    except OSError as e:
        err = _translate(e, host, port)
        logger.debug("send via %s:%s failed: %s", host, port, err.detail)
        raise err from e
    logger.debug("sent to %d recipient(s) via %s:%s", len(recipients), host, port)
