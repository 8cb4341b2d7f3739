from email.utils import parseaddr

from .core.errors import AddressError, MissingArgumentError, ValidationError
from .core.models import Account, OutgoingMessage, SendRequest

LINE_BREAKS = ("\r", "\n")


def _single_line(value: str) -> bool:
    return not any(c in value for c in LINE_BREAKS)


def _check_address(address: str) -> str:
    _, addr = parseaddr(address)
    local, at, domain = addr.rpartition("@")
    if not at or not local or not domain or " " in addr or not _single_line(address):
        raise AddressError(address)
    return address


def merge(request: SendRequest, account: Account, body: str) -> OutgoingMessage:
    """Combine CLI input with the account config into one outgoing message.

    The sender comes from the account; subject and recipients come from the
    request only. The body is carried as-is.
    """
    if not request.subject or not request.subject.strip():
        raise MissingArgumentError("--subject")
    if not _single_line(request.subject):
        raise ValidationError("--subject must be a single line")
    if not request.to:
        raise MissingArgumentError("--to")
    if not request.password:
        raise MissingArgumentError("--password")

    return OutgoingMessage(
        sender=account.sender,
        to=tuple(_check_address(a) for a in request.to),
        cc=tuple(_check_address(a) for a in request.cc),
        bcc=tuple(_check_address(a) for a in request.bcc),
        subject=request.subject,
        body=body,
    )
