"""post — send a markdown file as an email from a configured account."""

from __future__ import annotations

import logging
from pathlib import Path

from fncli import cli

from . import config, message, transport
from .core.models import SendRequest
from .merge import merge


def _debug_to_stderr() -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger = logging.getLogger("post")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


@cli(
    name="post",
    bare=True,
    flags={"subject": ["-s", "--subject"], "password": ["-p", "--password"]},
    help={
        "account": "account name, read from <config dir>/mail/<account>.toml",
        "path": "body file; markdown, also sent as HTML",
        "to": "recipient(s), repeatable",
        "cc": "carbon copy recipient(s)",
        "bcc": "blind carbon copy recipient(s)",
        "plain": "send plain text only",
        "dry_run": "print the message instead of sending it",
        "verbose": "debug logging to stderr",
    },
)
def send(
    account: str,
    path: str,
    subject: str | None = None,
    to: list[str] | None = None,
    password: str | None = None,
    cc: list[str] | None = None,
    bcc: list[str] | None = None,
    plain: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
):
    """Send the contents of a file as an email"""
    if verbose:
        _debug_to_stderr()

    request = SendRequest(
        account=account,
        body_path=Path(path),
        subject=subject,
        to=tuple(to or ()),
        password=password,
        cc=tuple(cc or ()),
        bcc=tuple(bcc or ()),
        html=not plain,
    )
    acct = config.load_account(request.account)
    outgoing = merge(request, acct, message.read_body(request.body_path))
    mail = message.build(outgoing, html=request.html)

    if dry_run:
        print(mail.as_string())
        return

    transport.send(mail, outgoing, acct, request.password or "")
    print(f"sent → {', '.join(outgoing.to)}  |  {outgoing.subject}")
