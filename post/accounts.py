"""post accounts — inspect configured sending accounts."""

from __future__ import annotations

from fncli import cli

from . import config
from .core.errors import ConfigParseError


@cli("post accounts", name="ls", default=True)
def accounts_list():
    """List configured accounts"""
    names = config.list_accounts()
    if not names:
        print("no accounts configured")
        print(f"  create one at: {config.MAIL_DIR}/<account>{config.EXTENSION}")
        return
    for name in names:
        try:
            acct = config.load_account(name)
        except ConfigParseError as e:
            print(f"  {name:12} ✗ {e.reason}")
            continue
        print(f"  {name:12} {acct.sender}")


@cli("post accounts", name="show")
def show(account: str):
    """Show an account's config"""
    acct = config.load_account(account)
    print(f"file:     {config.account_path(account)}")
    print(f"from:     {acct.sender}")
    print(f"smtp:     {acct.smtp.hostname}:{acct.smtp.port} as {acct.smtp.username}")
    if acct.imap:
        print(f"imap:     {acct.imap.hostname}:{acct.imap.port} as {acct.imap.username}")
