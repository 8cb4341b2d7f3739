import dataclasses
from email.utils import formataddr, parseaddr
from pathlib import Path


@dataclasses.dataclass(frozen=True)
class ServerConfig:
    hostname: str
    port: int
    username: str


@dataclasses.dataclass(frozen=True)
class Account:
    key: str
    name: str
    email: str
    smtp: ServerConfig
    imap: ServerConfig | None = None

    @property
    def sender(self) -> str:
        return formataddr((self.name, self.email))


@dataclasses.dataclass(frozen=True)
class SendRequest:
    account: str
    body_path: Path
    subject: str | None
    to: tuple[str, ...]
    password: str | None
    cc: tuple[str, ...] = ()
    bcc: tuple[str, ...] = ()
    html: bool = True


@dataclasses.dataclass(frozen=True)
class OutgoingMessage:
    sender: str
    to: tuple[str, ...]
    subject: str
    body: str
    cc: tuple[str, ...] = ()
    bcc: tuple[str, ...] = ()

    @property
    def recipients(self) -> list[str]:
        """Envelope addresses: to, then cc, then bcc."""
        return [parseaddr(a)[1] for a in (*self.to, *self.cc, *self.bcc)]
