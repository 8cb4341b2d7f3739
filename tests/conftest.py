import io
import logging
import smtplib
from contextlib import redirect_stderr, redirect_stdout

import fncli
import pytest

from post import cli

ROBIN = """\
name = "Robin Boers"
email = "a@b.nl"

[smtp]
hostname = "smtp.gmail.com"
port = 587
username = "a@b.nl"
"""


class FnCLIRunner:
    """Runs `post ...` in-process, the way the console script does."""

    def invoke(self, args: list[str]) -> fncli.Result:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            try:
                code = cli.dispatch(["post", *args])
            except SystemExit as e:
                code = int(e.code) if e.code is not None else 1
        return fncli.Result(code, out.getvalue(), err.getvalue())


class SmtpRecorder:
    def __init__(self):
        self.connections: list["FakeSMTP"] = []
        self.fail_at: str | None = None

    @property
    def sent(self) -> list[tuple]:
        return [m for c in self.connections for m in c.sent]


class FakeSMTP:
    def __init__(self, recorder: SmtpRecorder, host: str, port: int, ssl: bool, **kwargs):
        if recorder.fail_at == "connect":
            raise ConnectionRefusedError(111, "Connection refused")
        self.recorder = recorder
        self.host = host
        self.port = port
        self.ssl = ssl
        self.kwargs = kwargs
        self.calls: list[str] = []
        self.logins: list[tuple[str, str]] = []
        self.sent: list[tuple] = []
        self.closed = False
        recorder.connections.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.closed = True

    def ehlo(self, name=""):
        self.calls.append("ehlo")

    def starttls(self, context=None):
        self.calls.append("starttls")
        if self.recorder.fail_at == "starttls":
            raise smtplib.SMTPNotSupportedError("STARTTLS extension not supported by server.")

    def login(self, user, password):
        self.calls.append("login")
        self.logins.append((user, password))
        f"\0{user}\0{password}".encode("ascii")
        if self.recorder.fail_at == "login":
            raise smtplib.SMTPAuthenticationError(535, b"5.7.8 Username and Password not accepted")

    def send_message(self, msg, from_addr=None, to_addrs=None):
        self.calls.append("send_message")
        if self.recorder.fail_at == "rcpt":
            raise smtplib.SMTPRecipientsRefused({to_addrs[0]: (550, b"5.1.1 No such user")})
        if self.recorder.fail_at == "data":
            raise smtplib.SMTPDataError(554, b"5.7.1 Message rejected as spam")
        self.sent.append((msg, from_addr, list(to_addrs)))
        return {}


@pytest.fixture
def tmp_mail_dir(tmp_path, monkeypatch):
    mail_dir = tmp_path / "mail"
    mail_dir.mkdir()
    monkeypatch.setattr("post.config.MAIL_DIR", mail_dir)
    return mail_dir


@pytest.fixture
def write_account(tmp_mail_dir):
    def _write(name: str = "robin", content: str = ROBIN):
        path = tmp_mail_dir / f"{name}.toml"
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def body_file(tmp_path):
    def _write(content: str = "Hello", name: str = "body.md"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_smtp(monkeypatch):
    recorder = SmtpRecorder()

    def plain(host, port, **kwargs):
        return FakeSMTP(recorder, host, port, ssl=False, **kwargs)

    def secure(host, port, **kwargs):
        return FakeSMTP(recorder, host, port, ssl=True, **kwargs)

    monkeypatch.setattr(smtplib, "SMTP", plain)
    monkeypatch.setattr(smtplib, "SMTP_SSL", secure)
    return recorder


@pytest.fixture
def post_logger():
    logger = logging.getLogger("post")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
