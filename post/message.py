from email.message import EmailMessage
from email.utils import formatdate, make_msgid, parseaddr
from pathlib import Path

import markdown

from .core.errors import BodyFileError
from .core.models import OutgoingMessage

MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]


def read_body(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8")
    except FileNotFoundError as e:
        raise BodyFileError(path, "no such file") from e
    except IsADirectoryError as e:
        raise BodyFileError(path, "is a directory") from e
    except UnicodeDecodeError as e:
        raise BodyFileError(path, "not valid UTF-8 text") from e
    except OSError as e:
        raise BodyFileError(path, e.strerror or str(e)) from e


def render_html(text: str) -> str:
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def build(outgoing: OutgoingMessage, *, html: bool = True) -> EmailMessage:
    """Assemble headers and body. Bcc is left to the envelope."""
    msg = EmailMessage()
    msg["From"] = outgoing.sender
    msg["To"] = ", ".join(outgoing.to)
    if outgoing.cc:
        msg["Cc"] = ", ".join(outgoing.cc)
    msg["Subject"] = outgoing.subject
    msg["Date"] = formatdate(localtime=True)
    msg["Message-ID"] = make_msgid(domain=parseaddr(outgoing.sender)[1].rpartition("@")[2] or None)

    msg.set_content(outgoing.body)
    if html:
        msg.add_alternative(render_html(outgoing.body), subtype="html")
    return msg
