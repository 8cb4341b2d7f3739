import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from .core.errors import ConfigNotFoundError, ConfigParseError, ValidationError
from .core.models import Account, ServerConfig

logger = logging.getLogger(__name__)

CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
MAIL_DIR = CONFIG_HOME / "mail"
EXTENSION = ".toml"


def account_path(name: str) -> Path:
    """Path of the config file for account `name`."""
    if not name or name.startswith(".") or "/" in name or os.sep in name:
        raise ValidationError(f"invalid account name: {name!r}")
    return MAIL_DIR / f"{name}{EXTENSION}"


def list_accounts() -> list[str]:
    if not MAIL_DIR.is_dir():
        return []
    return sorted(p.stem for p in MAIL_DIR.glob(f"*{EXTENSION}") if p.is_file())


def load_account(name: str) -> Account:
    """Load and validate the account config stored under `name`.

    Raises ConfigNotFoundError when the file is absent and ConfigParseError
    when it is not valid TOML or lacks a required key.
    """
    path = account_path(name)
    if not path.is_file():
        raise ConfigNotFoundError(name, path)
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(path, str(e)) from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(path, "not valid UTF-8") from e
    except OSError as e:
        raise ConfigParseError(path, e.strerror or str(e)) from e

    logger.debug("loaded account %s from %s", name, path)
    return _parse_account(name, path, data)


def _parse_account(key: str, path: Path, data: dict[str, Any]) -> Account:
    imap = data.get("imap")
    return Account(
        key=key,
        name=_require(path, data, "name", str),
        email=_require(path, data, "email", str),
        smtp=_parse_server(path, _require(path, data, "smtp", dict), "smtp"),
        imap=_parse_server(path, imap, "imap") if imap is not None else None,
    )


def _parse_server(path: Path, table: Any, section: str) -> ServerConfig:
    if not isinstance(table, dict):
        raise ConfigParseError(path, f"[{section}] must be a table")
    port = _require(path, table, "port", int, prefix=section)
    if isinstance(port, bool) or not 0 < port < 65536:
        raise ConfigParseError(path, f"{section}.port must be between 1 and 65535, got {port!r}")
    return ServerConfig(
        hostname=_require(path, table, "hostname", str, prefix=section),
        port=port,
        username=_require(path, table, "username", str, prefix=section),
    )


def _require(path: Path, table: dict[str, Any], key: str, type_: type, prefix: str = "") -> Any:
    label = f"{prefix}.{key}" if prefix else key
    if key not in table:
        raise ConfigParseError(path, f"missing key '{label}'")
    value = table[key]
    if not isinstance(value, type_):
        raise ConfigParseError(path, f"'{label}' must be {type_.__name__}, got {type(value).__name__}")
    if type_ is str and not value.strip():
        raise ConfigParseError(path, f"'{label}' is empty")
    if type_ is str and ("\r" in value or "\n" in value):
        raise ConfigParseError(path, f"'{label}' must be a single line")
    return value
