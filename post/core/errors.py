from pathlib import Path


class PostError(Exception):
    pass


class NotFoundError(PostError):
    pass


class ValidationError(PostError):
    pass


class ConfigNotFoundError(NotFoundError):
    def __init__(self, account: str, path: Path):
        self.account = account
        self.path = path
        super().__init__(f"no config for account '{account}': {path} does not exist")


class ConfigParseError(PostError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"invalid config {path}: {reason}")


class MissingArgumentError(ValidationError):
    def __init__(self, flag: str):
        self.flag = flag
        super().__init__(f"{flag} is required")


class AddressError(ValidationError):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f"malformed address: {address!r}")


class BodyFileError(PostError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class SmtpError(PostError):
    label = "smtp error"

    def __init__(self, host: str, port: int, detail: str):
        self.host = host
        self.port = port
        self.detail = detail
        super().__init__(f"{self.label} ({host}:{port}): {detail}")


class SmtpConnectionError(SmtpError):
    label = "could not connect"


class SmtpAuthError(SmtpError):
    label = "authentication failed"


class SmtpRejectionError(SmtpError):
    label = "message rejected"
