"""
Filler Bot Error Hierarchy

Every error the bot raises on purpose derives from FillerError, which carries
a short machine-readable code and a context dict alongside the message. The
turn driver catches ProtocolError and stops; the CLI turns ConfigurationError
into exit status 2; ViewerError never leaves the viewer thread.

Usage:
    from filler_bot.errors import ProtocolError

    try:
        turn = reader.read_turn()
    except ProtocolError as e:
        logger.error(f"Stopping: {e}")
"""

from typing import Any

__all__ = [
    "ConfigurationError",
    "FillerError",
    "InvalidStateError",
    "ProtocolError",
    "ViewerError",
]


class FillerError(Exception):
    """Root of the filler bot error hierarchy.

    ``str(error)`` renders as ``[CODE] message (key=value, ...)``.
    """
    code: str = "FILLER_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or type(self).code
        self.context = dict(context) if context else {}

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message}"
        if not self.context:
            return text
        details = ", ".join(f"{key}={value}" for key, value in self.context.items())
        return f"{text} ({details})"

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "context": self.context}


class ProtocolError(FillerError):
    """Turn input that cannot be parsed.

    Covers headers of the wrong shape, rows that disagree with the declared
    dimensions and input that ends inside a turn. Once this is raised the
    reader no longer knows where the next turn starts.
    """
    code: str = "PROTOCOL_ERROR"

    def __init__(
        self,
        message: str,
        line: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        if line is not None:
            context = {**(context or {}), "line": line}
        super().__init__(message, context=context)
        self.line = line


class ConfigurationError(FillerError):
    """Bad strategy, weight profile or config file."""
    code: str = "CONFIG_ERROR"

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        if config_key:
            context = {**(context or {}), "config_key": config_key}
        super().__init__(message, context=context)
        self.config_key = config_key


class InvalidStateError(FillerError):
    """A move was requested before the turn's board and piece arrived."""
    code: str = "INVALID_STATE"


class ViewerError(FillerError):
    """The live viewer could not start or render."""
    code: str = "VIEWER_ERROR"
