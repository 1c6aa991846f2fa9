class KettleError(Exception):
    """Base class for kettle errors."""


class InvalidIdentifierError(KettleError, ValueError):
    """Raised when an application identifier or file name is unusable."""


class InvalidEntryError(KettleError, ValueError):
    """Raised when a key, section name or value cannot be stored."""


class LoadError(KettleError):
    """Raised when an existing config file cannot be read."""


class PersistError(KettleError):
    """Raised when a config file cannot be written.

    The in-memory document still holds the attempted change, so repeating
    the call (or any later write) persists it once the cause is fixed.
    """


class ParseError(KettleError):
    """Raised by :func:`kettle.codec.parse_strict` for a malformed line."""

    def __init__(self, lineno: int, line: str, reason: str) -> None:
        super().__init__(f"line {lineno}: {reason}: {line!r}")
        self.lineno = lineno
        self.line = line
        self.reason = reason
