"""Custom exceptions for the indexer module.

Per-file and per-directory kinds are recoverable: they become warnings and the
rest of the scan continues. PatternCompileError and RootAccessError are fatal.
"""


class NixdocError(Exception):
    """Base class for all nixdoc errors.

    Attributes:
        path: File or directory the error refers to, if any
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class FileReadError(NixdocError):
    """Raised when a source file cannot be read."""


class EncodingError(FileReadError):
    """Raised when a source file is not valid UTF-8."""


class DirectoryAccessError(NixdocError):
    """Raised when a directory cannot be listed during the walk."""


class RootAccessError(DirectoryAccessError):
    """Raised when the search root itself is missing or unreadable."""


class PatternCompileError(NixdocError):
    """Raised when the user-supplied search pattern is not a valid regex.

    Attributes:
        pattern: The pattern as given
        reason: The regex engine's complaint
    """

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"invalid search pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class MalformedCommentLayout(NixdocError):
    """Raised when a comment's indentation has no consistent common margin."""
