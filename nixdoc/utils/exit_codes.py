"""Centralized exit codes for the nixdoc CLI."""


class ExitCodes:
    """Standard exit codes for nixdoc CLI commands."""

    # Search completed, zero matches included
    SUCCESS = 0

    # No (documented) function at the requested position
    NOT_FOUND = 1

    # Fatal before or at the start of a search
    PATTERN_ERROR = 2
    ROOT_UNREADABLE = 3
