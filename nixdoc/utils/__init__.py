"""nixdoc utilities package."""

from .constants import CONFIG_FILE_NAME, ENV_PREFIX, ERROR_LOG_FILE, NIXDOC_DIR
from .error_handler import handle_exceptions
from .exit_codes import ExitCodes
from .logging import logger

__all__ = [
    "NIXDOC_DIR",
    "ERROR_LOG_FILE",
    "CONFIG_FILE_NAME",
    "ENV_PREFIX",
    "handle_exceptions",
    "ExitCodes",
    "logger",
]
