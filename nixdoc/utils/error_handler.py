"""Centralized error handler for nixdoc commands."""

import traceback
from collections.abc import Callable
from datetime import datetime
from functools import wraps
from typing import Any

import click

from nixdoc.utils.logging import logger

from .constants import ERROR_LOG_FILE, NIXDOC_DIR


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that turns unexpected failures into a logged ClickException.

    Click's own control-flow exceptions (exit, abort, usage errors) pass
    through untouched.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        """Inner wrapper that implements the try-except logic."""
        try:
            return func(*args, **kwargs)
        except (click.exceptions.Exit, click.ClickException, click.Abort):
            raise
        except Exception as e:
            error_type = type(e).__name__
            error_msg = str(e)
            tb = traceback.format_exc()

            logger.opt(exception=True).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=error_msg,
            )

            try:
                NIXDOC_DIR.mkdir(parents=True, exist_ok=True)
                with open(ERROR_LOG_FILE, "a", encoding="utf-8") as f:
                    f.write("\n" + "=" * 80 + "\n")
                    f.write(f"[{datetime.now().isoformat()}] Error in command: {func.__name__}\n")
                    f.write("=" * 80 + "\n")
                    f.write(f"{error_type}: {error_msg}\n\n")
                    f.write(tb)
                    f.write("=" * 80 + "\n\n")
                location = f"Full traceback logged to: {ERROR_LOG_FILE}"
            except OSError:
                location = "Traceback could not be written to the error log"

            raise click.ClickException(f"{error_type}: {error_msg}\n\n{location}") from e

    return wrapper
