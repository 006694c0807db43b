"""Centralized error handler for ns-modernizer commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from nsmodernizer.exceptions import ModernizerError
from nsmodernizer.utils.logging import get_request_id, logger


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator that turns unexpected failures into a logged ClickException."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        """Inner wrapper that implements the try-except logic."""
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as e:
            error_type = type(e).__name__
            error_msg = str(e)

            # Known failures carry a clear message; anything else gets the traceback
            logger.opt(exception=not isinstance(e, ModernizerError)).error(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=error_msg,
            )

            user_message = f"{error_type}: {error_msg} (request id {get_request_id()})"

            raise click.ClickException(user_message) from e

    return wrapper
