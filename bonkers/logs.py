"""Failure logging shared by sessions, wrappers and the signature subsystem."""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, Optional, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


def log_failure(
    logger: Optional[logging.Logger],
    origin: str,
    function: str,
    error: BaseException,
) -> None:
    """Report a failed operation: a one-line error and the traceback at debug."""
    if logger is None:
        return
    logger.error(
        "FROM: %s Function: %s | %s: %s", origin, function, type(error).__name__, error
    )
    logger.debug("FROM: %s Function: %s", origin, function, exc_info=error)


def logged(func: F) -> F:
    """Log failures of a method through ``self.logger`` and re-raise them.

    Works for plain and coroutine methods. The origin is the class name of
    the instance the method is called on.
    """
    name = func.__name__

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except Exception as error:
                log_failure(self.logger, type(self).__name__, name, error)
                raise

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except Exception as error:
            log_failure(self.logger, type(self).__name__, name, error)
            raise

    return wrapper  # type: ignore[return-value]
