"""Persistence layer errors.

Infrastructure failures raised by SQLAlchemy are translated into the
domain's ``StoreUnavailableError`` at the repository boundary so that
services and routes never depend on driver exception types.
"""

import functools
from typing import Awaitable, Callable, ParamSpec, TypeVar

import logfire
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from agora.domain.error import StoreUnavailableError

P = ParamSpec("P")
T = TypeVar("T")

STORE_FAILURES = (OperationalError, InterfaceError, PoolTimeoutError)


def translate_store_errors(
    func: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[T]]:
    """Wrap a repository coroutine so driver failures surface as domain errors."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except STORE_FAILURES as e:
            logfire.error(
                "Store unavailable",
                operation=func.__qualname__,
                error=str(e),
            )
            raise StoreUnavailableError(str(e)) from e

    return wrapper
