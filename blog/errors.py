"""
Error taxonomy for the blog core.

Every core coroutine either returns a value or raises one of the four
``BlogError`` kinds below.  Native store/driver exceptions are converted in
exactly one place, ``ERROR_TABLE``, by the ``translate_errors`` decorator;
anything not listed there propagates unchanged.  Mapping a kind to an HTTP
status is the boundary's job (see ``blog.main``).
"""
import functools

from pydantic import ValidationError
from sqlalchemy import exc as sa_exc


class BlogError(Exception):
    """Base class for every error the core raises on purpose."""


class NotFound(BlogError):
    """A lookup or update target does not exist."""


class ConstraintViolation(BlogError):
    """A unique or foreign-key constraint rejected a write."""


class StoreConnectionError(BlogError):
    """The store is unreachable or timed out."""


class SerializationError(BlogError):
    """The store returned data that does not fit the expected shape."""


# First matching row wins, so subclasses must come before their bases
# (IntegrityError / OperationalError / DataError all derive from DBAPIError).
ERROR_TABLE: tuple[tuple[type[BaseException], type[BlogError]], ...] = (
    (sa_exc.NoResultFound, NotFound),
    (sa_exc.IntegrityError, ConstraintViolation),
    (sa_exc.OperationalError, StoreConnectionError),
    (sa_exc.InterfaceError, StoreConnectionError),
    (sa_exc.DisconnectionError, StoreConnectionError),
    (sa_exc.TimeoutError, StoreConnectionError),
    (OSError, StoreConnectionError),
    (sa_exc.MultipleResultsFound, SerializationError),
    (sa_exc.DataError, SerializationError),
    (ValidationError, SerializationError),
)

_NATIVE_ERRORS = tuple(native for native, _ in ERROR_TABLE)


def to_blog_error(exc: BaseException) -> BlogError | None:
    """Return the ``BlogError`` for *exc*, or None if the table has no row for it."""
    for native, kind in ERROR_TABLE:
        if isinstance(exc, native):
            return kind(str(exc))
    return None


def translate_errors(func):
    """Decorate a core coroutine so native errors leave it as ``BlogError``s."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except _NATIVE_ERRORS as exc:
            raise to_blog_error(exc) from exc

    return wrapper
