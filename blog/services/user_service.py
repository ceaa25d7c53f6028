"""
User service: create users and resolve them by username or id.

``find_user`` is a plain lookup: every call queries the store, nothing is
memoised.
"""
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blog.database import atomic
from blog.errors import NotFound, translate_errors
from blog.models import User
from blog.schemas import UserResponse


# ---------------------------------------------------------------------------
# Lookup keys
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ByUsername:
    username: str


@dataclass(frozen=True)
class ById:
    id: int


UserKey = ByUsername | ById


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

@translate_errors
async def create_user(db: AsyncSession, username: str) -> UserResponse:
    """
    Insert a user and return it with its store-assigned id.

    The id comes back from the INSERT itself (RETURNING / lastrowid on
    flush), never from a follow-up "latest row" query.  Username uniqueness
    is enforced by the store and surfaces as ``ConstraintViolation``.
    """
    async with atomic(db):
        user = User(username=username)
        db.add(user)
        await db.flush()
        return UserResponse.model_validate(user)


@translate_errors
async def find_user(db: AsyncSession, key: UserKey) -> UserResponse:
    """Return the single user matching *key*, or raise ``NotFound``."""
    match key:
        case ByUsername(username=username):
            q = select(User).where(User.username == username)
        case ById(id=user_id):
            q = select(User).where(User.id == user_id)
        case _:
            raise TypeError(f"unsupported user key: {key!r}")

    user = (await db.execute(q)).scalar_one_or_none()
    if user is None:
        raise NotFound(f"user not found: {key!r}")
    return UserResponse.model_validate(user)
