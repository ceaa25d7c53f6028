"""
Post service: create and publish posts; flat post reads.

Reads here never nest: a post comes back either bare or paired with its
author as a tuple.  Building post → comments graphs is
``feed_service``'s job.
"""
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from blog.database import atomic
from blog.errors import NotFound, translate_errors
from blog.models import Post, User
from blog.schemas import PostResponse, UserResponse

PostWithAuthor = tuple[PostResponse, UserResponse]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

@translate_errors
async def create_post(db: AsyncSession, author_id: int, title: str, body: str) -> PostResponse:
    """
    Insert an unpublished post for *author_id* and return it with its id.

    A missing author is rejected by the foreign key and surfaces as
    ``ConstraintViolation``.
    """
    async with atomic(db):
        post = Post(user_id=author_id, title=title, body=body, published=False)
        db.add(post)
        await db.flush()
        return PostResponse.model_validate(post)


@translate_errors
async def publish_post(db: AsyncSession, post_id: int) -> PostResponse:
    """
    Set ``published`` on *post_id* and return the re-read row.

    Publishing an already-published post is a no-op that still succeeds.
    Raises ``NotFound`` when the post does not exist; the UPDATE is rolled
    back with it.
    """
    async with atomic(db):
        await db.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(published=True)
            .execution_options(synchronize_session=False)
        )
        q = (
            select(Post)
            .where(Post.id == post_id)
            .execution_options(populate_existing=True)
        )
        post = (await db.execute(q)).scalar_one_or_none()
        if post is None:
            raise NotFound(f"post not found: {post_id}")
        return PostResponse.model_validate(post)


# ---------------------------------------------------------------------------
# Flat reads
# ---------------------------------------------------------------------------

@translate_errors
async def published_posts(db: AsyncSession) -> list[PostWithAuthor]:
    """Published posts joined with their author, newest (highest id) first."""
    q = (
        select(Post, User)
        .join(User, Post.user_id == User.id)
        .where(Post.published.is_(True))
        .order_by(Post.id.desc())
    )
    rows = (await db.execute(q)).all()
    return [
        (PostResponse.model_validate(post), UserResponse.model_validate(author))
        for post, author in rows
    ]


@translate_errors
async def posts_by_user(db: AsyncSession, user_id: int) -> list[PostResponse]:
    """Every post by *user_id*, published or not, newest first."""
    q = select(Post).where(Post.user_id == user_id).order_by(Post.id.desc())
    result = await db.execute(q)
    return [PostResponse.model_validate(p) for p in result.scalars().all()]
