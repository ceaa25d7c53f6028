"""
Comment service: create comments; flat comment reads.

None of the reads below add an ORDER BY.  Comments come back in whatever
order the store scans them, which is stable per query but is *not*
guaranteed to be creation order; callers must not assume otherwise.
"""
from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blog.database import atomic
from blog.errors import translate_errors
from blog.models import Comment, Post, User
from blog.schemas import CommentResponse, PostSummary, UserResponse

CommentWithUser = tuple[CommentResponse, UserResponse]
CommentWithPost = tuple[CommentResponse, PostSummary]


@translate_errors
async def create_comment(db: AsyncSession, user_id: int, post_id: int, body: str) -> CommentResponse:
    """
    Insert a comment and return it with its store-assigned id.

    Both foreign keys are checked by the store; a missing user or post
    surfaces as ``ConstraintViolation``.
    """
    async with atomic(db):
        comment = Comment(user_id=user_id, post_id=post_id, body=body)
        db.add(comment)
        await db.flush()
        return CommentResponse.model_validate(comment)


def _with_commenter(rows) -> list[CommentWithUser]:
    return [
        (CommentResponse.model_validate(c), UserResponse.model_validate(u))
        for c, u in rows
    ]


@translate_errors
async def comments_for_post(db: AsyncSession, post_id: int) -> list[CommentWithUser]:
    """Comments on *post_id*, each paired with its commenter."""
    q = (
        select(Comment, User)
        .join(User, Comment.user_id == User.id)
        .where(Comment.post_id == post_id)
    )
    return _with_commenter((await db.execute(q)).all())


@translate_errors
async def comments_for_posts(db: AsyncSession, post_ids: Collection[int]) -> list[CommentWithUser]:
    """
    Comments on any post in *post_ids*, paired with their commenter, in one
    statement.  An empty id set returns ``[]`` without querying.
    """
    if not post_ids:
        return []
    q = (
        select(Comment, User)
        .join(User, Comment.user_id == User.id)
        .where(Comment.post_id.in_(post_ids))
    )
    return _with_commenter((await db.execute(q)).all())


@translate_errors
async def comments_by_user(db: AsyncSession, user_id: int) -> list[CommentWithPost]:
    """
    Comments written by *user_id*, each with a ``PostSummary`` of its post.

    Only id, title and published are selected from ``posts``; body and
    author id are left out of the payload.  A user with no comments (or no
    such user) gets an empty list.
    """
    q = (
        select(Comment, Post.id, Post.title, Post.published)
        .join(Post, Comment.post_id == Post.id)
        .where(Comment.user_id == user_id)
    )
    rows = (await db.execute(q)).all()
    return [
        (
            CommentResponse.model_validate(comment),
            PostSummary(id=post_id, title=title, published=published),
        )
        for comment, post_id, title, published in rows
    ]
