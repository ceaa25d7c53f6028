"""
Feed service: nested post/comment graphs.

Each function issues exactly two reads, parents first and then every child
for those parents in one statement, and hands both lists to
``group_by_parent``.  The reads share the session's transaction but no
snapshot is requested: on a READ COMMITTED store a comment committed
between the two reads may show up under a post list that predates it.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from blog.assembler import group_by_parent
from blog.errors import translate_errors
from blog.schemas import PostResponse
from blog.services import comment_service, post_service
from blog.services.comment_service import CommentWithUser
from blog.services.post_service import PostWithAuthor

PublishedThread = tuple[PostWithAuthor, list[CommentWithUser]]
UserThread = tuple[PostResponse, list[CommentWithUser]]


def _comment_post_id(row: CommentWithUser) -> int:
    return row[0].post_id


@translate_errors
async def assembled_published_posts(db: AsyncSession) -> list[PublishedThread]:
    """``[((post, author), [(comment, commenter), ...]), ...]``, newest post first."""
    parents = await post_service.published_posts(db)
    children = await comment_service.comments_for_posts(db, [post.id for post, _ in parents])
    return group_by_parent(
        parents,
        children,
        parent_key=lambda row: row[0].id,
        child_key=_comment_post_id,
    )


@translate_errors
async def assembled_user_posts(db: AsyncSession, user_id: int) -> list[UserThread]:
    """``[(post, [(comment, commenter), ...]), ...]`` for *user_id*'s posts, newest first."""
    parents = await post_service.posts_by_user(db, user_id)
    children = await comment_service.comments_for_posts(db, [post.id for post in parents])
    return group_by_parent(
        parents,
        children,
        parent_key=lambda post: post.id,
        child_key=_comment_post_id,
    )
