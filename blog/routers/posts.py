from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog.cache import FEED_KEY, cache
from blog.config import settings
from blog.database import get_db
from blog.schemas import CommentCreate, CommentResponse, CommentWithUser, PostResponse, PostThread
from blog.services import comment_service, feed_service, post_service

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.get("", response_model=list[PostThread])
async def list_published_posts(db: AsyncSession = Depends(get_db)):
    cached = await cache.get(FEED_KEY)
    if cached is not None:
        return cached

    threads = await feed_service.assembled_published_posts(db)
    feed = [
        PostThread(
            post=post,
            author=author,
            comments=[CommentWithUser(comment=c, user=u) for c, u in comments],
        ).model_dump()
        for (post, author), comments in threads
    ]
    await cache.set(FEED_KEY, feed, ttl=settings.CACHE_TTL_FEED)
    return feed


@router.post("/{post_id}/publish", response_model=PostResponse)
async def publish_post(post_id: int, db: AsyncSession = Depends(get_db)):
    post = await post_service.publish_post(db, post_id)
    await cache.invalidate_feed()
    return post


@router.post("/{post_id}/comments", status_code=201, response_model=CommentResponse)
async def create_comment(post_id: int, data: CommentCreate, db: AsyncSession = Depends(get_db)):
    comment = await comment_service.create_comment(db, data.user_id, post_id, data.body)
    await cache.invalidate_feed()
    return comment


@router.get("/{post_id}/comments", response_model=list[CommentWithUser])
async def list_post_comments(post_id: int, db: AsyncSession = Depends(get_db)):
    rows = await comment_service.comments_for_post(db, post_id)
    return [CommentWithUser(comment=c, user=u) for c, u in rows]
