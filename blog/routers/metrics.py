from fastapi import APIRouter, Depends
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from blog.cache import cache
from blog.database import get_db
from blog.models import Comment, Post, User
from blog.schemas import MetricsResponse

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])


@router.get("", response_model=MetricsResponse)
async def get_metrics(db: AsyncSession = Depends(get_db)):
    total_users = (await db.execute(select(func.count()).select_from(User))).scalar_one()

    total_posts = (await db.execute(select(func.count()).select_from(Post))).scalar_one()

    total_published = (
        await db.execute(
            select(func.count()).select_from(Post).where(Post.published.is_(True))
        )
    ).scalar_one()

    total_comments = (await db.execute(select(func.count()).select_from(Comment))).scalar_one()

    return MetricsResponse(
        total_users=total_users,
        total_posts=total_posts,
        total_published_posts=total_published,
        total_comments=total_comments,
        cache_info=cache.stats,
    )
