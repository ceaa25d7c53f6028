from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog.database import get_db
from blog.schemas import (
    CommentWithPost,
    CommentWithUser,
    PostCreate,
    PostResponse,
    PostThread,
    UserCreate,
    UserResponse,
)
from blog.services import comment_service, feed_service, post_service, user_service
from blog.services.user_service import ById, ByUsername

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("", status_code=201, response_model=UserResponse)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    return await user_service.create_user(db, data.username)


@router.get("/by-username/{username}", response_model=UserResponse)
async def get_user_by_username(username: str, db: AsyncSession = Depends(get_db)):
    return await user_service.find_user(db, ByUsername(username))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    return await user_service.find_user(db, ById(user_id))


@router.post("/{user_id}/posts", status_code=201, response_model=PostResponse)
async def create_post(user_id: int, data: PostCreate, db: AsyncSession = Depends(get_db)):
    return await post_service.create_post(db, user_id, data.title, data.body)


@router.get("/{user_id}/posts", response_model=list[PostThread])
async def list_user_posts(user_id: int, db: AsyncSession = Depends(get_db)):
    threads = await feed_service.assembled_user_posts(db, user_id)
    return [
        PostThread(
            post=post,
            comments=[CommentWithUser(comment=c, user=u) for c, u in comments],
        )
        for post, comments in threads
    ]


@router.get("/{user_id}/comments", response_model=list[CommentWithPost])
async def list_user_comments(user_id: int, db: AsyncSession = Depends(get_db)):
    rows = await comment_service.comments_by_user(db, user_id)
    return [CommentWithPost(comment=c, post=p) for c, p in rows]
