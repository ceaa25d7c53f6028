from pydantic import BaseModel, ConfigDict, Field


# --- User ---

class UserCreate(BaseModel):
    username: str = Field(min_length=1)


class UserResponse(BaseModel):
    id: int
    username: str
    model_config = ConfigDict(from_attributes=True, frozen=True)


# --- Post ---

class PostCreate(BaseModel):
    title: str
    body: str


class PostResponse(BaseModel):
    id: int
    user_id: int
    title: str
    body: str
    published: bool
    model_config = ConfigDict(from_attributes=True, frozen=True)


class PostSummary(BaseModel):
    """Read-only projection of a post embedded under a comment."""

    id: int
    title: str
    published: bool
    model_config = ConfigDict(from_attributes=True, frozen=True)


# --- Comment ---

class CommentCreate(BaseModel):
    user_id: int
    body: str


class CommentResponse(BaseModel):
    id: int
    user_id: int
    post_id: int
    body: str
    model_config = ConfigDict(from_attributes=True, frozen=True)


# --- Nested shapes returned by the HTTP layer ---

class CommentWithUser(BaseModel):
    comment: CommentResponse
    user: UserResponse


class CommentWithPost(BaseModel):
    comment: CommentResponse
    post: PostSummary


class PostThread(BaseModel):
    post: PostResponse
    author: UserResponse | None = None  # omitted on a user's own post list
    comments: list[CommentWithUser] = []


# --- Metrics ---

class MetricsResponse(BaseModel):
    total_users: int
    total_posts: int
    total_published_posts: int
    total_comments: int
    cache_info: dict = {}
