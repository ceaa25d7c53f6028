import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog.cache import cache
from blog.config import settings
from blog.errors import (
    BlogError,
    ConstraintViolation,
    NotFound,
    SerializationError,
    StoreConnectionError,
)
from blog.middleware import TimingMiddleware
from blog.routers import metrics, posts, users

logger = logging.getLogger(__name__)

# Error kind -> HTTP status.  The core only raises these kinds; this table is
# the single place they become transport codes.
ERROR_STATUS: dict[type[BlogError], int] = {
    NotFound: 404,
    ConstraintViolation: 409,
    StoreConnectionError: 500,
    SerializationError: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.LOG_LEVEL)
    # Startup
    try:
        await cache.connect()
    except Exception as exc:
        logger.warning("Cache unavailable, serving uncached: %s", exc)
    yield
    # Shutdown
    await cache.disconnect()


app = FastAPI(
    title="Blog API",
    description="Users, posts and comments with nested post/comment feeds",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError):
    status = next(
        (code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)),
        500,
    )
    if status >= 500:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc)
        return JSONResponse(status_code=status, content={"detail": "Internal server error"})
    return JSONResponse(status_code=status, content={"detail": str(exc)})


# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(users.router)
app.include_router(posts.router)
app.include_router(metrics.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
