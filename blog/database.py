from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase, SessionTransactionOrigin

from blog.config import settings
from blog.middleware import install_query_counter


def install_sqlite_pragmas(engine) -> None:
    """
    Enable foreign-key enforcement on every new SQLite connection.

    SQLite ships with ``foreign_keys=OFF``; without this a comment could
    reference a missing post and no ``IntegrityError`` would ever reach
    the error table.  No-op for any other dialect.
    """
    sync_engine = engine.sync_engine
    if sync_engine.dialect.name != "sqlite":
        return

    @event.listens_for(sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Module-level engine variable allows tests to override with a test engine.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

install_query_counter(engine)
install_sqlite_pragmas(engine)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def atomic(db: AsyncSession):
    """
    Transaction boundary for a single write.

    - No open transaction: begin one, commit on exit, roll back on error.
    - Transaction the session autobegan for an earlier read: the write
      finishes it, committing on success and rolling back on error, so a
      returned id always belongs to a committed row.
    - Transaction the caller began explicitly (``async with db.begin()``):
      joined; the caller commits or rolls back the whole unit of work.
    """
    transaction = db.sync_session.get_transaction()
    if transaction is None:
        async with db.begin():
            yield db
        return

    if transaction.origin is not SessionTransactionOrigin.AUTOBEGIN:
        yield db
        return

    try:
        yield db
    except Exception:
        await db.rollback()
        raise
    await db.commit()
