from typing import AsyncGenerator, Optional
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from app.core.logger import logger

Base = declarative_base()


class Database:
    """Owns the engine and session factory for one process.

    Built once at startup, attached to ``app.state.database`` and disposed on
    shutdown. Handlers never touch it directly, they receive sessions from
    :func:`get_db`.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    async def connect(self) -> None:
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, echo=self.echo, **self.engine_kwargs)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            class_=AsyncSession
        )
        logger.info("Database engine created")

    async def create_all(self) -> None:
        # registers every mapped class on Base.metadata
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def disconnect(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database engine disposed")

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        db = self.session_factory()
        try:
            yield db
        finally:
            await db.close()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.database
    async for db in database.session():
        yield db
