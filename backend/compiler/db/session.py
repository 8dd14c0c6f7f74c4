from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from compiler.core.config import get_settings

settings = get_settings()

# aiosqlite connections are bound to the loop that opened them
_engine_kwargs = (
    {"poolclass": NullPool} if settings.DATABASE_URL.startswith("sqlite") else {}
)
engine = create_async_engine(
    settings.DATABASE_URL, future=True, echo=False, **_engine_kwargs
)

AsyncSessionLocal = sessionmaker(
    bind=engine, autoflush=False, expire_on_commit=False, class_=AsyncSession
)


async def get_session():
    async with AsyncSessionLocal() as session:
        yield session
