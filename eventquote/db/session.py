from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from eventquote.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, future=True, echo=False, pool_pre_ping=True)
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
