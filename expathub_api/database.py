# expathub_api/database.py
"""
Подключение к базе данных и сессии
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from expathub_shared.config import config
from expathub_shared.models import Base

# Создаем асинхронный движок
engine = create_async_engine(config.DATABASE_URL, echo=config.DATABASE_ECHO)

# Создаем фабрику сессий
AsyncSessionLocal = async_sessionmaker(
    engine, 
    class_=AsyncSession, 
    expire_on_commit=False
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Зависимость для получения сессии базы данных"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


__all__ = [
    'Base',
    'engine',
    'AsyncSessionLocal',
    'get_db',
]
