# expathub_api/main.py
"""
Главный файл FastAPI приложения
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from expathub_shared.config import config
from .database import Base, engine
from .routers import (
    places_router,
    reviews_router,
    translate_router,
    health_router,
)

# Настройка логирования
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    # Startup
    logger.info("Запуск приложения...")
    
    try:
        # Создание таблиц
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("✅ Таблицы базы данных созданы")
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"❌ Ошибка при создании таблиц: {e}")
    
    if config.STATS_CACHE_ENABLED:
        logger.info(f"Кэш статистики мест включен: {config.REDIS_URL}, TTL {config.STATS_CACHE_TTL}s")
    
    yield  # Приложение работает
    
    # Shutdown
    logger.info("Остановка приложения...")
    await engine.dispose()


# Создание приложения FastAPI
app = FastAPI(
    title="ExpatHub API",
    description="API объявлений о работе и жилье для иностранцев: рейтинги, отзывы, перевод",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Настройка CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключение роутеров
app.include_router(places_router, prefix="/api/v1/places", tags=["Places"])
app.include_router(reviews_router, prefix="/api/v1/reviews", tags=["Reviews"])
app.include_router(translate_router, prefix="/api/v1/translate", tags=["Translate"])
app.include_router(health_router, tags=["Health"])


@app.get("/")
async def root():
    return {
        "message": "ExpatHub API is running!",
        "docs": "/docs",
        "version": "1.0.0",
    }
