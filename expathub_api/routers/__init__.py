"""
FastAPI роутеры
"""

from .places import router as places_router
from .reviews import router as reviews_router
from .translate import router as translate_router
from .health import router as health_router

__all__ = [
    'places_router',
    'reviews_router',
    'translate_router',
    'health_router',
]
