"""
Сервисы с бизнес-логикой
"""

from .listings import ListingService
from .reviews import ReviewService
from .translation import TranslationService
from .cache import CacheService, PlaceStatsCache

__all__ = ['ListingService', 'ReviewService', 'TranslationService', 'CacheService', 'PlaceStatsCache']
