"""
Доступ к данным: места и отзывы
"""

from .places import PlaceRepository
from .reviews import ReviewRepository

__all__ = ['PlaceRepository', 'ReviewRepository']
