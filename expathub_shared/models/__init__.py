# expathub_shared/models/__init__.py
from .base import Base
from .place import Place
from .review import Review
from .reaction import ReviewReaction
from .enums import PlaceType, Sentiment, ReactionType, Language, ReviewSort

__all__ = [
    'Base',
    'Place',
    'Review',
    'ReviewReaction',
    'PlaceType',
    'Sentiment',
    'ReactionType',
    'Language',
    'ReviewSort',
]
