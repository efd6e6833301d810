# expathub_shared/models/enums.py
from enum import Enum

class PlaceType(str, Enum):
    """Типы объявлений"""
    JOB = "job"
    HOUSING = "housing"
    AMENITY = "amenity"

class Sentiment(str, Enum):
    """Тональность отзыва"""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"

class ReactionType(str, Enum):
    """Реакция на отзыв"""
    LIKE = "like"
    DISLIKE = "dislike"

class Language(str, Enum):
    """Языки интерфейса и перевода"""
    KO = "ko"
    EN = "en"
    JA = "ja"
    ZH = "zh"
    VI = "vi"

class ReviewSort(str, Enum):
    """Порядок отзывов на странице места"""
    LATEST = "latest"
    HELPFUL = "helpful"
