from typing import Optional, Dict
from pydantic import Field, field_validator
from .base import BaseSchema, TimestampSchema
from expathub_shared.models.enums import ReactionType, Sentiment

class ReviewCreate(BaseSchema):
    """Схема для создания отзыва"""
    place_id: str
    rating: int = Field(..., ge=1, le=5)
    rating_details: Dict[str, float] = Field(default_factory=dict)
    pros: str = Field(..., max_length=2000)
    cons: Optional[str] = Field(None, max_length=2000)
    tips: Optional[str] = Field(None, max_length=2000)
    author_name: Optional[str] = Field(None, max_length=100)
    author_country: Optional[str] = Field(None, max_length=100)
    is_anonymous: bool = False
    
    @field_validator("pros")
    @classmethod
    def validate_pros(cls, v):
        # Плюсы обязательны
        if not v.strip():
            raise ValueError("Pros section is required")
        return v.strip()

class ReviewUpdate(BaseSchema):
    """Схема для обновления отзыва"""
    rating: Optional[int] = Field(None, ge=1, le=5)
    rating_details: Optional[Dict[str, float]] = None
    content: Optional[str] = Field(None, min_length=1, max_length=6000)

class ReviewResponse(TimestampSchema):
    """Отзыв в том виде, в каком он хранится"""
    id: str
    place_id: str
    user_id: str
    rating: int
    rating_details: Optional[Dict[str, float]] = None
    content: str
    ai_summary: Optional[str] = None
    helpful_count: int = 0
    author_name: Optional[str] = None
    author_country: Optional[str] = None
    sentiment: Optional[Sentiment] = None

class ReviewItem(BaseSchema):
    """Отзыв для отображения на странице места"""
    id: str
    rating: int
    rating_details: Dict[str, float] = {}
    content: str
    helpful_count: int = 0
    author_name: str = "Anonymous"
    author_country: str = "Unknown"
    sentiment: Sentiment = Sentiment.NEUTRAL
    date: str = ""

class ReactionRequest(BaseSchema):
    """Лайк или дизлайк"""
    reaction: ReactionType

class ReactionResponse(BaseSchema):
    """Состояние реакции после запроса"""
    review_id: str
    reaction: Optional[ReactionType] = None
    helpful_count: int
    changed: bool
