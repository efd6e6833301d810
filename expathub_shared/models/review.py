# expathub_shared/models/review.py
from sqlalchemy import Column, String, Text, Integer, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, new_id
from .enums import Sentiment

class Review(Base, TimestampMixin):
    """Модель отзыва"""
    __tablename__ = "reviews"
    
    id = Column(String(36), primary_key=True, default=new_id)
    place_id = Column(String(36), ForeignKey("places.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), nullable=False, index=True)  # id пользователя из BaaS
    rating = Column(Integer, nullable=False)  # 1-5
    rating_details = Column(JSON, default=dict)  # {"salary": 4, "atmosphere": 5}
    content = Column(Text, nullable=False, default="")
    ai_summary = Column(Text)
    helpful_count = Column(Integer, default=0, nullable=False)
    author_name = Column(String(100))
    author_country = Column(String(100))
    sentiment = Column(String(20), default=Sentiment.NEUTRAL)
    
    # Связи
    place = relationship("Place", back_populates="reviews")
    reactions = relationship("ReviewReaction", back_populates="review", cascade="all, delete-orphan")
    
    __table_args__ = (
        Index('idx_review_place_date', 'place_id', 'created_at'),
    )
    
    def __repr__(self):
        return f"<Review(id={self.id}, place_id={self.place_id}, rating={self.rating})>"
