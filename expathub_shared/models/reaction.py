# expathub_shared/models/reaction.py
from sqlalchemy import Column, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, new_id

class ReviewReaction(Base, TimestampMixin):
    """Реакция пользователя на отзыв (лайк или дизлайк, не оба сразу)"""
    __tablename__ = "review_reactions"
    
    id = Column(String(36), primary_key=True, default=new_id)
    review_id = Column(String(36), ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), nullable=False)
    reaction = Column(String(10), nullable=False)
    
    review = relationship("Review", back_populates="reactions")
    
    __table_args__ = (
        UniqueConstraint('review_id', 'user_id', name='uq_reaction_review_user'),
    )
    
    def __repr__(self):
        return f"<ReviewReaction(review_id={self.review_id}, user_id={self.user_id}, reaction={self.reaction})>"
