# expathub_shared/models/place.py
from sqlalchemy import Column, String, Text, Float, Boolean, JSON
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin, new_id
from .enums import PlaceType

class Place(Base, TimestampMixin):
    """Модель объявления: вакансия, жильё или полезное место"""
    __tablename__ = "places"
    
    id = Column(String(36), primary_key=True, default=new_id)
    type = Column(String(20), default=PlaceType.AMENITY, nullable=False, index=True)
    name = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    subtitle = Column(Text)
    description = Column(Text)
    address = Column(Text, nullable=False, default="")
    location = Column(String(100), index=True)  # район
    country = Column(String(10), index=True)  # код страны
    lat = Column(Float)
    lng = Column(Float)
    image_url = Column(Text)
    tags = Column(JSON, default=list)
    # Только для вакансий
    work_hours = Column(String(100))
    benefits = Column(JSON)
    # Только для жилья
    deposit = Column(String(100))
    size = Column(String(100))
    is_active = Column(Boolean, default=True)
    
    # Связи
    reviews = relationship("Review", back_populates="place", cascade="all, delete-orphan")
    
    def __repr__(self):
        return f"<Place(id={self.id}, name={(self.name or '')[:30]}, type={self.type})>"
