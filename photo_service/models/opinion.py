"""
Opinion model: a LIKE / DISLIKE vote on a photo.
"""
import enum

from sqlalchemy import Column, Integer, Enum, ForeignKey, TIMESTAMP, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from photo_service.core.database import Base


class OpinionValue(str, enum.Enum):
    LIKE = "LIKE"
    DISLIKE = "DISLIKE"


class Opinion(Base):
    __tablename__ = "opinions"
    __table_args__ = (
        Index('idx_opinions_photo_opinion', 'photo_id', 'opinion'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    photo_id = Column(Integer, ForeignKey("photos.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    opinion = Column(Enum(OpinionValue, name="opinion_value"), nullable=False)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    photo = relationship("Photo", back_populates="opinions")
