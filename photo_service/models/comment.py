"""
Comment model. Comments are removed together with their photo.
"""
from sqlalchemy import Column, Integer, Text, ForeignKey, TIMESTAMP, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from photo_service.core.database import Base


class Comment(Base):
    __tablename__ = "comments"
    __table_args__ = (
        Index('idx_comments_photo', 'photo_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    photo_id = Column(Integer, ForeignKey("photos.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    photo = relationship("Photo", back_populates="comments")

    def __repr__(self):
        return f"<Comment {self.id} on photo {self.photo_id}>"
