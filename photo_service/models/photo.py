"""
Photo model. The uploaded file lives in the blob store at file_path.
"""
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, CheckConstraint, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from photo_service.core.database import Base

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png")


class Photo(Base):
    """Photo metadata with a server-internal storage location."""

    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Internal only, never serialized. NULL until the id is known.
    file_path = Column(String(512), nullable=True)
    mime_type = Column(String(100), nullable=False)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    category = relationship("Category", back_populates="photos")
    user = relationship("User", back_populates="photos")
    opinions = relationship("Opinion", back_populates="photo", passive_deletes=True)
    comments = relationship("Comment", back_populates="photo", passive_deletes=True)

    __table_args__ = (
        CheckConstraint(
            "mime_type IN ('image/jpeg', 'image/png')",
            name='valid_mime_type'
        ),
        Index('idx_photos_category', 'category_id'),
    )

    def __repr__(self):
        return f"<Photo {self.id} {self.title}>"
