"""
User model resolved by the identity layer.
"""
from sqlalchemy import Column, Integer, String, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from photo_service.core.database import Base


class User(Base):
    """Uploading identity. Accounts are managed outside this service."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=False)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    photos = relationship("Photo", back_populates="user")

    def __repr__(self):
        return f"<User {self.email}>"
