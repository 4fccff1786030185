from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid
from jobhub.database.database import Base

class File(Base):
    __tablename__ = "files"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    # object key in the bucket
    key = Column(String(500), nullable=False, unique=True)
    # original file name (for display)
    name = Column(String(255), nullable=False)
    size = Column(Integer, nullable=False)  # bytes
    content_type = Column(String(100))
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # relationships
    created_by = relationship("User", back_populates="files")
