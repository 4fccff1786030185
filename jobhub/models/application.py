from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from jobhub.database.database import Base
from jobhub.models.enums import ApplicationStatus


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        # one application per (recruitment, user)
        UniqueConstraint("recruitment_id", "user_id", name="uq_application_recruitment_user"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    message = Column(Text, nullable=False)
    status = Column(Enum(ApplicationStatus, name="application_status_enum"), nullable=False, default=ApplicationStatus.PENDING)
    cv_id = Column(String(36), ForeignKey("files.id", ondelete="SET NULL"), nullable=True)
    recruitment_id = Column(Integer, ForeignKey("recruitments.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # relationships
    cv = relationship("File")
    recruitment = relationship("Recruitment", back_populates="applications")
    user = relationship("User", back_populates="applications")
