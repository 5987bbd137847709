"""Session model definitions."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.sql import func
from iap_portal.database import Base


class Session(Base):
    """A topical session offered to one academic year."""
    __tablename__ = "sessions"
    __table_args__ = (
        CheckConstraint("year IN ('1', '2', '3', '4')", name="ck_sessions_year"),
    )

    id = Column(Integer, primary_key=True, index=True)
    topic = Column(String(255), nullable=False)
    year = Column(String(1), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
