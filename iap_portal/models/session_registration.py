"""Public session registration form submissions."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func
from iap_portal.database import Base


class SessionRegistration(Base):
    """A request submitted through the public registration form.

    ``session_desired`` is free text and is not linked to ``sessions.id``.
    """
    __tablename__ = "session_registrations"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    roll_number = Column(String(50), nullable=False)
    year = Column(String(1), nullable=False)
    department = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    session_desired = Column(String(255), nullable=False)
    other_query = Column(Text)
    submitted_at = Column(DateTime, server_default=func.now(), nullable=False)
