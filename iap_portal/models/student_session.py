"""Student enrollment model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func
from iap_portal.database import Base

REGISTRATION_STATUSES = ('registered', 'completed', 'dropped')


class StudentSession(Base):
    """Enrollment of a student in a session."""
    __tablename__ = "student_sessions"

    student_id = Column(Integer, ForeignKey("students.id"), primary_key=True)
    session_id = Column(Integer, ForeignKey("sessions.id"), primary_key=True, index=True)
    # Written by the enrollment flow; values outside REGISTRATION_STATUSES are tolerated.
    registration_status = Column(String(20), nullable=False, default='registered')
    registered_at = Column(DateTime, server_default=func.now(), nullable=False)
