"""Student model definitions."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.sql import func
from iap_portal.database import Base


class Student(Base):
    """A student registered through the student portal.

    Kept apart from ``User``: the admin reports are built from this table.
    """
    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint("year IN ('1', '2', '3', '4')", name="ck_students_year"),
    )

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    roll_number = Column(String(50), nullable=False)
    department = Column(String(100), nullable=False)
    year = Column(String(1), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
