"""User model definitions."""

from sqlalchemy import CheckConstraint, Column, Integer, String
from iap_portal.database import Base


class User(Base):
    """Represents a portal login account."""
    __tablename__ = "iap_users_details"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'student')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # admin/student
