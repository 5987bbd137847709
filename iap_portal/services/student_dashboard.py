import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DbSession

from iap_portal.auth.dependencies import AuthContext
from iap_portal.models.session import Session
from iap_portal.models.student_session import StudentSession
from iap_portal.schemas import ACADEMIC_YEARS, MySessionRow, StudentDashboard, YearGroup

logger = logging.getLogger(__name__)

SESSIONS_STORE_ERROR_MESSAGE = 'Could not load your sessions. Please try again later.'


def list_my_sessions(db: DbSession, student_id: int) -> list[MySessionRow]:
    rows = (
        db.query(
            Session.id,
            Session.topic,
            Session.year,
            StudentSession.registration_status,
            StudentSession.registered_at,
        )
        .join(StudentSession, StudentSession.session_id == Session.id)
        .filter(StudentSession.student_id == student_id)
        .order_by(Session.year.asc(), Session.topic.asc())
        .all()
    )

    return [
        MySessionRow(
            id=row.id,
            topic=row.topic,
            year=row.year,
            registration_status=row.registration_status,
            registered_at=row.registered_at,
        )
        for row in rows
    ]


def group_sessions_by_year(rows: list[MySessionRow]) -> list[YearGroup]:
    grouped: dict[str, list[MySessionRow]] = {}
    for row in rows:
        grouped.setdefault(row.year, []).append(row)

    return [YearGroup(year=year, sessions=grouped[year]) for year in ACADEMIC_YEARS if year in grouped]


def build_student_dashboard(db: DbSession, auth: AuthContext) -> StudentDashboard:
    full_name = auth.full_name or ''
    error_message = None
    rows: list[MySessionRow] = []

    try:
        rows = list_my_sessions(db, auth.student_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception('Failed to load sessions for student %s', auth.student_id)
        error_message = SESSIONS_STORE_ERROR_MESSAGE

    return StudentDashboard(
        full_name=full_name,
        first_name=full_name.split(' ')[0] if full_name else '',
        email=auth.email or '',
        roll_number=auth.roll_number or '',
        department=auth.department or '',
        year=auth.year or '',
        groups=group_sessions_by_year(rows),
        total_sessions=len(rows),
        error_message=error_message,
    )
