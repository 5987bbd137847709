from collections import defaultdict

from sqlalchemy import distinct, func
from sqlalchemy.orm import Session as DbSession

from iap_portal.models.session import Session
from iap_portal.models.session_registration import SessionRegistration
from iap_portal.models.student import Student
from iap_portal.models.student_session import StudentSession
from iap_portal.schemas import SessionRegistrationRow, StudentSummary

TOPIC_SEPARATOR = ', '


def list_session_registrations(db: DbSession) -> list[SessionRegistrationRow]:
    registrations = db.query(SessionRegistration).order_by(
        SessionRegistration.submitted_at.desc(),
        SessionRegistration.id.desc(),
    ).all()

    return [SessionRegistrationRow.model_validate(registration) for registration in registrations]


def get_registered_topics(db: DbSession) -> dict[int, list[str]]:
    topic_rows = (
        db.query(StudentSession.student_id, Session.topic)
        .join(Session, Session.id == StudentSession.session_id)
        .distinct()
        .order_by(StudentSession.student_id.asc(), Session.topic.asc())
        .all()
    )

    topics_by_student: dict[int, list[str]] = defaultdict(list)
    for student_id, topic in topic_rows:
        topics_by_student[student_id].append(topic)

    return topics_by_student


def list_registered_students(db: DbSession) -> list[StudentSummary]:
    """Every portal student with their enrollment count and topic list.

    Students without enrollments are kept by the outer join and report a
    count of zero and no topics.
    """
    sessions_count = func.count(distinct(StudentSession.session_id)).label('sessions_count')
    rows = (
        db.query(Student, sessions_count)
        .outerjoin(StudentSession, StudentSession.student_id == Student.id)
        .group_by(Student.id)
        .order_by(Student.created_at.desc(), Student.id.desc())
        .all()
    )
    topics_by_student = get_registered_topics(db)

    summaries: list[StudentSummary] = []
    for student, count in rows:
        topics = topics_by_student.get(student.id)
        summaries.append(
            StudentSummary(
                id=student.id,
                full_name=student.full_name,
                email=student.email,
                roll_number=student.roll_number,
                department=student.department,
                year=student.year,
                created_at=student.created_at,
                sessions_count=count or 0,
                registered_sessions=TOPIC_SEPARATOR.join(topics) if topics else None,
            )
        )

    return summaries
