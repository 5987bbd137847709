import logging

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DbSession

from iap_portal.models.session import Session
from iap_portal.schemas import CreateSessionRequest, SessionCreateResult, SessionResponse

logger = logging.getLogger(__name__)

SESSION_CREATED_MESSAGE = 'Session created successfully!'
SESSION_STORE_ERROR_MESSAGE = 'Could not create the session. Please try again later.'


def validation_message(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        context_error = error.get('ctx', {}).get('error')
        messages.append(str(context_error) if context_error else error['msg'])
    return ' '.join(messages)


def create_session(db: DbSession, topic: str | None, year: str | None) -> SessionCreateResult:
    """Insert a new session row.

    Every valid submission creates a row, even when the same topic and year
    already exist. Validation and store failures come back as a result with
    ``ok=False``; driver errors are logged, never echoed to the page.
    """
    try:
        data = CreateSessionRequest(topic=topic, year=year)
    except ValidationError as exc:
        return SessionCreateResult(ok=False, message=validation_message(exc))

    try:
        session = Session(topic=data.topic, year=data.year)
        db.add(session)
        db.commit()
        db.refresh(session)
    except SQLAlchemyError:
        db.rollback()
        logger.exception('Failed to create session topic=%r year=%s', data.topic, data.year)
        return SessionCreateResult(ok=False, message=SESSION_STORE_ERROR_MESSAGE)

    logger.info('Created session %s (%r, year %s)', session.id, session.topic, session.year)
    return SessionCreateResult(ok=True, message=SESSION_CREATED_MESSAGE, session_id=session.id)


def get_session(db: DbSession, session_id: int) -> SessionResponse | None:
    session = db.query(Session).filter(Session.id == session_id).first()
    if session is None:
        return None
    return SessionResponse.model_validate(session)


def list_sessions(db: DbSession, limit: int | None = None) -> list[SessionResponse]:
    query = db.query(Session).order_by(Session.created_at.desc(), Session.id.desc())
    if limit is not None:
        query = query.limit(limit)
    return [SessionResponse.model_validate(session) for session in query.all()]


def count_sessions(db: DbSession) -> int:
    return db.query(func.count(Session.id)).scalar() or 0
