import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DbSession

from iap_portal.schemas import ADMIN_PAGES, AdminDashboard
from iap_portal.services.registration_reporter import list_registered_students, list_session_registrations
from iap_portal.services.session_registry import count_sessions, create_session, list_sessions

logger = logging.getLogger(__name__)

RECENT_SESSIONS_LIMIT = 5
PAGE_STORE_ERROR_MESSAGE = 'Could not load this page. Please try again later.'


def normalize_page(page: str | None) -> str:
    return page if page in ADMIN_PAGES else 'home'


def build_admin_dashboard(db: DbSession, page: str | None, create_form: dict | None = None) -> AdminDashboard:
    """Run the action and query behind one admin dashboard request.

    ``create_form`` is only passed when the create-session marker was
    submitted.
    """
    dashboard = AdminDashboard(page=normalize_page(page))

    if create_form is not None:
        result = create_session(db, create_form.get('topic'), create_form.get('year'))
        dashboard.message = result.message
        dashboard.message_ok = result.ok

    try:
        if dashboard.page == 'home':
            dashboard.session_count = count_sessions(db)
            dashboard.recent_sessions = list_sessions(db, limit=RECENT_SESSIONS_LIMIT)
        elif dashboard.page == 'registrations':
            dashboard.registrations = list_session_registrations(db)
        elif dashboard.page == 'registered_students':
            dashboard.students = list_registered_students(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception('Failed to load admin page %s', dashboard.page)
        dashboard.error_message = PAGE_STORE_ERROR_MESSAGE

    return dashboard
