import logging
from datetime import datetime
from pathlib import Path
from urllib.parse import urlencode

from fastapi import Request
from fastapi.templating import Jinja2Templates

from iap_portal.auth.dependencies import AuthContext
from iap_portal.core import config
from iap_portal.models.student_session import REGISTRATION_STATUSES
from iap_portal.schemas import AdminDashboard, StudentDashboard

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / 'templates'

STATUS_BADGES = {status: (f'status-{status}', status.capitalize()) for status in REGISTRATION_STATUSES}
UNKNOWN_STATUS_BADGE = ('status-unknown', 'Unknown status')

ADMIN_NAVIGATION = [
    ('home', 'Home'),
    ('create_session', 'Create Session'),
    ('registrations', 'View Session Registrations'),
    ('registered_students', 'View Registered Students'),
]


def status_badge(status: str | None) -> tuple[str, str]:
    badge = STATUS_BADGES.get(status)
    if badge is None:
        logger.warning('Unexpected registration status %r', status)
        return UNKNOWN_STATUS_BADGE
    return badge


def quiz_url(session_id: int) -> str:
    return f'{config.QUIZ_URL}?{urlencode({"session_id": session_id})}'


def format_date(value: datetime | None) -> str:
    if value is None:
        return ''
    return value.strftime('%b %d, %Y')


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return ''
    return value.strftime('%Y-%m-%d %H:%M:%S')


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals.update(
    status_badge=status_badge,
    quiz_url=quiz_url,
    admin_navigation=ADMIN_NAVIGATION,
)
templates.env.filters['format_date'] = format_date
templates.env.filters['format_timestamp'] = format_timestamp


def render_admin_dashboard(request: Request, dashboard: AdminDashboard, auth: AuthContext):
    return templates.TemplateResponse(
        request,
        'admin_dashboard.html',
        {'dashboard': dashboard, 'auth': auth, 'current_year': datetime.now().year},
    )


def render_student_dashboard(request: Request, dashboard: StudentDashboard):
    return templates.TemplateResponse(
        request,
        'student_dashboard.html',
        {'dashboard': dashboard, 'current_year': datetime.now().year},
    )
