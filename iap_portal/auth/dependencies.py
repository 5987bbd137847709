import logging

import jwt
from fastapi import Request
from pydantic import BaseModel, ValidationError

from iap_portal.auth import jwt_handler
from iap_portal.core import config

logger = logging.getLogger(__name__)


class AuthContext(BaseModel):
    """Identity carried by the session cookie.

    Populated by the login flow; handlers only read it.
    """
    role: str
    username: str | None = None
    student_id: int | None = None
    full_name: str | None = None
    email: str | None = None
    roll_number: str | None = None
    department: str | None = None
    year: str | None = None

    class Config:
        frozen = True

    @property
    def is_admin(self) -> bool:
        return self.role == 'admin'

    @property
    def is_student(self) -> bool:
        return self.role == 'student' and self.student_id is not None


class AuthorizationRequired(Exception):
    """Raised when a request lacks the role a route requires."""

    def __init__(self, redirect_to: str):
        super().__init__(redirect_to)
        self.redirect_to = redirect_to


def get_auth_context(request: Request) -> AuthContext | None:
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    if not token:
        return None

    try:
        payload = jwt_handler.decode_session_token(token)
    except jwt.InvalidTokenError as exc:
        logger.warning('Rejected session token: %s', exc)
        return None

    try:
        return AuthContext.model_validate(payload)
    except ValidationError:
        logger.warning('Session token is missing identity claims')
        return None


def require_admin(request: Request) -> AuthContext:
    auth = get_auth_context(request)
    if auth is None or not auth.is_admin:
        raise AuthorizationRequired(config.ADMIN_LOGIN_URL)
    return auth


def require_student(request: Request) -> AuthContext:
    auth = get_auth_context(request)
    if auth is None or not auth.is_student:
        raise AuthorizationRequired(config.STUDENT_LOGIN_URL)
    return auth
