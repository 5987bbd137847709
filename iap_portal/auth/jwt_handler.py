from datetime import datetime, timedelta, timezone

import jwt

from iap_portal.core import config

SESSION_CLAIMS = ("role", "username", "student_id", "full_name", "email", "roll_number", "department", "year")


def create_session_token(claims: dict, expires_minutes: int | None = None) -> str:
    """Sign the identity established by the login flow for the session cookie."""
    expire_minutes = expires_minutes or config.SESSION_EXPIRES_MINUTES
    now = datetime.now(timezone.utc)
    payload = {key: claims[key] for key in SESSION_CLAIMS if claims.get(key) is not None}
    payload.update({
        "sub": str(claims.get("username") or claims.get("student_id") or ""),
        "exp": now + timedelta(minutes=expire_minutes),
        "iat": now,
    })
    return jwt.encode(payload, config.SESSION_SECRET_KEY, algorithm=config.SESSION_ALGORITHM)


def decode_session_token(token: str) -> dict:
    return jwt.decode(token, config.SESSION_SECRET_KEY, algorithms=[config.SESSION_ALGORITHM])
