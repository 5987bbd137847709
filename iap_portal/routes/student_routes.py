from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session as DbSession

from iap_portal.auth.dependencies import AuthContext, require_student
from iap_portal.core import config
from iap_portal.database import get_db
from iap_portal.rendering import render_student_dashboard
from iap_portal.services.student_dashboard import build_student_dashboard

router = APIRouter(tags=['student'])


@router.get('/dashboard', response_class=HTMLResponse)
def student_dashboard(
    request: Request,
    logout: str | None = Query(default=None),
    auth: AuthContext = Depends(require_student),
    db: DbSession = Depends(get_db),
):
    if logout is not None:
        response = RedirectResponse(url=config.STUDENT_LOGIN_URL, status_code=status.HTTP_303_SEE_OTHER)
        response.delete_cookie(config.SESSION_COOKIE_NAME)
        return response

    # The student id comes from the session cookie only.
    dashboard = build_student_dashboard(db, auth)
    return render_student_dashboard(request, dashboard)
