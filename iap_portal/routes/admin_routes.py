from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session as DbSession

from iap_portal.auth.dependencies import AuthContext, require_admin
from iap_portal.core import config
from iap_portal.database import get_db
from iap_portal.rendering import render_admin_dashboard
from iap_portal.services.admin_dashboard import build_admin_dashboard

router = APIRouter(tags=['admin'])


@router.get('/dashboard', response_class=HTMLResponse)
def admin_dashboard(
    request: Request,
    page: str = Query(default='home'),
    auth: AuthContext = Depends(require_admin),
    db: DbSession = Depends(get_db),
):
    dashboard = build_admin_dashboard(db, page)
    return render_admin_dashboard(request, dashboard, auth)


@router.post('/dashboard', response_class=HTMLResponse)
def submit_admin_dashboard(
    request: Request,
    page: str = Query(default='home'),
    topic: str | None = Form(default=None),
    year: str | None = Form(default=None),
    create_session: str | None = Form(default=None),
    auth: AuthContext = Depends(require_admin),
    db: DbSession = Depends(get_db),
):
    create_form = {'topic': topic, 'year': year} if create_session is not None else None
    dashboard = build_admin_dashboard(db, page, create_form=create_form)
    return render_admin_dashboard(request, dashboard, auth)


@router.get('/logout')
def admin_logout():
    response = RedirectResponse(url=config.ADMIN_LOGIN_URL, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(config.SESSION_COOKIE_NAME)
    return response
