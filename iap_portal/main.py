import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError

from iap_portal.auth.dependencies import AuthorizationRequired
from iap_portal.core import config
from iap_portal.database import Base, engine, ensure_user_schema, seed_default_admin
from iap_portal.models import session, session_registration, student, student_session, user  # noqa: F401
from iap_portal.routes import admin_routes, student_routes

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title='IAP Portal')


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_user_schema()
        seed_default_admin()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.exception_handler(AuthorizationRequired)
async def redirect_to_login(request: Request, exc: AuthorizationRequired):
    logger.info('Unauthorized %s %s redirected to %s', request.method, request.url.path, exc.redirect_to)
    return RedirectResponse(url=exc.redirect_to, status_code=status.HTTP_303_SEE_OTHER)


@app.get('/')
def root():
    return {'status': 'IAP Portal Running'}


app.include_router(admin_routes.router, prefix='/admin')
app.include_router(student_routes.router, prefix='/student')
