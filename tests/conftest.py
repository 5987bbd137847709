import os
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')

from iap_portal.auth.jwt_handler import create_session_token  # noqa: E402
from iap_portal.core import config  # noqa: E402
from iap_portal.database import Base, get_db  # noqa: E402
from iap_portal.main import app  # noqa: E402
from iap_portal.models.session import Session  # noqa: E402
from iap_portal.models.session_registration import SessionRegistration  # noqa: E402
from iap_portal.models.student import Student  # noqa: E402
from iap_portal.models.student_session import StudentSession  # noqa: E402


class PortalFactory:
    def __init__(self, db):
        self.db = db

    def student(self, *, full_name='Asha Rao', email='asha@example.edu', roll_number='21CS001',
                department='CSE', year='2', created_at=None, student_id=None) -> Student:
        student = Student(
            id=student_id,
            full_name=full_name,
            email=email,
            roll_number=roll_number,
            department=department,
            year=year,
            created_at=created_at or datetime(2025, 1, 1, 9, 0),
        )
        self.db.add(student)
        self.db.commit()
        self.db.refresh(student)
        return student

    def session(self, *, topic='Intro to AI', year='1', session_id=None) -> Session:
        session = Session(id=session_id, topic=topic, year=year)
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)
        return session

    def enroll(self, student: Student, session: Session, *, status='registered',
               registered_at=None) -> StudentSession:
        enrollment = StudentSession(
            student_id=student.id,
            session_id=session.id,
            registration_status=status,
            registered_at=registered_at or datetime(2025, 2, 1, 10, 0),
        )
        self.db.add(enrollment)
        self.db.commit()
        return enrollment

    def registration(self, *, name='Ravi Kumar', submitted_at=None, session_desired='Cloud Basics',
                     other_query=None, roll_number='21EC042') -> SessionRegistration:
        registration = SessionRegistration(
            name=name,
            roll_number=roll_number,
            year='3',
            department='ECE',
            email='ravi@example.edu',
            session_desired=session_desired,
            other_query=other_query,
            submitted_at=submitted_at or datetime(2025, 3, 1, 12, 0),
        )
        self.db.add(registration)
        self.db.commit()
        self.db.refresh(registration)
        return registration


@pytest.fixture
def db_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db(db_engine):
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def factory(db):
    return PortalFactory(db)


@pytest.fixture
def statement_log(db_engine):
    statements: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(db_engine, 'before_cursor_execute', record)
    yield statements
    event.remove(db_engine, 'before_cursor_execute', record)


@pytest.fixture
def client(db_engine):
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        session = testing_session_local()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app, follow_redirects=False)
    finally:
        app.dependency_overrides.clear()


def admin_claims() -> dict:
    return {'role': 'admin', 'username': 'admin', 'email': 'admin@example.com'}


def student_claims(student_id: int = 42, **overrides) -> dict:
    claims = {
        'role': 'student',
        'student_id': student_id,
        'full_name': 'Asha Rao',
        'email': 'asha@example.edu',
        'roll_number': '21CS001',
        'department': 'CSE',
        'year': '1',
    }
    claims.update(overrides)
    return claims


@pytest.fixture
def admin_client(client):
    client.cookies.set(config.SESSION_COOKIE_NAME, create_session_token(admin_claims()))
    return client


@pytest.fixture
def student_client(client):
    client.cookies.set(config.SESSION_COOKIE_NAME, create_session_token(student_claims()))
    return client
