import pytest
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from iap_portal.models.session import Session
from iap_portal.schemas import CreateSessionRequest
from iap_portal.services.session_registry import (
    SESSION_CREATED_MESSAGE,
    SESSION_STORE_ERROR_MESSAGE,
    count_sessions,
    create_session,
    get_session,
    list_sessions,
)


def test_create_session_request_keeps_topic_as_submitted() -> None:
    request = CreateSessionRequest(topic='  Intro to AI  ', year=' 2 ')

    assert request.topic == '  Intro to AI  '
    assert request.year == '2'


def test_create_session_stores_exact_topic(db) -> None:
    result = create_session(db, '  Intro to AI ', '2')

    assert result.ok is True
    row = db.query(Session).filter(Session.id == result.session_id).one()
    assert row.topic == '  Intro to AI '
    assert row.year == '2'


@pytest.mark.parametrize('year', ['1', '2', '3', '4'])
def test_create_session_inserts_exactly_one_row(db, year: str) -> None:
    result = create_session(db, 'Intro to AI', year)

    assert result.ok is True
    assert result.message == SESSION_CREATED_MESSAGE
    rows = db.query(Session).all()
    assert len(rows) == 1
    assert rows[0].id == result.session_id
    assert rows[0].topic == 'Intro to AI'
    assert rows[0].year == year


@pytest.mark.parametrize(
    ('topic', 'year', 'error_detail'),
    [
        ('Intro to AI', '0', 'Year must be one of 1, 2, 3 or 4.'),
        ('Intro to AI', '5', 'Year must be one of 1, 2, 3 or 4.'),
        ('Intro to AI', 'two', 'Year must be one of 1, 2, 3 or 4.'),
        ('Intro to AI', None, 'Year must be one of 1, 2, 3 or 4.'),
        ('', '2', 'Topic is required.'),
        ('   ', '2', 'Topic is required.'),
        (None, '2', 'Topic is required.'),
        ('x' * 256, '2', 'Topic must be 255 characters or fewer.'),
    ],
)
def test_create_session_rejects_invalid_input_without_inserting(db, topic, year, error_detail: str) -> None:
    result = create_session(db, topic, year)

    assert result.ok is False
    assert result.session_id is None
    assert result.message == error_detail
    assert db.query(Session).count() == 0


def test_create_session_request_rejects_missing_fields() -> None:
    with pytest.raises(ValidationError):
        CreateSessionRequest(topic='', year='9')


def test_create_session_does_not_deduplicate(db) -> None:
    first = create_session(db, 'Intro to AI', '2')
    second = create_session(db, 'Intro to AI', '2')

    assert first.ok and second.ok
    assert first.session_id != second.session_id
    assert db.query(Session).filter(Session.topic == 'Intro to AI', Session.year == '2').count() == 2


def test_create_session_hides_store_errors(db, monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    def failing_commit():
        raise SQLAlchemyError('duplicate key value violates constraint "secret_internal_name"')

    monkeypatch.setattr(db, 'commit', failing_commit)

    result = create_session(db, 'Intro to AI', '2')

    assert result.ok is False
    assert result.message == SESSION_STORE_ERROR_MESSAGE
    assert 'secret_internal_name' not in result.message
    assert 'Failed to create session' in caplog.text


def test_get_session_returns_matching_row(db) -> None:
    result = create_session(db, 'Intro to AI', '2')

    session = get_session(db, result.session_id)

    assert session is not None
    assert (session.topic, session.year) == ('Intro to AI', '2')
    assert get_session(db, result.session_id + 100) is None


def test_list_sessions_returns_newest_first_with_limit(db) -> None:
    for topic in ('A', 'B', 'C'):
        create_session(db, topic, '1')

    sessions = list_sessions(db, limit=2)

    assert [session.topic for session in sessions] == ['C', 'B']
    assert count_sessions(db) == 3
