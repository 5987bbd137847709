from datetime import datetime

from pydantic import BaseModel, Field, field_validator

ACADEMIC_YEARS = ('1', '2', '3', '4')
MAX_TOPIC_LENGTH = 255
ADMIN_PAGES = ('home', 'create_session', 'registrations', 'registered_students')


class CreateSessionRequest(BaseModel):
    topic: str
    year: str

    @field_validator('topic', mode='before')
    @classmethod
    def validate_topic(cls, value) -> str:
        topic = str(value) if value is not None else ''
        if not topic.strip():
            raise ValueError('Topic is required.')
        # Stored as submitted; the column holds the raw length.
        if len(topic) > MAX_TOPIC_LENGTH:
            raise ValueError(f'Topic must be {MAX_TOPIC_LENGTH} characters or fewer.')
        return topic

    @field_validator('year', mode='before')
    @classmethod
    def validate_year(cls, value) -> str:
        normalized = str(value).strip() if value is not None else ''
        if normalized not in ACADEMIC_YEARS:
            raise ValueError('Year must be one of 1, 2, 3 or 4.')
        return normalized


class SessionCreateResult(BaseModel):
    ok: bool
    message: str
    session_id: int | None = None


class SessionResponse(BaseModel):
    id: int
    topic: str
    year: str
    created_at: datetime

    class Config:
        from_attributes = True


class SessionRegistrationRow(BaseModel):
    id: int
    name: str
    roll_number: str
    year: str
    department: str
    email: str
    session_desired: str
    other_query: str | None = None
    submitted_at: datetime

    class Config:
        from_attributes = True


class UnavailableMetric(BaseModel):
    """Stands in for a statistic the portal does not compute yet."""
    available: bool = False
    label: str = 'Not yet implemented'


class StudentSummary(BaseModel):
    id: int
    full_name: str
    email: str
    roll_number: str
    department: str
    year: str
    created_at: datetime
    sessions_count: int = 0
    registered_sessions: str | None = None
    quiz_count: UnavailableMetric = Field(default_factory=UnavailableMetric)
    module_count: UnavailableMetric = Field(default_factory=UnavailableMetric)


class MySessionRow(BaseModel):
    id: int
    topic: str
    year: str
    registration_status: str
    registered_at: datetime


class YearGroup(BaseModel):
    year: str
    sessions: list[MySessionRow]


class StudentDashboard(BaseModel):
    full_name: str
    first_name: str
    email: str
    roll_number: str
    department: str
    year: str
    groups: list[YearGroup] = Field(default_factory=list)
    total_sessions: int = 0
    error_message: str | None = None


class AdminDashboard(BaseModel):
    page: str
    message: str | None = None
    message_ok: bool = False
    session_count: int = 0
    recent_sessions: list[SessionResponse] = Field(default_factory=list)
    registrations: list[SessionRegistrationRow] = Field(default_factory=list)
    students: list[StudentSummary] = Field(default_factory=list)
    error_message: str | None = None
