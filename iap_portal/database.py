import logging
from threading import Lock

from sqlalchemy import Index, MetaData, Table, create_engine, inspect, text
from sqlalchemy.orm import declarative_base, sessionmaker

from iap_portal.core import config


logger = logging.getLogger(__name__)

DATABASE_URL = config.DATABASE_URL

connect_args = {'check_same_thread': False} if DATABASE_URL.startswith('sqlite') else {}
engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
    echo=config.DATABASE_ECHO,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_user_schema_checked = False
_default_admin_checked = False

REPORT_INDEXES = [
    ('students', 'idx_students_created_at', 'created_at'),
    ('session_registrations', 'idx_registrations_submitted_at', 'submitted_at'),
]


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_user_schema() -> None:
    """Bring a legacy ``iap_users_details`` table up to the current columns.

    Older deployments created the table without ``email``; the column is
    added with a placeholder default so existing rows stay valid.
    """
    global _user_schema_checked

    if _user_schema_checked:
        return

    with _schema_lock:
        if _user_schema_checked:
            return

        inspector = inspect(engine)
        table_names = inspector.get_table_names()

        if 'iap_users_details' not in table_names:
            _user_schema_checked = True
            return

        existing_columns = {column['name'] for column in inspector.get_columns('iap_users_details')}
        migration_steps = [
            ('email', "ALTER TABLE iap_users_details ADD COLUMN email VARCHAR(255) NOT NULL DEFAULT 'temp@example.com'"),
        ]

        with engine.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    logger.info('Adding missing column iap_users_details.%s', column_name)
                    connection.execute(text(statement))
            metadata = MetaData()
            for table_name, index_name, column_name in REPORT_INDEXES:
                if table_name not in table_names:
                    continue
                table = Table(table_name, metadata, autoload_with=connection)
                if index_name in {index.name for index in table.indexes}:
                    continue
                Index(index_name, table.c[column_name]).create(bind=connection, checkfirst=True)

        _user_schema_checked = True


def seed_default_admin() -> None:
    global _default_admin_checked

    if _default_admin_checked or not config.SEED_DEFAULT_ADMIN:
        return

    with _schema_lock:
        if _default_admin_checked:
            return

        with engine.begin() as connection:
            existing = connection.execute(
                text('SELECT id FROM iap_users_details WHERE username = :username OR email = :email'),
                {'username': config.DEFAULT_ADMIN_USERNAME, 'email': config.DEFAULT_ADMIN_EMAIL},
            ).first()
            if existing is None:
                connection.execute(
                    text(
                        'INSERT INTO iap_users_details (username, email, password, role) '
                        "VALUES (:username, :email, :password, 'admin')"
                    ),
                    {
                        'username': config.DEFAULT_ADMIN_USERNAME,
                        'email': config.DEFAULT_ADMIN_EMAIL,
                        'password': config.DEFAULT_ADMIN_PASSWORD_HASH,
                    },
                )
                logger.info('Seeded default admin account %r', config.DEFAULT_ADMIN_USERNAME)

        _default_admin_checked = True
