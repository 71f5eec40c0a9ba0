from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings

settings = get_settings()


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    is_sqlite = database_url.startswith("sqlite")
    options: dict = {"pool_pre_ping": True, "future": True}
    if is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
        # In-memory databases live inside a single connection.
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool

    built = create_engine(database_url, **options)
    if is_sqlite:
        event.listen(built, "connect", _enable_sqlite_foreign_keys)
    return built


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, class_=Session, autoflush=False, autocommit=False, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = build_session_factory(engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
