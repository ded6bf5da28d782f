import logging
from collections.abc import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from docblog.core.config import Settings, get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def build_engine_kwargs(settings: Settings) -> dict:
    engine_kwargs: dict = {"future": True, "pool_pre_ping": True}
    if settings.database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.db_statement_timeout_seconds,
        }
    else:
        engine_kwargs["pool_timeout"] = settings.db_pool_timeout_seconds
        if settings.database_url.startswith("postgresql"):
            engine_kwargs["connect_args"] = {
                "connect_timeout": settings.db_connect_timeout_seconds,
                "options": f"-c statement_timeout={settings.db_statement_timeout_seconds * 1000}",
            }
    return engine_kwargs


engine = create_engine(settings.database_url, **build_engine_kwargs(settings))
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, class_=Session)

if settings.database_url.startswith("sqlite"):

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def check_connection() -> None:
    """Fail fast when the store cannot be reached at boot."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.critical("database_unreachable", extra={"error": str(exc)})
        raise SystemExit(1) from exc


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
