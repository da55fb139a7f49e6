# backend/database.py
import logging
import threading

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.database_url


def _engine_options(url: str, timeout: float) -> dict:
    """Connection arguments for the configured dialect, including the store timeout."""
    options = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False, "timeout": timeout}
        # In-memory databases live inside one connection, so every session must share it
        if url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url:
            options["poolclass"] = StaticPool
    else:
        options["pool_timeout"] = timeout
        if url.startswith("postgresql"):
            options["connect_args"] = {
                "connect_timeout": int(timeout),
                "options": f"-c statement_timeout={int(timeout * 1000)}",
            }
    return options


engine = create_engine(SQLALCHEMY_DATABASE_URL, **_engine_options(SQLALCHEMY_DATABASE_URL, settings.DB_TIMEOUT_SECONDS))

SessionLocal = sessionmaker(autoflush=False, bind=engine)

Base = declarative_base()

_initialized = False
_init_lock = threading.Lock()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create the tables once per process. Later calls return immediately."""
    global _initialized
    with _init_lock:
        if _initialized:
            return
        # Register every model on Base.metadata before creating tables
        import models.users  # noqa: F401
        import models.registration  # noqa: F401
        import models.project  # noqa: F401
        import models.log  # noqa: F401

        Base.metadata.create_all(bind=engine)
        _initialized = True
        logger.info("Database initialised (%s)", engine.url.get_backend_name())


def check_connection() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.exception("Database connectivity check failed")
        return False
