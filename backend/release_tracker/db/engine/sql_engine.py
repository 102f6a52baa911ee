import threading
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.orm import sessionmaker

from release_tracker.configs.app_configs import DATABASE_URL
from release_tracker.configs.app_configs import POSTGRES_DB
from release_tracker.configs.app_configs import POSTGRES_HOST
from release_tracker.configs.app_configs import POSTGRES_PASSWORD
from release_tracker.configs.app_configs import POSTGRES_POOL_MAX_OVERFLOW
from release_tracker.configs.app_configs import POSTGRES_POOL_PRE_PING
from release_tracker.configs.app_configs import POSTGRES_POOL_RECYCLE
from release_tracker.configs.app_configs import POSTGRES_POOL_SIZE
from release_tracker.configs.app_configs import POSTGRES_PORT
from release_tracker.configs.app_configs import POSTGRES_USER
from release_tracker.utils.logger import setup_logger

logger = setup_logger()

SYNC_DB_API = "psycopg2"


def build_connection_string(
    *,
    db_api: str = SYNC_DB_API,
    user: str = POSTGRES_USER,
    password: str = POSTGRES_PASSWORD,
    host: str = POSTGRES_HOST,
    port: str = POSTGRES_PORT,
    db: str = POSTGRES_DB,
) -> str:
    if DATABASE_URL:
        return DATABASE_URL
    return f"postgresql+{db_api}://{user}:{password}@{host}:{port}/{db}"


class SqlEngine:
    """Holds the process-wide engine. Every request session is drawn from its pool."""

    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None
    _lock: threading.Lock = threading.Lock()

    @classmethod
    def init_engine(
        cls,
        pool_size: int = POSTGRES_POOL_SIZE,
        max_overflow: int = POSTGRES_POOL_MAX_OVERFLOW,
        **extra_engine_kwargs: Any,
    ) -> None:
        with cls._lock:
            if cls._engine:
                return

            connection_string = build_connection_string()
            engine_kwargs: dict[str, Any] = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": POSTGRES_POOL_PRE_PING,
                "pool_recycle": POSTGRES_POOL_RECYCLE,
            }
            engine_kwargs.update(extra_engine_kwargs)

            cls._engine = create_engine(connection_string, **engine_kwargs)
            cls._session_factory = sessionmaker(
                bind=cls._engine, expire_on_commit=False
            )
            logger.info(
                f"Initialized database engine: pool_size={pool_size} "
                f"max_overflow={max_overflow}"
            )

    @classmethod
    def set_engine(cls, engine: Engine) -> None:
        """Install an already built engine, e.g. an in-memory one for tests."""
        with cls._lock:
            cls._engine = engine
            cls._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def get_session_factory(cls) -> sessionmaker[Session]:
        if not cls._session_factory:
            raise RuntimeError("Engine not initialized. Must call init_engine first.")
        return cls._session_factory

    @classmethod
    def reset_engine(cls) -> None:
        with cls._lock:
            if cls._engine:
                cls._engine.dispose()
            cls._engine = None
            cls._session_factory = None


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request."""
    with SqlEngine.get_session_factory()() as session:
        yield session

