from collections.abc import Generator
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .core.config import settings


def _ensure_sqlite_path(url: str) -> None:
    if not url.startswith("sqlite"):
        return

    parsed = make_url(url)
    database = parsed.database
    if not database or database == ":memory:":
        return

    path = Path(database)
    path.parent.mkdir(parents=True, exist_ok=True)


def _engine_options(url: str, *, echo: bool = False) -> dict[str, object]:
    connect_args: dict[str, object] = {}
    engine_kwargs: dict[str, object] = {
        "echo": echo,
        "future": True,
        "pool_pre_ping": True,
    }

    parsed = make_url(url)
    backend = parsed.get_backend_name()

    if backend == "sqlite":
        connect_args["check_same_thread"] = False
    else:
        # Supabase's pooler drops idle connections; recycle before it does.
        engine_kwargs["pool_recycle"] = 300

        if backend.startswith("postgresql"):
            connect_args.update(
                keepalives=1,
                keepalives_idle=120,
                keepalives_interval=30,
                keepalives_count=5,
            )
            # The transaction pooler rejects PREPARE.
            if parsed.get_driver_name() == "psycopg":
                connect_args["prepare_threshold"] = None

    if connect_args:
        engine_kwargs["connect_args"] = connect_args
    return engine_kwargs


def _create_engine(url: str):
    _ensure_sqlite_path(url)
    return create_engine(url, **_engine_options(url, echo=settings.debug))


def _create_session_factory(engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=True, autocommit=False, future=True)


def _build_db_components(url: str):
    engine = _create_engine(url)
    session_factory = _create_session_factory(engine)
    return engine, session_factory


engine, SessionLocal = _build_db_components(settings.resolved_database_url)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db() -> None:
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
