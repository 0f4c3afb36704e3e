from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool

from memobook.shared.config import settings

# Local SQLite DB under ./storage/ (created if missing) unless DATABASE_URL is set
ROOT = Path(__file__).resolve().parents[2]   # project root
STORAGE_DIR = ROOT / "storage"


def default_url() -> str:
    STORAGE_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(STORAGE_DIR / 'memobook.db').as_posix()}"


def _unicode_lower(value):
    return value.lower() if value is not None else None


def make_engine(url: str | None = None) -> Engine:
    url = url or default_url()
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees an empty db
            kwargs["poolclass"] = StaticPool
        eng = create_engine(url, **kwargs)

        # sqlite's built-in lower() only folds ASCII; ilike compiles to lower(x) LIKE lower(y)
        @event.listens_for(eng, "connect")
        def _register_lower(dbapi_conn, conn_record):
            dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)

        return eng
    return create_engine(url, pool_pre_ping=True)


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, autocommit=False, expire_on_commit=False)


engine = make_engine(settings.DATABASE_URL)
SessionLocal = make_session_factory(engine)

class Base(DeclarativeBase):
    pass
