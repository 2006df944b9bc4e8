# foodorder/database.py
from sqlmodel import SQLModel, create_engine, Session

from foodorder.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Postgres connection
#
# - sslmode=require   : enforce SSL when running in the cloud
# - pool_size=1       : keep a single pooled connection per process
# - max_overflow=0    : do not open extra connections beyond the pool
# - pool_pre_ping=True: validate connections before using them
# - timezone=utc      : session TimeZone pinned to UTC
#
# SQLite (local dev / tests) keeps SQLAlchemy's default pool.
# ---------------------------------------------------------


def _engine_options(db_url: str) -> tuple[str, dict]:
    """Return the final URL and create_engine kwargs for a database URL."""
    if db_url.startswith("sqlite"):
        return db_url, {"connect_args": {"check_same_thread": False}}
    if not db_url.startswith("postgresql"):
        return db_url, {"pool_pre_ping": True}

    # Append sslmode=require if it is not already present
    if "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return db_url, {
        "pool_pre_ping": True,
        "pool_size": 1,
        "max_overflow": 0,
        # created_at is a plain timestamp; keep sessions in UTC so
        # date(created_at) buckets by UTC day whatever the server default.
        "connect_args": {"options": "-c timezone=utc"},
    }


db_url, engine_kwargs = _engine_options(settings.DATABASE_URL)

engine = create_engine(
    db_url,
    echo=False,  # set to True if you want to debug SQL queries
    **engine_kwargs,
)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
