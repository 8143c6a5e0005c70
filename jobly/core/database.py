import re
from typing import Any, Sequence

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Result
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.config import settings

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection so in-memory databases survive across sessions
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }

    options = {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": 10,
        "max_overflow": 20,
    }
    if settings.ENVIRONMENT == "production":
        options["connect_args"] = {"sslmode": "require"}
    return options


DATABASE_URI = settings.get_database_uri()

# Create SQLAlchemy engine
engine = create_engine(DATABASE_URI, **_engine_options(DATABASE_URI))

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def query(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """
    Execute a statement written with $1-style positional placeholders.

    Each $N is bound to values[N-1], so fragments from
    sql_for_partial_update can be embedded unchanged.

    Args:
        db: Database session
        sql: Statement text, e.g. 'UPDATE jobs SET "title"=$1 WHERE id = $2'
        values: Values for the placeholders, in order

    Returns:
        SQLAlchemy Result of the statement
    """
    statement = _PLACEHOLDER_RE.sub(lambda m: f":p{m.group(1)}", sql)
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return db.execute(text(statement), params)


def init_db():
    """
    Initialize database.

    Imports the models so they register on Base, then creates any missing
    tables. There are no migrations; the metadata is the schema.
    """
    from jobly.models import company, job, user  # noqa: F401  Import models to register them
    Base.metadata.create_all(bind=engine)
