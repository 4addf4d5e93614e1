from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
import os

from config import DATABASE_URL

IS_POSTGRES = DATABASE_URL.startswith("postgresql")

# --- ENGINE & SESSION ---
if IS_POSTGRES:
    # Production: PostgreSQL with connection pooling
    engine = create_engine(
        DATABASE_URL,
        pool_size=20,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800
    )
else:
    # Development: SQLite (no connection pooling)
    if DATABASE_URL.startswith("sqlite:///") and ":memory:" not in DATABASE_URL:
        os.makedirs(os.path.dirname(os.path.abspath(DATABASE_URL[len("sqlite:///"):])), exist_ok=True)
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False}
    )

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores ON DELETE rules unless this is switched on per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db():
    """Create all tables. Safe to call repeatedly."""
    import models_orm  # noqa: F401  registers the mappers on Base
    Base.metadata.create_all(bind=engine)


# --- DEPENDENCY ---
def get_db():
    """
    Dependency for FastAPI Routes.
    Yields a database session and closes it after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# --- UTILS ---
def get_db_session():
    return SessionLocal()
