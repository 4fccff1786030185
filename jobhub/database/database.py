from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from jobhub.core.config import settings
import os

# Pool settings are tunable through env vars; SQLite uses its own pool.
POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "300"))  # 5 min

if settings.database_url.startswith("sqlite"):
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},
        pool_pre_ping=True,
    )
else:
    engine = create_engine(
        settings.database_url,
        pool_size=POOL_SIZE,
        max_overflow=MAX_OVERFLOW,
        pool_timeout=POOL_TIMEOUT,
        pool_recycle=POOL_RECYCLE,
        pool_pre_ping=True,
        echo=False
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for every model
Base = declarative_base()

def create_db_and_tables():
    # models must be imported so that their tables are registered on Base.metadata
    import jobhub.models  # noqa: F401
    Base.metadata.create_all(bind=engine)

# Session dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def check_db_connection():
    """Run a trivial query to check the database connection."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            return {"status": "connected", "message": "Database connection OK"}
    except Exception as e:
        return {"status": "error", "message": f"Database connection failed: {str(e)}"}
