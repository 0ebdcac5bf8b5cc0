from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from task_api.config import get_settings
from task_api.logger import logger

settings = get_settings()

engine_options = {
    "pool_pre_ping": settings.db_pool_pre_ping,  # Verify connections before using
    "echo": settings.debug  # Log SQL queries in debug mode
}
if not settings.is_sqlite:
    engine_options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )

# Create engine with connection pooling
engine = create_engine(settings.database_url, **engine_options)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Database session dependency"""
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database session error: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()


def init_db():
    """Initialize database tables"""
    # Register the mapped tables on Base.metadata
    from task_api import models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {str(e)}")
        raise


def check_connection(db: Session) -> None:
    """Run a trivial round-trip; raises if the database is unreachable"""
    db.execute(text("SELECT 1"))
