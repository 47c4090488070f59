# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Database engine configuration for Azure SQL (MS SQL Server), overridable via DATABASE_URL
- Session factory for dependency injection
- A transaction helper that commits or rolls back a unit of work

Usage:
     from database import get_session, transaction

     # In FastAPI routes:
     @app.get("/items")
     def get_items(db: Session = Depends(get_session)):
          return db.query(Item).all()
     """
import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from config import SQL_ECHO, build_database_url
from exceptions import ConflictError, InternalError, ServiceError

logger = logging.getLogger(__name__)

DATABASE_URL = build_database_url()


def _engine_options(url: str) -> dict:
     """Pool settings for server databases; sqlite keeps SQLAlchemy's defaults."""
     if url.startswith("sqlite"):
          return {"connect_args": {"check_same_thread": False}}
     return {
          "poolclass": QueuePool,
          "pool_size": 5,
          "max_overflow": 10,
          "pool_timeout": 30,
          "pool_recycle": 1800,  # Recycle connections after 30 minutes
          "pool_pre_ping": True,
     }


# Create SQLAlchemy engine
engine = create_engine(DATABASE_URL, echo=SQL_ECHO, **_engine_options(DATABASE_URL))

# Session factory
SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)


def get_session() -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     The session is always closed; anything left uncommitted when the
     request fails is rolled back.

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


@contextmanager
def transaction(db: Session, operation: str) -> Generator[Session, None, None]:
     """
     Run one unit of work atomically: commit on success, roll back on any failure.

     Domain errors propagate unchanged. Integrity violations become
     ConflictError; any other database failure is logged and re-raised as
     InternalError.

     Args:
          db: Session owned by the caller
          operation: Short name used in logs and error messages
     """
     try:
          yield db
          db.commit()
     except ServiceError:
          db.rollback()
          raise
     except IntegrityError as e:
          db.rollback()
          logger.warning("%s rejected by a uniqueness rule: %s", operation, e.orig)
          raise ConflictError(f"{operation} conflicts with existing data", cause=str(e.orig)) from e
     except SQLAlchemyError as e:
          db.rollback()
          logger.exception("%s failed", operation)
          raise InternalError(f"{operation} failed", cause=str(e)) from e
     except Exception:
          db.rollback()
          raise


def check_connection() -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except SQLAlchemyError:
          logger.exception("Database connection failed")
          return False
