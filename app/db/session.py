# employee-directory-api/app/db/session.py
import logging
from contextlib import contextmanager

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.exceptions import InternalError

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_call(db: Session, action: str):
    """
    Boundary around store access: unexpected database errors are rolled back,
    logged with their traceback and re-raised as a generic internal error.
    Application errors raised inside pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to %s", action)
        raise InternalError(f"Failed to {action}")


async def run_in_store(db: Session, action: str, fn, *args, **kwargs):
    """Run blocking store work on the threadpool, inside ``store_call``."""
    def call():
        with store_call(db, action):
            return fn(*args, **kwargs)

    return await run_in_threadpool(call)
