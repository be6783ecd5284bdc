# employee-directory-api/app/services/sessions.py
import logging
import secrets
from datetime import timedelta

from sqlalchemy.orm import Session

from app.core.config import settings
from app.db import models
from app.schemas.user import SessionUser

logger = logging.getLogger(__name__)


def create_session(db: Session, user: models.User) -> models.LoginSession:
    """Start a fixed-TTL session for a user who has just verified an OTP."""
    now = models.utcnow()
    # No TTL index on this table, so expired rows are cleared as new ones arrive
    db.query(models.LoginSession).filter(models.LoginSession.expires_at < now).delete(synchronize_session=False)

    login_session = models.LoginSession(
        token=secrets.token_urlsafe(32),
        user_id=user.id,
        created_at=now,
        expires_at=now + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES),
    )
    db.add(login_session)
    db.commit()
    db.refresh(login_session)
    logger.info("Session started for user %s", user.id)
    return login_session


def get_session_user(db: Session, token: str | None) -> SessionUser | None:
    if not token:
        return None
    login_session = db.query(models.LoginSession).filter(models.LoginSession.token == token).first()
    if login_session is None or login_session.expires_at <= models.utcnow():
        return None
    return SessionUser.model_validate(login_session.user)


def destroy_session(db: Session, token: str | None) -> None:
    if not token:
        return
    deleted = db.query(models.LoginSession).filter(models.LoginSession.token == token).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.info("Session ended")
