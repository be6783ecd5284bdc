# employee-directory-api/app/services/otp.py
"""
One-time password lifecycle.

Per email the record moves NoOTP -> Pending(attempts 0..max-1) and ends in
one of Consumed, Expired or Exhausted, all of which delete the row. Expiry
is checked lazily on verify; a record past ``expires_at`` is never accepted
even if it has not been purged yet.
"""
import logging
import secrets
from datetime import timedelta
from typing import NamedTuple, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import BadUserInputError, NotFoundError, OTPExpiredError, TooManyAttemptsError, InvalidOTPError
from app.db import models
from app.db.session import run_in_store
from app.services import email as email_service

logger = logging.getLogger(__name__)

# Same text whether or not the account exists, so the response cannot be
# used to enumerate accounts.
OTP_SENT_MESSAGE = "If an account exists with this email, an OTP has been sent. It will expire in {minutes} minutes."


class OTPRequestResult(NamedTuple):
    success: bool
    message: str
    otp: Optional[str] = None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def generate_otp() -> str:
    """Uniform over 100000..999999."""
    return str(100000 + secrets.randbelow(900000))


def _delete(db: Session, record: models.OTPCode) -> None:
    db.query(models.OTPCode).filter(models.OTPCode.id == record.id).delete(synchronize_session=False)
    db.commit()


def issue_otp(db: Session, email: str) -> Optional[str]:
    """Store a fresh code for a known account. Returns None for unknown emails."""
    user = db.query(models.User).filter(models.User.email == email).first()
    if not user:
        logger.info("OTP requested for unknown email %s", email)
        return None

    now = models.utcnow()
    db.query(models.OTPCode).filter(
        (models.OTPCode.email == email) | (models.OTPCode.expires_at < now)
    ).delete(synchronize_session=False)

    code = generate_otp()
    db.add(models.OTPCode(
        email=email,
        code=code,
        attempts=0,
        created_at=now,
        expires_at=now + timedelta(minutes=settings.OTP_EXPIRE_MINUTES),
    ))
    db.commit()
    logger.info("OTP issued for user %s", user.id)
    return code


async def request_otp(db: Session, email: str) -> OTPRequestResult:
    email = normalize_email(email)
    message = OTP_SENT_MESSAGE.format(minutes=settings.OTP_EXPIRE_MINUTES)

    code = await run_in_store(db, "send OTP", issue_otp, db, email)
    if code is None:
        return OTPRequestResult(success=True, message=message)

    await email_service.send_otp_email(email, code)

    return OTPRequestResult(success=True, message=message, otp=code if settings.OTP_ECHO else None)


def verify_otp(db: Session, email: str, code: str) -> models.User:
    """Consume a pending OTP and return the user it was issued for."""
    email = normalize_email(email)
    record = (
        db.query(models.OTPCode)
        .filter(models.OTPCode.email == email)
        .order_by(models.OTPCode.id.desc())
        .first()
    )
    if record is None:
        raise BadUserInputError("No OTP requested for this email")

    if models.utcnow() > record.expires_at:
        _delete(db, record)
        raise OTPExpiredError()

    if record.attempts >= settings.OTP_MAX_ATTEMPTS:
        _delete(db, record)
        raise TooManyAttemptsError()

    if not secrets.compare_digest(record.code.encode(), code.strip().encode()):
        # Conditional increment in a single UPDATE so concurrent wrong
        # guesses cannot push attempts past the limit.
        db.query(models.OTPCode).filter(
            models.OTPCode.id == record.id,
            models.OTPCode.attempts < settings.OTP_MAX_ATTEMPTS,
        ).update({models.OTPCode.attempts: models.OTPCode.attempts + 1}, synchronize_session=False)
        db.commit()
        attempts = db.query(models.OTPCode.attempts).filter(models.OTPCode.id == record.id).scalar()
        remaining = settings.OTP_MAX_ATTEMPTS - (attempts if attempts is not None else settings.OTP_MAX_ATTEMPTS)
        logger.info("Invalid OTP for %s, %d attempts remaining", email, remaining)
        raise InvalidOTPError(remaining)

    _delete(db, record)

    user = db.query(models.User).filter(models.User.email == email).first()
    if user is None:
        raise NotFoundError("User not found")
    logger.info("OTP verified for user %s", user.id)
    return user
