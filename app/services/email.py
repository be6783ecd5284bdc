# employee-directory-api/app/services/email.py
import logging
from email.message import EmailMessage

import aiosmtplib

from app.core.config import settings

logger = logging.getLogger(__name__)

OTP_EMAIL_HTML = """\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #2563eb;">Employee Directory</h2>
  <p>Your one-time password for login is:</p>
  <div style="background: #f3f4f6; padding: 20px; border-radius: 8px; text-align: center; margin: 20px 0;">
    <h1 style="color: #1f2937; font-size: 36px; margin: 0; letter-spacing: 8px;">{code}</h1>
  </div>
  <p>This code will expire in <strong>{minutes} minutes</strong>.</p>
  <p style="color: #6b7280; font-size: 14px;">If you didn't request this code, please ignore this email.</p>
</div>
"""


def is_configured() -> bool:
    return bool(settings.SMTP_HOST and settings.SMTP_USER and settings.SMTP_PASSWORD)


def build_otp_message(to_email: str, code: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = settings.EMAIL_FROM
    message["To"] = to_email
    message["Subject"] = "Your Login OTP"
    message.set_content(
        f"Your one-time password is {code}. It expires in {settings.OTP_EXPIRE_MINUTES} minutes."
    )
    message.add_alternative(
        OTP_EMAIL_HTML.format(code=code, minutes=settings.OTP_EXPIRE_MINUTES), subtype="html"
    )
    return message


async def send_otp_email(to_email: str, code: str) -> bool:
    """
    Mails the login code. Never raises: a failed delivery is logged and
    reported as False so the login flow is not blocked by the mail relay.
    """
    logger.debug("OTP for %s: %s", to_email, code)

    if not is_configured():
        logger.warning("SMTP not configured, OTP email to %s not sent", to_email)
        return False

    try:
        await aiosmtplib.send(
            build_otp_message(to_email, code),
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_PORT == 465,
            start_tls=settings.SMTP_PORT != 465,
            timeout=10,
        )
    except (aiosmtplib.SMTPException, OSError) as e:
        logger.error("Failed to send OTP email to %s: %s", to_email, e)
        return False

    logger.info("OTP email sent to %s", to_email)
    return True
