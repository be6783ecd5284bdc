# employee-directory-api/app/core/config.py
from pydantic_settings import BaseSettings; from dotenv import load_dotenv
load_dotenv()
class Settings(BaseSettings):
    DATABASE_URL: str; SESSION_SECRET_KEY: str; SESSION_ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "session_id"; SESSION_EXPIRE_MINUTES: int = 60 * 24
    COOKIE_SECURE: bool = False
    OTP_EXPIRE_MINUTES: int = 5; OTP_MAX_ATTEMPTS: int = 3
    # Returns the raw code from requestOTP. Development and tests only.
    OTP_ECHO: bool = False
    SMTP_HOST: str | None = None; SMTP_PORT: int = 587
    SMTP_USER: str | None = None; SMTP_PASSWORD: str | None = None
    EMAIL_FROM: str = "noreply@company.com"
    FRONTEND_URL: str = "http://localhost:3000"
    ADMIN_EMAIL: str = "admin@company.com"; EMPLOYEE_EMAIL: str = "employee@company.com"
    SEED_ON_STARTUP: bool = True
    DEBUG: bool = False; LOG_LEVEL: str = "INFO"
settings = Settings()
