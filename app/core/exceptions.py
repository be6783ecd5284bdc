# employee-directory-api/app/core/exceptions.py
"""
Application errors.

Every error carries a machine-readable ``code``. The GraphQL layer reads the
``extensions`` property, so the code reaches the client as
``errors[].extensions.code`` without any per-resolver mapping.

Usage:
    from app.core.exceptions import NotFoundError

    if employee is None:
        raise NotFoundError("Employee not found")
"""
from typing import Any, Dict


class AppError(Exception):
    """Base class for errors that are safe to show to the client."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)

    @property
    def extensions(self) -> Dict[str, Any]:
        return {"code": self.code}


# --- Authentication & authorization ---

class UnauthenticatedError(AppError):
    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "You must be logged in to perform this action"):
        super().__init__(message)


class ForbiddenError(AppError):
    code = "FORBIDDEN"

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message)


# --- OTP ---

class OTPExpiredError(AppError):
    code = "OTP_EXPIRED"

    def __init__(self):
        super().__init__("OTP has expired. Please request a new one.")


class TooManyAttemptsError(AppError):
    code = "TOO_MANY_ATTEMPTS"

    def __init__(self):
        super().__init__("Too many failed attempts. Please request a new OTP.")


class InvalidOTPError(AppError):
    code = "INVALID_OTP"

    def __init__(self, remaining: int):
        self.remaining = remaining
        super().__init__(f"Invalid OTP. {remaining} attempts remaining.")


# --- Input & records ---

class BadUserInputError(AppError):
    code = "BAD_USER_INPUT"


class NotFoundError(AppError):
    code = "NOT_FOUND"


class DuplicateEmailError(AppError):
    code = "DUPLICATE_EMAIL"

    def __init__(self):
        super().__init__("Employee with this email already exists")


class DuplicateDepartmentError(AppError):
    code = "DUPLICATE_DEPARTMENT"

    def __init__(self):
        super().__init__("Department with this name already exists")


class DepartmentInUseError(AppError):
    code = "DEPARTMENT_IN_USE"

    def __init__(self, employee_count: int):
        self.employee_count = employee_count
        super().__init__(
            f"Cannot delete department. {employee_count} employee(s) are assigned to this department."
        )


class InternalError(AppError):
    """Store or transport failure. The message never includes internal detail."""

    code = "INTERNAL_SERVER_ERROR"
