# employee-directory-api/app/db/models.py
from datetime import datetime, timezone
from sqlalchemy import ( Column, Integer, String, ForeignKey, DateTime, Date, Float, JSON, Text, CheckConstraint )
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    # Naive UTC everywhere; SQLite drops tzinfo on the way back.
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    role = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    __table_args__ = ( CheckConstraint("role IN ('admin', 'employee')"), )
    sessions = relationship("LoginSession", back_populates="user", cascade="all, delete-orphan")

class Employee(Base):
    __tablename__ = "employees"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    age = Column(Integer, nullable=False)
    employee_class = Column("class", String(20), nullable=False, index=True)
    subjects = Column(JSON, nullable=False, default=list)
    attendance = Column(Float, nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    phone = Column(String(30), nullable=False)
    # Linked to Department.name, not to its id
    department = Column(String(100), nullable=False, index=True)
    position = Column(String(100), nullable=False)
    join_date = Column(Date, nullable=False)
    salary = Column(Float, nullable=False)
    address = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="Active", index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    __table_args__ = (
        CheckConstraint("age BETWEEN 18 AND 100"),
        CheckConstraint("attendance BETWEEN 0 AND 100"),
        CheckConstraint("salary >= 0"),
        CheckConstraint("class IN ('Junior', 'Mid-Level', 'Senior', 'Lead', 'Manager')"),
        CheckConstraint("status IN ('Active', 'Inactive', 'On Leave')"),
    )

class Department(Base):
    __tablename__ = "departments"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

class OTPCode(Base):
    __tablename__ = "otp_codes"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(100), nullable=False, index=True)
    code = Column(String(6), nullable=False)
    attempts = Column(Integer, nullable=False, default=0)
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

class LoginSession(Base):
    __tablename__ = "sessions"
    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    expires_at = Column(DateTime, nullable=False, index=True)
    user = relationship("User", back_populates="sessions")
