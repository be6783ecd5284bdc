"""
Employee Directory API - test configuration and fixtures
"""
import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET_KEY"] = "test-session-secret-for-testing-only"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["OTP_ECHO"] = "false"
os.environ["SMTP_HOST"] = ""

from app.main import app
from app.db import models
from app.db.session import get_db
from app.services import otp as otp_service
from app.services.seed import seed_database

TEST_OTP = "123456"

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Fresh schema for every test"""
    models.Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    yield session
    session.close()
    models.Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def seeded(db: Session) -> Session:
    """Admin and employee users, six departments, sample employees"""
    seed_database(db)
    return db


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fixed_otp(monkeypatch):
    """Every issued code is TEST_OTP"""
    monkeypatch.setattr(otp_service, "generate_otp", lambda: TEST_OTP)
    return TEST_OTP


def gql(client: TestClient, query: str, variables: dict | None = None) -> dict:
    response = client.post("/graphql", json={"query": query, "variables": variables or {}})
    assert response.status_code == 200
    return response.json()


def error_code(result: dict) -> str:
    return result["errors"][0]["extensions"]["code"]


REQUEST_OTP = """
mutation RequestOTP($email: String!) {
  requestOTP(email: $email) { success message otp }
}
"""

VERIFY_OTP = """
mutation VerifyOTP($email: String!, $otp: String!) {
  verifyOTP(email: $email, otp: $otp) { user { id username email role } message }
}
"""


def login(client: TestClient, email: str) -> dict:
    """Log the client in through the real OTP flow. Requires the fixed_otp fixture."""
    assert gql(client, REQUEST_OTP, {"email": email})["data"]["requestOTP"]["success"]
    result = gql(client, VERIFY_OTP, {"email": email, "otp": TEST_OTP})
    assert "errors" not in result, result
    return result["data"]["verifyOTP"]


@pytest.fixture
def admin_client(client: TestClient, seeded: Session, fixed_otp) -> TestClient:
    login(client, "admin@company.com")
    return client


@pytest.fixture
def employee_client(client: TestClient, seeded: Session, fixed_otp) -> TestClient:
    login(client, "employee@company.com")
    return client
