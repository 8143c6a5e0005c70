"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite)
- FastAPI test client
- Seed companies, jobs and users, plus their tokens
"""

import os

# Must be set before the application modules read their settings
os.environ["ENVIRONMENT"] = "test"
os.environ["TEST_DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from jobly.core.database import Base, SessionLocal, engine, get_db
from jobly.core.security import create_token
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.crud import user as user_crud
import jobly.models  # noqa: F401  Register tables on Base
from main import app


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    All tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db_session):
    """
    Seed three companies, three jobs and three users.

    Returns:
        Dict with the ids of the created jobs under "job_ids"
    """
    for n in (1, 2, 3):
        company_crud.create(db_session, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "numEmployees": n,
            "description": f"Desc{n}",
            "logoUrl": f"http://c{n}.img",
        })

    job_ids = [
        job_crud.create(db_session, data)["id"]
        for data in (
            {"title": "Job1", "salary": 100000, "equity": 0.1, "companyHandle": "c1"},
            {"title": "Job2", "salary": 120000, "equity": 0.2, "companyHandle": "c1"},
            {"title": "Job3", "salary": 110000, "equity": None, "companyHandle": "c2"},
        )
    ]

    for username, first, last, is_admin in (
        ("u1", "U1F", "U1L", False),
        ("u2", "U2F", "U2L", False),
        ("admin", "Admin", "Admin", True),
    ):
        user_crud.register(db_session, {
            "username": username,
            "password": f"password-{username}",
            "firstName": first,
            "lastName": last,
            "email": f"{username}@user.com",
            "isAdmin": is_admin,
        })

    return {"job_ids": job_ids}


@pytest.fixture
def u1_headers():
    """Auth headers for the non-admin user u1"""
    token = create_token({"username": "u1", "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    """Auth headers for an admin"""
    token = create_token({"username": "admin", "isAdmin": True})
    return {"Authorization": f"Bearer {token}"}
