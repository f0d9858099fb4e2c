"""Pytest fixtures for testing"""

import pytest
from datetime import datetime
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from limite_real.api.main import create_app
from limite_real.api.dependencies import get_clock
from limite_real.infrastructure.database.models import Base
from limite_real.infrastructure.database.session import get_db
from limite_real.domain.models import FinancialProfile


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def fixed_now() -> datetime:
    """Local midnight five days before a closing day of 20"""
    return datetime(2025, 3, 15, 0, 0)


@pytest.fixture
def scenario_profile() -> FinancialProfile:
    """Card with 30000 of real limit left"""
    return FinancialProfile(
        total_limit=Decimal("50000"),
        month_spend=Decimal("15000"),
        active_installments=Decimal("5000"),
        closing_day=20,
        todays_expenses=[],
    )


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app(db: Session, fixed_now: datetime):
    """Gateway app wired to the test database and a frozen clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: fixed_now)
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Create FastAPI test client with test database"""
    return TestClient(app)
