"""Pytest configuration and shared fixtures."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shiftplan.domain.models import Base


def pytest_configure(config):
    """Configure pytest."""
    # CLI tests run against a real SQLite file
    config.addinivalue_line(
        "markers", "integration: end-to-end CLI runs on a temporary database (deselect with '-m \"not integration\"')"
    )


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
