"""Shared pytest fixtures for cinevault tests."""

import pytest
from fastapi.testclient import TestClient

from cinevault.api.app import create_app
from cinevault.config import Settings
from cinevault.db.schema import Base
from cinevault.db.session import create_db_engine, create_session_factory
from cinevault.storage.mock import MockImageGateway


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine shared across threads."""
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test engine."""
    return create_session_factory(engine)


@pytest.fixture
def session(session_factory):
    """Create a database session for testing."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def gateway():
    """In-memory image gateway."""
    return MockImageGateway(cloud_name="test-cloud")


@pytest.fixture
def client(session_factory, gateway):
    """Test client for an app wired to the test database and mock gateway."""
    app = create_app(
        settings=Settings(),
        session_factory=session_factory,
        image_gateway=gateway,
    )
    return TestClient(app)
