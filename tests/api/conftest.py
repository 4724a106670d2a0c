"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from permsync.application.ingestion import build_ingestion_strategy
from permsync.config import Settings
from permsync.main import create_permsync_app


@pytest.fixture
def strategy(permission_sets, references, links):
    """API-mode strategy over in-memory stores."""
    return build_ingestion_strategy(
        "api", permission_sets=permission_sets, references=references, links=links
    )


@pytest.fixture
def app(strategy):
    """Falcon ASGI app wired through the composition root."""
    settings = Settings(provisioning_mode="api", _env_file=None)
    return create_permsync_app(settings=settings, strategy=strategy)


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
