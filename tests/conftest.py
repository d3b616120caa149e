"""Root pytest configuration for all tests."""

import logging
from unittest.mock import Mock

import pytest

from tests.helpers.virtual_scheduler import VirtualScheduler

# urllib3 logs every retry/connection at DEBUG, which drowns test output
logging.getLogger("urllib3").setLevel(logging.WARNING)


@pytest.fixture
def scheduler():
    """Scheduler running every role inline with a virtual clock."""
    return VirtualScheduler()


@pytest.fixture(autouse=True)
def telegraph_env(monkeypatch):
    """Keep tests independent of a developer's .env and environment.

    Yields the mock standing in for load_dotenv.
    """
    load_dotenv = Mock(return_value=False)
    monkeypatch.setattr("src.telegraph_client.auth.load_dotenv", load_dotenv)
    monkeypatch.delenv("TELEGRAPH_ACCESS_TOKEN", raising=False)
    monkeypatch.delenv("TELEGRAPH_API_URL", raising=False)
    yield load_dotenv
