"""Pytest configuration and shared fixtures for the Pagewise API tests."""

import itertools
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pagewise.config import Settings, get_settings
from pagewise.db.memory import InMemoryPostRepository
from pagewise.main import create_app


# Keep request logs out of test output
logging.getLogger("pagewise").setLevel(logging.WARNING)


@pytest.fixture
def test_settings() -> Settings:
    """Settings used by the application under test."""
    return Settings(
        storage_backend="memory",
        log_level="ERROR",
        default_page_size=20,
        max_page_size=100,
        strict_cursors=True,
        cors_origins=["*"],
        cors_allow_methods=["*"],
        cors_allow_headers=["*"]
    )


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """Id factory producing post-001, post-002, ... so ordering is predictable."""
    counter = itertools.count(1)
    return lambda: f"post-{next(counter):03d}"


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that advances one second per call."""
    start = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    counter = itertools.count()
    return lambda: start + timedelta(seconds=next(counter))


@pytest.fixture
def memory_repository(sequential_ids, fixed_clock) -> InMemoryPostRepository:
    """Empty in-memory repository with predictable ids."""
    return InMemoryPostRepository(id_factory=sequential_ids, clock=fixed_clock)


@pytest.fixture
def app(test_settings: Settings, memory_repository: InMemoryPostRepository) -> FastAPI:
    """FastAPI application wired to the in-memory repository."""
    application = create_app()
    application.state.post_repository = memory_repository
    application.dependency_overrides[get_settings] = lambda: test_settings
    return application


@pytest.fixture
def test_client(app: FastAPI) -> TestClient:
    """Create test client for API testing."""
    return TestClient(app)


@pytest.fixture
def make_records() -> Callable[[int], List[Dict[str, Any]]]:
    """Build records with ids id-1 .. id-n."""
    def build(count: int) -> List[Dict[str, Any]]:
        return [{"id": f"id-{i}", "name": f"Entity {i}"} for i in range(1, count + 1)]
    return build
