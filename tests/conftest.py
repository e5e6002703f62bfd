"""Pytest configuration and shared fixtures for Classroom HQ tests.

Provides an isolated SQLite-backed store per test, the repositories built on
it, and Flask clients logged in as an officer or a student.
"""

from __future__ import annotations

import pytest

from classhq import create_app
from classhq.config import TestConfig
from classhq.context import create_app_context
from classhq.models.settings import Settings
from classhq.models.student import Student

# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def config(tmp_path, monkeypatch: pytest.MonkeyPatch) -> TestConfig:
    """Configuration pointing at a throwaway data directory and database file."""

    db_path = tmp_path / "classhq-test.db"
    monkeypatch.setenv("CLASSHQ_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CLASSHQ_DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.setenv("CLASSHQ_DEV_MODE", "true")
    monkeypatch.delenv("CLASSHQ_STORE_PREFIX", raising=False)
    monkeypatch.delenv("CLASSHQ_ROSTER_PARSER", raising=False)
    return TestConfig()


@pytest.fixture(scope="function")
def app_context(config):
    """Engine, store and repositories for a single test."""

    ctx = create_app_context(config)
    yield ctx
    ctx.close()


@pytest.fixture
def store(app_context):
    return app_context.store


@pytest.fixture
def settings_repo(app_context):
    return app_context.settings_repo


@pytest.fixture
def roster_repo(app_context):
    return app_context.roster_repo


@pytest.fixture
def expense_repo(app_context):
    return app_context.expense_repo


@pytest.fixture
def wishlist_repo(app_context):
    return app_context.wishlist_repo


@pytest.fixture
def bulletin_repo(app_context):
    return app_context.bulletin_repo


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(config):
    flask_app = create_app(config=config)
    flask_app.config.update(TESTING=True, SECRET_KEY="test-secret")
    yield flask_app
    flask_app.extensions["classhq"].close()


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def officer_client(app):
    with app.test_client() as test_client:
        response = test_client.post("/auth/login", json={"username": "Class Officer"})
        assert response.status_code == 200
        yield test_client


@pytest.fixture
def student_client(app):
    with app.test_client() as test_client:
        response = test_client.post("/auth/login", json={"username": "Juan"})
        assert response.status_code == 200
        yield test_client


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def student_factory():
    """Build in-memory students for pure ledger tests."""

    counter = {"n": 0}

    def _create_student(
        name: str | None = None,
        gender: str = "M",
        payments: dict[str, float] | None = None,
    ) -> Student:
        counter["n"] += 1
        return Student(
            id=f"s{counter['n']}",
            name=name or f"Student {counter['n']}",
            gender=gender,  # type: ignore[arg-type]
            payments=dict(payments or {}),
        )

    return _create_student


def make_settings(
    *,
    daily_quota: float = 5,
    active: tuple[str, ...] = (),
    inactive: tuple[str, ...] = (),
    custom: dict[str, float] | None = None,
) -> Settings:
    """Settings with the given dates flagged active/inactive."""

    days = {day: True for day in active}
    days.update({day: False for day in inactive})
    return Settings(daily_quota=daily_quota, custom_quotas=dict(custom or {}), collection_days=days)


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance (default one cent)."""
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
