"""
Pytest configuration and shared fixtures.

Provides:
- In-memory SQLite engine with the example schema (status, user, tag)
- SqlAlchemyApi bound to that engine, with history purged after each test
- RecordingApi fake for provider-level unit tests
- Optional PostgreSQL engine when DATAMOD_TEST_POSTGRES_URL is set
"""

from __future__ import annotations

import os
import sys
from collections.abc import Generator
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Add project root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402 (import after path setup)
from sqlalchemy import create_engine  # noqa: E402 (import after path setup)
from sqlalchemy.engine import Engine  # noqa: E402 (import after path setup)
from sqlalchemy.pool import StaticPool  # noqa: E402 (import after path setup)

from datamod.api.sqlalchemy_api import SqlAlchemyApi, normalize_database_url  # noqa: E402
from datamod.core.config import reset_settings  # noqa: E402
from tests.entities import metadata  # noqa: E402
from tests.fakes import RecordingApi  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Isolate tests from DATAMOD_* variables of the developer's shell."""
    for name in list(os.environ):
        if name.startswith("DATAMOD_") and name != "DATAMOD_TEST_POSTGRES_URL":
            monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


# ============================================================================
# SQLite
# ============================================================================


@pytest.fixture
def engine() -> Generator[Engine]:
    """
    Strictly in-memory SQLite with StaticPool so every connection shares
    the same database.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def api(engine: Engine) -> SqlAlchemyApi:
    return SqlAlchemyApi(engine=engine)


@pytest.fixture
def recording_api() -> RecordingApi:
    return RecordingApi()


# ============================================================================
# PostgreSQL (opt-in)
# ============================================================================


@pytest.fixture(scope="session")
def pg_engine() -> Generator[Engine]:
    """Engine for a disposable PostgreSQL test database.

    Skipped unless DATAMOD_TEST_POSTGRES_URL is set. Tables of the example
    schema are dropped and recreated, so the database name must contain
    "test".
    """
    url = os.environ.get("DATAMOD_TEST_POSTGRES_URL", "").strip()
    if not url:
        pytest.skip("DATAMOD_TEST_POSTGRES_URL not set")

    db_name = url.split("?", 1)[0].rsplit("/", 1)[-1].lower()
    if "test" not in db_name:
        pytest.skip(f"Refusing to reset non-test database '{db_name}'")

    engine = create_engine(normalize_database_url(url), pool_pre_ping=True)
    metadata.drop_all(engine)
    metadata.create_all(engine)
    yield engine
    metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def pg_api(pg_engine: Engine) -> Generator[SqlAlchemyApi]:
    api = SqlAlchemyApi(engine=pg_engine)
    yield api
    api.purge_history()
