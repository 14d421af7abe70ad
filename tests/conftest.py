"""Pytest fixtures for command line and database integration tests."""
from __future__ import annotations

import os
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine


@pytest.fixture(scope="session")
def project_root() -> str:
    """Return the project root directory."""
    # Go up from tests/ to project root
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture
def sqlite_engine() -> Generator[Engine, None, None]:
    """In-memory SQLite database, disposed after the test."""
    engine = create_engine("sqlite://")
    yield engine
    engine.dispose()
