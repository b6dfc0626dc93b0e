"""Pytest configuration and fixtures for record_store tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from record_store.application import DatabaseManager
from record_store.domain.entities import Schema
from record_store.infrastructure.config import Config, StorageConfig
from record_store.infrastructure.container import Container
from record_store.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration with a temporary data directory."""
    return Config(
        storage=StorageConfig(
            data_dir=temp_dir / "data",
            sync_mode="none",  # Faster for tests
        ),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def user_schema() -> Schema:
    """The {id: string, age: integer, active: boolean} schema keyed on id."""
    return Schema.from_mapping(
        {"id": "string", "age": "integer", "active": "boolean"},
        identity_field="id",
    )


@pytest.fixture
def manager(temp_dir: Path, metrics_registry: MetricsRegistry) -> Generator[DatabaseManager, None, None]:
    """Provide a file-backed manager in a temporary directory."""
    store = DatabaseManager(
        data_dir=temp_dir / "data",
        sync_mode="none",
        metrics=metrics_registry,
    )
    yield store
    store.close()


@pytest.fixture
def container() -> Generator[None, None, None]:
    """Reset the global container around a test."""
    Container.reset()
    yield
    Container.reset()


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
