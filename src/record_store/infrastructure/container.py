"""Dependency injection container for the record store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import structlog
from opentelemetry import trace

from record_store.application import DatabaseManager
from record_store.infrastructure.config import Config, get_config
from record_store.infrastructure.logging import get_logger, setup_logging
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics
from record_store.infrastructure.tracing import setup_tracing


@dataclass
class Container:
    """Wires configuration, observability and the database manager."""

    config: Config
    logger: structlog.BoundLogger
    tracer: trace.Tracer
    metrics: MetricsRegistry
    manager: DatabaseManager

    _instance: ClassVar[Container | None] = None

    @classmethod
    def create(cls, config: Config | None = None) -> Container:
        """Create and initialize the container with all dependencies."""
        if cls._instance is not None:
            return cls._instance

        config = config or get_config()
        setup_logging(
            level=config.observability.log_level,
            log_format=config.observability.log_format,
            service_name=config.observability.otel_service_name,
        )
        logger = get_logger("record_store")
        tracer = setup_tracing(
            service_name=config.observability.otel_service_name,
            otlp_endpoint=config.observability.otel_endpoint,
        )
        metrics = get_metrics()
        manager = DatabaseManager.from_config(config, metrics=metrics)

        cls._instance = cls(
            config=config,
            logger=logger,
            tracer=tracer,
            metrics=metrics,
            manager=manager,
        )

        logger.info(
            "record_store_container_initialized",
            backend=config.storage.backend,
            data_dir=str(config.storage.data_dir),
        )

        return cls._instance

    @classmethod
    def get(cls) -> Container:
        """Get the singleton container instance."""
        if cls._instance is None:
            return cls.create()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Close the manager and drop the singleton (useful for testing)."""
        if cls._instance is not None:
            cls._instance.manager.close()
        cls._instance = None
