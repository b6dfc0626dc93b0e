"""Prometheus metrics for the record store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all record store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Write path
        self.records_written_total = Counter(
            "record_store_records_written_total",
            "Total number of record write attempts",
            ["status"],  # success, rejected, error
            registry=self._registry,
        )

        self.records_rejected_total = Counter(
            "record_store_records_rejected_total",
            "Records rejected by validation",
            ["reason"],  # shape mismatch, duplicate identity, ...
            registry=self._registry,
        )

        self.write_latency_seconds = Histogram(
            "record_store_write_latency_seconds",
            "Validate-and-append latency in seconds",
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5),
            registry=self._registry,
        )

        # Read path
        self.record_reads_total = Counter(
            "record_store_record_reads_total",
            "Total identity lookups",
            ["result"],  # hit, miss
            registry=self._registry,
        )

        # Catalog
        self.databases = Gauge(
            "record_store_databases",
            "Number of databases",
            registry=self._registry,
        )

        self.collections = Gauge(
            "record_store_collections",
            "Number of collections across all databases",
            registry=self._registry,
        )

        self.info = Info(
            "record_store",
            "Record store information",
            registry=self._registry,
        )


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from record_store import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
