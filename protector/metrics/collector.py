"""
Prometheus metrics integration for Protector.

This module collects rule evaluation counts and durations so that hosts
can export them next to their own metrics.
"""

import logging
from typing import Optional

from prometheus_client import Counter, Histogram, CollectorRegistry, generate_latest


logger = logging.getLogger(__name__)


class MetricsCollector:
    """Metrics collector for rule evaluations."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Initialize metrics collector.

        Args:
            registry: Prometheus registry; a private one is created if omitted
        """
        self.registry = registry or CollectorRegistry()

        self.evaluations = Counter(
            'protector_evaluations_total',
            'Total number of rule set evaluations',
            ['model'],
            registry=self.registry
        )

        self.evaluation_latency = Histogram(
            'protector_evaluation_duration_seconds',
            'Rule set evaluation duration in seconds',
            ['model'],
            buckets=[0.00001, 0.00005, 0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
            registry=self.registry
        )

        self.rules_evaluated = Counter(
            'protector_rules_evaluated_total',
            'Total number of rules executed during evaluations',
            ['model'],
            registry=self.registry
        )

        logger.info("Metrics collector initialized")

    def record_evaluation(self, model: str, duration: float, rule_count: int) -> None:
        """Record a finished evaluation."""
        self.evaluations.labels(model=model).inc()
        self.evaluation_latency.labels(model=model).observe(duration)
        self.rules_evaluated.labels(model=model).inc(rule_count)

    def get_value(self, name: str, model: str) -> float:
        """Current value of a sample, 0.0 if it was never recorded."""
        value = self.registry.get_sample_value(name, {'model': model})
        return value if value is not None else 0.0

    def export(self) -> bytes:
        """Export metrics in the Prometheus text format."""
        return generate_latest(self.registry)


_global_collector: Optional[MetricsCollector] = None


def get_global_collector() -> MetricsCollector:
    """Get the global metrics collector, creating it on first use."""
    global _global_collector
    if _global_collector is None:
        _global_collector = MetricsCollector()
    return _global_collector


def set_global_collector(collector: Optional[MetricsCollector]) -> None:
    """Set the global metrics collector; None drops it."""
    global _global_collector
    _global_collector = collector
