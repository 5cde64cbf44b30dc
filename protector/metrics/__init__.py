"""
Protector Metrics Package

Prometheus metrics for rule set evaluations.
"""

from .collector import (
    MetricsCollector,
    get_global_collector,
    set_global_collector
)


__all__ = [
    'MetricsCollector',
    'get_global_collector',
    'set_global_collector'
]
