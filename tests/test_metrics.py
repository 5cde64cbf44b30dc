"""
Tests for evaluation metrics.
"""

import pytest

from protector import configure
from protector.dsl import Meta, can
from protector.metrics import MetricsCollector, get_global_collector, set_global_collector


class Post:
    pass


@pytest.fixture
def meta():
    meta = Meta(lambda: ['title'], model=Post)
    meta << (lambda: can('read')) << (lambda user: None)
    return meta


class TestMetricsCollector:
    """Test Prometheus metrics collection"""

    def test_records_evaluations_when_enabled(self, meta):
        collector = MetricsCollector()
        set_global_collector(collector)
        configure(metrics_enabled=True)

        meta.evaluate('user', 'entry')
        meta.evaluate('user', 'entry')

        assert collector.get_value('protector_evaluations_total', 'Post') == 2.0
        assert collector.get_value('protector_rules_evaluated_total', 'Post') == 4.0
        assert collector.get_value('protector_evaluation_duration_seconds_count', 'Post') == 2.0

    def test_disabled_by_default(self, meta):
        collector = MetricsCollector()
        set_global_collector(collector)

        meta.evaluate('user', 'entry')
        assert collector.get_value('protector_evaluations_total', 'Post') == 0.0

    def test_export(self):
        collector = MetricsCollector()
        collector.record_evaluation('Post', 0.001, 3)

        output = collector.export().decode('utf-8')
        assert 'protector_evaluations_total{model="Post"} 1.0' in output

    def test_global_collector_created_on_demand(self):
        collector = get_global_collector()
        assert collector is get_global_collector()
        set_global_collector(None)
        assert get_global_collector() is not collector
