"""Root test configuration."""

import logging
from unittest.mock import MagicMock

import pytest
import structlog

from rulesync.handlers import HandlerRegistry, RuleGroupHandler
from rulesync.mimir.models import PrometheusRuleGroup
from rulesync.resources.models import Resource


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def remote_groupings():
    """Rule groups as the ruler would report them."""
    return {
        "teamA": [
            PrometheusRuleGroup(
                name="latency",
                rules=[{"alert": "HighLatency", "expr": "latency_p99 > 1"}],
            ),
            PrometheusRuleGroup(name="errors", rules=[]),
        ],
        "teamB": [
            PrometheusRuleGroup(
                name="rates",
                rules=[{"record": "job:requests:rate5m", "expr": "sum(rate(requests_total[5m]))"}],
            ),
        ],
    }


@pytest.fixture
def ruler_client(remote_groupings):
    client = MagicMock()
    client.list_rules.return_value = remote_groupings
    return client


@pytest.fixture
def handler(ruler_client):
    return RuleGroupHandler(ruler_client)


@pytest.fixture
def registry(handler):
    registry = HandlerRegistry()
    registry.register(handler)
    return registry


@pytest.fixture
def rule_group():
    """A local PrometheusRuleGroup resource."""
    return Resource(
        api_version="rulesync/v1alpha1",
        kind="PrometheusRuleGroup",
        name="latency",
        metadata={"namespace": "teamA"},
        spec={
            "rules": [
                {"type": "alerting", "name": "HighLatency", "query": "up == 0", "for": "5m"},
                {"type": "recording", "name": "job:up:sum", "query": "sum by (job) (up)"},
            ]
        },
    )
