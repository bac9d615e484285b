"""rulesync: keep Prometheus rule groups in a Mimir/Cortex ruler in sync with files."""

__version__ = "0.1.0"
