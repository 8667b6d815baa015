# src/seasonchain/monitoring/__init__.py
from .metrics import MetricsCollector, ChainMetrics, EmissionMetrics
from .logging_config import LogConfig

__all__ = ['MetricsCollector', 'ChainMetrics', 'EmissionMetrics', 'LogConfig']
