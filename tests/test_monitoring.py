# tests/test_monitoring.py
import logging

import pytest

from seasonchain.monitoring.logging_config import LogConfig
from seasonchain.monitoring.metrics import ChainMetrics, EmissionMetrics, MetricsCollector

class TestLogConfig:
    @pytest.fixture
    def log_config(self, tmp_path):
        config = LogConfig(log_dir=str(tmp_path / "logs"), level="warning", file_prefix="test")
        yield config
        root = logging.getLogger()
        for handler in config._handlers:
            root.removeHandler(handler)
            handler.close()

    def test_writes_to_rotating_file(self, log_config):
        log_file = log_config.setup_logging()
        logging.getLogger("seasonchain.test").info("block mined")
        for handler in log_config._handlers:
            handler.flush()

        with open(log_file) as f:
            assert "block mined" in f.read()
        assert "test_" in log_file

    def test_repeated_setup_does_not_stack_handlers(self, log_config):
        log_config.setup_logging()
        before = len(logging.getLogger().handlers)
        log_config.setup_logging()
        assert len(logging.getLogger().handlers) == before

    def test_console_level(self, log_config):
        log_config.setup_logging()
        assert log_config._handlers[1].level == logging.WARNING

    def test_unknown_level(self, tmp_path):
        with pytest.raises(ValueError):
            LogConfig(log_dir=str(tmp_path), level="chatty")

class TestMetricsCollector:
    def test_collectors_are_independent(self):
        first = MetricsCollector()
        second = MetricsCollector()
        first.record_block(5.0, is_orphan=True)

        assert first.registry.get_sample_value('blocks_produced_total') == 1
        assert first.registry.get_sample_value('orphan_blocks_total') == 1
        assert first.registry.get_sample_value('subsidy_paid_total') == 5.0
        assert second.registry.get_sample_value('blocks_produced_total') == 0

    def test_gauges(self):
        metrics = MetricsCollector()
        metrics.update_chain_metrics(ChainMetrics(height=3, difficulty=2.0, avg_block_time=9.5, network_weight=100))
        metrics.update_emission_metrics(EmissionMetrics(
            emitted_total=30, remaining=70, current_reward=10, season_ended=True
        ))

        registry = metrics.registry
        assert registry.get_sample_value('chain_height') == 3
        assert registry.get_sample_value('avg_block_time_seconds') == 9.5
        assert registry.get_sample_value('emission_remaining') == 70
        assert registry.get_sample_value('season_ended') == 1
