# File: src/seasonchain/monitoring/metrics.py

from typing import Optional
from dataclasses import dataclass
from prometheus_client import CollectorRegistry, Counter, Gauge, start_http_server

@dataclass
class ChainMetrics:
    height: int
    difficulty: float
    avg_block_time: float
    network_weight: float

@dataclass
class EmissionMetrics:
    emitted_total: float
    remaining: float
    current_reward: float
    season_ended: bool

class MetricsCollector:
    def __init__(self, port: Optional[int] = None, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()

        # Production metrics
        self.blocks_produced = Counter('blocks_produced', 'Total blocks produced', registry=self.registry)
        self.orphan_blocks = Counter('orphan_blocks', 'Blocks flagged as orphans', registry=self.registry)
        self.subsidy_paid = Counter('subsidy_paid', 'Total subsidy credited to participants', registry=self.registry)

        # Chain metrics
        self.chain_height = Gauge('chain_height', 'Current chain height', registry=self.registry)
        self.difficulty = Gauge('difficulty', 'Current difficulty', registry=self.registry)
        self.avg_block_time = Gauge('avg_block_time_seconds', 'EMA of block interval', registry=self.registry)
        self.network_weight = Gauge('network_weight', 'Total effective hashrate', registry=self.registry)

        # Emission metrics
        self.emitted_total = Gauge('emitted_total', 'Subsidy emitted so far', registry=self.registry)
        self.emission_remaining = Gauge('emission_remaining', 'Subsidy left in the season', registry=self.registry)
        self.current_reward = Gauge('current_reward', 'Subsidy for the next block', registry=self.registry)
        self.season_ended = Gauge('season_ended', '1 once the season has ended', registry=self.registry)

        # Start metrics server
        if port is not None:
            start_http_server(port, registry=self.registry)

    def record_block(self, subsidy: float, is_orphan: bool):
        self.blocks_produced.inc()
        self.subsidy_paid.inc(subsidy)
        if is_orphan:
            self.orphan_blocks.inc()

    def update_chain_metrics(self, metrics: ChainMetrics):
        self.chain_height.set(metrics.height)
        self.difficulty.set(metrics.difficulty)
        self.avg_block_time.set(metrics.avg_block_time)
        self.network_weight.set(metrics.network_weight)

    def update_emission_metrics(self, metrics: EmissionMetrics):
        self.emitted_total.set(metrics.emitted_total)
        self.emission_remaining.set(metrics.remaining)
        self.current_reward.set(metrics.current_reward)
        self.season_ended.set(1 if metrics.season_ended else 0)
