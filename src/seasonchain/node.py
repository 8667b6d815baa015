# src/seasonchain/node.py
import asyncio
import logging
import random
from typing import Optional

from .chain.chain_state import ChainState
from .chain.production import BlockProductionLoop
from .config.simulator_config import SimulatorConfig, MiningConfig
from .emissions.schedule import EmissionConfig, EmissionsSchedule
from .events.publisher import EventBus
from .ledger.account_store import AccountStore
from .monitoring.metrics import MetricsCollector
from .utils.clock import SimulationClock
from .utils.config import Config

logger = logging.getLogger(__name__)

class SeasonNode:
    """One running season: schedule, chain, ledger, event bus and producer.

    Every piece of mutable state hangs off this object so independent
    seasons can live side by side.
    """

    def __init__(
        self,
        emission_config: Optional[EmissionConfig] = None,
        mining_config: Optional[MiningConfig] = None,
        ledger: Optional[AccountStore] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[SimulationClock] = None,
        metrics: Optional[MetricsCollector] = None
    ):
        self.emission_config = emission_config or EmissionConfig(
            season_days=Config.SEASON_DAYS,
            target_block_interval_seconds=Config.TARGET_BLOCK_INTERVAL_SEC,
            total_emission=Config.TOTAL_EMISSION,
            halving_epochs=Config.HALVING_EPOCHS
        )
        self.mining_config = mining_config or MiningConfig()
        self.clock = clock or SimulationClock()
        self.metrics = metrics or MetricsCollector()

        self.schedule = EmissionsSchedule(self.emission_config)
        self.chain_state = ChainState(
            target_block_interval=self.emission_config.target_block_interval_seconds,
            initial_difficulty=self.mining_config.initial_difficulty,
            retarget_blocks=self.mining_config.difficulty_retarget_blocks,
            max_adjustment=self.mining_config.max_difficulty_adjustment,
            max_blocks_in_memory=self.mining_config.max_blocks_in_memory,
            start_time=self.clock.now()
        )
        self.ledger = ledger or AccountStore()
        self.bus = EventBus()
        self.producer = BlockProductionLoop(
            schedule=self.schedule,
            chain_state=self.chain_state,
            ledger=self.ledger,
            bus=self.bus,
            mining_config=self.mining_config,
            rng=rng,
            clock=self.clock,
            metrics=self.metrics
        )
        self._task: Optional[asyncio.Task] = None
        logger.info(f"Season node initialized: {self.schedule}")

    @classmethod
    def from_config(cls, config: SimulatorConfig, **kwargs) -> 'SeasonNode':
        """Build a node from a YAML-backed simulator config"""
        ledger = AccountStore(
            starting_balance=config.get("ledger.starting_balance", Config.STARTING_BALANCE),
            initial_circulating=config.get("ledger.initial_circulating", Config.INITIAL_CIRCULATING),
            weight_floor=config.get("ledger.network_weight_floor", Config.NETWORK_WEIGHT_FLOOR)
        )
        clock = kwargs.pop("clock", None) or SimulationClock(
            acceleration=config.get("clock.time_acceleration", Config.TIME_ACCELERATION)
        )
        metrics = kwargs.pop("metrics", None) or MetricsCollector(
            port=config.get("monitoring.metrics_port")
        )
        return cls(
            emission_config=config.emission_config(),
            mining_config=config.mining_config(),
            ledger=ledger,
            clock=clock,
            metrics=metrics,
            **kwargs
        )

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Schedule the production loop on the running event loop"""
        if not self.running:
            self._task = asyncio.create_task(self.producer.run())
        return self._task

    async def stop(self):
        """Halt future ticks"""
        self.producer.stop()
        if self._task is not None:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None
        logger.info("Season node stopped")
