# src/seasonchain/chain/production.py
from typing import Optional, Dict, Any, List, Tuple
from dataclasses import dataclass, asdict
import asyncio
import hashlib
import logging
import random

from .block import Block, Transaction, calculate_block_hash, calculate_work_target
from .chain_state import ChainState
from ..config.simulator_config import MiningConfig
from ..emissions.schedule import EmissionsSchedule, EmissionTelemetry
from ..events.publisher import Event, EventBus, BLOCK_EVENT, TELEMETRY_EVENT
from ..ledger.distribution import distribute_reward
from ..monitoring.metrics import MetricsCollector, ChainMetrics, EmissionMetrics
from ..utils.clock import SimulationClock

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class NetworkTelemetry:
    """Snapshot published every tick"""
    height: int
    timestamp: float
    game_time: float
    difficulty: float
    network_weight: float
    avg_block_time: float
    current_reward: float
    next_halving_height: Optional[int]
    next_halving_in: Optional[int]
    blocks_until_retarget: int
    buffered_blocks: int
    blocks_remaining: int
    emitted_total: float
    remaining: float
    total_emission: float
    epoch_index: int
    halving_epochs: int
    global_burned: float
    circulating_supply: float
    season_ended: bool
    emissions: EmissionTelemetry
    your_weight: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["emissions"] = self.emissions.to_dict()
        return data

class BlockProductionLoop:
    """Periodic block producer driven by a Bernoulli trial per tick.

    ``ledger`` must provide ``participant_ids()``,
    ``get_participant_weight(id, now)``, ``get_total_network_weight(now)``
    and ``credit_participant(id, amount)``.
    """

    def __init__(
        self,
        schedule: EmissionsSchedule,
        chain_state: ChainState,
        ledger,
        bus: EventBus,
        mining_config: Optional[MiningConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[SimulationClock] = None,
        metrics: Optional[MetricsCollector] = None
    ):
        self.schedule = schedule
        self.chain_state = chain_state
        self.ledger = ledger
        self.bus = bus
        self.mining_config = mining_config or MiningConfig()
        self.rng = rng or random.Random()
        self.clock = clock or SimulationClock()
        self.metrics = metrics

        self.season_ended = False
        self.running = False
        self.last_distribution: Dict[str, float] = {}

        # Season clock starts when production is wired up
        if chain_state.height == 0 and not chain_state.blocks:
            chain_state.last_block_time = self.clock.now()

    @property
    def block_probability(self) -> float:
        interval = self.schedule.config.target_block_interval_seconds
        return min(1.0, self.mining_config.tick_seconds / interval)

    def should_mine_block(self) -> bool:
        return self.rng.random() < self.block_probability

    def tick(self) -> Optional[Block]:
        """One loop iteration: maybe produce a block, always publish telemetry"""
        block = None
        if not self.season_ended and self.should_mine_block():
            block = self.produce_block()

        self.bus.publish(Event(TELEMETRY_EVENT, self.telemetry()))
        return block

    def _generate_transactions(self, height: int) -> Tuple[List[Transaction], int]:
        """Displayed transactions (capped) and the logical transaction count"""
        config = self.mining_config
        logical_count = self.rng.randint(config.min_logical_tx, config.max_logical_tx)
        transactions = []
        for i in range(min(logical_count, config.max_transactions_per_block)):
            seed = f"tx-{height}-{i}-{self.rng.getrandbits(64)}"
            transactions.append(Transaction(
                tx_id=hashlib.sha256(seed.encode()).hexdigest(),
                amount=self.rng.random() * config.max_tx_amount,
                fee=self.rng.random() * config.max_tx_fee,
                sender=format(self.rng.getrandbits(32), '08x'),
                recipient=format(self.rng.getrandbits(32), '08x')
            ))
        return transactions, logical_count

    def produce_block(self) -> Optional[Block]:
        """Produce one block, or end the season when no subsidy is left.

        Clip, increment and append run under the schedule lock so no second
        producer can clip against the same remaining budget.
        """
        with self.schedule.lock:
            if self.season_ended:
                return None

            chain = self.chain_state
            subsidy = self.schedule.clip_to_total(self.schedule.current_reward(chain.height))
            if subsidy <= 0 or self.schedule.has_ended(chain.height):
                self._end_season()
                return None

            height = chain.height + 1
            now = self.clock.now()
            transactions, logical_count = self._generate_transactions(height)
            total_fees = sum(tx.fee for tx in transactions)
            is_orphan = self.rng.random() < self.mining_config.orphan_probability
            previous_hash = chain.tip_hash

            block = Block(
                height=height,
                timestamp=now,
                hash=calculate_block_hash(height, previous_hash, now, self.rng.getrandbits(32)),
                previous_hash=previous_hash,
                difficulty=chain.difficulty,
                subsidy=subsidy,
                total_fees=total_fees,
                tx_count=logical_count,
                is_orphan=is_orphan,
                transactions=tuple(transactions),
                work_target=calculate_work_target(chain.difficulty)
            )

            observed_interval = now - chain.last_block_time
            chain.append(block)

            self.schedule.increment_emitted(subsidy)
            if self.schedule.has_ended(chain.height):
                self._end_season()

            chain.update_avg_block_time(observed_interval)
            chain.retarget_difficulty()

            self.last_distribution = self._distribute(block.reward)

            logger.info(
                f"Mined block {height} | Subsidy {subsidy:.6f} | "
                f"Emitted {self.schedule.emitted_total:.2f}/{self.schedule.total_emission}"
            )
            if self.metrics:
                self.metrics.record_block(subsidy, is_orphan)
                self._update_metrics()

            self.bus.publish(Event(BLOCK_EVENT, block))
            return block

    def _distribute(self, amount: float) -> Dict[str, float]:
        """Credit ``amount`` to participants by effective hashrate"""
        now = self.clock.game_time()
        weights = {
            participant_id: self.ledger.get_participant_weight(participant_id, now)
            for participant_id in self.ledger.participant_ids()
        }
        total_weight = self.ledger.get_total_network_weight(now)
        shares = distribute_reward(amount, weights, total_weight)
        for participant_id, share in shares.items():
            self.ledger.credit_participant(participant_id, share)
        return shares

    def _end_season(self) -> None:
        if not self.season_ended:
            self.season_ended = True
            logger.info(
                f"Season ended at height {self.chain_state.height}: "
                f"emitted {self.schedule.emitted_total}/{self.schedule.total_emission}"
            )

    def _update_metrics(self) -> None:
        snapshot = self.telemetry()
        self.metrics.update_chain_metrics(ChainMetrics(
            height=snapshot.height,
            difficulty=snapshot.difficulty,
            avg_block_time=snapshot.avg_block_time,
            network_weight=snapshot.network_weight
        ))
        self.metrics.update_emission_metrics(EmissionMetrics(
            emitted_total=snapshot.emitted_total,
            remaining=snapshot.remaining,
            current_reward=snapshot.current_reward,
            season_ended=snapshot.season_ended
        ))

    def telemetry(self, participant_id: Optional[str] = None) -> NetworkTelemetry:
        chain = self.chain_state
        game_time = self.clock.game_time()
        emissions = self.schedule.telemetry(chain.height)
        ended = self.season_ended

        next_halving_height = None
        if not ended and emissions.next_halving_in is not None:
            next_halving_height = chain.height + emissions.next_halving_in

        your_weight = None
        if participant_id is not None:
            your_weight = self.ledger.get_participant_weight(participant_id, game_time)

        return NetworkTelemetry(
            height=chain.height,
            timestamp=self.clock.now(),
            game_time=game_time,
            difficulty=chain.difficulty,
            network_weight=self.ledger.get_total_network_weight(game_time),
            avg_block_time=chain.avg_block_time,
            current_reward=0.0 if ended else emissions.current_reward,
            next_halving_height=next_halving_height,
            next_halving_in=None if ended else emissions.next_halving_in,
            blocks_until_retarget=chain.blocks_until_retarget,
            buffered_blocks=len(chain),
            blocks_remaining=emissions.blocks_remaining,
            emitted_total=emissions.emitted_total,
            remaining=emissions.remaining,
            total_emission=emissions.total_emission,
            epoch_index=emissions.epoch_index,
            halving_epochs=emissions.halving_epochs,
            global_burned=getattr(self.ledger, "global_burned", 0.0),
            circulating_supply=getattr(self.ledger, "circulating_supply", 0.0),
            season_ended=ended,
            emissions=emissions,
            your_weight=your_weight
        )

    async def run(self):
        """Tick until stopped"""
        logger.info("Block production loop started")
        self.running = True
        while self.running:
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Error in block production: {str(e)}", exc_info=True)
            await asyncio.sleep(self.mining_config.tick_seconds)
        logger.info("Block production loop stopped")

    def stop(self):
        self.running = False
