# src/seasonchain/emissions/schedule.py
from typing import Optional, Tuple, Dict, Any
from dataclasses import dataclass, asdict
from bisect import bisect_right
import logging
import math
import threading

from ..exceptions import ConfigurationError, OverEmissionError

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400

def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up"""
    return int(math.floor(value + 0.5))

@dataclass(frozen=True)
class EmissionConfig:
    """Static season parameters, validated once at construction"""
    season_days: float
    target_block_interval_seconds: float
    total_emission: float
    halving_epochs: int

    def __post_init__(self):
        for name in ("season_days", "target_block_interval_seconds", "total_emission"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be positive and finite, got {value!r}")

        if isinstance(self.halving_epochs, bool) or not isinstance(self.halving_epochs, int):
            raise ConfigurationError(f"halving_epochs must be an integer, got {self.halving_epochs!r}")
        if self.halving_epochs < 1:
            raise ConfigurationError(f"halving_epochs must be at least 1, got {self.halving_epochs}")

        if self.total_blocks < self.halving_epochs:
            raise ConfigurationError(
                f"Season yields {self.total_blocks} blocks, fewer than "
                f"{self.halving_epochs} halving epochs"
            )

    @property
    def total_blocks(self) -> int:
        return _round_half_up(self.season_days * SECONDS_PER_DAY / self.target_block_interval_seconds)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EmissionConfig':
        """Create config from a mapping, reporting missing keys as configuration errors"""
        try:
            return cls(
                season_days=data["season_days"],
                target_block_interval_seconds=data["target_block_interval_seconds"],
                total_emission=data["total_emission"],
                halving_epochs=data["halving_epochs"]
            )
        except KeyError as e:
            raise ConfigurationError(f"Missing emission setting: {e.args[0]}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass(frozen=True)
class EmissionTelemetry:
    """Read-only projection of the schedule at a given height"""
    height: int
    current_reward: float
    emitted_total: float
    remaining: float
    blocks_remaining: int
    next_halving_in: Optional[int]
    epoch_index: int
    epoch_length: int
    last_epoch_length: int
    total_blocks: int
    halving_heights: Tuple[int, ...]
    r0: float
    halving_epochs: int
    total_emission: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["halving_heights"] = list(self.halving_heights)
        return data

@dataclass(frozen=True)
class EmissionsPreview:
    """Static derived configuration, available before any block exists"""
    total_blocks: int
    epoch_length: int
    r0: float
    halving_heights: Tuple[int, ...]
    total_emission: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["halving_heights"] = list(self.halving_heights)
        return data

class EmissionsSchedule:
    """Single source of truth for per-height subsidy and season exhaustion.

    Rewards are a pure function of height: ``r0 / 2**epoch``. Because
    ``epoch_length`` is a floor division, the final epoch also covers the
    remainder blocks and the formula alone would overshoot the total. The
    running ``emitted_total`` together with :meth:`clip_to_total` is what
    keeps cumulative emission at or below ``total_emission``.

    Callers must hold :attr:`lock` across clip and increment when more than
    one thread can reach the schedule.
    """

    def __init__(self, config: EmissionConfig):
        self.config = config
        self.total_emission = float(config.total_emission)
        self.halving_epochs = config.halving_epochs

        self.total_blocks = config.total_blocks
        self.epoch_length = self.total_blocks // self.halving_epochs
        self.halving_heights: Tuple[int, ...] = tuple(
            i * self.epoch_length for i in range(1, self.halving_epochs)
        )
        self.last_epoch_length = self.total_blocks - (self.halving_epochs - 1) * self.epoch_length

        # Geometric series sum S = sum_{k=0..H-1} 1/2^k
        self.series_sum = sum(math.ldexp(1.0, -k) for k in range(self.halving_epochs))
        self.r0 = self.total_emission / (self.epoch_length * self.series_sum)

        self._emitted_total = 0.0
        self.lock = threading.RLock()

        logger.debug(
            f"Emission schedule: total_blocks={self.total_blocks} "
            f"epoch_length={self.epoch_length} r0={self.r0} "
            f"halving_heights={list(self.halving_heights)}"
        )

    @property
    def emitted_total(self) -> float:
        return self._emitted_total

    @property
    def remaining(self) -> float:
        return max(0.0, self.total_emission - self._emitted_total)

    def epoch_index_of(self, height: int) -> int:
        """Epoch of the next block given the current chain height.

        A boundary height belongs to the new epoch.
        """
        if height < 0:
            raise ValueError(f"Height cannot be negative: {height}")
        return bisect_right(self.halving_heights, height)

    def _reward_for_epoch(self, epoch: int) -> float:
        # ldexp underflows to 0.0 for deep epochs where r0 / 2**epoch overflows
        return math.ldexp(self.r0, -epoch)

    def current_reward(self, height: int) -> float:
        """Unclipped subsidy for the block mined on top of ``height``"""
        return self._reward_for_epoch(self.epoch_index_of(height))

    def clip_to_total(self, proposed_reward: float) -> float:
        """Cap a proposed reward at the remaining emission budget"""
        return min(proposed_reward, self.remaining)

    def increment_emitted(self, amount: float) -> None:
        """Record an accepted, already clipped subsidy"""
        if amount < 0:
            raise OverEmissionError(f"Emitted amount cannot be negative: {amount}")
        if amount > self.remaining:
            raise OverEmissionError(
                f"Amount {amount} exceeds remaining emission {self.remaining}; "
                f"clip_to_total must run first"
            )
        self._emitted_total += amount

    def has_ended(self, height: int) -> bool:
        """True once the budget is spent or the block cap is reached"""
        return self._emitted_total >= self.total_emission or height >= self.total_blocks

    def next_halving_height(self, height: int) -> Optional[int]:
        epoch = self.epoch_index_of(height)
        if epoch >= self.halving_epochs - 1:
            return None
        return self.halving_heights[epoch]

    def telemetry(self, height: int) -> EmissionTelemetry:
        epoch = self.epoch_index_of(height)
        next_height = self.next_halving_height(height)
        return EmissionTelemetry(
            height=height,
            current_reward=self._reward_for_epoch(epoch),
            emitted_total=self._emitted_total,
            remaining=self.remaining,
            blocks_remaining=max(0, self.total_blocks - height),
            next_halving_in=max(0, next_height - height) if next_height is not None else None,
            epoch_index=epoch,
            epoch_length=self.epoch_length,
            last_epoch_length=self.last_epoch_length,
            total_blocks=self.total_blocks,
            halving_heights=self.halving_heights,
            r0=self.r0,
            halving_epochs=self.halving_epochs,
            total_emission=self.total_emission
        )

    def preview(self) -> EmissionsPreview:
        return EmissionsPreview(
            total_blocks=self.total_blocks,
            epoch_length=self.epoch_length,
            r0=self.r0,
            halving_heights=self.halving_heights,
            total_emission=self.total_emission
        )

    def __str__(self) -> str:
        return (
            f"EmissionsSchedule(total_blocks={self.total_blocks}, "
            f"epochs={self.halving_epochs}, r0={self.r0:.6f}, "
            f"emitted={self._emitted_total:.2f}/{self.total_emission})"
        )
