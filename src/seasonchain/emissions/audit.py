# src/seasonchain/emissions/audit.py
from dataclasses import dataclass, asdict
from typing import Dict, Any
import logging

from .schedule import EmissionConfig, EmissionsSchedule

logger = logging.getLogger(__name__)

# Relative to total emission. When total_blocks is an exact multiple of the
# epoch count, float drift leaves the sum slightly short of the total and the
# block cap ends the season (about 2e-4 short for 7 days of 10s blocks with
# 210M and one epoch), which an absolute 1e-6 would reject.
CONSERVATION_TOLERANCE = 1e-9
HALVING_TOLERANCE = 1e-6

@dataclass
class EmissionAudit:
    """Outcome of replaying a full season against a fresh schedule"""
    total_blocks: int
    epoch_length: int
    r0: float
    rewarded_blocks: int
    final_height: int
    emitted_sum: float
    total_emission: float
    conservation_ok: bool
    halving_ok: bool

    @property
    def passed(self) -> bool:
        return self.conservation_ok and self.halving_ok

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["passed"] = self.passed
        return data

def audit_emissions(config: EmissionConfig) -> EmissionAudit:
    """Walk every height until the season ends and check the invariants.

    Uses its own schedule so a running season is never touched.
    """
    schedule = EmissionsSchedule(config)
    height = 0
    emitted_sum = 0.0
    rewarded_blocks = 0

    while not schedule.has_ended(height):
        reward = schedule.clip_to_total(schedule.current_reward(height))
        schedule.increment_emitted(reward)
        emitted_sum += reward
        if reward > 0:
            rewarded_blocks += 1
        height += 1

    tolerance = CONSERVATION_TOLERANCE * schedule.total_emission
    conservation_ok = (
        abs(emitted_sum - schedule.total_emission) <= tolerance
        and schedule.emitted_total <= schedule.total_emission
    )

    # Each boundary reward is exactly half of the previous epoch's
    halving_ok = True
    previous = schedule.current_reward(0)
    for boundary in schedule.halving_heights:
        reward = schedule.current_reward(boundary)
        if abs(reward * 2 - previous) > HALVING_TOLERANCE:
            halving_ok = False
            break
        previous = reward

    audit = EmissionAudit(
        total_blocks=schedule.total_blocks,
        epoch_length=schedule.epoch_length,
        r0=schedule.r0,
        rewarded_blocks=rewarded_blocks,
        final_height=height,
        emitted_sum=emitted_sum,
        total_emission=schedule.total_emission,
        conservation_ok=conservation_ok,
        halving_ok=halving_ok
    )
    if audit.passed:
        logger.info(f"Emission audit passed: sum={emitted_sum} blocks={height}")
    else:
        logger.warning(f"Emission audit failed: {audit.to_dict()}")
    return audit
