# src/seasonchain/ledger/distribution.py
from typing import Dict, Iterable

from ..utils.config import Config

def network_weight(weights: Iterable[float], floor: float = Config.NETWORK_WEIGHT_FLOOR) -> float:
    """Total weight, never below the baseline floor"""
    return max(sum(weights), floor)

def distribute_reward(amount: float, weights: Dict[str, float], total_weight: float) -> Dict[str, float]:
    """Split ``amount`` proportionally to each participant's weight.

    Participants with zero weight are left out. No remainder is
    redistributed, so shares sum to ``amount`` only up to float error (and
    to less than ``amount`` when the floor exceeds the real weight).
    """
    if total_weight <= 0:
        raise ValueError(f"Total weight must be positive, got {total_weight}")

    shares = {}
    for participant_id, weight in weights.items():
        if weight > 0:
            shares[participant_id] = amount * weight / total_weight
    return shares
