# src/seasonchain/ledger/equipment.py
from typing import Dict, Any
from dataclasses import dataclass, field, replace
import math

from ..utils.config import Config

SECONDS_PER_HOUR = 3600

@dataclass(frozen=True)
class RigTier:
    """Catalogue entry for a mining rig"""
    tier_id: str
    name: str
    hashrate: float  # TH/s
    uptime: float
    category: str
    description: str = ""
    max_quality: float = Config.MAX_QUALITY
    price: float = 0.0

    def priced(self, current_reward: float) -> 'RigTier':
        """Tier priced in units of the current block reward"""
        units = Config.PRICE_UNITS_PER_TIER[self.category]
        return replace(self, price=float(math.floor(units * current_reward + 0.5)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.tier_id,
            "name": self.name,
            "hashrate": self.hashrate,
            "uptime": self.uptime,
            "category": self.category,
            "description": self.description,
            "max_quality": self.max_quality,
            "price": self.price
        }

RIG_TIERS = (
    RigTier("antminer-s9", "Antminer S9", 13.5, 0.95, "basic",
            "Entry-level mining rig from 2016."),
    RigTier("antminer-s19-pro", "Antminer S19 Pro", 110.0, 0.97, "advanced",
            "High-performance mining rig."),
    RigTier("whatsminer-m30s", "WhatsMiner M30S++", 112.0, 0.94, "professional",
            "Professional-grade mining rig."),
    RigTier("golden-dragon", "Golden Dragon Miner", 250.0, 0.99, "legendary",
            "Legendary mining rig with premium components."),
)

def decayed_quality(quality: float, hours_elapsed: float, decay_per_hour: float = Config.QUALITY_DECAY_PER_HOUR) -> float:
    """Linear wear since the last maintenance, floored at zero"""
    return max(0.0, quality - max(0.0, hours_elapsed) * decay_per_hour)

def repair_cost(quality: float, purchase_price: float, cost_rate: float = Config.REPAIR_COST_RATE) -> int:
    """Cost to restore full quality, rounded up to a whole token"""
    quality_loss = max(0.0, Config.MAX_QUALITY - quality)
    return math.ceil(quality_loss * purchase_price * cost_rate)

@dataclass
class Rig:
    """A rig owned by a participant.

    ``quality`` is the value at ``last_maintenance_at`` (game seconds); the
    current value is derived from elapsed game time.
    """
    rig_id: str
    owner_id: str
    tier: RigTier
    purchase_price: float
    purchased_at: float
    last_maintenance_at: float
    quality: float = Config.MAX_QUALITY
    is_active: bool = True
    decay_per_hour: float = Config.QUALITY_DECAY_PER_HOUR

    @property
    def uptime(self) -> float:
        return self.tier.uptime

    def current_quality(self, now: float) -> float:
        hours = (now - self.last_maintenance_at) / SECONDS_PER_HOUR
        return decayed_quality(self.quality, hours, self.decay_per_hour)

    def effective_rate(self, now: float) -> float:
        """Nominal hashrate scaled by uptime and condition"""
        if not self.is_active:
            return 0.0
        quality = self.current_quality(now)
        if quality <= 0:
            return 0.0
        return self.tier.hashrate * self.uptime * (quality / 100)

    def repair_cost(self, now: float) -> int:
        return repair_cost(self.current_quality(now), self.purchase_price)

    def repair(self, now: float) -> None:
        """Reset quality and the decay clock"""
        self.quality = self.tier.max_quality
        self.last_maintenance_at = now

    def to_dict(self, now: float) -> Dict[str, Any]:
        return {
            "id": self.rig_id,
            "owner_id": self.owner_id,
            "tier": self.tier.to_dict(),
            "purchase_price": self.purchase_price,
            "purchased_at": self.purchased_at,
            "last_maintenance_at": self.last_maintenance_at,
            "quality": self.current_quality(now),
            "is_active": self.is_active,
            "effective_rate": self.effective_rate(now)
        }
