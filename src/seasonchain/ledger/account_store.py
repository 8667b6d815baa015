# src/seasonchain/ledger/account_store.py
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
import threading
import logging
import uuid

from .equipment import Rig, RigTier, RIG_TIERS
from .distribution import network_weight
from ..exceptions import (
    InsufficientBalanceError,
    UnknownRigTierError,
    RigNotFoundError,
    DuplicateRequestError,
)
from ..utils.config import Config

logger = logging.getLogger(__name__)

@dataclass
class Participant:
    """Account holding a balance and a set of rigs"""
    participant_id: str
    user_id: str
    balance: float
    created_at: float
    total_earned: float = 0.0
    rigs: List[Rig] = field(default_factory=list)

    def weight(self, now: float) -> float:
        return sum(rig.effective_rate(now) for rig in self.rigs)

    def to_dict(self, now: float) -> Dict[str, Any]:
        return {
            "id": self.user_id,
            "participant_id": self.participant_id,
            "balance": self.balance,
            "total_earned": self.total_earned,
            "created_at": self.created_at,
            "weight": self.weight(now),
            "rigs": [rig.to_dict(now) for rig in self.rigs]
        }

@dataclass(frozen=True)
class BurnRecord:
    """Tokens removed from circulation"""
    burn_id: str
    user_id: str
    amount: float
    reason: str
    timestamp: float
    idempotency_key: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

class AccountStore:
    """In-memory ledger of participants, rigs and burns.

    Implements the ledger side of block production: weights come from rig
    effective rates, and :meth:`credit_participant` books each reward share.
    """

    def __init__(
        self,
        starting_balance: float = Config.STARTING_BALANCE,
        initial_circulating: float = Config.INITIAL_CIRCULATING,
        weight_floor: float = Config.NETWORK_WEIGHT_FLOOR,
        tiers=RIG_TIERS
    ):
        self.starting_balance = starting_balance
        self.initial_circulating = initial_circulating
        self.weight_floor = weight_floor
        self.tiers: Dict[str, RigTier] = {tier.tier_id: tier for tier in tiers}

        self.participants: Dict[str, Participant] = {}
        self.burn_ledger: List[BurnRecord] = []
        self.global_burned = 0.0
        self._processed_keys: Dict[str, str] = {}  # idempotency key -> burn id
        self._lock = threading.RLock()

    @property
    def circulating_supply(self) -> float:
        return self.initial_circulating - self.global_burned

    def get_participant(self, participant_id: str, now: float = 0.0) -> Participant:
        """Get a participant, opening an account with the starting balance on first use"""
        with self._lock:
            participant = self.participants.get(participant_id)
            if participant is None:
                participant = Participant(
                    participant_id=participant_id,
                    user_id=str(uuid.uuid4()),
                    balance=self.starting_balance,
                    created_at=now
                )
                self.participants[participant_id] = participant
                logger.info(f"Created participant {participant_id}")
            return participant

    def participant_ids(self) -> List[str]:
        with self._lock:
            return list(self.participants.keys())

    def credit_participant(self, participant_id: str, amount: float) -> None:
        """Credit a reward share to balance and lifetime earnings"""
        with self._lock:
            participant = self.get_participant(participant_id)
            participant.balance += amount
            participant.total_earned += amount

    def get_participant_weight(self, participant_id: str, now: float) -> float:
        with self._lock:
            participant = self.participants.get(participant_id)
            return participant.weight(now) if participant else 0.0

    def get_total_network_weight(self, now: float) -> float:
        with self._lock:
            return network_weight(
                (p.weight(now) for p in self.participants.values()),
                self.weight_floor
            )

    def rig_tiers(self, current_reward: float) -> List[RigTier]:
        """Catalogue with prices pegged to the current reward"""
        return [tier.priced(current_reward) for tier in self.tiers.values()]

    def _burn(self, participant: Participant, amount: float, reason: str, now: float,
              idempotency_key: Optional[str] = None, **metadata) -> BurnRecord:
        participant.balance -= amount
        record = BurnRecord(
            burn_id=str(uuid.uuid4()),
            user_id=participant.user_id,
            amount=amount,
            reason=reason,
            timestamp=now,
            idempotency_key=idempotency_key,
            metadata=metadata
        )
        self.burn_ledger.append(record)
        self.global_burned += amount
        if idempotency_key:
            self._processed_keys[idempotency_key] = record.burn_id
        return record

    def buy_rig(
        self,
        participant_id: str,
        tier_id: str,
        current_reward: float,
        now: float,
        idempotency_key: Optional[str] = None
    ) -> Rig:
        """Buy a rig at the dynamic price, burning the payment"""
        with self._lock:
            base_tier = self.tiers.get(tier_id)
            if base_tier is None:
                raise UnknownRigTierError(f"Rig tier not found: {tier_id}")

            if idempotency_key and idempotency_key in self._processed_keys:
                raise DuplicateRequestError(f"Transaction already processed: {idempotency_key}")

            tier = base_tier.priced(current_reward)
            participant = self.get_participant(participant_id, now)
            if participant.balance < tier.price:
                raise InsufficientBalanceError(tier.price, participant.balance)

            self._burn(participant, tier.price, "rig_purchase", now,
                       idempotency_key=idempotency_key, tier_id=tier.tier_id)

            rig = Rig(
                rig_id=str(uuid.uuid4()),
                owner_id=participant.user_id,
                tier=tier,
                purchase_price=tier.price,
                purchased_at=now,
                last_maintenance_at=now,
                quality=tier.max_quality
            )
            participant.rigs.append(rig)
            logger.info(f"Participant {participant_id} bought {tier.name} for {tier.price}")
            return rig

    def find_rig(self, participant_id: str, rig_id: str) -> Rig:
        with self._lock:
            participant = self.participants.get(participant_id)
            if participant:
                for rig in participant.rigs:
                    if rig.rig_id == rig_id:
                        return rig
            raise RigNotFoundError(f"Rig not found: {rig_id}")

    def repair_rig(self, participant_id: str, rig_id: str, now: float) -> float:
        """Restore a rig to full quality, burning the cost. Returns the cost."""
        with self._lock:
            rig = self.find_rig(participant_id, rig_id)
            participant = self.participants[participant_id]
            cost = rig.repair_cost(now)
            if participant.balance < cost:
                raise InsufficientBalanceError(cost, participant.balance)

            if cost > 0:
                self._burn(participant, float(cost), "rig_repair", now, rig_id=rig_id)
            rig.repair(now)
            logger.info(f"Repaired rig {rig_id} for {participant_id}, burned {cost}")
            return float(cost)

    def leaderboard(self, limit: int = 10, now: float = 0.0) -> List[Dict[str, Any]]:
        with self._lock:
            entries = [
                {
                    "user_id": p.user_id,
                    "participant_id": p.participant_id,
                    "total_earned": p.total_earned,
                    "weight": p.weight(now)
                }
                for p in self.participants.values()
            ]
        entries.sort(key=lambda entry: entry["total_earned"], reverse=True)
        return entries[:limit]
