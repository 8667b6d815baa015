# src/seasonchain/ledger/__init__.py
from .equipment import RigTier, Rig, RIG_TIERS, decayed_quality, repair_cost
from .distribution import distribute_reward, network_weight
from .account_store import AccountStore, Participant, BurnRecord

__all__ = [
    'RigTier', 'Rig', 'RIG_TIERS', 'decayed_quality', 'repair_cost',
    'distribute_reward', 'network_weight',
    'AccountStore', 'Participant', 'BurnRecord'
]
