# src/seasonchain/__init__.py
from .emissions import EmissionConfig, EmissionsSchedule
from .chain import BlockProductionLoop, ChainState, Block
from .ledger import AccountStore
from .events import EventBus
from .node import SeasonNode

__version__ = "0.1.0"

__all__ = [
    'EmissionConfig', 'EmissionsSchedule', 'BlockProductionLoop', 'ChainState',
    'Block', 'AccountStore', 'EventBus', 'SeasonNode'
]
