# src/seasonchain/chain/__init__.py
from .block import Block, Transaction, GENESIS_PREVIOUS_HASH
from .chain_state import ChainState
from .production import BlockProductionLoop, NetworkTelemetry

__all__ = [
    'Block', 'Transaction', 'GENESIS_PREVIOUS_HASH', 'ChainState',
    'BlockProductionLoop', 'NetworkTelemetry'
]
