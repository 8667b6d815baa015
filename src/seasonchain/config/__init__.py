# src/seasonchain/config/__init__.py
from .simulator_config import SimulatorConfig, MiningConfig

__all__ = ['SimulatorConfig', 'MiningConfig']
