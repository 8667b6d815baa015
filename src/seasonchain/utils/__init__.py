# src/seasonchain/utils/__init__.py
from .config import Config
from .clock import SimulationClock

__all__ = ['Config', 'SimulationClock']
