# src/seasonchain/events/__init__.py
from .publisher import Event, EventBus, Subscription, BLOCK_EVENT, TELEMETRY_EVENT

__all__ = ['Event', 'EventBus', 'Subscription', 'BLOCK_EVENT', 'TELEMETRY_EVENT']
