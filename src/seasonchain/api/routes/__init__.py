# File: src/seasonchain/api/routes/__init__.py
from .chain import router as chain_router
from .rigs import router as rigs_router

__all__ = ['chain_router', 'rigs_router']
