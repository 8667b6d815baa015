# File: src/seasonchain/api/__init__.py
from .server import create_app

__all__ = ['create_app']
