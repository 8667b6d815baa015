# File: src/seasonchain/api/dependencies.py
from fastapi import Request

from ..node import SeasonNode

def get_node(request: Request) -> SeasonNode:
    return request.app.state.node
