# File: src/seasonchain/api/server.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import chain_router, rigs_router
from ..node import SeasonNode

def create_app(node: SeasonNode, start_loop: bool = True) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if start_loop:
            node.start()
        yield
        await node.stop()

    app = FastAPI(title="seasonchain API", lifespan=lifespan)
    app.state.node = node

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(chain_router)
    app.include_router(rigs_router)

    return app
