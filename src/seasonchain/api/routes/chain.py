# File: src/seasonchain/api/routes/chain.py
import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, WebSocket, WebSocketDisconnect

from ..dependencies import get_node
from ..models import Block, BlockPage, EmissionsPreview, Health, Telemetry
from ...exceptions import BlockNotFoundError
from ...node import SeasonNode
from ...utils.config import Config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1")

@router.get("/health", response_model=Health)
def health(node: SeasonNode = Depends(get_node)):
    return Health(
        status="ok",
        timestamp=node.clock.now(),
        game_time=node.clock.game_time(),
        season_ended=node.producer.season_ended
    )

@router.get("/telemetry", response_model=Telemetry)
def get_telemetry(
    x_session_id: Optional[str] = Header(None),
    node: SeasonNode = Depends(get_node)
):
    return Telemetry(**node.producer.telemetry(x_session_id).to_dict())

@router.get("/blocks", response_model=BlockPage)
def get_blocks(
    cursor: Optional[int] = Query(None, ge=0),
    limit: int = Query(Config.DEFAULT_PAGE_SIZE, ge=1, le=Config.MAX_PAGE_SIZE),
    node: SeasonNode = Depends(get_node)
):
    blocks, next_cursor = node.chain_state.get_blocks(cursor, limit)
    return BlockPage(
        blocks=[Block(**block.to_dict()) for block in blocks],
        next_cursor=next_cursor,
        has_more=next_cursor is not None
    )

@router.get("/blocks/{height}", response_model=Block)
def get_block(height: int, node: SeasonNode = Depends(get_node)):
    try:
        block = node.chain_state.get_block(height)
    except BlockNotFoundError:
        raise HTTPException(status_code=404, detail="Block not found")
    return Block(**block.to_dict())

@router.get("/emissions/preview", response_model=EmissionsPreview)
def get_emissions_preview(node: SeasonNode = Depends(get_node)):
    return EmissionsPreview(**node.schedule.preview().to_dict())

async def stop_sender(sender: asyncio.Task) -> None:
    """Cancel a forwarding task and collect its outcome, including a failed send"""
    sender.cancel()
    await asyncio.gather(sender, return_exceptions=True)

@router.websocket("/ws")
async def stream_events(websocket: WebSocket):
    """Push block and telemetry events to one client"""
    node: SeasonNode = websocket.app.state.node
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue(maxsize=Config.WS_QUEUE_SIZE)

    def offer(message):
        if queue.full():
            logger.warning("Client queue full, dropping event")
            return
        queue.put_nowait(message)

    def enqueue(event):
        loop.call_soon_threadsafe(offer, event.to_dict())

    async def forward():
        while True:
            message = await queue.get()
            await websocket.send_json(message)

    subscription = node.bus.subscribe(enqueue)
    await websocket.accept()
    sender = asyncio.create_task(forward())
    logger.info("Client connected")
    try:
        # Inbound frames are ignored; receiving detects the disconnect
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Client disconnected")
    finally:
        subscription.unsubscribe()
        await stop_sender(sender)
