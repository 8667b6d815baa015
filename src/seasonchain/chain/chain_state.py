# src/seasonchain/chain/chain_state.py
from typing import Optional, List, Tuple
from collections import deque
import logging

from .block import Block, GENESIS_PREVIOUS_HASH
from ..exceptions import BlockNotFoundError
from ..utils.config import Config

logger = logging.getLogger(__name__)

EMA_ALPHA = 0.1

class ChainState:
    """Height, difficulty and block-time statistics plus a recent block buffer.

    The buffer is for display only; emission accounting lives in the
    schedule and never reads it.
    """

    def __init__(
        self,
        target_block_interval: float,
        initial_difficulty: float = Config.INITIAL_DIFFICULTY,
        retarget_blocks: int = Config.DIFFICULTY_RETARGET_BLOCKS,
        max_adjustment: float = Config.MAX_DIFFICULTY_ADJUSTMENT,
        max_blocks_in_memory: int = Config.MAX_BLOCKS_IN_MEMORY,
        start_time: float = 0.0
    ):
        self.target_block_interval = target_block_interval
        self.retarget_blocks = retarget_blocks
        self.max_adjustment = max_adjustment

        self.height = 0
        self.difficulty = float(initial_difficulty)
        self.avg_block_time = float(target_block_interval)
        self.last_block_time = start_time
        self.blocks: deque = deque(maxlen=max_blocks_in_memory)

    @property
    def latest_block(self) -> Optional[Block]:
        return self.blocks[-1] if self.blocks else None

    @property
    def tip_hash(self) -> str:
        latest = self.latest_block
        return latest.hash if latest else GENESIS_PREVIOUS_HASH

    @property
    def blocks_until_retarget(self) -> int:
        return self.retarget_blocks - (self.height % self.retarget_blocks)

    def append(self, block: Block) -> None:
        """Append the block at the next height; oldest buffered block drops out"""
        if block.height != self.height + 1:
            raise ValueError(f"Expected block at height {self.height + 1}, got {block.height}")
        self.blocks.append(block)
        self.height = block.height
        self.last_block_time = block.timestamp

    def update_avg_block_time(self, observed_interval: float) -> float:
        """Exponential moving average of inter-block time"""
        self.avg_block_time = (1 - EMA_ALPHA) * self.avg_block_time + EMA_ALPHA * observed_interval
        return self.avg_block_time

    def should_retarget(self) -> bool:
        return self.height > 0 and self.height % self.retarget_blocks == 0

    def retarget_difficulty(self) -> Optional[float]:
        """Adjust difficulty from the buffered window at retarget heights.

        Returns the applied ratio, or None when no retarget happened.
        """
        if not self.should_retarget():
            return None

        window = min(self.retarget_blocks, len(self.blocks))
        intervals = window - 1
        if intervals < 1:
            return None

        oldest = self.blocks[-window]
        newest = self.blocks[-1]
        actual_time = newest.timestamp - oldest.timestamp
        expected_time = self.target_block_interval * intervals

        if actual_time <= 0:
            ratio = self.max_adjustment
        else:
            ratio = expected_time / actual_time
        clamped_ratio = max(1 / self.max_adjustment, min(self.max_adjustment, ratio))

        self.difficulty *= clamped_ratio
        logger.info(f"Difficulty retarget at height {self.height}: {clamped_ratio:.2f}x -> {self.difficulty:.2f}")
        return clamped_ratio

    def get_block(self, height: int) -> Block:
        """Get a buffered block by height"""
        for block in reversed(self.blocks):
            if block.height == height:
                return block
        raise BlockNotFoundError(f"Block {height} not found")

    def get_blocks(self, cursor: Optional[int] = None, limit: int = Config.DEFAULT_PAGE_SIZE) -> Tuple[List[Block], Optional[int]]:
        """Newest-first page of blocks below ``cursor``.

        Returns the page and the cursor for the next page, or None when the
        buffer holds nothing older.
        """
        if limit <= 0:
            return [], cursor

        page: List[Block] = []
        for block in reversed(self.blocks):
            if cursor is not None and block.height >= cursor:
                continue
            page.append(block)
            if len(page) >= limit:
                break

        next_cursor = None
        if page and self.blocks and page[-1].height > self.blocks[0].height:
            next_cursor = page[-1].height
        return page, next_cursor

    def __len__(self) -> int:
        return len(self.blocks)
