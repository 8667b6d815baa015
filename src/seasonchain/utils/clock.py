# src/seasonchain/utils/clock.py
from datetime import datetime
from typing import Callable, Optional
import time

from .config import Config

class SimulationClock:
    """Real time for block timestamps plus an accelerated game clock.

    The game clock starts at ``game_start`` when the clock is created and runs
    ``acceleration`` times faster than the time source. Equipment wear is
    measured on the game clock.
    """

    def __init__(
        self,
        time_source: Callable[[], float] = time.time,
        acceleration: float = Config.TIME_ACCELERATION,
        game_start: Optional[float] = None
    ):
        self.time_source = time_source
        self.acceleration = acceleration
        if game_start is None:
            game_start = datetime.fromisoformat(Config.GAME_START).timestamp()
        self.game_start = game_start
        self.started_at = time_source()

    def now(self) -> float:
        """Real time in seconds"""
        return self.time_source()

    def game_time(self) -> float:
        """Game time in seconds since the unix epoch"""
        elapsed = self.time_source() - self.started_at
        return self.game_start + elapsed * self.acceleration
