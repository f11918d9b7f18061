"""
The polling loop: query all groups, merge new events, render, sleep, repeat.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, List, Optional

from .config import WatchConfig
from .fanout import fetch_all
from .merge import EventMerger
from .render import EventRenderer
from .sources import LogEvent, LogSource

logger = logging.getLogger(__name__)


class LogWatcher:
    """Tails a fixed set of log groups until the process is stopped."""
    
    def __init__(self, source: LogSource, config: WatchConfig,
                 renderer: Optional[EventRenderer] = None,
                 clock: Callable[[], float] = time.time,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.source = source
        self.config = config
        self.renderer = renderer or EventRenderer()
        self.merger = EventMerger()
        self.clock = clock
        self.sleep = sleep
    
    def start_time_ms(self) -> int:
        """Lower bound for this tick's queries: now minus the lookback window."""
        return int(self.clock() - self.config.lookback) * 1000
    
    async def tick(self) -> List[LogEvent]:
        """Run one poll cycle and return the events that were rendered."""
        start_time = self.start_time_ms()
        events = await fetch_all(self.source, self.config.groups, start_time)
        new_events = self.merger.merge(events)
        logger.debug(
            f"Queried {len(self.config.groups)} groups since {start_time}: "
            f"{len(events)} events, {len(new_events)} new, {len(self.merger)} seen"
        )
        
        self.renderer.render(new_events)
        return new_events
    
    async def run(self, max_ticks: Optional[int] = None) -> None:
        """
        Poll forever, sleeping `config.refresh` seconds between ticks.
        
        Args:
            max_ticks: Stop after this many ticks (None runs until interrupted)
        """
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            await self.tick()
            ticks += 1
            await self.sleep(self.config.refresh)
