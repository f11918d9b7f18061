"""
Concurrent per-tick queries across all watched log groups.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from .sources import LogEvent, LogSource

logger = logging.getLogger(__name__)


async def fetch_all(source: LogSource, groups: Sequence[str], start_time_ms: int) -> List[LogEvent]:
    """
    Query every group concurrently and collect the events of those that succeed.
    
    Each tick gets its own pool with one worker per group, so all queries are
    in flight before any completes and every one of them is waited for. A
    failing group is logged and contributes no events; it never affects the
    other groups.
    
    Args:
        source: Event source used for the queries
        groups: Log group names to query
        start_time_ms: Shared lower bound, milliseconds since the epoch
        
    Returns:
        Events from all successful groups, flattened
    """
    if not groups:
        return []
    
    loop = asyncio.get_running_loop()
    pool = ThreadPoolExecutor(max_workers=len(groups), thread_name_prefix="cloudwatcher-query")
    try:
        results = await asyncio.gather(
            *(loop.run_in_executor(pool, source.fetch_events, group, start_time_ms) for group in groups),
            return_exceptions=True
        )
    finally:
        pool.shutdown(wait=False)
    
    events: List[LogEvent] = []
    for group, result in zip(groups, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning(f"Ignoring failed query for {group}: {result}")
            continue
        events.extend(result)
    
    return events
