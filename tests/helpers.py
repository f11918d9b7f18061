"""
Shared fakes for watcher tests.
"""

from typing import Dict, List

from cloudwatcher.errors import QueryError
from cloudwatcher.sources import LogEvent, to_datetime


def make_event(event_id: str, timestamp_ms: int, message: str = "", group: str = "svc-a") -> LogEvent:
    return LogEvent(event_id=event_id, group=group, timestamp=to_datetime(timestamp_ms), message=message)


class FakeSource:
    """Returns queued per-group responses; an Exception in the queue is raised."""
    
    def __init__(self, responses: Dict[str, List]):
        self.responses = {group: list(queue) for group, queue in responses.items()}
        self.calls = []
    
    def fetch_events(self, group, start_time_ms):
        self.calls.append((group, start_time_ms))
        queue = self.responses.get(group) or [[]]
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, Exception):
            raise result
        return list(result)


def failure(group: str) -> QueryError:
    return QueryError(group, RuntimeError("connection reset"))
