"""
Deduplication and time-ordering of events gathered in one tick.
"""

from typing import Iterable, List, Set

from .sources import LogEvent


class EventMerger:
    """Remembers every event id already emitted and merges new events by time.
    
    The seen set grows for the lifetime of the merger and is never evicted.
    Lookback windows of consecutive ticks overlap, so repeats are expected
    here and are the only place they get filtered out.
    """
    
    def __init__(self):
        self.seen: Set[str] = set()
    
    def merge(self, events: Iterable[LogEvent]) -> List[LogEvent]:
        """
        Drop already-seen events and return the rest sorted by timestamp.
        
        Events sharing a timestamp keep their arrival order.
        """
        fresh = []
        for event in events:
            if event.event_id in self.seen:
                continue
            self.seen.add(event.event_id)
            fresh.append(event)
        
        fresh.sort(key=lambda event: event.timestamp)
        return fresh
    
    def __len__(self) -> int:
        return len(self.seen)
    
    def __contains__(self, event_id: object) -> bool:
        return event_id in self.seen
