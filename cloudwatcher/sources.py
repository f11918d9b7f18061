"""
CloudWatch Logs event source.

Wraps the boto3 `logs` client behind the two queries the watcher needs:
listing log groups and fetching recent events from one group.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import PAGE_LIMIT
from .errors import QueryError, TimestampError

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class LogEvent:
    """A single log line from one log group."""
    event_id: str
    group: str
    timestamp: datetime
    message: str


def to_datetime(timestamp_ms: Any) -> datetime:
    """
    Convert a CloudWatch millisecond epoch timestamp to a UTC datetime.
    
    Raises:
        TimestampError: If the value is not numeric or out of range
    """
    try:
        return EPOCH + timedelta(milliseconds=timestamp_ms)
    except (TypeError, ValueError, OverflowError) as e:
        raise TimestampError(timestamp_ms) from e


class LogSource:
    """Queries CloudWatch Logs groups."""
    
    def __init__(self, client, page_limit: int = PAGE_LIMIT):
        self.client = client
        self.page_limit = page_limit
    
    @classmethod
    def from_region(cls, region: str, page_limit: int = PAGE_LIMIT) -> "LogSource":
        """Create a source backed by a boto3 logs client for the region."""
        return cls(boto3.client('logs', region_name=region), page_limit=page_limit)
    
    def list_groups(self) -> List[str]:
        """
        List the names of all log groups in the region.
        
        Raises:
            QueryError: If the describe call fails
        """
        names = []
        try:
            paginator = self.client.get_paginator('describe_log_groups')
            for page in paginator.paginate():
                for group in page.get('logGroups', []):
                    names.append(group.get('logGroupName', ''))
        except (ClientError, BotoCoreError) as e:
            raise QueryError(None, e) from e
        
        return names
    
    def fetch_events(self, group: str, start_time_ms: int) -> List[LogEvent]:
        """
        Fetch up to one page of events at or after start_time_ms from a group.
        
        Args:
            group: Log group name
            start_time_ms: Lower bound, milliseconds since the epoch
            
        Returns:
            Events in the order the service returned them
            
        Raises:
            QueryError: If the query fails for any reason
        """
        try:
            response = self.client.filter_log_events(
                logGroupName=group,
                startTime=start_time_ms,
                limit=self.page_limit
            )
        except (ClientError, BotoCoreError) as e:
            raise QueryError(group, e) from e
        
        events = []
        for raw in response.get('events') or []:
            try:
                events.append(self._to_event(group, raw))
            except TimestampError as e:
                logger.warning(f"Skipping event {raw.get('eventId', '')} from {group}: {e}")
        
        return events
    
    @staticmethod
    def _to_event(group: str, raw: Dict[str, Any]) -> LogEvent:
        timestamp = raw.get('timestamp')
        return LogEvent(
            event_id=raw.get('eventId') or '',
            group=group,
            timestamp=to_datetime(timestamp if timestamp is not None else 0),
            message=(raw.get('message') or '').strip()
        )
