"""
Error types raised by cloudwatcher.
"""

from typing import Any, Optional


class CloudWatcherError(Exception):
    """Base class for cloudwatcher errors."""


class ConfigError(CloudWatcherError):
    """Invalid startup configuration (refresh duration, region)."""


class QueryError(CloudWatcherError):
    """A CloudWatch Logs query failed. `group` is None for group listing."""

    def __init__(self, group: Optional[str], cause: BaseException):
        if group is None:
            super().__init__(f"Failed to list log groups: {cause}")
        else:
            super().__init__(f"Failed to query log group {group}: {cause}")
        self.group = group
        self.cause = cause


class TimestampError(CloudWatcherError):
    """An event timestamp could not be converted to a datetime."""

    def __init__(self, value: Any):
        super().__init__(f"Invalid event timestamp: {value!r}")
        self.value = value
