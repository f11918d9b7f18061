"""
Runtime configuration: refresh durations, region resolution and logging setup.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError

from .errors import ConfigError

DEFAULT_REFRESH = "10s"
LOOKBACK_SECONDS = 600
PAGE_LIMIT = 100
FALLBACK_REGION = "eu-west-1"
LOG_LEVEL_ENV = "CLOUDWATCHER_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Seconds per unit. Units are case-sensitive: "M" is not minutes.
_UNITS = {
    "ns": 1e-9, "nsec": 1e-9,
    "us": 1e-6, "usec": 1e-6,
    "ms": 1e-3, "msec": 1e-3, "millis": 1e-3,
    "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
    "m": 60, "min": 60, "mins": 60, "minute": 60, "minutes": 60,
    "h": 3600, "hr": 3600, "hrs": 3600, "hour": 3600, "hours": 3600,
    "d": 86400, "day": 86400, "days": 86400,
}

_SEGMENT = re.compile(r"(\d+(?:\.\d+)?)\s*([a-zA-Z]+)")
_DURATION = re.compile(r"\s*(?:\d+(?:\.\d+)?\s*[a-zA-Z]+\s*)+")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatchConfig:
    """Settings for one `watch` session."""
    groups: Tuple[str, ...]
    refresh: float = 10.0  # seconds
    lookback: float = LOOKBACK_SECONDS
    page_limit: int = PAGE_LIMIT


def parse_duration(text: str) -> float:
    """
    Parse a human duration such as "10s", "1m 30s" or "500ms".
    
    Args:
        text: Duration string made of one or more <number><unit> segments
        
    Returns:
        Duration in seconds
        
    Raises:
        ConfigError: If the string is not a valid, non-zero duration
    """
    if not text or not _DURATION.fullmatch(text):
        raise ConfigError(f"Invalid duration: {text!r}. Expected e.g. '10s', '1m 30s', '500ms'")
    
    total = 0.0
    for amount, unit in _SEGMENT.findall(text):
        factor = _UNITS.get(unit)
        if factor is None:
            raise ConfigError(f"Invalid duration: {text!r}. Unknown unit '{unit}'")
        total += float(amount) * factor
    
    if total <= 0:
        raise ConfigError(f"Invalid duration: {text!r}. Duration must be greater than zero")
    
    return total


def resolve_region(override: Optional[str] = None) -> str:
    """
    Resolve the AWS region to query.
    
    An explicit override wins; otherwise the boto3 provider chain (environment,
    shared config, profile) is consulted, falling back to FALLBACK_REGION.
    """
    if override:
        return override
    
    try:
        region = boto3.session.Session().region_name
    except BotoCoreError as e:
        raise ConfigError(f"Could not resolve AWS region: {e}") from e
    
    if not region:
        logger.debug(f"No region configured, using {FALLBACK_REGION}")
        return FALLBACK_REGION
    return region


def configure_logging(level: Optional[str] = None) -> None:
    """Set up process-wide logging on stderr so stdout only carries events."""
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ConfigError(f"Invalid log level: {level_name}")
    
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
