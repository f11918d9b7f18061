"""
Terminal rendering of log events with severity colors.
"""

from dataclasses import dataclass
from datetime import timezone
from typing import Callable, Iterable, List, Optional

import click

from .sources import LogEvent

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S:%f"


@dataclass(frozen=True)
class StyleRule:
    """Colors a message when it contains `substring` (case-sensitive)."""
    substring: str
    color: str


# Evaluated in order, first match wins.
DEFAULT_RULES = [
    StyleRule("INFO", "blue"),
    StyleRule("ERROR", "red"),
    StyleRule("WARN", "yellow"),
]


class EventRenderer:
    """Formats events as colored lines and writes them to stdout."""
    
    def __init__(self, rules: Optional[List[StyleRule]] = None, color: Optional[bool] = None,
                 echo: Callable[..., None] = click.echo):
        self.rules = list(DEFAULT_RULES if rules is None else rules)
        self.color = color
        self.echo = echo
    
    def classify(self, message: str) -> Optional[str]:
        """Return the color of the first rule matching the message, or None."""
        for rule in self.rules:
            if rule.substring in message:
                return rule.color
        return None
    
    def format_event(self, event: LogEvent) -> str:
        """Build the `<timestamp> <group>: <message>` line for an event."""
        timestamp = event.timestamp.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
        message_color = self.classify(event.message)
        message = click.style(event.message, fg=message_color) if message_color else event.message
        
        return f"{click.style(timestamp, fg='green')} {click.style(event.group, fg='magenta')}: {message}"
    
    def render(self, events: Iterable[LogEvent]) -> int:
        """Write one line per event in the given order; returns the line count."""
        count = 0
        for event in events:
            self.echo(self.format_event(event), color=self.color)
            count += 1
        return count
