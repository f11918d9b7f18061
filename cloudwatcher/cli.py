"""
Click CLI for cloudwatcher.
"""

import asyncio
import os
import signal
from typing import Optional

import click

from .config import DEFAULT_REFRESH, WatchConfig, configure_logging, parse_duration, resolve_region
from .errors import ConfigError, QueryError
from .render import EventRenderer
from .sources import LogSource
from .watcher import LogWatcher


@click.group(invoke_without_command=True)
@click.option('--region', help='Override the AWS region')
@click.option('--log-level', help='Log level (default: $CLOUDWATCHER_LOG or WARNING)')
@click.pass_context
def main(ctx, region, log_level):
    """Watch CloudWatch Logs groups from the terminal."""
    try:
        configure_logging(log_level)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint='--log-level')
    
    ctx.ensure_object(dict)
    ctx.obj['region'] = region
    
    if ctx.invoked_subcommand is None:
        click.echo("No command given")


def _log_source(ctx) -> LogSource:
    """Build the event source for the region selected on the command line."""
    try:
        region = resolve_region(ctx.obj.get('region'))
    except ConfigError as e:
        raise click.ClickException(str(e))
    return LogSource.from_region(region)


def _exit_on_interrupt() -> None:
    """Exit at once on Ctrl+C without waiting for in-flight queries."""
    signal.signal(signal.SIGINT, lambda signum, frame: os._exit(0))


@main.command('list')
@click.pass_context
def list_cmd(ctx):
    """List CloudWatch log groups."""
    source = _log_source(ctx)
    
    try:
        groups = source.list_groups()
    except QueryError as e:
        raise click.ClickException(str(e))
    
    for group in groups:
        click.echo(group)
    click.echo(f"Found {len(groups)} log groups")


@main.command('watch')
@click.argument('groups', nargs=-1)
@click.option('--refresh', default=DEFAULT_REFRESH, show_default=True, help='Refresh interval, e.g. 10s, 1m 30s')
@click.option('--color/--no-color', default=None, help='Force or disable ANSI colors (default: auto)')
@click.pass_context
def watch_cmd(ctx, groups, refresh: str, color: Optional[bool]):
    """Watch logs from one or more CloudWatch log groups."""
    if not groups:
        click.echo("No log groups to watch")
        return
    
    try:
        refresh_seconds = parse_duration(refresh)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint='--refresh')
    
    config = WatchConfig(groups=tuple(groups), refresh=refresh_seconds)
    watcher = LogWatcher(_log_source(ctx), config, renderer=EventRenderer(color=color))
    
    _exit_on_interrupt()
    asyncio.run(watcher.run())


if __name__ == "__main__":
    main()
