"""
Tests for the command line interface.
"""

import os
import signal
import subprocess
import sys
import time
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cloudwatcher.cli import _exit_on_interrupt, main
from cloudwatcher.errors import ConfigError, QueryError


class TestMain:
    """Test the top-level group."""
    
    def test_no_command(self):
        result = CliRunner().invoke(main, [])
        
        assert result.exit_code == 0
        assert "No command given" in result.output
    
    def test_invalid_log_level(self):
        result = CliRunner().invoke(main, ["--log-level", "chatty", "list"])
        
        assert result.exit_code == 2


class TestListCommand:
    """Test `list`."""
    
    @patch("cloudwatcher.cli.resolve_region", return_value="us-west-2")
    @patch("cloudwatcher.cli.LogSource")
    def test_lists_groups(self, log_source, resolve_region):
        log_source.from_region.return_value.list_groups.return_value = ["/aws/lambda/a", "/ecs/b"]
        
        result = CliRunner().invoke(main, ["--region", "us-west-2", "list"])
        
        assert result.exit_code == 0
        assert result.output.splitlines() == ["/aws/lambda/a", "/ecs/b", "Found 2 log groups"]
        resolve_region.assert_called_once_with("us-west-2")
        log_source.from_region.assert_called_once_with("us-west-2")
    
    @patch("cloudwatcher.cli.resolve_region", return_value="eu-west-1")
    @patch("cloudwatcher.cli.LogSource")
    def test_list_failure(self, log_source, resolve_region):
        log_source.from_region.return_value.list_groups.side_effect = QueryError(None, RuntimeError("denied"))
        
        result = CliRunner().invoke(main, ["list"])
        
        assert result.exit_code == 1
        assert "Failed to list log groups" in result.output
    
    @patch("cloudwatcher.cli.resolve_region", side_effect=ConfigError("Could not resolve AWS region: bad profile"))
    def test_region_failure(self, resolve_region):
        result = CliRunner().invoke(main, ["list"])
        
        assert result.exit_code == 1
        assert "Could not resolve AWS region" in result.output


class TestWatchCommand:
    """Test `watch`."""
    
    @patch("cloudwatcher.cli.LogWatcher")
    def test_no_groups(self, log_watcher):
        result = CliRunner().invoke(main, ["watch"])
        
        assert result.exit_code == 0
        assert "No log groups to watch" in result.output
        log_watcher.assert_not_called()
    
    @patch("cloudwatcher.cli.LogWatcher")
    def test_bad_refresh(self, log_watcher):
        result = CliRunner().invoke(main, ["watch", "svc-a", "--refresh", "soon"])
        
        assert result.exit_code == 2
        assert "Invalid duration" in result.output
        log_watcher.assert_not_called()
    
    @patch("cloudwatcher.cli._exit_on_interrupt")
    @patch("cloudwatcher.cli.asyncio.run")
    @patch("cloudwatcher.cli.resolve_region", return_value="eu-west-1")
    @patch("cloudwatcher.cli.LogSource")
    @patch("cloudwatcher.cli.LogWatcher")
    def test_starts_watcher(self, log_watcher, log_source, resolve_region, run, exit_on_interrupt):
        result = CliRunner().invoke(main, ["watch", "svc-a", "svc-b", "--refresh", "1m 30s"])
        
        assert result.exit_code == 0
        source, config = log_watcher.call_args.args
        assert source is log_source.from_region.return_value
        assert config.groups == ("svc-a", "svc-b")
        assert config.refresh == 90
        exit_on_interrupt.assert_called_once_with()
        run.assert_called_once_with(log_watcher.return_value.run.return_value)
    
    @patch("cloudwatcher.cli._exit_on_interrupt")
    @patch("cloudwatcher.cli.asyncio.run")
    @patch("cloudwatcher.cli.resolve_region", return_value="eu-west-1")
    @patch("cloudwatcher.cli.LogSource")
    @patch("cloudwatcher.cli.LogWatcher")
    def test_default_refresh(self, log_watcher, log_source, resolve_region, run, exit_on_interrupt):
        result = CliRunner().invoke(main, ["watch", "svc-a"])
        
        assert result.exit_code == 0
        assert log_watcher.call_args.args[1].refresh == 10
    
    @patch("cloudwatcher.cli.os._exit")
    @patch("cloudwatcher.cli.signal.signal")
    def test_interrupt_handler_exits_immediately(self, set_signal, os_exit):
        """Test Ctrl+C is bound to an immediate process exit with status 0."""
        _exit_on_interrupt()
        
        signum, handler = set_signal.call_args.args
        assert signum == signal.SIGINT
        handler(signal.SIGINT, None)
        os_exit.assert_called_once_with(0)


WATCH_SLOW_SOURCE = """
import time
from unittest.mock import patch

from cloudwatcher.cli import main


class SlowSource:
    def fetch_events(self, group, start_time_ms):
        print("querying", flush=True)
        time.sleep(15)
        return []


with patch("cloudwatcher.cli.resolve_region", return_value="eu-west-1"), \\
        patch("cloudwatcher.cli.LogSource.from_region", return_value=SlowSource()):
    main(["watch", "svc-a"])
"""


@pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX signals")
def test_interrupt_during_slow_query_exits_fast():
    """Test Ctrl+C does not wait for an in-flight query to return."""
    root = Path(__file__).resolve().parent.parent
    env = dict(os.environ, PYTHONPATH=os.pathsep.join(filter(None, [str(root), os.environ.get("PYTHONPATH")])))
    process = subprocess.Popen(
        [sys.executable, "-c", WATCH_SLOW_SOURCE],
        cwd=root, env=env, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True
    )
    try:
        assert process.stdout.readline().strip() == "querying"
        
        interrupted_at = time.monotonic()
        process.send_signal(signal.SIGINT)
        returncode = process.wait(timeout=10)
        elapsed = time.monotonic() - interrupted_at
    finally:
        if process.poll() is None:
            process.kill()
        process.stdout.close()
        process.stderr.close()
    
    assert returncode == 0
    assert elapsed < 2
