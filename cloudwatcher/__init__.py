"""
cloudwatcher - Tail several CloudWatch Logs groups in one terminal.

Polls the watched log groups on a fixed interval, drops events that were
already shown and prints the rest in timestamp order with severity colors.
"""

__version__ = "0.1.0"
