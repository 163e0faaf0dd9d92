"""
Dramatiq worker entry point.

Run with:
    dramatiq jobs.worker
"""

from deeddraw.utils.logging import setup_logging

setup_logging()

from jobs.broker import broker  # noqa: E402
from jobs.tasks import notification_delivery  # noqa: E402, F401

__all__ = ["broker"]
