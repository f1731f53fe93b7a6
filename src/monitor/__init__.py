"""Constraint evaluation, alerting, activity logging and the sampling loop."""

from src.monitor.activity_log import ActivityLog
from src.monitor.channels import NotificationChannel, WebhookChannel
from src.monitor.dispatcher import AlertDispatcher
from src.monitor.evaluator import ConstraintEvaluator
from src.monitor.exceptions import DispatchError
from src.monitor.factory import create_watchdog
from src.monitor.formatters import format_reading, render_template
from src.monitor.loop import WatchdogLoop
from src.monitor.units import is_comparable, parse_size

__all__ = [
    "ActivityLog",
    "AlertDispatcher",
    "ConstraintEvaluator",
    "DispatchError",
    "NotificationChannel",
    "WatchdogLoop",
    "WebhookChannel",
    "create_watchdog",
    "format_reading",
    "is_comparable",
    "parse_size",
    "render_template",
]
