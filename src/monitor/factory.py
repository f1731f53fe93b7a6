"""Convenience factory for wiring the watchdog."""

from __future__ import annotations

from src.core.config import Settings
from src.monitor.activity_log import ActivityLog
from src.monitor.channels import WebhookChannel
from src.monitor.dispatcher import AlertDispatcher
from src.monitor.evaluator import ConstraintEvaluator
from src.monitor.loop import WatchdogLoop
from src.probes.system import default_probes


def create_watchdog(settings: Settings) -> WatchdogLoop:
    """Build the activity log, evaluator, dispatcher, probes and loop."""
    activity_log = ActivityLog(settings.log)
    evaluator = ConstraintEvaluator(settings.constraints, activity_log)
    dispatcher = AlertDispatcher(
        channel=WebhookChannel(settings.http_request),
        template=settings.http_request.body,
        activity_log=activity_log,
    )
    return WatchdogLoop(
        settings=settings,
        probes=default_probes(settings.probe_timeout_secs),
        evaluator=evaluator,
        dispatcher=dispatcher,
        activity_log=activity_log,
    )
