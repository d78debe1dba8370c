"""
Lambda entry point.

Subscribed to the SNS topic CloudFormation publishes stack events to
(SQS-wrapped deliveries are accepted as well). Every record of the
invocation is reconciled concurrently; if any of them fails the
invocation fails after all have finished, so the transport redelivers.
"""

from __future__ import annotations

import asyncio
from typing import Any

from certsync.base.config import ReconcilerSettings
from certsync.base.exceptions import BatchProcessingError
from certsync.base.logger import cs_logger
from certsync.factory import service_factory
from certsync.reconciler import Notification, Reconciler


def notifications_from_event(event: dict[str, Any]) -> list[Notification]:
    """Extract the lifecycle messages carried by a Lambda event.

    Records without a message body are skipped.
    """
    notifications = []
    for index, record in enumerate(event.get("Records", [])):
        sns = record.get("Sns")
        if sns is not None:
            message, message_id = sns.get("Message"), sns.get("MessageId")
        else:
            message, message_id = record.get("body"), record.get("messageId")
        if not message:
            continue
        notifications.append(
            Notification(message_id=message_id or f"record-{index}", message=message)
        )
    return notifications


def remaining_seconds(context: Any, margin: float) -> float | None:
    """Time left before the invocation deadline, minus *margin*."""
    if context is None or not hasattr(context, "get_remaining_time_in_millis"):
        return None
    return context.get_remaining_time_in_millis() / 1000 - margin


def build_reconciler(settings: ReconcilerSettings | None = None) -> Reconciler:
    """Create a reconciler backed by the (cached) AWS services."""
    return Reconciler(
        service_factory("certificates"),
        service_factory("dns"),
        settings or ReconcilerSettings(),
    )


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Process one invocation's batch of notifications.

    Returns:
        ``{"outcomes": [...]}`` with one entry per notification.

    Raises:
        BatchProcessingError: If at least one notification failed.
    """
    settings = ReconcilerSettings()
    cs_logger.set_level(settings.log_level)

    notifications = notifications_from_event(event)
    reconciler = build_reconciler(settings)
    outcomes = asyncio.run(
        reconciler.process_batch(
            notifications,
            timeout=remaining_seconds(context, settings.deadline_margin),
        )
    )

    summary = {"outcomes": [o.model_dump(mode="json") for o in outcomes]}
    cs_logger.info(
        f"Processed {len(outcomes)} notification(s): "
        + ", ".join(sorted({o.status for o in outcomes})),
        operation="handler",
    )
    if any(o.status == "failed" for o in outcomes):
        raise BatchProcessingError(outcomes)
    return summary
