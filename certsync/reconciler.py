"""
Per-notification reconciliation.

:class:`Reconciler` walks one lifecycle message through
classify → resolve zone → fetch / correlate → mutate, and fans a batch of
messages out concurrently so that one failing notification never affects
its siblings.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from certsync.base.certificates import CertificateBlueprint
from certsync.base.config import ReconcilerSettings
from certsync.base.dns import DNSBlueprint
from certsync.base.exceptions import DeadlineExceededError
from certsync.base.logger import cs_logger
from certsync.base.models import (
    CreationEvent,
    DeletionEvent,
    RecordOutcome,
)
from certsync.classifier import classify_message
from certsync.correlator import correlate
from certsync.fetcher import fetch_validation_records
from certsync.mutator import apply_changes, to_triples
from certsync.zones import resolve_zone_for_certificate, resolve_zone_id


@dataclass(frozen=True)
class Notification:
    """One delivered lifecycle message."""

    message_id: str
    message: str


class Reconciler:
    """Applies certificate lifecycle notifications to Route 53.

    Holds no state between notifications; every fact about a certificate or
    zone is fetched again for each message.

    Attributes:
        certificates: Certificate service (async ``a*`` methods required).
        dns: DNS service (async ``a*`` methods required).
        settings: Poll, TTL and matching configuration.
    """

    def __init__(
        self,
        certificates: CertificateBlueprint,
        dns: DNSBlueprint,
        settings: ReconcilerSettings | None = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.certificates = certificates
        self.dns = dns
        self.settings = settings or ReconcilerSettings()
        self._sleep = sleep

    async def process(self, notification: Notification) -> RecordOutcome:
        """Reconcile a single notification.

        Raises:
            CertsyncError: Lookup, poll or change failures, unchanged.
        """
        rid = notification.message_id
        event = classify_message(notification.message)

        if isinstance(event, CreationEvent):
            return await self._on_create(rid, event)
        if isinstance(event, DeletionEvent):
            return await self._on_delete(rid, event)

        cs_logger.debug(f"Ignoring notification: {event.reason}", request_id=rid)
        return RecordOutcome(message_id=rid, status="ignored")

    async def _on_create(self, rid: str, event: CreationEvent) -> RecordOutcome:
        arn = event.certificate_arn
        zone_id = await resolve_zone_for_certificate(
            self.certificates, arn, self.settings.zone_tag_key
        )
        if zone_id is None:
            cs_logger.warning(
                f"Certificate has no {self.settings.zone_tag_key} tag, skipping",
                request_id=rid,
                certificate_arn=arn,
                action="CREATE",
            )
            return RecordOutcome(message_id=rid, status="zone_not_found", certificate_arn=arn)

        records = await fetch_validation_records(
            self.certificates,
            arn,
            self.settings.poll_policy(),
            request_id=rid,
            sleep=self._sleep,
        )
        await apply_changes(
            self.dns,
            zone_id,
            "CREATE",
            records,
            self.settings.record_ttl,
            request_id=rid,
            certificate_arn=arn,
        )
        return RecordOutcome(
            message_id=rid,
            status="created",
            certificate_arn=arn,
            zone_id=zone_id,
            records=tuple(records),
        )

    async def _on_delete(self, rid: str, event: DeletionEvent) -> RecordOutcome:
        zone_id = resolve_zone_id(event.tags, self.settings.zone_tag_key)
        if zone_id is None:
            cs_logger.warning(
                f"Deleted certificate had no {self.settings.zone_tag_key} tag, skipping",
                request_id=rid,
                action="DELETE",
            )
            return RecordOutcome(message_id=rid, status="zone_not_found")

        zone_records = await self.dns.alist_records(zone_id)  # type: ignore[attr-defined]
        matched = to_triples(
            correlate(zone_records, event.domains, self.settings.validation_suffix)
        )
        if not matched:
            cs_logger.info(
                f"No validation records for {', '.join(event.domains) or '<no domains>'}",
                request_id=rid,
                zone_id=zone_id,
                action="DELETE",
            )
            return RecordOutcome(message_id=rid, status="nothing_to_do", zone_id=zone_id)

        await apply_changes(
            self.dns,
            zone_id,
            "DELETE",
            matched,
            self.settings.record_ttl,
            request_id=rid,
        )
        return RecordOutcome(
            message_id=rid,
            status="deleted",
            zone_id=zone_id,
            records=tuple(matched),
        )

    async def _process_before(
        self, notification: Notification, timeout: float | None
    ) -> RecordOutcome:
        if timeout is None:
            return await self.process(notification)
        try:
            return await asyncio.wait_for(self.process(notification), max(timeout, 0))
        except asyncio.TimeoutError as e:
            raise DeadlineExceededError(
                f"Notification {notification.message_id} not processed within {timeout:.1f}s"
            ) from e

    async def process_batch(
        self,
        notifications: list[Notification],
        timeout: float | None = None,
    ) -> list[RecordOutcome]:
        """Reconcile notifications concurrently.

        Every notification gets its own outcome; a failure becomes a
        ``failed`` outcome carrying the error text and is logged with the
        certificate it concerned.

        Args:
            notifications: Messages to process.
            timeout: Seconds each notification may take before it is
                cancelled; ``None`` leaves it unbounded.
        """
        results = await asyncio.gather(
            *(self._process_before(n, timeout) for n in notifications),
            return_exceptions=True,
        )

        outcomes = []
        for notification, result in zip(notifications, results):
            if isinstance(result, RecordOutcome):
                outcomes.append(result)
                continue
            if not isinstance(result, Exception):
                raise result
            event = classify_message(notification.message)
            arn = getattr(event, "certificate_arn", None)
            cs_logger.error(
                f"Notification failed: {type(result).__name__}: {result}",
                request_id=notification.message_id,
                certificate_arn=arn,
                action=event.kind.upper(),
            )
            outcomes.append(
                RecordOutcome(
                    message_id=notification.message_id,
                    status="failed",
                    certificate_arn=arn,
                    error=f"{type(result).__name__}: {result}",
                )
            )
        return outcomes
