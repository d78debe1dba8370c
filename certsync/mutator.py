"""Atomic record changes against a hosted zone."""

from __future__ import annotations

from typing import Iterable

from certsync.base.dns import ChangeAction, DNSBlueprint
from certsync.base.logger import cs_logger
from certsync.base.models import DnsRecord, ValidationRecord

DEFAULT_TTL = 300


def to_triples(records: Iterable[DnsRecord]) -> list[ValidationRecord]:
    """Flatten zone record sets into (name, type, value) triples."""
    return [
        ValidationRecord(name=r.name, type=r.type, value=v)
        for r in records
        for v in r.values
    ]


async def apply_changes(
    dns: DNSBlueprint,
    zone_id: str,
    action: ChangeAction,
    records: list[ValidationRecord],
    ttl: int = DEFAULT_TTL,
    *,
    request_id: str | None = None,
    certificate_arn: str | None = None,
) -> str | None:
    """Submit *records* to *zone_id* as a single change batch.

    An empty list submits nothing. Failures are logged with their context
    and re-raised; they are never retried here.

    Returns:
        The change id, or ``None`` when there was nothing to submit.
    """
    if not records:
        cs_logger.info(
            "No records to change",
            request_id=request_id,
            certificate_arn=certificate_arn,
            zone_id=zone_id,
            action=action,
        )
        return None

    names = ", ".join(r.name for r in records)
    comment = f"ACM validation for {certificate_arn}" if certificate_arn else None
    try:
        change_id = await dns.achange_records(  # type: ignore[attr-defined]
            zone_id, action, records, ttl, comment
        )
    except Exception:
        cs_logger.error(
            f"Change batch failed for {names}",
            request_id=request_id,
            certificate_arn=certificate_arn,
            zone_id=zone_id,
            action=action,
            operation="change_records",
            exc_info=True,
        )
        raise

    cs_logger.info(
        f"Submitted change {change_id}: {action} {names}",
        request_id=request_id,
        certificate_arn=certificate_arn,
        zone_id=zone_id,
        action=action,
        operation="change_records",
    )
    return change_id
