"""
Typed representations of the data the reconciler reads and writes.

Remote state (certificates, zones, records) is re-fetched on every
invocation; these models are never cached across invocations.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Tag(_Frozen):
    """A key/value tag attached to a certificate."""

    key: str
    value: str


class ValidationRecord(_Frozen):
    """A (name, type, value) triple that must exist for issuance."""

    name: str
    type: str
    value: str


class DomainValidation(_Frozen):
    """One entry of a certificate's domain validation options.

    ``record`` stays ``None`` until the issuing service assigns it.
    """

    domain: str
    record: ValidationRecord | None = None


class DnsRecord(_Frozen):
    """A record set in a hosted zone, addressed by (name, type)."""

    name: str
    type: str
    ttl: int = 0
    values: tuple[str, ...] = ()


# ── Classified events ─────────────────────────────────────────────────


class IgnoredEvent(_Frozen):
    kind: Literal["ignore"] = "ignore"
    reason: str = ""


class CreationEvent(_Frozen):
    kind: Literal["create"] = "create"
    certificate_arn: str


class DeletionEvent(_Frozen):
    kind: Literal["delete"] = "delete"
    tags: tuple[Tag, ...] = ()
    domains: tuple[str, ...] = ()


Event = Annotated[
    Union[IgnoredEvent, CreationEvent, DeletionEvent],
    Field(discriminator="kind"),
]


# ── Outcomes ──────────────────────────────────────────────────────────

OutcomeStatus = Literal[
    "ignored",
    "zone_not_found",
    "created",
    "deleted",
    "nothing_to_do",
    "failed",
]


class RecordOutcome(_Frozen):
    """Result of processing a single notification."""

    message_id: str
    status: OutcomeStatus
    certificate_arn: str | None = None
    zone_id: str | None = None
    records: tuple[ValidationRecord, ...] = ()
    error: str | None = None


__all__ = [
    "Tag",
    "ValidationRecord",
    "DomainValidation",
    "DnsRecord",
    "IgnoredEvent",
    "CreationEvent",
    "DeletionEvent",
    "Event",
    "OutcomeStatus",
    "RecordOutcome",
]
