"""
certsync exception hierarchy.

Every failure raised by the reconciler inherits from :class:`CertsyncError`.
Service-level errors (certificate lookups, DNS changes) carry a base class
plus sub-exceptions for the failure modes operators act on. Ignored
notifications and zones that are not found are outcomes, not exceptions.
"""

from __future__ import annotations

from typing import Any


# ── Base ──────────────────────────────────────────────────────────────
class CertsyncError(Exception):
    """Root exception for all certsync errors."""


# ── Certificates ──────────────────────────────────────────────────────
class CertificateError(CertsyncError):
    """Base exception for certificate lookups."""


class CertificateNotFoundError(CertificateError):
    """Certificate does not exist (or no longer exists)."""


class ValidationTimeoutError(CertificateError):
    """Validation records were not populated within the poll policy."""


# ── DNS ───────────────────────────────────────────────────────────────
class DNSError(CertsyncError):
    """Base exception for DNS operations."""


class ZoneNotFoundError(DNSError):
    """Hosted zone not found."""


class RecordConflictError(DNSError):
    """Change batch rejected, e.g. record already exists or is already gone."""


# ── Invocation ────────────────────────────────────────────────────────
class DeadlineExceededError(CertsyncError):
    """A notification could not be processed before the invocation deadline."""


class BatchProcessingError(CertsyncError):
    """One or more notifications in a batch failed.

    Attributes:
        outcomes: Every :class:`~certsync.base.models.RecordOutcome` of the
            batch, failed and successful alike.
    """

    def __init__(self, outcomes: list[Any]) -> None:
        self.outcomes = outcomes
        failed = [o for o in outcomes if o.status == "failed"]
        super().__init__(
            f"{len(failed)} of {len(outcomes)} notification(s) failed: "
            + "; ".join(f"{o.message_id}: {o.error}" for o in failed)
        )
