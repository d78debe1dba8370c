"""
Validation-record fetching.

ACM fills in a certificate's DNS validation records some seconds after the
request is submitted, so the first describe call usually comes back empty.
The fetcher polls until at least one record is assigned.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable

from certsync.base.certificates import CertificateBlueprint
from certsync.base.exceptions import ValidationTimeoutError
from certsync.base.logger import cs_logger
from certsync.base.models import DomainValidation, ValidationRecord
from certsync.base.polling import PollExhausted, PollPolicy, poll


def assigned_records(validations: list[DomainValidation]) -> list[ValidationRecord]:
    """Drop entries without a record and collapse identical triples.

    ACM reuses one record for ``example.com`` and ``*.example.com``; a
    change batch may not contain the same record twice.
    """
    return list(dict.fromkeys(v.record for v in validations if v.record is not None))


async def fetch_validation_records(
    certificates: CertificateBlueprint,
    certificate_arn: str,
    policy: PollPolicy | None = None,
    *,
    request_id: str | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> list[ValidationRecord]:
    """Return the certificate's validation records once ACM has assigned them.

    Args:
        certificates: Certificate service.
        certificate_arn: Certificate to poll.
        policy: Poll schedule; defaults to a 10 s fixed interval with no
            ceiling, leaving the invocation deadline as the only bound.
        request_id: Notification id for log correlation.
        sleep: Awaitable sleep, replaceable in tests.
        clock: Monotonic clock, replaceable in tests.

    Returns:
        A non-empty list of unique records.

    Raises:
        ValidationTimeoutError: If *policy* gives up first.
        CertificateError: If a lookup fails; lookups are not retried.
    """
    policy = policy or PollPolicy()

    async def _fetch() -> list[ValidationRecord]:
        validations = await certificates.adescribe_validations(certificate_arn)  # type: ignore[attr-defined]
        return assigned_records(validations)

    try:
        records = await poll(
            _fetch,
            bool,
            policy,
            description=f"validation records for {certificate_arn}",
            sleep=sleep,
            clock=clock,
        )
    except PollExhausted as e:
        cs_logger.error(
            f"Validation records never appeared: {e}",
            request_id=request_id,
            certificate_arn=certificate_arn,
            operation="fetch_validation_records",
        )
        raise ValidationTimeoutError(
            f"Validation records for '{certificate_arn}' not available after "
            f"{e.attempts} attempt(s) ({e.elapsed:.1f}s)"
        ) from e

    cs_logger.info(
        f"Found {len(records)} validation record(s)",
        request_id=request_id,
        certificate_arn=certificate_arn,
        operation="fetch_validation_records",
    )
    return records
