"""
Mapping zone records back to certificate domains.

Nothing records which validation CNAMEs were created for which
certificate, so at deletion time the association is rebuilt from the
record name itself: ACM names its records ``<token>.<domain>.``.
"""

from __future__ import annotations

import re
from typing import Iterable

from certsync.base.config import DEFAULT_VALIDATION_SUFFIX
from certsync.base.models import DnsRecord

_NAME_RE = re.compile(r"^[^.]+\.(.+)\.$")


def _normalise(name: str) -> str:
    return name.strip().rstrip(".").lower()


def is_validation_record(record: DnsRecord, suffix: str = DEFAULT_VALIDATION_SUFFIX) -> bool:
    """True for a CNAME whose every value lies under the validation suffix.

    The suffix must start on a label boundary: ``x.acm-validations.aws.``
    matches, ``x.evilacm-validations.aws.`` does not.
    """
    if record.type != "CNAME" or not record.values:
        return False
    suffix = _normalise(suffix).lstrip(".")
    return all(
        value == suffix or value.endswith("." + suffix)
        for value in map(_normalise, record.values)
    )


def embedded_domain(name: str) -> str | None:
    """Return the domain encoded in a validation record name.

    ``_abc123.example.com.`` gives ``example.com``; names that do not
    have the ``<label>.<domain>.`` shape give ``None``.
    """
    match = _NAME_RE.match(name)
    return match.group(1) if match else None


def _target(domain: str) -> str:
    domain = _normalise(domain)
    # *.example.com is validated by the same record as example.com
    return domain[2:] if domain.startswith("*.") else domain


def correlate(
    records: Iterable[DnsRecord],
    domains: Iterable[str],
    suffix: str = DEFAULT_VALIDATION_SUFFIX,
) -> list[DnsRecord]:
    """Return the validation records whose embedded domain is one of *domains*.

    Pure function: the only inputs are the zone's current records and the
    certificate's domain names.
    """
    targets = {_target(d) for d in domains}
    matched = []
    for record in records:
        if not is_validation_record(record, suffix):
            continue
        domain = embedded_domain(record.name)
        if domain is not None and _normalise(domain) in targets:
            matched.append(record)
    return matched
