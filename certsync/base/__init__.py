"""Service blueprints, models and core utilities.

Every service implementation inherits from one of the blueprints defined
here. Import them to type-hint your own code or to write test fakes.
"""

from .certificates import CertificateBlueprint
from .dns import DNSBlueprint, ChangeAction
from .models import (
    Tag,
    ValidationRecord,
    DomainValidation,
    DnsRecord,
    IgnoredEvent,
    CreationEvent,
    DeletionEvent,
    Event,
    RecordOutcome,
)
from .supported_services import existing_services


__all__ = [
    "CertificateBlueprint",
    "DNSBlueprint",
    "ChangeAction",
    "Tag",
    "ValidationRecord",
    "DomainValidation",
    "DnsRecord",
    "IgnoredEvent",
    "CreationEvent",
    "DeletionEvent",
    "Event",
    "RecordOutcome",
    "existing_services",
]
