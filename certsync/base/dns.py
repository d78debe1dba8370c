"""DNS service blueprint."""

from abc import ABC, abstractmethod
from typing import Literal

from certsync.base.models import DnsRecord, ValidationRecord

ChangeAction = Literal["CREATE", "DELETE"]


class DNSBlueprint(ABC):
    """Abstract interface for hosted zone record management.

    Maps to AWS Route 53. Implementations that also inherit
    :class:`~certsync.base.async_support.AsyncMixin` expose
    ``alist_records`` and ``achange_records``.
    """

    @abstractmethod
    def list_records(self, zone_id: str) -> list[DnsRecord]:
        """List every record set in a zone.

        Raises:
            ZoneNotFoundError: If the zone does not exist.
            DNSError: On any other service failure.
        """

    @abstractmethod
    def change_records(
        self,
        zone_id: str,
        action: ChangeAction,
        records: list[ValidationRecord],
        ttl: int = 300,
        comment: str | None = None,
    ) -> str:
        """Submit one atomic change batch.

        The batch holds one change per record, each with *ttl* and the
        record's single value.

        Args:
            zone_id: Hosted zone identifier.
            action: ``CREATE`` or ``DELETE``.
            records: Non-empty list of (name, type, value) triples.
            ttl: Time-to-live in seconds.
            comment: Optional change batch comment.

        Returns:
            Change identifier reported by the service.

        Raises:
            ZoneNotFoundError: If the zone does not exist.
            RecordConflictError: If the batch is rejected (duplicate create,
                missing delete).
            DNSError: On any other service failure.
        """
