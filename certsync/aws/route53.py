"""AWS Route 53 implementation of the DNS blueprint."""

from __future__ import annotations

from typing import NoReturn

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from certsync.base.async_support import AsyncMixin
from certsync.base.config import AWSConfig
from certsync.base.dns import ChangeAction, DNSBlueprint
from certsync.base.exceptions import DNSError, RecordConflictError, ZoneNotFoundError
from certsync.base.models import DnsRecord, ValidationRecord

_ERROR_MAP: dict[str, type[DNSError]] = {
    "NoSuchHostedZone": ZoneNotFoundError,
    "InvalidChangeBatch": RecordConflictError,
}


def _handle(e: ClientError | BotoCoreError, msg: str) -> NoReturn:
    # BotoCoreError (connection, timeout) carries no error code
    code = e.response["Error"]["Code"] if isinstance(e, ClientError) else None
    exc = _ERROR_MAP.get(code)
    raise (exc or DNSError)(f"{msg}: {e}") from e


def _zone(zone_id: str) -> str:
    # Accept both "Z123" and "/hostedzone/Z123".
    return zone_id.split("/")[-1]


class DNS(DNSBlueprint, AsyncMixin):
    """AWS Route 53 DNS service.

    Attributes:
        client: boto3 Route 53 client.
    """

    def __init__(self, config: AWSConfig) -> None:
        """Initialize the Route 53 client.

        Args:
            config: AWS configuration object containing credentials and region.
        """
        self.client = boto3.client(
            "route53",
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            region_name=config.region_name,
        )

    def list_records(self, zone_id: str) -> list[DnsRecord]:
        """List all record sets in a hosted zone, following pagination.

        Args:
            zone_id: Hosted zone ID.

        Returns:
            Every record set; alias records carry no values.

        Raises:
            ZoneNotFoundError: If the zone does not exist.
        """
        try:
            paginator = self.client.get_paginator("list_resource_record_sets")
            return [
                DnsRecord(
                    name=r["Name"],
                    type=r["Type"],
                    ttl=r.get("TTL", 0),
                    values=tuple(rr["Value"] for rr in r.get("ResourceRecords", [])),
                )
                for page in paginator.paginate(HostedZoneId=_zone(zone_id))
                for r in page.get("ResourceRecordSets", [])
            ]
        except (ClientError, BotoCoreError) as e:
            _handle(e, f"Failed to list records in zone '{zone_id}'")

    def change_records(
        self,
        zone_id: str,
        action: ChangeAction,
        records: list[ValidationRecord],
        ttl: int = 300,
        comment: str | None = None,
    ) -> str:
        """Apply one Route 53 change batch.

        Args:
            zone_id: Hosted zone ID.
            action: ``CREATE`` or ``DELETE``.
            records: Record triples, one change each.
            ttl: Time-to-live in seconds.
            comment: Optional change batch comment.

        Returns:
            Route 53 change ID.

        Raises:
            ZoneNotFoundError: If the zone does not exist.
            RecordConflictError: If Route 53 rejects the batch.
        """
        batch: dict = {
            "Changes": [
                {
                    "Action": action,
                    "ResourceRecordSet": {
                        "Name": r.name,
                        "Type": r.type,
                        "TTL": ttl,
                        "ResourceRecords": [{"Value": r.value}],
                    },
                }
                for r in records
            ]
        }
        if comment:
            batch["Comment"] = comment
        try:
            resp = self.client.change_resource_record_sets(
                HostedZoneId=_zone(zone_id),
                ChangeBatch=batch,
            )
            return resp["ChangeInfo"]["Id"].split("/")[-1]  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            _handle(
                e,
                f"Failed to {action.lower()} {len(records)} record(s) in zone '{zone_id}'",
            )
