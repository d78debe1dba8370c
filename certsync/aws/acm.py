"""AWS Certificate Manager implementation of the certificate blueprint."""

from __future__ import annotations

from typing import NoReturn

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from certsync.base.async_support import AsyncMixin
from certsync.base.certificates import CertificateBlueprint
from certsync.base.config import AWSConfig
from certsync.base.exceptions import CertificateError, CertificateNotFoundError
from certsync.base.models import DomainValidation, Tag, ValidationRecord

_ERROR_MAP: dict[str, type[CertificateError]] = {
    "ResourceNotFoundException": CertificateNotFoundError,
}


def _handle(e: ClientError | BotoCoreError, msg: str) -> NoReturn:
    # BotoCoreError (connection, timeout) carries no error code
    code = e.response["Error"]["Code"] if isinstance(e, ClientError) else None
    exc = _ERROR_MAP.get(code)
    raise (exc or CertificateError)(f"{msg}: {e}") from e


class Certificates(CertificateBlueprint, AsyncMixin):
    """AWS Certificate Manager service.

    Attributes:
        client: boto3 ACM client.
    """

    def __init__(self, config: AWSConfig) -> None:
        """Initialize the ACM client.

        Args:
            config: AWS configuration object containing credentials and region.
        """
        self.client = boto3.client(
            "acm",
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            region_name=config.region_name,
        )

    def list_tags(self, certificate_arn: str) -> list[Tag]:
        """List the tags attached to a certificate.

        Args:
            certificate_arn: Certificate ARN.

        Returns:
            Tags in the order ACM returns them.

        Raises:
            CertificateNotFoundError: If the certificate does not exist.
        """
        try:
            resp = self.client.list_tags_for_certificate(CertificateArn=certificate_arn)
            return [
                Tag(key=t["Key"], value=t.get("Value", ""))
                for t in resp.get("Tags", [])
            ]
        except (ClientError, BotoCoreError) as e:
            _handle(e, f"Failed to list tags for certificate '{certificate_arn}'")

    def describe_validations(self, certificate_arn: str) -> list[DomainValidation]:
        """Describe a certificate's domain validation options.

        Args:
            certificate_arn: Certificate ARN.

        Returns:
            One entry per domain; ``record`` is ``None`` while ACM has not
            assigned the DNS record yet.

        Raises:
            CertificateNotFoundError: If the certificate does not exist.
        """
        try:
            resp = self.client.describe_certificate(CertificateArn=certificate_arn)
        except (ClientError, BotoCoreError) as e:
            _handle(e, f"Failed to describe certificate '{certificate_arn}'")

        validations = []
        for option in resp.get("Certificate", {}).get("DomainValidationOptions", []):
            rr = option.get("ResourceRecord")
            validations.append(
                DomainValidation(
                    domain=option["DomainName"],
                    record=ValidationRecord(
                        name=rr["Name"], type=rr["Type"], value=rr["Value"]
                    ) if rr else None,
                )
            )
        return validations
