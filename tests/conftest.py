"""Shared fakes and message builders for the certsync tests."""

import json

import pytest

from certsync.base.async_support import AsyncMixin
from certsync.base.certificates import CertificateBlueprint
from certsync.base.dns import DNSBlueprint
from certsync.base.models import DnsRecord, DomainValidation, Tag, ValidationRecord


def cfn_message(**fields) -> str:
    """Render fields the way CloudFormation writes stack events to SNS."""
    lines = []
    for key, value in fields.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value)
        lines.append(f"{key}='{value}'")
    return "\n".join(lines) + "\n"


class FakeCertificates(CertificateBlueprint, AsyncMixin):
    def __init__(self, tags=None, validations=None, error=None):
        self.tags = tags or {}
        # arn -> list of successive describe results; the last one repeats
        self.validations = validations or {}
        self.error = error
        self.calls = []

    def list_tags(self, certificate_arn):
        self.calls.append(("list_tags", certificate_arn))
        if self.error:
            raise self.error
        return [Tag(key=k, value=v) for k, v in self.tags.get(certificate_arn, [])]

    def describe_validations(self, certificate_arn):
        self.calls.append(("describe_validations", certificate_arn))
        results = self.validations.get(certificate_arn, [[]])
        if len(results) > 1:
            return results.pop(0)
        return results[0]


class FakeDNS(DNSBlueprint, AsyncMixin):
    def __init__(self, records=None, error=None):
        self.records = records or {}
        self.error = error
        self.list_calls = []
        self.change_calls = []

    def list_records(self, zone_id):
        self.list_calls.append(zone_id)
        return list(self.records.get(zone_id, []))

    def change_records(self, zone_id, action, records, ttl=300, comment=None):
        self.change_calls.append(
            {"zone_id": zone_id, "action": action, "records": list(records), "ttl": ttl}
        )
        if self.error:
            raise self.error
        return f"C{len(self.change_calls)}"


def validation(domain, name=None, value="_t.abc.acm-validations.aws."):
    record = ValidationRecord(name=name, type="CNAME", value=value) if name else None
    return DomainValidation(domain=domain, record=record)


def cname(name, value):
    return DnsRecord(name=name, type="CNAME", ttl=300, values=[value])


@pytest.fixture
def no_sleep():
    """A zero-wait sleep that records every requested delay."""
    waits = []

    async def _sleep(delay):
        waits.append(delay)

    _sleep.waits = waits
    return _sleep


@pytest.fixture
def creation_message():
    return cfn_message(
        StackId="arn:aws:cloudformation:eu-west-1:123456789012:stack/web/1",
        LogicalResourceId="Certificate",
        PhysicalResourceId="arn:cert:123",
        ResourceStatus="CREATE_IN_PROGRESS",
        ResourceStatusReason="Resource creation Initiated",
        ResourceType="AWS::CertificateManager::Certificate",
        StackName="web",
    )


@pytest.fixture
def deletion_message():
    return cfn_message(
        LogicalResourceId="Certificate",
        PhysicalResourceId="arn:cert:123",
        ResourceProperties={
            "DomainName": "example.com",
            "ValidationMethod": "DNS",
            "Tags": [{"Key": "HostedZoneId", "Value": "Z1"}],
        },
        ResourceStatus="DELETE_COMPLETE",
        ResourceType="AWS::CertificateManager::Certificate",
    )
