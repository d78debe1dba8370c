"""Tests for the AWS Route 53 DNS service."""

from unittest.mock import patch, MagicMock
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from certsync.aws.route53 import DNS
from certsync.base.config import AWSConfig
from certsync.base.exceptions import DNSError, RecordConflictError, ZoneNotFoundError
from certsync.base.models import ValidationRecord


def _client_error(code: str, msg: str = "error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": msg}}, "op")


@pytest.fixture
def svc():
    with patch("certsync.aws.route53.boto3") as mock_boto:
        mock_client = MagicMock()
        mock_boto.client.return_value = mock_client
        instance = DNS(AWSConfig(
            aws_access_key_id="key",
            aws_secret_access_key="secret",
            region_name="us-east-1",
        ))
        yield instance, mock_client


def _records(n):
    return [
        ValidationRecord(name=f"_{i}.example.com.", type="CNAME", value=f"_{i}.acm-validations.aws.")
        for i in range(n)
    ]


# --- list_records ---

class TestListRecords:
    def test_follows_pages(self, svc):
        inst, client = svc
        client.get_paginator.return_value.paginate.return_value = [
            {
                "ResourceRecordSets": [
                    {
                        "Name": "example.com.",
                        "Type": "NS",
                        "TTL": 172800,
                        "ResourceRecords": [{"Value": "ns1.aws.com."}],
                    }
                ]
            },
            {
                "ResourceRecordSets": [
                    {
                        "Name": "_a.example.com.",
                        "Type": "CNAME",
                        "TTL": 300,
                        "ResourceRecords": [{"Value": "_b.acm-validations.aws."}],
                    },
                    {
                        "Name": "www.example.com.",
                        "Type": "A",
                        "AliasTarget": {"DNSName": "lb.example.net."},
                    },
                ]
            },
        ]
        records = inst.list_records("/hostedzone/Z1")
        client.get_paginator.assert_called_once_with("list_resource_record_sets")
        client.get_paginator.return_value.paginate.assert_called_once_with(HostedZoneId="Z1")
        assert [r.name for r in records] == ["example.com.", "_a.example.com.", "www.example.com."]
        assert records[1].values == ("_b.acm-validations.aws.",)
        assert records[2].values == ()
        assert records[2].ttl == 0

    def test_not_found(self, svc):
        inst, client = svc
        client.get_paginator.return_value.paginate.side_effect = _client_error("NoSuchHostedZone")
        with pytest.raises(ZoneNotFoundError):
            inst.list_records("Z-missing")


# --- change_records ---

class TestChangeRecords:
    def test_single_batch(self, svc):
        inst, client = svc
        client.change_resource_record_sets.return_value = {"ChangeInfo": {"Id": "/change/C123"}}
        change_id = inst.change_records("Z1", "CREATE", _records(3), 300, comment="ACM validation")
        assert change_id == "C123"
        client.change_resource_record_sets.assert_called_once()
        args = client.change_resource_record_sets.call_args[1]
        assert args["HostedZoneId"] == "Z1"
        assert args["ChangeBatch"]["Comment"] == "ACM validation"
        changes = args["ChangeBatch"]["Changes"]
        assert len(changes) == 3
        for i, change in enumerate(changes):
            assert change["Action"] == "CREATE"
            assert change["ResourceRecordSet"] == {
                "Name": f"_{i}.example.com.",
                "Type": "CNAME",
                "TTL": 300,
                "ResourceRecords": [{"Value": f"_{i}.acm-validations.aws."}],
            }

    def test_delete_without_comment(self, svc):
        inst, client = svc
        client.change_resource_record_sets.return_value = {"ChangeInfo": {"Id": "/change/C9"}}
        inst.change_records("Z1", "DELETE", _records(1))
        batch = client.change_resource_record_sets.call_args[1]["ChangeBatch"]
        assert "Comment" not in batch
        assert batch["Changes"][0]["Action"] == "DELETE"

    def test_conflict(self, svc):
        inst, client = svc
        client.change_resource_record_sets.side_effect = _client_error("InvalidChangeBatch")
        with pytest.raises(RecordConflictError, match="Z1"):
            inst.change_records("Z1", "CREATE", _records(1))

    def test_zone_not_found(self, svc):
        inst, client = svc
        client.change_resource_record_sets.side_effect = _client_error("NoSuchHostedZone")
        with pytest.raises(ZoneNotFoundError):
            inst.change_records("Z-bad", "DELETE", _records(1))

    def test_generic_error(self, svc):
        inst, client = svc
        client.change_resource_record_sets.side_effect = _client_error("Throttling")
        with pytest.raises(DNSError):
            inst.change_records("Z1", "CREATE", _records(1))

    def test_connection_error(self, svc):
        inst, client = svc
        client.change_resource_record_sets.side_effect = EndpointConnectionError(
            endpoint_url="https://route53.amazonaws.com/"
        )
        with pytest.raises(DNSError, match="zone 'Z1'"):
            inst.change_records("Z1", "CREATE", _records(1))

    def test_list_connection_error(self, svc):
        inst, client = svc
        client.get_paginator.return_value.paginate.side_effect = EndpointConnectionError(
            endpoint_url="https://route53.amazonaws.com/"
        )
        with pytest.raises(DNSError):
            inst.list_records("Z1")
