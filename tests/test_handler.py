"""Tests for the Lambda entry point."""

from unittest.mock import MagicMock, patch

import pytest

from certsync.base.exceptions import BatchProcessingError
from certsync.base.models import RecordOutcome
from certsync.handler import handler, notifications_from_event, remaining_seconds


def _sns(message, message_id="m1"):
    return {"EventSource": "aws:sns", "Sns": {"MessageId": message_id, "Message": message}}


class TestNotificationsFromEvent:
    def test_sns(self):
        notes = notifications_from_event({"Records": [_sns("A='1'", "id-1")]})
        assert [(n.message_id, n.message) for n in notes] == [("id-1", "A='1'")]

    def test_sqs(self):
        notes = notifications_from_event({"Records": [{"messageId": "q1", "body": "B='2'"}]})
        assert [(n.message_id, n.message) for n in notes] == [("q1", "B='2'")]

    def test_skips_empty_and_fills_ids(self):
        event = {"Records": [{"Sns": {"Message": ""}}, {"Sns": {"Message": "C='3'"}}]}
        notes = notifications_from_event(event)
        assert [n.message_id for n in notes] == ["record-1"]

    def test_no_records(self):
        assert notifications_from_event({}) == []


class TestRemainingSeconds:
    def test_with_context(self):
        context = MagicMock()
        context.get_remaining_time_in_millis.return_value = 30_000
        assert remaining_seconds(context, 5) == 25

    def test_without_context(self):
        assert remaining_seconds(None, 5) is None


class TestHandler:
    @pytest.fixture
    def reconciler(self):
        with patch("certsync.handler.build_reconciler") as build:
            yield build.return_value

    def test_returns_outcomes(self, reconciler, creation_message):
        async def batch(notifications, timeout=None):
            return [RecordOutcome(message_id=n.message_id, status="created") for n in notifications]

        reconciler.process_batch.side_effect = batch
        result = handler({"Records": [_sns(creation_message)]}, None)
        assert result["outcomes"][0]["status"] == "created"
        assert result["outcomes"][0]["message_id"] == "m1"

    def test_raises_after_batch_when_any_failed(self, reconciler):
        async def batch(notifications, timeout=None):
            return [
                RecordOutcome(message_id="m1", status="failed", error="DNSError: boom"),
                RecordOutcome(message_id="m2", status="ignored"),
            ]

        reconciler.process_batch.side_effect = batch
        with pytest.raises(BatchProcessingError, match="1 of 2") as info:
            handler({"Records": [_sns("x", "m1"), _sns("y", "m2")]}, None)
        assert len(info.value.outcomes) == 2

    def test_passes_deadline(self, reconciler, monkeypatch):
        monkeypatch.setenv("CERTSYNC_DEADLINE_MARGIN", "10")
        seen = {}

        async def batch(notifications, timeout=None):
            seen["timeout"] = timeout
            return []

        reconciler.process_batch.side_effect = batch
        context = MagicMock()
        context.get_remaining_time_in_millis.return_value = 60_000
        handler({"Records": []}, context)
        assert seen["timeout"] == 50
