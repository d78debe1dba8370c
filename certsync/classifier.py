"""
Lifecycle event classification.

Turns parsed message fields into one of three typed events so that no
later step has to look at raw strings again.
"""

from __future__ import annotations

from typing import Any

from certsync.base.config import CERTIFICATE_RESOURCE_TYPE
from certsync.base.models import CreationEvent, DeletionEvent, Event, IgnoredEvent, Tag
from certsync.parser import parse_message, parse_resource_properties

CREATE_IN_PROGRESS = "CREATE_IN_PROGRESS"
DELETE_COMPLETE = "DELETE_COMPLETE"


def classify(fields: dict[str, str]) -> Event:
    """Decide which reconciliation path, if any, applies to a message.

    Rules are evaluated in order: wrong resource type, creation in progress
    with a physical id, deletion complete, anything else.
    """
    resource_type = fields.get("ResourceType")
    if resource_type != CERTIFICATE_RESOURCE_TYPE:
        return IgnoredEvent(reason=f"resource type {resource_type or '<missing>'}")

    status = fields.get("ResourceStatus")
    arn = fields.get("PhysicalResourceId")
    if status == CREATE_IN_PROGRESS and arn:
        return CreationEvent(certificate_arn=arn)

    if status == DELETE_COMPLETE:
        props = parse_resource_properties(fields.get("ResourceProperties"))
        return DeletionEvent(tags=_tags(props), domains=_domains(props))

    return IgnoredEvent(reason=f"status {status or '<missing>'}")


def classify_message(text: str) -> Event:
    """Parse then classify a raw lifecycle message."""
    return classify(parse_message(text))


def _tags(props: dict[str, Any]) -> tuple[Tag, ...]:
    tags = props.get("Tags")
    if not isinstance(tags, list):
        return ()
    return tuple(
        Tag(key=str(t["Key"]), value=str(t.get("Value", "")))
        for t in tags
        if isinstance(t, dict) and "Key" in t
    )


def _domains(props: dict[str, Any]) -> tuple[str, ...]:
    names: list[str] = []
    primary = props.get("DomainName")
    if isinstance(primary, str) and primary:
        names.append(primary)
    alternates = props.get("SubjectAlternativeNames")
    if isinstance(alternates, list):
        names.extend(n for n in alternates if isinstance(n, str) and n)
    # dict.fromkeys keeps first-seen order
    return tuple(dict.fromkeys(names))
