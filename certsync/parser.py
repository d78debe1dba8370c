"""
Lifecycle message parsing.

CloudFormation publishes stack events to SNS as newline-separated
``Key='value'`` lines. Extraction is best-effort: anything that does not
look like a pair is skipped, and a message with no pairs parses to an
empty mapping.
"""

from __future__ import annotations

import json
import re
from typing import Any

_PAIR_RE = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)='((?:\\.|[^'\\])*)'")


def parse_message(text: str) -> dict[str, str]:
    """Extract every ``key='value'`` pair from *text*.

    Values are trimmed and an escaped quote (``\\'``) becomes a plain
    quote; every other backslash is kept as written, so JSON payloads
    such as ``ResourceProperties`` stay decodable. A key seen more than
    once keeps its last value.

    >>> parse_message("ResourceStatus='CREATE_IN_PROGRESS'\\nStackName=' demo '")
    {'ResourceStatus': 'CREATE_IN_PROGRESS', 'StackName': 'demo'}
    """
    fields: dict[str, str] = {}
    for match in _PAIR_RE.finditer(text or ""):
        fields[match.group(1)] = match.group(2).replace("\\'", "'").strip()
    return fields


def parse_resource_properties(raw: str | None) -> dict[str, Any]:
    """Decode the JSON ``ResourceProperties`` payload.

    Returns an empty dict when the payload is absent, not JSON, or not a
    JSON object.
    """
    if not raw:
        return {}
    try:
        props = json.loads(raw)
    except ValueError:
        return {}
    return props if isinstance(props, dict) else {}
