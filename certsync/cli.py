"""certsync CLI: replay a lifecycle message by hand.

Usage examples::

    certsync parse event.txt
    certsync reconcile event.txt --max-attempts 6
    aws sns ... | certsync parse -
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from certsync.classifier import classify
from certsync.parser import parse_message


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``certsync`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="certsync",
        description="Replay CloudFormation certificate notifications",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON AWS config string (e.g. \'{"region_name":"us-east-1"}\')',
    )
    sub = parser.add_subparsers(dest="command", required=True)

    parse_cmd = sub.add_parser("parse", help="Show parsed fields and classification")
    parse_cmd.add_argument("file", help="Message file, or - for stdin")

    rec_cmd = sub.add_parser("reconcile", help="Apply the message to Route 53")
    rec_cmd.add_argument("file", help="Message file, or - for stdin")
    rec_cmd.add_argument("--poll-interval", type=float, default=None)
    rec_cmd.add_argument("--max-attempts", type=int, default=None)
    rec_cmd.add_argument("--max-duration", type=float, default=None)
    return parser


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    try:
        config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        message = _read(ns.file)
    except OSError as e:
        print(f"Cannot read message: {e}", file=sys.stderr)
        sys.exit(1)

    if ns.command == "parse":
        fields = parse_message(message)
        result = {
            "fields": fields,
            "event": classify(fields).model_dump(mode="json"),
        }
        print(json.dumps(result, indent=2))
        return

    # Lazy-import to avoid creating boto3 clients for `parse`
    from certsync.base.config import ReconcilerSettings
    from certsync.base.exceptions import CertsyncError
    from certsync.factory import service_factory
    from certsync.reconciler import Notification, Reconciler

    overrides = {
        "poll_interval": ns.poll_interval,
        "poll_max_attempts": ns.max_attempts,
        "poll_max_duration": ns.max_duration,
    }
    settings = ReconcilerSettings(**{k: v for k, v in overrides.items() if v is not None})
    reconciler = Reconciler(
        service_factory("certificates", config),
        service_factory("dns", config),
        settings,
    )

    try:
        outcome = asyncio.run(reconciler.process(Notification("cli", message)))
    except CertsyncError as e:
        print(f"Reconciliation failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(outcome.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    main()
