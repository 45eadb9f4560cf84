# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""zuulguard CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..config import HttpSettings, load_http_settings
from ..errors import TransportError, ZuulGuardError
from ..http import create_default_http_client
from ..log import setup_logging
from ..models import ResultSet
from ..runtime import ZuulGuard
from ..scan.targets import read_targets


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zuulguard",
        description="Scan Netflix Zuul admin consoles for the nflx-2016-003 filter upload RCE",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="prints verbose information during command execution",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    passive = subparsers.add_parser("passive", help="Executes a new passive scan against the specified targets")
    passive.add_argument("targets", nargs="+", metavar="target")

    bulk = subparsers.add_parser(
        "passivebulk",
        help="Executes a new passive scan against the targets specified in a file",
    )
    bulk.add_argument("targets_file", metavar="targets-file")

    active = subparsers.add_parser("active", help="Executes a new active scan against the specified target")
    active.add_argument("target")
    active.add_argument(
        "--callback",
        default="",
        help="URL the uploaded filter calls back to when it gets loaded",
    )
    active.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    return parser


def _print_json(data: dict[str, Any]) -> None:
    json.dump(data, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(target: str, result: ResultSet, error: Exception | None) -> None:
    print(f"[zuulguard] {target}: {result.status.value}")
    facets = sorted(k for k, v in result.to_dict().items() if v is True)
    if facets:
        print(f"Facets: {', '.join(facets)}")
    if error is not None:
        print(f"Error: {error}")
        if isinstance(error, TransportError) and error.reason:
            print(f"Reason: {error.reason}")


def _run_active(guard: ZuulGuard, args: argparse.Namespace) -> int:
    error: ZuulGuardError | None = None
    try:
        result = guard.active_scan(args.target, args.callback)
    except ZuulGuardError as exc:
        error = exc
        result = exc.result or ResultSet()

    if args.json:
        payload: dict[str, Any] = {"target": args.target, "result": result.to_dict()}
        payload["error"] = None if error is None else {"type": type(error).__name__, "message": str(error)}
        _print_json(payload)
    else:
        _pretty_print(args.target, result, error)
    return 1 if error is not None else 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    if args.command == "passivebulk":
        try:
            targets = read_targets(args.targets_file)
        except OSError as exc:
            print(f"unable to read targets file: {exc}", file=sys.stderr)
            return 1
    elif args.command == "passive":
        targets = list(args.targets)

    http_client = create_default_http_client(settings)

    with ZuulGuard(http_client=http_client) as guard:
        if args.command == "active":
            return _run_active(guard, args)
        guard.orchestrator.run(targets, verbose=args.verbose)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
