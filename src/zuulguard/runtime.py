# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level zuulguard facade for passive, active and bulk scans."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from contextlib import suppress

from .config import load_http_settings
from .constants import DEFAULT_MAX_CONCURRENCY
from .http.boundary import HttpBoundary
from .http.client import HttpClient, create_default_http_client
from .models import ResultSet, ScanOutcome
from .probes.active import ActiveProbe
from .probes.confirmation import ConfirmationSignal
from .probes.passive import PassiveProbe
from .scan.orchestrator import ScanOrchestrator


class ZuulGuard:
    """
    Convenience wrapper that wires one shared HTTP client across every probe.

    The client is thread-safe, so bulk passive scans reuse it from every worker.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        sleep: Callable[[float], None] | None = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        self.http_settings = load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.boundary = HttpBoundary(self.http_client)
        self.passive_probe = PassiveProbe(self.boundary)
        self.active_probe = ActiveProbe(self.boundary) if sleep is None else ActiveProbe(self.boundary, sleep=sleep)
        self.orchestrator = ScanOrchestrator(self.passive_scan, max_concurrency=max_concurrency)

    def passive_scan(self, target: str) -> ResultSet:
        return self.passive_probe.run(target)

    def active_scan(self, target: str, callback: str = "", signal: ConfirmationSignal | None = None) -> ResultSet:
        """
        Run the active protocol. Without an explicit signal a fresh, never-notified one
        is used, leaving only the in-band confirmation path.
        """
        return self.active_probe.run(target, callback, signal if signal is not None else ConfirmationSignal())

    def scan_many(self, targets: Iterable[str]) -> Iterator[ScanOutcome]:
        return self.orchestrator.scan(targets)

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> ZuulGuard:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
