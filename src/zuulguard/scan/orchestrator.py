# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bounded concurrent passive scanning over many targets."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from ..constants import DEFAULT_MAX_CONCURRENCY
from ..models.result import ResultSet
from ..models.scan import Classification, ScanOutcome
from ..probes.passive import passive_scan

logger = logging.getLogger(__name__)

Probe = Callable[[str], ResultSet]


class ScanOrchestrator:
    """
    Run a probe against many targets with at most `max_concurrency` in flight.

    Targets are admitted in input order and wait in the executor queue until a worker
    frees up. Workers never block on result delivery: each outcome lives in its
    future until the consumer picks it up. Outcomes are produced in completion order.
    """

    def __init__(self, probe: Probe | None = None, *, max_concurrency: int = DEFAULT_MAX_CONCURRENCY):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self.probe: Probe = probe or passive_scan
        self.max_concurrency = max_concurrency

    def scan(self, targets: Iterable[str]) -> Iterator[ScanOutcome]:
        """
        Yield a ScanOutcome for every vulnerable target and every failed probe.

        The iterator is exhausted only once every probe has finished.
        """
        target_list = list(targets)
        if not target_list:
            return

        with ThreadPoolExecutor(max_workers=self.max_concurrency, thread_name_prefix="zuulguard-scan") as executor:
            futures: list[Future[ScanOutcome | None]] = [executor.submit(self._probe_one, target) for target in target_list]
            try:
                for future in as_completed(futures):
                    outcome = future.result()
                    if outcome is not None:
                        yield outcome
            finally:
                for future in futures:
                    future.cancel()

    def run(
        self,
        targets: Iterable[str],
        *,
        verbose: bool = False,
        out: Callable[[str], None] = print,
    ) -> int:
        """Print vulnerable targets as they arrive (errors only when verbose). Returns the vulnerable count."""
        vulnerable = 0
        for outcome in self.scan(targets):
            if outcome.is_vulnerable:
                vulnerable += 1
                out(f"{outcome.target} is vulnerable")
            elif verbose:
                out(f"{outcome.target}: {outcome.error}")
        return vulnerable

    def _probe_one(self, target: str) -> ScanOutcome | None:
        try:
            result = self.probe(target)
        except Exception as exc:  # noqa: BLE001
            logger.debug("probe of %r failed: %s", target, exc)
            return ScanOutcome(target=target, classification=Classification.ERROR, error=exc)
        if result.vulnerable:
            return ScanOutcome(target=target, classification=Classification.VULNERABLE)
        return None


__all__ = ["Probe", "ScanOrchestrator"]
