# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-slot mailbox carrying the out-of-band callback confirmation."""

from __future__ import annotations

import queue


class ConfirmationSignal:
    """
    Mailbox written by the callback listener and read once by an ActiveProbe run.

    One signal belongs to exactly one active scan. The listener calls `notify()` when a
    callback from the uploaded filter arrives; the probe calls `poll()` once, without
    blocking. A signal with capacity 0 can never hold a notification and is rejected
    by the probe before any network activity.
    """

    def __init__(self, capacity: int = 1):
        self.capacity = capacity
        self._queue: queue.Queue[bool] | None = queue.Queue(maxsize=capacity) if capacity > 0 else None

    def notify(self) -> bool:
        """Record a received callback. Returns False when the mailbox cannot take it."""
        if self._queue is None:
            return False
        try:
            self._queue.put_nowait(True)
        except queue.Full:
            return False
        return True

    def poll(self) -> bool:
        """Consume a pending notification, if any, without waiting."""
        if self._queue is None:
            return False
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return False


__all__ = ["ConfirmationSignal"]
