# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe result model."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class ScanStatus(str, Enum):
    VULNERABLE = "VULNERABLE"
    LIKELY_VULNERABLE = "LIKELY_VULNERABLE"
    PREVIOUSLY_ENABLED = "PREVIOUSLY_ENABLED"
    ADMIN_DISABLED = "ADMIN_DISABLED"
    NOT_VULNERABLE = "NOT_VULNERABLE"


@dataclass
class ResultSet:
    """
    Terminal snapshot of one probe run.

    - prev_enabled: the probe filter was already active before the run began.
    - admin_disabled: the upload endpoint answered 403.
    - vulnerable: remote code execution confirmed.
    - might_vulnerable: inconclusive, but the Cassandra dork was observed.
    """

    prev_enabled: bool = False
    admin_disabled: bool = False
    vulnerable: bool = False
    might_vulnerable: bool = False

    @property
    def status(self) -> ScanStatus:
        if self.vulnerable:
            return ScanStatus.VULNERABLE
        if self.prev_enabled:
            return ScanStatus.PREVIOUSLY_ENABLED
        if self.might_vulnerable:
            return ScanStatus.LIKELY_VULNERABLE
        if self.admin_disabled:
            return ScanStatus.ADMIN_DISABLED
        return ScanStatus.NOT_VULNERABLE

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = asdict(self)
        payload["status"] = self.status.value
        return payload
