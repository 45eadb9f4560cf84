# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Passive and active Zuul admin console probes."""

from .active import ActiveProbe, active_scan, backoff_delay
from .confirmation import ConfirmationSignal
from .passive import PassiveProbe, passive_scan

__all__ = [
    "ActiveProbe",
    "ConfirmationSignal",
    "PassiveProbe",
    "active_scan",
    "backoff_delay",
    "passive_scan",
]
