# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bulk scan orchestration."""

from .orchestrator import ScanOrchestrator
from .targets import read_targets

__all__ = ["ScanOrchestrator", "read_targets"]
