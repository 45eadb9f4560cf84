# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bulk scan outcome models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Classification(str, Enum):
    VULNERABLE = "VULNERABLE"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ScanOutcome:
    target: str
    classification: Classification
    error: Exception | None = None

    @property
    def is_vulnerable(self) -> bool:
        return self.classification == Classification.VULNERABLE
