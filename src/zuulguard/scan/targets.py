# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Target list helpers."""

from __future__ import annotations

from pathlib import Path


def read_targets(path: str | Path) -> list[str]:
    """Read a newline-delimited target file, skipping blank lines."""
    with open(path, encoding="utf-8") as handle:
        return [line.strip() for line in handle if line.strip()]


__all__ = ["read_targets"]
