# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory upload artifact."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProbeArtifact:
    filename: str
    content: bytes = b""

    @classmethod
    def from_text(cls, filename: str, text: str) -> "ProbeArtifact":
        return cls(filename=filename, content=text.encode("utf-8"))
