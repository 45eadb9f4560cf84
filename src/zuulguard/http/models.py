# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across zuulguard."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Headers = dict[str, str]
# Multipart parts in httpx form: field name -> (filename, content)
Files = dict[str, tuple[str, bytes]]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    data: dict[str, str] | None = None
    files: Files | None = None
    timeout: float | None = None
    allow_redirects: bool = False


@dataclass
class HttpResponse:
    """Normalized HTTP response with the minimal metadata the probes read."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_transport_failure(self) -> bool:
        """True when no HTTP status was received at all."""
        return not self.ok and self.status_code is None
