# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .boundary import HttpBoundary
from .client import HttpClient, create_default_http_client
from .httpx_client import HttpxClient
from .models import Files, Headers, HttpRequest, HttpResponse

__all__ = [
    "Files",
    "Headers",
    "HttpBoundary",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "create_default_http_client",
]
