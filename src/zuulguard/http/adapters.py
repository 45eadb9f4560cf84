# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Deterministic HttpClient implementations for tests and offline replays."""

from __future__ import annotations

import threading
from collections.abc import Callable
from urllib.parse import urlsplit

from .client import HttpClient
from .models import HttpRequest, HttpResponse

RouteHandler = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """
    Programmable HttpClient.

    Responses are looked up first by exact URL (`add`), then by `(method, path)` route
    (`route`). Route handlers receive the request so they can inspect query strings or
    form fields and mutate whatever state object they close over. Unmatched requests
    produce a 404 response.
    """

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses = responses or {}
        self._routes: dict[tuple[str, str], RouteHandler] = {}
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    def route(self, method: str, path: str, handler: RouteHandler | HttpResponse) -> None:
        if isinstance(handler, HttpResponse):
            fixed = handler
            self._routes[(method.upper(), path)] = lambda _request: fixed
        else:
            self._routes[(method.upper(), path)] = handler

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        if request.url in self._responses:
            return self._responses[request.url]
        handler = self._routes.get((request.method.upper(), urlsplit(request.url).path))
        if handler is not None:
            return handler(request)
        return HttpResponse(ok=True, status_code=404, url=request.url, text="404 page not found\n")

    def paths(self) -> list[str]:
        """Return the request paths (with query) seen so far, in order."""
        with self._lock:
            seen = list(self.requests)
        out = []
        for request in seen:
            parts = urlsplit(request.url)
            out.append(parts.path + (f"?{parts.query}" if parts.query else ""))
        return out

    def close(self) -> None:
        return None


def respond(status_code: int, text: str = "", *, headers: dict[str, str] | None = None) -> HttpResponse:
    """Build a successful-transport HttpResponse with the given status and body."""
    return HttpResponse(
        ok=True,
        status_code=status_code,
        headers=dict(headers or {}),
        text=text,
        content=text.encode("utf-8"),
    )


def transport_failure(message: str = "connection refused", error_type: str = "ConnectError") -> HttpResponse:
    """Build an HttpResponse describing a request that never got a status."""
    return HttpResponse(ok=False, error_message=message, error_type=error_type)


__all__ = ["RouteHandler", "StubHttpClient", "respond", "transport_failure"]
