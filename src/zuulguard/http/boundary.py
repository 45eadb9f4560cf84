# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""The three HTTP operations the probes rely on, with transport failures raised."""

from __future__ import annotations

import logging

from ..constants import UPLOAD_FIELD_NAME
from ..errors import ErrorCategory, TransportError
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpBoundary:
    """
    Thin wrapper around an HttpClient.

    Every call is issued exactly once and never follows redirects. A response without
    an HTTP status (DNS failure, refused connection, malformed URL) is raised as
    TransportError; any response carrying a status is returned to the caller for
    classification.
    """

    def __init__(self, client: HttpClient):
        self.client = client

    def get(self, url: str) -> HttpResponse:
        return self._send(HttpRequest(url=url, method="GET"))

    def post_form(self, url: str, fields: dict[str, str]) -> HttpResponse:
        return self._send(HttpRequest(url=url, method="POST", data=dict(fields)))

    def post_multipart(
        self,
        url: str,
        filename: str,
        content: bytes,
        *,
        field_name: str = UPLOAD_FIELD_NAME,
    ) -> HttpResponse:
        return self._send(HttpRequest(url=url, method="POST", files={field_name: (filename, content)}))

    def _send(self, request: HttpRequest) -> HttpResponse:
        logger.debug("%s %s", request.method, request.url)
        try:
            response = self.client.request(request)
        except Exception as exc:  # noqa: BLE001
            if isinstance(exc, (KeyboardInterrupt, SystemExit)):
                raise
            raise TransportError(
                f"{request.method} {request.url}: {exc}",
                url=request.url,
                error_type=type(exc).__name__,
            ) from exc

        if response.status_code is None:
            category = response.meta.get("error_category", ErrorCategory.UNKNOWN_ERROR)
            raise TransportError(
                f"{request.method} {request.url}: {response.error_message or 'no response'}",
                url=request.url,
                error_type=response.error_type,
                category=category,
            )

        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        return response


__all__ = ["HttpBoundary"]
