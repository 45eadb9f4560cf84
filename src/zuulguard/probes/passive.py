# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Passive probe: a single empty upload classified by status code and body."""

from __future__ import annotations

import logging

from ..constants import UPLOAD_ENDPOINT, VULNERABLE_DORK, endpoint_url
from ..errors import InvalidInputError
from ..http.boundary import HttpBoundary
from ..http.client import HttpClient, create_default_http_client
from ..models.result import ResultSet
from .artifacts import build_empty_artifact

logger = logging.getLogger(__name__)


class PassiveProbe:
    """
    Upload a zero-length filter and read how the admin console rejects it.

    | Response                    | Facet                 |
    |-----------------------------|-----------------------|
    | 400 with the usage message  | vulnerable            |
    | 403                         | admin_disabled        |
    | anything else               | none                  |
    """

    def __init__(self, boundary: HttpBoundary):
        self.boundary = boundary

    def run(self, target: str) -> ResultSet:
        if not target:
            raise InvalidInputError(f"target can not be empty, target: {target!r}")

        result = ResultSet()
        artifact = build_empty_artifact()
        response = self.boundary.post_multipart(
            endpoint_url(target, UPLOAD_ENDPOINT),
            artifact.filename,
            artifact.content,
        )

        if response.status_code == 400:
            result.vulnerable = VULNERABLE_DORK in response.text
        elif response.status_code == 403:
            # Admin portal explicitly disabled.
            result.admin_disabled = True

        logger.debug("passive scan of %s -> %s", target, result.status.value)
        return result


def passive_scan(target: str, http_client: HttpClient | None = None) -> ResultSet:
    """Run a passive scan, creating (and closing) a default client when none is given."""
    if not target:
        raise InvalidInputError(f"target can not be empty, target: {target!r}")
    if http_client is not None:
        return PassiveProbe(HttpBoundary(http_client)).run(target)
    client = create_default_http_client()
    try:
        return PassiveProbe(HttpBoundary(client)).run(target)
    finally:
        client.close()


__all__ = ["PassiveProbe", "passive_scan"]
