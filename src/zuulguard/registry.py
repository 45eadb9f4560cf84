# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Filter registry parsing.

The Zuul admin filter loader page lists every uploaded filter revision as a set of
action links such as::

    <a href="scriptmanager?action=DOWNLOAD&filter_id=origin:Vulncheck:pre&revision=3">

This module turns such a page into ``{filter_id: highest revision}``. Each call builds a
fresh mapping; comparing two snapshots is the caller's business.
"""

from __future__ import annotations

import re
from html.parser import HTMLParser
from urllib.parse import parse_qs, urlsplit

from .constants import FILTERS_ENDPOINT, endpoint_url
from .errors import ParseError, RegistryUnavailableError
from .http.boundary import HttpBoundary

FilterRegistry = dict[str, int]

_REVISION_RE = re.compile(r"[0-9]+")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def _parse_href(href: str) -> dict[str, list[str]]:
    """Validate an anchor href as a URL and return its query parameters."""
    if _CONTROL_CHARS_RE.search(href):
        raise ParseError(f"invalid control character in href {href!r}")
    try:
        parts = urlsplit(href)
        # Accessing .port validates bracketed hosts and numeric ports.
        parts.port  # noqa: B018
    except ValueError as exc:
        raise ParseError(f"malformed href {href!r}: {exc}") from exc
    if not parts.scheme and not parts.netloc:
        first_segment = parts.path.split("/", 1)[0]
        if ":" in first_segment:
            raise ParseError(f"malformed href {href!r}: missing protocol scheme")
    return parse_qs(parts.query, keep_blank_values=True)


class _FilterLinkParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.filters: FilterRegistry = {}

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag.lower() != "a":
            return
        for key, value in attrs:
            if key.lower() != "href":
                continue
            self._record(value or "")
            # Only the first href of an anchor is considered.
            break

    def _record(self, href: str) -> None:
        query = _parse_href(href)

        filter_ids = query.get("filter_id") or []
        filter_id = filter_ids[0] if filter_ids else ""
        if not filter_id:
            return

        revisions = query.get("revision")
        if not revisions:
            raise ParseError(f"filter link for {filter_id!r} has no revision")
        raw_revision = revisions[0]
        if not _REVISION_RE.fullmatch(raw_revision):
            raise ParseError(f"filter link for {filter_id!r} has a non-numeric revision {raw_revision!r}")
        revision = int(raw_revision)

        if revision > self.filters.get(filter_id, -1):
            self.filters[filter_id] = revision


def parse_filter_registry(html: str) -> FilterRegistry:
    """
    Parse a filter loader page into ``{filter_id: highest revision}``.

    Anchors without a ``filter_id`` query parameter are skipped. A filter link whose
    ``revision`` is missing or not a non-negative integer, an href that is not a valid
    URL, or a document the HTML parser rejects raises ParseError.
    """
    parser = _FilterLinkParser()
    try:
        parser.feed(html or "")
        parser.close()
    except ParseError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise ParseError(f"unable to parse filter registry page: {exc}") from exc
    return parser.filters


def revision_of(registry: FilterRegistry, filter_id: str) -> int:
    """Return the highest known revision of a filter, 0 when it was never seen."""
    return registry.get(filter_id, 0)


def fetch_filter_registry(boundary: HttpBoundary, target: str) -> FilterRegistry:
    """GET the filter loader page of a target and parse it."""
    url = endpoint_url(target, FILTERS_ENDPOINT)
    response = boundary.get(url)
    if response.status_code != 200:
        raise RegistryUnavailableError(f"unexpected status code {response.status_code} when accessing {url}")
    return parse_filter_registry(response.text)


__all__ = ["FilterRegistry", "fetch_filter_registry", "parse_filter_registry", "revision_of"]
