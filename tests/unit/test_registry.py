# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from zuulguard.errors import ParseError, RegistryUnavailableError, TransportError
from zuulguard.http.adapters import StubHttpClient, respond, transport_failure
from zuulguard.http.boundary import HttpBoundary
from zuulguard.registry import fetch_filter_registry, parse_filter_registry, revision_of

VCHECK_LINK = "<td><a id=1 href=scriptmanager?action=DOWNLOAD&filter_id=origin:Vulncheck:pre&revision={}>DOWNLOAD</a></td>"
DUMMY_LINK = "<td><a id=2 href=scriptmanager?action=DOWNLOAD&filter_id=dummy&revision={}>DOWNLOAD</a></td>"


def _page(*rows: str) -> str:
    return "<html><body><table><tr>" + "".join(rows) + "</tr></table></body></html>"


def test_keeps_highest_revision_per_filter():
    page = _page(
        '<a href="scriptmanager?filter_id=A&revision=1">x</a>',
        '<a href="scriptmanager?filter_id=A&revision=5">x</a>',
        '<a href="scriptmanager?filter_id=A&revision=3">x</a>',
    )
    assert parse_filter_registry(page) == {"A": 5}


def test_unquoted_attributes_and_multiple_filters():
    page = _page(VCHECK_LINK.format(1), VCHECK_LINK.format(2), DUMMY_LINK.format(3))
    registry = parse_filter_registry(page)
    assert registry == {"origin:Vulncheck:pre": 2, "dummy": 3}


def test_nested_anchors_are_visited():
    page = "<div><ul><li><span><a href='/x?filter_id=deep&amp;revision=7'>d</a></span></li></ul></div>"
    assert parse_filter_registry(page) == {"deep": 7}


def test_anchors_without_filter_params_are_skipped():
    page = _page(
        '<a href="/admin/index.jsp">home</a>',
        "<a>no href</a>",
        '<a href="?revision=9">revision only</a>',
        DUMMY_LINK.format(4),
    )
    assert parse_filter_registry(page) == {"dummy": 4}


def test_empty_page_yields_empty_registry():
    assert parse_filter_registry("") == {}
    assert parse_filter_registry("<html></html>") == {}


@pytest.mark.parametrize("revision", ["NaN", "1.5", "-3", "", "0x10"])
def test_invalid_revision_is_a_parse_error(revision):
    with pytest.raises(ParseError):
        parse_filter_registry(_page(VCHECK_LINK.format(revision)))


def test_filter_link_without_revision_is_a_parse_error():
    with pytest.raises(ParseError):
        parse_filter_registry(_page('<a href="scriptmanager?filter_id=dummy">x</a>'))


@pytest.mark.parametrize("href", [":", ":/foo?filter_id=a&revision=1", "http://[::1?filter_id=a&revision=1", "/a\x01b?filter_id=a&revision=1"])
def test_malformed_href_is_a_parse_error(href):
    with pytest.raises(ParseError):
        parse_filter_registry(f'<td><a href="{href}">DOWNLOAD</a>')


def test_only_first_href_of_an_anchor_counts():
    page = '<a href="/x?filter_id=a&revision=1" href="/x?filter_id=a&revision=9">x</a>'
    assert parse_filter_registry(page) == {"a": 1}


def test_revision_of_defaults_to_zero():
    assert revision_of({"a": 3}, "a") == 3
    assert revision_of({}, "a") == 0


def test_fetch_filter_registry_reads_loader_page():
    stub = StubHttpClient()
    stub.route("GET", "/admin/filterLoader.jsp", respond(200, _page(VCHECK_LINK.format(6))))
    registry = fetch_filter_registry(HttpBoundary(stub), "http://zuul.test/")
    assert registry == {"origin:Vulncheck:pre": 6}
    assert stub.requests[0].url == "http://zuul.test/admin/filterLoader.jsp"


def test_fetch_filter_registry_rejects_non_200():
    stub = StubHttpClient()
    with pytest.raises(RegistryUnavailableError):
        fetch_filter_registry(HttpBoundary(stub), "http://zuul.test")


def test_fetch_filter_registry_propagates_transport_errors():
    stub = StubHttpClient({"http://zuul.test/admin/filterLoader.jsp": transport_failure()})
    with pytest.raises(TransportError):
        fetch_filter_registry(HttpBoundary(stub), "http://zuul.test")
