# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from zuulguard.config import HttpSettings
from zuulguard.errors import ErrorCategory, TransportError
from zuulguard.http.adapters import StubHttpClient, respond
from zuulguard.http.boundary import HttpBoundary
from zuulguard.http.httpx_client import HttpxClient
from zuulguard.http.models import HttpRequest, HttpResponse


def test_httpx_client_success_and_error(monkeypatch):
    requests = []

    class FakeHttpxClient:
        def __init__(self, follow_redirects, timeout, verify):  # noqa: ARG002
            self.follow_redirects = follow_redirects
            self.timeout = timeout
            self.verify = verify

        def stream(self, method, url, headers=None, content=None, data=None, files=None, timeout=None, follow_redirects=None):  # noqa: ARG002
            requests.append(
                {
                    "method": method,
                    "url": url,
                    "headers": headers,
                    "content": content,
                    "data": data,
                    "files": files,
                    "timeout": timeout,
                    "follow_redirects": follow_redirects,
                }
            )

            class Resp:
                status_code = 302
                headers = httpx.Headers({"Location": "http://donotfollow.example.com"})
                encoding = "utf-8"

                def __init__(self, response_url: str):
                    self.url = httpx.URL(response_url)

                def iter_bytes(self):  # pragma: no cover - exercised via HttpxClient
                    yield b""

            class _Ctx:
                def __enter__(self):  # pragma: no cover - exercised via HttpxClient
                    return Resp(url)

                def __exit__(self, exc_type, exc, tb):  # noqa: ARG002  # pragma: no cover
                    return None

            return _Ctx()

        def close(self):  # pragma: no cover - sanity check
            requests.append({"closed": True})

    monkeypatch.setattr(httpx, "Client", FakeHttpxClient)
    client = HttpxClient(HttpSettings(user_agent="UA/1.0"))
    resp = client.request(
        HttpRequest(
            url="http://example/admin/scriptmanager",
            method="POST",
            data={"action": "ACTIVATE"},
            timeout=1.2,
        )
    )
    assert resp.ok is True
    assert resp.status_code == 302
    assert requests[0]["headers"]["User-Agent"] == "UA/1.0"
    assert requests[0]["timeout"] == 1.2
    assert requests[0]["follow_redirects"] is False
    assert requests[0]["data"] == {"action": "ACTIVATE"}

    class ErrorClient(FakeHttpxClient):
        def stream(self, *_, **__):
            raise httpx.ConnectTimeout("boom")

    monkeypatch.setattr(httpx, "Client", ErrorClient)
    err_client = HttpxClient(HttpSettings())
    err_resp = err_client.request(HttpRequest(url="http://example"))
    assert err_resp.ok is False
    assert err_resp.status_code is None
    assert err_resp.error_message == "boom"
    assert err_resp.meta["error_category"] == ErrorCategory.TIMEOUT


def test_httpx_client_sends_multipart_and_does_not_follow_redirects():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.read()
        return httpx.Response(302, headers={"Location": "http://donotfollow.example.com/"})

    transport_client = httpx.Client(transport=httpx.MockTransport(handler))
    client = HttpxClient(HttpSettings(), client=transport_client)
    response = HttpBoundary(client).post_multipart("http://zuul.test/admin/scriptmanager?action=UPLOAD", "Emptyfile.groovy", b"")

    assert response.status_code == 302
    assert seen["content_type"].startswith("multipart/form-data; boundary=")
    assert b'name="upload"; filename="Emptyfile.groovy"' in seen["body"]
    client.close()


def test_httpx_client_truncates_large_bodies():
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"x" * 64)

    client = HttpxClient(HttpSettings(max_body_bytes=16), client=httpx.Client(transport=httpx.MockTransport(handler)))
    response = client.request(HttpRequest(url="http://zuul.test/"))
    assert response.content == b"x" * 16
    assert response.meta["body_truncated"] is True


def test_httpx_client_reports_malformed_urls():
    client = HttpxClient(HttpSettings())
    response = client.request(HttpRequest(url="htfewp://test.e::xam:ple.com/admin/scriptmanager?action=UPLOAD"))
    assert response.ok is False
    assert response.meta["error_category"] == ErrorCategory.INVALID_URL
    client.close()


def test_boundary_raises_transport_error_with_category():
    stub = StubHttpClient(
        {
            "http://zuul.test/": HttpResponse(
                ok=False,
                error_message="nodename nor servname provided",
                error_type="ConnectError",
                meta={"error_category": ErrorCategory.DNS_ERROR},
            )
        }
    )
    with pytest.raises(TransportError) as excinfo:
        HttpBoundary(stub).get("http://zuul.test/")
    assert excinfo.value.category == ErrorCategory.DNS_ERROR
    assert excinfo.value.error_type == "ConnectError"
    assert excinfo.value.reason == "DNS resolution failure"


def test_boundary_wraps_client_exceptions():
    class Exploding:
        def request(self, request):  # noqa: ARG002
            raise RuntimeError("kaboom")

    with pytest.raises(TransportError, match="kaboom"):
        HttpBoundary(Exploding()).post_form("http://zuul.test/admin/scriptmanager", {"a": "b"})


def test_boundary_returns_http_errors_unchanged():
    stub = StubHttpClient()
    stub.route("GET", "/vulncheck-spt", respond(500, "oops"))
    response = HttpBoundary(stub).get("http://zuul.test/vulncheck-spt")
    assert response.status_code == 500
    assert response.text == "oops"


def test_stub_http_client_prefers_exact_urls_then_routes():
    stub = StubHttpClient()
    stub.add("http://example/a", respond(200, "exact"))
    stub.route("GET", "/a", respond(201, "route"))
    assert stub.request(HttpRequest(url="http://example/a")).text == "exact"
    assert stub.request(HttpRequest(url="http://other/a")).status_code == 201
    assert stub.request(HttpRequest(url="http://other/missing")).status_code == 404
    assert stub.paths() == ["/a", "/a", "/missing"]
