# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fixed Zuul admin console endpoints, identifiers and signature strings."""

VCHECK_FILTER_ID = "origin:Vulncheck:pre"
VCHECK_FILENAME = "Vulncheck.groovy"
EMPTY_FILENAME = "Emptyfile.groovy"

FILTERS_ENDPOINT = "/admin/filterLoader.jsp"
SET_FILTER_ENDPOINT = "/admin/scriptmanager"
UPLOAD_ENDPOINT = "/admin/scriptmanager?action=UPLOAD"
VCHECK_ENDPOINT = "/vulncheck-spt"

UPLOAD_FIELD_NAME = "upload"
CONFIRMATION_BODY = "vulnerable"

# Upload endpoint reachable but rejected a malformed submission.
VULNERABLE_DORK = "Usage: /scriptManager?action=<ACTION_TYPE>&<ARGS>"
# Cassandra-backed filter store missing; the upload failed server side.
CASSANDRA_DORK = "HystrixCassandraPut"

CALLBACK_PLACEHOLDER = "http://__HOSTPORT_PLACEHOLDER__/callback/__SCAN_PLACEHOLDER__"

ACTION_ACTIVATE = "ACTIVATE"
ACTION_DEACTIVATE = "DEACTIVATE"

DEFAULT_MAX_CONCURRENCY = 30
DEFAULT_POLL_ATTEMPTS = 6


def endpoint_url(target: str, suffix: str) -> str:
    """Join a target base URL and one of the fixed endpoint suffixes."""
    return target.rstrip("/") + suffix
