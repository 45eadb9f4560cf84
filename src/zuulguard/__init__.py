# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
zuulguard package entrypoint.

This package verifies whether a Netflix Zuul admin console allows unauthenticated
filter upload and execution (Netflix security advisory nflx-2016-003). A passive
probe classifies a single upload response; an active probe uploads a filter and
proves it runs, either through an out-of-band callback or by polling an endpoint
the filter answers. HTTP behavior is abstracted behind an injectable client
interface, and results are modeled with typed dataclasses.
"""

from .config import HttpSettings, load_http_settings
from .errors import (
    ActivationError,
    ActivationTimeoutError,
    DeactivationError,
    InvalidInputError,
    ParseError,
    RegistryUnavailableError,
    StateInconsistencyError,
    TransportError,
    ZuulGuardError,
)
from .http import HttpBoundary, HttpClient, HttpRequest, HttpResponse, HttpxClient, create_default_http_client
from .log import setup_logging
from .models import Classification, ProbeArtifact, ResultSet, ScanOutcome, ScanStatus
from .probes import ActiveProbe, ConfirmationSignal, PassiveProbe, active_scan, backoff_delay, passive_scan
from .registry import fetch_filter_registry, parse_filter_registry
from .runtime import ZuulGuard
from .scan import ScanOrchestrator, read_targets
from .version import __version__

__all__ = [
    "ActivationError",
    "ActivationTimeoutError",
    "ActiveProbe",
    "Classification",
    "ConfirmationSignal",
    "DeactivationError",
    "HttpBoundary",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InvalidInputError",
    "ParseError",
    "PassiveProbe",
    "ProbeArtifact",
    "RegistryUnavailableError",
    "ResultSet",
    "ScanOrchestrator",
    "ScanOutcome",
    "ScanStatus",
    "StateInconsistencyError",
    "TransportError",
    "ZuulGuard",
    "ZuulGuardError",
    "active_scan",
    "backoff_delay",
    "create_default_http_client",
    "fetch_filter_registry",
    "load_http_settings",
    "parse_filter_registry",
    "passive_scan",
    "read_targets",
    "setup_logging",
    "__version__",
]
