# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for zuulguard."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .artifact import ProbeArtifact
from .result import ResultSet, ScanStatus
from .scan import Classification, ScanOutcome

__all__ = [
    "Classification",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProbeArtifact",
    "ResultSet",
    "ScanOutcome",
    "ScanStatus",
]
