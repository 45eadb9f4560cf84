# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .models.result import ResultSet


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    INVALID_URL = "INVALID_URL"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorCategory.INVALID_URL

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        cause = exc.__cause__ or exc.__context__
        if isinstance(cause, socket.gaierror):
            return ErrorCategory.DNS_ERROR
        if isinstance(cause, ssl_module.SSLError):
            return ErrorCategory.SSL_ERROR
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, ValueError):
        return ErrorCategory.INVALID_URL

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout during probe",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.INVALID_URL: "Malformed target URL",
        ErrorCategory.UNKNOWN_ERROR: "Network error during probe",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Probe failed due to network error")


class ZuulGuardError(Exception):
    """
    Base class for scan failures.

    `result` holds the ResultSet as it stood when the failure was raised, so callers
    can still read facets that were settled before the error (e.g. a confirmed
    `vulnerable` flag when only the cleanup step failed).
    """

    def __init__(self, message: str, *, result: ResultSet | None = None):
        super().__init__(message)
        self.result = result


class InvalidInputError(ZuulGuardError, ValueError):
    """Rejected arguments; raised before any network activity."""


class TransportError(ZuulGuardError):
    """DNS/connection/malformed-URL failure reported by the HTTP boundary."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        error_type: str | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        result: ResultSet | None = None,
    ):
        super().__init__(message, result=result)
        self.url = url
        self.error_type = error_type
        self.category = category

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


class ParseError(ZuulGuardError):
    """The filter registry page could not be parsed."""


class RegistryUnavailableError(ZuulGuardError):
    """The filter registry page did not answer with 200."""


class StateInconsistencyError(ZuulGuardError):
    """The upload looked successful but the registry revision did not advance."""


class ActivationError(ZuulGuardError):
    """The activation request was not answered with a redirect."""


class ActivationTimeoutError(ZuulGuardError):
    """The probe filter was uploaded but never became active."""


class DeactivationError(ZuulGuardError):
    """The cleanup request failed; the preceding verdict still stands."""


__all__ = [
    "ActivationError",
    "ActivationTimeoutError",
    "DeactivationError",
    "ErrorCategory",
    "InvalidInputError",
    "ParseError",
    "RegistryUnavailableError",
    "StateInconsistencyError",
    "TransportError",
    "ZuulGuardError",
    "categorize_exception",
    "error_category_to_reason",
]
