# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured error types for the Jamf Pro SDK.

Every failure surfaced by the transport runtime is a :class:`JamfProError`
subclass carrying a stable ``code``, an optional ``subcode``, the HTTP status
(where one applies) and a ``details`` bag for diagnostics.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ._error_codes import _http_subcode, _is_transient_status


class JamfProError(Exception):
    """Base structured error for the Jamf Pro SDK."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(JamfProError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class AuthenticationError(JamfProError):
    """Credential or token refresh failure. Fatal to the current request and never retried."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code="authentication_error",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="server" if status_code is not None else "client",
        )


class CapabilityError(JamfProError):
    """The selected API handler does not support the requested operation."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="capability_error", subcode=subcode, details=details, source="client")


class TransportError(JamfProError):
    """Network failure, timeout or an exhausted deadline."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        is_transient: bool = False,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code="transport_error",
            subcode=subcode,
            details=details,
            source="client",
            is_transient=is_transient,
        )


class StatusError(JamfProError):
    """Non-success HTTP response. ``message`` is a status line or text scraped from an HTML error page."""

    def __init__(
        self,
        message: str,
        status_code: int,
        *,
        body_excerpt: Optional[str] = None,
        content_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        if content_type is not None:
            d["content_type"] = content_type
        super().__init__(
            message,
            code="http_error",
            subcode=_http_subcode(status_code),
            status_code=status_code,
            details=d,
            source="server",
            is_transient=_is_transient_status(status_code),
        )


class DecodeError(JamfProError):
    """Response body present but not parseable in the expected format."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code="decode_error",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="client",
        )


__all__ = [
    "JamfProError",
    "ValidationError",
    "AuthenticationError",
    "CapabilityError",
    "TransportError",
    "StatusError",
    "DecodeError",
]
