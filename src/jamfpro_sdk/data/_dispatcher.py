# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request dispatcher for the Jamf Pro Classic API and Jamf Pro API.

Every resource operation funnels through :meth:`_RequestDispatcher.dispatch`,
which applies one policy to all of them:

1. Hold a concurrency slot for the whole exchange.
2. Make sure the access token is valid, refreshing it once if needed.
3. Pick the wire-format handler from the request path.
4. Encode the body, send exactly one HTTP request, and decode the response.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from ..core._auth import _TokenManager
from ..core._concurrency import _ConcurrencyGate
from ..core._error_codes import CAPABILITY_MULTIPART_UNSUPPORTED, TRANSPORT_TIMEOUT
from ..core._http import _HttpClient
from ..core.config import JamfProConfig
from ..core.credentials import Credential
from ..core.errors import CapabilityError, TransportError
from ..core.results import OperationResult, ResponseMetadata
from ._handlers import _ApiHandler, get_api_handler
from ._protocol import select_api_type

logger = logging.getLogger(__name__)

_BODY_LOG_LIMIT = 4096


class _Deadline:
    """Remaining-time budget shared by the slot wait, the token wait, and the HTTP call."""

    __slots__ = ("_expires",)

    def __init__(self, timeout: Optional[float]) -> None:
        self._expires = None if timeout is None else time.monotonic() + timeout

    def remaining(self) -> Optional[float]:
        if self._expires is None:
            return None
        left = self._expires - time.monotonic()
        if left <= 0:
            raise TransportError("Request deadline exceeded", subcode=TRANSPORT_TIMEOUT, is_transient=True)
        return left


class _RequestDispatcher:
    """
    Low-level Jamf Pro client that executes requests for both API dialects.

    :param credential: Active credential.
    :type credential: ~jamfpro_sdk.core.credentials.ClientCredentials | ~jamfpro_sdk.core.credentials.PasswordCredentials
    :param base_url: Instance base URL, e.g. ``https://acme.jamfcloud.com``.
    :type base_url: str
    :param config: Client configuration.
    :type config: ~jamfpro_sdk.core.config.JamfProConfig | None
    :param session: Optional :class:`requests.Session` for connection pooling.
    :type session: requests.Session | None
    """

    def __init__(
        self,
        credential: Credential,
        base_url: str,
        config: Optional[JamfProConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("base_url is required.")
        self.config = config or JamfProConfig.from_env()
        self._http = _HttpClient(timeout=self.config.http_timeout, session=session)
        self._tokens = _TokenManager(credential, self._http, self.base_url, self.config)
        self._gate = _ConcurrencyGate(self.config.max_concurrent_requests)

    @property
    def tokens(self) -> _TokenManager:
        return self._tokens

    @property
    def gate(self) -> _ConcurrencyGate:
        return self._gate

    def build_url(self, path: str) -> str:
        """Return the full URL for a resource ``path``."""
        if not path.startswith("/"):
            path = "/" + path
        url = f"{self.base_url}{path}"
        logger.info("Request will be made to API resource URL: %s", url)
        return url

    def _handler(self, path: str) -> _ApiHandler:
        return get_api_handler(select_api_type(path, legacy_precedence=self.config.legacy_precedence))

    # ------------------------------------------------------------ dispatch

    def dispatch(
        self,
        method: str,
        path: str,
        body: Any = None,
        out_shape: Any = None,
        *,
        timeout: Optional[float] = None,
    ) -> OperationResult[Any]:
        """
        Execute one request against the instance and decode the response.

        :param method: HTTP method (GET, POST, PUT, PATCH, DELETE).
        :type method: str
        :param path: Resource path, e.g. ``/JSSResource/departments/id/1``.
        :type path: str
        :param body: Request body: a shape dataclass instance, dict/list, XML element, or raw str/bytes.
            ``None`` sends no body.
        :param out_shape: Shape dataclass to decode into, ``bytes`` for binary downloads,
            or ``None`` for the parsed document.
        :param timeout: Overall deadline in seconds covering the slot wait, token refresh and HTTP call.
        :type timeout: float or None
        :return: Decoded value with response metadata.
        :rtype: ~jamfpro_sdk.core.results.OperationResult
        :raises AuthenticationError: If a valid token cannot be obtained. No request is sent.
        :raises CapabilityError: If the path's handler cannot encode or decode bodies.
        :raises ValidationError: If the body cannot be encoded.
        :raises TransportError: On network failure or an exhausted deadline.
        :raises StatusError: On a non-success response.
        :raises DecodeError: If the response body cannot be decoded.
        """
        method = method.upper()
        handler = self._handler(path)

        def encode() -> Dict[str, Any]:
            if body is None:
                return {"data": None, "content_type": handler.content_type_header(method)}
            data = handler.encode(body, method)
            if self.config.debug_mode and method in ("POST", "PUT", "PATCH"):
                logger.debug("Request body: %s", _loggable(data))
            return {"data": data, "content_type": handler.content_type_header(method)}

        return self._execute(method, path, handler, encode, out_shape, timeout)

    def dispatch_multipart(
        self,
        method: str,
        path: str,
        fields: Optional[Mapping[str, str]] = None,
        files: Optional[Mapping[str, str]] = None,
        out_shape: Any = None,
        *,
        timeout: Optional[float] = None,
    ) -> OperationResult[Any]:
        """
        Execute a ``multipart/form-data`` upload.

        :param fields: Form field names mapped to string values.
        :param files: Form field names mapped to local file paths.
        :raises CapabilityError: Before any resource is acquired if the path's handler
            does not support multipart bodies.

        See :meth:`dispatch` for the remaining parameters and errors.
        """
        method = method.upper()
        handler = self._handler(path)
        if not handler.supports_multipart:
            raise CapabilityError(
                f"Multipart requests are not supported for {handler.api_type.value} API path {path!r}",
                subcode=CAPABILITY_MULTIPART_UNSUPPORTED,
            )

        def encode() -> Dict[str, Any]:
            data, content_type = handler.encode_multipart(fields, files)
            return {"data": data, "content_type": content_type}

        return self._execute(method, path, handler, encode, out_shape, timeout)

    def _execute(
        self,
        method: str,
        path: str,
        handler: _ApiHandler,
        encode: Callable[[], Dict[str, Any]],
        out_shape: Any,
        timeout: Optional[float],
    ) -> OperationResult[Any]:
        deadline = _Deadline(timeout)
        with self._gate.slot(deadline.remaining()):
            token = self._tokens.ensure_valid(deadline.remaining())
            encoded = encode()
            url = self.build_url(path)
            headers = {
                "Authorization": f"Bearer {token.value}",
                "Content-Type": encoded["content_type"],
                "Accept": handler.accept_header(path),
            }
            logger.debug("%s %s (Accept: %s)", method, url, headers["Accept"])
            start = time.perf_counter()
            r = self._http._request(
                method,
                url,
                headers=headers,
                data=encoded["data"],
                timeout=deadline.remaining(),
            )
            timing_ms = (time.perf_counter() - start) * 1000
            content_type = r.headers.get("Content-Type")
            logger.debug("%s %s -> %d %s (%.1fms)", method, url, r.status_code, content_type, timing_ms)
            if self.config.debug_mode and method != "DELETE":
                logger.debug("Response body: %s", _loggable(r.content))
            metadata = ResponseMetadata(
                method=method,
                url=url,
                status_code=r.status_code,
                content_type=content_type,
                headers=dict(r.headers),
                timing_ms=timing_ms,
            )
            value = handler.decode(r, method, out_shape)
            return OperationResult(value, metadata)

    def close(self) -> None:
        """Close the underlying transport. Safe to call multiple times."""
        self._http.close()


def _loggable(data: Optional[bytes]) -> str:
    if not data:
        return ""
    text = data.decode("utf-8", errors="replace")
    if len(text) > _BODY_LOG_LIMIT:
        return text[:_BODY_LOG_LIMIT] + "...(truncated)"
    return text
