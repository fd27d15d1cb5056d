# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP client with timeout handling, transport error translation, and optional session support.

This module provides :class:`~jamfpro_sdk.core._http._HttpClient`, a thin wrapper
around the requests library that applies method-dependent default timeouts,
translates network failures into :class:`~jamfpro_sdk.core.errors.TransportError`,
and optionally reuses a :class:`requests.Session` for connection pooling.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

from ._error_codes import TRANSPORT_CONNECTION, TRANSPORT_REQUEST, TRANSPORT_TIMEOUT
from .errors import TransportError


class _HttpClient:
    """
    HTTP client with timeout handling and optional session support.

    Exactly one outbound call is made per :meth:`_request`. Business calls are
    never retried here.

    :param timeout: Default request timeout in seconds. If None, uses per-method defaults.
    :type timeout: :class:`float` | None
    :param session: Optional requests.Session for connection pooling. If provided,
        all requests use this session for efficient connection reuse.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout: Optional[float] = timeout
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute a single HTTP request with timeout management.

        Applies default timeouts based on HTTP method (120s for POST/PUT/DELETE, 10s for others)
        unless the caller passes ``timeout`` explicitly.

        :param method: HTTP method (GET, POST, PUT, DELETE, etc.).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, including headers, data, etc.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises TransportError: On timeout, connection failure, or any other
            :class:`requests.exceptions.RequestException`.
        """
        if kwargs.get("timeout") is None:
            if self.default_timeout is not None:
                kwargs["timeout"] = self.default_timeout
            else:
                m = (method or "").lower()
                kwargs["timeout"] = 120 if m in ("post", "put", "delete") else 10

        try:
            if self._session is not None:
                return self._session.request(method, url, **kwargs)
            return requests.request(method, url, **kwargs)
        except requests.exceptions.Timeout as exc:
            raise TransportError(
                f"{method.upper()} {url} timed out: {exc}",
                subcode=TRANSPORT_TIMEOUT,
                is_transient=True,
                details={"url": url, "timeout": kwargs["timeout"]},
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise TransportError(
                f"{method.upper()} {url} failed to connect: {exc}",
                subcode=TRANSPORT_CONNECTION,
                is_transient=True,
                details={"url": url},
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(
                f"{method.upper()} {url} failed: {exc}",
                subcode=TRANSPORT_REQUEST,
                details={"url": url},
            ) from exc

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        If a session was provided, this method closes it. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
