# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared test utilities for unit tests.

Provides real :class:`requests.Response` builders and a scripted stand-in for
:class:`~jamfpro_sdk.core._http._HttpClient` so tests exercise the same
objects the SDK sees in production.
"""

import json
import threading

import requests
from requests.structures import CaseInsensitiveDict

XML = "application/xml"
JSON = "application/json"
HTML = "text/html; charset=utf-8"


def make_response(status=200, body=b"", content_type=None, headers=None, url=None):
    """Build a :class:`requests.Response` without touching the network.

    Args:
        status: HTTP status code.
        body: ``bytes``, ``str``, or a dict/list that is JSON-encoded.
        content_type: Value of the ``Content-Type`` header, if any.
        headers: Extra response headers.
        url: Request URL recorded on the response.
    """
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    r = requests.Response()
    r.status_code = status
    r._content = body
    r.encoding = "utf-8"
    r.headers = CaseInsensitiveDict(headers or {})
    if content_type is not None:
        r.headers["Content-Type"] = content_type
    r.url = url or ""
    return r


def token_response(token="tok-1", expires_in=1800):
    return make_response(200, {"access_token": token, "token_type": "Bearer", "expires_in": expires_in}, JSON)


def bearer_response(token="bearer-1", expires="2099-01-01T00:00:00.000Z"):
    return make_response(200, {"token": token, "expires": expires}, JSON)


class ScriptedHttp:
    """Stand-in for ``_HttpClient`` that serves queued responses.

    Each entry is a :class:`requests.Response`, an exception instance to raise,
    or a callable ``(method, url, kwargs) -> Response``.

    Attributes:
        calls: ``(method, url, kwargs)`` tuples for every request made.
    """

    def __init__(self, responses=()):
        self._responses = list(responses)
        self._lock = threading.Lock()
        self.calls = []
        self.closed = False

    def queue(self, *responses):
        with self._lock:
            self._responses.extend(responses)

    def _request(self, method, url, **kwargs):
        with self._lock:
            self.calls.append((method, url, kwargs))
            if not self._responses:
                raise AssertionError(f"No scripted response left for {method} {url}")
            item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        if callable(item):
            return item(method, url, kwargs)
        return item

    def close(self):
        self.closed = True

    def urls(self):
        return [url for _, url, _ in self.calls]
