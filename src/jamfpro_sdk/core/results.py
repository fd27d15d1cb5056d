# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Result types for Jamf Pro SDK dispatches.

- :class:`ResponseMetadata`: HTTP request/response metadata for diagnostics.
- :class:`OperationResult`: decoded value paired with the metadata of the exchange that produced it.

Example::

    result = client.dispatch("GET", "/api/v1/api-roles", out_shape=ApiRoleList)
    print(result.value.total_count)
    print(result.metadata.status_code, result.metadata.timing_ms)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ResponseMetadata:
    """
    HTTP request/response metadata for a single dispatched request.

    :param method: Upper-case HTTP method that was sent.
    :type method: :class:`str`
    :param url: Fully-qualified request URL.
    :type url: :class:`str`
    :param status_code: HTTP response status code.
    :type status_code: :class:`int`
    :param content_type: Response ``Content-Type`` header, if any.
    :type content_type: :class:`str` | None
    :param headers: Response headers.
    :type headers: :class:`dict`
    :param timing_ms: Duration of the HTTP exchange in milliseconds.
    :type timing_ms: :class:`float` | None
    """

    method: str
    url: str
    status_code: int
    content_type: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    timing_ms: Optional[float] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Decoded response value together with its :class:`ResponseMetadata`.

    :param value: Decoded body. A shape instance when an output shape was supplied,
        the parsed JSON or XML root element otherwise, raw ``bytes`` for binary
        downloads, or ``None`` for DELETE and empty responses.
    :param metadata: Metadata of the HTTP exchange.
    :type metadata: :class:`ResponseMetadata`
    """

    value: T
    metadata: ResponseMetadata


__all__ = ["ResponseMetadata", "OperationResult"]
