# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Wire-format handlers for the Jamf Pro Classic API and Jamf Pro API.

Classic API (``/JSSResource``):
    Request and response bodies are XML (``application/xml``). Multipart
    uploads are not supported.

Jamf Pro API (``/api``):
    Request and response bodies are JSON (``application/json``). Image download
    endpoints negotiate ``image/*``. Multipart uploads are supported.

Unknown API:
    Every other path. Encoding and decoding raise
    :class:`~jamfpro_sdk.core.errors.CapabilityError`.

Response decoding follows one order for both structured formats:

1. DELETE responses are judged by status code alone. The body is never read.
2. ``text/html`` responses are error pages. The message is scraped from the page.
3. The handler's own media type is parsed only on a 2xx status. A body that
   fails to parse but looks like HTML is treated as an error page.
4. Empty 2xx bodies decode to ``None``.
5. Any other content type is an unexpected-content-type error.

Handlers hold no state and are shared by every request.
"""

from __future__ import annotations

import json
import logging
import mimetypes
import os
import xml.etree.ElementTree as ET
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

import requests
from urllib3.filepost import encode_multipart_formdata

from ..common.constants import (
    IMAGE_DOWNLOAD_PATHS,
    MEDIA_TYPE_HTML,
    MEDIA_TYPE_IMAGE_ANY,
    MEDIA_TYPE_JSON,
    MEDIA_TYPE_OCTET_STREAM,
    MEDIA_TYPE_TEXT_XML,
    MEDIA_TYPE_XML,
)
from ..core._error_codes import (
    CAPABILITY_MULTIPART_UNSUPPORTED,
    CAPABILITY_UNKNOWN_API,
    DECODE_MALFORMED_BODY,
    DECODE_SHAPE_MISMATCH,
    DECODE_UNEXPECTED_CONTENT_TYPE,
    ENCODE_FAILED,
)
from ..core.errors import CapabilityError, DecodeError, StatusError, ValidationError
from ._html import extract_error_message, looks_like_html
from ._protocol import ApiType
from ._shapes import from_json_value, from_xml_element, is_shape, to_json_value, to_xml_element

logger = logging.getLogger(__name__)

_EXCERPT_LIMIT = 200


class _ApiHandler(Protocol):
    """Capability set shared by every wire-format handler."""

    api_type: ApiType
    supports_multipart: bool

    def encode(self, body: Any, method: str) -> bytes:
        ...

    def encode_multipart(
        self, fields: Optional[Mapping[str, str]], files: Optional[Mapping[str, str]]
    ) -> Tuple[bytes, str]:
        ...

    def decode(self, response: requests.Response, method: str, out_shape: Any = None) -> Any:
        ...

    def content_type_header(self, method: str) -> str:
        ...

    def accept_header(self, path: str) -> str:
        ...


def _is_success(status: int) -> bool:
    return 200 <= status < 300


def _excerpt(response: requests.Response) -> str:
    return (response.text or "")[:_EXCERPT_LIMIT]


class _StructuredHandler:
    """Decode flow shared by the XML and JSON handlers; subclasses supply parsing and shaping."""

    api_type: ApiType
    format_name: str = ""
    media_types: Tuple[str, ...] = ()
    supports_multipart = False

    def decode(self, response: requests.Response, method: str, out_shape: Any = None) -> Any:
        """
        Decode ``response`` into ``out_shape``.

        :param response: Completed HTTP response.
        :type response: requests.Response
        :param method: HTTP method the request was sent with.
        :type method: str
        :param out_shape: Shape dataclass to build, or ``None`` for the parsed document.
        :return: Decoded value, or ``None`` for DELETE and empty bodies.
        :raises StatusError: On a non-success status or an HTML error page.
        :raises DecodeError: On an unparseable body or unexpected content type.
        """
        status = response.status_code
        if method.upper() == "DELETE":
            if _is_success(status):
                return None
            raise StatusError(f"DELETE request failed with status code: {status}", status)

        content_type = response.headers.get("Content-Type") or ""
        ct = content_type.lower()
        logger.debug("Decoding %s response: status=%d content_type=%r", self.format_name, status, content_type)

        if MEDIA_TYPE_HTML in ct:
            message = extract_error_message(response.text, status)
            logger.warning("Received HTML content (status %d): %s", status, message)
            raise StatusError(message, status, content_type=content_type)

        body = response.content or b""
        if _is_success(status) and not body.strip():
            return None

        if any(mt in ct for mt in self.media_types):
            if not _is_success(status):
                logger.error("Received non-success status code %d", status)
                raise StatusError(
                    f"Received non-success status code: {status}",
                    status,
                    body_excerpt=_excerpt(response),
                    content_type=content_type,
                )
            try:
                document = self._parse(body)
            except (ValueError, ET.ParseError) as exc:
                text = body.decode("utf-8", errors="replace")
                if looks_like_html(text):
                    message = extract_error_message(text, status)
                    logger.warning("Received HTML content instead of expected %s: %s", self.format_name, message)
                    raise StatusError(message, status, content_type=content_type) from exc
                logger.error("Failed to parse %s response: %s", self.format_name, exc)
                raise DecodeError(
                    f"Failed to parse {self.format_name} response: {exc}",
                    subcode=DECODE_MALFORMED_BODY,
                    status_code=status,
                    details={"body_excerpt": _excerpt(response)},
                ) from exc
            try:
                return self._shape(document, out_shape)
            except (TypeError, ValueError) as exc:
                raise DecodeError(
                    f"{self.format_name} response does not match {_shape_name(out_shape)}: {exc}",
                    subcode=DECODE_SHAPE_MISMATCH,
                    status_code=status,
                ) from exc

        raise DecodeError(
            f"Unexpected content type: {content_type}",
            subcode=DECODE_UNEXPECTED_CONTENT_TYPE,
            status_code=status,
            details={"body_excerpt": _excerpt(response)},
        )

    def encode_multipart(
        self, fields: Optional[Mapping[str, str]], files: Optional[Mapping[str, str]]
    ) -> Tuple[bytes, str]:
        raise CapabilityError(
            f"Multipart requests are not supported by the {self.format_name} API handler",
            subcode=CAPABILITY_MULTIPART_UNSUPPORTED,
        )

    def _parse(self, body: bytes) -> Any:
        raise NotImplementedError

    def _shape(self, document: Any, out_shape: Any) -> Any:
        raise NotImplementedError


def _shape_name(out_shape: Any) -> str:
    return getattr(out_shape, "__name__", repr(out_shape))


class _LegacyHandler(_StructuredHandler):
    """Classic API handler: XML in both directions."""

    api_type = ApiType.LEGACY
    format_name = "XML"
    media_types = (MEDIA_TYPE_XML, MEDIA_TYPE_TEXT_XML)

    def encode(self, body: Any, method: str) -> bytes:
        if isinstance(body, bytes):
            data = body
        elif isinstance(body, str):
            data = body.encode("utf-8")
        else:
            try:
                element = body if isinstance(body, ET.Element) else to_xml_element(body)
            except TypeError as exc:
                raise ValidationError(
                    f"Cannot encode {type(body).__name__} as XML: {exc}",
                    subcode=ENCODE_FAILED,
                ) from exc
            data = ET.tostring(element, encoding="utf-8")
        logger.debug("Encoded %s XML request body (%d bytes)", method.upper(), len(data))
        return data

    def content_type_header(self, method: str) -> str:
        return MEDIA_TYPE_XML

    def accept_header(self, path: str) -> str:
        return MEDIA_TYPE_XML

    def _parse(self, body: bytes) -> ET.Element:
        return ET.fromstring(body)

    def _shape(self, document: ET.Element, out_shape: Any) -> Any:
        if out_shape is None or out_shape is ET.Element:
            return document
        if is_shape(out_shape):
            return from_xml_element(out_shape, document)
        raise TypeError(f"unsupported XML output shape {out_shape!r}")


class _ModernHandler(_StructuredHandler):
    """Jamf Pro API handler: JSON bodies, binary image downloads, and multipart uploads."""

    api_type = ApiType.MODERN
    format_name = "JSON"
    media_types = (MEDIA_TYPE_JSON,)
    supports_multipart = True

    def encode(self, body: Any, method: str) -> bytes:
        if isinstance(body, bytes):
            data = body
        elif isinstance(body, str):
            data = body.encode("utf-8")
        else:
            if not (is_shape(type(body)) or isinstance(body, (dict, list, tuple))):
                raise ValidationError(
                    f"Cannot encode {type(body).__name__} as JSON",
                    subcode=ENCODE_FAILED,
                )
            try:
                data = json.dumps(to_json_value(body)).encode("utf-8")
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"Cannot encode request body as JSON: {exc}", subcode=ENCODE_FAILED) from exc
        logger.debug("Encoded %s JSON request body (%d bytes)", method.upper(), len(data))
        return data

    def encode_multipart(
        self, fields: Optional[Mapping[str, str]], files: Optional[Mapping[str, str]]
    ) -> Tuple[bytes, str]:
        """
        Build a ``multipart/form-data`` body from form fields and local files.

        :param fields: Form field names mapped to string values.
        :param files: Form field names mapped to paths of files to upload.
        :return: Encoded body and its ``Content-Type`` (with the generated boundary).
        :raises ValidationError: If a file cannot be read.
        """
        parts = [(name, value) for name, value in (fields or {}).items()]
        for name, path in (files or {}).items():
            try:
                with open(path, "rb") as fh:
                    data = fh.read()
            except OSError as exc:
                raise ValidationError(
                    f"Cannot read multipart file {path!r}: {exc}",
                    subcode=ENCODE_FAILED,
                    details={"field": name, "path": str(path)},
                ) from exc
            mimetype = mimetypes.guess_type(str(path))[0] or MEDIA_TYPE_OCTET_STREAM
            parts.append((name, (os.path.basename(path), data, mimetype)))
        body, content_type = encode_multipart_formdata(parts)
        logger.debug("Encoded multipart body with %d part(s) (%d bytes)", len(parts), len(body))
        return body, content_type

    def decode(self, response: requests.Response, method: str, out_shape: Any = None) -> Any:
        if out_shape is bytes and method.upper() != "DELETE":
            ct = (response.headers.get("Content-Type") or "").lower()
            if ct.startswith("image/") or MEDIA_TYPE_OCTET_STREAM in ct:
                if not _is_success(response.status_code):
                    raise StatusError(
                        f"Received non-success status code: {response.status_code}",
                        response.status_code,
                        content_type=ct,
                    )
                return response.content
        return super().decode(response, method, out_shape)

    def content_type_header(self, method: str) -> str:
        return MEDIA_TYPE_JSON

    def accept_header(self, path: str) -> str:
        if any(marker in (path or "") for marker in IMAGE_DOWNLOAD_PATHS):
            return MEDIA_TYPE_IMAGE_ANY
        return MEDIA_TYPE_JSON

    def _parse(self, body: bytes) -> Any:
        return json.loads(body)

    def _shape(self, document: Any, out_shape: Any) -> Any:
        if out_shape is None or out_shape in (dict, list):
            return document
        return from_json_value(out_shape, document)


class _UnknownHandler:
    """Handler for paths outside both APIs. Every body operation raises :class:`CapabilityError`."""

    api_type = ApiType.UNKNOWN
    supports_multipart = False

    def encode(self, body: Any, method: str) -> bytes:
        logger.warning("Attempted to encode a request for an unsupported API type")
        raise CapabilityError("Unsupported API type", subcode=CAPABILITY_UNKNOWN_API)

    def encode_multipart(
        self, fields: Optional[Mapping[str, str]], files: Optional[Mapping[str, str]]
    ) -> Tuple[bytes, str]:
        raise CapabilityError(
            "Multipart requests are not supported for an unknown API type",
            subcode=CAPABILITY_MULTIPART_UNSUPPORTED,
        )

    def decode(self, response: requests.Response, method: str, out_shape: Any = None) -> Any:
        logger.warning("Attempted to decode a response for an unsupported API type (status %d)", response.status_code)
        raise CapabilityError("Unsupported API type", subcode=CAPABILITY_UNKNOWN_API)

    def content_type_header(self, method: str) -> str:
        return MEDIA_TYPE_JSON

    def accept_header(self, path: str) -> str:
        return MEDIA_TYPE_JSON


_HANDLERS: Dict[ApiType, _ApiHandler] = {
    ApiType.LEGACY: _LegacyHandler(),
    ApiType.MODERN: _ModernHandler(),
    ApiType.UNKNOWN: _UnknownHandler(),
}


def get_api_handler(api_type: ApiType) -> _ApiHandler:
    """Return the shared handler instance for ``api_type``."""
    return _HANDLERS[api_type]


__all__ = ["get_api_handler"]
