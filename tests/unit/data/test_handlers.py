# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for the Classic API, Jamf Pro API and unknown-API wire handlers."""

import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import pytest

from jamfpro_sdk.core._error_codes import (
    CAPABILITY_MULTIPART_UNSUPPORTED,
    CAPABILITY_UNKNOWN_API,
    DECODE_MALFORMED_BODY,
    DECODE_SHAPE_MISMATCH,
    DECODE_UNEXPECTED_CONTENT_TYPE,
    ENCODE_FAILED,
    HTTP_404,
)
from jamfpro_sdk.core.errors import CapabilityError, DecodeError, StatusError, ValidationError
from jamfpro_sdk.data._handlers import get_api_handler
from jamfpro_sdk.data._protocol import ApiType
from jamfpro_sdk.models.api_role import ApiRole, ApiRoleList
from jamfpro_sdk.models.department import Department
from tests.unit.test_helpers import HTML, JSON, XML, make_response

ERROR_PAGE = "<html><head><title>Unauthorized</title></head><body><p>Login required</p></body></html>"


class Channel(str, Enum):
    STABLE = "stable"
    BETA = "beta"


@dataclass
class Label:
    key: Optional[str] = None
    value: Optional[str] = None


@dataclass
class Release:
    __xml_root__ = "release"

    id: Optional[int] = None
    display_name: Optional[str] = field(default=None, metadata={"json": "displayName"})
    enabled: Optional[bool] = None
    channel: Optional[Channel] = None
    weight: Optional[float] = None
    owner: Optional[Label] = None
    labels: List[Label] = field(default_factory=list, metadata={"json": "labelSet", "xml": "labels>label"})
    aliases: List[str] = field(default_factory=list, metadata={"xml": "aliases>alias"})


RELEASE = Release(
    id=3,
    display_name="Sonoma rollout",
    enabled=False,
    channel=Channel.BETA,
    weight=0.25,
    owner=Label("team", "platform"),
    labels=[Label("ring", "1"), Label("region", "emea")],
    aliases=["sonoma", "14.x"],
)


@pytest.fixture
def legacy():
    return get_api_handler(ApiType.LEGACY)


@pytest.fixture
def modern():
    return get_api_handler(ApiType.MODERN)


@pytest.fixture
def unknown():
    return get_api_handler(ApiType.UNKNOWN)


def test_handlers_are_shared():
    assert get_api_handler(ApiType.LEGACY) is get_api_handler(ApiType.LEGACY)
    assert get_api_handler(ApiType.MODERN).api_type is ApiType.MODERN


class TestDecodeCommon:
    """Behaviour shared by both structured handlers."""

    @pytest.mark.parametrize("api_type", [ApiType.LEGACY, ApiType.MODERN])
    def test_delete_success_ignores_body(self, api_type):
        r = make_response(200, "<html>not parsed</html>", HTML)
        assert get_api_handler(api_type).decode(r, "DELETE") is None

    @pytest.mark.parametrize("api_type", [ApiType.LEGACY, ApiType.MODERN])
    def test_delete_failure(self, api_type):
        r = make_response(404, "", XML)
        with pytest.raises(StatusError) as exc:
            get_api_handler(api_type).decode(r, "delete")
        assert str(exc.value) == "DELETE request failed with status code: 404"
        assert exc.value.subcode == HTTP_404

    @pytest.mark.parametrize("api_type", [ApiType.LEGACY, ApiType.MODERN])
    @pytest.mark.parametrize("status", [200, 401, 500])
    def test_html_is_always_an_error(self, api_type, status):
        r = make_response(status, ERROR_PAGE, HTML)
        with pytest.raises(StatusError) as exc:
            get_api_handler(api_type).decode(r, "GET")
        assert exc.value.message == "Unauthorized"
        assert exc.value.status_code == status

    @pytest.mark.parametrize("api_type", [ApiType.LEGACY, ApiType.MODERN])
    def test_empty_success_body_is_none(self, api_type):
        assert get_api_handler(api_type).decode(make_response(201, b""), "POST", Department) is None


class TestLegacyHandler:
    def test_headers(self, legacy):
        assert legacy.content_type_header("POST") == "application/xml"
        assert legacy.accept_header("/JSSResource/departments") == "application/xml"
        assert legacy.supports_multipart is False

    def test_decode_into_shape(self, legacy):
        r = make_response(200, "<department><id>7</id><name>Eng</name></department>", XML + "; charset=UTF-8")
        assert legacy.decode(r, "GET", Department) == Department(id=7, name="Eng")

    def test_decode_text_xml(self, legacy):
        r = make_response(200, "<department><id>7</id></department>", "text/xml")
        assert legacy.decode(r, "GET", Department).id == 7

    def test_decode_without_shape_returns_element(self, legacy):
        r = make_response(200, "<department><id>7</id></department>", XML)
        root = legacy.decode(r, "GET")
        assert isinstance(root, ET.Element)
        assert root.findtext("id") == "7"

    def test_non_success_status(self, legacy):
        body = "<error><message>Duplicate name</message></error>"
        r = make_response(409, body, XML)
        with pytest.raises(StatusError) as exc:
            legacy.decode(r, "POST", Department)
        assert exc.value.message == "Received non-success status code: 409"
        assert exc.value.details["body_excerpt"] == body

    def test_malformed_xml(self, legacy):
        with pytest.raises(DecodeError) as exc:
            legacy.decode(make_response(200, "<department><id>", XML), "GET", Department)
        assert exc.value.subcode == DECODE_MALFORMED_BODY

    def test_html_body_with_xml_content_type(self, legacy):
        r = make_response(200, "<!DOCTYPE html><html><body><h1>Maintenance</h1><br></body></html>", XML)
        with pytest.raises(StatusError) as exc:
            legacy.decode(r, "GET", Department)
        assert exc.value.message == "Maintenance"

    def test_shape_mismatch(self, legacy):
        r = make_response(200, "<department><id>abc</id></department>", XML)
        with pytest.raises(DecodeError) as exc:
            legacy.decode(r, "GET", Department)
        assert exc.value.subcode == DECODE_SHAPE_MISMATCH

    def test_unexpected_content_type(self, legacy):
        with pytest.raises(DecodeError) as exc:
            legacy.decode(make_response(200, {"id": 1}, JSON), "GET", Department)
        assert exc.value.subcode == DECODE_UNEXPECTED_CONTENT_TYPE
        assert "application/json" in exc.value.message

    def test_encode_shape(self, legacy):
        data = legacy.encode(Department(name="Eng"), "POST")
        assert ET.fromstring(data).findtext("name") == "Eng"

    def test_encode_raw(self, legacy):
        assert legacy.encode("<department/>", "PUT") == b"<department/>"
        assert legacy.encode(b"<department/>", "PUT") == b"<department/>"
        assert legacy.encode(ET.Element("department"), "PUT") == b"<department />"

    def test_encode_unsupported(self, legacy):
        with pytest.raises(ValidationError) as exc:
            legacy.encode(object(), "POST")
        assert exc.value.subcode == ENCODE_FAILED

    def test_round_trip(self, legacy):
        data = legacy.encode(RELEASE, "POST")
        decoded = legacy.decode(make_response(200, data, XML), "GET", Release)
        assert decoded == RELEASE

    def test_multipart_unsupported(self, legacy):
        with pytest.raises(CapabilityError) as exc:
            legacy.encode_multipart({"a": "b"}, None)
        assert exc.value.subcode == CAPABILITY_MULTIPART_UNSUPPORTED


class TestModernHandler:
    def test_headers(self, modern):
        assert modern.content_type_header("PUT") == "application/json"
        assert modern.accept_header("/api/v1/api-roles") == "application/json"
        assert modern.accept_header("/api/v1/icon/download/3?res=original&scale=0") == "image/*"
        assert modern.accept_header("/api/v1/branding-images/download/1") == "image/*"
        assert modern.supports_multipart is True

    def test_decode_into_shape(self, modern):
        r = make_response(200, {"id": "1", "displayName": "Readers", "privileges": ["Read"]}, JSON)
        assert modern.decode(r, "GET", ApiRole) == ApiRole(id="1", display_name="Readers", privileges=["Read"])

    def test_decode_without_shape(self, modern):
        assert modern.decode(make_response(200, {"a": [1]}, JSON), "GET") == {"a": [1]}

    def test_non_success_status(self, modern):
        r = make_response(400, {"httpStatus": 400, "errors": []}, JSON)
        with pytest.raises(StatusError) as exc:
            modern.decode(r, "POST", ApiRole)
        assert exc.value.message == "Received non-success status code: 400"
        assert json.loads(exc.value.details["body_excerpt"])["httpStatus"] == 400

    def test_malformed_json(self, modern):
        with pytest.raises(DecodeError) as exc:
            modern.decode(make_response(200, "{not json", JSON), "GET", ApiRole)
        assert exc.value.subcode == DECODE_MALFORMED_BODY

    def test_shape_mismatch(self, modern):
        with pytest.raises(DecodeError) as exc:
            modern.decode(make_response(200, [1, 2], JSON), "GET", ApiRole)
        assert exc.value.subcode == DECODE_SHAPE_MISMATCH

    def test_unexpected_content_type(self, modern):
        with pytest.raises(DecodeError) as exc:
            modern.decode(make_response(200, "<a/>", XML), "GET")
        assert exc.value.subcode == DECODE_UNEXPECTED_CONTENT_TYPE

    def test_binary_download(self, modern):
        png = b"\x89PNG\r\n\x1a\n..."
        assert modern.decode(make_response(200, png, "image/png"), "GET", bytes) == png
        assert modern.decode(make_response(200, png, "application/octet-stream"), "GET", bytes) == png

    def test_binary_download_failure(self, modern):
        with pytest.raises(StatusError):
            modern.decode(make_response(404, b"", "image/png"), "GET", bytes)

    def test_image_without_bytes_shape_is_unexpected(self, modern):
        with pytest.raises(DecodeError):
            modern.decode(make_response(200, b"\x89PNG", "image/png"), "GET")

    def test_encode_shape_and_dict(self, modern):
        assert json.loads(modern.encode(ApiRole(display_name="R"), "POST")) == {"displayName": "R", "privileges": []}
        assert json.loads(modern.encode({"a": 1}, "PATCH")) == {"a": 1}
        assert modern.encode('{"raw": true}', "PUT") == b'{"raw": true}'

    def test_round_trip(self, modern):
        data = modern.encode(RELEASE, "POST")
        assert json.loads(data)["labelSet"][1] == {"key": "region", "value": "emea"}
        decoded = modern.decode(make_response(200, data, JSON), "GET", Release)
        assert decoded == RELEASE

    def test_encode_unsupported(self, modern):
        with pytest.raises(ValidationError) as exc:
            modern.encode(object(), "POST")
        assert exc.value.subcode == ENCODE_FAILED

    def test_encode_unserialisable_dict(self, modern):
        with pytest.raises(ValidationError):
            modern.encode({"when": object()}, "POST")

    def test_multipart(self, modern, tmp_path):
        icon = tmp_path / "logo.png"
        icon.write_bytes(b"PNGDATA")
        body, content_type = modern.encode_multipart({"note": "hello"}, {"file": str(icon)})

        assert content_type.startswith("multipart/form-data; boundary=")
        assert b'name="note"' in body
        assert b'name="file"; filename="logo.png"' in body
        assert b"Content-Type: image/png" in body
        assert b"PNGDATA" in body

    def test_multipart_missing_file(self, modern, tmp_path):
        with pytest.raises(ValidationError) as exc:
            modern.encode_multipart(None, {"file": str(tmp_path / "missing.png")})
        assert exc.value.subcode == ENCODE_FAILED


class TestUnknownHandler:
    def test_everything_is_unsupported(self, unknown):
        with pytest.raises(CapabilityError) as exc:
            unknown.encode({"a": 1}, "POST")
        assert exc.value.subcode == CAPABILITY_UNKNOWN_API
        with pytest.raises(CapabilityError):
            unknown.decode(make_response(200, {"a": 1}, JSON), "GET")
        with pytest.raises(CapabilityError):
            unknown.encode_multipart(None, None)

    def test_headers_default_to_json(self, unknown):
        assert unknown.content_type_header("GET") == "application/json"
        assert unknown.accept_header("/other") == "application/json"


class TestDecodeScenarios:
    def test_modern_empty_collection(self, modern):
        r = make_response(200, '{"totalCount":0,"results":[]}', JSON)
        roles = modern.decode(r, "GET", ApiRoleList)
        assert roles.total_count == 0
        assert roles.results == []

    def test_legacy_created(self, legacy):
        r = make_response(201, '<?xml version="1.0" encoding="UTF-8"?><department><id>42</id></department>', XML)
        assert legacy.decode(r, "POST", Department) == Department(id=42)

    def test_html_502_uses_title(self, modern):
        page = "<html><head><title>502 Bad Gateway</title></head><body><h1>Bad Gateway</h1></body></html>"
        with pytest.raises(StatusError) as exc:
            modern.decode(make_response(502, page, "text/html"), "GET")
        assert exc.value.message == "502 Bad Gateway"
        assert exc.value.status_code == 502
        assert exc.value.is_transient
