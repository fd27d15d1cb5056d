# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import pytest

from jamfpro_sdk.client import JamfProClient
from jamfpro_sdk.core.errors import ValidationError
from jamfpro_sdk.models.icon import Icon
from tests.unit.test_helpers import JSON, ScriptedHttp, make_response, token_response

BASE = "https://acme.jamfcloud.com"


@pytest.fixture
def wired(client_credentials, test_config, sample_base_url):
    client = JamfProClient(sample_base_url, client_credentials, test_config)
    http = ScriptedHttp([token_response("tok")])
    dispatcher = client._get_dispatcher()
    dispatcher._http = http
    dispatcher.tokens._http = http
    return client, http


def test_get_by_id(wired):
    client, http = wired
    http.queue(make_response(200, {"id": 4, "name": "logo.png", "url": f"{BASE}/icon/4"}, JSON))
    assert client.icons.get_by_id(4) == Icon(4, "logo.png", f"{BASE}/icon/4")
    assert http.urls()[1] == f"{BASE}/api/v1/icon/4"


def test_upload(wired, tmp_path):
    client, http = wired
    path = tmp_path / "logo.png"
    path.write_bytes(b"PNG-BYTES")
    http.queue(make_response(201, {"id": 7, "name": "logo.png"}, JSON))

    icon = client.icons.upload(str(path))

    assert icon.id == 7
    method, url, kwargs = http.calls[1]
    assert (method, url) == ("POST", f"{BASE}/api/v1/icon")
    assert kwargs["headers"]["Content-Type"].startswith("multipart/form-data")
    assert b'name="file"; filename="logo.png"' in kwargs["data"]
    assert b"PNG-BYTES" in kwargs["data"]


def test_upload_missing_file(wired, tmp_path):
    client, http = wired
    with pytest.raises(ValidationError):
        client.icons.upload(str(tmp_path / "nope.png"))
    assert client._dispatcher.gate.in_use == 0


def test_download(wired):
    client, http = wired
    http.queue(make_response(200, b"\x89PNG-DATA", "image/png"))

    data = client.icons.download(4, resolution="512", scale=2)

    assert data == b"\x89PNG-DATA"
    _, url, kwargs = http.calls[1]
    assert url == f"{BASE}/api/v1/icon/download/4?res=512&scale=2"
    assert kwargs["headers"]["Accept"] == "image/*"
