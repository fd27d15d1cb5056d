# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import dataclasses

import pytest

from jamfpro_sdk.core._error_codes import VALIDATION_EMPTY_CREDENTIAL
from jamfpro_sdk.core.credentials import ClientCredentials, PasswordCredentials
from jamfpro_sdk.core.errors import ValidationError


@pytest.mark.parametrize(
    "factory",
    [
        lambda: ClientCredentials("", "secret"),
        lambda: ClientCredentials("id", ""),
        lambda: PasswordCredentials("", "pw"),
        lambda: PasswordCredentials("admin", ""),
    ],
)
def test_empty_fields_rejected(factory):
    with pytest.raises(ValidationError) as exc:
        factory()
    assert exc.value.subcode == VALIDATION_EMPTY_CREDENTIAL


def test_secrets_hidden_from_repr():
    assert "s3cret" not in repr(ClientCredentials("id", "s3cret"))
    assert "s3cret" not in repr(PasswordCredentials("admin", "s3cret"))


def test_credentials_are_immutable():
    cred = ClientCredentials("id", "secret")
    with pytest.raises(dataclasses.FrozenInstanceError):
        cred.client_id = "other"


def test_fixture_credentials_are_distinct_kinds(client_credentials, password_credentials):
    assert isinstance(client_credentials, ClientCredentials)
    assert isinstance(password_credentials, PasswordCredentials)
    assert client_credentials != password_credentials
