# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Credential types accepted by :class:`~jamfpro_sdk.client.JamfProClient`.

Exactly one credential is active per client:

- :class:`ClientCredentials`: API client id and secret, exchanged for an OAuth token.
- :class:`PasswordCredentials`: username and password, exchanged for a bearer token
  that can be extended through the keep-alive endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ._error_codes import VALIDATION_EMPTY_CREDENTIAL
from .errors import ValidationError


@dataclass(frozen=True)
class ClientCredentials:
    """
    Machine-to-machine API client credentials.

    :param client_id: API client id.
    :type client_id: str
    :param client_secret: API client secret. Never included in ``repr()``.
    :type client_secret: str
    """

    client_id: str
    client_secret: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.client_id or not self.client_secret:
            raise ValidationError(
                "client_id and client_secret are required",
                subcode=VALIDATION_EMPTY_CREDENTIAL,
            )


@dataclass(frozen=True)
class PasswordCredentials:
    """
    Interactive account credentials for bearer token authentication.

    :param username: Jamf Pro account name.
    :type username: str
    :param password: Account password. Never included in ``repr()``.
    :type password: str
    """

    username: str
    password: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.username or not self.password:
            raise ValidationError(
                "username and password are required",
                subcode=VALIDATION_EMPTY_CREDENTIAL,
            )


Credential = Union[ClientCredentials, PasswordCredentials]

__all__ = ["ClientCredentials", "PasswordCredentials", "Credential"]
