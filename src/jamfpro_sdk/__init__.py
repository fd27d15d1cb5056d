# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the Jamf Pro Classic API and Jamf Pro API.

Example::

    from jamfpro_sdk import JamfProClient, ClientCredentials

    with JamfProClient("acme", ClientCredentials("client-id", "client-secret")) as client:
        for dept in client.departments.list():
            print(dept.id, dept.name)
"""

from .client import JamfProClient
from .core.config import JamfProConfig
from .core.credentials import ClientCredentials, PasswordCredentials
from .core.errors import (
    AuthenticationError,
    CapabilityError,
    DecodeError,
    JamfProError,
    StatusError,
    TransportError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "JamfProClient",
    "JamfProConfig",
    "ClientCredentials",
    "PasswordCredentials",
    "JamfProError",
    "ValidationError",
    "AuthenticationError",
    "CapabilityError",
    "TransportError",
    "StatusError",
    "DecodeError",
    "__version__",
]
