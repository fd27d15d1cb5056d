# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""SSO failover operations namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.sso_failover import SsoFailover

if TYPE_CHECKING:
    from ..client import JamfProClient

URI_SSO_FAILOVER = "/api/v1/sso/failover"


class SsoFailoverOperations:
    """Accessed via ``client.sso_failover``."""

    def __init__(self, client: "JamfProClient") -> None:
        self._client = client

    def get(self) -> SsoFailover:
        return self._client.dispatch("GET", URI_SSO_FAILOVER, out_shape=SsoFailover).value

    def regenerate(self) -> SsoFailover:
        """Replace the failover key and return the new failover URL."""
        return self._client.dispatch("POST", f"{URI_SSO_FAILOVER}/generate", out_shape=SsoFailover).value
