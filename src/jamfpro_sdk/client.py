# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

import requests

from .common.constants import BASE_DOMAIN
from .core._auth import _TokenManager, _check_credential
from .core._error_codes import VALIDATION_INVALID_INSTANCE
from .core.config import JamfProConfig
from .core.credentials import Credential
from .core.errors import ValidationError
from .core.results import OperationResult
from .data._dispatcher import _RequestDispatcher
from .operations.api_roles import ApiRoleOperations
from .operations.computer_groups import ComputerGroupOperations
from .operations.departments import DepartmentOperations
from .operations.icons import IconOperations
from .operations.sso_failover import SsoFailoverOperations
from .operations.user_extension_attributes import UserExtensionAttributeOperations

_PACKAGE_LOGGER = "jamfpro_sdk"
_INSTANCE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]*$")


def _resolve_base_url(instance: str) -> str:
    """
    Turn an instance name or URL override into the base URL.

    ``"acme"`` becomes ``https://acme.jamfcloud.com``; a full ``http(s)://`` URL
    is used as given, minus any trailing slash.

    :raises ValidationError: If ``instance`` is empty or neither form.
    """
    value = (instance or "").strip()
    if not value:
        raise ValidationError("instance is required.", subcode=VALIDATION_INVALID_INSTANCE)
    if value.lower().startswith(("http://", "https://")):
        base = value.rstrip("/")
        if not urlparse(base).netloc:
            raise ValidationError(f"Invalid instance URL: {instance!r}", subcode=VALIDATION_INVALID_INSTANCE)
        return base
    if not _INSTANCE_NAME_RE.match(value):
        raise ValidationError(f"Invalid instance name: {instance!r}", subcode=VALIDATION_INVALID_INSTANCE)
    return f"https://{value}{BASE_DOMAIN}"


class JamfProClient:
    """
    High-level client for the Jamf Pro Classic API and Jamf Pro API.

    The client authenticates with OAuth client credentials or a username and
    password, keeps the access token fresh, caps the number of concurrent
    requests, and routes each request to the XML (``/JSSResource``) or JSON
    (``/api``) wire format based on its path.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager shares one HTTP session across
        all requests and releases it on exit::

            with JamfProClient("acme", ClientCredentials(client_id, secret)) as client:
                for dept in client.departments.list():
                    print(dept.name)

    **Without Context Manager**:
        The low-level dispatcher is created lazily on first use. Call ``close()``
        when done::

            client = JamfProClient("acme", PasswordCredentials("admin", "secret"))
            try:
                client.sso_failover.get()
            finally:
                client.close()

    Operations are organized under namespaces:

    - ``client.departments``: Classic API departments (XML)
    - ``client.computer_groups``: Classic API static and smart computer groups (XML)
    - ``client.user_extension_attributes``: Classic API user extension attributes (XML)
    - ``client.api_roles``: API roles (JSON)
    - ``client.sso_failover``: SSO failover URL (JSON)
    - ``client.icons``: Self Service icons, including multipart upload and binary download

    :param instance: Instance name (``"acme"`` for ``https://acme.jamfcloud.com``)
        or a full ``http(s)://`` URL for on-premise servers.
    :type instance: :class:`str`
    :param credential: Credential used to obtain access tokens.
    :type credential: ~jamfpro_sdk.core.credentials.ClientCredentials | ~jamfpro_sdk.core.credentials.PasswordCredentials
    :param config: Optional configuration. If not provided, defaults are loaded from
        :meth:`~jamfpro_sdk.core.config.JamfProConfig.from_env`.
    :type config: ~jamfpro_sdk.core.config.JamfProConfig or None

    :raises ValidationError: If ``instance`` is empty or malformed.
    :raises TypeError: If ``credential`` is not a supported credential type.
    """

    def __init__(
        self,
        instance: str,
        credential: Credential,
        config: Optional[JamfProConfig] = None,
    ) -> None:
        _check_credential(credential)
        self._base_url = _resolve_base_url(instance)
        self._config = config or JamfProConfig.from_env()
        self._credential = credential
        self._dispatcher: Optional[_RequestDispatcher] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False
        _configure_logging(self._config)

        self.departments = DepartmentOperations(self)
        self.computer_groups = ComputerGroupOperations(self)
        self.user_extension_attributes = UserExtensionAttributeOperations(self)
        self.api_roles = ApiRoleOperations(self)
        self.sso_failover = SsoFailoverOperations(self)
        self.icons = IconOperations(self)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def config(self) -> JamfProConfig:
        return self._config

    @property
    def auth(self) -> _TokenManager:
        """Token manager of the underlying dispatcher, created on first access."""
        return self._get_dispatcher().tokens

    def __enter__(self) -> "JamfProClient":
        """
        Enter the context manager.

        Creates an HTTP session for connection pooling. All operations within
        the context reuse this session.

        :rtype: JamfProClient
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release the HTTP session and the dispatcher. Safe to call multiple times.

        The access token is not revoked; call :meth:`invalidate_token` first for that.
        """
        if self._dispatcher is not None:
            self._dispatcher.close()
            self._dispatcher = None
        if self._session is not None and self._owns_session:
            self._session.close()
        self._session = None
        self._owns_session = False

    def _get_dispatcher(self) -> _RequestDispatcher:
        """
        Get or create the internal request dispatcher.

        When a session exists (from the context manager), it is passed to the
        dispatcher for connection pooling.

        :rtype: ~jamfpro_sdk.data._dispatcher._RequestDispatcher
        """
        if self._dispatcher is None:
            self._dispatcher = _RequestDispatcher(
                self._credential,
                self._base_url,
                self._config,
                session=self._session,
            )
        return self._dispatcher

    # ---------------- Requests ----------------

    def dispatch(
        self,
        method: str,
        path: str,
        body: Any = None,
        out_shape: Any = None,
        *,
        timeout: Optional[float] = None,
    ) -> OperationResult[Any]:
        """
        Send one request to an arbitrary resource path.

        The resource namespaces are built on this method; use it directly for
        endpoints without a namespace.

        :param method: HTTP method.
        :type method: :class:`str`
        :param path: Resource path starting with ``/JSSResource`` or ``/api``.
        :type path: :class:`str`
        :param body: Optional request body, see
            :meth:`~jamfpro_sdk.data._dispatcher._RequestDispatcher.dispatch`.
        :param out_shape: Shape dataclass, ``bytes``, or ``None``.
        :param timeout: Overall deadline in seconds.
        :type timeout: :class:`float` or None
        :return: Decoded value and response metadata.
        :rtype: ~jamfpro_sdk.core.results.OperationResult

        Example::

            result = client.dispatch("GET", "/api/v1/jamf-pro-version")
            print(result.value["version"], result.metadata.timing_ms)
        """
        return self._get_dispatcher().dispatch(method, path, body, out_shape, timeout=timeout)

    def dispatch_multipart(
        self,
        method: str,
        path: str,
        fields: Optional[Mapping[str, str]] = None,
        files: Optional[Mapping[str, str]] = None,
        out_shape: Any = None,
        *,
        timeout: Optional[float] = None,
    ) -> OperationResult[Any]:
        """Send a ``multipart/form-data`` request. Only Jamf Pro API paths accept it."""
        return self._get_dispatcher().dispatch_multipart(method, path, fields, files, out_shape, timeout=timeout)

    # ---------------- Credentials ----------------

    def set_credentials(self, credential: Credential) -> None:
        """
        Switch to a new credential. The current token is discarded.

        :raises TypeError: If ``credential`` is not a supported credential type.
        """
        if self._dispatcher is not None:
            self._dispatcher.tokens.set_credential(credential)
        else:
            _check_credential(credential)
        self._credential = credential

    def invalidate_token(self) -> bool:
        """
        Revoke the current token. The next request re-authenticates.

        :return: True if the server acknowledged the revocation.
        :rtype: bool
        """
        if self._dispatcher is None:
            return False
        return self._dispatcher.tokens.invalidate()


def _configure_logging(config: JamfProConfig) -> None:
    level = logging.DEBUG if config.debug_mode else getattr(logging, config.log_level.upper(), logging.WARNING)
    logging.getLogger(_PACKAGE_LOGGER).setLevel(level)


__all__ = ["JamfProClient"]
