# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Token lifecycle management for Jamf Pro authentication.

:class:`_TokenManager` owns the single current :class:`Token` for a client. It
refreshes the token before it enters the configured buffer window, collapses
concurrent refresh attempts into one in-flight request, and revokes the token
on demand.

Two schemes are supported:

- :class:`~jamfpro_sdk.core.credentials.ClientCredentials` are exchanged for an
  OAuth token. There is no refresh grant, so every refresh re-authenticates.
- :class:`~jamfpro_sdk.core.credentials.PasswordCredentials` are exchanged for a
  bearer token, which is extended through the keep-alive endpoint while it is
  still valid.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as _FutureTimeoutError
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional

import requests

from ._error_codes import (
    AUTH_TOKEN_ACQUISITION_FAILED,
    AUTH_TOKEN_REFRESH_FAILED,
    AUTH_TOKEN_RESPONSE_INVALID,
    TRANSPORT_TIMEOUT,
)
from ._http import _HttpClient
from .config import JamfProConfig
from .credentials import ClientCredentials, Credential, PasswordCredentials
from .errors import AuthenticationError, JamfProError, TransportError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenKind(str, Enum):
    """Authentication scheme a :class:`Token` was issued under."""

    OAUTH = "oauth"
    BEARER = "bearer"


@dataclass(frozen=True)
class Token:
    """
    Access token with expiration tracking.

    :param value: The access token string. Never included in ``repr()``.
    :type value: str
    :param issued_at: UTC timestamp when the token was obtained.
    :type issued_at: datetime
    :param expires_at: UTC timestamp when the token expires.
    :type expires_at: datetime
    :param kind: Scheme the token was issued under.
    :type kind: TokenKind
    """

    value: str = field(repr=False)
    issued_at: datetime
    expires_at: datetime
    kind: TokenKind

    def is_expiring(self, buffer_seconds: float) -> bool:
        """True once ``now >= expires_at - buffer_seconds``; the token should be refreshed."""
        return _utcnow() >= self.expires_at - timedelta(seconds=buffer_seconds)

    def is_expired(self) -> bool:
        return _utcnow() >= self.expires_at

    @property
    def remaining_lifetime(self) -> timedelta:
        return self.expires_at - _utcnow()


class _TokenManager:
    """
    Thread-safe owner of the current access token.

    All reads and writes of the token go through ``_lock``. A refresh is
    represented by a :class:`concurrent.futures.Future` stored in ``_inflight``.
    The first caller to find the token expiring becomes the leader and performs
    the network call. Every other caller that arrives before it finishes waits
    on the same future and receives the same token or the same exception.

    :param credential: Active credential.
    :type credential: ClientCredentials | PasswordCredentials
    :param http: Transport used for the authentication endpoints.
    :type http: ~jamfpro_sdk.core._http._HttpClient
    :param base_url: Instance base URL, e.g. ``https://acme.jamfcloud.com``.
    :type base_url: str
    :param config: Client configuration providing lifespan, buffer and endpoint paths.
    :type config: ~jamfpro_sdk.core.config.JamfProConfig
    """

    def __init__(
        self,
        credential: Credential,
        http: _HttpClient,
        base_url: str,
        config: JamfProConfig,
    ) -> None:
        _check_credential(credential)
        self._credential: Credential = credential
        self._http = http
        self._base_url = (base_url or "").rstrip("/")
        self._config = config
        self._lock = threading.Lock()
        self._token: Optional[Token] = None
        self._inflight: Optional[Future] = None
        # Bumped on credential change and invalidation; refreshes started under an
        # older generation never install their token.
        self._generation = 0

    @property
    def credential(self) -> Credential:
        with self._lock:
            return self._credential

    @property
    def token(self) -> Optional[Token]:
        with self._lock:
            return self._token

    # ----------------------------------------------------------- public API

    def ensure_valid(self, timeout: Optional[float] = None) -> Token:
        """
        Return a token that is outside the refresh buffer, refreshing it if needed.

        :param timeout: Maximum seconds to spend obtaining the token. Bounds the
            authentication request when this caller performs the refresh, and the
            wait when another caller already started one.
        :type timeout: float or None
        :return: The current token.
        :rtype: Token
        :raises AuthenticationError: If acquiring or refreshing the token fails.
        :raises TransportError: If ``timeout`` elapses while waiting on a refresh started by another caller.
        """
        with self._lock:
            current = self._token
            if current is not None and not current.is_expiring(self._config.buffer_period):
                return current
            flight = self._inflight
            leader = flight is None
            if leader:
                flight = Future()
                self._inflight = flight
                credential = self._credential
                generation = self._generation

        if leader:
            logger.debug("Token missing or inside the %ss refresh buffer; refreshing", self._config.buffer_period)
            self._run_refresh(flight, credential, current, generation, timeout)
        else:
            logger.debug("Waiting on in-flight token refresh")

        try:
            return flight.result(timeout=timeout)
        except _FutureTimeoutError as exc:
            raise TransportError(
                f"Timed out after {timeout}s waiting for token refresh",
                subcode=TRANSPORT_TIMEOUT,
                is_transient=True,
            ) from exc

    def invalidate(self) -> bool:
        """
        Clear the local token and revoke it server-side on a best-effort basis.

        Local state is cleared first, so the next :meth:`ensure_valid` always
        performs a full authentication regardless of the server outcome.

        :return: True if the server acknowledged the invalidation, False otherwise.
        :rtype: bool
        """
        with self._lock:
            token = self._token
            self._reset_locked()

        if token is None or token.is_expired():
            logger.debug("No live token to invalidate")
            return False

        url = self._url(self._config.token_invalidate_path)
        try:
            r = self._http._request(
                "post",
                url,
                headers={"Authorization": f"Bearer {token.value}", "Accept": "application/json"},
            )
        except TransportError as exc:
            logger.warning("Token invalidation request failed: %s", exc.message)
            return False

        if 200 <= r.status_code < 300:
            logger.info("Token invalidated")
            return True
        logger.warning("Token invalidation returned status code %d", r.status_code)
        return False

    def set_credential(self, credential: Credential) -> None:
        """
        Replace the active credential and discard the current token.

        A refresh already running for the previous credential still completes for
        its waiters, but its token is not installed.
        """
        _check_credential(credential)
        with self._lock:
            self._credential = credential
            self._reset_locked()
        logger.info("Credential updated to %s; token state reset", type(credential).__name__)

    # ------------------------------------------------------------ internals

    def _reset_locked(self) -> None:
        self._token = None
        self._inflight = None
        self._generation += 1

    def _run_refresh(
        self,
        flight: Future,
        credential: Credential,
        current: Optional[Token],
        generation: int,
        timeout: Optional[float],
    ) -> None:
        try:
            new_token = self._refresh(credential, current, timeout)
        except AuthenticationError as exc:
            self._finish(flight, generation, error=exc)
        except JamfProError as exc:
            error = AuthenticationError(
                f"Token request failed: {exc.message}",
                subcode=AUTH_TOKEN_ACQUISITION_FAILED,
                details={"cause": exc.to_dict()},
            )
            error.__cause__ = exc
            self._finish(flight, generation, error=error)
        except BaseException as exc:
            self._finish(flight, generation, error=exc)
            raise
        else:
            self._finish(flight, generation, token=new_token)

    def _finish(
        self,
        flight: Future,
        generation: int,
        *,
        token: Optional[Token] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        with self._lock:
            if self._inflight is flight:
                self._inflight = None
            if token is not None and generation == self._generation:
                self._token = token
        if error is not None:
            logger.error("Token refresh failed: %s", error)
            flight.set_exception(error)
        else:
            logger.info("%s token valid until %s", token.kind.value, token.expires_at.isoformat())
            lifetime = (token.expires_at - token.issued_at).total_seconds()
            if lifetime <= self._config.buffer_period:
                logger.warning(
                    "Issued token lifetime of %.0fs is within the %ss refresh buffer; every request will re-authenticate. "
                    "Lower buffer_period below the server token lifetime.",
                    lifetime,
                    self._config.buffer_period,
                )
            flight.set_result(token)

    def _refresh(self, credential: Credential, current: Optional[Token], timeout: Optional[float]) -> Token:
        if isinstance(credential, ClientCredentials):
            return self._acquire_oauth_token(credential, timeout)
        if current is not None and current.kind is TokenKind.BEARER and not current.is_expired():
            return self._keep_alive(current, timeout)
        return self._acquire_bearer_token(credential, timeout)

    def _acquire_oauth_token(self, credential: ClientCredentials, timeout: Optional[float] = None) -> Token:
        url = self._url(self._config.oauth_token_path)
        logger.info("Requesting OAuth token from %s", url)
        r = self._http._request(
            "post",
            url,
            headers={"Accept": "application/json"},
            data={
                "client_id": credential.client_id,
                "client_secret": credential.client_secret,
                "grant_type": "client_credentials",
            },
            timeout=timeout,
        )
        payload = self._payload(r, "OAuth token request", AUTH_TOKEN_ACQUISITION_FAILED)
        issued = _utcnow()
        value = payload.get("access_token")
        if not isinstance(value, str) or not value:
            raise AuthenticationError(
                "OAuth token response missing access_token",
                subcode=AUTH_TOKEN_RESPONSE_INVALID,
                status_code=r.status_code,
            )
        expires_at = None
        expires_in = payload.get("expires_in")
        if isinstance(expires_in, (int, float)) and not isinstance(expires_in, bool) and expires_in > 0:
            try:
                expires_at = issued + timedelta(seconds=expires_in)
            except OverflowError:
                logger.debug("Out-of-range expires_in %r; falling back to configured lifespan", expires_in)
        return Token(
            value=value,
            issued_at=issued,
            expires_at=expires_at or issued + timedelta(seconds=self._config.token_lifespan),
            kind=TokenKind.OAUTH,
        )

    def _acquire_bearer_token(self, credential: PasswordCredentials, timeout: Optional[float] = None) -> Token:
        url = self._url(self._config.bearer_token_path)
        logger.info("Requesting bearer token from %s", url)
        r = self._http._request(
            "post",
            url,
            headers={"Accept": "application/json"},
            auth=(credential.username, credential.password),
            timeout=timeout,
        )
        payload = self._payload(r, "Bearer token request", AUTH_TOKEN_ACQUISITION_FAILED)
        return self._bearer_from_payload(payload, r.status_code)

    def _keep_alive(self, current: Token, timeout: Optional[float] = None) -> Token:
        url = self._url(self._config.token_refresh_path)
        logger.info("Refreshing bearer token via %s", url)
        r = self._http._request(
            "post",
            url,
            headers={"Authorization": f"Bearer {current.value}", "Accept": "application/json"},
            timeout=timeout,
        )
        payload = self._payload(r, "Token keep-alive", AUTH_TOKEN_REFRESH_FAILED)
        return self._bearer_from_payload(payload, r.status_code)

    def _bearer_from_payload(self, payload: Dict[str, Any], status_code: int) -> Token:
        issued = _utcnow()
        value = payload.get("token")
        if not isinstance(value, str) or not value:
            raise AuthenticationError(
                "Bearer token response missing token",
                subcode=AUTH_TOKEN_RESPONSE_INVALID,
                status_code=status_code,
            )
        expires_at = _parse_expiry(payload.get("expires"))
        if expires_at is None:
            expires_at = issued + timedelta(seconds=self._config.token_lifespan)
        return Token(value=value, issued_at=issued, expires_at=expires_at, kind=TokenKind.BEARER)

    @staticmethod
    def _payload(r: requests.Response, action: str, subcode: str) -> Dict[str, Any]:
        if not 200 <= r.status_code < 300:
            raise AuthenticationError(
                f"{action} failed with status code {r.status_code}",
                subcode=subcode,
                status_code=r.status_code,
                details={"body_excerpt": (r.text or "")[:200]},
            )
        try:
            body = r.json()
        except ValueError as exc:
            raise AuthenticationError(
                f"{action} returned a non-JSON body",
                subcode=AUTH_TOKEN_RESPONSE_INVALID,
                status_code=r.status_code,
            ) from exc
        if not isinstance(body, dict):
            raise AuthenticationError(
                f"{action} returned an unexpected JSON payload",
                subcode=AUTH_TOKEN_RESPONSE_INVALID,
                status_code=r.status_code,
            )
        return body

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"


def _check_credential(credential: Any) -> None:
    if not isinstance(credential, (ClientCredentials, PasswordCredentials)):
        raise TypeError("credential must be ClientCredentials or PasswordCredentials")


def _parse_expiry(value: Any) -> Optional[datetime]:
    """
    Parse the ``expires`` field of a bearer token response.

    Accepts ISO-8601 strings (``2024-03-13T19:36:21.683Z``) and epoch
    milliseconds. Returns None when the value is missing or unparseable.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Out-of-range token expiry %r; falling back to configured lifespan", value)
            return None
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.debug("Unparseable token expiry %r; falling back to configured lifespan", value)
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None
