# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from ..common.constants import (
    BEARER_TOKEN_PATH,
    OAUTH_TOKEN_PATH,
    TOKEN_INVALIDATE_PATH,
    TOKEN_REFRESH_PATH,
)
from ._error_codes import VALIDATION_INVALID_CONFIG
from .errors import ValidationError

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class JamfProConfig:
    """
    Configuration settings for Jamf Pro client operations.

    :param max_concurrent_requests: Maximum number of HTTP requests in flight at once (default: 5).
    :type max_concurrent_requests: int
    :param token_lifespan: Token lifetime in seconds assumed when the server does not report an expiry (default: 1800).
    :type token_lifespan: float
    :param buffer_period: Seconds before expiry at which a token is proactively refreshed (default: 300).
    :type buffer_period: float
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param log_level: Level applied to the ``jamfpro_sdk`` logger (default: ``"WARNING"``).
    :type log_level: str
    :param debug_mode: Log request and response bodies at DEBUG level (default: False).
    :type debug_mode: bool
    :param legacy_precedence: When a path carries both the Classic API and the Jamf Pro API marker,
        route it to the Classic API handler (default: True).
    :type legacy_precedence: bool
    :param oauth_token_path: Endpoint used to obtain an OAuth token from client credentials.
    :type oauth_token_path: str
    :param bearer_token_path: Endpoint used to obtain a bearer token from username and password.
    :type bearer_token_path: str
    :param token_refresh_path: Endpoint used to extend a bearer token.
    :type token_refresh_path: str
    :param token_invalidate_path: Endpoint used to revoke the current token.
    :type token_invalidate_path: str

    :raises ValidationError: If a numeric setting is out of range or ``log_level`` is unknown.
    """

    max_concurrent_requests: int = 5
    token_lifespan: float = 30 * 60
    buffer_period: float = 5 * 60
    http_timeout: Optional[float] = None
    log_level: str = "WARNING"
    debug_mode: bool = False
    legacy_precedence: bool = True

    # Authentication endpoints
    oauth_token_path: str = OAUTH_TOKEN_PATH
    bearer_token_path: str = BEARER_TOKEN_PATH
    token_refresh_path: str = TOKEN_REFRESH_PATH
    token_invalidate_path: str = TOKEN_INVALIDATE_PATH

    def __post_init__(self) -> None:
        if self.max_concurrent_requests < 1:
            raise ValidationError(
                "max_concurrent_requests must be a positive integer",
                subcode=VALIDATION_INVALID_CONFIG,
                details={"max_concurrent_requests": self.max_concurrent_requests},
            )
        if self.token_lifespan <= 0:
            raise ValidationError(
                "token_lifespan must be positive",
                subcode=VALIDATION_INVALID_CONFIG,
                details={"token_lifespan": self.token_lifespan},
            )
        if self.buffer_period < 0 or self.buffer_period >= self.token_lifespan:
            raise ValidationError(
                "buffer_period must be non-negative and shorter than token_lifespan",
                subcode=VALIDATION_INVALID_CONFIG,
                details={"buffer_period": self.buffer_period, "token_lifespan": self.token_lifespan},
            )
        if self.http_timeout is not None and self.http_timeout <= 0:
            raise ValidationError(
                "http_timeout must be positive when set",
                subcode=VALIDATION_INVALID_CONFIG,
                details={"http_timeout": self.http_timeout},
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValidationError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}",
                subcode=VALIDATION_INVALID_CONFIG,
                details={"log_level": self.log_level},
            )

    @classmethod
    def from_env(cls) -> "JamfProConfig":
        """
        Create a configuration instance from ``JAMFPRO_*`` environment variables.

        Unset variables keep their defaults. Recognised variables are
        ``JAMFPRO_MAX_CONCURRENT_REQUESTS``, ``JAMFPRO_TOKEN_LIFESPAN``,
        ``JAMFPRO_BUFFER_PERIOD``, ``JAMFPRO_HTTP_TIMEOUT``, ``JAMFPRO_LOG_LEVEL``
        and ``JAMFPRO_DEBUG``.

        :return: Configuration instance.
        :rtype: ~jamfpro_sdk.core.config.JamfProConfig
        :raises ValidationError: If a variable holds a value that cannot be parsed.
        """
        kwargs = {}
        try:
            if "JAMFPRO_MAX_CONCURRENT_REQUESTS" in os.environ:
                kwargs["max_concurrent_requests"] = int(os.environ["JAMFPRO_MAX_CONCURRENT_REQUESTS"])
            if "JAMFPRO_TOKEN_LIFESPAN" in os.environ:
                kwargs["token_lifespan"] = float(os.environ["JAMFPRO_TOKEN_LIFESPAN"])
            if "JAMFPRO_BUFFER_PERIOD" in os.environ:
                kwargs["buffer_period"] = float(os.environ["JAMFPRO_BUFFER_PERIOD"])
            if "JAMFPRO_HTTP_TIMEOUT" in os.environ:
                kwargs["http_timeout"] = float(os.environ["JAMFPRO_HTTP_TIMEOUT"])
        except ValueError as exc:
            raise ValidationError(
                f"Invalid numeric JAMFPRO_* environment variable: {exc}",
                subcode=VALIDATION_INVALID_CONFIG,
            ) from exc
        if "JAMFPRO_LOG_LEVEL" in os.environ:
            kwargs["log_level"] = os.environ["JAMFPRO_LOG_LEVEL"]
        if "JAMFPRO_DEBUG" in os.environ:
            kwargs["debug_mode"] = os.environ["JAMFPRO_DEBUG"].strip().lower() in ("1", "true", "yes", "on")
        return cls(**kwargs)
