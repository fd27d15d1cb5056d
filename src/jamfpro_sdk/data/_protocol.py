# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Route request paths to the Classic API, Jamf Pro API or unknown-API handler."""

from __future__ import annotations

from enum import Enum

from ..common.constants import LEGACY_PATH_MARKER, MODERN_PATH_MARKER


class ApiType(str, Enum):
    LEGACY = "legacy"
    MODERN = "modern"
    UNKNOWN = "unknown"


def select_api_type(path: str, *, legacy_precedence: bool = True) -> ApiType:
    """
    Classify ``path`` by the API marker it contains.

    ``/JSSResource`` selects the Classic API (:attr:`ApiType.LEGACY`), ``/api``
    selects the Jamf Pro API (:attr:`ApiType.MODERN`), anything else is
    :attr:`ApiType.UNKNOWN`. When both markers are present ``legacy_precedence``
    decides which one wins.

    :param path: Request path, with or without scheme and host.
    :type path: str
    :param legacy_precedence: Prefer the Classic API when both markers match.
    :type legacy_precedence: bool
    :rtype: ApiType
    """
    path = path or ""
    is_legacy = LEGACY_PATH_MARKER in path
    is_modern = MODERN_PATH_MARKER in path
    if is_legacy and is_modern:
        return ApiType.LEGACY if legacy_precedence else ApiType.MODERN
    if is_legacy:
        return ApiType.LEGACY
    if is_modern:
        return ApiType.MODERN
    return ApiType.UNKNOWN


__all__ = ["ApiType", "select_api_type"]
