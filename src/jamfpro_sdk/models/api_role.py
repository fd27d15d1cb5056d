# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Jamf Pro API role shapes (``/api/v1/api-roles``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ApiRole:
    """
    An API role granting a set of privileges to API clients.

    :param id: Role id assigned by Jamf Pro.
    :type id: str | None
    :param display_name: Unique display name.
    :type display_name: str | None
    :param privileges: Privilege names granted by the role.
    :type privileges: list[str]
    """

    id: Optional[str] = None
    display_name: Optional[str] = field(default=None, metadata={"json": "displayName"})
    privileges: List[str] = field(default_factory=list)


@dataclass
class ApiRoleList:
    """Response of ``GET /api/v1/api-roles``."""

    total_count: int = field(default=0, metadata={"json": "totalCount"})
    results: List[ApiRole] = field(default_factory=list)


__all__ = ["ApiRole", "ApiRoleList"]
