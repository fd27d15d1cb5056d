# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Classic API department shapes (``/JSSResource/departments``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Department:
    """
    A single department.

    :param id: Department id assigned by Jamf Pro.
    :type id: int | None
    :param name: Department name.
    :type name: str | None
    """

    __xml_root__ = "department"

    id: Optional[int] = None
    name: Optional[str] = None


@dataclass
class DepartmentList:
    """Response of ``GET /JSSResource/departments``."""

    __xml_root__ = "departments"

    size: int = 0
    departments: List[Department] = field(default_factory=list, metadata={"xml": "department"})


__all__ = ["Department", "DepartmentList"]
