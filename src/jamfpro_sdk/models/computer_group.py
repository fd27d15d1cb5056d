# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Classic API computer group shapes (``/JSSResource/computergroups``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .site import Site


@dataclass
class ComputerGroupCriterion:
    """
    One smart group criterion.

    :param name: Inventory field the criterion tests, e.g. ``"Operating System Version"``.
    :type name: str | None
    :param priority: Evaluation order, starting at 0.
    :type priority: int | None
    :param and_or: ``"and"`` or ``"or"``, joining this criterion to the previous one.
    :type and_or: str | None
    :param search_type: Comparison, e.g. ``"is"``, ``"like"``, ``"greater than"``.
    :type search_type: str | None
    :param value: Value compared against.
    :type value: str | None
    """

    __xml_root__ = "criterion"

    name: Optional[str] = None
    priority: Optional[int] = None
    and_or: Optional[str] = None
    search_type: Optional[str] = None
    value: Optional[str] = None
    opening_paren: Optional[bool] = None
    closing_paren: Optional[bool] = None


@dataclass
class ComputerGroupComputer:
    """Static group member, or a computer reported as matching a smart group."""

    __xml_root__ = "computer"

    id: Optional[int] = None
    name: Optional[str] = None
    serial_number: Optional[str] = None
    mac_address: Optional[str] = None
    alt_mac_address: Optional[str] = None


@dataclass
class ComputerGroup:
    """
    A static or smart computer group.

    Smart groups are defined by ``criteria``; static groups list their members
    in ``computers``. List responses only populate ``id``, ``name`` and
    ``is_smart``.
    """

    __xml_root__ = "computer_group"

    id: Optional[int] = None
    name: Optional[str] = None
    is_smart: Optional[bool] = None
    site: Optional[Site] = None
    criteria: List[ComputerGroupCriterion] = field(default_factory=list, metadata={"xml": "criteria>criterion"})
    computers: List[ComputerGroupComputer] = field(default_factory=list, metadata={"xml": "computers>computer"})


@dataclass
class ComputerGroupList:
    """Response of ``GET /JSSResource/computergroups``."""

    __xml_root__ = "computer_groups"

    size: int = 0
    groups: List[ComputerGroup] = field(default_factory=list, metadata={"xml": "computer_group"})


__all__ = ["ComputerGroupCriterion", "ComputerGroupComputer", "ComputerGroup", "ComputerGroupList"]
