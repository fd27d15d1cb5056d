# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Classic API computer group operations namespace."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, List
from urllib.parse import quote

from ..models.computer_group import ComputerGroup, ComputerGroupList
from ..models.site import Site

if TYPE_CHECKING:
    from ..client import JamfProClient

URI_COMPUTER_GROUPS = "/JSSResource/computergroups"


class ComputerGroupOperations:
    """
    Static and smart computer group CRUD through the Classic API (XML).

    Accessed via ``client.computer_groups``.

    Example::

        group = client.computer_groups.create(
            ComputerGroup(
                name="Sonoma Macs",
                is_smart=True,
                criteria=[
                    ComputerGroupCriterion(
                        name="Operating System Version", priority=0, and_or="and", search_type="like", value="14."
                    )
                ],
            )
        )
        print(client.computer_groups.get_by_id(group.id).computers)
    """

    def __init__(self, client: "JamfProClient") -> None:
        self._client = client

    def list(self) -> List[ComputerGroup]:
        """
        Return every computer group.

        Only ``id``, ``name`` and ``is_smart`` are populated; fetch a group by
        id for its criteria and members.

        :rtype: list[~jamfpro_sdk.models.computer_group.ComputerGroup]
        """
        return self._client.dispatch("GET", URI_COMPUTER_GROUPS, out_shape=ComputerGroupList).value.groups

    def get_by_id(self, group_id: int) -> ComputerGroup:
        return self._client.dispatch("GET", f"{URI_COMPUTER_GROUPS}/id/{group_id}", out_shape=ComputerGroup).value

    def get_by_name(self, name: str) -> ComputerGroup:
        return self._client.dispatch(
            "GET", f"{URI_COMPUTER_GROUPS}/name/{quote(name, safe='')}", out_shape=ComputerGroup
        ).value

    def create(self, group: ComputerGroup) -> ComputerGroup:
        """
        Create ``group``.

        A group without a site is created with the "none" site (``id=-1``).
        ``group`` itself is not modified.

        :return: The created group; Jamf Pro populates only ``id``.
        :rtype: ~jamfpro_sdk.models.computer_group.ComputerGroup
        """
        return self._client.dispatch(
            "POST", f"{URI_COMPUTER_GROUPS}/id/0", body=_with_site(group), out_shape=ComputerGroup
        ).value

    def update_by_id(self, group_id: int, group: ComputerGroup) -> ComputerGroup:
        return self._client.dispatch(
            "PUT", f"{URI_COMPUTER_GROUPS}/id/{group_id}", body=_with_site(group), out_shape=ComputerGroup
        ).value

    def update_by_name(self, name: str, group: ComputerGroup) -> ComputerGroup:
        return self._client.dispatch(
            "PUT",
            f"{URI_COMPUTER_GROUPS}/name/{quote(name, safe='')}",
            body=_with_site(group),
            out_shape=ComputerGroup,
        ).value

    def delete_by_id(self, group_id: int) -> None:
        self._client.dispatch("DELETE", f"{URI_COMPUTER_GROUPS}/id/{group_id}")

    def delete_by_name(self, name: str) -> None:
        self._client.dispatch("DELETE", f"{URI_COMPUTER_GROUPS}/name/{quote(name, safe='')}")


def _with_site(group: ComputerGroup) -> ComputerGroup:
    if group.site is None or group.site.is_empty():
        return dataclasses.replace(group, site=Site.none())
    return group
