# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Classic API department operations namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from urllib.parse import quote

from ..models.department import Department, DepartmentList

if TYPE_CHECKING:
    from ..client import JamfProClient

URI_DEPARTMENTS = "/JSSResource/departments"


class DepartmentOperations:
    """
    Department CRUD through the Classic API (XML).

    Accessed via ``client.departments``.

    Example::

        dept = client.departments.create("Engineering")
        client.departments.update_by_id(dept.id, "Platform Engineering")
        for d in client.departments.list():
            print(d.id, d.name)
        client.departments.delete_by_name("Platform Engineering")
    """

    def __init__(self, client: "JamfProClient") -> None:
        self._client = client

    def list(self) -> List[Department]:
        """
        Return every department.

        :rtype: list[~jamfpro_sdk.models.department.Department]
        :raises StatusError: If the Classic API request fails.
        """
        result = self._client.dispatch("GET", URI_DEPARTMENTS, out_shape=DepartmentList)
        return result.value.departments

    def get_by_id(self, department_id: int) -> Department:
        return self._client.dispatch("GET", f"{URI_DEPARTMENTS}/id/{department_id}", out_shape=Department).value

    def get_by_name(self, name: str) -> Department:
        return self._client.dispatch("GET", f"{URI_DEPARTMENTS}/name/{quote(name, safe='')}", out_shape=Department).value

    def get_id_by_name(self, name: str) -> Optional[int]:
        """
        Look up a department id from the department list.

        :return: The id of the first department named ``name``, or ``None`` if there is none.
        :rtype: int | None
        """
        for dept in self.list():
            if dept.name == name:
                return dept.id
        return None

    def create(self, name: str) -> Department:
        """
        Create a department named ``name``.

        Jamf Pro answers with ``<department><id>N</id></department>``, so only
        ``id`` is populated on the returned object.

        :rtype: ~jamfpro_sdk.models.department.Department
        """
        return self._client.dispatch(
            "POST", f"{URI_DEPARTMENTS}/id/0", body=Department(name=name), out_shape=Department
        ).value

    def update_by_id(self, department_id: int, name: str) -> Department:
        return self._client.dispatch(
            "PUT", f"{URI_DEPARTMENTS}/id/{department_id}", body=Department(name=name), out_shape=Department
        ).value

    def update_by_name(self, old_name: str, new_name: str) -> Department:
        return self._client.dispatch(
            "PUT",
            f"{URI_DEPARTMENTS}/name/{quote(old_name, safe='')}",
            body=Department(name=new_name),
            out_shape=Department,
        ).value

    def delete_by_id(self, department_id: int) -> None:
        self._client.dispatch("DELETE", f"{URI_DEPARTMENTS}/id/{department_id}")

    def delete_by_name(self, name: str) -> None:
        self._client.dispatch("DELETE", f"{URI_DEPARTMENTS}/name/{quote(name, safe='')}")
