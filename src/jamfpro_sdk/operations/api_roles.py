# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Jamf Pro API role operations namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from ..core._error_codes import VALIDATION_NAME_NOT_FOUND
from ..core.errors import ValidationError
from ..models.api_role import ApiRole, ApiRoleList

if TYPE_CHECKING:
    from ..client import JamfProClient

URI_API_ROLES = "/api/v1/api-roles"


class ApiRoleOperations:
    """
    API role CRUD through the Jamf Pro API (JSON).

    Accessed via ``client.api_roles``.

    Example::

        role = client.api_roles.create(ApiRole(display_name="Read Computers", privileges=["Read Computers"]))
        print(client.api_roles.get_by_name("Read Computers").id)
        client.api_roles.delete_by_id(role.id)
    """

    def __init__(self, client: "JamfProClient") -> None:
        self._client = client

    def list(self) -> List[ApiRole]:
        return self._client.dispatch("GET", URI_API_ROLES, out_shape=ApiRoleList).value.results

    def get_by_id(self, role_id: str) -> ApiRole:
        return self._client.dispatch("GET", f"{URI_API_ROLES}/{role_id}", out_shape=ApiRole).value

    def get_by_name(self, display_name: str) -> Optional[ApiRole]:
        """
        Find a role by display name.

        The Jamf Pro API has no name lookup, so the full list is fetched and
        filtered client-side.

        :return: The matching role, or ``None`` if no role has that name.
        :rtype: ~jamfpro_sdk.models.api_role.ApiRole | None
        """
        for role in self.list():
            if role.display_name == display_name:
                return role
        return None

    def create(self, role: ApiRole) -> ApiRole:
        return self._client.dispatch("POST", URI_API_ROLES, body=role, out_shape=ApiRole).value

    def update_by_id(self, role_id: str, role: ApiRole) -> ApiRole:
        return self._client.dispatch("PUT", f"{URI_API_ROLES}/{role_id}", body=role, out_shape=ApiRole).value

    def update_by_name(self, display_name: str, role: ApiRole) -> ApiRole:
        """
        Replace the role named ``display_name``.

        :raises ValidationError: If no role has that display name. No update is sent.
        """
        return self.update_by_id(self._require_id(display_name), role)

    def delete_by_id(self, role_id: str) -> None:
        self._client.dispatch("DELETE", f"{URI_API_ROLES}/{role_id}")

    def delete_by_name(self, display_name: str) -> None:
        """
        Delete the role named ``display_name``.

        :raises ValidationError: If no role has that display name. No delete is sent.
        """
        self.delete_by_id(self._require_id(display_name))

    def _require_id(self, display_name: str) -> str:
        role = self.get_by_name(display_name)
        if role is None or not role.id:
            raise ValidationError(
                f"No API role found with display name {display_name!r}",
                subcode=VALIDATION_NAME_NOT_FOUND,
                details={"display_name": display_name},
            )
        return role.id
