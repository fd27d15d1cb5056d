# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Classic API user extension attribute operations namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING, List
from urllib.parse import quote

from ..models.user_extension_attribute import UserExtensionAttribute, UserExtensionAttributeList

if TYPE_CHECKING:
    from ..client import JamfProClient

URI_USER_EXTENSION_ATTRIBUTES = "/JSSResource/userextensionattributes"


class UserExtensionAttributeOperations:
    """
    User extension attribute CRUD through the Classic API (XML).

    Accessed via ``client.user_extension_attributes``.

    Example::

        attr = client.user_extension_attributes.create(
            UserExtensionAttribute(
                name="Cost Center",
                data_type="String",
                input_type=UserExtensionAttributeInputType("Text Field"),
            )
        )
        client.user_extension_attributes.delete_by_id(attr.id)
    """

    def __init__(self, client: "JamfProClient") -> None:
        self._client = client

    def list(self) -> List[UserExtensionAttribute]:
        return self._client.dispatch(
            "GET", URI_USER_EXTENSION_ATTRIBUTES, out_shape=UserExtensionAttributeList
        ).value.attributes

    def get_by_id(self, attribute_id: int) -> UserExtensionAttribute:
        return self._client.dispatch(
            "GET", f"{URI_USER_EXTENSION_ATTRIBUTES}/id/{attribute_id}", out_shape=UserExtensionAttribute
        ).value

    def get_by_name(self, name: str) -> UserExtensionAttribute:
        return self._client.dispatch(
            "GET", f"{URI_USER_EXTENSION_ATTRIBUTES}/name/{quote(name, safe='')}", out_shape=UserExtensionAttribute
        ).value

    def create(self, attribute: UserExtensionAttribute) -> UserExtensionAttribute:
        return self._client.dispatch(
            "POST", f"{URI_USER_EXTENSION_ATTRIBUTES}/id/0", body=attribute, out_shape=UserExtensionAttribute
        ).value

    def update_by_id(self, attribute_id: int, attribute: UserExtensionAttribute) -> UserExtensionAttribute:
        return self._client.dispatch(
            "PUT",
            f"{URI_USER_EXTENSION_ATTRIBUTES}/id/{attribute_id}",
            body=attribute,
            out_shape=UserExtensionAttribute,
        ).value

    def update_by_name(self, name: str, attribute: UserExtensionAttribute) -> UserExtensionAttribute:
        return self._client.dispatch(
            "PUT",
            f"{URI_USER_EXTENSION_ATTRIBUTES}/name/{quote(name, safe='')}",
            body=attribute,
            out_shape=UserExtensionAttribute,
        ).value

    def delete_by_id(self, attribute_id: int) -> None:
        self._client.dispatch("DELETE", f"{URI_USER_EXTENSION_ATTRIBUTES}/id/{attribute_id}")

    def delete_by_name(self, name: str) -> None:
        self._client.dispatch("DELETE", f"{URI_USER_EXTENSION_ATTRIBUTES}/name/{quote(name, safe='')}")
