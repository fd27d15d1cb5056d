# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Classic API user extension attribute shapes (``/JSSResource/userextensionattributes``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class UserExtensionAttributeInputType:
    __xml_root__ = "input_type"

    type: Optional[str] = None


@dataclass
class UserExtensionAttribute:
    """
    A custom attribute recorded against user records.

    :param id: Attribute id assigned by Jamf Pro.
    :type id: int | None
    :param name: Attribute name.
    :type name: str | None
    :param description: Free-text description.
    :type description: str | None
    :param data_type: ``"String"``, ``"Integer"`` or ``"Date"``.
    :type data_type: str | None
    :param input_type: How the value is entered, e.g. ``UserExtensionAttributeInputType("Text Field")``.
    :type input_type: UserExtensionAttributeInputType | None
    """

    __xml_root__ = "user_extension_attribute"

    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    data_type: Optional[str] = None
    input_type: Optional[UserExtensionAttributeInputType] = None


@dataclass
class UserExtensionAttributeList:
    """Response of ``GET /JSSResource/userextensionattributes``."""

    __xml_root__ = "user_extension_attributes"

    size: int = 0
    attributes: List[UserExtensionAttribute] = field(
        default_factory=list, metadata={"xml": "user_extension_attribute"}
    )


__all__ = ["UserExtensionAttributeInputType", "UserExtensionAttribute", "UserExtensionAttributeList"]
