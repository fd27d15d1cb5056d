# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Self Service icon shapes (``/api/v1/icon``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Icon:
    """
    An uploaded Self Service icon.

    :param id: Icon id assigned by Jamf Pro.
    :type id: int | None
    :param name: Original file name.
    :type name: str | None
    :param url: Download URL served by Jamf Pro.
    :type url: str | None
    """

    id: Optional[int] = None
    name: Optional[str] = None
    url: Optional[str] = None


__all__ = ["Icon"]
