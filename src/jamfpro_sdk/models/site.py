# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Site reference shared by Classic API resources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Site:
    """
    Site a Classic API resource is scoped to.

    Jamf Pro uses ``id=-1, name="none"`` for resources that belong to no site.
    """

    __xml_root__ = "site"

    id: Optional[int] = None
    name: Optional[str] = None

    @classmethod
    def none(cls) -> "Site":
        return cls(id=-1, name="none")

    def is_empty(self) -> bool:
        return not self.id and not self.name


__all__ = ["Site"]
