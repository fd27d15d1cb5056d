# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SsoFailover:
    """SSO failover URL and the epoch-millisecond time it was generated."""

    failover_url: Optional[str] = field(default=None, metadata={"json": "failoverUrl"})
    generation_time: Optional[int] = field(default=None, metadata={"json": "generationTime"})


__all__ = ["SsoFailover"]
