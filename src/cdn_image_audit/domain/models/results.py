from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from cdn_image_audit.domain.models.image_asset import UnusedAsset

ReferenceSet: TypeAlias = frozenset[str]

_MIB = 1024 * 1024


@dataclass(frozen=True, slots=True)
class UsageReport:
    total: int
    used: tuple[str, ...]
    unused: tuple[UnusedAsset, ...]

    @property
    def unused_bytes(self) -> int:
        return sum(item.size_bytes for item in self.unused if item.size_bytes is not None)

    @property
    def unused_mib(self) -> float:
        return self.unused_bytes / _MIB
