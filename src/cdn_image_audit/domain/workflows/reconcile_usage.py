from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path, PurePosixPath
from typing import final

from cdn_image_audit.domain.models.image_asset import ImageAsset, UnusedAsset
from cdn_image_audit.domain.models.results import ReferenceSet, UsageReport


def is_used(asset: ImageAsset, references: Iterable[str]) -> bool:
    for ref in references:
        if ref == asset.path or asset.path in ref or ref in asset.path:
            return True
        if PurePosixPath(ref).name == asset.basename:
            return True
    return False


def _stat_size(path: Path) -> int:
    return int(path.stat().st_size)


@final
class ReconcileUsage:
    def __init__(
        self,
        asset_root: Path,
        logger: logging.Logger,
        size_of: Callable[[Path], int] = _stat_size,
    ) -> None:
        self._asset_root = asset_root
        self._logger = logger
        self._size_of = size_of

    def _lookup_size(self, asset: ImageAsset) -> int | None:
        try:
            return self._size_of(self._asset_root / asset.path)
        except OSError as exc:
            self._logger.error("Error reading %s: %s", asset.path, exc)
            return None

    def __call__(self, assets: Sequence[ImageAsset], references: ReferenceSet) -> UsageReport:
        used: list[str] = []
        unused: list[UnusedAsset] = []
        for asset in assets:
            if is_used(asset, references):
                used.append(asset.path)
                continue
            unused.append(UnusedAsset(path=asset.path, size_bytes=self._lookup_size(asset)))

        # stable sort keeps enumeration order among equal sizes
        unused.sort(key=lambda item: item.sort_key, reverse=True)
        return UsageReport(total=len(assets), used=tuple(sorted(used)), unused=tuple(unused))
