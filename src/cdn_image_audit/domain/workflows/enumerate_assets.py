from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path, PurePosixPath
from typing import final

from cdn_image_audit.domain.models.image_asset import ImageAsset
from cdn_image_audit.domain.protocols.file_search_port import FileSearchPort


@final
class EnumerateAssets:
    def __init__(
        self,
        search: FileSearchPort,
        image_extensions: Sequence[str],
        excluded_dirs: Sequence[str],
        logger: logging.Logger,
    ) -> None:
        self._search = search
        self._image_extensions = tuple(image_extensions)
        self._excluded_dirs = frozenset(excluded_dirs)
        self._logger = logger

    def _is_excluded(self, rel_path: str) -> bool:
        parts = PurePosixPath(rel_path).parts[:-1]
        return any(part in self._excluded_dirs for part in parts)

    def __call__(self, asset_root: Path) -> tuple[ImageAsset, ...]:
        try:
            files = self._search.list_files(asset_root, self._image_extensions)
        except Exception as exc:
            self._logger.error("Error getting CDN image files: %s", exc)
            return tuple()

        assets = sorted({path for path in files if not self._is_excluded(path)})
        self._logger.debug("Enumerated %d image files under %s", len(assets), asset_root)
        return tuple(ImageAsset(path=path) for path in assets)
