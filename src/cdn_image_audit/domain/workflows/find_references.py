from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import final

from cdn_image_audit.domain.models.image_asset import ImageAsset
from cdn_image_audit.domain.models.results import ReferenceSet
from cdn_image_audit.domain.protocols.file_search_port import FileSearchPort


def build_cdn_pattern(marker: str, image_extensions: Sequence[str]) -> re.Pattern[str]:
    exts = "|".join(re.escape(ext) for ext in image_extensions)
    return re.compile(
        rf"{re.escape(marker)}([^\"'\s)]+\.(?:{exts}))",
        re.IGNORECASE,
    )


def extract_cdn_paths(line: str, marker: str, pattern: re.Pattern[str]) -> list[str]:
    """Return the image paths that follow ``marker`` in ``line``.

    Everything up to and including the last occurrence of the marker's final
    segment is stripped, so ``repo/main/a/main/b.png`` yields ``b.png``.
    """
    tail = marker.rstrip("/").rsplit("/", 1)[-1]
    separator = f"/{tail}/".lower()
    paths: list[str] = []
    for match in pattern.finditer(line):
        full = match.group(0)
        index = full.lower().rfind(separator)
        if index >= 0:
            paths.append(full[index + len(separator):])
        else:
            paths.append(match.group(1))
    return paths


@final
class FindReferences:
    def __init__(
        self,
        search: FileSearchPort,
        source_extensions: Sequence[str],
        image_extensions: Sequence[str],
        cdn_path_marker: str,
        logger: logging.Logger,
    ) -> None:
        self._search = search
        self._source_extensions = tuple(source_extensions)
        self._marker = cdn_path_marker
        self._pattern = build_cdn_pattern(cdn_path_marker, image_extensions)
        self._logger = logger

    def _cdn_url_references(self, project_root: Path) -> set[str]:
        try:
            lines = self._search.find_lines(project_root, self._source_extensions, self._marker)
        except Exception as exc:
            self._logger.warning("CDN reference scan failed in %s: %s", project_root, exc)
            return set()

        found: set[str] = set()
        for line in lines:
            found.update(extract_cdn_paths(line, self._marker, self._pattern))
        return found

    def _filename_references(
        self, project_root: Path, assets: Iterable[ImageAsset]
    ) -> set[str]:
        found: set[str] = set()
        for asset in assets:
            try:
                hit = self._search.search_text(
                    project_root, self._source_extensions, asset.basename
                )
            except Exception as exc:
                self._logger.warning("Filename scan failed for %s: %s", asset.basename, exc)
                continue
            if hit:
                found.add(asset.path)
        return found

    def __call__(self, project_root: Path, assets: Sequence[ImageAsset]) -> ReferenceSet:
        if not project_root.is_dir():
            self._logger.warning("Project directory not found: %s", project_root)
            return frozenset()

        url_refs = self._cdn_url_references(project_root)
        name_refs = self._filename_references(project_root, assets)
        self._logger.debug(
            "References collected: cdn urls: %d, filenames: %d",
            len(url_refs),
            len(name_refs),
        )
        return frozenset(url_refs | name_refs)
