from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import final

from typing_extensions import override

from cdn_image_audit.domain.protocols.file_search_port import FileSearchPort


@final
class NativeSearchGateway(FileSearchPort):
    """In-process file walk and literal substring search.

    Extensions match case-insensitively. A file that cannot be read is
    logged and skipped; the rest of the tree is still searched.
    """

    def __init__(self, logger: logging.Logger | None = None, encoding: str = "utf-8") -> None:
        self._logger = logger or logging.getLogger("cdn_image_audit.search")
        self._encoding = encoding

    @staticmethod
    def _suffixes(extensions: Sequence[str]) -> set[str]:
        return {f".{str(ext).strip().lower().lstrip('.')}" for ext in extensions}

    def _iter_files(self, root: Path, extensions: Sequence[str]) -> Iterator[Path]:
        if not root.is_dir():
            raise FileNotFoundError(f"Directory not found: {root}")
        suffixes = self._suffixes(extensions)
        for path in sorted(root.rglob("*")):
            if path.suffix.lower() not in suffixes:
                continue
            if not path.is_file():
                continue
            yield path

    def _iter_texts(self, root: Path, extensions: Sequence[str]) -> Iterator[str]:
        for path in self._iter_files(root, extensions):
            try:
                yield path.read_text(encoding=self._encoding, errors="ignore")
            except OSError as exc:
                self._logger.warning("Skipping unreadable file %s: %s", path, exc)

    @override
    def list_files(self, root: Path, extensions: Sequence[str]) -> list[str]:
        return [path.relative_to(root).as_posix() for path in self._iter_files(root, extensions)]

    @override
    def search_text(self, root: Path, extensions: Sequence[str], needle: str) -> bool:
        if not needle:
            return False
        return any(needle in text for text in self._iter_texts(root, extensions))

    @override
    def find_lines(self, root: Path, extensions: Sequence[str], needle: str) -> list[str]:
        if not needle:
            return []
        lines: list[str] = []
        for text in self._iter_texts(root, extensions):
            lines.extend(line for line in text.splitlines() if needle in line)
        return lines
