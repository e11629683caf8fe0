from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_size(size_bytes: int | None) -> str:
    """Render a byte count as ``512 B``, ``1.5 KB``, ``2 MB``.

    Units step by 1024 and stop at GB. One decimal is kept and a trailing
    ``.0`` is dropped. ``None`` means the size could not be read.
    """
    if size_bytes is None:
        return "Unknown"
    if size_bytes <= 0:
        return "0 B"

    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1

    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text} {_SIZE_UNITS[unit]}"


@dataclass(frozen=True, slots=True)
class ImageAsset:
    path: str

    @property
    def basename(self) -> str:
        return PurePosixPath(self.path).name


@dataclass(frozen=True, slots=True)
class UnusedAsset:
    path: str
    size_bytes: int | None

    @property
    def size_label(self) -> str:
        return format_size(self.size_bytes)

    @property
    def sort_key(self) -> int:
        return -1 if self.size_bytes is None else self.size_bytes
