from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSearchPort(Protocol):
    def list_files(self, root: Path, extensions: Sequence[str]) -> list[str]: ...

    def search_text(self, root: Path, extensions: Sequence[str], needle: str) -> bool: ...

    def find_lines(self, root: Path, extensions: Sequence[str], needle: str) -> list[str]: ...
