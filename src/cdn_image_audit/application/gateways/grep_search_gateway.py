from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import final

from typing_extensions import override

from cdn_image_audit.domain.protocols.file_search_port import FileSearchPort


@final
class GrepSearchGateway(FileSearchPort):
    """Delegates traversal to ``find`` and text search to ``grep``.

    Commands are run from an argument vector, never through a shell, so
    file names are passed through verbatim.
    """

    def __init__(
        self,
        find_bin: str = "find",
        grep_bin: str = "grep",
        timeout_seconds: int | None = None,
    ) -> None:
        self._find_bin = find_bin
        self._grep_bin = grep_bin
        if timeout_seconds is None:
            self._timeout_seconds: int | None = None
        else:
            self._timeout_seconds = max(1, int(timeout_seconds))

    @staticmethod
    def _normalize_ext(ext: str) -> str:
        return str(ext or "").strip().lower().lstrip(".")

    def _run(self, root: Path, *args: str) -> subprocess.CompletedProcess[str]:
        if not root.is_dir():
            raise FileNotFoundError(f"Directory not found: {root}")
        return subprocess.run(
            list(args),
            cwd=str(root),
            check=False,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=self._timeout_seconds,
        )

    def _find_args(self, extensions: Sequence[str]) -> list[str]:
        args = [self._find_bin, ".", "-type", "f", "("]
        for index, ext in enumerate(extensions):
            if index:
                args.append("-o")
            args.extend(["-iname", f"*.{self._normalize_ext(ext)}"])
        args.append(")")
        return args

    @classmethod
    def _include_glob(cls, ext: str) -> str:
        # --include is case-sensitive; spell each letter as a [xX] class
        chars = (
            f"[{ch.lower()}{ch.upper()}]" if ch.isalpha() else ch
            for ch in cls._normalize_ext(ext)
        )
        return "*." + "".join(chars)

    def _grep_args(self, mode: str, extensions: Sequence[str], needle: str) -> list[str]:
        args = [self._grep_bin, "-r", mode, "-F"]
        for ext in extensions:
            args.append(f"--include={self._include_glob(ext)}")
        args.extend(["-e", needle, "."])
        return args

    @staticmethod
    def _grep_stdout(result: subprocess.CompletedProcess[str]) -> str:
        # grep: 0 match, 1 no match, 2 error (possibly alongside matches)
        if result.returncode == 1:
            return ""
        if result.returncode > 1 and not result.stdout.strip():
            raise subprocess.CalledProcessError(
                result.returncode, result.args, result.stdout, result.stderr
            )
        return result.stdout

    @override
    def list_files(self, root: Path, extensions: Sequence[str]) -> list[str]:
        result = self._run(root, *self._find_args(extensions))
        # find exits 1 when some directories are unreadable; keep the partial listing
        if result.returncode != 0 and not result.stdout.strip():
            raise subprocess.CalledProcessError(
                result.returncode, result.args, result.stdout, result.stderr
            )
        files: list[str] = []
        for line in result.stdout.splitlines():
            path = line.strip()
            if not path:
                continue
            if path.startswith("./"):
                path = path[2:]
            files.append(path)
        return sorted(files)

    @override
    def search_text(self, root: Path, extensions: Sequence[str], needle: str) -> bool:
        if not needle:
            return False
        result = self._run(root, *self._grep_args("-l", extensions, needle))
        return bool(self._grep_stdout(result).strip())

    @override
    def find_lines(self, root: Path, extensions: Sequence[str], needle: str) -> list[str]:
        if not needle:
            return []
        result = self._run(root, *self._grep_args("-h", extensions, needle))
        return [line for line in self._grep_stdout(result).splitlines() if line.strip()]
