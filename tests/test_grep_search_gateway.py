# pyright: reportPrivateUsage=false

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from cdn_image_audit.application.gateways import grep_search_gateway as module
from cdn_image_audit.application.gateways.grep_search_gateway import GrepSearchGateway

_needs_tools = pytest.mark.skipif(
    shutil.which("grep") is None or shutil.which("find") is None,
    reason="find/grep not available",
)


class _FakeRun:
    def __init__(self, returncode: int, stdout: str = "", stderr: str = "") -> None:
        self._returncode = returncode
        self._stdout = stdout
        self._stderr = stderr
        self.calls: list[tuple[list[str], dict[str, object]]] = []

    def __call__(self, args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        self.calls.append((args, kwargs))
        return subprocess.CompletedProcess(
            args=args, returncode=self._returncode, stdout=self._stdout, stderr=self._stderr
        )


def test_grep_search_gateway_find_args_given_extensions_when_built_then_uses_iname_alternatives() -> None:
    args = GrepSearchGateway()._find_args((".PNG", "jpg"))

    assert args == ["find", ".", "-type", "f", "(", "-iname", "*.png", "-o", "-iname", "*.jpg", ")"]


def test_grep_search_gateway_search_text_given_needle_when_called_then_passes_argument_vector(
    project_root: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    fake = _FakeRun(0, stdout="./views/index.ejs\n")
    monkeypatch.setattr(module.subprocess, "run", fake)
    gateway = GrepSearchGateway(timeout_seconds=5)

    assert gateway.search_text(project_root, ("ejs", "js"), '$(rm -rf).png') is True

    args, kwargs = fake.calls[0]
    assert args == [
        "grep",
        "-r",
        "-l",
        "-F",
        "--include=*.[eE][jJ][sS]",
        "--include=*.[jJ][sS]",
        "-e",
        "$(rm -rf).png",
        ".",
    ]
    assert kwargs["cwd"] == str(project_root)
    assert kwargs["timeout"] == 5
    assert "shell" not in kwargs


def test_grep_search_gateway_search_text_given_no_match_status_when_called_then_false(
    project_root: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(module.subprocess, "run", _FakeRun(1))

    assert GrepSearchGateway().search_text(project_root, ("js",), "a.png") is False


def test_grep_search_gateway_search_text_given_error_status_without_output_when_called_then_raises(
    project_root: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(module.subprocess, "run", _FakeRun(2, stderr="grep: bad"))

    with pytest.raises(subprocess.CalledProcessError):
        _ = GrepSearchGateway().search_text(project_root, ("js",), "a.png")


def test_grep_search_gateway_search_text_given_error_status_with_matches_when_called_then_true(
    project_root: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(module.subprocess, "run", _FakeRun(2, stdout="./a.js\n"))

    assert GrepSearchGateway().search_text(project_root, ("js",), "a.png") is True


def test_grep_search_gateway_list_files_given_find_failure_when_called_then_raises(
    temp_workspace: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(module.subprocess, "run", _FakeRun(1, stderr="find: denied"))

    with pytest.raises(subprocess.CalledProcessError):
        _ = GrepSearchGateway().list_files(temp_workspace, ("png",))


def test_grep_search_gateway_given_missing_root_when_called_then_raises(
    temp_workspace: Path,
) -> None:
    with pytest.raises(FileNotFoundError, match="Directory not found"):
        _ = GrepSearchGateway().list_files(temp_workspace / "missing", ("png",))


def test_grep_search_gateway_given_zero_timeout_when_created_then_clamps_to_one() -> None:
    assert GrepSearchGateway(timeout_seconds=0)._timeout_seconds == 1


@_needs_tools
def test_grep_search_gateway_given_real_tools_when_listing_then_returns_relative_paths(
    temp_workspace: Path,
    write_file,
) -> None:
    _ = write_file(temp_workspace / "img" / "a.PNG", b"a")
    _ = write_file(temp_workspace / "b.svg", "<svg/>")
    _ = write_file(temp_workspace / "c.txt", "c")

    files = GrepSearchGateway().list_files(temp_workspace, ("png", "svg"))

    assert files == ["b.svg", "img/a.PNG"]


@_needs_tools
def test_grep_search_gateway_given_real_tools_when_searching_then_matches_literally(
    project_root: Path,
    write_file,
) -> None:
    _ = write_file(project_root / "public" / "app.js", "img('logo.svg');\n")
    _ = write_file(
        project_root / "views" / "index.ejs",
        '<img src="https://x/portfolio-images-temp/main/a.png">\n',
    )
    gateway = GrepSearchGateway()

    assert gateway.search_text(project_root, ("ejs", "js"), "logo.svg") is True
    assert gateway.search_text(project_root, ("ejs", "js"), "logoXsvg") is False
    assert gateway.search_text(project_root, ("ejs", "js"), "log.\\.svg") is False
    assert gateway.find_lines(project_root, ("ejs", "js"), "portfolio-images-temp/main/") == [
        '<img src="https://x/portfolio-images-temp/main/a.png">'
    ]


def test_grep_search_gateway_list_files_given_partial_find_failure_when_called_then_keeps_listing(
    temp_workspace: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    fake = _FakeRun(1, stdout="./img/a.png\n./b.svg\n", stderr="find: './locked': Permission denied")
    monkeypatch.setattr(module.subprocess, "run", fake)

    files = GrepSearchGateway().list_files(temp_workspace, ("png", "svg"))

    assert files == ["b.svg", "img/a.png"]


def test_grep_search_gateway_include_glob_given_extension_when_built_then_matches_any_case() -> None:
    assert GrepSearchGateway._include_glob(".JS") == "*.[jJ][sS]"
    assert GrepSearchGateway._include_glob("mp4") == "*.[mM]4"


@_needs_tools
def test_grep_search_gateway_given_upper_case_extension_when_searching_then_matches_like_native(
    project_root: Path,
    write_file,
) -> None:
    _ = write_file(project_root / "legacy" / "APP.JS", "img('hero.webp');\n")

    assert GrepSearchGateway().search_text(project_root, ("js",), "hero.webp") is True
