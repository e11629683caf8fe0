import sys
from pathlib import Path

root = Path(__file__).resolve().parents[1]
src = root / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

import pytest


@pytest.fixture()
def temp_workspace(tmp_path: Path) -> Path:
    asset_root = tmp_path / "portfolio-images-temp"
    asset_root.mkdir(parents=True, exist_ok=True)
    return asset_root


@pytest.fixture()
def project_root(temp_workspace: Path) -> Path:
    path = temp_workspace.parent / "Portofolio-NodeJS"
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture()
def write_file():
    def _write(path: Path, content: str | bytes) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            _ = path.write_bytes(content)
        else:
            _ = path.write_text(content, encoding="utf-8")
        return path

    return _write
