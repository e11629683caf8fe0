from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cdn_image_audit.config.settings_models import UserSettings


@dataclass(frozen=True)
class RuntimePaths:
    asset_root: Path
    project_root: Path


@dataclass(frozen=True)
class AppConfig:
    user: UserSettings
    paths: RuntimePaths
