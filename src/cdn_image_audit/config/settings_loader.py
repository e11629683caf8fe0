from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import ClassVar, final

from cdn_image_audit.config.settings_models import UserSettings
from cdn_image_audit.domain.models.app_config import AppConfig, RuntimePaths


@final
class SettingsLoader:
    _KEY_MAP: ClassVar[dict[str, str]] = {
        "LOG_LEVEL": "log_level",
        "PROJECT_DIR": "project_dir",
        "CDN_PATH_MARKER": "cdn_path_marker",
        "IMAGE_EXTENSIONS": "image_extensions",
        "SOURCE_EXTENSIONS": "source_extensions",
        "EXCLUDED_DIRS": "excluded_dirs",
        "SEARCH_BACKEND": "search_backend",
        "SEARCH_TIMEOUT_SECONDS": "search_timeout_seconds",
    }
    _LIST_KEYS: ClassVar[frozenset[str]] = frozenset(
        {"image_extensions", "source_extensions", "excluded_dirs"}
    )

    @staticmethod
    def _split_list(text: str) -> tuple[str, ...]:
        return tuple(item.strip() for item in text.split(",") if item.strip())

    @classmethod
    def _to_user_settings(cls, raw: Mapping[str, str]) -> UserSettings:
        mapped: dict[str, object] = {}
        for key, value in raw.items():
            target = cls._KEY_MAP.get(str(key).strip().upper())
            if not target:
                continue
            text = str(value or "").strip()
            if not text:
                continue
            if target == "search_timeout_seconds":
                try:
                    mapped[target] = int(text)
                except ValueError:
                    mapped[target] = None
                continue
            if target in cls._LIST_KEYS:
                mapped[target] = cls._split_list(text)
                continue
            if target == "search_backend":
                mapped[target] = text.lower()
                continue

            mapped[target] = text

        return UserSettings.model_validate(mapped)

    @staticmethod
    def _build_paths(app_root: Path, user: UserSettings) -> RuntimePaths:
        project_root = Path(user.project_dir)
        if not project_root.is_absolute():
            project_root = app_root / project_root
        return RuntimePaths(asset_root=app_root, project_root=project_root)

    @classmethod
    def load(
        cls,
        app_root: Path | None = None,
        overrides: Mapping[str, str] | None = None,
    ) -> AppConfig:
        root = app_root or Path.cwd()
        user = cls._to_user_settings(overrides or {})
        paths = cls._build_paths(root, user)
        return AppConfig(user=user, paths=paths)
