from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class SearchBackend(StrEnum):
    NATIVE = "native"
    GREP = "grep"


class UserSettings(BaseModel):
    log_level: str = Field(default="info")
    project_dir: str = Field(default="../Portofolio-NodeJS")
    cdn_path_marker: str = Field(default="portfolio-images-temp/main/")
    image_extensions: tuple[str, ...] = Field(
        default=("jpg", "jpeg", "png", "gif", "svg", "webp")
    )
    source_extensions: tuple[str, ...] = Field(default=("ejs", "css", "js"))
    excluded_dirs: tuple[str, ...] = Field(default=(".git",))
    search_backend: SearchBackend = Field(default=SearchBackend.NATIVE)
    search_timeout_seconds: int | None = Field(default=None, ge=1)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = str(value or "").strip().lower()
        if not normalized:
            return "info"
        if normalized not in {"debug", "info", "warn", "warning", "error"}:
            raise ValueError("LOG_LEVEL must be one of: debug, info, warn, error")
        return "warning" if normalized == "warn" else normalized

    @field_validator("image_extensions", "source_extensions")
    @classmethod
    def _normalize_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: set[str] = set()
        normalized: list[str] = []
        for item in value:
            ext = str(item or "").strip().lower().lstrip(".")
            if not ext or ext in seen:
                continue
            seen.add(ext)
            normalized.append(ext)
        if not normalized:
            raise ValueError("extension list must not be empty")
        return tuple(normalized)

    @field_validator("cdn_path_marker")
    @classmethod
    def _validate_marker(cls, value: str) -> str:
        marker = str(value or "").strip().strip("/")
        if not marker:
            raise ValueError("CDN_PATH_MARKER must not be empty")
        return f"{marker}/"
