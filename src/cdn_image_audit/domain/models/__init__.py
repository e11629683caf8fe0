from cdn_image_audit.domain.models.app_config import AppConfig, RuntimePaths
from cdn_image_audit.domain.models.image_asset import ImageAsset, UnusedAsset, format_size
from cdn_image_audit.domain.models.results import ReferenceSet, UsageReport

__all__ = [
    "AppConfig",
    "ImageAsset",
    "ReferenceSet",
    "RuntimePaths",
    "UnusedAsset",
    "UsageReport",
    "format_size",
]
