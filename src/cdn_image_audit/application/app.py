from __future__ import annotations

import logging
from pathlib import Path
from typing import final

from tabulate import tabulate

from cdn_image_audit.application.gateways.grep_search_gateway import GrepSearchGateway
from cdn_image_audit.application.gateways.native_search_gateway import NativeSearchGateway
from cdn_image_audit.application.reporting.text_report import BANNER, TextReport
from cdn_image_audit.config.logging_setup import configure_logging
from cdn_image_audit.config.settings_loader import SettingsLoader
from cdn_image_audit.config.settings_models import SearchBackend
from cdn_image_audit.domain.models.app_config import AppConfig
from cdn_image_audit.domain.models.results import UsageReport
from cdn_image_audit.domain.protocols.file_search_port import FileSearchPort
from cdn_image_audit.domain.workflows.enumerate_assets import EnumerateAssets
from cdn_image_audit.domain.workflows.find_references import FindReferences
from cdn_image_audit.domain.workflows.reconcile_usage import ReconcileUsage


@final
class AuditApp:
    def __init__(self, config: AppConfig, search: FileSearchPort | None = None) -> None:
        self._config = config
        self._log = logging.getLogger("cdn_image_audit.audit")
        self._search = search or self._build_search(config, self._log)

        user = config.user
        self._enumerate = EnumerateAssets(
            search=self._search,
            image_extensions=user.image_extensions,
            excluded_dirs=user.excluded_dirs,
            logger=self._log,
        )
        self._find_references = FindReferences(
            search=self._search,
            source_extensions=user.source_extensions,
            image_extensions=user.image_extensions,
            cdn_path_marker=user.cdn_path_marker,
            logger=self._log,
        )
        self._reconcile = ReconcileUsage(asset_root=config.paths.asset_root, logger=self._log)

    @staticmethod
    def _build_search(config: AppConfig, logger: logging.Logger) -> FileSearchPort:
        if config.user.search_backend == SearchBackend.GREP:
            return GrepSearchGateway(timeout_seconds=config.user.search_timeout_seconds)
        return NativeSearchGateway(logger=logger)

    @classmethod
    def run_from_cwd(cls, app_root: Path | None = None) -> int:
        config = SettingsLoader.load(app_root)
        configure_logging(config.user.log_level)
        return cls(config).run()

    def _log_settings(self) -> None:
        if not self._log.isEnabledFor(logging.DEBUG):
            return
        user = self._config.user
        rows = [
            ["ASSET_ROOT", self._config.paths.asset_root],
            ["PROJECT_ROOT", self._config.paths.project_root],
            ["CDN_PATH_MARKER", user.cdn_path_marker],
            ["IMAGE_EXTENSIONS", ", ".join(user.image_extensions)],
            ["SOURCE_EXTENSIONS", ", ".join(user.source_extensions)],
            ["SEARCH_BACKEND", user.search_backend.value],
        ]
        self._log.debug("Effective settings:\n%s", tabulate(rows, tablefmt="fancy_outline"))

    def analyze(self) -> UsageReport:
        paths = self._config.paths
        assets = self._enumerate(paths.asset_root)
        references = self._find_references(paths.project_root, assets)
        report = self._reconcile(assets, references)
        self._log.debug(
            "Analysis completed: total: %d, used: %d, unused: %d",
            report.total,
            len(report.used),
            len(report.unused),
        )
        return report

    def run(self) -> int:
        self._log_settings()
        print(BANNER)
        report = self.analyze()
        print(TextReport(report).render(), end="")
        return 0


def main() -> int:
    return AuditApp.run_from_cwd()
