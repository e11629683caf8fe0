from __future__ import annotations

from typing import final

from cdn_image_audit.domain.models.results import UsageReport

BANNER = "🔍 Analyzing CDN image usage in portfolio project...\n"


@final
class TextReport:
    """Human-facing usage report. There is no structured output mode."""

    def __init__(self, report: UsageReport) -> None:
        self._report = report

    def _header(self) -> list[str]:
        return [
            f"📊 Total CDN images: {self._report.total}",
            f"📎 Used CDN images: {len(self._report.used)}",
            "",
        ]

    def _used_section(self) -> list[str]:
        lines = ["✅ USED CDN IMAGES:", "==================="]
        lines.extend(f"  {path}" for path in self._report.used)
        return lines

    def _unused_section(self) -> list[str]:
        lines = ["", "❌ UNUSED CDN IMAGES:", "====================="]
        if not self._report.unused:
            lines.append("  🎉 No unused CDN images found!")
            return lines

        lines.extend(f"  {item.path} ({item.size_label})" for item in self._report.unused)
        lines.append("")
        lines.append(f"💾 Total unused CDN space: {self._report.unused_mib:.2f} MB")
        lines.extend(["", "🗑️  CDN DELETE COMMANDS:", "========================"])
        lines.extend(f'rm "{item.path}"' for item in self._report.unused)
        return lines

    def _summary(self) -> list[str]:
        return [
            "",
            f"📈 Summary: {len(self._report.unused)} unused CDN images "
            f"out of {self._report.total} total",
        ]

    def lines(self) -> list[str]:
        return [*self._header(), *self._used_section(), *self._unused_section(), *self._summary()]

    def render(self) -> str:
        return "\n".join(self.lines()) + "\n"
