"""Terminal formatting rules for build progress output.

Turns reporter events into Rich ``Text`` renderables.  The
renderer holds no per-build state; where the output ends up is decided by
the writer it is handed to.

Color scheme
------------
- green       : cached units, successful builds
- yellow      : units to build, unit build started
- red         : failed builds
- bright_black: versions and per-unit prefixes
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from rich.text import Text

from buildwatch.config import ReporterSettings, config
from buildwatch.models.units import BuildStatus, BuildUnit

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Status -> tag mapping
# ---------------------------------------------------------------------------

_STATUS_TAGS: dict[BuildStatus, tuple[str, str, str]] = {
    BuildStatus.BUILT: ("📦", "cached", "green"),
    BuildStatus.PENDING: ("🔧", "build", "yellow"),
}

_MUTED = "bright_black"


class TerminalRenderer:
    """Formats reporter events for terminal display.

    Parameters
    ----------
    settings:
        Rendering settings.  The module-level ``config`` is used if not
        provided.
    """

    def __init__(self, settings: ReporterSettings | None = None) -> None:
        self.settings = settings or config

    def resolve_version(self, unit: BuildUnit) -> str:
        """Return the unit's version, or the placeholder if the lookup fails."""
        try:
            return unit.version()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Version lookup failed for %s: %s", unit.full_name, exc)
            return self.settings.version_placeholder

    # ------------------------------------------------------------------
    # Build status table
    # ------------------------------------------------------------------

    def status_cells(self, unit: BuildUnit, status: BuildStatus) -> tuple[Text, Text, Text]:
        """Return the tag, name and version cells of one status line.

        Anything that is not ``BuildStatus.BUILT`` is tagged for building.
        """
        icon, label, style = _STATUS_TAGS.get(status, _STATUS_TAGS[BuildStatus.PENDING])
        tag = f"{icon} {label}" if self.settings.show_icons else label
        return (
            Text(tag, style=style),
            Text(unit.full_name),
            Text(f"(version {self.resolve_version(unit)})", style=_MUTED),
        )

    def status_line(self, unit: BuildUnit, status: BuildStatus) -> Text:
        """Render one status line as tab-separated cells."""
        return Text("\t").join(self.status_cells(unit, status))

    def status_table(self, status_by_unit: Mapping[BuildUnit, BuildStatus]) -> Text:
        """Render the work list of a build as column-aligned lines.

        Rows are ordered by their plain rendered line, so the output does
        not depend on the mapping's iteration order.  Columns are padded to
        their widest cell and never truncated, whatever the console width.
        """
        rows = [self.status_cells(unit, status) for unit, status in status_by_unit.items()]
        rows.sort(key=lambda cells: "\t".join(cell.plain for cell in cells))

        widths = [max((row[i].cell_len for row in rows), default=0) for i in range(3)]
        gap = Text(" " * self.settings.column_padding)
        table = Text()
        for row in rows:
            cells = []
            for cell, width in zip(row[:-1], widths):
                padded = cell.copy()
                padded.pad_right(width - cell.cell_len)
                cells.append(padded)
            cells.append(row[-1])
            table.append_text(gap.join(cells))
            table.append("\n")
        return table

    # ------------------------------------------------------------------
    # Per-unit lines
    # ------------------------------------------------------------------

    def run_prefix(self, unit: BuildUnit) -> Text:
        return Text(f"[{unit.full_name}] ", style=_MUTED)

    def unit_started(self, unit: BuildUnit) -> Text:
        return Text.assemble(
            ("build started", "yellow"),
            " ",
            (f"(version {self.resolve_version(unit)})", _MUTED),
            "\n",
        )

    def unit_summary(self, error: BaseException | None) -> Text:
        return self._summary("package build", error)

    # ------------------------------------------------------------------
    # Build summary
    # ------------------------------------------------------------------

    def build_summary(self, error: BaseException | None) -> Text:
        return self._summary("build", error)

    @staticmethod
    def _summary(subject: str, error: BaseException | None) -> Text:
        if error is None:
            return Text.assemble((f"{subject} succeeded", "green"), "\n")
        return Text.assemble(
            (f"{subject} failed", "red"),
            "\n",
            ("Reason:", "white"),
            f" {error}\n",
        )
