"""ConsoleReporter — renders build progress to a Rich console.

Each unit gets its own ``PrefixWriter`` for the lifetime of its build, so
interleaved output from concurrently building units stays attributable:
every line starts with ``[<full name>] ``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from rich.console import Console

from buildwatch.config import ReporterSettings, config
from buildwatch.models.units import BuildStatus, BuildUnit
from buildwatch.reporting.formatting import TerminalRenderer
from buildwatch.reporting.registry import WriterRegistry
from buildwatch.reporting.writers import PrefixWriter, SynchronizedOutput

logger = logging.getLogger(__name__)


class ConsoleReporter:
    """Reports build progress by printing to a console.

    Construct one per build run; the writer registry starts empty and
    entries live from a unit's first event until its finished event.

    Parameters
    ----------
    console:
        Where output goes.  A console on stdout, configured from
        *settings*, is created if not provided.
    renderer:
        Formatting rules.  A ``TerminalRenderer`` is created if not
        provided.
    settings:
        Reporter settings.  The module-level ``config`` is used if not
        provided.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        renderer: TerminalRenderer | None = None,
        settings: ReporterSettings | None = None,
    ) -> None:
        self.settings = settings or config
        self.console = console or Console(
            force_terminal=self.settings.force_terminal,
            no_color=self.settings.no_color,
            width=self.settings.width,
        )
        self.renderer = renderer or TerminalRenderer(self.settings)
        self._output = SynchronizedOutput(self.console)
        self._writers: WriterRegistry[PrefixWriter] = WriterRegistry()

    def active_units(self) -> list[str]:
        """Return the names of units that currently have an open writer."""
        return self._writers.names()

    # ------------------------------------------------------------------
    # Build-scoped events
    # ------------------------------------------------------------------

    def build_started(
        self, root: BuildUnit, status_by_unit: Mapping[BuildUnit, BuildStatus]
    ) -> None:
        # The cache is warm at this point, so this is the list of work to do.
        self._output.write(self.renderer.status_table(status_by_unit))

    def build_finished(self, root: BuildUnit, error: BaseException | None) -> None:
        self._output.write(self.renderer.build_summary(error))

    # ------------------------------------------------------------------
    # Unit-scoped events
    # ------------------------------------------------------------------

    def unit_build_started(self, unit: BuildUnit) -> None:
        writer = self._new_writer(unit)
        if self._writers.replace(unit.full_name, writer) is not None:
            logger.debug("Replaced open writer for %s", unit.full_name)
        writer.write(self.renderer.unit_started(unit))

    def unit_build_log(self, unit: BuildUnit, is_err: bool, data: bytes) -> None:
        writer, created = self._writers.get_or_create(
            unit.full_name, lambda: self._new_writer(unit)
        )
        if created:
            logger.debug("Unit %s: saw build log output before the build started", unit.full_name)
        writer.write(data)

    def unit_build_finished(self, unit: BuildUnit, error: BaseException | None) -> None:
        name = unit.full_name
        writer = self._writers.get(name) or self._new_writer(unit)
        writer.flush()
        writer.write(self.renderer.unit_summary(error))
        self._writers.pop(name)

    def _new_writer(self, unit: BuildUnit) -> PrefixWriter:
        return PrefixWriter(self._output, self.renderer.run_prefix(unit))
