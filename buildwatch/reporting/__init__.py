"""Reporter protocol for buildwatch progress reporting.

The build engine holds exactly one ``Reporter`` and calls it inline from
whichever thread is driving that part of the build.  Build-scoped calls
(``build_started`` / ``build_finished``) come once each from the
orchestrating thread; unit-scoped calls arrive concurrently from one
worker thread per in-flight unit.

Implementers beware: every method runs on the build's hot path.  Blocking
in any of them blocks the build itself.

Modules
-------
formatting
    ``TerminalRenderer`` — stateless styling rules for every event.
writers
    ``SynchronizedOutput`` and the per-unit ``PrefixWriter`` sink.
registry
    ``WriterRegistry`` — the lock-guarded unit name -> sink mapping.
console
    ``ConsoleReporter`` — renders the event stream to a rich Console.
composite
    ``CompositeReporter`` — fans every event out to child reporters.
recording
    ``RecordingReporter`` — keeps events in memory for inspection.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from buildwatch.models.units import BuildStatus, BuildUnit


@runtime_checkable
class Reporter(Protocol):
    """Protocol that every buildwatch reporter must implement."""

    def build_started(
        self, root: BuildUnit, status_by_unit: Mapping[BuildUnit, BuildStatus]
    ) -> None:
        """Called once when a user-initiated build begins.

        This is not a dependency being built (see ``unit_build_started``).
        ``status_by_unit`` maps every transitive unit to its cache status;
        the root unit is later passed to ``unit_build_started`` once all of
        its dependencies are built.
        """
        ...

    def build_finished(self, root: BuildUnit, error: BaseException | None) -> None:
        """Called once when the user-initiated build concludes.

        ``error`` is ``None`` on success.
        """
        ...

    def unit_build_started(self, unit: BuildUnit) -> None:
        """Called when a unit's build actually gets underway.

        At this point all transitive dependencies of the unit are built.
        """
        ...

    def unit_build_log(self, unit: BuildUnit, is_err: bool, data: bytes) -> None:
        """Called whenever a unit's build command produced some output.

        ``is_err`` marks output from the command's error stream.
        """
        ...

    def unit_build_finished(self, unit: BuildUnit, error: BaseException | None) -> None:
        """Called exactly once per built unit, ending its log stream.

        ``error`` is ``None`` when the unit built successfully.
        """
        ...
