"""RecordingReporter — keeps the event stream in memory.

Useful as a secondary observer next to the console reporter, and for
asserting on what a build engine reported.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from buildwatch.models.units import BuildStatus, BuildUnit


class EventKind(str, Enum):
    BUILD_STARTED = "build_started"
    BUILD_FINISHED = "build_finished"
    UNIT_BUILD_STARTED = "unit_build_started"
    UNIT_BUILD_LOG = "unit_build_log"
    UNIT_BUILD_FINISHED = "unit_build_finished"


class ReporterEvent(BaseModel):
    """One recorded reporter call.  Units are stored by full name."""

    model_config = ConfigDict(frozen=True)

    kind: EventKind
    unit: str
    is_err: bool = False
    data: bytes = b""
    error: str | None = None
    status: dict[str, BuildStatus] = Field(default_factory=dict)


class RecordingReporter:
    """Records every event it receives, in arrival order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[ReporterEvent] = []

    @property
    def events(self) -> list[ReporterEvent]:
        """Return a copy of the recorded events."""
        with self._lock:
            return list(self._events)

    def of_kind(self, kind: EventKind) -> list[ReporterEvent]:
        return [event for event in self.events if event.kind == kind]

    def output_of(self, name: str) -> bytes:
        """Return every log byte recorded for the unit *name*, concatenated."""
        return b"".join(
            event.data for event in self.of_kind(EventKind.UNIT_BUILD_LOG) if event.unit == name
        )

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def _record(self, event: ReporterEvent) -> None:
        with self._lock:
            self._events.append(event)

    # ------------------------------------------------------------------
    # Reporter protocol
    # ------------------------------------------------------------------

    def build_started(
        self, root: BuildUnit, status_by_unit: Mapping[BuildUnit, BuildStatus]
    ) -> None:
        self._record(
            ReporterEvent(
                kind=EventKind.BUILD_STARTED,
                unit=root.full_name,
                status={unit.full_name: status for unit, status in status_by_unit.items()},
            )
        )

    def build_finished(self, root: BuildUnit, error: BaseException | None) -> None:
        self._record(
            ReporterEvent(
                kind=EventKind.BUILD_FINISHED,
                unit=root.full_name,
                error=None if error is None else str(error),
            )
        )

    def unit_build_started(self, unit: BuildUnit) -> None:
        self._record(ReporterEvent(kind=EventKind.UNIT_BUILD_STARTED, unit=unit.full_name))

    def unit_build_log(self, unit: BuildUnit, is_err: bool, data: bytes) -> None:
        self._record(
            ReporterEvent(
                kind=EventKind.UNIT_BUILD_LOG,
                unit=unit.full_name,
                is_err=is_err,
                data=bytes(data),
            )
        )

    def unit_build_finished(self, unit: BuildUnit, error: BaseException | None) -> None:
        self._record(
            ReporterEvent(
                kind=EventKind.UNIT_BUILD_FINISHED,
                unit=unit.full_name,
                error=None if error is None else str(error),
            )
        )
