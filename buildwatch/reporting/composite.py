"""CompositeReporter — multiplexes reporter events to multiple reporters."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from buildwatch.models.units import BuildStatus, BuildUnit

if TYPE_CHECKING:
    from buildwatch.reporting import Reporter


class CompositeReporter:
    """Forwards every event to each child, in order, before returning.

    Behaves like a single reporter from the build engine's perspective.
    There is no isolation between children: if one raises, the exception
    reaches the caller and the remaining children are not called.
    """

    def __init__(self, children: Iterable[Reporter]) -> None:
        self.children: tuple[Reporter, ...] = tuple(children)

    def build_started(
        self, root: BuildUnit, status_by_unit: Mapping[BuildUnit, BuildStatus]
    ) -> None:
        for child in self.children:
            child.build_started(root, status_by_unit)

    def build_finished(self, root: BuildUnit, error: BaseException | None) -> None:
        for child in self.children:
            child.build_finished(root, error)

    def unit_build_started(self, unit: BuildUnit) -> None:
        for child in self.children:
            child.unit_build_started(unit)

    def unit_build_log(self, unit: BuildUnit, is_err: bool, data: bytes) -> None:
        for child in self.children:
            child.unit_build_log(unit, is_err, data)

    def unit_build_finished(self, unit: BuildUnit, error: BaseException | None) -> None:
        for child in self.children:
            child.unit_build_finished(unit, error)
