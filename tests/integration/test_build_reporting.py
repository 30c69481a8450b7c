"""Integration test — a build engine driving a composite of reporters.

Simulates the engine: build-scoped events from the orchestrating thread,
unit-scoped events from one worker thread per pending unit.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from buildwatch.models.units import BuildStatus, Package
from buildwatch.reporting.composite import CompositeReporter
from buildwatch.reporting.console import ConsoleReporter
from buildwatch.reporting.recording import EventKind, RecordingReporter


class TestEndToEnd:
    def test_two_unit_build(self, reporter, output_lines):
        x = Package(name="X", version_id="1")
        y = Package(name="Y", version_id="2")

        reporter.build_started(y, {x: BuildStatus.BUILT, y: BuildStatus.PENDING})
        table = output_lines()
        assert len(table) == 2
        assert table[0].split()[1:3] == ["cached", "X"]
        assert table[1].split()[1:3] == ["build", "Y"]

        reporter.unit_build_started(y)
        reporter.unit_build_log(y, False, b"ok\n")
        reporter.unit_build_finished(y, None)
        assert output_lines()[2:] == [
            "[Y] build started (version 2)",
            "[Y] ok",
            "[Y] package build succeeded",
        ]

        reporter.build_finished(y, None)
        assert output_lines()[-1] == "build succeeded"

    def test_concurrent_build_through_composite(self, console, settings, output_lines):
        libs = [Package(name=f"lib-{i}", component="core", version_id=f"v{i}") for i in range(6)]
        root = Package(name="app", component="core")
        status = {lib: BuildStatus.PENDING for lib in libs}
        status[root] = BuildStatus.PENDING

        recorder = RecordingReporter()
        engine_reporter = CompositeReporter([ConsoleReporter(console, settings=settings), recorder])

        def _build(unit: Package) -> None:
            engine_reporter.unit_build_started(unit)
            for i in range(20):
                engine_reporter.unit_build_log(unit, False, f"line {i}\n".encode())
            error = RuntimeError("compiler crashed") if unit.name == "lib-3" else None
            engine_reporter.unit_build_finished(unit, error)

        engine_reporter.build_started(root, status)
        with ThreadPoolExecutor(max_workers=len(libs)) as pool:
            list(pool.map(_build, libs))
        engine_reporter.build_finished(root, RuntimeError("1 unit failed"))

        lines = output_lines()
        assert lines[-2:] == ["build failed", "Reason: 1 unit failed"]
        assert "(version unknown)" in lines[0]  # core:app sorts first

        for lib in libs:
            prefix = f"[{lib.full_name}] "
            own = [line[len(prefix):] for line in lines if line.startswith(prefix)]
            assert own[1:21] == [f"line {i}" for i in range(20)]
        assert "[core:lib-3] Reason: compiler crashed" in lines

        assert len(recorder.of_kind(EventKind.UNIT_BUILD_LOG)) == 6 * 20
        assert recorder.events[0].kind is EventKind.BUILD_STARTED
        assert recorder.events[-1].kind is EventKind.BUILD_FINISHED
