"""buildwatch: progress reporting for concurrent build orchestration.

Turns build lifecycle events into prefixed, per-unit console output and
fans the same events out to any number of observers:
  - ``Reporter`` protocol called inline by the build engine
  - ``ConsoleReporter`` with a lock-guarded per-unit writer registry
  - ``CompositeReporter`` forwarding to children in order
  - ``RecordingReporter`` keeping events in memory
"""

__version__ = "0.1.0"
__description__ = "Console progress reporting for concurrent builds"

from buildwatch.models.units import BuildStatus, BuildUnit, Package, VersionLookupError
from buildwatch.reporting import Reporter
from buildwatch.reporting.composite import CompositeReporter
from buildwatch.reporting.console import ConsoleReporter
from buildwatch.reporting.recording import RecordingReporter

__all__ = [
    "BuildStatus",
    "BuildUnit",
    "CompositeReporter",
    "ConsoleReporter",
    "Package",
    "RecordingReporter",
    "Reporter",
    "VersionLookupError",
    "__version__",
]
