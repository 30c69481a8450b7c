"""buildwatch data models — build units and their cache status."""

from buildwatch.models.units import BuildStatus, BuildUnit, Package, VersionLookupError

__all__ = [
    "BuildStatus",
    "BuildUnit",
    "Package",
    "VersionLookupError",
]
