"""Build unit models — the shape of what the build engine hands the reporters.

The build graph, the cache and version resolution live outside this
package.  Reporters only ever see a unit's ``full_name`` and call its
``version()``, which is allowed to fail.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class VersionLookupError(LookupError):
    """Raised when a build unit cannot determine its version."""


class BuildStatus(str, Enum):
    """Cache state of a unit, computed before a top-level build starts."""

    BUILT = "built"  # satisfied from cache
    PENDING = "pending"  # must be built


@runtime_checkable
class BuildUnit(Protocol):
    """Protocol for anything the build engine reports on.

    Attributes
    ----------
    full_name : str
        Stable identity of the unit.  Reporters key their per-unit state
        on it, so it must not change during a run.
    """

    @property
    def full_name(self) -> str:
        ...

    def version(self) -> str:
        """Return the unit's version.  May raise."""
        ...


class Package(BaseModel):
    """A concrete, hashable build unit.

    The full name is ``component:name`` when a component is set, otherwise
    just ``name``.  ``version()`` raises ``VersionLookupError`` when no
    ``version_id`` was resolved for the package.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    component: str | None = None
    version_id: str | None = None

    @property
    def full_name(self) -> str:
        if self.component:
            return f"{self.component}:{self.name}"
        return self.name

    def version(self) -> str:
        if self.version_id is None:
            raise VersionLookupError(f"No version resolved for {self.full_name}")
        return self.version_id
