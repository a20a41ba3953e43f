from __future__ import annotations

"""
Runtime-side entities handed to the views.

WHY THIS FILE EXISTS:
The module runtime owns these records; views only read them. They are frozen
so a snapshot cannot change underneath a view while it is being rendered.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Mapping, Union

from modulescope.core.manifest.version import EMPTY_VERSION, Version

FRAMEWORK_MODULE_ID = 0

# Well-known binding property keys.
SERVICE_ID = "service.id"
OBJECT_CLASS = "objectClass"
SERVICE_RANKING = "service.ranking"
SERVICE_PID = "service.pid"
SERVICE_MODULE_ID = "service.bundleid"


class ModuleState(IntEnum):
    UNINSTALLED = 1
    INSTALLED = 2
    RESOLVED = 4
    STARTING = 8
    STOPPING = 16
    ACTIVE = 32


def _frozen_mapping(value: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(value or {}))


@dataclass(frozen=True, eq=False)
class Module:
    module_id: int
    symbolic_name: str = ""
    version: Version = EMPTY_VERSION
    # Usually a ModuleState; runtimes may report values this package does not know.
    state: Union[ModuleState, int] = ModuleState.INSTALLED
    headers: Mapping[str, str] = field(default_factory=dict)
    location: str = ""
    last_modified: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _frozen_mapping(self.headers))
        object.__setattr__(self, "symbolic_name", str(self.symbolic_name or ""))
        object.__setattr__(self, "location", str(self.location or ""))


@dataclass(frozen=True, eq=False)
class CapabilityBinding:
    """One active service registration: an opaque reference plus its properties."""

    reference: Any = None
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", _frozen_mapping(self.properties))
