from __future__ import annotations

"""
Registry snapshot documents.

WHY THIS FILE EXISTS:
Consoles and tests feed the views from a JSON export of the module runtime
rather than a live framework. The document is validated here (pydantic) and
converted into the frozen runtime entities the views read.

Document shape:
    {
      "schema_version": 1,
      "modules": [{"module_id": 0, "symbolic_name": "...", "version": "1.0.0",
                   "state": "ACTIVE", "headers": {...}, "location": "...",
                   "last_modified": 0}],
      "bindings": {"<module_id>": [{"reference": "...", "properties": {...}}]}
    }
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from modulescope.core.config.io import read_json_file
from modulescope.core.errors import SnapshotError
from modulescope.core.manifest.version import Version
from modulescope.core.runtime.models import CapabilityBinding, Module, ModuleState

SNAPSHOT_SCHEMA_VERSION = 1


class ModuleRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    module_id: int = Field(ge=0)
    symbolic_name: str = ""
    version: str = "0.0.0"
    state: Union[int, str] = int(ModuleState.INSTALLED)
    headers: Dict[str, str] = Field(default_factory=dict)
    location: str = ""
    last_modified: int = Field(default=0, ge=0)

    @field_validator("version")
    @classmethod
    def _valid_version(cls, v: str) -> str:
        Version.parse(v)
        return v

    @field_validator("state", mode="before")
    @classmethod
    def _norm_state(cls, v: Any) -> int:
        if isinstance(v, bool):
            raise ValueError("state must be an int or a state name")
        if isinstance(v, int):
            # Unknown ints are kept; the views degrade them to "no status".
            return v
        name = str(v or "").strip().upper()
        if name.isdigit():
            return int(name)
        try:
            return int(ModuleState[name])
        except KeyError as e:
            raise ValueError(f"unknown state {v!r}") from e


class BindingRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reference: Optional[str] = None
    properties: Dict[str, Any] = Field(default_factory=dict)


class RegistrySnapshotFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schema_version: int = Field(default=SNAPSHOT_SCHEMA_VERSION, ge=1, le=10)
    modules: List[ModuleRecord] = Field(default_factory=list)
    bindings: Dict[str, List[BindingRecord]] = Field(default_factory=dict)


@dataclass(frozen=True)
class RegistrySnapshot:
    modules: Tuple[Module, ...] = ()
    bindings: Dict[int, Tuple[CapabilityBinding, ...]] = field(default_factory=dict)

    def bindings_for(self, module_id: int) -> Tuple[CapabilityBinding, ...]:
        return self.bindings.get(int(module_id), ())


def _to_module(rec: ModuleRecord) -> Module:
    try:
        state: Union[ModuleState, int] = ModuleState(rec.state)
    except ValueError:
        state = rec.state
    return Module(
        module_id=rec.module_id,
        symbolic_name=rec.symbolic_name,
        version=Version.parse(rec.version),
        state=state,
        headers=dict(rec.headers),
        location=rec.location,
        last_modified=rec.last_modified,
    )


def snapshot_from_dict(raw: Dict[str, Any], *, logger=None) -> RegistrySnapshot:
    if not isinstance(raw, dict):
        raise SnapshotError("Snapshot must be a JSON object.")
    try:
        doc = RegistrySnapshotFile.model_validate(raw)
    except ValidationError as e:
        raise SnapshotError(str(e)[:300]) from e

    modules: List[Module] = []
    seen: set[int] = set()
    for rec in doc.modules:
        if rec.module_id in seen:
            raise SnapshotError(f"Duplicate module id {rec.module_id}.", module_id=rec.module_id)
        seen.add(rec.module_id)
        modules.append(_to_module(rec))

    bindings: Dict[int, Tuple[CapabilityBinding, ...]] = {}
    for key, recs in doc.bindings.items():
        try:
            mid = int(str(key).strip())
        except ValueError as e:
            raise SnapshotError(f"Binding key {key!r} is not a module id.") from e
        if mid not in seen:
            if logger:
                logger.warning(f"Snapshot bindings for unknown module {mid} ignored.")
            continue
        bindings[mid] = tuple(CapabilityBinding(reference=r.reference, properties=r.properties) for r in recs)

    return RegistrySnapshot(modules=tuple(modules), bindings=bindings)


def load_snapshot(path: str, *, logger=None) -> RegistrySnapshot:
    rr = read_json_file(path)
    if not rr.ok:
        raise SnapshotError(f"Snapshot unreadable: {rr.error}", path=path)
    snap = snapshot_from_dict(rr.data, logger=logger)
    if logger:
        logger.info(f"Loaded snapshot {path}: {len(snap.modules)} modules")
    return snap
