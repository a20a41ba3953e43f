from __future__ import annotations

from functools import total_ordering
from typing import Any, Dict, Mapping, Optional, Tuple

from modulescope.core.errors import InvariantViolation
from modulescope.core.redaction import redact_binding_properties
from modulescope.core.runtime.models import (
    OBJECT_CLASS,
    SERVICE_ID,
    SERVICE_MODULE_ID,
    SERVICE_PID,
    SERVICE_RANKING,
    CapabilityBinding,
)


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@total_ordering
class CapabilityBindingView:
    """
    Display adapter for one active capability binding.

    Ordering: ranking descending, then service id ascending (bindings without an
    id after those with one), then interface names. Deterministic for identical
    property sets, independent of construction order.
    """

    __slots__ = ("_binding",)

    def __init__(self, binding: CapabilityBinding):
        if binding is None:
            raise InvariantViolation("Capability binding is required.")
        self._binding = binding

    @property
    def binding(self) -> CapabilityBinding:
        return self._binding

    @property
    def reference(self) -> Any:
        return self._binding.reference

    @property
    def properties(self) -> Mapping[str, Any]:
        return self._binding.properties

    @property
    def service_id(self) -> Optional[int]:
        return _as_int(self.properties.get(SERVICE_ID))

    @property
    def interfaces(self) -> Tuple[str, ...]:
        raw = self.properties.get(OBJECT_CLASS)
        if raw is None:
            return ()
        if isinstance(raw, str):
            return (raw,)
        try:
            return tuple(str(x) for x in raw)
        except TypeError:
            return (str(raw),)

    @property
    def interfaces_display(self) -> str:
        return ", ".join(self.interfaces)

    @property
    def ranking(self) -> int:
        return _as_int(self.properties.get(SERVICE_RANKING)) or 0

    @property
    def service_pid(self) -> Optional[str]:
        pid = self.properties.get(SERVICE_PID)
        return str(pid) if pid is not None else None

    @property
    def owner_module_id(self) -> Optional[int]:
        return _as_int(self.properties.get(SERVICE_MODULE_ID))

    def sort_key(self) -> Tuple[Any, ...]:
        sid = self.service_id
        return (-self.ranking, sid is None, sid if sid is not None else 0, self.interfaces)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CapabilityBindingView):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CapabilityBindingView):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service_id": self.service_id,
            "interfaces": list(self.interfaces),
            "ranking": self.ranking,
            "service_pid": self.service_pid,
            "properties": redact_binding_properties(dict(self.properties)),
        }

    def __repr__(self) -> str:
        return f"<CapabilityBindingView id={self.service_id} ranking={self.ranking} [{self.interfaces_display}]>"
