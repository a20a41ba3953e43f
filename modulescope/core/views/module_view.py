from __future__ import annotations

"""
ModuleView: display adapter for one loaded module.

WHY THIS FILE EXISTS:
Renderers need a stable, sortable record per module that never fails on partial
manifest data. Every raw accessor has a defined "absent" result (None); only the
structured import/export lists can fail, and they fail all-or-nothing with
ManifestParseError so callers can fall back to the raw header text.

A ModuleView is single-use per snapshot: it wraps the module by reference,
sorts its bindings once at construction and parses the manifest at most once.
"""

import threading
from datetime import datetime
from typing import Any, Iterable, Optional, Tuple

from modulescope.core.config.models import ViewConfig
from modulescope.core.errors import InvariantViolation, ManifestParseError
from modulescope.core.manifest.headers import (
    BUNDLE_DESCRIPTION,
    BUNDLE_DOCURL,
    BUNDLE_NAME,
    EXPORT_PACKAGE,
    FRAGMENT_HOST,
)
from modulescope.core.manifest.parser import (
    ExportedCapabilitySpec,
    ImportedCapabilitySpec,
    ParsedManifest,
    parse_manifest,
)
from modulescope.core.runtime.models import FRAMEWORK_MODULE_ID, CapabilityBinding, ModuleState
from modulescope.core.views.capability_binding import CapabilityBindingView
from modulescope.core.views.extension import ExtensionClassifier, HeaderExtensionClassifier

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"
DELETABLE_LOCATION_PREFIX = "/Company Home"

_STATUS_TOKENS = {
    ModuleState.UNINSTALLED: "uninstalled",
    ModuleState.INSTALLED: "installed",
    ModuleState.RESOLVED: "resolved",
    ModuleState.STARTING: "starting",
    ModuleState.STOPPING: "stopping",
    ModuleState.ACTIVE: "active",
}


def _header_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


class ModuleView:
    def __init__(
        self,
        module: Any,
        bindings: Optional[Iterable[CapabilityBinding]] = None,
        *,
        extension_classifier: Optional[ExtensionClassifier] = None,
        config: Optional[ViewConfig] = None,
    ):
        if module is None:
            raise InvariantViolation("Module is required to build a module view.")
        self._module = module
        self._config = config or ViewConfig()
        self._classifier = extension_classifier or HeaderExtensionClassifier.from_config(self._config)
        # absent entries in the binding list carry nothing to display
        self._bindings: Tuple[CapabilityBindingView, ...] = tuple(
            sorted(CapabilityBindingView(b) for b in (bindings or ()) if b is not None)
        )
        self._manifest_lock = threading.Lock()
        self._manifest: Optional[ParsedManifest] = None
        self._manifest_error: Optional[ManifestParseError] = None

    @property
    def module(self) -> Any:
        return self._module

    def _header(self, name: str) -> Optional[str]:
        headers = getattr(self._module, "headers", None) or {}
        return _header_str(headers.get(name))

    # ---- identity ----
    @property
    def id(self) -> int:
        return self._module.module_id

    @property
    def symbolic_name(self) -> str:
        return self._module.symbolic_name or ""

    @property
    def display_name(self) -> Optional[str]:
        return self._header(BUNDLE_NAME)

    @property
    def description(self) -> Optional[str]:
        return self._header(BUNDLE_DESCRIPTION)

    @property
    def version_display(self) -> str:
        return str(self._module.version)

    @property
    def documentation_url(self) -> Optional[str]:
        return self._header(BUNDLE_DOCURL)

    # ---- classification ----
    @property
    def is_extension(self) -> bool:
        return bool(self._classifier(self._module))

    @property
    def is_fragment(self) -> bool:
        return self._header(FRAGMENT_HOST) is not None

    @property
    def is_framework(self) -> bool:
        return self.id == FRAMEWORK_MODULE_ID

    @property
    def origin(self) -> str:
        return self._module.location or ""

    @property
    def store(self) -> str:
        origin = self.origin
        if origin.startswith("file:"):
            return "filesystem"
        if origin.startswith("/"):
            return "repository"
        return "n/a"

    @property
    def is_deletable(self) -> bool:
        return self.origin.startswith(DELETABLE_LOCATION_PREFIX)

    @property
    def status(self) -> Optional[str]:
        state = self._module.state
        if isinstance(state, bool):
            return None
        try:
            return _STATUS_TOKENS.get(state)
        except TypeError:
            # unhashable state values
            return None

    @property
    def last_modified_display(self) -> Optional[str]:
        millis = int(self._module.last_modified or 0)
        if millis <= 0:
            return None
        try:
            ts = datetime.fromtimestamp(millis / 1000.0, tz=self._config.tz())
        except (OverflowError, OSError, ValueError):
            # outside the range datetime can represent
            return None
        return ts.strftime(TIMESTAMP_FORMAT)

    # ---- manifest ----
    @property
    def export_package_header(self) -> Optional[str]:
        return self._header(EXPORT_PACKAGE)

    def _parsed_manifest(self) -> ParsedManifest:
        if self._manifest is None and self._manifest_error is None:
            with self._manifest_lock:
                if self._manifest is None and self._manifest_error is None:
                    try:
                        self._manifest = parse_manifest(getattr(self._module, "headers", None))
                    except ManifestParseError as e:
                        e.context.setdefault("module_id", self.id)
                        self._manifest_error = e
        if self._manifest_error is not None:
            raise self._manifest_error
        return self._manifest  # type: ignore[return-value]

    def imported_capabilities(self) -> Tuple[ImportedCapabilitySpec, ...]:
        return self._parsed_manifest().imports

    def exported_capabilities(self) -> Tuple[ExportedCapabilitySpec, ...]:
        return self._parsed_manifest().exports

    @property
    def capability_bindings(self) -> Tuple[CapabilityBindingView, ...]:
        return self._bindings

    # ---- ordering ----
    def compare_to(self, other: "ModuleView") -> int:
        return compare_modules(self, other)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ModuleView):
            return NotImplemented
        return compare_modules(self, other) < 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ModuleView):
            return NotImplemented
        return compare_modules(self, other) > 0

    def __repr__(self) -> str:
        return f"<ModuleView id={self.id} name={self.display_name!r} v{self.version_display} status={self.status}>"


def _cmp(a: str, b: str) -> int:
    return (a > b) - (a < b)


def compare_modules(a: ModuleView, b: ModuleView) -> int:
    """
    Total order for module lists: framework module first, then display name
    (case-insensitive, absent names as ""), then the version string compared
    lexicographically.
    """
    if a.is_framework:
        return -1 if not b.is_framework else 0
    if b.is_framework:
        return 1
    c = _cmp((a.display_name or "").casefold(), (b.display_name or "").casefold())
    if c != 0:
        return c
    return _cmp(a.version_display, b.version_display)


def module_sort_key(view: ModuleView) -> Tuple[int, str, str]:
    """Key equivalent of compare_modules, for sorted()."""
    if view.is_framework:
        return (0, "", "")
    return (1, (view.display_name or "").casefold(), view.version_display)
