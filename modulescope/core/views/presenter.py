from __future__ import annotations

"""
Presenter: snapshot -> sorted module views -> renderer payloads.

WHY THIS FILE EXISTS:
The rendering layer consumes plain dicts. This is the one place that applies
the recovery policy for manifests that do not parse (show the raw
Export-Package text instead of structured lists), and the one place that
isolates a bad snapshot entry so it never takes down its sibling views.
"""

from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Mapping, Optional

from modulescope.core.config.models import ViewConfig
from modulescope.core.errors import InvariantViolation, ManifestParseError
from modulescope.core.runtime.models import CapabilityBinding
from modulescope.core.runtime.snapshot import RegistrySnapshot
from modulescope.core.views.extension import ExtensionClassifier, HeaderExtensionClassifier
from modulescope.core.views.module_view import ModuleView, compare_modules


def sort_module_views(views: Iterable[ModuleView]) -> List[ModuleView]:
    return sorted(views, key=cmp_to_key(compare_modules))


def build_module_views(
    modules: Iterable[Any],
    bindings_by_module: Optional[Mapping[int, Iterable[CapabilityBinding]]] = None,
    *,
    extension_classifier: Optional[ExtensionClassifier] = None,
    config: Optional[ViewConfig] = None,
    logger=None,
) -> List[ModuleView]:
    """
    Build one ModuleView per module, sorted for display. Entries that cannot be
    built are logged and skipped.
    """
    cfg = config or ViewConfig()
    classifier = extension_classifier or HeaderExtensionClassifier.from_config(cfg)
    bindings_by_module = bindings_by_module or {}
    views: List[ModuleView] = []
    skipped = 0
    for module in modules:
        bindings = bindings_by_module.get(getattr(module, "module_id", None)) if module is not None else None
        if bindings is not None:
            bindings = list(bindings)
            if logger and any(b is None for b in bindings):
                logger.warning(f"Absent capability bindings dropped for module {module.module_id}")
        try:
            views.append(ModuleView(module, bindings, extension_classifier=classifier, config=cfg))
        except InvariantViolation as e:
            skipped += 1
            if logger:
                logger.warning(f"Module view skipped: {e.code} ({e.user_message})")
    if skipped and logger:
        logger.info(f"Built {len(views)} module views ({skipped} skipped)")
    return sort_module_views(views)


def views_from_snapshot(
    snapshot: RegistrySnapshot,
    *,
    extension_classifier: Optional[ExtensionClassifier] = None,
    config: Optional[ViewConfig] = None,
    logger=None,
) -> List[ModuleView]:
    return build_module_views(
        snapshot.modules,
        snapshot.bindings,
        extension_classifier=extension_classifier,
        config=config,
        logger=logger,
    )


def module_summary(view: ModuleView) -> Dict[str, Any]:
    """Row-level fields for module lists; never touches the manifest parser."""
    return {
        "id": view.id,
        "symbolic_name": view.symbolic_name,
        "name": view.display_name,
        "version": view.version_display,
        "status": view.status,
        "store": view.store,
        "location": view.origin,
        "last_modified": view.last_modified_display,
        "extension": view.is_extension,
        "fragment": view.is_fragment,
        "deletable": view.is_deletable,
    }


def module_view_payload(view: ModuleView, *, logger=None) -> Dict[str, Any]:
    """
    Full detail payload for one module. A manifest that does not parse yields
    `imported_packages`/`exported_packages` of None plus `manifest_error`;
    `export_package_header` always carries the raw text.
    """
    payload = module_summary(view)
    payload.update(
        {
            "description": view.description,
            "documentation_url": view.documentation_url,
            "export_package_header": view.export_package_header,
            "services": [s.to_dict() for s in view.capability_bindings],
            "imported_packages": None,
            "exported_packages": None,
            "manifest_error": None,
        }
    )
    try:
        payload["imported_packages"] = [p.to_dict() for p in view.imported_capabilities()]
        payload["exported_packages"] = [p.to_dict() for p in view.exported_capabilities()]
    except ManifestParseError as e:
        payload["imported_packages"] = None
        payload["exported_packages"] = None
        payload["manifest_error"] = e.to_dict()
        if logger:
            logger.warning(f"Manifest of module {view.id} unparseable; showing raw Export-Package: {e.user_message}")
    return payload
