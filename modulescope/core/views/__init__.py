"""
Read-only presentation model for the module registry.

Views are rebuilt from a runtime snapshot on every request and never mutate
the modules they wrap.
"""

from modulescope.core.views.capability_binding import CapabilityBindingView
from modulescope.core.views.extension import ExtensionClassifier, HeaderExtensionClassifier
from modulescope.core.views.module_view import ModuleView, compare_modules, module_sort_key
from modulescope.core.views.presenter import build_module_views, module_view_payload, views_from_snapshot

__all__ = [
    "CapabilityBindingView",
    "ExtensionClassifier",
    "HeaderExtensionClassifier",
    "ModuleView",
    "build_module_views",
    "compare_modules",
    "module_sort_key",
    "module_view_payload",
    "views_from_snapshot",
]
