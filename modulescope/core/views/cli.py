from __future__ import annotations

"""
CLI rendering helpers for module listings.

WHY THIS FILE EXISTS:
The console entry point stays thin; these helpers are the stable, testable
rendering surface for module views.
"""

import json
from typing import Any, Dict, List, Optional

from modulescope.core.views.module_view import ModuleView
from modulescope.core.views.presenter import module_view_payload


def modules_list_lines(views: List[ModuleView]) -> List[str]:
    """
    Render `list` output lines, in display order.
    Columns: id | name | version | status | store
    """
    lines = ["id | name | version | status | store"]
    for v in views:
        name = v.display_name or v.symbolic_name or "-"
        lines.append(f"{v.id} | {name} | {v.version_display} | {v.status or '-'} | {v.store}")
    return lines


def find_view(views: List[ModuleView], module_id: int) -> Optional[ModuleView]:
    for v in views:
        if v.id == int(module_id):
            return v
    return None


def modules_show_payload(views: List[ModuleView], module_id: int, *, logger=None) -> Dict[str, Any]:
    v = find_view(views, module_id)
    if v is None:
        return {"ok": False, "error": f"module {module_id} not found"}
    return {"ok": True, "module": module_view_payload(v, logger=logger)}


def render_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True, default=str)
