from __future__ import annotations

from typing import Any, Dict


REDACT_KEYS = {
    "password",
    "secret",
    "token",
    "api_key",
    "authorization",
    "credentials",
}

REDACTED = "***REDACTED***"


def _redact(obj: Any) -> Any:
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            if str(k).lower() in REDACT_KEYS:
                out[k] = REDACTED
            else:
                out[k] = _redact(v)
        return out
    if isinstance(obj, (list, tuple)):
        return [_redact(x) for x in obj]
    return obj


def redact(obj: Any) -> Any:
    return _redact(obj)


def redact_binding_properties(properties: Dict[str, Any]) -> Dict[str, Any]:
    """
    Service properties are published by arbitrary modules and may carry
    credentials (e.g. datasource passwords). Only shape them through here
    before handing them to a renderer.
    """
    return _redact(dict(properties or {}))
