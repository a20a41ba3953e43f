from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from modulescope.core.redaction import redact


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ModuleScopeError(Exception):
    code: str
    user_message: str
    severity: Severity = Severity.ERROR
    recoverable: bool = True
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.code)

    def __str__(self) -> str:
        return f"{self.code}: {self.user_message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "recoverable": bool(self.recoverable),
            "context": redact(self.context or {}),
        }


# ---- Core types ----
class InvariantViolation(ModuleScopeError):
    def __init__(self, user_message: str = "Internal invariant violated.", **ctx: Any):
        super().__init__("invariant_violation", user_message, severity=Severity.ERROR, recoverable=False, context=ctx)


class ManifestParseError(ModuleScopeError):
    def __init__(self, user_message: str = "Module manifest could not be parsed.", **ctx: Any):
        super().__init__("manifest_parse_error", user_message, severity=Severity.WARN, recoverable=True, context=ctx)


class SnapshotError(ModuleScopeError):
    def __init__(self, user_message: str = "Registry snapshot is invalid.", **ctx: Any):
        super().__init__("snapshot_error", user_message, severity=Severity.ERROR, recoverable=False, context=ctx)


class ConfigError(ModuleScopeError):
    def __init__(self, user_message: str = "Configuration error.", **ctx: Any):
        super().__init__("config_error", user_message, severity=Severity.CRITICAL, recoverable=False, context=ctx)
