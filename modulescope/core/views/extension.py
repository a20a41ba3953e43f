from __future__ import annotations

from typing import Any, Protocol

from modulescope.core.config.models import ViewConfig


class ExtensionClassifier(Protocol):
    """Decides whether a module is a dynamic extension. Owned by the runtime."""

    def __call__(self, module: Any) -> bool: ...


class HeaderExtensionClassifier:
    """
    Marks a module as a dynamic extension when one header carries the expected
    value (case-insensitive).
    """

    def __init__(self, header: str = "Alfresco-Dynamic-Extension", expected: str = "true"):
        self.header = str(header)
        self.expected = str(expected).strip().lower()

    @classmethod
    def from_config(cls, cfg: ViewConfig) -> "HeaderExtensionClassifier":
        return cls(header=cfg.extension_header, expected=cfg.extension_value)

    def __call__(self, module: Any) -> bool:
        headers = getattr(module, "headers", None) or {}
        value = headers.get(self.header)
        if value is None:
            return False
        return str(value).strip().lower() == self.expected

    def __repr__(self) -> str:
        return f"<HeaderExtensionClassifier {self.header}={self.expected}>"
