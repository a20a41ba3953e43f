from __future__ import annotations

from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

VIEW_CONFIG_SCHEMA_VERSION = 1


class ViewConfig(BaseModel):
    """
    config/view.json schema.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: int = Field(default=VIEW_CONFIG_SCHEMA_VERSION, ge=1, le=10)
    # Timestamps are rendered in this zone, never the host's local zone.
    display_timezone: str = "UTC"
    extension_header: str = Field(default="Alfresco-Dynamic-Extension", min_length=1)
    extension_value: str = "true"
    log_dir: str = "logs"

    @field_validator("display_timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        v = str(v or "").strip() or "UTC"
        if v.upper() in {"UTC", "Z"}:
            return "UTC"
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {v!r}") from e
        return v

    def tz(self) -> tzinfo:
        if self.display_timezone == "UTC":
            return timezone.utc
        return ZoneInfo(self.display_timezone)
