from __future__ import annotations

"""
Structured module versions and version ranges.

WHY THIS FILE EXISTS:
Manifest headers carry versions as text (`1.2`, `1.2.3.beta`) and ranges in
interval notation (`[1.0,2.0)`). Views need a canonical display form and a total
order that does not depend on how the manifest author spelled the version.
"""

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional

_QUALIFIER_RE = re.compile(r"[A-Za-z0-9_-]*")


@total_ordering
@dataclass(frozen=True)
class Version:
    major: int = 0
    minor: int = 0
    micro: int = 0
    qualifier: str = ""

    def __post_init__(self) -> None:
        for name in ("major", "minor", "micro"):
            if int(getattr(self, name)) < 0:
                raise ValueError(f"negative {name} component")
        if not _QUALIFIER_RE.fullmatch(self.qualifier or ""):
            raise ValueError(f"invalid qualifier {self.qualifier!r}")

    @classmethod
    def parse(cls, text: Optional[str]) -> "Version":
        """
        Parse `major[.minor[.micro[.qualifier]]]`. Empty text is 0.0.0.
        Raises ValueError on anything else.
        """
        s = str(text or "").strip()
        if not s:
            return EMPTY_VERSION
        parts = s.split(".", 3)
        nums = []
        for p in parts[:3]:
            if not p.isdigit():
                raise ValueError(f"invalid version {s!r}")
            nums.append(int(p))
        while len(nums) < 3:
            nums.append(0)
        qualifier = parts[3] if len(parts) == 4 else ""
        if len(parts) == 4 and not qualifier:
            raise ValueError(f"invalid version {s!r}")
        return cls(nums[0], nums[1], nums[2], qualifier)

    def _key(self):
        return (self.major, self.minor, self.micro, self.qualifier)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.micro}"
        return f"{base}.{self.qualifier}" if self.qualifier else base


EMPTY_VERSION = Version()


@dataclass(frozen=True)
class VersionRange:
    floor: Version = EMPTY_VERSION
    ceiling: Optional[Version] = None
    floor_inclusive: bool = True
    ceiling_inclusive: bool = False

    @classmethod
    def parse(cls, text: Optional[str]) -> "VersionRange":
        """
        `[1.0,2.0)` style intervals, or a bare version meaning "at least".
        Raises ValueError on malformed text or a floor above the ceiling;
        an empty interval such as `[1.0,1.0)` is accepted.
        """
        s = str(text or "").strip()
        if not s:
            return cls()
        if s[0] not in "[(":
            return cls(floor=Version.parse(s))
        if s[-1] not in ")]" or s.count(",") != 1:
            raise ValueError(f"invalid version range {s!r}")
        lo, hi = s[1:-1].split(",")
        floor = Version.parse(lo)
        ceiling = Version.parse(hi)
        rng = cls(floor=floor, ceiling=ceiling, floor_inclusive=s[0] == "[", ceiling_inclusive=s[-1] == "]")
        if floor > ceiling:
            raise ValueError(f"version range floor above ceiling {s!r}")
        return rng

    def includes(self, version: Version) -> bool:
        if version < self.floor or (version == self.floor and not self.floor_inclusive):
            return False
        if self.ceiling is None:
            return True
        if version > self.ceiling or (version == self.ceiling and not self.ceiling_inclusive):
            return False
        return True

    def __str__(self) -> str:
        if self.ceiling is None:
            return str(self.floor)
        lo = "[" if self.floor_inclusive else "("
        hi = "]" if self.ceiling_inclusive else ")"
        return f"{lo}{self.floor},{self.ceiling}{hi}"
