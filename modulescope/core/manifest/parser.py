from __future__ import annotations

"""
Best-effort parser for package import/export manifest headers.

WHY THIS FILE EXISTS:
Module views show structured dependency lists, but manifests are free text
written by module authors. Parsing is all-or-nothing per module: any malformed
clause fails the whole manifest with ManifestParseError so a view never shows
a silently truncated list.

Grammar (subset of the OSGi header syntax):
    header    ::= clause ( ',' clause )*
    clause    ::= name ( ';' name )* ( ';' parameter )*
    parameter ::= key ':=' value | key '=' value
    value     ::= token | '"' chars '"'
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from modulescope.core.errors import ManifestParseError
from modulescope.core.manifest.headers import (
    EXPORT_PACKAGE,
    IMPORT_PACKAGE,
    LEGACY_VERSION_ATTRIBUTE,
    RESOLUTION_DIRECTIVE,
    RESOLUTION_OPTIONAL,
    VERSION_ATTRIBUTE,
)
from modulescope.core.manifest.version import EMPTY_VERSION, Version, VersionRange

_NAME_RE = re.compile(r"[A-Za-z0-9_$][A-Za-z0-9_$.\-]*")
_KEY_RE = re.compile(r"[A-Za-z0-9_.\-]+")


@dataclass(frozen=True)
class HeaderClause:
    names: Tuple[str, ...]
    attributes: Dict[str, str] = field(default_factory=dict)
    directives: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ImportedCapabilitySpec:
    name: str
    min_version: Optional[Version] = EMPTY_VERSION
    max_version: Optional[Version] = None
    min_inclusive: bool = True
    max_inclusive: bool = False
    optional: bool = False
    attributes: Dict[str, str] = field(default_factory=dict)
    directives: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "min_version": str(self.min_version) if self.min_version is not None else None,
            "max_version": str(self.max_version) if self.max_version is not None else None,
            "min_inclusive": self.min_inclusive,
            "max_inclusive": self.max_inclusive,
            "optional": self.optional,
        }


@dataclass(frozen=True)
class ExportedCapabilitySpec:
    name: str
    version: Version = EMPTY_VERSION
    attributes: Dict[str, str] = field(default_factory=dict)
    directives: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "version": str(self.version), "uses": self.uses}

    @property
    def uses(self) -> List[str]:
        raw = self.directives.get("uses") or ""
        return [p.strip() for p in raw.split(",") if p.strip()]


@dataclass(frozen=True)
class ParsedManifest:
    imports: Tuple[ImportedCapabilitySpec, ...] = ()
    exports: Tuple[ExportedCapabilitySpec, ...] = ()


def _split_quoted(text: str, sep: str, *, header: str) -> List[str]:
    """Split on `sep` outside double quotes; backslash escapes inside quotes."""
    out: List[str] = []
    buf: List[str] = []
    in_quotes = False
    escaped = False
    for ch in text:
        if escaped:
            buf.append(ch)
            escaped = False
            continue
        if in_quotes and ch == "\\":
            buf.append(ch)
            escaped = True
            continue
        if ch == '"':
            in_quotes = not in_quotes
            buf.append(ch)
            continue
        if ch == sep and not in_quotes:
            out.append("".join(buf))
            buf = []
            continue
        buf.append(ch)
    if in_quotes:
        raise ManifestParseError("Unterminated quoted string in manifest header.", header=header, clause=text[:200])
    out.append("".join(buf))
    return out


def _unquote(value: str, *, header: str) -> str:
    v = value.strip()
    if v.startswith('"'):
        if len(v) < 2 or not v.endswith('"'):
            raise ManifestParseError("Malformed quoted value in manifest header.", header=header, clause=value[:200])
        v = v[1:-1]
        return re.sub(r"\\(.)", r"\1", v)
    return v


def parse_header(text: Optional[str], *, header: str) -> List[HeaderClause]:
    """
    Parse one header value into clauses. Absent or blank text is no clauses.
    """
    if text is None or not str(text).strip():
        return []
    clauses: List[HeaderClause] = []
    for raw_clause in _split_quoted(str(text), ",", header=header):
        parts = [p.strip() for p in _split_quoted(raw_clause, ";", header=header)]
        if not any(parts):
            raise ManifestParseError("Empty clause in manifest header.", header=header, clause=raw_clause[:200])
        names: List[str] = []
        attributes: Dict[str, str] = {}
        directives: Dict[str, str] = {}
        for part in parts:
            if not part:
                raise ManifestParseError("Empty element in manifest clause.", header=header, clause=raw_clause[:200])
            eq = part.find("=")
            if eq > 0 and part[eq - 1] == ":":
                key, value = part[: eq - 1], part[eq + 1 :]
                target = directives
            elif eq > 0:
                key, value = part[:eq], part[eq + 1 :]
                target = attributes
            else:
                if attributes or directives:
                    raise ManifestParseError("Name after parameters in manifest clause.", header=header, clause=raw_clause[:200])
                if not _NAME_RE.fullmatch(part):
                    raise ManifestParseError("Invalid name in manifest clause.", header=header, clause=raw_clause[:200])
                names.append(part)
                continue
            key = key.strip()
            if not _KEY_RE.fullmatch(key):
                raise ManifestParseError("Invalid parameter key in manifest clause.", header=header, clause=raw_clause[:200])
            if key in target:
                raise ManifestParseError(f"Duplicate parameter '{key}' in manifest clause.", header=header, clause=raw_clause[:200])
            target[key] = _unquote(value, header=header)
        if not names:
            raise ManifestParseError("Manifest clause declares no name.", header=header, clause=raw_clause[:200])
        clauses.append(HeaderClause(names=tuple(names), attributes=attributes, directives=directives))
    return clauses


def _version_text(attributes: Mapping[str, str]) -> Optional[str]:
    if VERSION_ATTRIBUTE in attributes:
        return attributes[VERSION_ATTRIBUTE]
    return attributes.get(LEGACY_VERSION_ATTRIBUTE)


def parse_imports(text: Optional[str]) -> Tuple[ImportedCapabilitySpec, ...]:
    out: List[ImportedCapabilitySpec] = []
    seen: set[str] = set()
    for clause in parse_header(text, header=IMPORT_PACKAGE):
        try:
            rng = VersionRange.parse(_version_text(clause.attributes))
        except ValueError as e:
            raise ManifestParseError(f"Invalid import version range: {e}", header=IMPORT_PACKAGE, clause=",".join(clause.names)) from e
        optional = str(clause.directives.get(RESOLUTION_DIRECTIVE) or "").strip().lower() == RESOLUTION_OPTIONAL
        for name in clause.names:
            if name in seen:
                raise ManifestParseError(f"Package '{name}' imported more than once.", header=IMPORT_PACKAGE, clause=name)
            seen.add(name)
            out.append(
                ImportedCapabilitySpec(
                    name=name,
                    min_version=rng.floor,
                    max_version=rng.ceiling,
                    min_inclusive=rng.floor_inclusive,
                    max_inclusive=rng.ceiling_inclusive,
                    optional=optional,
                    attributes=dict(clause.attributes),
                    directives=dict(clause.directives),
                )
            )
    return tuple(out)


def parse_exports(text: Optional[str]) -> Tuple[ExportedCapabilitySpec, ...]:
    out: List[ExportedCapabilitySpec] = []
    for clause in parse_header(text, header=EXPORT_PACKAGE):
        try:
            version = Version.parse(_version_text(clause.attributes))
        except ValueError as e:
            raise ManifestParseError(f"Invalid export version: {e}", header=EXPORT_PACKAGE, clause=",".join(clause.names)) from e
        for name in clause.names:
            out.append(
                ExportedCapabilitySpec(
                    name=name,
                    version=version,
                    attributes=dict(clause.attributes),
                    directives=dict(clause.directives),
                )
            )
    return tuple(out)


def parse_manifest(headers: Optional[Mapping[str, Any]]) -> ParsedManifest:
    """
    Parse the dependency headers of one module. Raises ManifestParseError if
    either header is malformed; never returns a partial manifest.
    """
    h = headers or {}
    imports_raw = h.get(IMPORT_PACKAGE)
    exports_raw = h.get(EXPORT_PACKAGE)
    return ParsedManifest(
        imports=parse_imports(str(imports_raw) if imports_raw is not None else None),
        exports=parse_exports(str(exports_raw) if exports_raw is not None else None),
    )
