"""
Manifest adapter: turn a host-produced JSON snapshot into Asset objects.

The host (whatever talks to the real media library) resolves assets and
writes them out; this module only validates and converts. Media types and
resource types may be given by name or by their platform integer code.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from assets import Asset, MediaKind, Resource, ResourceKind, SubtypeFields
from errors import ManifestLoadError
from logs import get_logger

log = get_logger("pak.manifest")

_KIND_NAMES = {k.value for k in ResourceKind}


class ResourceEntry(BaseModel):
    type: Union[int, str]
    uti: str = ""
    original_filename: str = ""
    path: Optional[Path] = None

    @field_validator("type", mode="after")
    @classmethod
    def _known_kind_name(cls, v: Union[int, str]) -> Union[int, str]:
        if isinstance(v, str) and v.strip().lower() not in _KIND_NAMES:
            raise ValueError(f"unknown resource type: {v!r}")
        return v

    def kind(self) -> ResourceKind:
        if isinstance(self.type, int):
            return ResourceKind.from_platform(self.type)
        return ResourceKind(self.type.strip().lower())


class AssetEntry(BaseModel):
    id: str = Field(min_length=1)
    media_type: Union[int, str] = "unknown"
    media_subtypes: Optional[int] = None
    legacy_media_subtypes: Optional[int] = None
    filename: Optional[str] = None
    resources: List[ResourceEntry] = Field(default_factory=list)

    @field_validator("media_type", mode="after")
    @classmethod
    def _known_media_type(cls, v: Union[int, str]) -> Union[int, str]:
        if isinstance(v, str) and v.strip().upper() not in MediaKind.__members__:
            raise ValueError(f"unknown media type: {v!r}")
        return v

    def media_kind(self) -> MediaKind:
        if isinstance(self.media_type, int):
            try:
                return MediaKind(self.media_type)
            except ValueError:
                return MediaKind.UNKNOWN
        return MediaKind[self.media_type.strip().upper()]


class Manifest(BaseModel):
    assets: List[AssetEntry] = Field(default_factory=list)


def _to_asset(entry: AssetEntry, base_dir: Path) -> Asset:
    resources = []
    for r in entry.resources:
        path = r.path
        if path is not None and not path.is_absolute():
            path = (base_dir / path).resolve()
        resources.append(
            Resource(
                kind=r.kind(),
                uniform_type_identifier=r.uti,
                original_filename=r.original_filename,
                path=path,
            )
        )
    return Asset(
        local_identifier=entry.id,
        media_kind=entry.media_kind(),
        subtype=SubtypeFields(
            legacy=entry.legacy_media_subtypes, current=entry.media_subtypes
        ),
        filename=entry.filename,
        resources=tuple(resources),
    )


def parse_manifest(data: object, *, base_dir: Path) -> List[Asset]:
    """
    Validate already-decoded manifest data.

    Raises:
        ManifestLoadError: if the data does not match the manifest schema.
    """
    try:
        manifest = Manifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestLoadError(f"Invalid manifest: {exc.error_count()} error(s)") from exc
    return [_to_asset(e, base_dir) for e in manifest.assets]


def load_manifest(path: Path) -> List[Asset]:
    """
    Load assets from a JSON manifest; relative resource paths resolve
    against the manifest's directory.

    Raises:
        ManifestLoadError: if the file is missing, unreadable, or invalid.
    """
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestLoadError(f"Failed to read manifest: {path}") from exc
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise ManifestLoadError(f"Invalid JSON in manifest: {path}") from exc

    assets = parse_manifest(data, base_dir=path.resolve().parent)
    log.debug(f"Loaded {len(assets)} asset(s) from {path}")
    return assets
