"""
Asset data model: read-only snapshots handed over by the media library host.

- MediaKind / AssetSubtype mirror the platform's media type and subtype codes.
- SubtypeFields keeps the legacy and current subtype fields side by side;
  classifier.unwrapped_subtype() is the only place that reads them.
- ResourceKind is a closed set; raw platform resource codes are folded into it
  by ResourceKind.from_platform().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag
from pathlib import Path
from typing import Optional, Tuple


class MediaKind(IntEnum):
    UNKNOWN = 0
    IMAGE = 1
    VIDEO = 2
    AUDIO = 3


class AssetSubtype(IntFlag):
    NONE = 0
    PHOTO_PANORAMA = 1 << 0
    PHOTO_HDR = 1 << 1
    PHOTO_SCREENSHOT = 1 << 2
    PHOTO_LIVE = 1 << 3
    PHOTO_DEPTH_EFFECT = 1 << 4
    VIDEO_STREAMED = 1 << 16
    VIDEO_HIGH_FRAME_RATE = 1 << 17
    VIDEO_TIMELAPSE = 1 << 18
    VIDEO_CINEMATIC = 1 << 21


class ResourceKind(Enum):
    FULL_SIZE_IMAGE = "full_size_image"
    FULL_SIZE_VIDEO = "full_size_video"
    ADJUSTMENT_DATA = "adjustment_data"
    LIVE_PHOTO_PAIRED_VIDEO = "live_photo_paired_video"
    AUDIO = "audio"
    OTHER = "other"

    @classmethod
    def from_platform(cls, code: int) -> "ResourceKind":
        """Fold a platform resource-type code into the closed kind set."""
        return _PLATFORM_RESOURCE_CODES.get(code, cls.OTHER)


# Platform resource-type codes. Originals and their full-size renditions are
# the same facet for our purposes; adjustment base renditions are auxiliary.
_PLATFORM_RESOURCE_CODES = {
    1: ResourceKind.FULL_SIZE_IMAGE,  # photo
    2: ResourceKind.FULL_SIZE_VIDEO,  # video
    3: ResourceKind.AUDIO,
    4: ResourceKind.OTHER,  # alternate photo
    5: ResourceKind.FULL_SIZE_IMAGE,
    6: ResourceKind.FULL_SIZE_VIDEO,
    7: ResourceKind.ADJUSTMENT_DATA,
    8: ResourceKind.OTHER,  # adjustment base photo
    9: ResourceKind.LIVE_PHOTO_PAIRED_VIDEO,
    10: ResourceKind.LIVE_PHOTO_PAIRED_VIDEO,  # full-size paired video
    11: ResourceKind.OTHER,  # adjustment base paired video
    12: ResourceKind.OTHER,  # adjustment base video
}


@dataclass(frozen=True)
class SubtypeFields:
    """Subtype bitmask as exposed by older (legacy) and newer (current) platforms."""

    legacy: Optional[int] = None
    current: Optional[int] = None


@dataclass(frozen=True)
class Resource:
    kind: ResourceKind
    uniform_type_identifier: str
    original_filename: str = ""
    path: Optional[Path] = None


@dataclass(frozen=True)
class Asset:
    local_identifier: str
    media_kind: MediaKind = MediaKind.UNKNOWN
    subtype: SubtypeFields = field(default_factory=SubtypeFields)
    filename: Optional[str] = None
    resources: Tuple[Resource, ...] = ()
