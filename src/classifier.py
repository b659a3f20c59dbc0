"""
Type classifier: coarse kind queries over an asset snapshot.

All predicates are pure and total; they never raise.
"""

from __future__ import annotations

from assets import Asset, AssetSubtype, MediaKind


def is_image(asset: Asset) -> bool:
    return asset.media_kind == MediaKind.IMAGE


def is_video(asset: Asset) -> bool:
    return asset.media_kind == MediaKind.VIDEO


def is_audio(asset: Asset) -> bool:
    return asset.media_kind == MediaKind.AUDIO


def is_image_or_video(asset: Asset) -> bool:
    return is_image(asset) or is_video(asset)


def unwrapped_subtype(asset: Asset) -> int:
    """
    Normalized subtype bitmask.

    The current field supersedes the legacy one when both are populated;
    0 when neither is.
    """
    fields = asset.subtype
    if fields.current is not None:
        return int(fields.current)
    if fields.legacy is not None:
        return int(fields.legacy)
    return 0


def subtype_flags(asset: Asset) -> AssetSubtype:
    """unwrapped_subtype() as flags (unknown bits are kept)."""
    return AssetSubtype(unwrapped_subtype(asset))


def is_live_photo(asset: Asset) -> bool:
    """Live flag set AND an image asset; a stray flag on a video does not count."""
    if not is_image(asset):
        return False
    return bool(unwrapped_subtype(asset) & AssetSubtype.PHOTO_LIVE)
