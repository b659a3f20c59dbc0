from __future__ import annotations

from typing import Optional

from assets import Asset, Resource, ResourceKind


def get_live_photos_resource(asset: Asset) -> Optional[Resource]:
    """First paired-video resource of a Live Photo, or None (the usual case)."""
    for res in asset.resources:
        if res.kind == ResourceKind.LIVE_PHOTO_PAIRED_VIDEO:
            return res
    return None
