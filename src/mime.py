"""
MIME resolver: content type of an asset from its primary resource.

For Live Photos this is the still image's type even though the asset also
carries a paired video.
"""

from __future__ import annotations

from typing import Mapping, Optional

from assets import Asset, MediaKind, Resource, ResourceKind
from uti import mime_for_uti

_PRIMARY_KINDS = (ResourceKind.FULL_SIZE_IMAGE, ResourceKind.FULL_SIZE_VIDEO)

_PREFERRED_KIND = {
    MediaKind.IMAGE: ResourceKind.FULL_SIZE_IMAGE,
    MediaKind.VIDEO: ResourceKind.FULL_SIZE_VIDEO,
}


def primary_resource(asset: Asset) -> Optional[Resource]:
    """
    The full-size resource matching the asset's media kind, else the first
    full-size image/video resource, else None.
    """
    preferred = _PREFERRED_KIND.get(asset.media_kind)
    if preferred is not None:
        for res in asset.resources:
            if res.kind == preferred:
                return res
    for res in asset.resources:
        if res.kind in _PRIMARY_KINDS:
            return res
    return None


def mime_type(
    asset: Asset, overrides: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """MIME type of the primary resource, or None when unknown."""
    res = primary_resource(asset)
    if res is None:
        return None
    return mime_for_uti(res.uniform_type_identifier, overrides)
