from __future__ import annotations

from assets import Asset
from mime import primary_resource


def title(asset: Asset) -> str:
    """
    Best-effort filename: primary resource's original filename, then the
    asset's own filename, then "".
    """
    res = primary_resource(asset)
    if res is not None and res.original_filename:
        return res.original_filename
    if asset.filename:
        return asset.filename
    return ""
