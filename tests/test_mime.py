from __future__ import annotations

from assets import Asset, AssetSubtype, MediaKind, Resource, ResourceKind, SubtypeFields
from live_photo import get_live_photos_resource
from mime import mime_type, primary_resource

LIVE = SubtypeFields(current=int(AssetSubtype.PHOTO_LIVE))


def test_mime_ignores_adjustment_data() -> None:
    adj = Resource(ResourceKind.ADJUSTMENT_DATA, "com.apple.property-list")
    full = Resource(ResourceKind.FULL_SIZE_IMAGE, "public.jpeg")
    a = Asset("A", media_kind=MediaKind.IMAGE, resources=(adj, full))
    assert primary_resource(a) is full
    assert mime_type(a) == "image/jpeg"


def test_live_photo_reports_still_image_type() -> None:
    still = Resource(ResourceKind.FULL_SIZE_IMAGE, "public.heic", "IMG_0001.HEIC")
    paired = Resource(ResourceKind.LIVE_PHOTO_PAIRED_VIDEO, "com.apple.quicktime-movie", "IMG_0001.MOV")
    a = Asset("L", media_kind=MediaKind.IMAGE, subtype=LIVE, resources=(paired, still))
    assert mime_type(a) == "image/heic"
    assert get_live_photos_resource(a) is paired


def test_primary_matches_media_kind() -> None:
    still = Resource(ResourceKind.FULL_SIZE_IMAGE, "public.jpeg")
    movie = Resource(ResourceKind.FULL_SIZE_VIDEO, "public.mpeg-4")
    assert mime_type(Asset("V", media_kind=MediaKind.VIDEO, resources=(still, movie))) == "video/mp4"
    assert mime_type(Asset("U", media_kind=MediaKind.UNKNOWN, resources=(movie, still))) == "video/mp4"


def test_mime_absent_without_primary_or_mapping() -> None:
    assert mime_type(Asset("A", media_kind=MediaKind.IMAGE)) is None
    only_adj = Asset(
        "B",
        media_kind=MediaKind.IMAGE,
        resources=(Resource(ResourceKind.ADJUSTMENT_DATA, "com.apple.property-list"),),
    )
    assert mime_type(only_adj) is None
    unknown = Asset(
        "C",
        media_kind=MediaKind.IMAGE,
        resources=(Resource(ResourceKind.FULL_SIZE_IMAGE, "dyn.ah62d4rv4ge81k"),),
    )
    assert mime_type(unknown) is None
    assert mime_type(unknown, {"dyn.ah62d4rv4ge81k": "image/x-custom"}) is None
