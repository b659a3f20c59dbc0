from __future__ import annotations

import json
from pathlib import Path

import pytest

from assets import MediaKind, ResourceKind
from classifier import is_live_photo
from errors import ManifestLoadError
from manifest import load_manifest


def _write(tmp_path: Path, data: object) -> Path:
    p = tmp_path / "assets.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    return p


def test_load_names_and_platform_codes(tmp_path: Path) -> None:
    p = _write(
        tmp_path,
        {
            "assets": [
                {
                    "id": "L1",
                    "media_type": "image",
                    "legacy_media_subtypes": 8,
                    "filename": "IMG_0001.HEIC",
                    "resources": [
                        {"type": 1, "uti": "public.heic", "original_filename": "IMG_0001.HEIC"},
                        {"type": "live_photo_paired_video", "uti": "com.apple.quicktime-movie", "path": "IMG_0001.MOV"},
                    ],
                },
                {"id": "V1", "media_type": 2},
            ]
        },
    )
    live, video = load_manifest(p)
    assert live.media_kind == MediaKind.IMAGE
    assert is_live_photo(live)
    assert [r.kind for r in live.resources] == [
        ResourceKind.FULL_SIZE_IMAGE,
        ResourceKind.LIVE_PHOTO_PAIRED_VIDEO,
    ]
    assert live.resources[1].path == (tmp_path / "IMG_0001.MOV").resolve()
    assert video.media_kind == MediaKind.VIDEO
    assert video.resources == ()
    assert video.filename is None


def test_unknown_platform_media_type_is_unknown(tmp_path: Path) -> None:
    (asset,) = load_manifest(_write(tmp_path, {"assets": [{"id": "X", "media_type": 42}]}))
    assert asset.media_kind == MediaKind.UNKNOWN


@pytest.mark.parametrize(
    "data",
    [
        {"assets": [{"id": "X", "media_type": "hologram"}]},
        {"assets": [{"id": "X", "resources": [{"type": "thumbnail"}]}]},
        {"assets": [{"id": ""}]},
        {"assets": "nope"},
    ],
)
def test_invalid_manifest(tmp_path: Path, data: object) -> None:
    with pytest.raises(ManifestLoadError):
        load_manifest(_write(tmp_path, data))


def test_unreadable_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestLoadError):
        load_manifest(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ManifestLoadError):
        load_manifest(bad)
