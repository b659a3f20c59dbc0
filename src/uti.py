"""
Uniform type identifier helpers: map platform content-type tags → MIME strings.

Only statically declared identifiers are known. Dynamic identifiers
("dyn.*") are opaque hashes and never map to anything.
"""

from __future__ import annotations

from typing import Mapping, Optional

IMAGE_UTIS = {
    "public.jpeg": "image/jpeg",
    "public.heic": "image/heic",
    "public.heics": "image/heic-sequence",
    "public.heif": "image/heif",
    "public.png": "image/png",
    "com.compuserve.gif": "image/gif",
    "public.tiff": "image/tiff",
    "com.microsoft.bmp": "image/bmp",
    "org.webmproject.webp": "image/webp",
    "public.avif": "image/avif",
    "com.adobe.raw-image": "image/x-adobe-dng",
    "com.canon.cr2-raw-image": "image/x-canon-cr2",
    "com.nikon.raw-image": "image/x-nikon-nef",
    "com.sony.arw-raw-image": "image/x-sony-arw",
}
VIDEO_UTIS = {
    "com.apple.quicktime-movie": "video/quicktime",
    "public.mpeg-4": "video/mp4",
    "com.apple.m4v-video": "video/x-m4v",
    "public.avi": "video/avi",
    "public.3gpp": "video/3gpp",
    "public.mpeg": "video/mpeg",
}
AUDIO_UTIS = {
    "public.mp3": "audio/mpeg",
    "public.mpeg-4-audio": "audio/mp4",
    "com.apple.m4a-audio": "audio/x-m4a",
    "com.apple.protected-mpeg-4-audio": "audio/mp4",
    "com.microsoft.waveform-audio": "audio/vnd.wave",
    "public.aiff-audio": "audio/aiff",
    "public.aifc-audio": "audio/aiff",
}
OTHER_UTIS = {
    "com.adobe.pdf": "application/pdf",
    "public.xml": "application/xml",
    "public.json": "application/json",
    "com.apple.property-list": "application/x-plist",
}

UTI_TO_MIME: dict[str, str] = {**IMAGE_UTIS, **VIDEO_UTIS, **AUDIO_UTIS, **OTHER_UTIS}


def normalize_uti(uti: str) -> str:
    return uti.strip().lower()


def mime_for_uti(
    uti: Optional[str], overrides: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """
    Return the MIME type for a uniform type identifier, or None if unknown.

    `overrides` (keys already lower-case) wins over the built-in table.
    """
    if not uti:
        return None
    key = normalize_uti(uti)
    if key.startswith("dyn."):
        return None
    if overrides and key in overrides:
        return overrides[key]
    return UTI_TO_MIME.get(key)
