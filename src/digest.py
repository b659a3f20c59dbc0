"""
Content digests for loaded resource data.

- BLAKE3 for a fast, collision-resistant fingerprint.
- Optional SHA-256 (for verification/export).
"""

from __future__ import annotations

from typing import Optional, Tuple

from blake3 import blake3  # type: ignore[import-untyped]
import hashlib


def digest_bytes(
    data: bytes, *, with_sha256: bool = False
) -> Tuple[str, Optional[str]]:
    """
    Compute BLAKE3 (and optionally SHA-256) of an in-memory payload.

    Returns:
        (blake3_hex, sha256_hex or None)
    """
    b3 = blake3(data).hexdigest()
    sha = hashlib.sha256(data).hexdigest() if with_sha256 else None
    return b3, sha
