"""
Adjustment inspector: detect edited ("adjusted") assets and load their
adjustment data.

request_adjusted_data() is single-shot and not cancellable. Its callback gets
the bytes, or None when there is nothing to load or the read failed; both
cases look the same to the caller.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Callable, Optional

from assets import Asset, Resource, ResourceKind
from logs import get_logger
from reader import ResourceReader, default_reader, shared_executor

log = get_logger("pak.adjustment")

AdjustedDataCallback = Callable[[Optional[bytes]], None]


def get_adjust_resource(asset: Asset) -> Optional[Resource]:
    """First adjustment-data resource, or None."""
    for res in asset.resources:
        if res.kind == ResourceKind.ADJUSTMENT_DATA:
            return res
    return None


def is_adjust(asset: Asset) -> bool:
    return get_adjust_resource(asset) is not None


def adjusted_data_future(
    asset: Asset, *, reader: Optional[ResourceReader] = None
) -> "Future[Optional[bytes]]":
    """
    Start loading the adjustment data of `asset`.

    The returned future always succeeds: with the bytes, or with None if the
    asset has no adjustment resource or the reader failed.
    """
    result: "Future[Optional[bytes]]" = Future()
    res = get_adjust_resource(asset)
    if res is None:
        result.set_result(None)
        return result

    try:
        pending = (reader or default_reader()).request_data(res)
    except Exception as exc:
        log.debug(f"adjusted data request refused for {asset.local_identifier}: {exc}")
        result.set_result(None)
        return result

    def _settle(f: "Future[bytes]") -> None:
        data: Optional[bytes]
        try:
            data = f.result()
        except Exception as exc:
            log.debug(f"adjusted data read failed for {asset.local_identifier}: {exc}")
            data = None
        result.set_result(data)

    pending.add_done_callback(_settle)
    return result


def _deliver(
    callback: AdjustedDataCallback, data: Optional[bytes], returned: threading.Event
) -> None:
    returned.wait()
    try:
        callback(data)
    except Exception:
        log.exception("adjusted data callback raised")


def request_adjusted_data(
    asset: Asset,
    callback: AdjustedDataCallback,
    *,
    reader: Optional[ResourceReader] = None,
) -> None:
    """
    Load the adjustment data in the background and hand it to `callback`.

    Returns immediately. The callback runs exactly once on a worker thread,
    never on the caller's stack, and not before this function has returned.
    """
    returned = threading.Event()
    try:
        fut = adjusted_data_future(asset, reader=reader)
        fut.add_done_callback(
            lambda f: shared_executor().submit(_deliver, callback, f.result(), returned)
        )
    finally:
        returned.set()
