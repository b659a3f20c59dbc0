from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

import pytest

from adjustment import (
    adjusted_data_future,
    get_adjust_resource,
    is_adjust,
    request_adjusted_data,
)
from assets import Asset, MediaKind, Resource, ResourceKind
from reader import FileResourceReader


class _Capture:
    """Collects callback invocations and the thread they ran on."""

    def __init__(self) -> None:
        self.calls: List[Optional[bytes]] = []
        self.threads: List[int] = []
        self.event = threading.Event()

    def __call__(self, data: Optional[bytes]) -> None:
        self.calls.append(data)
        self.threads.append(threading.get_ident())
        self.event.set()


class _FailingReader:
    def request_data(self, resource: Resource) -> "Future[bytes]":
        fut: "Future[bytes]" = Future()
        fut.set_exception(OSError("boom"))
        return fut


def _edited(path: Optional[Path]) -> Asset:
    return Asset(
        "E",
        media_kind=MediaKind.IMAGE,
        resources=(
            Resource(ResourceKind.FULL_SIZE_IMAGE, "public.jpeg", "IMG.JPG"),
            Resource(ResourceKind.ADJUSTMENT_DATA, "com.apple.property-list", "Adjustments.plist", path),
            Resource(ResourceKind.ADJUSTMENT_DATA, "com.apple.property-list", "Second.plist"),
        ),
    )


@pytest.mark.parametrize(
    "asset",
    [
        Asset("A"),
        Asset("B", media_kind=MediaKind.VIDEO, resources=(Resource(ResourceKind.FULL_SIZE_VIDEO, "public.mpeg-4"),)),
        _edited(None),
    ],
)
def test_is_adjust_matches_resource_accessor(asset: Asset) -> None:
    assert is_adjust(asset) == (get_adjust_resource(asset) is not None)


def test_first_adjustment_resource_is_used() -> None:
    res = get_adjust_resource(_edited(None))
    assert res is not None
    assert res.original_filename == "Adjustments.plist"


def test_request_without_adjustment_delivers_none_once() -> None:
    cap = _Capture()
    asset = Asset("P", media_kind=MediaKind.IMAGE, resources=(Resource(ResourceKind.FULL_SIZE_IMAGE, "public.jpeg"),))
    assert request_adjusted_data(asset, cap) is None
    assert cap.event.wait(5)
    assert cap.calls == [None]
    assert cap.threads[0] != threading.get_ident()


def test_request_reads_adjustment_bytes(tmp_path: Path) -> None:
    plist = tmp_path / "Adjustments.plist"
    plist.write_bytes(b"<plist>crop</plist>")
    cap = _Capture()
    with ThreadPoolExecutor(max_workers=1) as ex:
        reader = FileResourceReader(ex, chunk_size=4)
        request_adjusted_data(_edited(plist), cap, reader=reader)
        assert cap.event.wait(5)
    assert cap.calls == [b"<plist>crop</plist>"]


def test_read_failure_collapses_to_none() -> None:
    cap = _Capture()
    request_adjusted_data(_edited(Path("unused")), cap, reader=_FailingReader())
    assert cap.event.wait(5)
    assert cap.calls == [None]


def test_missing_file_collapses_to_none(tmp_path: Path) -> None:
    fut = adjusted_data_future(_edited(tmp_path / "gone.plist"), reader=FileResourceReader())
    assert fut.result(timeout=5) is None


def test_future_without_backing_path_is_none() -> None:
    fut = adjusted_data_future(_edited(None))
    assert fut.result(timeout=5) is None


def test_callback_errors_do_not_escape() -> None:
    ran = threading.Event()

    def explode(data: Optional[bytes]) -> None:
        ran.set()
        raise RuntimeError("caller bug")

    request_adjusted_data(Asset("X"), explode)
    assert ran.wait(5)


def test_callback_never_runs_before_call_returns() -> None:
    seen: List[bool] = []
    finished = threading.Semaphore(0)
    rounds = 500

    for _ in range(rounds):
        returned = threading.Event()

        def cb(data: Optional[bytes], returned: threading.Event = returned) -> None:
            seen.append(returned.is_set())
            finished.release()

        request_adjusted_data(Asset("X"), cb)
        returned.set()

    for _ in range(rounds):
        assert finished.acquire(timeout=5)
    assert seen == [True] * rounds


class _GatedReader:
    """Reader whose read only completes once the test opens the gate."""

    def __init__(self) -> None:
        self.pending: "Future[bytes]" = Future()

    def request_data(self, resource: Resource) -> "Future[bytes]":
        return self.pending


def test_slow_reader_does_not_block_caller() -> None:
    cap = _Capture()
    reader = _GatedReader()
    request_adjusted_data(_edited(Path("unused")), cap, reader=reader)
    # still pending: the call came back without waiting for the read
    assert not cap.event.wait(0.2)
    assert cap.calls == []

    reader.pending.set_result(b"late")
    assert cap.event.wait(5)
    assert cap.calls == [b"late"]
