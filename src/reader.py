"""
Host resource-loading capability.

- ResourceReader: anything that can start an asynchronous read of a
  resource's full content and hand back a Future.
- FileResourceReader: reads Resource.path in 1 MiB chunks on a thread pool.
- default_reader(): process-wide reader on a shared executor (shut down atexit),
  sized by configure_shared_executor().
"""

from __future__ import annotations

import atexit
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Protocol

from assets import Resource
from errors import ResourceReadError

_CHUNK = 1024 * 1024  # 1 MiB


class ResourceReader(Protocol):
    def request_data(self, resource: Resource) -> "Future[bytes]":
        """Start reading `resource`; the future fails if the read fails."""
        ...


def read_resource_bytes(resource: Resource, *, chunk_size: int = _CHUNK) -> bytes:
    """
    Read the whole content of a file-backed resource.

    Raises:
        ResourceReadError: if the resource has no path.
        OSError: if the file cannot be read.
    """
    if resource.path is None:
        raise ResourceReadError(
            f"Resource has no backing file: {resource.original_filename or resource.kind.value}"
        )
    buf = bytearray()
    with resource.path.open("rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            buf.extend(chunk)
    return bytes(buf)


class FileResourceReader:
    """ResourceReader over local files."""

    def __init__(
        self, executor: Optional[ThreadPoolExecutor] = None, *, chunk_size: int = _CHUNK
    ) -> None:
        self._executor = executor or shared_executor()
        self.chunk_size = chunk_size

    def request_data(self, resource: Resource) -> "Future[bytes]":
        return self._executor.submit(
            read_resource_bytes, resource, chunk_size=self.chunk_size
        )


# ------------ Shared executor ------------

_LOCK = threading.Lock()
_EXECUTOR: Optional[ThreadPoolExecutor] = None
_MAX_WORKERS = 4
_DEFAULT_READER: Optional[FileResourceReader] = None


def shared_executor() -> ThreadPoolExecutor:
    global _EXECUTOR
    with _LOCK:
        if _EXECUTOR is None:
            _EXECUTOR = ThreadPoolExecutor(
                max_workers=_MAX_WORKERS, thread_name_prefix="pak-read"
            )
            atexit.register(_shutdown_executor)
        return _EXECUTOR


def configure_shared_executor(max_workers: int) -> None:
    """
    Size the shared pool. Takes effect when the pool is next created; a pool
    that is already running with a different size is shut down first.
    """
    global _MAX_WORKERS
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")
    with _LOCK:
        changed = max_workers != _MAX_WORKERS
        _MAX_WORKERS = max_workers
    if changed:
        _shutdown_executor()


def _shutdown_executor() -> None:
    global _EXECUTOR, _DEFAULT_READER
    with _LOCK:
        if _EXECUTOR is not None:
            _EXECUTOR.shutdown(wait=False)
            _EXECUTOR = None
        _DEFAULT_READER = None


def default_reader() -> FileResourceReader:
    global _DEFAULT_READER
    if _DEFAULT_READER is None:
        _DEFAULT_READER = FileResourceReader()
    return _DEFAULT_READER
