"""
Logging for the kit and its CLI:
- Rich console for humans (default).
- Optional JSON lines (stderr and/or file).
- Optional rotating file log.
- QueueHandler/QueueListener so reader worker threads never block on sinks.

Usage:
    from logs import init_logging, get_logger

    init_logging(level="INFO")
    log = get_logger("pak.something")

Env vars:
    PAK_LOG_LEVEL   = DEBUG|INFO|WARNING|ERROR (default INFO)
    PAK_LOG_JSON    = 0|1  (default 0)
    PAK_LOG_TO_FILE = 0|1  (default 0)
    PAK_LOG_FILE    = path to log file (default .pak/logs/pak.log)
"""

from __future__ import annotations

import atexit
import json
import logging
import os
import queue
import sys
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


@dataclass
class LogConfig:
    level: str = "INFO"
    json: bool = False
    to_file: bool = False
    file_path: Path = Path(".pak/logs/pak.log")
    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3


_CONSOLE = Console(stderr=True, highlight=False, soft_wrap=True)
_QUEUE: Optional[queue.Queue] = None
_LISTENER: Optional[QueueListener] = None
_INITIALIZED = False


class JsonFormatter(logging.Formatter):
    """One JSON object per record; keys are stable."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "level": record.levelname,
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "logger": record.name,
            "msg": record.getMessage(),
            "thread": record.threadName,
            "file": record.filename,
            "line": record.lineno,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0") == "1"


def _file_handler(cfg: LogConfig) -> Optional[logging.Handler]:
    try:
        cfg.file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            cfg.file_path,
            maxBytes=cfg.max_bytes,
            backupCount=cfg.backup_count,
            encoding="utf-8",
        )
    except OSError:
        # File logging is optional; the console sink still works.
        return None
    handler.setFormatter(
        JsonFormatter()
        if cfg.json
        else logging.Formatter("%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s")
    )
    return handler


def init_logging(
    level: Optional[str] = None,
    *,
    json: Optional[bool] = None,
    to_file: Optional[bool] = None,
    file_path: Optional[Path] = None,
) -> None:
    """
    Initialize process-wide logging. Idempotent.

    Arguments win over env vars; env vars win over LogConfig defaults.
    """
    global _INITIALIZED, _QUEUE, _LISTENER

    if _INITIALIZED:
        return

    cfg = LogConfig(
        level=(level or os.getenv("PAK_LOG_LEVEL") or "INFO").upper(),
        json=json if json is not None else _env_flag("PAK_LOG_JSON"),
        to_file=to_file if to_file is not None else _env_flag("PAK_LOG_TO_FILE"),
        file_path=Path(os.getenv("PAK_LOG_FILE") or file_path or LogConfig.file_path),
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, cfg.level, logging.INFO))

    if not any(isinstance(h, QueueHandler) for h in root.handlers):
        _QUEUE = queue.Queue(-1)
        root.addHandler(QueueHandler(_QUEUE))

    handlers: list[logging.Handler] = []
    if cfg.json:
        console_handler = logging.StreamHandler(stream=sys.stderr)
        console_handler.setFormatter(JsonFormatter())
        handlers.append(console_handler)
    else:
        rich_handler = RichHandler(
            console=_CONSOLE, show_time=True, show_path=False, markup=True
        )
        rich_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(rich_handler)

    if cfg.to_file:
        fh = _file_handler(cfg)
        if fh is not None:
            handlers.append(fh)

    if _QUEUE is not None:
        _LISTENER = QueueListener(_QUEUE, *handlers, respect_handler_level=True)
        _LISTENER.start()
        atexit.register(_stop_listener)

    _INITIALIZED = True


def _stop_listener() -> None:
    global _LISTENER
    if _LISTENER:
        try:
            _LISTENER.stop()
        except Exception:
            # Runs from atexit; a broken sink must not mask the exit status.
            pass
        _LISTENER = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Namespaced logger; cheap, usable before init_logging()."""
    return logging.getLogger(name or "pak")
