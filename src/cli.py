"""
CLI entrypoint:
- inspect: classification, title, MIME type, adjustment and Live Photo info
- adjusted: load adjustment data in the background, report size/digests, export
"""

from __future__ import annotations

import json
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional

import typer

from adjustment import is_adjust, request_adjusted_data
from assets import Asset, AssetSubtype
from classifier import (
    is_audio,
    is_image,
    is_image_or_video,
    is_live_photo,
    is_video,
    subtype_flags,
    unwrapped_subtype,
)
from config import AppConfig
from digest import digest_bytes
from errors import ConfigLoadError, InternalError, ManifestLoadError, PakError
from live_photo import get_live_photos_resource
from logs import get_logger, init_logging
from manifest import load_manifest
from mime import mime_type
from reader import FileResourceReader, configure_shared_executor
from title import title

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Photo Asset Kit — inspect media library asset snapshots",
)

log = get_logger("pak")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
) -> None:
    init_logging(level="DEBUG" if verbose else "INFO")
    global log
    log = get_logger("pak.cli")
    if verbose:
        log.debug("Verbose logging enabled")


@app.command("version")
def version_cmd() -> None:
    typer.echo("photo-asset-kit v0.3.0")


def _describe(asset: Asset, cfg: AppConfig) -> Dict[str, object]:
    paired = get_live_photos_resource(asset)
    flags = subtype_flags(asset)
    return {
        "id": asset.local_identifier,
        "title": title(asset),
        "image": is_image(asset),
        "video": is_video(asset),
        "audio": is_audio(asset),
        "image_or_video": is_image_or_video(asset),
        "live_photo": is_live_photo(asset),
        "subtype": unwrapped_subtype(asset),
        "subtype_flags": [f.name for f in AssetSubtype if f and f in flags],
        "mime_type": mime_type(asset, cfg.mime.overrides),
        "adjusted": is_adjust(asset),
        "paired_video": paired.original_filename if paired is not None else None,
    }


def _kind_label(info: Dict[str, object]) -> str:
    if info["live_photo"]:
        return "live-photo"
    for key in ("image", "video", "audio"):
        if info[key]:
            return key
    return "unknown"


# ------------------------------- inspect --------------------------------------


@app.command("inspect")
def inspect_cmd(
    manifest: Path = typer.Argument(..., help="Asset manifest (JSON)"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to pak.toml"
    ),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """Describe every asset in a manifest."""
    try:
        cfg = AppConfig.load(config_file)
        assets = load_manifest(manifest)
        rows = [_describe(a, cfg) for a in assets]

        if json_out:
            typer.echo(json.dumps(rows, ensure_ascii=False, indent=2))
            return

        if not rows:
            typer.echo("No assets in manifest.")
            return

        for info in rows:
            typer.echo(
                f"{info['id']}  {_kind_label(info):10}  "
                f"{info['mime_type'] or '-':18}  {info['title'] or '-'}"
            )
            extras = []
            if info["subtype_flags"]:
                extras.append("subtype=" + ",".join(info["subtype_flags"]))  # type: ignore[arg-type]
            if info["adjusted"]:
                extras.append("adjusted")
            if info["paired_video"]:
                extras.append(f"paired={info['paired_video']}")
            if extras:
                typer.echo("    " + "  ".join(extras))

    except (ManifestLoadError, ConfigLoadError) as exc:
        log.error(f"[red]Error:[/] {exc}")
        raise typer.Exit(code=1)
    except PakError as exc:
        log.error(f"[red]Internal error:[/] {exc}")
        raise typer.Exit(code=1)


# ------------------------------- adjusted -------------------------------------


def export_name(local_identifier: str) -> str:
    """
    File name for exported adjustment data. Platform identifiers look like
    "UUID/L0/001"; path separators are flattened so every file lands directly
    in the output folder.
    """
    return local_identifier.replace("/", "_").replace("\\", "_") + ".aae"


@app.command("adjusted")
def adjusted_cmd(
    manifest: Path = typer.Argument(..., help="Asset manifest (JSON)"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to pak.toml"
    ),
    out_dir: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Write adjustment data to <out>/<id>.aae (separators in ids become _)"
    ),
    sha256: bool = typer.Option(False, "--sha256", help="Also compute SHA-256"),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON"),
) -> None:
    """Load the adjustment data of every edited asset."""
    try:
        cfg = AppConfig.load(config_file)
        assets = [a for a in load_manifest(manifest) if is_adjust(a)]
        if not assets:
            typer.echo("No adjusted assets found.")
            return

        results: Dict[str, Optional[bytes]] = {}
        lock = threading.Lock()
        done = threading.Semaphore(0)

        def on_data(asset_id: str):
            def _cb(data: Optional[bytes]) -> None:
                with lock:
                    results[asset_id] = data
                done.release()

            return _cb

        configure_shared_executor(cfg.reader.max_workers)
        ex = ThreadPoolExecutor(
            max_workers=cfg.reader.max_workers, thread_name_prefix="pak-cli-read"
        )
        reader = FileResourceReader(ex, chunk_size=cfg.reader.chunk_size)
        for a in assets:
            request_adjusted_data(a, on_data(a.local_identifier), reader=reader)
        for _ in assets:
            if not done.acquire(timeout=cfg.inspect.timeout):
                # a hung read must not keep the command alive
                ex.shutdown(wait=False, cancel_futures=True)
                raise InternalError("Timed out waiting for adjusted data.")
        ex.shutdown(wait=True)

        if out_dir is not None:
            out_dir.mkdir(parents=True, exist_ok=True)

        payload: List[Dict[str, object]] = []
        for a in assets:
            data = results.get(a.local_identifier)
            if data is None:
                log.warning(f"No adjustment data loaded for {a.local_identifier}")
                payload.append({"id": a.local_identifier, "size": None})
                continue
            b3, s256 = digest_bytes(data, with_sha256=sha256)
            row: Dict[str, object] = {
                "id": a.local_identifier,
                "size": len(data),
                "blake3": b3,
            }
            if s256 is not None:
                row["sha256"] = s256
            if out_dir is not None:
                target = out_dir / export_name(a.local_identifier)
                target.write_bytes(data)
                row["written"] = str(target)
            payload.append(row)

        if json_out:
            typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
            return
        for row in payload:
            if row["size"] is None:
                typer.echo(f"{row['id']}  (unavailable)")
            else:
                typer.echo(f"{row['id']}  {row['size']:>8} B  {row['blake3']}")

    except (ManifestLoadError, ConfigLoadError) as exc:
        log.error(f"[red]Error:[/] {exc}")
        raise typer.Exit(code=1)
    except PakError as exc:
        log.error(f"[red]Internal error:[/] {exc}")
        raise typer.Exit(code=1)
    except OSError:
        log.exception("Unexpected I/O error while exporting adjustment data")
        raise typer.Exit(code=1)
