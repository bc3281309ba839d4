from __future__ import annotations

import argparse
import logging
import os
import sys
import urllib.error
import urllib.request
from pathlib import Path
from typing import List, Optional

from ..core.config import Settings, load_settings
from ..core.errors import RetrievalError
from .storage import (
    ensure_data_dir,
    files_exist,
    hours_since_update,
    local_size,
    log_activity,
    mark_updated,
    path_for,
)

log = logging.getLogger(__name__)

# Everything mirrored from the ser7 directory.
FILES = (
    "deltat.data",
    "deltat.preds",
    "finals.all",
    "historic_deltat.data",
    "tai-utc.dat",
    "readme",
    "readme.finals",
)


def _url(base: str, name: str) -> str:
    return base.rstrip("/") + "/" + name


def _request(url: str, *, head: bool = False) -> urllib.request.Request:
    if head and url.startswith(("http://", "https://")):
        return urllib.request.Request(url, method="HEAD")
    return urllib.request.Request(url)


# -----------------------------
# Mirror selection
# -----------------------------
def pick_mirror(settings: Settings) -> str:
    """First server whose directory answers; each is tried once."""
    for base in settings.servers:
        try:
            with urllib.request.urlopen(_request(base, head=True), timeout=settings.timeout_seconds):
                pass
        except (urllib.error.URLError, OSError) as e:
            log.info("mirror %s unavailable: %s", base, e)
            continue
        log.debug("using mirror %s", base)
        return base
    raise RetrievalError("Unable to reach any bulletin mirror: " + ", ".join(settings.servers))


# -----------------------------
# Single files
# -----------------------------
def remote_size(url: str, timeout: float) -> Optional[int]:
    """Content-Length of a remote file, or None when the server does not say."""
    try:
        with urllib.request.urlopen(_request(url, head=True), timeout=timeout) as r:
            raw = r.headers.get("Content-Length")
    except (urllib.error.URLError, OSError) as e:
        raise RetrievalError(f"cannot stat {url}: {e}") from e
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def fetch(url: str, dest: Path, timeout: float) -> int:
    """Download url to dest (via a .part file); returns the byte count."""
    tmp = dest.with_name(dest.name + ".part")
    try:
        with urllib.request.urlopen(_request(url), timeout=timeout) as r:
            data = r.read()
    except (urllib.error.URLError, OSError) as e:
        raise RetrievalError(f"cannot download {url}: {e}") from e
    tmp.write_bytes(data)
    os.replace(tmp, dest)
    return len(data)


# -----------------------------
# Refresh
# -----------------------------
def needs_update(settings: Settings) -> bool:
    if not files_exist(settings, FILES):
        return True
    return hours_since_update(settings) >= settings.update_interval_hours


def perform_update(settings: Settings, force: bool = False) -> List[str]:
    """
    Bring the local bulletin directory up to date.

    Skips entirely while all files exist and the last refresh is younger
    than settings.update_interval_hours (unless force). Otherwise files whose
    remote size differs from the local one are downloaded. Returns the
    names that were written.
    """
    ensure_data_dir(settings)
    if not force and not needs_update(settings):
        log.debug("bulletins are fresh (%.2f h old)", hours_since_update(settings))
        return []

    base = pick_mirror(settings)
    updated: List[str] = []
    for name in FILES:
        url = _url(base, name)
        remote = remote_size(url, settings.timeout_seconds)
        local = local_size(settings, name)
        if local is not None and remote is not None and local == remote:
            log.debug("%s unchanged (%d bytes)", name, local)
            continue
        n = fetch(url, path_for(settings, name), settings.timeout_seconds)
        log.info("downloaded %s (%d bytes)", name, n)
        log_activity(settings, f"Updated {name} from {url}")
        updated.append(name)

    mark_updated(settings)
    return updated


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="iers update", description="Refresh local IERS/USNO bulletin files.")
    p.add_argument("--data-dir", default=None, help="Bulletin directory (default: $IERS_DATA_DIR or ~/.cache/iers)")
    p.add_argument("--force", action="store_true", help="Ignore the refresh interval")
    args = p.parse_args(argv)

    settings = load_settings(data_dir=Path(args.data_dir) if args.data_dir else None)
    try:
        updated = perform_update(settings, force=args.force)
    except RetrievalError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if updated:
        for name in updated:
            print(f"updated {name}")
    else:
        print("bulletins are up to date")
    print(f"data dir: {settings.data_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
