from __future__ import annotations

"""
iers.bulletins.storage

Local bulletin directory layout:

  <data_dir>/finals.all, deltat.data, ...   bulletin files
  <data_dir>/.updated                       Unix time of the last refresh
  <data_dir>/.log                           activity log, "<RFC 2822 date>\t<message>"
  <data_dir>/.gitignore                     "*"
"""

import logging
import time
from pathlib import Path
from typing import Iterable, Optional

from ..core.config import Settings

log = logging.getLogger(__name__)

UPDATED_FILE = ".updated"
ACTIVITY_FILE = ".log"
GITIGNORE_FILE = ".gitignore"

ACTIVITY_LOGGER = "iers.activity"
_ACTIVITY_FORMAT = logging.Formatter("%(asctime)s\t%(message)s", datefmt="%a, %d %b %Y %H:%M:%S %z")


def ensure_data_dir(settings: Settings) -> Path:
    """Create the data directory (and its .gitignore) if missing."""
    root = Path(settings.data_dir)
    if not root.exists():
        log.info("creating bulletin directory %s", root)
        root.mkdir(parents=True, exist_ok=True)
    ignore = root / GITIGNORE_FILE
    if not ignore.exists():
        ignore.write_text("*", encoding="utf-8")
    return root


def path_for(settings: Settings, name: str) -> Path:
    return Path(settings.data_dir) / name


def files_exist(settings: Settings, names: Iterable[str]) -> bool:
    return all(path_for(settings, n).is_file() for n in names)


def local_size(settings: Settings, name: str) -> Optional[int]:
    p = path_for(settings, name)
    return p.stat().st_size if p.is_file() else None


# ============================================================
# Refresh bookkeeping
# ============================================================

def mark_updated(settings: Settings, now: Optional[float] = None) -> None:
    stamp = int(time.time() if now is None else now)
    path_for(settings, UPDATED_FILE).write_text(str(stamp), encoding="utf-8")


def hours_since_update(settings: Settings, now: Optional[float] = None) -> float:
    """
    Hours since the last refresh.

    Without a stamp (or with an unreadable one) this returns the configured
    interval itself, so the next refresh check always fires.
    """
    p = path_for(settings, UPDATED_FILE)
    if not p.is_file():
        return settings.update_interval_hours
    raw = p.read_text(encoding="utf-8").strip()
    try:
        stamp = float(raw)
    except ValueError:
        log.warning("ignoring unreadable refresh stamp %r in %s", raw, p)
        return settings.update_interval_hours
    now = time.time() if now is None else now
    return (now - stamp) / 3600.0


# ============================================================
# Activity log
# ============================================================

def log_activity(settings: Settings, message: str) -> None:
    """Append one line to <data_dir>/.log."""
    logger = logging.getLogger(ACTIVITY_LOGGER)
    logger.setLevel(logging.INFO)
    handler = logging.FileHandler(path_for(settings, ACTIVITY_FILE), encoding="utf-8")
    handler.setFormatter(_ACTIVITY_FORMAT)
    logger.addHandler(handler)
    try:
        logger.info(message)
    finally:
        logger.removeHandler(handler)
        handler.close()
