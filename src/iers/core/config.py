from __future__ import annotations
from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping, Optional, Tuple

# Bulletin mirrors, tried in order. Each base URL holds the ser7 file set.
DEFAULT_SERVERS: Tuple[str, ...] = (
    "https://maia.usno.navy.mil/ser7/",
    "ftp://toshi.nofs.navy.mil/ser7/",
    "https://cddis.nasa.gov/archive/products/iers/",
)

DEFAULT_UPDATE_INTERVAL_H = 0.25
DEFAULT_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration for storage and retrieval.

    The numeric engine itself takes no settings; these only steer where the
    bulletin files live and how the refresh command fetches them.
    """
    data_dir: Path
    update_interval_hours: float = DEFAULT_UPDATE_INTERVAL_H
    servers: Tuple[str, ...] = DEFAULT_SERVERS
    timeout_seconds: float = DEFAULT_TIMEOUT_S


def default_data_dir(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Resolve the bulletin directory.

    Search order:
      1) IERS_DATA_DIR
      2) $XDG_CACHE_HOME/iers
      3) ~/.cache/iers
    """
    env = os.environ if env is None else env
    p = env.get("IERS_DATA_DIR", "").strip()
    if p:
        return Path(p).expanduser()
    xdg = env.get("XDG_CACHE_HOME", "").strip()
    if xdg:
        return Path(xdg).expanduser() / "iers"
    return Path.home() / ".cache" / "iers"


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value < 0.0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None, *, data_dir: Optional[Path] = None) -> Settings:
    env = os.environ if env is None else env

    servers = DEFAULT_SERVERS
    raw = env.get("IERS_SERVERS", "").strip()
    if raw:
        servers = tuple(s.strip() for s in raw.split(",") if s.strip())
        if not servers:
            raise ValueError("IERS_SERVERS lists no servers")

    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir is not None else default_data_dir(env),
        update_interval_hours=_float_env(env, "IERS_UPDATE_INTERVAL_H", DEFAULT_UPDATE_INTERVAL_H),
        servers=servers,
        timeout_seconds=_float_env(env, "IERS_TIMEOUT_S", DEFAULT_TIMEOUT_S),
    )
