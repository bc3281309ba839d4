from __future__ import annotations
from typing import Optional

from .bulletins.reader import DirectoryProvider
from .core.config import Settings, load_settings
from .engines.query import EarthOrientationQuery
from .engines.specs import ALL_SOURCES


def build_query(settings: Optional[Settings] = None) -> EarthOrientationQuery:
    if settings is None:
        settings = load_settings()
    return EarthOrientationQuery(DirectoryProvider(settings.data_dir), ALL_SOURCES)
