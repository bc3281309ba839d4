"""
iers.bulletins.reader
---------------------
Line-indexed access to bulletin files.

The numeric engine only needs three things from a bulletin: the text of
line i, the number of lines, and the index of the last non-blank line.
Readers are opened per query (providers hand out fresh readers) and
closed with a `with` block.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Union

from ..core.errors import SourceUnavailable

log = logging.getLogger(__name__)

ENCODING = "latin-1"


class BulletinReader(Protocol):
    def line(self, index: int) -> str: ...
    def line_count(self) -> int: ...
    def last_record_line(self) -> int: ...
    def close(self) -> None: ...
    def __enter__(self) -> "BulletinReader": ...
    def __exit__(self, *exc) -> None: ...


class BulletinProvider(Protocol):
    def open(self, name: str) -> BulletinReader: ...


def _strip_eol(text: str) -> str:
    return text.rstrip("\r\n")


# ============================================================
# Readers
# ============================================================

class FileBulletinReader:
    """
    Random access to one file by line index.

    Opening scans the file once for line start offsets; each line(i) is
    then a seek + readline, so the file is never held in memory.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        try:
            self._fh = self.path.open("rb")
        except FileNotFoundError:
            raise SourceUnavailable(f"bulletin file not found: {self.path}") from None
        self._offsets: List[int] = []
        self._last_record = -1
        pos = 0
        for i, raw in enumerate(self._fh):
            self._offsets.append(pos)
            pos += len(raw)
            if raw.strip():
                self._last_record = i
        log.debug("%s: %d lines indexed", self.path.name, len(self._offsets))

    def line(self, index: int) -> str:
        if not 0 <= index < len(self._offsets):
            raise IndexError(f"{self.path.name}: line {index} out of range 0..{len(self._offsets) - 1}")
        self._fh.seek(self._offsets[index])
        return _strip_eol(self._fh.readline().decode(ENCODING))

    def line_count(self) -> int:
        return len(self._offsets)

    def last_record_line(self) -> int:
        return self._last_record

    def close(self) -> None:
        self._fh.close()

    def __enter__(self) -> "FileBulletinReader":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class MemoryBulletinReader:
    def __init__(self, lines: Union[str, Sequence[str]]):
        if isinstance(lines, str):
            lines = lines.splitlines()
        self._lines = [_strip_eol(s) for s in lines]
        self._last_record = max((i for i, s in enumerate(self._lines) if s.strip()), default=-1)

    def line(self, index: int) -> str:
        if not 0 <= index < len(self._lines):
            raise IndexError(f"line {index} out of range 0..{len(self._lines) - 1}")
        return self._lines[index]

    def line_count(self) -> int:
        return len(self._lines)

    def last_record_line(self) -> int:
        return self._last_record

    def close(self) -> None:
        pass

    def __enter__(self) -> "MemoryBulletinReader":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


# ============================================================
# Providers
# ============================================================

class DirectoryProvider:
    """Bulletins stored as plain files under one directory."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        return self.root / name

    def open(self, name: str) -> FileBulletinReader:
        return FileBulletinReader(self.path_for(name))

    def __repr__(self) -> str:
        return f"DirectoryProvider({str(self.root)!r})"


class MemoryProvider:
    def __init__(self, texts: Optional[Mapping[str, Union[str, Sequence[str]]]] = None):
        self._texts: Dict[str, Union[str, Sequence[str]]] = dict(texts or {})

    def add(self, name: str, text: Union[str, Sequence[str]]) -> None:
        self._texts[name] = text

    def open(self, name: str) -> MemoryBulletinReader:
        if name not in self._texts:
            raise SourceUnavailable(f"no in-memory bulletin named {name!r}")
        return MemoryBulletinReader(self._texts[name])
