"""Bulletin files: line-indexed readers, on-disk storage and refresh."""

from .reader import (
    BulletinProvider,
    BulletinReader,
    DirectoryProvider,
    FileBulletinReader,
    MemoryBulletinReader,
    MemoryProvider,
)

__all__ = [
    "BulletinProvider",
    "BulletinReader",
    "DirectoryProvider",
    "FileBulletinReader",
    "MemoryBulletinReader",
    "MemoryProvider",
]
