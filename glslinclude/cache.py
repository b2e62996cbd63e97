"""
Read strategies layered on top of `read_string`.

The cached readers are read-through caches: `get_string` looks like a query but
mutates the reader's storage. None of them lock, so sharing one instance between
threads needs external synchronization.
"""
from functools import partial
from pathlib import Path
from typing import Callable, Dict, Optional

from .reader import read_string
from .types import CacheKey

ReadFunc = Callable[[Path], Optional[str]]


def _default_read(encoding: str) -> ReadFunc:
    return partial(read_string, encoding=encoding)


class UncachedReader:
    """Hits the filesystem on every request."""

    def __init__(self, read: Optional[ReadFunc] = None, encoding: str = "utf-8"):
        self._read = read or _default_read(encoding)

    def get_string(self, path: Path) -> Optional[str]:
        return self._read(path)

    def clear(self):
        pass


class CachedReader:
    """
    Reads each path once and serves it from memory afterwards.

    Only use this when shader files don't change while the process runs:
    edits made after the first read are never picked up.
    """

    def __init__(self, read: Optional[ReadFunc] = None, encoding: str = "utf-8"):
        self._read = read or _default_read(encoding)
        self._cache: Dict[str, str] = {}

    def get_string(self, path: Path) -> Optional[str]:
        key = str(path)
        if key in self._cache:
            return self._cache[key]

        source = self._read(path)
        if source is None:
            return None

        self._cache[key] = source
        return source

    def clear(self):
        self._cache.clear()

    def __len__(self):
        return len(self._cache)


class ModifiedCachedReader:
    """
    Caches by (path, mtime, size) and re-reads a file whenever its
    modification time or size changes.
    """

    def __init__(self, read: Optional[ReadFunc] = None, encoding: str = "utf-8"):
        self._read = read or _default_read(encoding)
        self._cache: Dict[CacheKey, str] = {}
        # path -> key currently stored for it, so stale entries can be evicted
        self._latest: Dict[str, CacheKey] = {}

    def get_string(self, path: Path) -> Optional[str]:
        try:
            key = CacheKey.probe(path)
        except OSError:
            return None

        if key in self._cache:
            return self._cache[key]

        source = self._read(path)
        if source is None:
            return None

        stale = self._latest.get(key.path)
        if stale is not None:
            self._cache.pop(stale, None)
        self._cache[key] = source
        self._latest[key.path] = key
        return source

    def clear(self):
        self._cache.clear()
        self._latest.clear()

    def __len__(self):
        return len(self._cache)


READERS = {
    "none": UncachedReader,
    "name": CachedReader,
    "modified": ModifiedCachedReader,
}


def make_reader(strategy: str, encoding: str = "utf-8"):
    try:
        cls = READERS[strategy]
    except KeyError:
        raise ValueError(f"Unknown cache strategy '{strategy}'. Must be one of {list(READERS)}")
    return cls(encoding=encoding)
