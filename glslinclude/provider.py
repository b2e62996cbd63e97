from pathlib import Path
from typing import Dict, Mapping, Optional

from .cache import UncachedReader
from .log import LogSink, disabled_logging, emit
from .paths import SplitDirectories
from .types import FileReader, PathPolicy, SourceKind


class FileSourceProvider:
    """
    Reads shader sources from disk: the path policy picks the file, the
    reader decides whether it comes from memory or from the filesystem.
    """

    def __init__(self,
                 reader: Optional[FileReader] = None,
                 path_policy: Optional[PathPolicy] = None,
                 log: LogSink = disabled_logging):
        self.reader = reader if reader is not None else UncachedReader()
        self.path_policy = path_policy if path_policy is not None else SplitDirectories.from_root("shaders")
        self.log = log

    def get_source(self, kind: SourceKind, name: str) -> Optional[str]:
        filepath = self.path_policy.get_filepath(kind, name)
        source = self.reader.get_string(filepath)
        if source is None:
            emit(self.log, f"Failed to open/read shader file: {filepath}")
        return source


class MemorySourceProvider:
    """
    Serves shader text from dictionaries instead of files.

    If no separate `includes` mapping is given, sources and includes share
    one namespace.
    """

    def __init__(self,
                 sources: Optional[Mapping[str, str]] = None,
                 includes: Optional[Mapping[str, str]] = None):
        self.sources: Dict[str, str] = dict(sources or {})
        self.includes: Dict[str, str] = self.sources if includes is None else dict(includes)

    def add(self, kind: SourceKind, name: str, text: str):
        self._table(kind)[name] = text

    def get_source(self, kind: SourceKind, name: str) -> Optional[str]:
        return self._table(kind).get(name)

    def _table(self, kind: SourceKind) -> Dict[str, str]:
        if kind is SourceKind.INCLUDE:
            return self.includes
        return self.sources
