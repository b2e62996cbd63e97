import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol


class SourceKind(enum.Enum):
    SOURCE = "source"     # shader requested by the caller
    INCLUDE = "include"   # file reached through an #include line


@dataclass(frozen=True)
class CacheKey:
    path: str
    mtime_ns: int
    size: int

    @classmethod
    def probe(cls, path: Path) -> "CacheKey":
        # Raises OSError when the file is gone; callers decide what that means.
        st = Path(path).stat()
        return cls(str(path), st.st_mtime_ns, st.st_size)


class PathPolicy(Protocol):
    def get_filepath(self, kind: SourceKind, name: str) -> Path: ...


class FileReader(Protocol):
    def get_string(self, path: Path) -> Optional[str]: ...


class SourceProvider(Protocol):
    def get_source(self, kind: SourceKind, name: str) -> Optional[str]: ...
