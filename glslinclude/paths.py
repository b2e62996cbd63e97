from pathlib import Path
from typing import Union

from .types import SourceKind

PathLike = Union[str, Path]


class SingleDirectory:
    """All shader files, sources and includes alike, live under one root."""

    def __init__(self, root: PathLike):
        self.root = Path(root)

    def get_filepath(self, kind: SourceKind, name: str) -> Path:
        return self.root / name

    def __repr__(self):
        return f"SingleDirectory({str(self.root)!r})"


class SplitDirectories:
    """
    Keeps top-level sources and include files in two separate directories.
    Names are joined as given: no normalization, `..` is passed through.
    """

    def __init__(self, src_root: PathLike, include_root: PathLike):
        self.src_root = Path(src_root)
        self.include_root = Path(include_root)

    @classmethod
    def from_root(cls, root: PathLike) -> "SplitDirectories":
        root = Path(root)
        return cls(root / "src", root / "include")

    def get_filepath(self, kind: SourceKind, name: str) -> Path:
        if kind is SourceKind.INCLUDE:
            return self.include_root / name
        return self.src_root / name

    def __repr__(self):
        return f"SplitDirectories({str(self.src_root)!r}, {str(self.include_root)!r})"
