import os
from pathlib import Path
from typing import Optional


def read_string(path: Path, encoding: str = "utf-8") -> Optional[str]:
    """
    Reads a whole shader file in one pass.

    Returns None if the file can't be opened, comes back shorter than its
    reported size, or doesn't decode with `encoding`.
    """
    try:
        with open(path, 'rb') as f:
            size = os.fstat(f.fileno()).st_size
            data = f.read(size)
    except OSError:
        return None

    if len(data) != size:
        return None

    try:
        return data.decode(encoding)
    except UnicodeDecodeError:
        return None
