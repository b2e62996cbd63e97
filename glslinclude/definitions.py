from typing import Any, Dict, Iterator, Optional, Tuple


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class DefinitionTable:
    """Macro name -> value. A value-less define is stored as ""."""

    def __init__(self, defines: Optional[Dict[str, Any]] = None):
        self._defines: Dict[str, str] = {}
        for name, value in (defines or {}).items():
            self.define(name, value)

    def define(self, name: str, value: Any = None):
        self._defines[name] = _stringify(value)

    def undef(self, name: str):
        self._defines.pop(name, None)

    def undef_all(self):
        self._defines.clear()

    def get(self, name: str) -> Optional[str]:
        return self._defines.get(name)

    def items(self):
        return self._defines.items()

    def as_dict(self) -> Dict[str, str]:
        return dict(self._defines)

    def lines(self) -> Tuple[str, ...]:
        return tuple(f"#define {name} {value}" for name, value in self._defines.items())

    def __contains__(self, name) -> bool:
        return name in self._defines

    def __iter__(self) -> Iterator[str]:
        return iter(self._defines)

    def __len__(self) -> int:
        return len(self._defines)

    def __repr__(self):
        return f"DefinitionTable({self._defines!r})"
