from typing import Any, List, Optional, Set

from .definitions import DefinitionTable
from .log import LogSink, disabled_logging, emit
from .types import SourceKind, SourceProvider

DEFAULT_GLSL_VERSION = "#version 450 core"
INCLUDE_PREFIX = "#include"


class GLSLSourceProcessor:
    """
    Turns a shader name into one self-contained source string.

    The processor owns the version line and the macro definitions and keeps
    them between calls. Expansion state lives only for the duration of one
    `get_shader_source` call.
    """

    def __init__(self,
                 source_provider: SourceProvider,
                 glsl_version: str = DEFAULT_GLSL_VERSION,
                 log: LogSink = disabled_logging,
                 guard_top_level: bool = False):
        self.source_provider = source_provider
        self.glsl_version = glsl_version
        self.log = log
        # When set, an include naming the top-level shader is skipped like
        # any other repeated include instead of being expanded once more.
        self.guard_top_level = guard_top_level
        self.definitions = DefinitionTable()

    def define(self, name: str, value: Any = None):
        self.definitions.define(name, value)

    def undef(self, name: str):
        self.definitions.undef(name)

    def undef_all(self):
        self.definitions.undef_all()

    def get_shader_source(self, name: str) -> Optional[str]:
        """
        Assembles the final shader source:
        1. Version
        2. Defines
        3. The shader itself, with every #include expanded in place

        Returns None if the shader or any file it includes can't be loaded,
        or if an #include line is malformed. Nothing partial is returned.
        """
        src = self.source_provider.get_source(SourceKind.SOURCE, name)
        if src is None:
            emit(self.log, f"Failed to load shader source: {name}")
            return None

        already_included: Set[str] = set()
        if self.guard_top_level:
            already_included.add(name)

        parts = [self.glsl_version, "\n"]
        for line in self.definitions.lines():
            parts.append(line)
            parts.append("\n")

        body = self._process(src, already_included)
        if body is None:
            return None
        parts.append(body)
        return "".join(parts)

    def _process(self, source: str, already_included: Set[str]) -> Optional[str]:
        # already_included is shared by the whole expansion tree, never copied
        parts: List[str] = []

        for line in source.split("\n"):
            if not line.startswith(INCLUDE_PREFIX):
                parts.append(line)
                parts.append("\n")
                continue

            start = line.find('"')
            if start == -1:
                emit(self.log, f"#include declared but no value at '{line}'")
                return None

            end = line.find('"', start + 1)
            if end == -1:
                emit(self.log, f"Missing closing '\"' in include at '{line}'")
                return None

            include_name = line[start + 1:end]
            if include_name in already_included:
                continue
            already_included.add(include_name)

            include = self._get_shader_include(include_name, already_included)
            if include is None:
                emit(self.log, f"Failed to include file: {include_name}")
                return None
            parts.append(include)

        return "".join(parts)

    def _get_shader_include(self, name: str, already_included: Set[str]) -> Optional[str]:
        src = self.source_provider.get_source(SourceKind.INCLUDE, name)
        if src is None:
            return None
        return self._process(src, already_included)
