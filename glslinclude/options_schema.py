from dataclasses import dataclass
from typing import Any, List, Optional

@dataclass
class Option:
    name: str
    label: str
    type: str  # "str", "bool", "path", "choice", "dict"
    default: Any
    choices: Optional[List[str]] = None
    help_text: Optional[str] = None

OPTIONS: List[Option] = []

# --- Preamble ---
OPTIONS.append(Option("glsl_version", "GLSL Version Line", "str", "#version 450 core"))

# --- Layout ---
OPTIONS.append(Option(
    "layout", "Directory Layout", "choice", "split",
    choices=["split", "single"],
    help_text="split: sources in <root>/src, includes in <root>/include. single: everything in <root>."
))
OPTIONS.append(Option("root", "Shader Root", "path", "shaders"))
OPTIONS.append(Option("src_dir", "Source Directory", "path", None, help_text="Overrides <root>/src for the split layout"))
OPTIONS.append(Option("include_dir", "Include Directory", "path", None, help_text="Overrides <root>/include for the split layout"))

# --- Reading ---
OPTIONS.append(Option(
    "cache", "Cache Strategy", "choice", "modified",
    choices=["none", "name", "modified"],
    help_text="name: read once and never refresh. modified: refresh when mtime or size changes."
))
OPTIONS.append(Option("encoding", "File Encoding", "str", "utf-8"))

# --- Diagnostics ---
OPTIONS.append(Option("log", "Log Target", "choice", "stderr", choices=["none", "stdout", "stderr", "logging"]))

# --- Expansion ---
OPTIONS.append(Option(
    "guard_top_level", "Guard Top-Level Shader", "bool", False,
    help_text="Skip includes that name the requested shader itself"
))
OPTIONS.append(Option("defines", "Macro Definitions", "dict", {}))

# --- Output ---
OPTIONS.append(Option("output", "Output File", "path", None, help_text="Write the expanded source here instead of stdout"))
