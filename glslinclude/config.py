import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .cache import make_reader
from .log import sink_for
from .options_schema import OPTIONS
from .paths import SingleDirectory, SplitDirectories
from .processor import GLSLSourceProcessor
from .provider import FileSourceProvider

def load_defaults() -> Dict[str, Any]:
    defaults = {}
    for opt in OPTIONS:
        defaults[opt.name] = copy.deepcopy(opt.default)
    return defaults

def load_from_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}

    suffix = path.suffix.lower()
    with open(path, 'r', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            return yaml.safe_load(f) or {}
        elif suffix == '.json':
            return json.load(f)
    raise ValueError(f"Unsupported config file format: {path.suffix}")

def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    # Shallow merge, except defines which combine name by name
    res = base.copy()
    for k, v in override.items():
        if v is None:
            continue
        if k == "defines":
            merged = dict(res.get("defines") or {})
            merged.update(v)
            res[k] = merged
        else:
            res[k] = v
    return res

def build_config(config_path: Optional[Path] = None, cli_args: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    cfg = load_defaults()

    if config_path:
        file_cfg = load_from_file(config_path)
        cfg = merge_configs(cfg, file_cfg)

    if cli_args:
        cfg = merge_configs(cfg, cli_args)

    return cfg

def build_path_policy(cfg: Dict[str, Any]):
    root = Path(cfg["root"])
    layout = cfg["layout"]
    if layout == "single":
        return SingleDirectory(root)
    if layout == "split":
        src = Path(cfg["src_dir"]) if cfg.get("src_dir") else root / "src"
        inc = Path(cfg["include_dir"]) if cfg.get("include_dir") else root / "include"
        return SplitDirectories(src, inc)
    raise ValueError(f"Unknown layout '{layout}'. Must be 'split' or 'single'")

def build_processor(cfg: Dict[str, Any]) -> GLSLSourceProcessor:
    log = sink_for(cfg.get("log"))
    provider = FileSourceProvider(
        reader=make_reader(cfg["cache"], encoding=cfg.get("encoding") or "utf-8"),
        path_policy=build_path_policy(cfg),
        log=log,
    )
    processor = GLSLSourceProcessor(
        provider,
        glsl_version=cfg["glsl_version"],
        log=log,
        guard_top_level=bool(cfg.get("guard_top_level")),
    )
    for name, value in (cfg.get("defines") or {}).items():
        processor.define(name, value)
    return processor
