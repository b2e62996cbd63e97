from fastapi import APIRouter, HTTPException, Request
from pathlib import Path
from typing import Dict, List
import re

router = APIRouter()

SHADER_SUFFIXES = {".glsl", ".vert", ".frag", ".geom", ".comp", ".tesc", ".tese"}

@router.get("/", response_model=List[Dict])
async def list_shaders(request: Request):
    """List top-level shaders; each path is a logical name for GET /{path}"""
    root = request.app.state.shader_root
    if root is None or not root.is_dir():
        return []

    shaders = []
    for shader_file in sorted(root.rglob("*")):
        if shader_file.suffix.lower() not in SHADER_SUFFIXES or not shader_file.is_file():
            continue

        relative_path = shader_file.relative_to(root)
        metadata = _parse_shader_metadata(shader_file)

        shaders.append({
            "path": relative_path.as_posix(),
            "name": metadata.get("name", relative_path.stem),
            "description": metadata.get("description", ""),
        })

    return shaders

# Catch-all route must be LAST
@router.get("/{shader_name:path}")
async def get_shader(shader_name: str, request: Request):
    """Get the expanded shader source"""
    source = request.app.state.processor.get_shader_source(shader_name)
    if source is None:
        raise HTTPException(status_code=404, detail=f"Could not expand shader '{shader_name}'")

    return {
        "name": shader_name,
        "source": source,
    }

def _parse_shader_metadata(shader_path: Path) -> Dict:
    """Parse `// Key: value` lines from the leading comment block"""
    metadata = {}

    try:
        with open(shader_path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                if not line.startswith("//"):
                    break

                match = re.match(r'^//\s*(\w+):\s*(.+)$', line)
                if match:
                    metadata[match.group(1).lower()] = match.group(2).strip()
    except (OSError, UnicodeDecodeError):
        return {}

    return metadata
