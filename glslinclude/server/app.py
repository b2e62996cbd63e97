from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from typing import Optional, Union

from glslinclude.paths import SingleDirectory, SplitDirectories
from glslinclude.processor import GLSLSourceProcessor

# CORS - restricted to localhost origins only
ALLOWED_ORIGINS = [
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

def source_root(processor: GLSLSourceProcessor) -> Optional[Path]:
    """Directory holding the top-level shaders, if the processor reads from disk"""
    policy = getattr(processor.source_provider, "path_policy", None)
    if isinstance(policy, SplitDirectories):
        return policy.src_root
    if isinstance(policy, SingleDirectory):
        return policy.root
    return None

def create_app(processor: GLSLSourceProcessor, shader_root: Optional[Union[str, Path]] = None) -> FastAPI:
    """
    Builds the preview API around one processor.

    Listed shader paths are relative to `shader_root`, which defaults to the
    directory the processor resolves top-level sources against, so every
    listed path can be fetched back as a logical name.

    Endpoints are async and do their file reads on the event loop, so
    requests are effectively serialized. The processor and its caches are
    not thread-safe.
    """
    app = FastAPI(title="GLSL Include Preview", version="0.1.0")
    app.state.processor = processor
    app.state.shader_root = Path(shader_root) if shader_root else source_root(processor)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "glsl_version": app.state.processor.glsl_version}

    from .api import shaders, defines

    app.include_router(shaders.router, prefix="/api/shaders", tags=["shaders"])
    app.include_router(defines.router, prefix="/api/defines", tags=["defines"])

    return app
