from fastapi import APIRouter, Request
from pydantic import BaseModel
from typing import Optional

router = APIRouter()

class DefineValue(BaseModel):
    value: Optional[str] = None

@router.get("/")
async def list_defines(request: Request):
    return {"defines": request.app.state.processor.definitions.as_dict()}

@router.delete("/")
async def undef_all(request: Request):
    """Remove every macro definition"""
    request.app.state.processor.undef_all()
    return {"status": "success", "defines": {}}

@router.put("/{name}")
async def define(name: str, data: DefineValue, request: Request):
    processor = request.app.state.processor
    processor.define(name, data.value)
    return {"status": "success", "defines": processor.definitions.as_dict()}

@router.delete("/{name}")
async def undef(name: str, request: Request):
    processor = request.app.state.processor
    processor.undef(name)
    return {"status": "success", "defines": processor.definitions.as_dict()}
