"""
Route handlers for model listing operations.
"""
from fastapi import APIRouter

from services.model_mapper import ModelNameMapper

router = APIRouter()


@router.get("/models")
async def list_models():
    """List the display model names the UI can offer, grouped by provider."""
    return {
        "models": ModelNameMapper.available_models(),
        "default": ModelNameMapper.DEFAULT_DISPLAY_NAME,
    }
