"""
Route handlers for direct search requests.
"""
from typing import Literal

from fastapi import APIRouter, HTTPException, Request, status

from models.api_models import SearchRequest
from services.exceptions import ConfigurationError, EnrichmentSourceError
from utils.logger import app_logger

router = APIRouter()


@router.post("/search/{search_type}")
async def search(search_type: Literal["web", "youtube", "images"], search_request: SearchRequest, request: Request):
    """Run one search and return the (possibly cached) results."""
    search_service = request.app.state.enricher.search_service
    try:
        results = await search_service.search(search_type, search_request.query)
        return {"results": [r.model_dump() for r in results]}
    except ConfigurationError as e:
        app_logger.error(f"{search_type} search unavailable: {str(e)}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except EnrichmentSourceError as e:
        app_logger.error(f"{search_type} search failed: {str(e)}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
