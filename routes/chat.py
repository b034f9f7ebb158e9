"""
Route handlers for chat operations.
Handles the /chat endpoint and conversation title generation.
"""
from fastapi import APIRouter, HTTPException, Request, status

from models.api_models import ChatRequest, ChatResponse, TitleRequest
from services.ai_router import AIRouter
from services.exceptions import ConfigurationError, ProviderError
from services.prompt_enricher import PromptEnricher
from utils.logger import app_logger

router = APIRouter()


def get_ai_router(request: Request) -> AIRouter:
    return request.app.state.ai_router


def get_enricher(request: Request) -> PromptEnricher:
    return request.app.state.enricher


@router.post("/chat", response_model=ChatResponse)
async def chat(chat_request: ChatRequest, request: Request):
    """
    Answer one user message with the selected model.
    Provider failures come back as a fallback assistant message, never as an HTTP error.
    """
    enrichment = await get_enricher(request).enrich(chat_request)
    app_logger.info(
        f"Chat request: model='{chat_request.model}', prompt_chars={len(chat_request.prompt)}, "
        f"enriched_chars={len(enrichment.prompt)}, "
        f"search_context={not enrichment.search_results.is_empty()}, files={len(enrichment.file_summaries)}"
    )

    result = await get_ai_router(request).run(
        chat_request.model,
        enrichment.prompt,
        user_id=chat_request.user_id,
        memory_context=chat_request.memory_context,
    )

    return ChatResponse(
        response=result.text,
        model=chat_request.model,
        search_results=enrichment.search_results,
        original_prompt=chat_request.prompt,
    )


@router.post("/chat/title")
async def generate_title(title_request: TitleRequest, request: Request):
    """Generate a short conversation title from the first message."""
    try:
        title = await get_ai_router(request).generate_title(title_request.message)
        return {"title": title}
    except ConfigurationError as e:
        app_logger.error(f"Title generation unavailable: {str(e)}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except ProviderError as e:
        app_logger.error(f"Title generation failed: {str(e)}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
