"""
Models package exports.
"""
from models.api_models import (
    ChatRequest,
    ChatResponse,
    SearchRequest,
    SearchResults,
    TitleRequest,
    WebResult,
    VideoResult,
    ImageResult,
)
from models.chat_models import ProviderFamily, ModelRoute, Attachment, EnrichmentResult, AIResult

__all__ = [
    'ChatRequest',
    'ChatResponse',
    'SearchRequest',
    'SearchResults',
    'TitleRequest',
    'WebResult',
    'VideoResult',
    'ImageResult',
    'ProviderFamily',
    'ModelRoute',
    'Attachment',
    'EnrichmentResult',
    'AIResult',
]
