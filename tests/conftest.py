import pytest
from unittest.mock import AsyncMock


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for provider and search calls."""
    client = AsyncMock()
    client.post = AsyncMock()
    client.get = AsyncMock()
    return client


@pytest.fixture
def provider_clients():
    """One tracking fake per provider family."""
    from tests.fixtures.mock_clients import FlexibleProviderClient
    return {
        "gemini": FlexibleProviderClient("gemini"),
        "mistral": FlexibleProviderClient("mistral"),
        "openrouter": FlexibleProviderClient("openrouter"),
    }


@pytest.fixture
def ai_router(provider_clients):
    """AIRouter wired to the tracking fakes."""
    from services.ai_router import AIRouter
    return AIRouter(
        primary=provider_clients["gemini"],
        secondary=provider_clients["mistral"],
        tertiary=provider_clients["openrouter"],
    )


@pytest.fixture
def search_cache(tmp_path, monkeypatch):
    """Fresh SQLite search cache in a temp dir, installed as the global instance."""
    from utils.cache import SearchCache
    cache = SearchCache(max_size=50, db_path=str(tmp_path / "search_cache.db"))
    monkeypatch.setattr("utils.cache._search_cache", cache)
    return cache


@pytest.fixture
def mock_search_service():
    """SearchService stand-in with every lookup mocked."""
    service = AsyncMock()
    service.search = AsyncMock(return_value=[])
    return service


@pytest.fixture
def attachment_store():
    from services.attachments import InMemoryAttachmentStore
    return InMemoryAttachmentStore()


@pytest.fixture
def enricher(mock_search_service, attachment_store):
    from services.prompt_enricher import PromptEnricher
    return PromptEnricher(search_service=mock_search_service, attachment_store=attachment_store)


@pytest.fixture
def chat_request():
    """Standard ChatRequest for testing."""
    from models.api_models import ChatRequest
    return ChatRequest(
        model="Gemini 2.5 Flash",
        prompt="¿Qué es la fotosíntesis?",
        user_id="user-1",
    )


@pytest.fixture
def configured_app(ai_router, enricher, attachment_store):
    """App with routers registered and the router/enricher replaced by test doubles."""
    from fastapi import FastAPI
    from fastapi.exceptions import RequestValidationError
    from fastapi.testclient import TestClient
    from main import validation_exception_handler
    from routes import chat, models_route, search

    app = FastAPI()
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(models_route.router)
    app.include_router(chat.router)
    app.include_router(search.router)

    app.state.ai_router = ai_router
    app.state.enricher = enricher
    app.state.attachment_store = attachment_store

    with TestClient(app) as client:
        yield client
