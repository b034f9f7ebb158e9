import pytest
import httpx

from config import Config
from models.chat_models import Attachment
from services.prompt_enricher import PromptEnricher
from services.search import SearchService
from tests.fixtures.responses import MOCK_GOOGLE_SEARCH_RESPONSE, MOCK_YOUTUBE_RESPONSE
from tests.helpers import assert_blocks_in_order, assert_no_blocks
from utils.constants import EnrichmentHeaders


@pytest.fixture(autouse=True)
def set_api_keys_for_search_flow(monkeypatch):
    """Set search credentials for search integration tests."""
    monkeypatch.setattr(Config, "GOOGLE_API_KEY", "google-key")
    monkeypatch.setattr(Config, "GOOGLE_SEARCH_ENGINE_ID", "engine-id")
    monkeypatch.setattr(Config, "YOUTUBE_API_KEY", "youtube-key")


@pytest.fixture
def mock_external_search_api(monkeypatch):
    """Mocks the HTTP client for Google Custom Search and YouTube calls."""
    class MockSearchClient:
        def __init__(self):
            self.requests = []

        async def get(self, url, params):
            self.requests.append((url, params))
            if url == Config.YOUTUBE_SEARCH_URL:
                return httpx.Response(200, json=MOCK_YOUTUBE_RESPONSE)
            if url == Config.GOOGLE_SEARCH_URL:
                return httpx.Response(200, json=MOCK_GOOGLE_SEARCH_RESPONSE)
            return httpx.Response(404)

    client = MockSearchClient()
    monkeypatch.setattr("utils.http_client.HTTPClientManager.get_search_client", lambda: client)
    return client


@pytest.fixture
def live_search_app(configured_app, attachment_store, search_cache):
    """The configured app with a real SearchService behind the enricher."""
    configured_app.app.state.enricher = PromptEnricher(
        search_service=SearchService(),
        attachment_store=attachment_store,
    )
    return configured_app


def test_chat_full_flow_with_web_search(live_search_app, provider_clients, mock_external_search_api):
    """End-to-end: web search results are fetched, injected into the prompt and returned to the client."""
    response = live_search_app.post("/chat", json={
        "model": "Gemini 2.5 Pro",
        "prompt": "Últimas noticias de Artemis II",
        "include_web_search": True,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["response"] == "gemini response"
    assert body["search_results"]["web"][0]["title"] == "Artemis II crew prepares for lunar flyby"
    assert body["search_results"]["youtube"] is None

    sent = provider_clients["gemini"].calls[0]["prompt"]
    assert provider_clients["gemini"].calls[0]["model_id"] == "gemini-2.5-pro"
    assert_blocks_in_order(sent, EnrichmentHeaders.WEB)
    assert_no_blocks(sent, EnrichmentHeaders.YOUTUBE, EnrichmentHeaders.IMAGES, EnrichmentHeaders.FILES)
    assert "- Artemis II crew prepares for lunar flyby: The crew of Artemis II is in the final phase of training." in sent


def test_chat_flow_repeated_search_is_served_from_cache(live_search_app, mock_external_search_api):
    payload = {"model": "Gemini 2.5 Flash", "prompt": "Artemis II", "include_web_search": True}

    live_search_app.post("/chat", json=payload)
    live_search_app.post("/chat", json=payload)

    assert len(mock_external_search_api.requests) == 1


def test_chat_flow_with_every_source(live_search_app, provider_clients, attachment_store, mock_external_search_api):
    """Web, YouTube, image and attachment context should all land in the prompt in order."""
    attachment_store.add(
        Attachment("doc-1", "mision.pdf", "application/pdf", {"analysisStatus": "completed", "aiAnalysis": "Plan de vuelo de Artemis II."}),
        user_id="user-1",
    )

    response = live_search_app.post("/chat", json={
        "model": "Mixtral 8x7B",
        "prompt": "Resume la misión",
        "user_id": "user-1",
        "include_web_search": True,
        "include_youtube_search": True,
        "include_image_search": True,
        "attachment_ids": ["doc-1"],
    })

    assert response.status_code == 200
    sent = provider_clients["mistral"].calls[0]["prompt"]
    assert_blocks_in_order(
        sent,
        EnrichmentHeaders.WEB,
        EnrichmentHeaders.YOUTUBE,
        EnrichmentHeaders.IMAGES,
        EnrichmentHeaders.FILES,
    )
    assert "(https://www.youtube.com/watch?v=abc123)" in sent
    assert "(www.nasa.gov)" in sent
    assert "Plan de vuelo de Artemis II." in sent


def test_chat_flow_search_outage_still_answers(live_search_app, provider_clients, monkeypatch):
    """A failing search API must not block the answer; the block is just omitted."""
    class BrokenSearchClient:
        async def get(self, url, params):
            raise httpx.ConnectError("connection refused")

    monkeypatch.setattr("utils.http_client.HTTPClientManager.get_search_client", lambda: BrokenSearchClient())

    response = live_search_app.post("/chat", json={
        "model": "Gemini 2.5 Flash",
        "prompt": "Artemis II",
        "include_web_search": True,
        "include_youtube_search": True,
    })

    assert response.status_code == 200
    assert response.json()["response"] == "gemini response"
    assert_no_blocks(provider_clients["gemini"].calls[0]["prompt"], EnrichmentHeaders.WEB, EnrichmentHeaders.YOUTUBE)


def test_chat_flow_without_search_keys_skips_search(live_search_app, provider_clients, mock_external_search_api, monkeypatch):
    monkeypatch.setattr(Config, "GOOGLE_API_KEY", "")

    response = live_search_app.post("/chat", json={
        "model": "Gemini 2.5 Flash",
        "prompt": "Artemis II",
        "include_web_search": True,
    })

    assert response.status_code == 200
    assert mock_external_search_api.requests == []
    assert_no_blocks(provider_clients["gemini"].calls[0]["prompt"], EnrichmentHeaders.WEB)
