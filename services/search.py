"""
Search service for web, YouTube and image lookups.
Uses the Google Custom Search and YouTube Data APIs with a persistent cache.
"""
from typing import Any, Dict, List

import httpx

from config import Config
from models.api_models import WebResult, VideoResult, ImageResult
from services.exceptions import ConfigurationError, EnrichmentSourceError
from utils.cache import get_search_cache
from utils.constants import SearchType
from utils.http_client import HTTPClientManager
from utils.logger import app_logger


class SearchService:
    """Service for performing searches that feed prompt enrichment."""

    async def search_web(self, query: str) -> List[WebResult]:
        """Google Custom Search web results."""
        self._require_google_credentials()
        raw = await self._cached_lookup(SearchType.WEB, query, self._fetch_web)
        return [WebResult(**item) for item in raw]

    async def search_youtube(self, query: str) -> List[VideoResult]:
        """YouTube Data API video results."""
        if not Config.YOUTUBE_API_KEY:
            raise ConfigurationError("YouTube API key not found")
        raw = await self._cached_lookup(SearchType.YOUTUBE, query, self._fetch_youtube)
        return [VideoResult(**item) for item in raw]

    async def search_images(self, query: str) -> List[ImageResult]:
        """Google Custom Search image results."""
        self._require_google_credentials()
        raw = await self._cached_lookup(SearchType.IMAGES, query, self._fetch_images)
        return [ImageResult(**item) for item in raw]

    async def search(self, search_type: str, query: str) -> List[Any]:
        """Dispatch by search type name."""
        if search_type == SearchType.WEB:
            return await self.search_web(query)
        elif search_type == SearchType.YOUTUBE:
            return await self.search_youtube(query)
        elif search_type == SearchType.IMAGES:
            return await self.search_images(query)
        raise ValueError(f"Unknown search type: {search_type}")

    @staticmethod
    def _require_google_credentials() -> None:
        if not Config.has_google_search():
            raise ConfigurationError("Google API credentials not found")

    async def _cached_lookup(self, search_type: str, query: str, fetch) -> List[dict]:
        """Return cached results or fetch and cache fresh ones."""
        cache = get_search_cache()
        cached = cache.get(search_type, query)
        if cached is not None:
            return cached

        results = await fetch(query)
        cache.set(search_type, query, results)
        return results

    async def _get_json(self, source: str, url: str, params: Dict[str, Any]) -> dict:
        """GET a search endpoint and decode the JSON body."""
        client = HTTPClientManager.get_search_client()

        try:
            response = await client.get(url, params=params)
        except httpx.TimeoutException as e:
            app_logger.error(f"{source} search timed out: {str(e)}")
            raise EnrichmentSourceError(source, "search timed out") from e
        except httpx.RequestError as e:
            app_logger.error(f"{source} search request failed: {str(e)}")
            raise EnrichmentSourceError(source, f"request failed: {str(e)}") from e

        if response.status_code != 200:
            raise EnrichmentSourceError(source, f"{response.status_code} {response.reason_phrase}")

        try:
            data = response.json()
        except ValueError as e:
            app_logger.error(f"{source} search returned a non-JSON body")
            raise EnrichmentSourceError(source, "response body is not valid JSON") from e

        if not isinstance(data, dict):
            raise EnrichmentSourceError(source, "response body is not a JSON object")
        return data

    async def _fetch_web(self, query: str) -> List[dict]:
        data = await self._get_json("Google Search", Config.GOOGLE_SEARCH_URL, {
            "key": Config.GOOGLE_API_KEY,
            "cx": Config.GOOGLE_SEARCH_ENGINE_ID,
            "q": query,
            "num": Config.SEARCH_RESULTS_COUNT,
        })
        return [
            {
                "title": item.get("title", ""),
                "link": item.get("link", ""),
                "snippet": item.get("snippet", ""),
            }
            for item in data.get("items") or []
        ]

    async def _fetch_images(self, query: str) -> List[dict]:
        data = await self._get_json("Google Images", Config.GOOGLE_SEARCH_URL, {
            "key": Config.GOOGLE_API_KEY,
            "cx": Config.GOOGLE_SEARCH_ENGINE_ID,
            "q": query,
            "num": Config.SEARCH_RESULTS_COUNT,
            "searchType": "image",
        })
        return [
            {
                "title": item.get("title", ""),
                "link": item.get("link", ""),
                "display_link": item.get("displayLink", ""),
            }
            for item in data.get("items") or []
        ]

    async def _fetch_youtube(self, query: str) -> List[dict]:
        data = await self._get_json("YouTube", Config.YOUTUBE_SEARCH_URL, {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": Config.SEARCH_RESULTS_COUNT,
            "key": Config.YOUTUBE_API_KEY,
        })

        results = []
        for item in data.get("items") or []:
            video_id = (item.get("id") or {}).get("videoId")
            if not video_id:
                continue
            snippet = item.get("snippet") or {}
            thumbnail = ((snippet.get("thumbnails") or {}).get("medium") or {}).get("url")
            results.append({
                "id": video_id,
                "title": snippet.get("title", ""),
                "description": snippet.get("description", ""),
                "thumbnail": thumbnail,
                "url": f"https://www.youtube.com/watch?v={video_id}",
            })
        return results
