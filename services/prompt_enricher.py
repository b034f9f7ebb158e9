"""
Prompt enrichment.
Builds the single prompt string sent to a provider: persona, remembered user
context, the raw message, then search and attachment blocks in fixed order.
"""
from typing import List, Optional

from config import Config
from models.api_models import ChatRequest, SearchResults, WebResult, VideoResult, ImageResult
from models.chat_models import Attachment, EnrichmentResult
from services.attachments import AttachmentStore
from services.search import SearchService
from utils.constants import (
    PERSONA_PREAMBLE,
    MEMORY_CONTEXT_TEMPLATE,
    AnalysisStatus,
    AttachmentTemplates,
    EnrichmentHeaders,
    SearchType,
)
from utils.logger import app_logger


class PromptEnricher:
    """Service for composing enriched prompts."""

    def __init__(
        self,
        search_service: Optional[SearchService] = None,
        attachment_store: Optional[AttachmentStore] = None,
    ):
        self.search_service = search_service or SearchService()
        self.attachment_store = attachment_store

    @staticmethod
    def format_persona(memory_context: Optional[str] = None) -> str:
        """Persona preamble, with the memory sentence when there is something to remember."""
        memory = (memory_context or "").strip()
        if not memory:
            return PERSONA_PREAMBLE
        return f"{PERSONA_PREAMBLE}\n{MEMORY_CONTEXT_TEMPLATE.format(memory_context=memory)}"

    @staticmethod
    def _block(header: str, lines: List[str]) -> str:
        if not lines:
            return ""
        return f"\n\n{header}\n" + "\n".join(lines)

    @staticmethod
    def format_web_block(results: Optional[List[WebResult]], limit: int = Config.ENRICHMENT_MAX_RESULTS) -> str:
        lines = [f"- {r.title}: {r.snippet}" for r in (results or [])[:limit]]
        return PromptEnricher._block(EnrichmentHeaders.WEB, lines)

    @staticmethod
    def format_youtube_block(results: Optional[List[VideoResult]], limit: int = Config.ENRICHMENT_MAX_RESULTS) -> str:
        lines = [f"- {r.title}: {r.description} ({r.url})" for r in (results or [])[:limit]]
        return PromptEnricher._block(EnrichmentHeaders.YOUTUBE, lines)

    @staticmethod
    def format_images_block(results: Optional[List[ImageResult]], limit: int = Config.ENRICHMENT_MAX_RESULTS) -> str:
        lines = [f"- {r.title} ({r.display_link})" for r in (results or [])[:limit]]
        return PromptEnricher._block(EnrichmentHeaders.IMAGES, lines)

    @staticmethod
    def format_files_block(file_summaries: Optional[List[str]]) -> str:
        lines = [summary for summary in (file_summaries or []) if summary and summary.strip()]
        return PromptEnricher._block(EnrichmentHeaders.FILES, lines)

    @staticmethod
    def build_enriched_prompt(
        raw_prompt: str,
        memory_context: Optional[str] = None,
        search_results: Optional[SearchResults] = None,
        file_summaries: Optional[List[str]] = None,
    ) -> str:
        """
        Compose persona + memory + raw prompt + web + YouTube + image + file blocks.

        Absent or empty sources add nothing, so with no optional inputs the
        result is just the persona preamble followed by the raw prompt.
        Sanitization happens later, on this complete string.
        """
        prompt = f"{PromptEnricher.format_persona(memory_context)}\n\n{raw_prompt.strip()}"

        if search_results:
            prompt += PromptEnricher.format_web_block(search_results.web)
            prompt += PromptEnricher.format_youtube_block(search_results.youtube)
            prompt += PromptEnricher.format_images_block(search_results.images)

        prompt += PromptEnricher.format_files_block(file_summaries)
        return prompt

    @staticmethod
    def describe_attachment(attachment_id: str, attachment: Optional[Attachment]) -> str:
        """Map an attachment (or its absence) to the text shown to the model."""
        if attachment is None:
            return AttachmentTemplates.NOT_FOUND.format(attachment_id=attachment_id)

        name, mime_type = attachment.original_name, attachment.mime_type
        status = attachment.analysis_status

        if status == AnalysisStatus.COMPLETED and attachment.ai_analysis:
            return AttachmentTemplates.COMPLETED.format(
                name=name, mime_type=mime_type, analysis=attachment.ai_analysis.strip()
            )
        elif status == AnalysisStatus.PENDING:
            return AttachmentTemplates.PENDING.format(name=name, mime_type=mime_type)
        elif status == AnalysisStatus.ERROR:
            return AttachmentTemplates.ERROR.format(name=name, mime_type=mime_type)

        return AttachmentTemplates.UNKNOWN.format(name=name, mime_type=mime_type)

    async def _run_search(self, search_type: str, query: str) -> Optional[list]:
        """Run one search; any failure means no results for this source."""
        try:
            results = await self.search_service.search(search_type, query)
            app_logger.info(f"Enrichment: {search_type} search returned {len(results)} results")
            return results
        except Exception as e:
            app_logger.warning(f"Enrichment: {search_type} search skipped: {e}")
            return None

    async def _describe_attachments(self, attachment_ids: List[str], user_id: Optional[str]) -> List[str]:
        """Resolve attachment ids to descriptions, skipping lookups that fail."""
        if not attachment_ids:
            return []

        if self.attachment_store is None:
            app_logger.warning("Enrichment: attachments requested but no attachment store configured")
            return []

        descriptions = []
        for attachment_id in attachment_ids:
            try:
                attachment = await self.attachment_store.get_attachment(attachment_id, user_id)
            except Exception as e:
                app_logger.warning(f"Enrichment: attachment {attachment_id} skipped: {e}")
                continue
            descriptions.append(self.describe_attachment(attachment_id, attachment))
        return descriptions

    async def enrich(self, request: ChatRequest) -> EnrichmentResult:
        """
        Gather search results and attachment descriptions for a request, then build the prompt.

        Sources run one after another (web, YouTube, images, attachments).
        Results supplied on the request are used as-is instead of searching.
        """
        provided = request.search_results or SearchResults()
        query = request.prompt.strip()

        web = provided.web
        if web is None and request.include_web_search:
            web = await self._run_search(SearchType.WEB, query)

        youtube = provided.youtube
        if youtube is None and request.include_youtube_search:
            youtube = await self._run_search(SearchType.YOUTUBE, query)

        images = provided.images
        if images is None and request.include_image_search:
            images = await self._run_search(SearchType.IMAGES, query)

        search_results = SearchResults(web=web, youtube=youtube, images=images)

        file_summaries = await self._describe_attachments(request.attachment_ids, request.user_id)
        file_summaries.extend(request.file_summaries)

        prompt = self.build_enriched_prompt(
            raw_prompt=request.prompt,
            memory_context=request.memory_context,
            search_results=search_results,
            file_summaries=file_summaries,
        )

        return EnrichmentResult(prompt=prompt, search_results=search_results, file_summaries=file_summaries)
