"""
Read access to uploaded attachments and their analysis metadata.
"""
from typing import Optional, Protocol

from models.chat_models import Attachment


class AttachmentStore(Protocol):
    """Lookup interface the enricher depends on. Implementations own persistence."""

    async def get_attachment(self, attachment_id: str, user_id: Optional[str]) -> Optional[Attachment]:
        ...


class InMemoryAttachmentStore:
    """Process-local attachment registry keyed by (user_id, attachment_id)."""

    def __init__(self):
        self._attachments: dict[tuple[Optional[str], str], Attachment] = {}

    def add(self, attachment: Attachment, user_id: Optional[str] = None) -> None:
        self._attachments[(user_id, attachment.id)] = attachment

    def update_metadata(self, attachment_id: str, user_id: Optional[str] = None, **metadata) -> None:
        """Merge analysis fields into an attachment's metadata."""
        attachment = self._attachments[(user_id, attachment_id)]
        attachment.metadata.update(metadata)

    async def get_attachment(self, attachment_id: str, user_id: Optional[str]) -> Optional[Attachment]:
        return self._attachments.get((user_id, attachment_id))
