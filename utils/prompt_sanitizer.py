"""
Prompt sanitizer applied to the fully assembled prompt before dispatch.
Rewrites suspicious substrings instead of rejecting input.
"""
import re

from utils.constants import Patterns


class PromptSanitizer:
    """Blunts markup and role-injection attempts in text sent to a provider.

    Role prefixes such as ``system:`` or ``assistant:`` are rewritten into
    harmless narration so the model reads them as something the user wrote.
    """

    ROLE_REWRITES = [
        (re.compile(Patterns.SYSTEM_ROLE, re.IGNORECASE), "user said: "),
        (re.compile(Patterns.ASSISTANT_ROLE, re.IGNORECASE), "user mentioned: "),
    ]

    @staticmethod
    def sanitize_text(text: str) -> str:
        """Remove HTML brackets, javascript: URIs and inline event handlers."""
        if not text:
            return ""
        cleaned = re.sub(Patterns.HTML_BRACKETS, '', text)
        cleaned = re.sub(Patterns.JAVASCRIPT_URI, '', cleaned, flags=re.IGNORECASE)
        cleaned = re.sub(Patterns.EVENT_HANDLER, '', cleaned, flags=re.IGNORECASE)
        return cleaned.strip()

    @classmethod
    def sanitize_prompt(cls, prompt: str) -> str:
        """Sanitize text and rewrite role prefixes. Never raises."""
        sanitized = cls.sanitize_text(prompt)
        for pattern, replacement in cls.ROLE_REWRITES:
            sanitized = pattern.sub(replacement, sanitized)
        return sanitized
