"""
Canned assistant replies used when the provider call cannot complete.
"""
import random

from utils.constants import FALLBACK_RESPONSES


def pick_fallback_response() -> str:
    """Pick one fallback message uniformly at random. Calls are independent."""
    return random.choice(FALLBACK_RESPONSES)
