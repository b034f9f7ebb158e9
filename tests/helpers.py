from utils.constants import EnrichmentHeaders, FALLBACK_RESPONSES

BLOCK_ORDER = [
    EnrichmentHeaders.WEB,
    EnrichmentHeaders.YOUTUBE,
    EnrichmentHeaders.IMAGES,
    EnrichmentHeaders.FILES,
]


def assert_blocks_in_order(prompt, *headers):
    """Assert that each header appears exactly once and in the canonical order."""
    positions = []
    for header in headers:
        assert prompt.count(header) == 1, f"Expected exactly one '{header}' block in prompt:\n{prompt}"
        positions.append(prompt.index(header))

    expected = sorted(headers, key=BLOCK_ORDER.index)
    actual = [h for _, h in sorted(zip(positions, headers))]
    assert actual == expected, f"Blocks out of order: {actual} (expected {expected})"


def assert_no_blocks(prompt, *headers):
    """Assert that none of the given headers appears in the prompt."""
    for header in headers:
        assert header not in prompt, f"Unexpected '{header}' block in prompt:\n{prompt}"


def assert_is_fallback(text):
    """Assert the text is one of the canned fallback messages."""
    assert text in FALLBACK_RESPONSES, f"Not a fallback response: {text!r}"
