"""Cleanup of provider output before it is accepted as an answer."""

from __future__ import annotations

import re

# Reasoning spans leaked by some models; the second form shows up when a
# provider rewrites the closing tag.
_REASONING_SPANS = (
    re.compile(r"<think>.*?</think>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<think>.*?</redacted_reasoning>", re.IGNORECASE | re.DOTALL),
)
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def strip_reasoning(text: str) -> str:
    """Remove every reasoning span, repeating until none is left.

    A single pass can leave a new span behind when spans are nested or
    interleaved (``<thi<think>x</think>nk>...</think>``), so keep going
    until the text stops changing.
    """
    previous = None
    while previous != text:
        previous = text
        for pattern in _REASONING_SPANS:
            text = pattern.sub("", text)
    return text


def sanitize(raw_text: str | None) -> str:
    """Return the user-facing part of a provider reply.

    Missing or empty input yields ``""``. An empty result means the provider
    call produced nothing usable.
    """
    if not raw_text:
        return ""
    text = strip_reasoning(raw_text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()
