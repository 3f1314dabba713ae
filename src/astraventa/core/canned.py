"""Keyword-matched replies for caller-facing surfaces.

When the router falls back, a chat surface can answer with something closer
to the guest's question than the generic fallback sentence.
"""

from __future__ import annotations

import re

from astraventa.core.prompts import FALLBACK_REPLY

# First match wins, so more specific topics come first.
CANNED_REPLIES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("vegan", "vegetarian", "gluten", "allergy", "allergies", "allergic", "halal", "dairy"),
        "We're happy to accommodate dietary needs! Our menu marks vegetarian, vegan and "
        "gluten-free dishes, and the chef can adapt most plates. Please mention any "
        "allergies when you book.",
    ),
    (
        ("reserve", "reservation", "book", "booking", "table"),
        "I can definitely assist with your reservation. What date and time works best "
        "for you, and how many guests?",
    ),
    (
        ("hour", "hours", "open", "opening", "close", "closing"),
        "Our opening hours are Monday-Sunday, 11am-11pm. Would you like to book a table?",
    ),
    (
        ("where", "location", "address", "parking", "directions"),
        "You'll find us in the heart of the old town, with parking nearby. Would you like "
        "directions or a table reservation?",
    ),
    (
        ("price", "prices", "cost", "expensive", "cheap"),
        "Pricing is available on request or in our menu. Can I recommend a few dishes "
        "for you?",
    ),
    (
        ("special", "specials", "menu", "dish", "dishes", "eat", "food", "pizza", "wine"),
        "Today's Chef Special is Grilled Salmon with Lemon Butter Sauce, served with roasted "
        "vegetables and your choice of side. Would you like to make a reservation?",
    ),
)

_WORD = re.compile(r"[a-z]+")


def canned_reply_for(text: str | None) -> str:
    """Pick a domain reply by keywords in the guest's last message."""
    words = set(_WORD.findall((text or "").lower()))
    for keywords, reply in CANNED_REPLIES:
        if words.intersection(keywords):
            return reply
    return FALLBACK_REPLY
