from __future__ import annotations

from typing import List, Optional, Tuple


PLACEHOLDER_ICON = "help-circle"

# First keyword contained in the hint wins, so more specific words come first.
ICON_KEYWORDS: List[Tuple[Tuple[str, ...], str]] = [
    # Math
    (("apple",), "apple"),
    (("fish",), "fish"),
    (("star",), "star"),
    (("cookie",), "cookie"),
    (("rocket",), "rocket"),
    # English
    (("cat",), "cat"),
    (("dog",), "dog"),
    (("book",), "book"),
    (("pencil",), "pencil"),
    (("alphabet", "letter"), "type"),
    # Science
    (("bird",), "bird"),
    (("cloud", "rain"), "cloud"),
    (("sun",), "sun"),
    (("leaf", "plant"), "leaf"),
    (("atom", "science"), "atom"),
    (("cow",), "cow"),
]


def resolve_icon(visual_hint: Optional[str]) -> str:
    hint = (visual_hint or "").lower()
    if not hint:
        return PLACEHOLDER_ICON
    for keywords, icon in ICON_KEYWORDS:
        if any(word in hint for word in keywords):
            return icon
    return PLACEHOLDER_ICON
