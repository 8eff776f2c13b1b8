"""Anchor generation for markdown headings."""

from __future__ import annotations

import re


def word_class(preserve_unicode: bool) -> str:
    """Return the regex character-class body for word characters.

    Only the word class is narrowed to ASCII; whitespace is always matched
    with Unicode semantics, so non-breaking spaces still separate words.
    """
    return r"\w" if preserve_unicode else "A-Za-z0-9_"


def generate_anchor(text: str, preserve_unicode: bool = False) -> str:
    """Generate a URL-fragment anchor from a Markdown heading text.

    Lowercases the text, removes every character that is not a word character,
    whitespace, or hyphen, collapses whitespace to single hyphens, collapses
    repeated hyphens, and trims hyphens from both ends. Identical texts always
    produce identical anchors; distinct texts may collide (``"Setup!"`` and
    ``"Setup?"`` both give ``"setup"``) and are left as they are.

    Args:
        text: Heading text, as scanned from the document.
        preserve_unicode: When True, Unicode letters and digits count as word
            characters. Otherwise only ASCII letters, digits, and underscores do.

    Returns:
        str: Hyphen-separated anchor. May be empty when the text holds no word
            characters.

    Examples:
        generate_anchor("Hello World")  # "hello-world"
        generate_anchor("What's New?")  # "whats-new"
        generate_anchor("Café")  # "caf"
        generate_anchor("Café", preserve_unicode=True)  # "café"
    """
    word = word_class(preserve_unicode)

    anchor = text.lower()
    anchor = re.sub(rf"[^{word}\s-]", "", anchor)
    anchor = re.sub(r"\s+", "-", anchor)
    anchor = re.sub(r"-+", "-", anchor)
    return anchor.strip("-")
