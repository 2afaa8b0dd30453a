"""Formatting of printed word sets"""

from typing import Iterable


def format_words(words: Iterable[str], style: str = "legacy") -> str:
    """Render a word set on one line, in sorted order.

    legacy: every word prefixed by a comma, e.g. ``[,cat,dog ]``
    clean:  ``[cat, dog]``
    """
    ordered = sorted(words)
    if style == "legacy":
        return "[" + "".join("," + word for word in ordered) + " ]"
    if style == "clean":
        return "[" + ", ".join(ordered) + "]"
    raise ValueError(style)
