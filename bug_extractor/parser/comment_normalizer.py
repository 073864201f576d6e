"""
Comment Normalizer
==================
Removes embedded HTML comment markup (<!-- ... -->) from an issue comment.

The bug template ships its filling instructions inside HTML comments; they
are not part of what the author wrote and must not reach the section parser.
"""
import re

# Non-greedy, may span lines.
_COMMENT_MARKUP = re.compile(r"<!--.*?-->", re.DOTALL)


def strip_comment_markup(text: str) -> str:
    """Return `text` with every <!-- ... --> block removed. Never raises."""
    if not text:
        return ""
    return _COMMENT_MARKUP.sub("", text)
