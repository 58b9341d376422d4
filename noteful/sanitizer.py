"""
Noteful API - Output Sanitizer
==============================

What:  Neutralizes markup in user-supplied text before it leaves the API.
How:   Angle brackets become `&lt;` / `&gt;`, so `<script>` renders as text.
       Quotes and ampersands are left as stored, which keeps the transform
       idempotent: an already-escaped value has no `<` or `>` left to replace.
       `html.escape(quote=False)` is not used: it also escapes `&`, so a
       second pass would turn `&lt;` into `&amp;lt;`.
Who:   Called by the response schemas for `folder_name`, `note_name` and
       `content`.

Example:
    >>> sanitize_text('Very naughty <script>alert("xss");</script>')
    'Very naughty &lt;script&gt;alert("xss");&lt;/script&gt;'
"""

from typing import Optional

_ESCAPE_TABLE = str.maketrans({
    "<": "&lt;",
    ">": "&gt;",
})


def sanitize_text(value: Optional[str]) -> Optional[str]:
    """Escape angle brackets in `value`; None passes through unchanged."""
    if value is None:
        return None
    return value.translate(_ESCAPE_TABLE)
