"""
Foodies Backend — Free-Text Sanitizer
=======================================

What:  Neutralizes markup in user-submitted text before it is persisted.
Why:   Meal instructions are rendered by the frontend; stored markup such as
       <script> or onerror= attributes must never become executable.
How:   markupsafe.escape() HTML-escapes &, <, >, " and '. Plain text and line
       breaks pass through unchanged, so instructions keep their layout.

The sanitizer never raises: None becomes "", anything else is str()'d first.

Output contract:
    The result is HTML, not plain text. "Mac & Cheese" is stored as
    "Mac &amp; Cheese" and returned that way in JSON. Clients insert
    `instructions` as markup (e.g. innerHTML); escaping it again on render
    would show the entities literally. Only instructions pass through here;
    title, summary and creator are stored as submitted.
"""

from typing import Optional

from markupsafe import escape


def sanitize_text(raw: Optional[str]) -> str:
    """Return `raw` with every HTML metacharacter escaped."""
    if raw is None:
        return ""
    return str(escape(str(raw)))
