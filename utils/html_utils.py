"""HTML helpers for rendering problem and feedback text."""
from __future__ import annotations

import html
import re

LINE_BREAK = "<br>"

_NEWLINE = re.compile(r"\r\n|\r|\n")


def escape_html(text: str) -> str:
    """Escape &, < and > (quotes are left alone, output goes into element bodies)."""
    return html.escape(text, quote=False)


def newlines_to_breaks(text: str) -> str:
    """Replace every newline with one <br>; a blank line keeps both breaks."""
    return _NEWLINE.sub(LINE_BREAK, text)


def escape_text_block(text: str) -> str:
    return newlines_to_breaks(escape_html(text))
