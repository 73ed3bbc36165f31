"""
Render problem statements and feedback that mix prose with LaTeX.

Handles:
1. Pure LaTeX without delimiters, rendered as math if it contains a command
2. Display math: $$...$$ or \\[...\\]
3. Inline math: $...$ or \\(...\\)
4. Plain text, escaped with newlines turned into <br>

A formula the typesetter rejects is shown as escaped LaTeX in <code>; the rest
of the text still renders.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

from core.logger import logger
from services.typesetting.latex_to_mathml import LatexToMathML
from utils.html_utils import escape_html, escape_text_block


SegmentKind = Literal["text", "math"]

_LATEX_COMMAND = re.compile(r"\\[a-zA-Z]+")
_NEXT_DELIMITER = re.compile(r"\$|\\\(|\\\[")

# Tried in order at every cursor position; $$ must win over $
_MATH_PATTERNS: Tuple[Tuple[re.Pattern, bool], ...] = (
    (re.compile(r"\$\$(.*?)\$\$", re.DOTALL), True),
    (re.compile(r"\\\[(.*?)\\\]", re.DOTALL), True),
    (re.compile(r"\$(.*?)\$", re.DOTALL), False),
    (re.compile(r"\\\((.*?)\\\)", re.DOTALL), False),
)


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    content: str
    display: bool = False


def is_whole_math(text: str) -> bool:
    """LaTeX commands present and no delimiters: the whole string is a formula."""
    if not _LATEX_COMMAND.search(text):
        return False
    return "$" not in text and "\\(" not in text and "\\[" not in text


def split_math_text(text: str, display: bool = False) -> List[Segment]:
    """Split text into alternating literal and math segments."""
    if not text:
        return []
    if is_whole_math(text):
        return [Segment("math", text, display)]

    segments: List[Segment] = []
    pos = 0
    end = len(text)
    while pos < end:
        for pattern, display_mode in _MATH_PATTERNS:
            match = pattern.match(text, pos)
            if match:
                segments.append(Segment("math", match.group(1), display_mode))
                pos = match.end()
                break
        else:
            # An unterminated delimiter at the cursor is literal text
            nxt = _NEXT_DELIMITER.search(text, pos)
            if nxt and nxt.start() == pos:
                nxt = _NEXT_DELIMITER.search(text, pos + 1)
            stop = nxt.start() if nxt else end
            segments.append(Segment("text", text[pos:stop]))
            pos = stop
    return _merge_text(segments)


def _merge_text(segments: List[Segment]) -> List[Segment]:
    merged: List[Segment] = []
    for seg in segments:
        if seg.kind == "text" and merged and merged[-1].kind == "text":
            merged[-1] = Segment("text", merged[-1].content + seg.content)
        else:
            merged.append(seg)
    return merged


class MathTextRenderer:
    """Turn mixed prose/LaTeX into HTML safe for display."""

    def __init__(self, typesetter: Optional[LatexToMathML] = None) -> None:
        self.typesetter = typesetter or LatexToMathML()

    def segment(self, text: str, display: bool = False) -> List[Segment]:
        return split_math_text(text, display)

    def render(self, text: str, display: bool = False) -> str:
        parts = []
        for seg in self.segment(text, display):
            if seg.kind == "math":
                parts.append(self._typeset(seg.content, seg.display))
            else:
                parts.append(escape_text_block(seg.content))
        return "".join(parts)

    def _typeset(self, latex: str, display: bool) -> str:
        try:
            return self.typesetter.render(latex, display=display)
        except Exception as exc:
            logger.warning("Typesetting failed, showing raw LaTeX: %s", exc)
            return f'<code class="math-fallback">{escape_html(latex)}</code>'


_default_renderer: Optional[MathTextRenderer] = None


def render_math_text(text: str, display: bool = False) -> str:
    """Render with a shared renderer (instances hold no mutable state)."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = MathTextRenderer()
    return _default_renderer.render(text, display)
