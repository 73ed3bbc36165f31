"""
LaTeX → MathML typesetter for problem statements and feedback.

- Uses latex2mathml for the actual conversion
- Inline and display (block) modes
- Wraps output in a span whose class tells inline and display math apart
- Raises ValueError on conversion failure so callers can fall back per segment
"""

from __future__ import annotations
import re

from latex2mathml.converter import convert as latex2mathml_convert

from core.logger import logger


MATHML_NS = "http://www.w3.org/1998/Math/MathML"
INLINE_CLASS = "math-inline"
DISPLAY_CLASS = "math-display"


class LatexToMathML:
    """Convert LaTeX snippets to MathML markup."""

    def convert(self, latex: str, display: bool = False) -> str:
        mode = "block" if display else "inline"
        if not latex or not latex.strip():
            return f'<math xmlns="{MATHML_NS}" display="{mode}"></math>'

        # Problem text may wrap lines inside a formula
        latex_normalized = " ".join(latex.split())

        try:
            mathml = latex2mathml_convert(latex_normalized, display=mode)
        except Exception as exc:
            error_msg = f"{type(exc).__name__}: {exc}"
            logger.warning("LaTeX→MathML failed: %s | Input (first 200 chars): %s", error_msg, latex[:200])
            raise ValueError(f"LaTeX→MathML conversion failed: {error_msg}") from exc

        return self._ensure_namespace(mathml)

    def render(self, latex: str, display: bool = False) -> str:
        """Typeset latex and wrap it for display inside HTML."""
        mathml = self.convert(latex, display=display)
        css_class = DISPLAY_CLASS if display else INLINE_CLASS
        return f'<span class="{css_class}">{mathml}</span>'

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------
    def _ensure_namespace(self, mathml: str) -> str:
        """Ensure MathML output contains proper namespace."""
        if "<math" not in mathml:
            return f'<math xmlns="{MATHML_NS}">{mathml}</math>'

        if not re.search(r'<math[^>]*\sxmlns="', mathml):
            mathml = mathml.replace("<math", f'<math xmlns="{MATHML_NS}"', 1)
        return mathml
