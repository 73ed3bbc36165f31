"""
Math-editor LaTeX → plain-text answer converter.

The grading backend already understands:
  - plain fractions: "3/4", "-2/5"
  - LaTeX fractions: "\\frac{3}{4}"
  - decimals: "0.75", ".5"
  - integers: "3", "-2"
  - letter answers: "a", "b"

The math editor produces LaTeX such as:
  \\dfrac{3}{4}             → \\frac{3}{4}
  5^{2}                     → 5^2
  \\sqrt{16}                → sqrt(16)
  \\log_{2}\\left(8\\right)   → log_2(8)
  \\ln\\left(x\\right)        → ln(x)
  \\cdot, \\times           → *

Brace groups are matched up to the first closing brace, so nested groups come
out partially converted (e.g. x^{n+1} → x^n+1). The backend's parser accepts
that token stream and previously graded answers depend on it.

Spacing commands and \\text are removed after the brace and sqrt passes, so one
sitting between a script marker or \\sqrt and its group leaves that group
unconverted: x^\\,{2} → x^{2}. Running the converter again would give x^2.
"""
from __future__ import annotations

import re
from typing import Callable, List, Tuple

_DFRAC = re.compile(r"\\dfrac")
_LEFT = re.compile(r"\\left\s*")
_RIGHT = re.compile(r"\\right\s*")
_CDOT = re.compile(r"\\cdot")
_TIMES = re.compile(r"\\times")
_SQRT = re.compile(r"\\sqrt\{([^}]+)\}")
_LN = re.compile(r"\\ln")
_LOG_BASE = re.compile(r"\\log_\{([^}]+)\}")
_LOG = re.compile(r"\\log")
_SUM_LIMITS = re.compile(r"\\sum_\{([^}]+)\}\^\{([^}]+)\}")
_SUM = re.compile(r"\\sum")
_SUPERSCRIPT_BRACES = re.compile(r"\^\{([^}]+)\}")
_NUMERIC_EXPONENT_PARENS = re.compile(r"\^\((\d+)\)")
_SUBSCRIPT_BRACES = re.compile(r"_\{([^}]+)\}")
_TEXT = re.compile(r"\\text\{([^}]*)\}")
_WHITESPACE = re.compile(r"\s+")


def is_plain(text: str) -> bool:
    """True when the text has no LaTeX constructs worth rewriting."""
    return "\\" not in text and "^{" not in text and "_{" not in text


def normalize_fraction_alias(text: str) -> str:
    return _DFRAC.sub(r"\\frac", text)


def strip_delimiter_sizing(text: str) -> str:
    text = _LEFT.sub("", text)
    return _RIGHT.sub("", text)


def convert_multiplication(text: str) -> str:
    text = _CDOT.sub("*", text)
    return _TIMES.sub("*", text)


def convert_sqrt(text: str) -> str:
    return _SQRT.sub(r"sqrt(\1)", text)


def convert_ln(text: str) -> str:
    return _LN.sub("ln", text)


def convert_log(text: str) -> str:
    # The subscripted form must go first, bare \log would eat its prefix
    text = _LOG_BASE.sub(r"log_\1", text)
    return _LOG.sub("log", text)


def convert_sum(text: str) -> str:
    text = _SUM_LIMITS.sub(r"sum_{\1}^{\2}", text)
    return _SUM.sub("sum", text)


def strip_superscript_braces(text: str) -> str:
    return _SUPERSCRIPT_BRACES.sub(r"^\1", text)


def strip_exponent_parens(text: str) -> str:
    return _NUMERIC_EXPONENT_PARENS.sub(r"^\1", text)


def strip_subscript_braces(text: str) -> str:
    return _SUBSCRIPT_BRACES.sub(r"_\1", text)


def strip_spacing_commands(text: str) -> str:
    text = text.replace("\\,", "")  # thin space
    text = text.replace("\\;", "")  # medium space
    text = text.replace("\\!", "")  # negative thin space
    return text.replace("\\ ", " ")


def unwrap_text(text: str) -> str:
    return _TEXT.sub(r"\1", text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


# Order matters: sum/log limits are rebuilt before the generic brace passes run
REWRITE_PASSES: Tuple[Tuple[str, Callable[[str], str]], ...] = (
    ("fraction_alias", normalize_fraction_alias),
    ("delimiter_sizing", strip_delimiter_sizing),
    ("multiplication", convert_multiplication),
    ("sqrt", convert_sqrt),
    ("ln", convert_ln),
    ("log", convert_log),
    ("sum", convert_sum),
    ("superscript_braces", strip_superscript_braces),
    ("exponent_parens", strip_exponent_parens),
    ("subscript_braces", strip_subscript_braces),
    ("spacing", strip_spacing_commands),
    ("text", unwrap_text),
    ("whitespace", collapse_whitespace),
)


def latex_to_plain(latex: str) -> str:
    """Convert math-editor LaTeX to the plain-text answer dialect."""
    text = latex.strip()
    if is_plain(text):
        return text

    for _, rewrite in REWRITE_PASSES:
        text = rewrite(text)
    return text


def trace_latex_to_plain(latex: str) -> List[Tuple[str, str]]:
    """Return (pass name, result) for every pass, for debugging answer mismatches."""
    text = latex.strip()
    steps: List[Tuple[str, str]] = [("trim", text)]
    if is_plain(text):
        return steps
    for name, rewrite in REWRITE_PASSES:
        text = rewrite(text)
        steps.append((name, text))
    return steps
