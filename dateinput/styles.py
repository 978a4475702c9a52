# dateinput/styles.py
import math
import re
from typing import Any, Optional

from .errors import ValidationError

_CSS_KEYWORDS = ("auto", "inherit", "initial", "fit-content", "min-content", "max-content")
_CSS_UNIT_RE = re.compile(
    r"^((\.\d+)|(\d+(\.\d+)?))(%|in|cm|mm|ch|em|ex|rem|pt|pc|px|vh|vw|vmin|vmax)$"
)
_CSS_NUMBER_RE = re.compile(r"^((\.\d+)|(\d+(\.\d+)?))$")


def validate_css_unit(value: Any, arg_name: str = "width") -> Optional[str]:
    """
    Return a CSS size string for ``value``.

    Numbers (and numeric strings) are taken as pixels. Strings must be a CSS
    length or percentage, one of the sizing keywords or a ``calc()`` expression.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(arg_name, value, "invalid_css_unit")
    if isinstance(value, int):
        return f"{value}px"
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError(
                arg_name, value, "invalid_css_unit",
                f"{value!r} is not a finite CSS length",
            )
        # Fixed-point, never exponent notation, which CSS does not accept.
        text = f"{value:f}".rstrip("0").rstrip(".")
        return f"{text}px"
    if isinstance(value, str):
        text = value.strip()
        if _CSS_NUMBER_RE.match(text):
            return f"{text}px"
        if text in _CSS_KEYWORDS or _CSS_UNIT_RE.match(text):
            return text
        if text.startswith("calc(") and text.endswith(")"):
            return text
    raise ValidationError(
        arg_name, value, "invalid_css_unit",
        f"{value!r} is not a valid CSS unit (e.g., \"100%\", \"400px\", \"auto\")",
    )
