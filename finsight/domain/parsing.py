"""Pure functions for turning user-typed numbers into floats.

Calculator inputs come from free-text fields. Anything that is not a finite
number parses to 0.0, which the formulas treat as degenerate input and answer
with an all-zero result.
"""

import math


def parse_decimal(value: str | float | int | None) -> float:
    """Parse a numeric form value.

    Args:
        value: Raw text (e.g. "1,00,000", " 9.5 ") or an already numeric value.

    Returns:
        The parsed float, or 0.0 for empty, non-numeric, NaN or infinite input.
    """
    if value is None:
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = value.strip().replace(",", "").replace("_", "")
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0

    if not math.isfinite(number):
        return 0.0
    return number
