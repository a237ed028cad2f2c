"""
Parsers for raw text typed into numeric fields.
"""

from __future__ import annotations

from typing import Optional, Union

Number = Union[int, float]

_GROUP_SEPARATORS = (" ", "\u00a0", "\u202f", "_")


def parse_number(text: str) -> Optional[Number]:
    """
    Parse a numeric field.

    Empty text → ``None`` (the field is cleared).  Accepts ``,`` as the
    decimal separator and spaces as thousands separators.  Whole numbers
    come back as ``int``.  Raises ``ValueError`` on anything else.
    """
    cleaned = (text or "").strip()
    for sep in _GROUP_SEPARATORS:
        cleaned = cleaned.replace(sep, "")
    if not cleaned:
        return None

    cleaned = cleaned.replace(",", ".")
    value = float(cleaned)
    if value != value or value in (float("inf"), float("-inf")):
        raise ValueError(f"Not a finite number: {text!r}")
    if value.is_integer() and "." not in cleaned and "e" not in cleaned.lower():
        return int(value)
    return value
