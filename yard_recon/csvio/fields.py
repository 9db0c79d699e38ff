from __future__ import annotations

import math
import re

"""Field-level normalization and numeric coercion helpers.

Numeric helpers always return a definite number: anything that cannot be read
falls back to zero. Parsing is prefix-based (``"80hrs"`` -> 80, ``"12.7"`` as an
integer -> 12), which is how the upstream exports have always been read, so the
metric outputs stay comparable.
"""

__all__ = [
    "normalize",
    "parse_dwell_hours",
    "parse_float_field",
    "parse_int_field",
]

# ASCII 数字のみ (全角・アラビア数字などは読まない)
_FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:Infinity|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)
_INT_PREFIX_RE = re.compile(r"([+-]?)(?:0[xX]([0-9a-fA-F]+)|(\d+))", re.ASCII)


def normalize(value: object) -> str:
    """Trim and upper-case a cell value; None/empty -> ''."""
    if value is None:
        return ""
    return str(value).strip().upper()


def parse_float_field(value: str | None, default: float = 0.0) -> float:
    """Parse the leading floating point number of ``value``.

    Leading whitespace is ignored and trailing garbage is dropped. Unparsable,
    NaN or zero results collapse to ``default``.
    """
    if value is None:
        return default
    m = _FLOAT_PREFIX_RE.match(str(value).lstrip())
    if m is None:
        return default
    parsed = float(m.group(0))
    if math.isnan(parsed) or parsed == 0:
        return default
    return parsed


def parse_int_field(value: str | None, default: int = 0) -> int:
    """Parse the leading integer of ``value`` (``"12.7"`` -> 12).

    Decimal by default; a ``0x`` / ``0X`` prefix switches to hexadecimal
    (``"0x1A"`` -> 26), the way UNITS cells have always been read.
    """
    if value is None:
        return default
    m = _INT_PREFIX_RE.match(str(value).lstrip())
    if m is None:
        return default
    sign, hex_digits, dec_digits = m.groups()
    parsed = int(hex_digits, 16) if hex_digits is not None else int(dec_digits)
    if sign == "-":
        parsed = -parsed
    return parsed or default


def parse_dwell_hours(value: str | None) -> float:
    """Parse a yard dwell cell such as ``"72 hrs"`` into hours.

    Only the first ``hrs`` is removed.
    """
    if value is None:
        return 0.0
    cleaned = str(value).lower().replace("hrs", "", 1).strip()
    return parse_float_field(cleaned)
