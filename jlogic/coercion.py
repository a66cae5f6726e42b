"""
coercion.py - Dynamic value coercion and comparison

Every operator agrees on one loosely-typed contract:

    truthy(v)            : JSON truthiness (plus the serialized falsy texts)
    as_double(v)         : numeric view of a value, never raises
    compare(a, b)        : loose ordering across numbers, numeric strings,
                           strings and booleans
    compare_strict(a, b) : type-discriminating equality ordering

Values are the plain JSON-shaped Python types: None, bool, int/float, str,
list and dict. bool is never a number here even though it subclasses int.
"""

import math
import re
from typing import Any

from .tokenize import unquote

# Texts treated as falsy so that values which went through a text round-trip
# keep their truthiness.
FALSY_TEXTS = frozenset({"false", "null", "[]"})

# Returned by compare_strict for pairs that can never be strictly equal.
NOT_EQUAL = -1

# Decimal number text accepted by as_double.
_DECIMAL_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def truthy(v: Any) -> bool:
    if v is None:
        return False
    if isinstance(v, bool):
        return v
    if is_number(v):
        return v != 0
    if isinstance(v, str):
        return v != "" and v not in FALSY_TEXTS
    if isinstance(v, (list, tuple, dict)):
        return len(v) > 0
    return True


def as_double(v: Any) -> float:
    """
    Numeric view of a value: numbers as-is, numeric strings parsed, else 0.0.

    Only plain decimal text parses ("12", "-3.5", " 1e3 "). Spellings that
    float() would also take, such as "nan", "inf" or "1_000", give 0.0.
    """
    if is_number(v):
        return float(v)
    if isinstance(v, str):
        text = v.strip()
        if _DECIMAL_TEXT.fullmatch(text) is None:
            return 0.0
        return float(text)
    return 0.0


def as_int(v: Any) -> int:
    d = as_double(v)
    if not math.isfinite(d):
        return 0
    return int(d)


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def _compare_numbers(a: float, b: float) -> int:
    # NaN equals itself and sorts above every other number.
    a_nan, b_nan = math.isnan(a), math.isnan(b)
    if a_nan or b_nan:
        return _sign(a_nan, b_nan)
    return _sign(a, b)



def _compare_generic(a: Any, b: Any) -> int:
    """
    Fallback ordering for values outside the numeric/string/boolean cases.

    None sorts first. Natively ordered pairs use their own ordering.
    Unorderable pairs get a deterministic, non-zero order by type name and
    repr so that comparison never raises.
    """
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    try:
        if a == b:
            return 0
        if a < b:
            return -1
        if a > b:
            return 1
    except TypeError:
        pass
    ka = (type(a).__name__, repr(a))
    kb = (type(b).__name__, repr(b))
    if ka < kb:
        return -1
    return 1


def compare(a: Any, b: Any) -> int:
    """Loose comparison returning -1, 0 or 1."""
    if is_number(a) and is_number(b):
        return _compare_numbers(float(a), float(b))
    if isinstance(a, str) and is_number(b):
        return _compare_numbers(as_double(a), float(b))
    if is_number(a) and isinstance(b, str):
        return _compare_numbers(float(a), as_double(b))
    if isinstance(a, str) and isinstance(b, str):
        return _sign(unquote(a), unquote(b))
    if isinstance(a, bool) or isinstance(b, bool):
        return _sign(truthy(a), truthy(b))
    return _compare_generic(a, b)


def compare_strict(a: Any, b: Any) -> int:
    """
    Strict comparison: only number/number and string/string pairs can be
    equal. Every other combination (numeric vs string included) is NOT_EQUAL.
    """
    if is_number(a) and is_number(b):
        return _compare_numbers(float(a), float(b))
    if isinstance(a, str) and isinstance(b, str):
        return _sign(unquote(a), unquote(b))
    return NOT_EQUAL
