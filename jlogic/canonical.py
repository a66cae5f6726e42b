"""
jlogic/canonical.py - Shared value normalization and text encoding
"""
import json
import math
from typing import Any

# Whole-valued floats below this magnitude are rendered as integers.
# Larger ones keep exponent notation, as JavaScript prints them.
_MAX_SAFE_INTEGER = 2 ** 53


def format_number(x: Any) -> str:
    """
    Render a number the way JSON logic results expect it.

    3.0 -> '3', 3.5 -> '3.5', 7 -> '7', inf -> 'Infinity'
    """
    if isinstance(x, int):
        return str(x)
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if x.is_integer() and abs(x) < _MAX_SAFE_INTEGER:
        return str(int(x))
    return repr(x)


def canonical_value(obj: Any) -> Any:
    """
    Normalize a value into the JSON-shaped value set.

    - whole-valued finite floats -> int
    - NaN / Infinity             -> None (not representable in JSON)
    - tuples                     -> lists
    - non-string dict keys       -> their string form
    - any other object           -> its string form
    """
    if obj is None or isinstance(obj, (bool, str)):
        return obj
    if isinstance(obj, int):
        return obj
    if isinstance(obj, float):
        if not math.isfinite(obj):
            return None
        if obj.is_integer() and abs(obj) < _MAX_SAFE_INTEGER:
            return int(obj)
        return obj
    if isinstance(obj, (list, tuple)):
        return [canonical_value(v) for v in obj]
    if isinstance(obj, dict):
        return {
            (k if isinstance(k, str) else stringify(k)): canonical_value(v)
            for k, v in obj.items()
        }
    return str(obj)


def serialize(obj: Any) -> str:
    """
    Encode a value as compact JSON text.

        - insertion-ordered keys (never sorted)
        - no whitespace separation
        - UTF-8 text (ensure_ascii=False)
        - whole floats as integers, non-finite floats as null
    """
    return json.dumps(
        canonical_value(obj),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def stringify(v: Any) -> str:
    """
    String form of a value, as used by cat/in/substr.

    Strings are returned as-is (no quotes); numbers use format_number;
    collections are serialized.
    """
    if isinstance(v, str):
        return v
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (int, float)):
        return format_number(v)
    if isinstance(v, (list, tuple, dict)):
        return serialize(v)
    return str(v)
