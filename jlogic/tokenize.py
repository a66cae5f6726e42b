"""
jlogic/tokenize.py

Shared text normalization for operands that arrive as serialized text.
Single source of truth for quote stripping and list-literal splitting.
"""

from typing import Any, List


def unquote(text: str) -> str:
    """
    Strip one layer of surrounding double quotes.

    '"abc"' -> 'abc', 'abc' -> 'abc', '""x""' -> '"x"'
    """
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1]
    return text


def looks_like_list_literal(value: Any) -> bool:
    return isinstance(value, str) and value.startswith("[")


def split_list_literal(text: str) -> List[str]:
    """
    Best-effort split of a bracketed list literal into string elements.

    Used for operands that were handed over as already-serialized text
    (e.g. '[a, b, c]'). Brackets are dropped, elements are split on commas
    and whitespace-trimmed. Nested structure is not preserved.

    Args:
        text: Text starting with '['.

    Returns:
        List of element strings ('[]' -> []).
    """
    body = text.replace("[", "").replace("]", "")
    if not body.strip():
        return []
    return [part.strip() for part in body.split(",")]
