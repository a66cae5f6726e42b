"""
variables.py - Variable Resolver

Dotted-path lookup into the data context:

    {"var": "a.b"}          -> data["a"]["b"]
    {"var": 1}              -> data[1]           (list context)
    {"var": "1.0"}          -> data[1][0]        (nested lists)
    {"var": ["a", 42]}      -> data["a"], or 42 when missing
    {"var": ""}             -> data              (whole context)

A miss never raises; it resolves to None (or the supplied default).
"""

from typing import Any, List, Tuple, Union

from .canonical import stringify
from .coercion import as_int
from .tokenize import unquote

CompiledPath = Tuple[str, ...]

# Marks a lookup that fell off the data structure.
_MISS = object()


def compile_path(path: Any) -> CompiledPath:
    """
    Compile a path reference into a tuple of segments.

    Example: "champ.name" -> ("champ", "name"), "" -> ()
    """
    if path is None:
        return ()
    text = unquote(stringify(path))
    if text == "":
        return ()
    return tuple(text.split("."))


def _step(value: Any, segment: str, container) -> Any:
    """One path segment; _MISS unless value is the context's container kind."""
    if not isinstance(value, container):
        return _MISS
    if isinstance(value, dict):
        return value.get(segment, _MISS)
    if not (segment.isascii() and segment.isdigit()):
        return _MISS
    index = int(segment)
    if index < len(value):
        return value[index]
    return _MISS


def resolve_path(data: Any, path: Union[str, CompiledPath]) -> Any:
    """
    Walk a path through the data context; None on any miss.

    A dict context is walked by key through nested dicts only, and a list
    context by integer index through nested lists only. Reaching any other
    intermediate value ends the walk with None.
    """
    segments = compile_path(path) if isinstance(path, str) else path
    container = dict if isinstance(data, dict) else (list, tuple)
    value = data
    for segment in segments:
        value = _step(value, segment, container)
        if value is _MISS:
            return None
    return value


def get_var(data: Any, ref: Any) -> Any:
    """
    Resolve a var reference against the data context.

    Args:
        data: Current data context.
        ref: A path, or an operand list [path] / [path, default].

    Returns:
        The resolved value; the default when resolution produced nothing
        (None, or the data context unchanged) and a default was supplied.
    """
    has_default = False
    default = None
    if isinstance(ref, (list, tuple)):
        path = ref[0] if ref else ""
        if len(ref) > 1:
            has_default = True
            default = ref[1]
    else:
        path = ref

    value = resolve_path(data, compile_path(path))
    if has_default and (value is None or value is data):
        return default
    return value


def missing(data: Any, keys: List[Any]) -> List[Any]:
    """Keys (in order) whose var lookup resolves to None."""
    return [key for key in keys if get_var(data, [key]) is None]


def missing_some(data: Any, operands: List[Any]) -> List[Any]:
    """
    missing_some(min, keys): [] when at least `min` keys are present,
    otherwise the missing subset.
    """
    need = as_int(operands[0]) if operands else 0
    keys = operands[1] if len(operands) > 1 and isinstance(operands[1], list) else []
    absent = missing(data, keys)
    if len(keys) - len(absent) >= need:
        return []
    return absent
