"""
operations.py - Built-in scalar and collection operators

Every entry has the uniform signature

    fn(operands: list, data) -> value

and receives operands that the evaluator has already evaluated. Operators
never raise on malformed operands: bad arity, non-numeric text, zero
divisors and out-of-range substrings resolve to documented fallback values
(mostly None).
"""

import math
import operator
import sys
from functools import reduce
from types import MappingProxyType
from typing import Any, Callable, Dict, List

from .canonical import serialize, stringify
from .coercion import as_double, as_int, compare, compare_strict, is_number, truthy
from .operator_lexicon import BUILTIN_OPS
from .tokenize import unquote
from .variables import get_var, missing, missing_some

Operation = Callable[[List[Any], Any], Any]


def _arg(operands, index):
    return operands[index] if index < len(operands) else None


def _doubles(operands):
    return [as_double(v) for v in operands]


# -------------------------------------------------------------------------
# Comparison
# -------------------------------------------------------------------------

def _chained(relation) -> Operation:
    """
    Build an ordering operator.

    2 operands: a OP b
    3 operands: a OP b and b OP c  (range check)
    any other arity: False
    """
    def op(operands, data):
        if len(operands) == 2:
            return relation(compare(operands[0], operands[1]), 0)
        if len(operands) == 3:
            return (relation(compare(operands[0], operands[1]), 0)
                    and relation(compare(operands[1], operands[2]), 0))
        return False
    return op


def _equals(operands, data):
    return compare(_arg(operands, 0), _arg(operands, 1)) == 0


def _not_equals(operands, data):
    return compare(_arg(operands, 0), _arg(operands, 1)) != 0


def _strict_equals(operands, data):
    return compare_strict(_arg(operands, 0), _arg(operands, 1)) == 0


def _strict_not_equals(operands, data):
    return compare_strict(_arg(operands, 0), _arg(operands, 1)) != 0


# -------------------------------------------------------------------------
# Logic
# -------------------------------------------------------------------------

def _and(operands, data):
    # All-boolean operands give a boolean; mixed operands return the first
    # falsy operand, else the last one.
    if all(isinstance(v, bool) for v in operands):
        return all(operands)
    for v in operands:
        if not truthy(v):
            return v
    return operands[-1]


def _or(operands, data):
    if all(isinstance(v, bool) for v in operands):
        return any(operands)
    for v in operands:
        if truthy(v):
            return v
    return operands[-1]


def _if(operands, data):
    """
    [] -> None, [a] -> a, [c, a] -> a or None, [c, a, b] -> a or b,
    [c1, a1, c2, a2, ..., else] -> first matching branch, else tail.
    """
    branches = list(operands)
    while len(branches) > 3:
        if truthy(branches[0]):
            return branches[1]
        branches = branches[2:]
    if not branches:
        return None
    if len(branches) == 1:
        return branches[0]
    if truthy(branches[0]):
        return branches[1]
    return branches[2] if len(branches) == 3 else None


def _not(operands, data):
    return not truthy(_arg(operands, 0))


def _double_not(operands, data):
    return truthy(_arg(operands, 0))


# -------------------------------------------------------------------------
# Arithmetic
# -------------------------------------------------------------------------

def _add(operands, data):
    return reduce(operator.add, _doubles(operands), 0.0)


def _multiply(operands, data):
    values = _doubles(operands)
    if not values:
        return None
    return reduce(operator.mul, values)


def _subtract(operands, data):
    values = _doubles(operands)
    if not values:
        return None
    if len(values) == 1:
        return -values[0]
    return values[0] - values[1]


def _divide(operands, data):
    values = _doubles(operands)
    if len(values) < 2 or values[1] == 0:
        return None
    return values[0] / values[1]


def _modulo(operands, data):
    values = _doubles(operands)
    if len(values) < 2 or values[1] == 0:
        return None
    # truncated remainder: the sign follows the dividend
    return math.fmod(values[0], values[1])


def _min(operands, data):
    numbers = [v for v in operands if is_number(v)]
    return min(numbers, key=float) if numbers else None


def _max(operands, data):
    numbers = [v for v in operands if is_number(v)]
    return max(numbers, key=float) if numbers else None


# -------------------------------------------------------------------------
# Strings and collections
# -------------------------------------------------------------------------

def _in(operands, data):
    needle = unquote(stringify(_arg(operands, 0)))
    haystack = _arg(operands, 1)
    if isinstance(haystack, str):
        return needle in haystack
    if isinstance(haystack, (list, tuple)):
        return any(unquote(stringify(item)) == needle for item in haystack)
    return False


def _cat(operands, data):
    return "".join(stringify(v) for v in operands)


def _substr(operands, data):
    """
    substr(str, start[, length]) with negative wraparound.

    A negative start counts from the end; a negative length stops that many
    characters before the end. Ranges falling outside the string give None.
    """
    if len(operands) not in (2, 3):
        return None
    text = stringify(operands[0])
    size = len(text)
    start = as_int(operands[1])
    begin = start if start >= 0 else size + start
    if len(operands) == 2:
        end = size
    else:
        length = as_int(operands[2])
        end = begin + length if length >= 0 else size + length
    if 0 <= begin <= end <= size:
        return text[begin:end]
    return None


def _flatten(values):
    flat = []
    for v in values:
        if isinstance(v, (list, tuple)):
            flat.extend(_flatten(v))
        else:
            flat.append(v)
    return flat


def _merge(operands, data):
    return _flatten(operands)


# -------------------------------------------------------------------------
# Data access and diagnostics
# -------------------------------------------------------------------------

def _var(operands, data):
    return get_var(data, operands)


def _missing(operands, data):
    return missing(data, operands)


def _missing_some(operands, data):
    return missing_some(data, operands)


def _log(operands, data):
    value = _arg(operands, 0)
    sys.stderr.write(f"[jlogic] log: {serialize(value)}\n")
    return value


_OPERATIONS: Dict[str, Operation] = {
    "var": _var,
    "missing": _missing,
    "missing_some": _missing_some,
    "==": _equals,
    "!=": _not_equals,
    "===": _strict_equals,
    "!==": _strict_not_equals,
    ">": _chained(operator.gt),
    ">=": _chained(operator.ge),
    "<": _chained(operator.lt),
    "<=": _chained(operator.le),
    "!": _not,
    "!!": _double_not,
    "and": _and,
    "or": _or,
    "if": _if,
    "?:": _if,
    "+": _add,
    "-": _subtract,
    "*": _multiply,
    "/": _divide,
    "%": _modulo,
    "min": _min,
    "max": _max,
    "in": _in,
    "cat": _cat,
    "substr": _substr,
    "merge": _merge,
    "log": _log,
}

if set(_OPERATIONS) != BUILTIN_OPS:
    raise RuntimeError(
        f"Operation table out of sync with lexicon: {sorted(set(_OPERATIONS) ^ BUILTIN_OPS)}"
    )

BUILTIN_OPERATIONS = MappingProxyType(_OPERATIONS)
