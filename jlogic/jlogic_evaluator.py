"""
jlogic_evaluator.py

Recursive evaluator for JSON logic trees.
-----------------------------------------

A logic node is interpreted structurally:

    non-dict        -> literal, evaluates to itself
    {}              -> the whole current data context
    {op: operand}   -> operator application (first key only)

Operators are resolved through three registries, in priority order:

    1. custom        (engine instance, mutable, receives raw operands)
    2. array-context (map/filter/reduce/all/none/some, receives raw operands)
    3. built-in      (receives operands evaluated against the data context)

Array-context operators re-enter evaluate() with each element as a freshly
built data context; the caller's data is never mutated.
"""

import os
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Optional

from .canonical import serialize
from .coercion import as_double, truthy
from .jlogic_parser import parse
from .operations import BUILTIN_OPERATIONS
from .operator_lexicon import ARRAY_OPS
from .tokenize import looks_like_list_literal, split_list_literal

_DEBUG_ENABLED = os.getenv("JLOGIC_DEBUG", "0") == "1"


def _debug_print(*args, **kwargs):
    """Print only if debug is enabled."""
    if _DEBUG_ENABLED:
        print(*args, **kwargs)


# -------------------------------------------------------------------------
# Exceptions
# -------------------------------------------------------------------------


class JsonLogicError(Exception):
    """Base class for evaluation errors."""


class UnimplementedOperatorError(JsonLogicError, NotImplementedError):
    """Raised when an operator is found in none of the registries."""

    def __init__(self, operator: str):
        super().__init__(f'operator "{operator}" is not implemented')
        self.operator = operator


CustomOperation = Callable[[List[Any], Any], Any]


def as_list(value: Any) -> List[Any]:
    """
    Coerce an operand into an operand list.

    Lists pass through (tuples become lists). Text shaped like a list
    literal ('[a, b]') is split into trimmed string elements. Anything else
    becomes a one-element list.
    """
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    if looks_like_list_literal(value):
        return split_list_literal(value)
    return [value]


def _arg(operands, index):
    return operands[index] if index < len(operands) else None


class JsonLogicEvaluator:
    """
    Strict evaluator: every failure propagates to the caller.

    Args:
        custom_operations: Mapping of operator name to fn(operands, data).
            Held by reference, so later registrations are visible.
    """

    # Array-context operator name -> bound method name.
    _ARRAY_METHODS = {
        "map": "_map",
        "filter": "_filter",
        "reduce": "_reduce",
        "all": "_all",
        "none": "_none",
        "some": "_some",
    }

    def __init__(self, custom_operations: Optional[Dict[str, CustomOperation]] = None):
        self.custom_operations = custom_operations if custom_operations is not None else {}
        self._array_operations = MappingProxyType({
            name: getattr(self, method) for name, method in self._ARRAY_METHODS.items()
        })


    # ------------------------------------------------------------------
    # Core recursion
    # ------------------------------------------------------------------

    def evaluate(self, logic: Any, data: Any = None) -> Any:
        if not isinstance(logic, dict):
            return logic
        if not logic:
            return data

        op = next(iter(logic))
        raw = logic[op]

        custom = self.custom_operations.get(op)
        if custom is not None:
            return custom(as_list(raw), data)

        array_op = self._array_operations.get(op)
        if array_op is not None:
            return array_op(as_list(raw), data)

        builtin = BUILTIN_OPERATIONS.get(op)
        if builtin is None:
            raise UnimplementedOperatorError(op)

        operands = self._evaluate_operands(raw, data)
        result = builtin(operands, data)
        if _DEBUG_ENABLED:
            _debug_print(f"DEBUG {op} {serialize(operands)} -> {serialize(result)}")
        return result

    def _evaluate_operands(self, raw: Any, data: Any) -> List[Any]:
        if isinstance(raw, (list, tuple)):
            return [self.evaluate(v, data) for v in raw]
        if isinstance(raw, dict):
            return as_list(self.evaluate(raw, data))
        return [raw]

    # ------------------------------------------------------------------
    # Array-context operators
    # ------------------------------------------------------------------

    def _source(self, operands, data) -> Optional[List[Any]]:
        """Evaluate the source operand; None unless it yields a list."""
        items = self.evaluate(_arg(operands, 0), data)
        if isinstance(items, str):
            items = parse(items)
        if isinstance(items, tuple):
            items = list(items)
        return items if isinstance(items, list) else None

    def _map(self, operands, data):
        if data is None:
            return []
        items = self._source(operands, data)
        if items is None:
            return []
        logic = _arg(operands, 1)
        return [self.evaluate(logic, item) for item in items]

    def _filter(self, operands, data):
        if data is None:
            return []
        items = self._source(operands, data)
        if items is None:
            return []
        logic = _arg(operands, 1)
        return [item for item in items if truthy(self.evaluate(logic, item))]

    def _all(self, operands, data):
        if data is None:
            return False
        items = self._source(operands, data)
        if not items:
            return False
        logic = _arg(operands, 1)
        return all(truthy(self.evaluate(logic, item)) for item in items)

    def _none(self, operands, data):
        if data is None:
            return True
        items = self._source(operands, data)
        if items is None:
            return True
        logic = _arg(operands, 1)
        return not any(truthy(self.evaluate(logic, item)) for item in items)

    def _some(self, operands, data):
        if data is None:
            return []
        items = self._source(operands, data)
        if items is None:
            return False
        logic = _arg(operands, 1)
        return any(truthy(self.evaluate(logic, item)) for item in items)

    def _reduce(self, operands, data):
        """
        Fold over the source list. Each step evaluates the item logic
        against {"current": element, "accumulator": running value}.
        """
        if data is None:
            return 0.0
        initial = as_double(self.evaluate(operands[2], data)) if len(operands) > 2 else 0.0
        items = self._source(operands, data)
        if items is None:
            return initial
        logic = _arg(operands, 1)
        accumulator = initial
        for item in items:
            accumulator = as_double(self.evaluate(logic, {"current": item, "accumulator": accumulator}))
        return accumulator


if set(JsonLogicEvaluator._ARRAY_METHODS) != ARRAY_OPS:
    raise RuntimeError(
        f"Array operator table out of sync with lexicon: "
        f"{sorted(set(JsonLogicEvaluator._ARRAY_METHODS) ^ ARRAY_OPS)}"
    )
