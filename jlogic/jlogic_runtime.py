"""
jlogic_runtime.py

jlogic Runtime
--------------

JsonLogic is the public entrypoint for evaluating JSON logic rules.

It connects:
    - jlogic_parser      (lenient JSON text -> values)
    - JsonLogicEvaluator (recursive dispatch over the operator registries)
    - canonical          (values -> compact JSON text)
    - strict / safe mode enforcement
    - the per-instance custom operator registry

Safe mode (the default) never raises for a bad rule: any failure during
evaluation, including an unknown operator or an exception raised by a
custom operator, yields False. Strict mode lets the failure reach the
caller, which is how malformed rule definitions are detected.
"""

from __future__ import annotations

import sys
from typing import Any, Dict, FrozenSet

from .canonical import serialize
from .jlogic_evaluator import CustomOperation, JsonLogicEvaluator
from .jlogic_parser import parse
from .operator_lexicon import ALL_OPS


class JsonLogic:
    """
    Rule evaluation engine.

    Responsibilities:
        - decode logic and data handed over as JSON text
        - evaluate logic against data with JsonLogicEvaluator
        - enforce strict/safe mode
        - encode the result as JSON text
        - hold the custom operators registered on this instance

    The custom registry is the only state shared between calls. Register
    operators during setup; concurrent add_operation and apply calls on one
    instance need external synchronization.
    """

    def __init__(self, *, debug: bool = False):
        self.debug = debug
        self._custom_operations: Dict[str, CustomOperation] = {}
        self.evaluator = JsonLogicEvaluator(self._custom_operations)
        if self.debug:
            sys.stderr.write("[JsonLogic] Initialized\n")

    # ------------------------------------------------------------------
    # Custom operators
    # ------------------------------------------------------------------

    def add_operation(self, name: str, fn: CustomOperation) -> None:
        """
        Register (or overwrite) a custom operator.

        fn(operands, data) receives the operand list unevaluated; it may call
        self.evaluate() on any operand it wants evaluated. Custom operators
        take priority over built-ins of the same name.
        """
        if not callable(fn):
            raise TypeError(f"operation {name!r} must be callable, got {type(fn).__name__}")
        self._custom_operations[name] = fn
        if self.debug:
            note = " (overrides built-in)" if name in ALL_OPS else ""
            sys.stderr.write(f"[JsonLogic] Registered operation {name!r}{note}\n")

    # jsonlogic.com spelling
    addOperation = add_operation

    def remove_operation(self, name: str) -> bool:
        """Drop a custom operator. Returns False if it was not registered."""
        return self._custom_operations.pop(name, None) is not None

    @property
    def operations(self) -> FrozenSet[str]:
        """Names of the custom operators registered on this instance."""
        return frozenset(self._custom_operations)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(self, logic: Any, data: Any = None) -> Any:
        """Strict evaluation over values (no text decoding)."""
        return self.evaluator.evaluate(logic, data)

    def evaluate_safe(self, logic: Any, data: Any = None, safe: bool = True) -> Any:
        """
        Evaluate under the selected mode.

        safe=True maps any Exception to False. RecursionError (a cyclic or
        absurdly deep logic tree) is re-raised in both modes: it is resource
        exhaustion, not a rule failure.
        """
        if not safe:
            return self.evaluate(logic, data)
        try:
            return self.evaluate(logic, data)
        except RecursionError:
            raise
        except Exception as e:
            if self.debug:
                sys.stderr.write(f"[JsonLogic] safe mode: {type(e).__name__}: {e}\n")
            return False

    def apply(self, logic: Any, data: Any = None, safe: bool = True) -> str:
        """
        Apply logic to data and return the result as JSON text.

        Args:
            logic: Logic as a value, or as JSON text.
            data: Data context as a value, or as JSON text.
            safe: If True failures evaluate to false instead of raising.

        Returns:
            The compact JSON encoding of the result, e.g. 'true', '6', '"a"'.
        """
        result = self.evaluate_safe(parse(logic), parse(data), safe)
        if self.debug:
            sys.stderr.write(f"[JsonLogic] apply -> {type(result).__name__}\n")
        return serialize(result)


def apply_logic(logic: Any, data: Any = None, safe: bool = True) -> str:
    """One-shot evaluation with a fresh engine (built-in operators only)."""
    return JsonLogic().apply(logic, data, safe=safe)
