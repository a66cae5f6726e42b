"""
jlogic - JSON logic rule evaluation engine.

Public API:
- JsonLogic: Engine instance (apply, evaluate, add_operation)
- apply_logic: One-shot evaluation entrypoint
- UnimplementedOperatorError: Raised in strict mode for unknown operators
- parse / serialize: JSON text codec used by the engine
"""

from .jlogic_runtime import JsonLogic, apply_logic
from .jlogic_evaluator import JsonLogicError, UnimplementedOperatorError
from .jlogic_parser import ParseError, parse, parse_json
from .canonical import serialize
from .coercion import truthy

# Derive version from package metadata
try:
    from importlib.metadata import version
    __version__ = version("jlogic-runtime")
except Exception:
    __version__ = "1.0.0"

__all__ = [
    "JsonLogic",
    "apply_logic",
    "JsonLogicError",
    "UnimplementedOperatorError",
    "ParseError",
    "parse",
    "parse_json",
    "serialize",
    "truthy",
]
