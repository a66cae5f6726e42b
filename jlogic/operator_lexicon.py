"""
jlogic Operator Lexicon (Single Source of Truth)

This module defines all operator name sets for the JSON logic vocabulary.
The built-in operation table, the array-context dispatcher and the tests
MUST import from this module to keep the registries aligned.
"""

# Data access
DATA_OPS = {"var", "missing", "missing_some"}

# Logic and control flow
LOGIC_OPS = {"if", "?:", "and", "or", "!", "!!"}

# Equality and ordering
COMP_OPS = {
    "==", "!=",                 # Loose
    "===", "!==",               # Strict (type discriminating)
    ">", ">=", "<", "<=",       # Ordering (3 operands = range check)
}

# Arithmetic
ARITH_OPS = {"+", "-", "*", "/", "%", "min", "max"}

# Strings and collections
STRING_OPS = {"in", "cat", "substr"}
COLLECTION_OPS = {"merge"}

# Diagnostics
MISC_OPS = {"log"}

# Array-context operators: receive their operands unevaluated and re-enter
# the evaluator with each element as the data context.
ARRAY_OPS = {"map", "filter", "reduce", "all", "none", "some"}

# Operators whose operands are evaluated before the call
BUILTIN_OPS = DATA_OPS | LOGIC_OPS | COMP_OPS | ARITH_OPS | STRING_OPS | COLLECTION_OPS | MISC_OPS

ALL_OPS = BUILTIN_OPS | ARRAY_OPS
