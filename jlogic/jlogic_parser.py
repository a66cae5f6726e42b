"""
jlogic_parser.py

Lenient JSON decoder for logic and data handed over as text.
------------------------------------------------------------

Accepts standard JSON plus the relaxed forms rule authors tend to write by
hand:

    { a : 1, b : 2 }          unquoted keys
    {'var': 'a'}              single-quoted strings
    {"in": [x, ["x", "y"]]}   bare word values (decoded as strings)
    [1, 2, 3,]                trailing commas
    // line, # line and /* block */ comments

Numbers are decoded as float (the engine works in float64). Only text
whose first non-blank character is '{' or '[' is decoded by parse();
everything else, and anything that fails to decode, is kept as an opaque
string so that bare literals still evaluate to themselves.
"""

import json
import os
import re
import threading
from typing import Any

from arpeggio import ParserPython, PTNodeVisitor, visit_parse_tree, ZeroOrMore, Optional, EOF, NoMatch
from arpeggio import RegExMatch as _

_DEBUG_ENABLED = os.getenv("JLOGIC_DEBUG", "0") == "1"


def _debug_print(*args, **kwargs):
    """Print only if debug is enabled."""
    if _DEBUG_ENABLED:
        print(*args, **kwargs)


class ParseError(ValueError):
    """Raised when text cannot be decoded as (lenient) JSON."""


# ==========================================
# 1. GRAMMAR
# ==========================================

def comment():
    return [_(r"//.*"), _(r"#.*"), _(r"/\*[\s\S]*?\*/")]

def json_string():
    return _(r'"(?:[^"\\]|\\[\s\S])*"|\'(?:[^\'\\]|\\[\s\S])*\'')

def json_number():
    return _(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

def json_constant():
    return _(r"(?:true|false|null)(?![\w$.\-])")

def bare_word():
    return _(r"[A-Za-z_$][\w$.\-]*")

def bare_key():
    return _(r"[\w$.\-]+")

def json_value():
    return [json_object, json_array, json_string, json_number, json_constant, bare_word]

def elements():
    return json_value, ZeroOrMore(",", json_value)

def json_array():
    return "[", Optional(elements), Optional(","), "]"

def object_key():
    return [json_string, bare_key]

def member():
    return object_key, ":", json_value

def members():
    return member, ZeroOrMore(",", member)

def json_object():
    return "{", Optional(members), Optional(","), "}"

def json_document():
    return json_value, EOF


# ==========================================
# 2. PARSER INSTANCE
# ==========================================
# Arpeggio parsers keep per-parse state, so one shared instance is created
# lazily and every parse is serialized through the lock.
_PARSER_LOCK = threading.Lock()
_GLOBAL_PARSER = None


def _get_or_create_parser():
    """Get global parser instance, creating it if needed."""
    global _GLOBAL_PARSER
    with _PARSER_LOCK:
        if _GLOBAL_PARSER is None:
            _GLOBAL_PARSER = ParserPython(json_document, comment, reduce_tree=False)
    return _GLOBAL_PARSER


# ==========================================
# 3. VISITOR
# ==========================================
# Decoded values are boxed while the tree is walked so that they can be told
# apart from punctuation terminals among a node's children.

class _Decoded:
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value


class _Member:
    __slots__ = ("key", "value")

    def __init__(self, key, value):
        self.key = key
        self.value = value


class _Items(list):
    pass


# Inside a single-quoted body: an escaped quote, any other escape, or a bare
# double quote that must be escaped before JSON decoding.
_SINGLE_QUOTED_RE = re.compile(r"\\'|\\[\s\S]|\"")


def _requote(m):
    token = m.group(0)
    if token == "\\'":
        return "'"
    if token == '"':
        return '\\"'
    return token


def _unescape(body: str, quote: str) -> str:
    """Decode a string literal body with json, including \\uXXXX pairs."""
    if quote == "'":
        body = _SINGLE_QUOTED_RE.sub(_requote, body)
    return json.loads(f'"{body}"', strict=False)



def _boxed(children, kind):
    return [c for c in children if isinstance(c, kind)]


class JsonVisitor(PTNodeVisitor):
    """Turns a json_document parse tree into plain Python values."""

    def visit_json_string(self, node, children):
        return _Decoded(_unescape(node.value[1:-1], node.value[0]))

    def visit_json_number(self, node, children):
        return _Decoded(float(node.value))

    def visit_json_constant(self, node, children):
        return _Decoded({"true": True, "false": False, "null": None}[node.value])

    def visit_bare_word(self, node, children):
        return _Decoded(node.value)

    def visit_bare_key(self, node, children):
        return _Decoded(node.value)

    def visit_elements(self, node, children):
        return _Items(c.value for c in _boxed(children, _Decoded))

    def visit_json_array(self, node, children):
        items = _boxed(children, _Items)
        return _Decoded(list(items[0]) if items else [])

    def visit_member(self, node, children):
        key, value = _boxed(children, _Decoded)
        return _Member(key.value, value.value)

    def visit_members(self, node, children):
        return _Items(_boxed(children, _Member))

    def visit_json_object(self, node, children):
        obj = {}
        for group in _boxed(children, _Items):
            for m in group:
                # last write wins on duplicate keys
                obj[m.key] = m.value
        return _Decoded(obj)

    def visit_json_document(self, node, children):
        return _boxed(children, _Decoded)[0]


# ==========================================
# 4. PUBLIC API
# ==========================================

def parse_json(text: str) -> Any:
    """
    Decode lenient JSON text.

    Raises:
        ParseError: if the text is not a single JSON value.
    """
    parser = _get_or_create_parser()
    try:
        with _PARSER_LOCK:
            tree = parser.parse(text)
    except NoMatch as e:
        raise ParseError(str(e)) from e
    try:
        return visit_parse_tree(tree, JsonVisitor()).value
    except ValueError as e:
        # bad escape sequence inside a string literal
        raise ParseError(str(e)) from e


def parse(text: Any) -> Any:
    """
    Decode text handed to the facade.

    Object and array text is decoded; any other text, and text that fails
    to decode, is returned unchanged as an opaque string literal. Non-string
    values pass through.
    """
    if not isinstance(text, str):
        return text
    stripped = text.strip()
    if not stripped.startswith(("{", "[")):
        return text
    try:
        return parse_json(stripped)
    except ParseError as e:
        _debug_print(f"DEBUG parse: keeping opaque text ({e})")
        return text
