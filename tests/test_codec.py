#!/usr/bin/env python3
"""
Codec tests: lenient JSON decoding (arpeggio grammar) and compact encoding.

Asserts exact output text to catch any drift in number formatting or key
ordering.
"""

import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from jlogic.jlogic_parser import parse, parse_json, ParseError
from jlogic.canonical import serialize, stringify, format_number, canonical_value


class TestParseJson(unittest.TestCase):

    def test_standard_document(self):
        doc = parse_json('{"a": [1, 2.5, "x", true, false, null], "b": {}}')
        self.assertEqual(doc, {"a": [1.0, 2.5, "x", True, False, None], "b": {}})

    def test_numbers_are_float(self):
        self.assertIsInstance(parse_json("[1]")[0], float)
        self.assertEqual(parse_json("[-1.5e2, .5, 0]"), [-150.0, 0.5, 0.0])

    def test_nested(self):
        self.assertEqual(parse_json("[[1], [[2]], []]"), [[1.0], [[2.0]], []])

    def test_key_order_preserved(self):
        self.assertEqual(list(parse_json('{"z":1,"a":2,"m":3}')), ["z", "a", "m"])

    def test_duplicate_keys_last_wins(self):
        self.assertEqual(parse_json('{"a":1,"a":2}'), {"a": 2.0})

    def test_escapes(self):
        self.assertEqual(parse_json(r'["a\nb", "q\"q", "é", "\\"]'), ["a\nb", 'q"q', "é", "\\"])

    def test_surrogate_pair(self):
        self.assertEqual(parse_json(r'["\ud83c\udf89", "\u00e9"]'), ["\U0001F389", "\u00e9"])

    def test_single_quoted_escapes(self):
        self.assertEqual(parse_json(r"['\u00e9\t', 'a\\', '\\\'']"), ["\u00e9\t", "a\\", "\\'"])

    def test_invalid_escape(self):
        for text in [r'["\x41"]', r'["\u12"]', r"['\q']"]:
            with self.assertRaises(ParseError, msg=text):
                parse_json(text)
        self.assertEqual(parse(r'["\x41"]'), r'["\x41"]')

    def test_invalid(self):
        for text in ["{bad", "[1,,2]", "{\"a\" 1}", "[1] 2", ""]:
            with self.assertRaises(ParseError, msg=text):
                parse_json(text)

    def test_parse_error_is_value_error(self):
        self.assertTrue(issubclass(ParseError, ValueError))


class TestLenientSyntax(unittest.TestCase):

    def test_unquoted_keys(self):
        self.assertEqual(parse_json("{ a : 1, b : 2 }"), {"a": 1.0, "b": 2.0})

    def test_single_quotes(self):
        self.assertEqual(parse_json("{'var': 'a'}"), {"var": "a"})
        self.assertEqual(parse_json(r"['it\'s', 'say \"hi\"']"), ["it's", 'say "hi"'])

    def test_bare_words(self):
        self.assertEqual(parse_json("[apple, banana.split, nullable]"), ["apple", "banana.split", "nullable"])

    def test_trailing_commas(self):
        self.assertEqual(parse_json("[1, 2, 3,]"), [1.0, 2.0, 3.0])
        self.assertEqual(parse_json("{a: 1,}"), {"a": 1.0})

    def test_comments(self):
        text = """
        {
            // comparison
            "==": [1, /* inline */ 1] # trailing
        }
        """
        self.assertEqual(parse_json(text), {"==": [1.0, 1.0]})


class TestParseFallback(unittest.TestCase):

    def test_objects_and_arrays_decode(self):
        self.assertEqual(parse('  {"a": 1}  '), {"a": 1.0})
        self.assertEqual(parse("[1]"), [1.0])

    def test_other_text_is_opaque(self):
        for text in ["5", "hello", "true", "null", '"quoted"', ""]:
            self.assertEqual(parse(text), text)

    def test_failure_is_opaque(self):
        self.assertEqual(parse("{bad"), "{bad")

    def test_values_pass_through(self):
        value = {"a": 1}
        self.assertIs(parse(value), value)
        self.assertIsNone(parse(None))
        self.assertEqual(parse(3), 3)


class TestSerialize(unittest.TestCase):

    def test_compact(self):
        self.assertEqual(serialize({"a": [1, True, None]}), '{"a":[1,true,null]}')

    def test_whole_floats_render_as_integers(self):
        self.assertEqual(serialize(6.0), "6")
        self.assertEqual(serialize(-0.0), "0")
        self.assertEqual(serialize([2.5, 3.0]), "[2.5,3]")

    def test_large_floats_keep_exponent(self):
        self.assertEqual(serialize(1e300), "1e+300")

    def test_non_finite_is_null(self):
        self.assertEqual(serialize(float("inf")), "null")
        self.assertEqual(serialize([float("nan")]), "[null]")

    def test_unicode_is_kept(self):
        self.assertEqual(serialize("é"), '"é"')

    def test_key_order_not_sorted(self):
        self.assertEqual(serialize({"z": 1, "a": 2}), '{"z":1,"a":2}')

    def test_tuples_and_objects(self):
        self.assertEqual(serialize((1, 2)), "[1,2]")
        self.assertEqual(canonical_value({1: "a"}), {"1": "a"})


class TestStringForms(unittest.TestCase):

    def test_stringify(self):
        self.assertEqual(stringify("x"), "x")
        self.assertEqual(stringify(None), "null")
        self.assertEqual(stringify(True), "true")
        self.assertEqual(stringify(3.0), "3")
        self.assertEqual(stringify(1.25), "1.25")
        self.assertEqual(stringify([1.0, "a"]), '[1,"a"]')

    def test_format_number(self):
        self.assertEqual(format_number(7), "7")
        self.assertEqual(format_number(float("inf")), "Infinity")
        self.assertEqual(format_number(float("-inf")), "-Infinity")
        self.assertEqual(format_number(float("nan")), "NaN")


@pytest.mark.parametrize("text", [
    "null",
    "true",
    '"a"',
    "[1,2.5,\"x\",[true,null]]",
    '{"b":{"c":[]},"a":-3}',
    '{"unicode":"éè"}',
])
def test_round_trip(text):
    """encode(decode(x)) is structurally equal to x."""
    value = parse_json(text)
    assert serialize(value) == text


if __name__ == '__main__':
    unittest.main()
