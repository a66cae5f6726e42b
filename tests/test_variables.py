import copy
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from jlogic.variables import compile_path, get_var, resolve_path, missing, missing_some


class TestCompilePath(unittest.TestCase):

    def test_dotted(self):
        self.assertEqual(compile_path("a.b.c"), ("a", "b", "c"))

    def test_empty(self):
        self.assertEqual(compile_path(""), ())
        self.assertEqual(compile_path(None), ())

    def test_numeric_reference(self):
        """{"var": 1} decoded from text arrives as 1.0."""
        self.assertEqual(compile_path(1.0), ("1",))
        self.assertEqual(compile_path(2), ("2",))


class TestGetVar(unittest.TestCase):

    def setUp(self):
        self.data = {
            "a": 1,
            "champ": {"name": "Fezzig", "height": 223},
            "list": [{"x": 10}, {"x": 20}],
            "empty": None,
        }

    def test_simple_key(self):
        self.assertEqual(get_var(self.data, ["a"]), 1)
        self.assertEqual(get_var(self.data, "a"), 1)

    def test_nested_key(self):
        self.assertEqual(get_var(self.data, ["champ.name"]), "Fezzig")

    def test_map_context_does_not_index_lists(self):
        self.assertIsNone(get_var(self.data, ["list.1.x"]))
        self.assertIsNone(get_var({"list": [1, 2]}, ["list.0"]))
        self.assertEqual(get_var({"list": [1, 2]}, ["list"]), [1, 2])

    def test_list_context_indexes_nested_lists(self):
        data = [["a", "b"], ["c"]]
        self.assertEqual(get_var(data, ["0.1"]), "b")
        self.assertEqual(get_var(data, ["1.0"]), "c")
        self.assertIsNone(get_var(data, ["1.5"]))

    def test_list_context_does_not_key_into_maps(self):
        data = [{"x": 10}]
        self.assertIsNone(get_var(data, ["0.x"]))
        self.assertEqual(get_var(data, ["0"]), {"x": 10})

    def test_non_integer_index_misses(self):
        data = ["apple", "banana"]
        self.assertIsNone(get_var(data, ["-1"]))
        self.assertIsNone(get_var(data, ["1_0"]))

    def test_scalar_context(self):
        self.assertIsNone(get_var(5, ["a"]))
        self.assertEqual(get_var(5, [""]), 5)

    def test_list_context(self):
        data = ["apple", "banana", "carrot"]
        self.assertEqual(get_var(data, [1]), "banana")
        self.assertEqual(get_var(data, [1.0]), "banana")
        self.assertEqual(get_var(data, ["1"]), "banana")

    def test_out_of_range_index(self):
        data = ["apple"]
        self.assertIsNone(get_var(data, [5]))
        self.assertIsNone(get_var(data, ["x"]))
        self.assertEqual(get_var(data, [5, "fallback"]), "fallback")

    def test_scalar_intermediate_stops(self):
        self.assertIsNone(get_var(self.data, ["a.b"]))

    def test_missing_with_default(self):
        self.assertEqual(get_var(self.data, ["z", 26]), 26)
        self.assertEqual(get_var(self.data, ["empty", "d"]), "d")

    def test_present_value_ignores_default(self):
        self.assertEqual(get_var(self.data, ["a", 99]), 1)

    def test_empty_path_returns_context(self):
        self.assertIs(get_var(self.data, [""]), self.data)
        self.assertIs(get_var(self.data, []), self.data)
        self.assertIs(get_var(self.data, [None]), self.data)

    def test_unchanged_context_uses_default(self):
        self.assertEqual(get_var(self.data, ["", "d"]), "d")

    def test_null_data(self):
        self.assertIsNone(get_var(None, ["a"]))
        self.assertEqual(get_var(None, ["a", 0]), 0)

    def test_quoted_path(self):
        self.assertEqual(get_var(self.data, ['"a"']), 1)

    def test_data_not_mutated(self):
        before = copy.deepcopy(self.data)
        get_var(self.data, ["list.0.x"])
        get_var(self.data, ["nope.deeper", 1])
        self.assertEqual(self.data, before)

    def test_resolve_path_accepts_compiled(self):
        self.assertEqual(resolve_path(self.data, ("champ", "height")), 223)


class TestMissing(unittest.TestCase):

    def test_missing(self):
        self.assertEqual(missing({"a": "apple", "c": "carrot"}, ["a", "b"]), ["b"])
        self.assertEqual(missing({"a": 1}, []), [])

    def test_missing_nested(self):
        self.assertEqual(missing({"a": {"b": 1}}, ["a.b", "a.c"]), ["a.c"])

    def test_missing_some_satisfied(self):
        self.assertEqual(missing_some({"a": 1}, [1, ["a", "b"]]), [])

    def test_missing_some_unsatisfied(self):
        self.assertEqual(missing_some({}, [1, ["a", "b"]]), ["a", "b"])
        self.assertEqual(missing_some({"a": 1}, [2, ["a", "b", "c"]]), ["b", "c"])

    def test_missing_some_numeric_text_minimum(self):
        self.assertEqual(missing_some({"a": 1, "b": 2}, ["2", ["a", "b", "c"]]), [])

    def test_missing_some_malformed(self):
        self.assertEqual(missing_some({}, []), [])
        self.assertEqual(missing_some({}, [1, "a"]), [])


if __name__ == '__main__':
    unittest.main()
