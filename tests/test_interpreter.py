"""
Tests for the reference interpreter.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from minic.lexer.lexer import tokenize_string
from minic.parser.parser import parse_program
from minic.analyzer.interpreter import Interpreter, run
from minic.arith import wrap_i32, trunc_div, parse_leading_int, apply_int_op


class TestInterpreter(unittest.TestCase):
    """Evaluation of VarDecl initializers."""

    def _run(self, code: str):
        return run(parse_program(tokenize_string(code)))

    def test_scenario_environment(self):
        env = self._run("int main(){ int a = 10; int b = 20; int c = a + b; return c; }")
        self.assertEqual(env, {"a": 10, "b": 20, "c": 30})

    def test_all_operators(self):
        env = self._run("int a = 9 - 4; int b = 6 * 7; int c = 17 / 5;")
        self.assertEqual(env, {"a": 5, "b": 42, "c": 3})

    def test_division_truncates_toward_zero(self):
        env = self._run("int b = 0 - 7; int c = b / 2;")
        self.assertEqual(env["b"], -7)
        self.assertEqual(env["c"], -3)

    def test_division_by_zero_is_zero(self):
        self.assertEqual(self._run("int a = 5 / 0;"), {"a": 0})

    def test_float_literal_truncates(self):
        self.assertEqual(self._run("float f = 2.5;"), {"f": 2})

    def test_char_literal_is_zero(self):
        self.assertEqual(self._run("char ch = 'a';"), {"ch": 0})

    def test_unset_identifier_is_zero(self):
        self.assertEqual(self._run("int a = b + 1;"), {"a": 1})

    def test_wraps_to_32_bits(self):
        env = self._run("int a = 2147483647 + 1;")
        self.assertEqual(env["a"], -2147483648)

    def test_declaration_without_initializer_not_stored(self):
        self.assertEqual(self._run("int a; int b = 3;"), {"b": 3})

    def test_assignments_are_not_executed(self):
        self.assertEqual(self._run("int x = 1; x = 5;"), {"x": 1})

    def test_calls(self):
        env = self._run("int a = add(2 3); int b = sub(2 3); int c = div(7 0); int d = pow(2 3);")
        self.assertEqual(env, {"a": 5, "b": -1, "c": 0, "d": 0})

    def test_interpreter_instance_resets(self):
        interpreter = Interpreter()
        interpreter.run(parse_program(tokenize_string("int a = 1;")))
        env = interpreter.run(parse_program(tokenize_string("int b = 2;")))
        self.assertEqual(env, {"b": 2})

    def test_none_root(self):
        self.assertEqual(run(None), {})


class TestArithmetic(unittest.TestCase):
    """32-bit helpers shared by interpreter, folder and extractor."""

    def test_wrap_i32(self):
        self.assertEqual(wrap_i32(2 ** 31), -(2 ** 31))
        self.assertEqual(wrap_i32(-(2 ** 31) - 1), 2 ** 31 - 1)
        self.assertEqual(wrap_i32(123), 123)

    def test_trunc_div(self):
        self.assertEqual(trunc_div(7, 2), 3)
        self.assertEqual(trunc_div(-7, 2), -3)
        self.assertEqual(trunc_div(7, -2), -3)
        self.assertEqual(trunc_div(-7, -2), 3)

    def test_parse_leading_int(self):
        self.assertEqual(parse_leading_int("42"), 42)
        self.assertEqual(parse_leading_int("-8"), -8)
        self.assertEqual(parse_leading_int("2.5"), 2)
        self.assertIsNone(parse_leading_int("'a'"))

    def test_apply_int_op(self):
        self.assertEqual(apply_int_op("sdiv", -9, 4), -2)
        self.assertEqual(apply_int_op("*", 3, 4), 12)
        with self.assertRaises(ZeroDivisionError):
            apply_int_op("/", 1, 0)
        with self.assertRaises(KeyError):
            apply_int_op("%", 1, 2)


if __name__ == '__main__':
    unittest.main()
