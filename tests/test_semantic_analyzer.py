"""
Test suite for the MiniC semantic analyzer.

Tests cover:
- Flat symbol table and redeclaration
- Type checking and inference
- Function whitelist checking
- Error accumulation and reporting

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from minic.config import CompilerConfig
from minic.lexer.lexer import tokenize_string
from minic.parser.parser import parse_program
from minic.parser.ast_nodes import Literal, Identifier, BinaryOp, Call, Block
from minic.analyzer.context import CompilationContext
from minic.analyzer.semantic_analyzer import SemanticAnalyzer, analyze
from minic.analyzer.symbol_table import SymbolTable


class TestSemanticAnalyzer(unittest.TestCase):
    """Test cases for the semantic analyzer."""

    def setUp(self):
        """Set up test fixtures."""
        self.context = CompilationContext()
        self.analyzer = SemanticAnalyzer(self.context)

    def _analyze_code(self, code: str):
        """Helper to analyze a code snippet."""
        self.context.reset()
        ast = parse_program(tokenize_string(code), self.context.diagnostics)
        self.analyzer.analyze(ast)
        return ast, self.context.messages()

    def test_valid_program(self):
        _, errors = self._analyze_code(
            "int main(){ int a = 10; int b = 20; int c = a + b; return c; }")
        self.assertEqual(errors, [])
        self.assertEqual(self.context.symbol_table.as_dict(),
                         {"a": "int", "b": "int", "c": "int"})

    def test_redeclaration_keeps_first_type(self):
        _, errors = self._analyze_code("int main(){ int a = 5; float a = 2.0; return a; }")

        self.assertEqual(errors, ["Variable 'a' re-declared."])
        self.assertEqual(self.context.symbol_table.lookup("a"), "int")

    def test_redeclaration_reported_once_per_duplicate(self):
        _, errors = self._analyze_code("int a; int a; int b;")
        self.assertEqual(sum("re-declared" in e for e in errors), 1)

    def test_undeclared_variable(self):
        _, errors = self._analyze_code("int main(){ return x; }")
        self.assertEqual(errors, ["Undeclared variable: x."])

    def test_initialization_mismatch(self):
        _, errors = self._analyze_code("int main(){ int a = 2.5; }")
        self.assertEqual(errors,
                         ["Type mismatch in initialization of 'a': expected int, got float."])

    def test_binary_mismatch(self):
        _, errors = self._analyze_code(
            "int main(){ int a = 1; float b = 2.5; float c = a + b; }")
        self.assertEqual(errors, ["Type mismatch in binary operation: int vs float."])

    def test_errors_accumulate_in_order(self):
        _, errors = self._analyze_code("int main(){ int a = b + 1; }")
        self.assertEqual(errors, [
            "Undeclared variable: b.",
            "Type mismatch in binary operation: unknown vs int.",
            "Type mismatch in initialization of 'a': expected int, got unknown.",
        ])

    def test_self_reference_is_declared(self):
        _, errors = self._analyze_code("int a = a;")
        self.assertEqual(errors, [])

    def test_char_literal_infers_int(self):
        _, errors = self._analyze_code("int main(){ char ch = 'a'; }")
        self.assertEqual(errors,
                         ["Type mismatch in initialization of 'ch': expected char, got int."])

    def test_dot_char_literal_infers_float(self):
        _, errors = self._analyze_code("int d = '.';")
        self.assertEqual(errors,
                         ["Type mismatch in initialization of 'd': expected int, got float."])

    def test_assignment_to_undeclared(self):
        _, errors = self._analyze_code("y = 5;")
        self.assertEqual(errors, ["Assignment to undeclared variable: y."])

    def test_assignment_mismatch(self):
        _, errors = self._analyze_code("int x = 1; x = 2.5;")
        self.assertEqual(errors,
                         ["Type mismatch in assignment to 'x': expected int, got float."])

    def test_syntax_diagnostics_come_first(self):
        _, errors = self._analyze_code("int a = 1 return x;")
        self.assertEqual(errors, ["Expected ';' but got 'return'", "Undeclared variable: x."])

    def test_known_call(self):
        _, errors = self._analyze_code("int main(){ return add(2 3); }")
        self.assertEqual(errors, [])

    def test_unknown_call(self):
        _, errors = self._analyze_code("int main(){ return mul(2 3); }")
        self.assertEqual(errors, ["Function not defined: mul."])

    def test_call_arguments_are_checked(self):
        _, errors = self._analyze_code("int r = add(q 1);")
        self.assertEqual(errors, ["Undeclared variable: q."])

    def test_extended_whitelist(self):
        self.context = CompilationContext(CompilerConfig().with_known_functions(["mul"]))
        self.analyzer = SemanticAnalyzer(self.context)
        _, errors = self._analyze_code("int main(){ return mul(2 3); }")
        self.assertEqual(errors, [])

    def test_function_not_in_whitelist(self):
        self.context = CompilationContext(CompilerConfig(known_functions=("add",)))
        self.analyzer = SemanticAnalyzer(self.context)
        _, errors = self._analyze_code("int main(){ return 0; }")
        self.assertEqual(errors, ["Function not defined: main."])

    def test_declared_flags(self):
        ast, _ = self._analyze_code("int a = 1; int a = 2; int b = a;")
        first, second, third = ast.items

        self.assertTrue(first.children[1].is_declared)
        self.assertFalse(second.children[1].is_declared)
        self.assertTrue(third.initializer.is_declared)

    def test_inferred_types_are_stored(self):
        ast, _ = self._analyze_code("float f = 1.5; float g = f * 2.0;")
        expr = ast.items[1].initializer

        self.assertEqual(expr.inferred_type, "float")
        self.assertEqual(expr.left.inferred_type, "float")

    def test_analyze_result(self):
        self.context.reset()
        ast = parse_program(tokenize_string("return z;"), self.context.diagnostics)
        result = analyze(ast, self.context)

        self.assertTrue(result.has_errors())
        self.assertIs(result.symbol_table, self.context.symbol_table)
        self.assertIs(result.ast, ast)


class TestTypeInference(unittest.TestCase):
    """Test infer_type directly."""

    def setUp(self):
        self.context = CompilationContext()
        self.context.symbol_table.declare("i", "int")
        self.context.symbol_table.declare("f", "float")
        self.context.symbol_table.declare("c", "char")
        self.analyzer = SemanticAnalyzer(self.context)

    def test_literals(self):
        self.assertEqual(self.analyzer.infer_type(Literal("42")), "int")
        self.assertEqual(self.analyzer.infer_type(Literal("4.2")), "float")

    def test_identifiers(self):
        self.assertEqual(self.analyzer.infer_type(Identifier("f")), "float")
        self.assertEqual(self.analyzer.infer_type(Identifier("c")), "char")
        self.assertEqual(self.analyzer.infer_type(Identifier("nope")), "unknown")

    def test_binary_rules(self):
        infer = self.analyzer.infer_type
        self.assertEqual(infer(BinaryOp("+", Identifier("i"), Literal("1"))), "int")
        self.assertEqual(infer(BinaryOp("+", Identifier("i"), Identifier("f"))), "float")
        self.assertEqual(infer(BinaryOp("+", Identifier("nope"), Literal("1.0"))), "float")
        self.assertEqual(infer(BinaryOp("+", Identifier("c"), Literal("1"))), "unknown")

    def test_call_is_int(self):
        self.assertEqual(self.analyzer.infer_type(Call("add", [Literal("1.5")])), "int")

    def test_other_nodes_unknown(self):
        self.assertEqual(self.analyzer.infer_type(Block()), "unknown")

    def test_inference_is_idempotent(self):
        node = BinaryOp("*", Identifier("f"), Literal("3"))
        first = self.analyzer.infer_type(node)
        second = self.analyzer.infer_type(node)
        self.assertEqual(first, second)
        self.assertEqual(node.inferred_type, first)


class TestSymbolTable(unittest.TestCase):
    """Test the flat symbol table."""

    def test_first_declaration_wins(self):
        table = SymbolTable()
        self.assertTrue(table.declare("a", "int"))
        self.assertFalse(table.declare("a", "float"))
        self.assertEqual(table.lookup("a"), "int")
        self.assertEqual(len(table), 1)

    def test_lookup_missing(self):
        table = SymbolTable()
        self.assertIsNone(table.lookup("x"))
        self.assertEqual(table.type_of("x"), "unknown")
        self.assertNotIn("x", table)

    def test_clear(self):
        table = SymbolTable()
        table.declare("a", "int")
        table.clear()
        self.assertEqual(table.names(), [])


class TestCompilationContext(unittest.TestCase):
    """Test per-run state handling."""

    def test_reset_clears_state(self):
        context = CompilationContext()
        context.symbol_table.declare("a", "int")
        analyze(parse_program(tokenize_string("return q;")), context)
        self.assertTrue(context.has_errors())

        context.reset()
        self.assertEqual(context.diagnostics, [])
        self.assertEqual(len(context.symbol_table), 0)

    def test_no_leak_between_runs(self):
        context = CompilationContext()
        for _ in range(2):
            context.reset()
            analyze(parse_program(tokenize_string("int a = 1;")), context)
            self.assertEqual(context.messages(), [])


if __name__ == '__main__':
    unittest.main()
