"""
End-to-end compilation tests for MiniC.

Tests the full pipeline from source text to the extracted result through
the stage entry points.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from minic.config import CompilerConfig, DEFAULT_CONFIG
from minic.analyzer.context import CompilationContext
from minic.pipeline import (
    compile_source, run_lexer, run_ast, run_ir, run_optimized_ir,
    run_codegen, run_native, run_assembly,
)


SCENARIO = "int main(){ int a = 10; int b = 20; int c = a + b; return c; }"


class TestFullCompilation(unittest.TestCase):
    """Test the full compilation pipeline."""

    def test_scenario(self):
        result = compile_source(SCENARIO)

        self.assertEqual(result.diagnostics, [])
        self.assertEqual(result.environment["c"], 30)
        self.assertEqual(result.ir.count("alloca i32"), 3)
        self.assertEqual(result.ir.count(" = add i32 "), 1)
        self.assertIn("ret i32", result.ir)
        self.assertTrue(result.optimized_ir.startswith("; Optimized IR\n"))
        self.assertEqual(result.result, "Execution result: 30")

    def test_redeclaration_scenario(self):
        result = compile_source("int main(){ int a = 5; float a = 2.0; return a; }")

        self.assertEqual([str(d) for d in result.diagnostics], ["Variable 'a' re-declared."])
        self.assertEqual(result.symbols["a"], "int")

    def test_undeclared_scenario_skips_interpreter(self):
        result = compile_source("int main(){ return x; }")

        self.assertEqual([str(d) for d in result.diagnostics], ["Undeclared variable: x."])
        self.assertEqual(result.environment, {})
        self.assertTrue(result.has_errors)

    def test_call_scenario(self):
        self.assertEqual(run_codegen("int main(){ return add(2 3); }"), "Execution result: 5")

    def test_folded_then_traced(self):
        result = compile_source("int main(){ int a = 6 * 7; return a; }")
        self.assertIn("  %1 = add i32 42\n", result.optimized_ir)
        self.assertEqual(result.result, "Execution result: 42")

    def test_literal_return(self):
        self.assertEqual(run_codegen("int main(){ return 7; }"), "Execution result: 7")

    def test_no_function(self):
        self.assertEqual(run_codegen("int x = 1;"), "Execution error: no recognizable return.")

    def test_garbage_never_raises(self):
        for source in ("", "@@@", "int main(", "}}}{{{", "int main(){ return 1 + ; }"):
            with self.subTest(source=source):
                result = compile_source(source)
                self.assertIsInstance(result.result, str)
                self.assertIsInstance(result.ast_report, str)

    def test_token_listing(self):
        result = compile_source("return 0;")
        self.assertEqual(result.token_listing, run_lexer("return 0;"))


class TestStageEntryPoints(unittest.TestCase):
    """String-in/string-out stage functions."""

    def test_run_lexer(self):
        self.assertEqual(run_lexer("int a;"),
                         'TOKEN(KEYWORD, "int")\nTOKEN(IDENTIFIER, "a")\nTOKEN(SYMBOL, ";")\n')

    def test_run_ast_success(self):
        report = run_ast(SCENARIO)
        self.assertTrue(report.startswith("• Program\n  • Function: main\n"))
        self.assertTrue(report.endswith("\n\n✅ Semantic analysis passed.\n"))

    def test_run_ast_errors(self):
        report = run_ast("int main(){ return x; }")
        self.assertTrue(report.endswith(
            "\n--- Semantic Errors ---\n❌ Undeclared variable: x.\n"))
        self.assertNotIn("✅", report)

    def test_run_ast_lists_syntax_errors_too(self):
        report = run_ast("int a = 1")
        self.assertIn("❌ Expected ';' but got ''\n", report)

    def test_run_ir(self):
        self.assertEqual(run_ir("int main(){ return 3; }"),
                         "define i32 @main() {\n  ret i32 3\n}\n")

    def test_run_optimized_ir(self):
        optimized = run_optimized_ir("  %1 = sdiv i32 10, 0\n")
        self.assertEqual(optimized, "; Optimized IR\n  %1 = sdiv i32 10, 0\n")

    def test_run_optimized_ir_banner_from_config(self):
        config = CompilerConfig(fold_banner="; peephole")
        self.assertTrue(run_optimized_ir("", config).startswith("; peephole\n"))

    def test_known_function_config(self):
        config = CompilerConfig().with_known_functions(["mul"])
        self.assertIn("✅", run_ast("int main(){ return mul(2 3); }", config))
        self.assertEqual(run_codegen("int main(){ return mul(6 7); }", config),
                         "Execution result: 42")

    def test_no_state_leaks_between_runs(self):
        run_ast("int main(){ int a = 1; }")
        self.assertIn("✅", run_ast("int main(){ int a = 1; }"))

    def test_context_reuse_resets(self):
        context = CompilationContext()
        compile_source("return q;", context=context)
        result = compile_source("int a = 1;", context=context)
        self.assertEqual(result.diagnostics, [])
        self.assertEqual(context.symbol_table.as_dict(), {"a": "int"})

    def test_run_native(self):
        self.assertEqual(run_native(SCENARIO), "Native result: 30")

    def test_run_native_error(self):
        self.assertTrue(run_native("int main(){ return x; }").startswith("Native error: "))

    def test_run_native_rejects_call_to_main(self):
        self.assertIn("✅", run_ast("int main(){ return main(); }"))
        self.assertTrue(run_native("int main(){ return main(); }").startswith("Native error: "))

    def test_char_arithmetic_wraps_to_i8(self):
        source = "int main(){ char a = 'd'; char b = 'd'; char c = a + b; return c; }"
        self.assertEqual(run_codegen(source), "Execution result: -56")

    def test_run_assembly(self):
        self.assertIn("main", run_assembly("int main(){ return 1; }"))


class TestCompilerConfig(unittest.TestCase):
    """Configuration objects are immutable values."""

    def test_hashable(self):
        self.assertEqual(hash(DEFAULT_CONFIG), hash(CompilerConfig()))
        self.assertEqual(len({DEFAULT_CONFIG, CompilerConfig()}), 1)

    def test_storage_type_lookup(self):
        self.assertEqual(DEFAULT_CONFIG.storage_type("char"), "i8")
        self.assertEqual(DEFAULT_CONFIG.storage_type("bool"), "i32")

    def test_with_known_functions_copies(self):
        config = DEFAULT_CONFIG.with_known_functions(["mul", "add"])
        self.assertEqual(config.known_functions, ("main", "add", "sub", "mul"))
        self.assertEqual(DEFAULT_CONFIG.known_functions, ("main", "add", "sub"))


if __name__ == '__main__':
    unittest.main()
