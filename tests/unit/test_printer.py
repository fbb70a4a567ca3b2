#!/usr/bin/env python3
"""
Tests for the source printer: canonical layout, precedence-driven
parentheses and stability of parse/print round trips.
"""

import pytest
from tests.test_utils import normalize
from esscope.backends.printer import format_number, print_node
from esscope.shared.builders import array, call, identifier, literal, member, this_expression
from esscope.shared.nodes import (
    BinaryExpression, BlockStatement, ExpressionStatement, FunctionExpression, Program, UnaryExpression,
)


class TestPrinterLayout:
    """Statement layout and indentation"""

    def test_statements_one_per_line(self):
        assert normalize("var a = 1; a") == "var a = 1;\na;"

    def test_function_body_is_indented(self):
        assert normalize("function f(a, b) { return a + b }") == (
            "function f(a, b) {\n"
            "  return a + b;\n"
            "}"
        )

    def test_empty_blocks(self):
        assert normalize("function f() {} if (a) {} else {}") == "function f() {}\nif (a) {} else {}"

    def test_if_without_block(self):
        assert normalize("if (a) b; else c;") == "if (a)\n  b;\nelse\n  c;"

    def test_strings_are_double_quoted(self):
        assert normalize("'it'") == '"it";'

    def test_numbers_keep_their_spelling(self):
        assert normalize("0x10; 1.50;") == "0x10;\n1.50;"

    def test_try_catch(self):
        assert normalize("try { a } catch (e) {} finally { b }") == (
            "try {\n  a;\n} catch (e) {} finally {\n  b;\n}"
        )

    def test_modules(self):
        source = 'import a, { b as c, d } from "m"; export { a as e }; export default f;'
        assert normalize(source) == (
            'import a, { b as c, d } from "m";\n'
            "export { a as e };\n"
            "export default f;"
        )

    def test_class(self):
        assert normalize("class A extends B { static m() { return 1 } }") == (
            "class A extends B {\n"
            "  static m() {\n"
            "    return 1;\n"
            "  }\n"
            "}"
        )

    def test_object_literal(self):
        assert normalize("x = {a: 1, b, [c]: 2, d() {}}") == "x = { a: 1, b, [c]: 2, d() {} };"


class TestPrinterParentheses:
    """Parentheses only where needed"""

    @pytest.mark.parametrize("source,expected", [
        ("(a + b) * c;", "(a + b) * c;"),
        ("a + (b * c);", "a + b * c;"),
        ("a - (b - c);", "a - (b - c);"),
        ("(a, b);", "a, b;"),
        ("f((a, b));", "f((a, b));"),
        ("(a = b) + c;", "(a = b) + c;"),
        ("(function () {})();", "(function() {}());"),
        ("({}).x;", "({}.x);"),
        ("new (f())();", "new (f())();"),
        ("(new F).x;", "new F().x;"),
        ("- -a;", "- -a;"),
        ("typeof a;", "typeof a;"),
    ])
    def test_round_trip(self, source, expected):
        assert normalize(source) == expected

    def test_statement_start_function_is_wrapped(self):
        program = Program([ExpressionStatement(call(FunctionExpression(None, [], BlockStatement([]))))])
        assert print_node(program) == "(function() {}());"

    def test_built_nodes(self):
        expression = call(member(array([this_expression()]), "concat"), [identifier("args")])
        assert print_node(expression) == "[this].concat(args)"
        assert print_node(BinaryExpression("*", BinaryExpression("+", literal(1), literal(2)), literal(3))) == "(1 + 2) * 3"
        assert print_node(UnaryExpression("-", literal(-1))) == "- -1"

    @pytest.mark.parametrize("source", [
        "var a = function b(c) { return c ? d : e; };",
        "for (var i = 0; i < 10; i++) { if (i % 2) continue; }",
        "label: while (true) { break label; }",
        "do x++; while (x < 5);",
        "a = b ? c : d, e;",
        "o.p[q](r).s = !t instanceof U;",
    ])
    def test_normalize_is_stable(self, source):
        once = normalize(source)
        assert normalize(once) == once


class TestFormatNumber:
    """Numbers without a source spelling"""

    @pytest.mark.parametrize("value,expected", [
        (1, "1"), (2.0, "2"), (0.5, "0.5"), (float("inf"), "Infinity"), (float("nan"), "NaN"),
    ])
    def test_format(self, value, expected):
        assert format_number(value) == expected
