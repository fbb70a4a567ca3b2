#!/usr/bin/env python3
"""
Tests for free-name checking relative to a scope.
"""

import sys
import pytest
from tests.test_utils import process_it
from esscope.analysis.free_names import is_free, is_used
from esscope.analysis.globals import get_global_names
from esscope.analysis.injection import inject_variable
from esscope.analysis.scope_builder import build_scopes
from esscope.shared.builders import call, expression_statement, identifier
from esscope.shared.nodes import (
    BinaryExpression, BlockStatement, FunctionExpression, Identifier, Program, ReturnStatement,
)


class TestIsUsedGlobal:
    """is_used() at the program scope"""

    @pytest.fixture
    def global_scope(self, scoped):
        def _global_scope(source):
            _, scopes = scoped(source)
            return scopes.root
        return _global_scope

    def test_declared_at_top_level(self, global_scope):
        assert is_used(global_scope("var a;"), "a")

    def test_referenced_at_top_level(self, global_scope):
        assert is_used(global_scope("a;"), "a")

    def test_not_declared_or_referenced(self, global_scope):
        scope = global_scope("var a, b; c;")
        assert not is_used(scope, "d")
        assert is_free(scope, "d")

    @pytest.mark.parametrize("name", ["a", "b"])
    def test_inner_declarations_do_not_count(self, global_scope, name):
        assert not is_used(global_scope("function foo(a) { var b; }"), name)

    @pytest.mark.parametrize("name", ["a", "b"])
    def test_global_references_in_inner_scopes(self, global_scope, name):
        assert is_used(global_scope("function foo() { return a + b; }"), name)

    def test_function_declaration_name(self, global_scope):
        assert is_used(global_scope("function foo() {}"), "foo")

    def test_shadowed_reference_does_not_count(self, global_scope):
        assert not is_used(global_scope("function foo(a) { return a; }"), "a")

    def test_property_names_do_not_count(self, global_scope):
        scope = global_scope("var o = { a: 1 }; o.b; o['c'];")
        assert not is_used(scope, "a")
        assert not is_used(scope, "b")
        assert not is_used(scope, "c")

    def test_computed_member_reference_counts(self, global_scope):
        assert is_used(global_scope("o[key];"), "key")

    def test_shorthand_property_value_counts(self, global_scope):
        assert is_used(global_scope("({ a });"), "a")

    def test_labels_do_not_count(self, global_scope):
        assert not is_used(global_scope("outer: for (;;) { break outer; }"), "outer")

    def test_imported_names_are_declared(self, global_scope):
        scope = global_scope('import { foo as bar } from "m";')
        assert is_used(scope, "bar")
        assert not is_used(scope, "foo")

    def test_let_declaration(self, global_scope):
        assert is_used(global_scope("let x = 1;"), "x")


class TestIsUsedNested:
    """is_used() at inner scopes"""

    def test_outer_declaration_not_used_in_inner_scope(self):
        results = []
        process_it("var a; function f() { IT; }", lambda path: results.append(is_used(path.scope, "a")))
        assert results == [False]

    def test_reference_resolving_to_outer_scope_is_used(self):
        results = []
        process_it("var a; function f() { IT; a; }", lambda path: results.append(is_used(path.scope, "a")))
        assert results == [True]

    def test_catch_scope_declares_its_parameter(self):
        results = []
        process_it("try {} catch (e) { IT; }", lambda path: results.append(is_used(path.scope, "e")))
        assert results == [True]

    def test_injected_names_are_used(self):
        results = []

        def check(path):
            inject_variable(path.scope, Identifier("fresh"))
            results.append(is_used(path.scope, "fresh"))
            results.append(is_used(path.scope.parent, "fresh"))

        process_it("function f() { IT; }", check)
        assert results == [True, False]


class TestDeepNesting:
    """Walks over generated code nested far past the recursion limit"""

    DEPTH = 3000

    @classmethod
    def _nested_program(cls):
        # function (p) { return function () { ... return function () { return free + p; } } }
        body = ReturnStatement(BinaryExpression("+", identifier("free"), identifier("p")))
        for _ in range(cls.DEPTH - 1):
            body = ReturnStatement(FunctionExpression(None, [], BlockStatement([body])))
        outer = FunctionExpression(None, [identifier("p")], BlockStatement([body]))
        return Program([expression_statement(call(outer))])

    def test_depth_exceeds_recursion_limit(self):
        assert self.DEPTH > sys.getrecursionlimit()

    def test_scopes_and_globals(self):
        program = self._nested_program()
        scopes = build_scopes(program)
        assert len(scopes) == self.DEPTH + 1
        assert get_global_names(program, scopes) == ["free"]

    def test_is_used_at_root(self):
        program = self._nested_program()
        root = build_scopes(program).root
        assert is_used(root, "free")
        assert not is_used(root, "p")
        assert is_free(root, "p")
