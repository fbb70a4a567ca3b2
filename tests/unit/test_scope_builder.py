#!/usr/bin/env python3
"""
Tests for scope construction: anchors, hoisting and the scope arena.
"""

import pytest
from tests.test_utils import parse
from esscope.analysis.scope_builder import build_scopes
from esscope.shared.ast_visitor import iter_paths, traverse
from esscope.shared.errors import EsscopeImplementationError, ScopeLookupError
from esscope.shared.nodes import CatchClause, FunctionDeclaration, Identifier
from esscope.shared.scope import ScopeKind, ScopeTree


def _scopes(source):
    program = parse(source)
    return program, build_scopes(program)


class TestScopeBuilder:
    """Which scope each declaration lands in"""

    def test_program_scope_is_root(self):
        program, scopes = _scopes("var a;")
        assert len(scopes) == 1
        assert scopes.root.kind is ScopeKind.PROGRAM
        assert scopes.root.node is program
        assert scopes.root.is_global
        assert scopes.scope_of(program) is scopes.root

    def test_var_hoists_out_of_blocks(self):
        _, scopes = _scopes("if (x) { var a; } for (var i = 0; i < 1; i++) {} for (var k in o) {}")
        assert scopes.root.declared_names() == ["a", "i", "k"]

    def test_function_scopes(self):
        program, scopes = _scopes("function f(a, b = 1) { var c; function g() {} }")
        function_scope = scopes.scope_of(program.body[0])
        assert function_scope.kind is ScopeKind.FUNCTION
        assert scopes.root.declared_names() == ["f"]
        assert function_scope.declared_names() == ["a", "b", "c", "g"]
        assert function_scope.parent is scopes.root
        assert function_scope.depth == 1

    def test_named_function_expression_binds_in_own_scope(self):
        program, scopes = _scopes("var h = function named() {};")
        expression = program.body[0].declarations[0].init
        assert scopes.scope_of(expression).declares("named")
        assert not scopes.root.declares("named")

    def test_catch_scope(self):
        program, scopes = _scopes("try {} catch (e) { var v; }")
        handler = program.body[0].handler
        assert isinstance(handler, CatchClause)
        catch_scope = scopes.scope_of(handler)
        assert catch_scope.kind is ScopeKind.CATCH
        assert catch_scope.declared_names() == ["e"]
        assert scopes.root.declares("v")

    def test_class_expression_scope(self):
        program, scopes = _scopes("var C = class K { m() { let x; } };")
        class_node = program.body[0].declarations[0].init
        class_scope = scopes.scope_of(class_node)
        assert class_scope.kind is ScopeKind.CLASS
        assert class_scope.declared_names() == ["K"]
        method_scope = scopes.children_of(class_scope)[0]
        assert method_scope.declared_names() == ["x"]

    def test_anonymous_class_expression_has_no_scope(self):
        _, scopes = _scopes("var C = class { m() {} };")
        assert [scope.kind for scope in scopes] == [ScopeKind.PROGRAM, ScopeKind.FUNCTION]

    def test_class_declaration_and_lexical_declarations(self):
        _, scopes = _scopes("class A {} let b; const c = 1;")
        assert scopes.root.declared_names() == ["A", "b", "c"]

    def test_imports_bind_in_program_scope(self):
        _, scopes = _scopes('import a, { b as c } from "m"; import * as ns from "n"; import "side";')
        assert scopes.root.declared_names() == ["a", "c", "ns"]

    def test_repeated_declarations_accumulate_nodes(self):
        _, scopes = _scopes("var a; var a;")
        assert len(scopes.root.declared["a"]) == 2

    def test_lookup_and_ancestors(self):
        program, scopes = _scopes("var a; function f(b) { function g() {} }")
        f_scope = scopes.scope_of(program.body[1])
        g_scope = scopes.children_of(f_scope)[0]
        assert [scope.scope_id for scope in g_scope.ancestors()] == [2, 1, 0]
        assert g_scope.lookup("a") is scopes.root
        assert g_scope.lookup("b") is f_scope
        assert g_scope.lookup("zzz") is None
        assert scopes.root.is_ancestor_of(g_scope)
        assert not g_scope.is_ancestor_of(g_scope)

    def test_forget(self):
        _, scopes = _scopes("var a;")
        scopes.root.forget("a")
        assert not scopes.root.declares("a")

    def test_empty_tree_has_no_root(self):
        with pytest.raises(LookupError):
            ScopeTree().root


class TestTraversal:
    """Paths, scopes on paths, and replacement during a walk"""

    def test_paths_carry_innermost_scope(self):
        program, scopes = _scopes("a; function f() { b; }")
        kinds = {path.node.name: path.scope.kind for path in iter_paths(program, scopes)
                 if isinstance(path.node, Identifier)}
        assert kinds == {"a": ScopeKind.PROGRAM, "f": ScopeKind.FUNCTION, "b": ScopeKind.FUNCTION}

    def test_traverse_builds_scopes(self):
        program = parse("function f() {}")
        visited = []
        scopes = traverse(program, lambda path: visited.append(type(path.node).__name__))
        assert len(scopes) == 2
        assert visited[:2] == ["Program", "FunctionDeclaration"]

    def test_skip(self):
        program = parse("function f() { inner; } outer;")
        seen = []

        def visit(path):
            if isinstance(path.node, FunctionDeclaration):
                path.skip()
            elif isinstance(path.node, Identifier):
                seen.append(path.node.name)

        traverse(program, visit)
        assert seen == ["outer"]

    def test_replacement_is_not_descended(self):
        program = parse("a;")
        seen = []

        def visit(path):
            if isinstance(path.node, Identifier):
                seen.append(path.node.name)
                if path.node.name == "a":
                    path.replace(Identifier("a"))

        traverse(program, visit)
        assert seen == ["a"]

    def test_cannot_replace_root(self):
        program = parse("a;")
        root_path = next(iter_paths(program))
        with pytest.raises(EsscopeImplementationError):
            root_path.replace(parse("b;"))

    def test_require_scope(self):
        program = parse("a;")
        path = next(iter_paths(program))
        with pytest.raises(ScopeLookupError):
            path.require_scope()
