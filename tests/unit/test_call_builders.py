#!/usr/bin/env python3
"""
Tests for calls through shared native members.
"""

import pytest
from tests.test_utils import process_it, same_source
from esscope.analysis.builders import (
    call_array_slice, call_function_bind, call_get_own_property_descriptor, call_get_prototype_of,
    call_has_own_property, shared_member,
)
from esscope.shared.builders import identifier, literal, this_expression
from esscope.shared.nodes import Identifier


def _replace_it(source, build):
    return process_it(source, lambda path: path.replace(build(path.scope, path.node)))


class TestCallBuilders:
    """Each builder injects its shared reference and calls through it"""

    def test_has_own_property(self):
        program = _replace_it("IT;", lambda scope, node: call_has_own_property(scope, node, "is"))
        same_source(
            program,
            "var $__Object$prototype$hasOwnProperty = Object.prototype.hasOwnProperty;"
            '$__Object$prototype$hasOwnProperty.call(IT, "is");',
        )

    def test_get_own_property_descriptor(self):
        program = _replace_it("IT;", lambda scope, node: call_get_own_property_descriptor(scope, node, "is"))
        same_source(
            program,
            "var $__Object$getOwnPropertyDescriptor = Object.getOwnPropertyDescriptor;"
            '$__Object$getOwnPropertyDescriptor(IT, "is");',
        )

    def test_get_prototype_of(self):
        program = _replace_it("IT;", call_get_prototype_of)
        same_source(
            program,
            "var $__Object$getPrototypeOf = Object.getPrototypeOf;"
            "$__Object$getPrototypeOf(IT);",
        )

    def test_array_slice_without_bounds(self):
        program = _replace_it("IT;", call_array_slice)
        same_source(
            program,
            "var $__Array$prototype$slice = Array.prototype.slice;"
            "$__Array$prototype$slice.call(IT);",
        )

    def test_array_slice_with_bounds(self):
        program = _replace_it("IT;", lambda scope, node: call_array_slice(scope, node, 1, 2))
        same_source(
            program,
            "var $__Array$prototype$slice = Array.prototype.slice;"
            "$__Array$prototype$slice.call(IT, 1, 2);",
        )

    def test_array_slice_end_only_starts_at_zero(self):
        program = _replace_it("IT;", lambda scope, node: call_array_slice(scope, node, end=literal(3)))
        same_source(
            program,
            "var $__Array$prototype$slice = Array.prototype.slice;"
            "$__Array$prototype$slice.call(IT, 0, 3);",
        )

    def test_function_bind_with_argument_list(self):
        program = _replace_it("IT;", lambda scope, node: call_function_bind(
            scope, node, this_expression(), [literal(1)]))
        same_source(
            program,
            "var $__Function$prototype$bind = Function.prototype.bind;"
            "$__Function$prototype$bind.call(IT, this, 1);",
        )

    def test_function_bind_with_argument_expression(self):
        program = _replace_it("IT;", lambda scope, node: call_function_bind(
            scope, node, this_expression(), identifier("args")))
        same_source(
            program,
            "var $__Function$prototype$bind = Function.prototype.bind;"
            "$__Function$prototype$bind.apply(IT, [this].concat(args));",
        )

    def test_function_bind_rejects_string_arguments(self):
        with pytest.raises(TypeError):
            process_it("IT;", lambda path: call_function_bind(path.scope, path.node, this_expression(), "args"))

    def test_repeated_builders_share_one_declaration(self):
        program = process_it("IT; IT;", lambda path: path.replace(call_array_slice(path.scope, path.node)))
        same_source(
            program,
            "var $__Array$prototype$slice = Array.prototype.slice;"
            "$__Array$prototype$slice.call(IT);"
            "$__Array$prototype$slice.call(IT);",
        )

    def test_shared_member_returns_fresh_references(self):
        refs = []
        scopes = []

        def build(path):
            scopes.append(path.scope)
            refs.append(shared_member(path.scope, "Math.max"))
            refs.append(shared_member(path.scope, "Math.max"))

        process_it("IT;", build)
        first, second = refs
        assert isinstance(first, Identifier)
        assert first is not second
        assert first.name == second.name == "$__Math$max"
        assert scopes[0].declares(first.name)
        assert first is not scopes[0].shared_cache["Math.max"]
