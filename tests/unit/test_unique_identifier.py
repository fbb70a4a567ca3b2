#!/usr/bin/env python3
"""
Tests for unique name generation: candidate sequence, sanitizing and the
collision checks against the scope chain.
"""

from itertools import islice

import pytest
from tests.test_utils import process_it
from esscope.analysis.injection import inject_variable
from esscope.analysis.naming import candidate_names, sanitize_name, unique_identifier


def _unique_at_it(source: str, name=None) -> str:
    found = []
    process_it(source, lambda path: found.append(unique_identifier(path.scope, name)))
    assert len(found) == 1, "expected exactly one IT identifier"
    return found[0].name


class TestCandidateNames:
    """Candidate sequence and stem sanitizing"""

    def test_numeric_sequence_without_stem(self):
        assert list(islice(candidate_names(), 3)) == ["$__0", "$__1", "$__2"]

    def test_stem_then_numeric_suffixes(self):
        assert list(islice(candidate_names("o"), 3)) == ["$__o", "$__o0", "$__o1"]

    def test_sanitize_replaces_unsafe_characters(self):
        assert sanitize_name("Hello there, how are you?") == "Hello$there$$how$are$you$"
        assert sanitize_name("Object.prototype.slice") == "Object$prototype$slice"
        assert sanitize_name("a_b$c9") == "a_b$c9"

    def test_empty_stem_falls_back_to_numbers(self):
        assert list(islice(candidate_names(""), 2)) == ["$__0", "$__1"]


class TestUniqueIdentifier:
    """First candidate not used at the scope or any ancestor"""

    def test_no_variables(self):
        assert _unique_at_it("IT;") == "$__0"

    def test_skips_declared(self):
        assert _unique_at_it("var $__0, $__1; IT") == "$__2"

    def test_skips_hoisted(self):
        assert _unique_at_it("IT; var $__0, $__1;") == "$__2"

    def test_skips_parameters(self):
        assert _unique_at_it("function foo(a, $__0, b) { IT; }") == "$__1"

    def test_skips_default_parameters(self):
        assert _unique_at_it("function foo($__0 = 1) { IT; }") == "$__1"

    def test_skips_catch_parameter(self):
        assert _unique_at_it("try {} catch ($__0) { IT; }") == "$__1"

    def test_skips_parent_scopes(self):
        assert _unique_at_it("var $__0; function outer($__1) { function $__2() { IT; } }") == "$__3"

    def test_ignores_names_only_bound_in_inner_scopes(self):
        assert _unique_at_it("IT; (function($__0){ var $__1; })();") == "$__0"

    def test_skips_global_references(self):
        assert _unique_at_it("$__0; IT;") == "$__1"

    def test_skips_references_that_escape_inner_scopes(self):
        assert _unique_at_it("IT; function f() { return $__0; }") == "$__1"

    def test_descriptive_name(self):
        assert _unique_at_it("IT;", "aName") == "$__aName"

    def test_descriptive_name_gets_numeric_suffix(self):
        source = "var $__o; $__o0; (function($__o1){ IT; }); function $__o2(){}"
        assert _unique_at_it(source, "o") == "$__o3"

    def test_descriptive_name_is_sanitized(self):
        assert _unique_at_it("IT;", "Hello there, how are you?") == "$__Hello$there$$how$are$you$"

    def test_result_is_not_declared(self):
        scopes = []

        def check(path):
            identifier = unique_identifier(path.scope)
            scopes.append((path.scope, identifier))

        process_it("IT;", check)
        scope, identifier = scopes[0]
        assert not scope.declares(identifier.name)
        assert identifier.location is None

    def test_sees_earlier_injections(self):
        names = []

        def check(path):
            first = unique_identifier(path.scope)
            inject_variable(path.scope, first)
            names.append(first.name)
            names.append(unique_identifier(path.scope).name)

        process_it("function f() { IT; }", check)
        assert names == ["$__0", "$__1"]

    @pytest.mark.parametrize("source,expected", [
        ("var f = function $__0() { IT; };", "$__1"),
        ("var C = class $__0 { m() { IT; } };", "$__1"),
        ("import $__0 from 'm'; IT;", "$__1"),
        ("let $__0 = 1; const $__1 = 2; IT;", "$__2"),
    ])
    def test_other_binding_forms(self, source, expected):
        assert _unique_at_it(source) == expected
