#!/usr/bin/env python3
"""
Tests for shared (memoized, sorted) declarations.
"""

from tests.test_utils import parse, process_it, same_source
from esscope.analysis.injection import inject_shared, inject_variable
from esscope.analysis.scope_builder import build_scopes
from esscope.shared.builders import identifier, member_chain


HAS_OWN_PROPERTY = "Object.prototype.hasOwnProperty"
ARRAY_SLICE = "Array.prototype.slice"


class TestInjectShared:
    """inject_shared() naming, caching and ordering"""

    def test_injects_once_per_key(self):
        names = []

        def inject(path):
            names.append(inject_shared(path.scope, "hasOwnProperty", member_chain(HAS_OWN_PROPERTY)).name)
            names.append(inject_shared(path.scope, "hasOwnProperty", member_chain(HAS_OWN_PROPERTY)).name)
            names.append(inject_shared(path.scope, "arraySlice", member_chain(ARRAY_SLICE)).name)

        program = process_it("IT;", inject)
        assert names == ["$__hasOwnProperty", "$__hasOwnProperty", "$__arraySlice"]
        same_source(
            program,
            "var $__arraySlice = Array.prototype.slice;"
            "var $__hasOwnProperty = Object.prototype.hasOwnProperty;"
            "IT;",
        )

    def test_cached_identifier_is_returned(self):
        program = parse("x;")
        scope = build_scopes(program).root
        first = inject_shared(scope, "k", member_chain("Math.max"))
        second = inject_shared(scope, "k", member_chain("Math.min"))
        assert first is second
        assert len(program.body) == 2
        assert scope.shared_cache == {"k": first}

    def test_keeps_shared_run_sorted_and_contiguous(self):
        program = parse('"use strict"; x;')
        scope = build_scopes(program).root
        for key in ("b", "c", "a"):
            inject_shared(scope, key, member_chain(f"Object.{key}"))
        inject_variable(scope, identifier("plain"))
        inject_shared(scope, "d", member_chain("Object.d"))
        same_source(
            program,
            '"use strict";'
            "var plain;"
            "var $__a = Object.a;"
            "var $__b = Object.b;"
            "var $__c = Object.c;"
            "var $__d = Object.d;"
            "x;",
        )

    def test_name_avoids_existing_bindings(self):
        program = parse("var $__slice; IT;")
        scope = build_scopes(program).root
        assert inject_shared(scope, "slice", member_chain(ARRAY_SLICE)).name == "$__slice0"
        assert scope.declares("$__slice0")

    def test_cache_is_per_scope(self):
        ids = []

        def inject(path):
            inner = inject_shared(path.scope, "max", member_chain("Math.max"))
            outer = inject_shared(path.scope.parent, "max", member_chain("Math.max"))
            ids.extend([inner, outer])

        program = process_it("function f() { IT; }", inject)
        inner, outer = ids
        assert inner is not outer
        # A binding in the inner scope does not make the name used outside it
        assert inner.name == "$__max"
        assert outer.name == "$__max"
        same_source(program, "var $__max = Math.max; function f() { var $__max = Math.max; IT; }")

    def test_catch_body_shares_bind_in_function(self):
        ids = []

        def inject(path):
            ids.append(inject_shared(path.scope, "max", member_chain("Math.max")))
            ids.append(inject_shared(path.scope.parent, "max", member_chain("Math.max")))

        program = process_it("function f() { try {} catch (e) { IT; } }", inject)
        in_catch, in_function = ids
        assert in_catch.name == "$__max"
        assert in_function.name == "$__max0"
        same_source(program, "function f() { var $__max0 = Math.max; "
                             "try {} catch (e) { var $__max = Math.max; IT; } }")

    def test_removed_shared_declaration_is_skipped(self):
        program = parse("x;")
        scope = build_scopes(program).root
        inject_shared(scope, "a", member_chain("A.a"))
        del program.body[0]
        inject_shared(scope, "b", member_chain("B.b"))
        same_source(program, "var $__b = B.b; x;")
