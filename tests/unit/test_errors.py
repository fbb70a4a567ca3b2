#!/usr/bin/env python3
"""
Tests for error reporting: the diagnostic formatter, the exception hierarchy
and the source pointers of parse errors.
"""

import re
import pytest
from esscope.frontend.parser import ParseError
from esscope.shared.errors import (
    EsscopeError,
    EsscopeImplementationError,
    EsscopeSourceError,
    Error,
    ErrorReporter,
    InjectionError,
    ScopeLookupError,
)
from esscope.shared.source_location import SourceLocation

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


class TestErrorReporter:
    """Edge cases for the diagnostic formatter"""

    def test_location_none(self):
        err = Error(message="something failed", location=None, code="E0002")
        out = ErrorReporter({}).format_error(err, color=False)
        assert "error[E0002]" in out
        assert "something failed" in out
        assert "unknown location" in out

    def test_file_not_in_source_files(self):
        loc = SourceLocation(file="missing.js", line=1, column=1)
        out = ErrorReporter({}).format_error(Error(message="oops", location=loc, code="E0001"), color=False)
        assert "missing.js:1:1" in out

    def test_line_beyond_source(self):
        loc = SourceLocation(file="x.js", line=10, column=1)
        out = ErrorReporter({"x.js": "var a;\nvar b;\n"}).format_error(Error(message="bad", location=loc), color=False)
        assert " --> x.js:10:1" in out

    def test_label_and_help(self):
        loc = SourceLocation(file="f.js", line=1, column=5)
        err = Error(message="unexpected token", location=loc, label="here", help="add an expression")
        out = ErrorReporter({"f.js": "var = 1;"}).format_error(err, color=False)
        assert "1 | var = 1;" in out
        assert "^ here" in out
        assert "= help: add an expression" in out

    def test_multiple_errors_summary(self):
        reporter = ErrorReporter({"a.js": "var x = ;"})
        loc = SourceLocation(file="a.js", line=1, column=9)
        reporter.report_error("first", loc, code="E0001")
        reporter.report_error("second", loc, code="E0001")
        assert reporter.has_errors()
        out = reporter.format_all_errors(color=False)
        assert "first" in out and "second" in out
        assert "aborting due to 2 previous errors" in out

    def test_report_exception(self):
        reporter = ErrorReporter({})
        reporter.report_exception(EsscopeSourceError("bad thing", help="try again", error_code="E0001"))
        out = reporter.format_all_errors(color=False)
        assert "error[E0001]: bad thing" in out
        assert "try again" in out

    def test_color_can_be_forced(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("ESSCOPE_COLOR", "always")
        reporter = ErrorReporter({})
        reporter.report_error("colored", None)
        assert "\x1b[" in reporter.format_all_errors()
        monkeypatch.setenv("NO_COLOR", "1")
        assert "\x1b[" not in reporter.format_all_errors()


class TestExceptions:
    """Exception hierarchy and string forms"""

    def test_hierarchy(self):
        assert issubclass(ParseError, EsscopeSourceError)
        assert issubclass(EsscopeSourceError, EsscopeError)
        assert issubclass(InjectionError, EsscopeError)
        assert issubclass(ScopeLookupError, EsscopeError)
        assert not issubclass(EsscopeImplementationError, EsscopeError)

    def test_error_str_includes_location(self):
        loc = SourceLocation(file="z.js", line=3, column=4)
        assert str(EsscopeError("broken", loc)) == "broken (z.js:3:4)"
        assert str(EsscopeError("broken")) == "broken"

    def test_implementation_error_str(self):
        assert str(EsscopeImplementationError("invariant")) == "[E9999] invariant"

    def test_source_error_str_with_source(self):
        loc = SourceLocation(file="y.js", line=1, column=9, end_line=1, end_column=12)
        error = EsscopeSourceError("bad operand", location=loc, source_code="var x = 1/0;")
        plain = _strip_ansi(str(error))
        assert "bad operand" in plain
        assert "1 | var x = 1/0;" in plain
        assert "^^^" in plain


class TestParseErrorPointers:
    """Parse errors point at the offending token"""

    @staticmethod
    def _caret_column(rendered: str) -> int:
        lines = [_strip_ansi(line) for line in rendered.split("\n")]
        for line in lines:
            after_pipe = line.split("|", 1)[1] if "|" in line else ""
            if "^" in after_pipe:
                return after_pipe.index("^")
        raise AssertionError(f"no caret in:\n{rendered}")

    @pytest.mark.parametrize("source,token", [
        ("var x = ;", ";"),
        ("var = 1;", "="),
        ("function f(a,) {}", ")"),
        ("a.;", ";"),
    ])
    def test_pointer_position(self, parser, source, token):
        with pytest.raises(ParseError) as excinfo:
            parser.parse(source, "p.js")
        rendered = str(excinfo.value)
        source_line = next(line for line in rendered.split("\n") if "| " + source in _strip_ansi(line))
        token_column = _strip_ansi(source_line).split("|", 1)[1].index(token)
        assert abs(self._caret_column(rendered) - token_column) <= 1, rendered
