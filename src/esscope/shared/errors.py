"""
Error Reporting

Diagnostics are rendered rustc-style: a header, a ``-->`` location arrow, the
offending source line and a caret underline, plus optional help/note lines.
"""

import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional

from .source_location import SourceLocation


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("ESSCOPE_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    if explicit in ("1", "true", "yes", "always"):
        return True
    return sys.stderr.isatty()

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color or not codes:
        return text
    return f"{''.join(codes)}{text}{_RESET}"


# ---------------------------------------------------------------------------
# Diagnostic dataclasses
# ---------------------------------------------------------------------------

@dataclass
class Error:
    """One diagnostic about a source file."""
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    help: Optional[str] = None
    note: Optional[str] = None
    label: Optional[str] = None


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def _format_diagnostic(
    error: Error,
    source_files: Dict[str, str],
    color: bool = False,
) -> str:
    """
    Render a single diagnostic.

    Example output (plain, no color)::

        error[E0001]: unexpected token ')'
         --> input.js:1:13
          |
        1 | function f(a,) {}
          |             ^ expected a parameter name
    """
    out: List[str] = []
    code_str = f"[{error.code}]" if error.code else ""
    out.append(
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {error.message}", _BOLD, color=color)
    )

    loc = error.location
    if loc is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_annotations(out, error, 1, color)
        return "\n".join(out)

    source = source_files.get(loc.file)
    gutter_width = max(len(str(loc.line)), 1)
    out.append(
        _style(" " * gutter_width + "--> ", _BOLD, _BLUE, color=color)
        + f"{loc.file}:{loc.line}:{loc.column}"
    )
    if source is None:
        _append_annotations(out, error, gutter_width, color)
        return "\n".join(out)

    src_lines = source.split("\n")
    code_line = src_lines[loc.line - 1] if 0 < loc.line <= len(src_lines) else ""
    col_start = max(loc.column, 1) - 1
    if loc.end_line == loc.line and loc.end_column > loc.column:
        span_len = loc.end_column - loc.column
    else:
        span_len = _guess_span(code_line, col_start)

    bar = _style(" " * (gutter_width + 1) + "|", _BOLD, _BLUE, color=color)
    out.append(bar)
    out.append(_style(str(loc.line).rjust(gutter_width) + " | ", _BOLD, _BLUE, color=color) + code_line)
    label_suffix = f" {error.label}" if error.label else ""
    carets = " " * col_start + "^" * max(1, span_len) + label_suffix
    out.append(
        _style(" " * (gutter_width + 1) + "| ", _BOLD, _BLUE, color=color)
        + _style(carets, _BOLD, _RED, color=color)
    )
    _append_annotations(out, error, gutter_width, color)
    return "\n".join(out)


def _guess_span(code_line: str, col_start: int) -> int:
    """Guess token length when the end column is unavailable."""
    length = 0
    for ch in code_line[col_start:]:
        if ch in (" ", "\t", ";", ",", "(", ")", "[", "]", "{", "}"):
            break
        length += 1
    return max(1, length)


def _append_annotations(out: List[str], error: Error, gutter_width: int, color: bool) -> None:
    if not (error.help or error.note):
        return
    pad = " " * (gutter_width + 1)
    out.append(_style(pad + "|", _BOLD, _BLUE, color=color))
    for title, text in (("help", error.help), ("note", error.note)):
        if text:
            out.append(
                _style(f"{pad}= ", _BOLD, _CYAN, color=color)
                + _style(f"{title}: ", _BOLD, color=color)
                + text
            )


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """Collects diagnostics and renders them against the known source files."""

    def __init__(self, source_files: Dict[str, str]):
        self.source_files = source_files
        self.errors: List[Error] = []

    def report_error(
        self,
        message: str,
        location: Optional[SourceLocation],
        code: Optional[str] = None,
        help: Optional[str] = None,
        note: Optional[str] = None,
        label: Optional[str] = None,
    ) -> None:
        self.errors.append(Error(
            message=message,
            location=location,
            code=code,
            help=help,
            note=note,
            label=label,
        ))

    def report_exception(self, exc: "EsscopeError") -> None:
        self.report_error(
            exc.message,
            exc.location,
            code=getattr(exc, "error_code", None),
            help=getattr(exc, "help_text", None),
            note=getattr(exc, "note_text", None),
            label=getattr(exc, "label_text", None),
        )

    def format_error(self, error: Error, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(error, self.source_files, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        parts = [self.format_error(e, color=use_color) for e in self.errors]
        count = len(self.errors)
        summary = f"aborting due to {count} previous error{'s' if count != 1 else ''}"
        parts.append(
            _style("error", _BOLD, _RED, color=use_color)
            + _style(f": {summary}", _BOLD, color=use_color)
        )
        return "\n\n".join(parts)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def print_errors(self) -> None:
        if self.errors:
            print(self.format_all_errors(), file=sys.stderr)


# ============================================================================
# Exception Classes
# ============================================================================

class EsscopeError(Exception):
    """Base exception for all esscope errors"""
    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"{self.message} ({self.location})"
        return self.message


class EsscopeSourceError(EsscopeError):
    """
    Error in the JavaScript source being analyzed, rendered with a snippet
    when the source text is attached.
    """
    def __init__(self,
                 message: str,
                 location: Optional[SourceLocation] = None,
                 error_code: str = "E0001",
                 source_code: Optional[str] = None,
                 help: Optional[str] = None,
                 note: Optional[str] = None,
                 label: Optional[str] = None):
        super().__init__(message, location)
        self.error_code = error_code
        self.source_code = source_code
        self.help_text = help
        self.note_text = note
        self.label_text = label

    def __str__(self):
        source_files: Dict[str, str] = {}
        if self.source_code is not None and self.location:
            source_files[self.location.file] = self.source_code
        err = Error(
            message=self.message,
            location=self.location,
            code=self.error_code,
            help=self.help_text,
            note=self.note_text,
            label=self.label_text,
        )
        return _format_diagnostic(err, source_files, color=False)


class EsscopeImplementationError(Exception):
    """
    Internal invariant violation (a bug in esscope or a misuse of its API),
    never a problem in the analyzed source.
    """
    def __init__(self, message: str, error_code: str = "E9999"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class InjectionError(EsscopeError):
    """A declaration cannot be placed in the requested scope."""


class ScopeLookupError(EsscopeError):
    """A node or path has no scope recorded for it."""
