"""
Parser

Lark LALR parser for the ECMAScript subset, plus the post-lexer that tells
statement-start braces and declarations apart from their expression forms.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional, Union

from lark import Lark
from lark.exceptions import LarkError, UnexpectedCharacters, UnexpectedEOF, UnexpectedToken, VisitError
from lark.lark import PostLex
from lark.lexer import Token

from ..shared.errors import EsscopeSourceError
from ..shared.nodes import Program
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_SOURCE_NAME, PARSE_ERROR_CODE
from ..utils.io_utils import read_source_file
from .transformers.base import EsscopeTransformer

logger = logging.getLogger(__name__)

# Previous token values after which a new statement begins
_STATEMENT_BOUNDARIES = frozenset({";", "}", ")", "else", "try", "finally", "do"})
# Declarations may additionally follow these keywords
_DECLARATION_PREFIXES = frozenset({"export", "default"})


class StatementStartPostLex(PostLex):
    """
    Retype ``{``, ``function`` and ``class`` that open a statement.

    The LALR grammar cannot otherwise tell a block from an object literal, or
    a function declaration from a function expression, after a statement
    boundary. A token opens a statement when it is the first token, or follows
    ``;``, ``}``, ``)``, a block-opening brace or one of ``else try finally do``.
    """

    always_accept = ()

    def process(self, stream: Iterator[Token]) -> Iterator[Token]:
        previous: Optional[Token] = None
        for token in stream:
            at_statement_start = (
                previous is None
                or previous.type == "_BLOCK_OPEN"
                or previous.value in _STATEMENT_BOUNDARIES
            )
            if token.type == "_LBRACE" and at_statement_start:
                token = Token.new_borrow_pos("_BLOCK_OPEN", token.value, token)
            elif token.type in ("_FUNCTION", "_CLASS") and (
                at_statement_start or previous.value in _DECLARATION_PREFIXES
            ):
                token = Token.new_borrow_pos(f"{token.type}_DECL", token.value, token)
            yield token
            previous = token


class ParseError(EsscopeSourceError):
    """Syntax error in parsed JavaScript source"""

    def __init__(self, message: str, location: Optional[SourceLocation] = None,
                 source_code: Optional[str] = None, label: Optional[str] = None,
                 help: Optional[str] = None):
        super().__init__(message, location, error_code=PARSE_ERROR_CODE, source_code=source_code,
                         help=help, label=label)


class Parser:
    """
    Source text to Program.

    - Takes source code, returns AST with source locations
    - Converts Lark errors into ParseError
    - Uses Lark's native grammar cache when ``cache_file`` is given
    """

    def __init__(self, cache_file: Optional[str] = None):
        grammar_path = Path(__file__).parent / "grammar.lark"
        self.parser = Lark.open(
            str(grammar_path),
            start='program',
            parser='lalr',
            lexer='basic',
            postlex=StatementStartPostLex(),
            cache=cache_file if cache_file else False,
            propagate_positions=True,
            maybe_placeholders=False,
        )
        self.transformer = EsscopeTransformer()

    def parse(self, source: str, source_file: str = DEFAULT_SOURCE_NAME) -> Program:
        """Parse source code to a Program node."""
        self.transformer.current_file = source_file
        try:
            tree = self.parser.parse(source)
        except UnexpectedCharacters as e:
            raise ParseError(
                f"unexpected character {source[e.pos_in_stream]!r}" if e.pos_in_stream < len(source)
                else "unexpected character",
                self._error_location(source_file, e.line, e.column, e.pos_in_stream),
                source_code=source,
            ) from e
        except UnexpectedEOF as e:
            lines = source.split("\n")
            raise ParseError(
                "unexpected end of input",
                self._error_location(source_file, len(lines), len(lines[-1]) + 1, len(source)),
                source_code=source,
                help=self._expected_help(e.expected),
            ) from e
        except UnexpectedToken as e:
            token = e.token
            found = "end of input" if token.type == "$END" else repr(str(token))
            raise ParseError(
                f"unexpected token {found}",
                self._error_location(source_file, e.line, e.column, token.start_pos or 0),
                source_code=source,
                help=self._expected_help(e.expected),
            ) from e
        except LarkError as e:
            raise ParseError(f"parse error: {e}", source_code=source) from e

        try:
            program = self.transformer.transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, EsscopeSourceError):
                orig = e.orig_exc
                raise ParseError(orig.message, orig.location, source_code=source,
                                 label=orig.label_text) from orig
            raise
        logger.debug(f"Parsed {source_file}: {len(program.body)} statements")
        return program

    def parse_file(self, path: Union[Path, str]) -> Program:
        return self.parse(read_source_file(path), str(path))

    @staticmethod
    def _error_location(source_file: str, line, column, start: int) -> SourceLocation:
        # Lark reports '?' for positions it does not know (e.g. at end of input)
        line = line if isinstance(line, int) and line > 0 else 1
        column = column if isinstance(column, int) and column > 0 else 1
        return SourceLocation(file=source_file, line=line, column=column, start=start, end=start)

    @staticmethod
    def _expected_help(expected) -> Optional[str]:
        if not expected:
            return None
        names = sorted(name for name in expected if not name.startswith("_") or name.endswith("_OPEN"))
        if not names:
            return None
        return f"expected one of: {', '.join(names[:8])}"


_default_parser: Optional[Parser] = None


def parse(source: str, source_file: str = DEFAULT_SOURCE_NAME) -> Program:
    """Parse with a lazily built module-level Parser."""
    global _default_parser
    if _default_parser is None:
        _default_parser = Parser()
    return _default_parser.parse(source, source_file)
