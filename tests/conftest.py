"""
Pytest configuration and shared fixtures for all esscope tests.

Building the LALR tables is the only expensive step, so one parser is shared
across the session.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from esscope.analysis.scope_builder import build_scopes
from esscope.frontend.parser import Parser


@pytest.fixture(scope="session")
def parser():
    """Session-scoped parser; stateless between parse() calls."""
    from tests.test_utils import get_parser
    return get_parser()


@pytest.fixture
def scoped(parser):
    """Factory: source -> (program, scope tree)."""
    def _scoped(source: str):
        program = parser.parse(source, "<test>")
        return program, build_scopes(program)
    return _scoped


@pytest.fixture
def cached_parser(tmp_path):
    """Parser built with Lark's grammar cache in a temporary file."""
    return Parser(cache_file=str(tmp_path / "esscope_parser.cache"))
