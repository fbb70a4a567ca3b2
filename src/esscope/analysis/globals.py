"""
Global reference collection: references whose name no enclosing scope declares.
"""

import logging
from typing import List, Optional

from ..shared.ast_visitor import iter_paths
from ..shared.nodes import Identifier, Program
from ..shared.scope import ScopeTree
from .roles import is_reference
from .scope_builder import build_scopes

logger = logging.getLogger(__name__)


def get_global_occurrences(program: Program, scopes: Optional[ScopeTree] = None) -> List[Identifier]:
    """Every free reference of program, in pre-order."""
    if scopes is None:
        scopes = build_scopes(program)
    found: List[Identifier] = []
    for path in iter_paths(program, scopes):
        if not is_reference(path):
            continue
        identifier = path.node
        if path.require_scope().lookup(identifier.name) is None:
            found.append(identifier)
    return found


def get_globals(program: Program, scopes: Optional[ScopeTree] = None) -> List[Identifier]:
    """
    First occurrence of each free name of program, in first-occurrence order.

    ``Math.PI * Math.pow(r, 2)`` yields a single ``Math``; use
    get_global_occurrences() for every occurrence.
    """
    seen = set()
    result: List[Identifier] = []
    for identifier in get_global_occurrences(program, scopes):
        if identifier.name in seen:
            continue
        seen.add(identifier.name)
        result.append(identifier)
    logger.debug(f"Found {len(result)} global names: {[i.name for i in result]}")
    return result


def get_global_names(program: Program, scopes: Optional[ScopeTree] = None) -> List[str]:
    return [identifier.name for identifier in get_globals(program, scopes)]
