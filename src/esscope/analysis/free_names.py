"""
Free-Name Checking

A name is *used* relative to a scope when a new binding of that name in the
scope would capture, or be captured by, existing code:

1. the scope already declares the name, or
2. some reference to the name inside the scope's subtree would resolve to the
   scope (or escape past it), because no scope between the reference and the
   target declares the name.

Declarations in nested scopes never make a name used at an enclosing scope;
the shadowed references they capture are irrelevant to it.
"""

import logging
from typing import Optional

from ..shared.ast_visitor import iter_paths
from ..shared.nodes import Identifier
from ..shared.scope import Scope
from .roles import is_reference

logger = logging.getLogger(__name__)


def _captured_before(start: Optional[Scope], target: Scope, name: str) -> bool:
    """True when a scope from start up to (excluding) target declares name."""
    scope = start
    while scope is not None and scope is not target:
        if scope.declares(name):
            return True
        scope = scope.parent
    return False


def is_used(scope: Scope, name: str) -> bool:
    """True if name is declared in scope or referenced in its subtree so as to resolve to it."""
    if scope.declares(name):
        return True
    for path in iter_paths(scope.node, scope.tree, root_scope=scope):
        node = path.node
        if not isinstance(node, Identifier) or node.name != name:
            continue
        if not is_reference(path):
            continue
        if not _captured_before(path.scope, scope, name):
            logger.debug(f"'{name}' is referenced at {node.location or 'synthesized node'} "
                         f"and would resolve to {scope}")
            return True
    return False


def is_free(scope: Scope, name: str) -> bool:
    """True if a new binding of name can be introduced at scope."""
    return not is_used(scope, name)
