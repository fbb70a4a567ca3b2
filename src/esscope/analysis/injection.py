"""
Variable and Shared-Value Injection

Declarations are inserted at the start of the statement list a scope's anchor
owns (after any directive prologue) and recorded immediately, so later name
generation in the same pass sees them. A ``var`` inserted into a catch body
binds in the enclosing function or program scope, which is where the name is
recorded.

Shared declarations are memoized per (scope, key) in ``scope.shared_cache``
and kept as one contiguous run sorted by generated name, whatever order they
were requested in. Positions are found by node identity at insertion time, so
replacing the node that triggered an injection leaves the declaration alone.
"""

import logging
from typing import List, Optional

from ..shared.ast_visitor import index_by_identity
from ..shared.builders import var_declaration
from ..shared.errors import InjectionError
from ..shared.nodes import (
    CatchClause, Expression, ExpressionStatement, Function, Identifier, Literal, Program, Statement,
)
from ..shared.scope import Scope
from ..utils.config import DIRECTIVE_VALUES, SHARED_DECLARATION_KIND
from .naming import unique_identifier
from .scope_builder import hoisting_scope

logger = logging.getLogger(__name__)


def statement_list(scope: Scope) -> List[Statement]:
    """The body list that declarations of scope are inserted into."""
    node = scope.node
    if isinstance(node, Program):
        return node.body
    if isinstance(node, (Function, CatchClause)):
        return node.body.body
    raise InjectionError(
        f"cannot inject into {scope}: a {type(node).__name__} has no statement list",
        node.location,
    )


def _is_directive(statement: Statement) -> bool:
    if not isinstance(statement, ExpressionStatement):
        return False
    if statement.directive is not None:
        return True
    expression = statement.expression
    return isinstance(expression, Literal) and expression.value in DIRECTIVE_VALUES


def prologue_length(statements: List[Statement]) -> int:
    """Number of leading directive statements (``"use strict";``)."""
    count = 0
    for statement in statements:
        if not _is_directive(statement):
            break
        count += 1
    return count


def inject_variable(scope: Scope, identifier: Identifier, init: Optional[Expression] = None) -> Identifier:
    """Declare ``var identifier [= init];`` at the start of scope's body and return identifier."""
    statements = statement_list(scope)
    declaration = var_declaration(identifier, init, SHARED_DECLARATION_KIND)
    statements.insert(prologue_length(statements), declaration)
    owner = hoisting_scope(scope)
    owner.declare(identifier.name, identifier)
    logger.debug(f"Injected variable {identifier.name} into {scope} (bound in {owner})")
    return identifier


def _shared_insert_position(scope: Scope, statements: List[Statement], name: str) -> int:
    """Keep the run of shared declarations contiguous and sorted by name."""
    live = []
    for existing_name, declaration in scope.shared_declarations:
        position = index_by_identity(statements, declaration)
        if position is not None:
            live.append((existing_name, position))
    if not live:
        return prologue_length(statements)
    live.sort(key=lambda item: item[1])
    for existing_name, position in live:
        if existing_name > name:
            return position
    return live[-1][1] + 1


def inject_shared(scope: Scope, key: str, expression: Expression) -> Identifier:
    """
    Declare ``var <name> = expression;`` once per (scope, key) and return its identifier.

    The name is generated from key; later calls with the same key return the
    cached identifier and leave the tree untouched.
    """
    cached = scope.shared_cache.get(key)
    if cached is not None:
        return cached

    identifier = unique_identifier(scope, key)
    statements = statement_list(scope)
    declaration = var_declaration(identifier, expression, SHARED_DECLARATION_KIND)
    statements.insert(_shared_insert_position(scope, statements, identifier.name), declaration)

    hoisting_scope(scope).declare(identifier.name, identifier)
    scope.shared_cache[key] = identifier
    scope.shared_declarations.append((identifier.name, declaration))
    logger.debug(f"Injected shared {identifier.name} for key {key!r} into {scope}")
    return identifier
