"""
Scope Construction

Builds the ScopeTree of a program:

- ``var`` declarators and function declarations bind in the nearest function
  or program scope (hoisting)
- ``let``/``const`` declarators and class declarations bind in the nearest
  scope that is not a class scope (blocks are not modelled)
- parameters, a named function expression's own name, catch parameters and a
  named class expression's own name bind in the scope their construct opens
- import locals bind in the program scope

The walk is an explicit stack, like every other tree walk in the package.
"""

import logging
from typing import List, Optional, Tuple

from ..shared.nodes import (
    ASTNode, AssignmentPattern, CatchClause, ClassDeclaration, ClassExpression, Function,
    FunctionDeclaration, FunctionExpression, Identifier, ImportDefaultSpecifier, ImportNamespaceSpecifier,
    ImportSpecifier, Program, VariableDeclaration,
)
from ..shared.scope import HOISTING_KINDS, Scope, ScopeKind, ScopeTree

logger = logging.getLogger(__name__)


def hoisting_scope(scope: Scope) -> Scope:
    """Nearest function or program scope (target of ``var`` and function declarations)."""
    for candidate in scope.ancestors():
        if candidate.kind in HOISTING_KINDS:
            return candidate
    return scope


def lexical_scope(scope: Scope) -> Scope:
    """Nearest scope that is not a class scope (target of ``let``, ``const`` and ``class``)."""
    for candidate in scope.ancestors():
        if candidate.kind is not ScopeKind.CLASS:
            return candidate
    return scope


def _param_name(param: ASTNode) -> Optional[Identifier]:
    if isinstance(param, Identifier):
        return param
    if isinstance(param, AssignmentPattern):
        return param.left
    return None


class ScopeBuilder:
    """
    One pass over a program, opening scopes at anchors and recording every
    declaration in the scope it binds in.
    """

    def __init__(self) -> None:
        self.tree = ScopeTree()

    def build(self, program: Program) -> ScopeTree:
        root = self.tree.new_scope(ScopeKind.PROGRAM, program, None)
        stack: List[Tuple[ASTNode, Scope]] = [(program, root)]
        while stack:
            node, enclosing = stack.pop()
            inner = self._enter(node, enclosing) if node is not program else root
            self._declare(node, enclosing, inner)
            children = list(node.iter_children())
            for _, _, child in reversed(children):
                stack.append((child, inner))
        logger.debug(f"Built {len(self.tree)} scopes, "
                     f"{len(root.declared)} program-level bindings")
        return self.tree

    def _enter(self, node: ASTNode, enclosing: Scope) -> Scope:
        """Open the scope node anchors, or return enclosing when it anchors none."""
        if isinstance(node, Function):
            return self.tree.new_scope(ScopeKind.FUNCTION, node, enclosing)
        if isinstance(node, CatchClause):
            return self.tree.new_scope(ScopeKind.CATCH, node, enclosing)
        if isinstance(node, ClassExpression) and node.id is not None:
            return self.tree.new_scope(ScopeKind.CLASS, node, enclosing)
        return enclosing

    def _declare(self, node: ASTNode, enclosing: Scope, inner: Scope) -> None:
        if isinstance(node, VariableDeclaration):
            target = hoisting_scope(enclosing) if node.kind == "var" else lexical_scope(enclosing)
            for declarator in node.declarations:
                target.declare(declarator.id.name, declarator.id)
        elif isinstance(node, Function):
            if node.id is not None:
                if isinstance(node, FunctionDeclaration):
                    hoisting_scope(enclosing).declare(node.id.name, node.id)
                elif isinstance(node, FunctionExpression):
                    inner.declare(node.id.name, node.id)
            for param in node.params:
                name = _param_name(param)
                if name is not None:
                    inner.declare(name.name, name)
        elif isinstance(node, CatchClause):
            inner.declare(node.param.name, node.param)
        elif isinstance(node, ClassDeclaration):
            if node.id is not None:
                lexical_scope(enclosing).declare(node.id.name, node.id)
        elif isinstance(node, ClassExpression):
            if node.id is not None:
                inner.declare(node.id.name, node.id)
        elif isinstance(node, (ImportSpecifier, ImportDefaultSpecifier, ImportNamespaceSpecifier)):
            self.tree.root.declare(node.local.name, node.local)


def build_scopes(program: Program) -> ScopeTree:
    """Build the scope tree of program."""
    return ScopeBuilder().build(program)
