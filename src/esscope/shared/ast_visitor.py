"""
AST Visitor Pattern and Path-Based Traversal

This module provides:
1. ASTVisitor (abstract visitor with default child traversal)
2. NodePath (a node together with its parent slot and lexical scope)
3. iter_paths / traverse (pre-order, explicit-stack walks that expose paths)

Design:
- Visitors are for whole-tree computations that return values (the printer)
- Paths are for analyses that need structural context: which slot of which
  parent holds an identifier, and which scope encloses it
- Walks use an explicit stack so deeply nested generated code cannot exhaust
  the interpreter's recursion limit
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterator, List, Optional, Tuple, TypeVar, TYPE_CHECKING

from .errors import EsscopeImplementationError, ScopeLookupError
from .nodes import ASTNode, NodeType

if TYPE_CHECKING:
    from ..analysis.roles import Occurrence
    from .nodes import Identifier, Literal
    from .scope import Scope, ScopeTree

T = TypeVar('T')

logger = logging.getLogger(__name__)


# ============================================
# AST VISITOR PATTERN
# ============================================

class ASTVisitor(ABC, Generic[T]):
    """
    Base AST visitor with default traversal for all nodes.

    Leaf nodes that MUST be implemented:
    - visit_identifier, visit_literal

    All other visit_* methods default to generic_visit(), which visits the
    children listed in the node's ``_fields`` and returns None.

    Usage:
        class NameCollector(ASTVisitor[None]):
            def __init__(self):
                self.names = []

            def visit_identifier(self, node):
                self.names.append(node.name)

            def visit_literal(self, node):
                pass
    """

    def visit(self, node: ASTNode) -> T:
        return node.accept(self)

    def generic_visit(self, node: ASTNode) -> Optional[T]:
        for _, _, child in node.iter_children():
            child.accept(self)
        return None

    @abstractmethod
    def visit_identifier(self, node: 'Identifier') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_identifier()")

    @abstractmethod
    def visit_literal(self, node: 'Literal') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_literal()")


def _install_default_visits() -> None:
    def default_visit(self: ASTVisitor, node: ASTNode):
        return self.generic_visit(node)

    for node_type in NodeType:
        method_name = f"visit_{node_type.value}"
        if not hasattr(ASTVisitor, method_name):
            setattr(ASTVisitor, method_name, default_visit)


_install_default_visits()


# ============================================
# NODE PATHS
# ============================================

class NodePath:
    """
    A node plus the slot it occupies: parent path, field name, list index.

    ``scope`` is the innermost scope whose anchor contains the node; for a
    scope anchor itself it is the scope the anchor introduces.
    """

    __slots__ = ('node', 'parent', 'field', 'index', 'scope', 'replaced', 'skipped')

    def __init__(self, node: ASTNode, parent: Optional[NodePath] = None, field: Optional[str] = None,
                 index: Optional[int] = None, scope: Optional['Scope'] = None):
        self.node = node
        self.parent = parent
        self.field = field
        self.index = index
        self.scope = scope
        self.replaced = False
        self.skipped = False

    @property
    def parent_node(self) -> Optional[ASTNode]:
        return self.parent.node if self.parent is not None else None

    def require_scope(self) -> 'Scope':
        if self.scope is None:
            raise ScopeLookupError(f"no scope recorded for {type(self.node).__name__}", self.node.location)
        return self.scope

    def replace(self, new_node: ASTNode) -> ASTNode:
        """
        Put new_node in this path's slot.

        List slots are located by identity at call time, so insertions made
        earlier in the same list (injected declarations) do not misplace it.
        The replacement is not traversed by the walk that produced this path.
        """
        if self.parent is None or self.field is None:
            raise EsscopeImplementationError("cannot replace the root of a traversal")
        container = getattr(self.parent.node, self.field)
        if isinstance(container, list):
            position = index_by_identity(container, self.node)
            if position is None:
                raise EsscopeImplementationError(
                    f"{type(self.node).__name__} is no longer in {type(self.parent.node).__name__}.{self.field}"
                )
            container[position] = new_node
            self.index = position
        else:
            if container is not self.node:
                raise EsscopeImplementationError(
                    f"{type(self.node).__name__} is no longer in {type(self.parent.node).__name__}.{self.field}"
                )
            setattr(self.parent.node, self.field, new_node)
        self.node = new_node
        self.replaced = True
        return new_node

    def occurrence(self) -> 'Occurrence':
        """This path as a classifiable Occurrence (built fresh on every call)."""
        from ..analysis.roles import occurrence_of
        return occurrence_of(self)

    def skip(self) -> None:
        """Do not descend into this node's children."""
        self.skipped = True

    def ancestors(self) -> Iterator[NodePath]:
        path = self.parent
        while path is not None:
            yield path
            path = path.parent

    def __repr__(self) -> str:
        return f"NodePath({type(self.node).__name__}, field={self.field!r}, index={self.index!r})"


def index_by_identity(items: List[ASTNode], node: ASTNode) -> Optional[int]:
    for position, item in enumerate(items):
        if item is node:
            return position
    return None


# ============================================
# WALKS
# ============================================

def iter_paths(root: ASTNode, scopes: Optional['ScopeTree'] = None,
               root_scope: Optional['Scope'] = None,
               parent: Optional[NodePath] = None) -> Iterator[NodePath]:
    """
    Pre-order walk over root's subtree yielding one NodePath per node.

    Children are read after the consumer has handled the yielded path, so a
    consumer may mutate the node first; a replaced or skipped path is not
    descended into. Sibling lists are snapshotted when their parent is
    expanded.
    """
    start_scope = root_scope
    if scopes is not None:
        start_scope = scopes.scope_of(root) or start_scope
    stack: List[Tuple[ASTNode, Optional[NodePath], Optional[str], Optional[int], Optional['Scope']]] = [
        (root, parent, None, None, start_scope)
    ]
    while stack:
        node, parent_path, field_name, index, enclosing = stack.pop()
        scope = enclosing
        if scopes is not None and parent_path is not None:
            scope = scopes.scope_of(node) or enclosing
        path = NodePath(node, parent_path, field_name, index, scope)
        yield path
        if path.replaced or path.skipped:
            continue
        children = list(node.iter_children())
        for child_field, child_index, child in reversed(children):
            stack.append((child, path, child_field, child_index, scope))


def traverse(program: ASTNode, callback: Callable[[NodePath], None],
             scopes: Optional['ScopeTree'] = None) -> 'ScopeTree':
    """
    Call callback(path) for every node of program, building scopes first when
    none are supplied. Returns the scope tree the paths refer to.
    """
    if scopes is None:
        from ..analysis.scope_builder import build_scopes
        scopes = build_scopes(program)
    visited = 0
    for path in iter_paths(program, scopes):
        callback(path)
        visited += 1
    logger.debug(f"Traversed {visited} nodes across {len(scopes)} scopes")
    return scopes
