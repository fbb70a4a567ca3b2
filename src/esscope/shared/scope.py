"""
Scope arena: the lexical scopes of one syntax tree.

Scopes live in a flat list owned by ScopeTree; a scope refers to its parent by
index (``parent_id``) rather than by object, and children are derived by
scanning the arena, never stored. Each scope owns:

    declared      name → declaring Identifier nodes (insertion ordered)
    shared_cache  cache key → Identifier minted by inject_shared
    shared_declarations  (name, declaration) pairs materialized by inject_shared

Bookkeeping is updated in place by the injector; nothing here tracks removal of
declarations by outside mutation (callers that delete a declaration must call
``forget``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .nodes import ASTNode, Identifier, VariableDeclaration


class ScopeKind(Enum):
    PROGRAM = "program"
    FUNCTION = "function"
    CATCH = "catch"
    CLASS = "class"


# Kinds that receive `var` and function declarations
HOISTING_KINDS = (ScopeKind.PROGRAM, ScopeKind.FUNCTION)


@dataclass(eq=False)
class Scope:
    """
    One lexical environment.

    ``node`` is the anchor: the Program, function, CatchClause or named
    ClassExpression that introduces the environment.
    """

    scope_id: int
    kind: ScopeKind
    node: ASTNode
    parent_id: Optional[int]
    tree: ScopeTree = field(repr=False)
    declared: Dict[str, List[Identifier]] = field(default_factory=dict, repr=False)
    shared_cache: Dict[str, Identifier] = field(default_factory=dict, repr=False)
    shared_declarations: List[Tuple[str, VariableDeclaration]] = field(default_factory=list, repr=False)

    @property
    def parent(self) -> Optional[Scope]:
        if self.parent_id is None:
            return None
        return self.tree.get(self.parent_id)

    @property
    def is_global(self) -> bool:
        return self.parent_id is None

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.ancestors()) - 1

    def declares(self, name: str) -> bool:
        """True if name is bound in this scope only (no parent lookup)."""
        return name in self.declared

    def declare(self, name: str, node: Optional[Identifier] = None) -> None:
        """Record a binding; repeated declarations of one name accumulate their nodes."""
        nodes = self.declared.setdefault(name, [])
        if node is not None and not any(existing is node for existing in nodes):
            nodes.append(node)

    def forget(self, name: str) -> None:
        """Drop a binding whose declaring construct the caller removed."""
        self.declared.pop(name, None)

    def declared_names(self) -> List[str]:
        return list(self.declared)

    def ancestors(self) -> Iterator[Scope]:
        """This scope, then each enclosing scope up to the root."""
        scope: Optional[Scope] = self
        while scope is not None:
            yield scope
            scope = scope.parent

    def lookup(self, name: str) -> Optional[Scope]:
        """Innermost scope of the chain that declares name, or None when free."""
        for scope in self.ancestors():
            if name in scope.declared:
                return scope
        return None

    def is_ancestor_of(self, other: Scope) -> bool:
        """True when self encloses other (strictly)."""
        return any(scope is self for scope in other.ancestors() if scope is not other)

    def __str__(self) -> str:
        return f"{self.kind.value}#{self.scope_id}"


class ScopeTree:
    """
    Arena of the scopes of one tree, indexed by anchor node identity.

    Scope 0 is always the root (program) scope.
    """

    def __init__(self) -> None:
        self._scopes: List[Scope] = []
        self._by_anchor: Dict[int, int] = {}

    def new_scope(self, kind: ScopeKind, node: ASTNode, parent: Optional[Scope]) -> Scope:
        scope = Scope(
            scope_id=len(self._scopes),
            kind=kind,
            node=node,
            parent_id=parent.scope_id if parent is not None else None,
            tree=self,
        )
        self._scopes.append(scope)
        self._by_anchor[id(node)] = scope.scope_id
        return scope

    def get(self, scope_id: int) -> Scope:
        return self._scopes[scope_id]

    @property
    def root(self) -> Scope:
        if not self._scopes:
            raise LookupError("scope tree is empty")
        return self._scopes[0]

    def scope_of(self, node: ASTNode) -> Optional[Scope]:
        """Scope anchored at node, if node introduces one."""
        scope_id = self._by_anchor.get(id(node))
        if scope_id is None:
            return None
        scope = self._scopes[scope_id]
        # Guard against id() reuse by an unrelated, newer object
        return scope if scope.node is node else None

    def children_of(self, scope: Scope) -> List[Scope]:
        return [s for s in self._scopes if s.parent_id == scope.scope_id]

    def __iter__(self) -> Iterator[Scope]:
        return iter(self._scopes)

    def __len__(self) -> int:
        return len(self._scopes)
