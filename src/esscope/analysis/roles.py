"""
Identifier Role Classification

Every identifier occurrence is a binding site, a reference, or neither. The
role is decided by the slot the identifier occupies (its parent relation),
never by its name: a shorthand property holds one Identifier node in both its
key and value slots, and each slot is classified on its own.

Relations are a closed enum; slots the table does not know are references,
which at worst over-reports a free name and never hides a capture.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..shared.ast_visitor import NodePath
from ..shared.nodes import (
    ASTNode, AssignmentPattern, BreakStatement, CatchClause, Class, ContinueStatement,
    ExportDefaultDeclaration, ExportNamedDeclaration, ExportSpecifier, Function, Identifier,
    ImportDefaultSpecifier, ImportNamespaceSpecifier, ImportSpecifier, LabeledStatement, MemberExpression,
    MethodDefinition, Property, VariableDeclarator,
)

logger = logging.getLogger(__name__)


class ParentRelation(Enum):
    """Which slot of which construct holds a node"""
    DECLARATOR_ID = "declarator_id"
    PARAM = "param"
    CATCH_PARAM = "catch_param"
    FUNCTION_NAME = "function_name"
    CLASS_NAME = "class_name"
    PROPERTY_KEY = "property_key"
    METHOD_KEY = "method_key"
    PROPERTY_VALUE = "property_value"
    MEMBER_PROPERTY = "member_property"
    LABEL = "label"
    LABEL_BODY = "label_body"
    IMPORT_LOCAL = "import_local"
    IMPORT_IMPORTED = "import_imported"
    EXPORT_LOCAL = "export_local"
    EXPORT_EXPORTED = "export_exported"
    SUPERCLASS = "superclass"
    EXPORT_DEFAULT_PAYLOAD = "export_default_payload"
    OTHER = "other"


class Role(Enum):
    BINDING = "binding"
    REFERENCE = "reference"
    NEITHER = "neither"


_ROLES = {
    ParentRelation.DECLARATOR_ID: Role.BINDING,
    ParentRelation.PARAM: Role.BINDING,
    ParentRelation.CATCH_PARAM: Role.BINDING,
    ParentRelation.FUNCTION_NAME: Role.BINDING,
    ParentRelation.CLASS_NAME: Role.BINDING,
    ParentRelation.PROPERTY_KEY: Role.NEITHER,
    ParentRelation.METHOD_KEY: Role.NEITHER,
    ParentRelation.PROPERTY_VALUE: Role.REFERENCE,
    ParentRelation.MEMBER_PROPERTY: Role.NEITHER,
    ParentRelation.LABEL: Role.NEITHER,
    ParentRelation.LABEL_BODY: Role.REFERENCE,
    ParentRelation.IMPORT_LOCAL: Role.NEITHER,
    ParentRelation.IMPORT_IMPORTED: Role.NEITHER,
    ParentRelation.EXPORT_LOCAL: Role.REFERENCE,
    ParentRelation.EXPORT_EXPORTED: Role.NEITHER,
    ParentRelation.SUPERCLASS: Role.REFERENCE,
    ParentRelation.EXPORT_DEFAULT_PAYLOAD: Role.REFERENCE,
    ParentRelation.OTHER: Role.REFERENCE,
}


@dataclass(frozen=True, eq=False)
class Occurrence:
    """An identifier at one slot of the tree; built on demand, never cached"""
    node: Identifier
    parent: Optional[ASTNode]
    field: Optional[str]
    relation: ParentRelation


def relation_of(parent: Optional[ASTNode], field: Optional[str], node: ASTNode,
                grandparent: Optional[ASTNode] = None) -> ParentRelation:
    """
    Relation of the ``field`` slot of ``parent``.

    ``grandparent`` is only consulted for export specifiers: the local name of
    ``export { a } from "m"`` names a binding of module ``m``, so it is
    classified like an imported name.
    """
    if parent is None or field is None:
        return ParentRelation.OTHER

    if isinstance(parent, VariableDeclarator):
        return ParentRelation.DECLARATOR_ID if field == "id" else ParentRelation.OTHER
    if isinstance(parent, Function):
        if field == "id":
            return ParentRelation.FUNCTION_NAME
        if field == "params":
            return ParentRelation.PARAM
        return ParentRelation.OTHER
    if isinstance(parent, AssignmentPattern):
        # Only parameters carry defaults in the supported grammar
        return ParentRelation.PARAM if field == "left" else ParentRelation.OTHER
    if isinstance(parent, CatchClause):
        return ParentRelation.CATCH_PARAM if field == "param" else ParentRelation.OTHER
    if isinstance(parent, Class):
        if field == "id":
            return ParentRelation.CLASS_NAME
        if field == "superclass":
            return ParentRelation.SUPERCLASS
        return ParentRelation.OTHER
    if isinstance(parent, Property):
        if field == "value":
            return ParentRelation.PROPERTY_VALUE
        if parent.computed:
            return ParentRelation.OTHER
        return ParentRelation.METHOD_KEY if parent.method else ParentRelation.PROPERTY_KEY
    if isinstance(parent, MethodDefinition):
        if field == "key" and not parent.computed:
            return ParentRelation.METHOD_KEY
        return ParentRelation.OTHER
    if isinstance(parent, MemberExpression):
        if field == "property" and not parent.computed:
            return ParentRelation.MEMBER_PROPERTY
        return ParentRelation.OTHER
    if isinstance(parent, LabeledStatement):
        return ParentRelation.LABEL if field == "label" else ParentRelation.LABEL_BODY
    if isinstance(parent, (BreakStatement, ContinueStatement)):
        return ParentRelation.LABEL
    if isinstance(parent, ImportSpecifier):
        return ParentRelation.IMPORT_LOCAL if field == "local" else ParentRelation.IMPORT_IMPORTED
    if isinstance(parent, (ImportDefaultSpecifier, ImportNamespaceSpecifier)):
        return ParentRelation.IMPORT_LOCAL
    if isinstance(parent, ExportSpecifier):
        if field == "exported":
            return ParentRelation.EXPORT_EXPORTED
        if isinstance(grandparent, ExportNamedDeclaration) and grandparent.source is not None:
            return ParentRelation.IMPORT_IMPORTED
        return ParentRelation.EXPORT_LOCAL
    if isinstance(parent, ExportDefaultDeclaration):
        return ParentRelation.EXPORT_DEFAULT_PAYLOAD
    return ParentRelation.OTHER


def occurrence_of(path: NodePath) -> Occurrence:
    grandparent = path.parent.parent_node if path.parent is not None else None
    relation = relation_of(path.parent_node, path.field, path.node, grandparent)
    return Occurrence(path.node, path.parent_node, path.field, relation)


def classify(occurrence: Occurrence) -> Role:
    role = _ROLES.get(occurrence.relation)
    if role is None:
        logger.debug(f"No role for relation {occurrence.relation}; treating "
                     f"'{occurrence.node.name}' as a reference")
        return Role.REFERENCE
    return role


def is_reference(path: NodePath, name: Optional[str] = None) -> bool:
    """
    True when the path holds an Identifier in a reference slot (and, when
    ``name`` is given, the identifier has that name).
    """
    node = path.node
    if not isinstance(node, Identifier):
        return False
    if name is not None and node.name != name:
        return False
    return classify(occurrence_of(path)) is Role.REFERENCE


def is_binding(path: NodePath) -> bool:
    return isinstance(path.node, Identifier) and classify(occurrence_of(path)) is Role.BINDING
