"""
ECMAScript AST (Abstract Syntax Tree) Definitions
ESTree-shaped nodes for the grammar subset the toolkit understands.

Shared module so that the frontend, the printer and the analyses agree on
one set of node classes.

Visitor Pattern Support:
- All AST nodes have accept() methods for polymorphic dispatch
- Every node lists its child slots, in source order, in ``_fields``
- Nodes compare by identity (``eq=False``): two distinct ``Identifier('a')``
  nodes are different occurrences, and list lookups must never match a
  structurally equal sibling
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Iterator, List, Optional, Tuple, TypeVar, Union, TYPE_CHECKING

from .source_location import SourceLocation

if TYPE_CHECKING:
    from .ast_visitor import ASTVisitor

T = TypeVar('T')

LiteralValue = Union[str, int, float, bool, None]


class NodeType(Enum):
    """ESTree node types (value doubles as the visit_* method suffix)"""
    PROGRAM = "program"
    IDENTIFIER = "identifier"
    LITERAL = "literal"
    THIS_EXPRESSION = "this_expression"
    SUPER = "super"
    ARRAY_EXPRESSION = "array_expression"
    OBJECT_EXPRESSION = "object_expression"
    PROPERTY = "property"
    FUNCTION_EXPRESSION = "function_expression"
    FUNCTION_DECLARATION = "function_declaration"
    CLASS_EXPRESSION = "class_expression"
    CLASS_DECLARATION = "class_declaration"
    CLASS_BODY = "class_body"
    METHOD_DEFINITION = "method_definition"
    ASSIGNMENT_PATTERN = "assignment_pattern"
    UNARY_EXPRESSION = "unary_expression"
    UPDATE_EXPRESSION = "update_expression"
    BINARY_EXPRESSION = "binary_expression"
    LOGICAL_EXPRESSION = "logical_expression"
    ASSIGNMENT_EXPRESSION = "assignment_expression"
    CONDITIONAL_EXPRESSION = "conditional_expression"
    SEQUENCE_EXPRESSION = "sequence_expression"
    CALL_EXPRESSION = "call_expression"
    NEW_EXPRESSION = "new_expression"
    MEMBER_EXPRESSION = "member_expression"
    EXPRESSION_STATEMENT = "expression_statement"
    BLOCK_STATEMENT = "block_statement"
    EMPTY_STATEMENT = "empty_statement"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    IF_STATEMENT = "if_statement"
    FOR_STATEMENT = "for_statement"
    FOR_IN_STATEMENT = "for_in_statement"
    WHILE_STATEMENT = "while_statement"
    DO_WHILE_STATEMENT = "do_while_statement"
    RETURN_STATEMENT = "return_statement"
    THROW_STATEMENT = "throw_statement"
    BREAK_STATEMENT = "break_statement"
    CONTINUE_STATEMENT = "continue_statement"
    TRY_STATEMENT = "try_statement"
    CATCH_CLAUSE = "catch_clause"
    LABELED_STATEMENT = "labeled_statement"
    IMPORT_DECLARATION = "import_declaration"
    IMPORT_SPECIFIER = "import_specifier"
    IMPORT_DEFAULT_SPECIFIER = "import_default_specifier"
    IMPORT_NAMESPACE_SPECIFIER = "import_namespace_specifier"
    EXPORT_NAMED_DECLARATION = "export_named_declaration"
    EXPORT_DEFAULT_DECLARATION = "export_default_declaration"
    EXPORT_SPECIFIER = "export_specifier"


class ASTNode:
    """
    Base class for all AST nodes

    Visitor Pattern Support:
    - Subclasses implement accept() to call the matching visit_* method
    - ``_fields`` names the attributes holding child nodes (single nodes,
      ``None`` or lists of nodes), in source order

    __slots__ keeps the two common attributes off the instance dict.
    """
    __slots__ = ('node_type', 'location')

    _fields: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, node_type: NodeType, location: Optional[SourceLocation] = None):
        self.node_type = node_type
        self.location = location

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        """
        Accept a visitor (polymorphic dispatch).

        Example:
            class NameCollector(ASTVisitor[None]):
                def visit_identifier(self, node: Identifier) -> None:
                    self.names.append(node.name)

            program.accept(NameCollector())
        """
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")

    def iter_children(self) -> Iterator[Tuple[str, Optional[int], 'ASTNode']]:
        """Yield (field, index, child) for every child node; index is None for single slots."""
        for field_name in self._fields:
            value = getattr(self, field_name)
            if isinstance(value, list):
                for index, item in enumerate(value):
                    if item is not None:
                        yield field_name, index, item
            elif value is not None:
                yield field_name, None, value


class Expression(ASTNode):
    """Base class for expressions"""
    __slots__ = ()


class Statement(ASTNode):
    """Base class for statements (and module items)"""
    __slots__ = ()


# =============================================================================
# Program
# =============================================================================

@dataclass(eq=False)
class Program(ASTNode):
    """Program root node"""
    body: List[Statement]

    _fields = ('body',)

    def __init__(self, body: List[Statement], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.PROGRAM, location)
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_program(self)


# =============================================================================
# Primary expressions
# =============================================================================

@dataclass(eq=False)
class Identifier(Expression):
    """Identifier (variable name, property key, label, ...)"""
    name: str

    def __str__(self) -> str:
        return self.name

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.IDENTIFIER, location)
        self.name = name

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_identifier(self)


@dataclass(eq=False)
class Literal(Expression):
    """Literal value (string, number, boolean, null)"""
    value: LiteralValue
    raw: Optional[str]

    def __str__(self) -> str:
        return str(self.value)

    def __init__(self, value: LiteralValue, raw: Optional[str] = None, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.LITERAL, location)
        self.value = value
        self.raw = raw

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_literal(self)


@dataclass(eq=False)
class ThisExpression(Expression):
    """``this``"""

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.THIS_EXPRESSION, location)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_this_expression(self)


@dataclass(eq=False)
class Super(Expression):
    """``super`` (callee of a super call or object of a super member access)"""

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.SUPER, location)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_super(self)


@dataclass(eq=False)
class ArrayExpression(Expression):
    """Array literal ``[a, b]``"""
    elements: List[Expression]

    _fields = ('elements',)

    def __init__(self, elements: List[Expression], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.ARRAY_EXPRESSION, location)
        self.elements = elements

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_array_expression(self)


@dataclass(eq=False)
class Property(ASTNode):
    """
    Object literal property.

    Shorthand properties (``{a}``) hold the very same Identifier node in both
    ``key`` and ``value``; it is visited once per slot.
    """
    key: Expression
    value: Expression
    computed: bool
    shorthand: bool
    method: bool

    _fields = ('key', 'value')

    def __init__(self, key: Expression, value: Expression, computed: bool = False,
                 shorthand: bool = False, method: bool = False,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.PROPERTY, location)
        self.key = key
        self.value = value
        self.computed = computed
        self.shorthand = shorthand
        self.method = method

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_property(self)


@dataclass(eq=False)
class ObjectExpression(Expression):
    """Object literal ``{key: value}``"""
    properties: List[Property]

    _fields = ('properties',)

    def __init__(self, properties: List[Property], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.OBJECT_EXPRESSION, location)
        self.properties = properties

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_object_expression(self)


# =============================================================================
# Functions and classes
# =============================================================================

@dataclass(eq=False)
class BlockStatement(Statement):
    """Braced statement list (also used as function and catch bodies)"""
    body: List[Statement]

    _fields = ('body',)

    def __init__(self, body: List[Statement], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.BLOCK_STATEMENT, location)
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_block_statement(self)


@dataclass(eq=False)
class AssignmentPattern(ASTNode):
    """Defaulted parameter ``name = value``"""
    left: Identifier
    right: Expression

    _fields = ('left', 'right')

    def __init__(self, left: Identifier, right: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.ASSIGNMENT_PATTERN, location)
        self.left = left
        self.right = right

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_assignment_pattern(self)


Param = Union[Identifier, AssignmentPattern]


class Function(ASTNode):
    """Shared shape of function declarations and expressions"""
    __slots__ = ()

    _fields = ('id', 'params', 'body')

    id: Optional[Identifier]
    params: List[Param]
    body: BlockStatement


@dataclass(eq=False)
class FunctionExpression(Function, Expression):
    """``function [name](params) { body }`` in expression position"""
    id: Optional[Identifier]
    params: List[Param]
    body: BlockStatement

    def __init__(self, id: Optional[Identifier], params: List[Param], body: BlockStatement,
                 location: Optional[SourceLocation] = None):
        ASTNode.__init__(self, NodeType.FUNCTION_EXPRESSION, location)
        self.id = id
        self.params = params
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_function_expression(self)


@dataclass(eq=False)
class FunctionDeclaration(Function, Statement):
    """``function name(params) { body }`` in statement position"""
    id: Optional[Identifier]
    params: List[Param]
    body: BlockStatement

    def __init__(self, id: Optional[Identifier], params: List[Param], body: BlockStatement,
                 location: Optional[SourceLocation] = None):
        ASTNode.__init__(self, NodeType.FUNCTION_DECLARATION, location)
        self.id = id
        self.params = params
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_function_declaration(self)


@dataclass(eq=False)
class MethodDefinition(ASTNode):
    """Class member ``[static] key(params) { body }``"""
    key: Expression
    value: FunctionExpression
    kind: str
    computed: bool
    static: bool

    _fields = ('key', 'value')

    def __init__(self, key: Expression, value: FunctionExpression, kind: str = "method",
                 computed: bool = False, static: bool = False,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.METHOD_DEFINITION, location)
        self.key = key
        self.value = value
        self.kind = kind
        self.computed = computed
        self.static = static

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_method_definition(self)


@dataclass(eq=False)
class ClassBody(ASTNode):
    """Method list of a class"""
    body: List[MethodDefinition]

    _fields = ('body',)

    def __init__(self, body: List[MethodDefinition], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.CLASS_BODY, location)
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_class_body(self)


class Class(ASTNode):
    """Shared shape of class declarations and expressions"""
    __slots__ = ()

    _fields = ('id', 'superclass', 'body')

    id: Optional[Identifier]
    superclass: Optional[Expression]
    body: ClassBody


@dataclass(eq=False)
class ClassExpression(Class, Expression):
    """``class [Name] [extends Base] { ... }`` in expression position"""
    id: Optional[Identifier]
    superclass: Optional[Expression]
    body: ClassBody

    def __init__(self, id: Optional[Identifier], superclass: Optional[Expression], body: ClassBody,
                 location: Optional[SourceLocation] = None):
        ASTNode.__init__(self, NodeType.CLASS_EXPRESSION, location)
        self.id = id
        self.superclass = superclass
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_class_expression(self)


@dataclass(eq=False)
class ClassDeclaration(Class, Statement):
    """``class Name [extends Base] { ... }`` in statement position"""
    id: Optional[Identifier]
    superclass: Optional[Expression]
    body: ClassBody

    def __init__(self, id: Optional[Identifier], superclass: Optional[Expression], body: ClassBody,
                 location: Optional[SourceLocation] = None):
        ASTNode.__init__(self, NodeType.CLASS_DECLARATION, location)
        self.id = id
        self.superclass = superclass
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_class_declaration(self)


# =============================================================================
# Operators
# =============================================================================

@dataclass(eq=False)
class UnaryExpression(Expression):
    """Prefix operator: ``!x``, ``-x``, ``typeof x``, ``delete x.y``"""
    operator: str
    argument: Expression

    _fields = ('argument',)

    def __init__(self, operator: str, argument: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.UNARY_EXPRESSION, location)
        self.operator = operator
        self.argument = argument

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_unary_expression(self)


@dataclass(eq=False)
class UpdateExpression(Expression):
    """``++x`` / ``x--``"""
    operator: str
    argument: Expression
    prefix: bool

    _fields = ('argument',)

    def __init__(self, operator: str, argument: Expression, prefix: bool,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.UPDATE_EXPRESSION, location)
        self.operator = operator
        self.argument = argument
        self.prefix = prefix

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_update_expression(self)


@dataclass(eq=False)
class BinaryExpression(Expression):
    """Arithmetic, comparison, bitwise, ``in`` and ``instanceof``"""
    operator: str
    left: Expression
    right: Expression

    _fields = ('left', 'right')

    def __init__(self, operator: str, left: Expression, right: Expression,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.BINARY_EXPRESSION, location)
        self.operator = operator
        self.left = left
        self.right = right

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_binary_expression(self)


@dataclass(eq=False)
class LogicalExpression(Expression):
    """``a && b`` / ``a || b``"""
    operator: str
    left: Expression
    right: Expression

    _fields = ('left', 'right')

    def __init__(self, operator: str, left: Expression, right: Expression,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.LOGICAL_EXPRESSION, location)
        self.operator = operator
        self.left = left
        self.right = right

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_logical_expression(self)


@dataclass(eq=False)
class AssignmentExpression(Expression):
    """``target = value`` and compound assignments"""
    operator: str
    left: Expression
    right: Expression

    _fields = ('left', 'right')

    def __init__(self, operator: str, left: Expression, right: Expression,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.ASSIGNMENT_EXPRESSION, location)
        self.operator = operator
        self.left = left
        self.right = right

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_assignment_expression(self)


@dataclass(eq=False)
class ConditionalExpression(Expression):
    """``test ? consequent : alternate``"""
    test: Expression
    consequent: Expression
    alternate: Expression

    _fields = ('test', 'consequent', 'alternate')

    def __init__(self, test: Expression, consequent: Expression, alternate: Expression,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.CONDITIONAL_EXPRESSION, location)
        self.test = test
        self.consequent = consequent
        self.alternate = alternate

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_conditional_expression(self)


@dataclass(eq=False)
class SequenceExpression(Expression):
    """Comma expression ``a, b``"""
    expressions: List[Expression]

    _fields = ('expressions',)

    def __init__(self, expressions: List[Expression], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.SEQUENCE_EXPRESSION, location)
        self.expressions = expressions

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_sequence_expression(self)


@dataclass(eq=False)
class CallExpression(Expression):
    """``callee(arguments)``"""
    callee: Expression
    arguments: List[Expression]

    _fields = ('callee', 'arguments')

    def __init__(self, callee: Expression, arguments: List[Expression],
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.CALL_EXPRESSION, location)
        self.callee = callee
        self.arguments = arguments

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_call_expression(self)


@dataclass(eq=False)
class NewExpression(Expression):
    """``new callee(arguments)``"""
    callee: Expression
    arguments: List[Expression]

    _fields = ('callee', 'arguments')

    def __init__(self, callee: Expression, arguments: List[Expression],
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.NEW_EXPRESSION, location)
        self.callee = callee
        self.arguments = arguments

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_new_expression(self)


@dataclass(eq=False)
class MemberExpression(Expression):
    """``object.property`` or ``object[property]`` (computed)"""
    object: Expression
    property: Expression
    computed: bool

    _fields = ('object', 'property')

    def __init__(self, object: Expression, property: Expression, computed: bool = False,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.MEMBER_EXPRESSION, location)
        self.object = object
        self.property = property
        self.computed = computed

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_member_expression(self)


# =============================================================================
# Statements
# =============================================================================

@dataclass(eq=False)
class ExpressionStatement(Statement):
    """
    Expression used as a statement.

    ``directive`` holds the raw string of a directive prologue entry
    (``"use strict";``), None otherwise.
    """
    expression: Expression
    directive: Optional[str]

    _fields = ('expression',)

    def __init__(self, expression: Expression, directive: Optional[str] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.EXPRESSION_STATEMENT, location or (expression.location if expression else None))
        self.expression = expression
        self.directive = directive

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_expression_statement(self)


@dataclass(eq=False)
class EmptyStatement(Statement):
    """Lone ``;``"""

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.EMPTY_STATEMENT, location)

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_empty_statement(self)


@dataclass(eq=False)
class VariableDeclarator(ASTNode):
    """``id [= init]`` inside a variable declaration"""
    id: Identifier
    init: Optional[Expression]

    _fields = ('id', 'init')

    def __init__(self, id: Identifier, init: Optional[Expression] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.VARIABLE_DECLARATOR, location)
        self.id = id
        self.init = init

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_variable_declarator(self)


@dataclass(eq=False)
class VariableDeclaration(Statement):
    """``var|let|const declarator, ...``"""
    kind: str
    declarations: List[VariableDeclarator]

    _fields = ('declarations',)

    def __init__(self, kind: str, declarations: List[VariableDeclarator],
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.VARIABLE_DECLARATION, location)
        self.kind = kind
        self.declarations = declarations

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_variable_declaration(self)


@dataclass(eq=False)
class IfStatement(Statement):
    """``if (test) consequent [else alternate]``"""
    test: Expression
    consequent: Statement
    alternate: Optional[Statement]

    _fields = ('test', 'consequent', 'alternate')

    def __init__(self, test: Expression, consequent: Statement, alternate: Optional[Statement] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.IF_STATEMENT, location)
        self.test = test
        self.consequent = consequent
        self.alternate = alternate

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_if_statement(self)


@dataclass(eq=False)
class ForStatement(Statement):
    """``for (init; test; update) body``"""
    init: Optional[Union[VariableDeclaration, Expression]]
    test: Optional[Expression]
    update: Optional[Expression]
    body: Statement

    _fields = ('init', 'test', 'update', 'body')

    def __init__(self, init: Optional[Union[VariableDeclaration, Expression]], test: Optional[Expression],
                 update: Optional[Expression], body: Statement,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.FOR_STATEMENT, location)
        self.init = init
        self.test = test
        self.update = update
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_for_statement(self)


@dataclass(eq=False)
class ForInStatement(Statement):
    """``for (var key in object) body``"""
    left: VariableDeclaration
    right: Expression
    body: Statement

    _fields = ('left', 'right', 'body')

    def __init__(self, left: VariableDeclaration, right: Expression, body: Statement,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.FOR_IN_STATEMENT, location)
        self.left = left
        self.right = right
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_for_in_statement(self)


@dataclass(eq=False)
class WhileStatement(Statement):
    """``while (test) body``"""
    test: Expression
    body: Statement

    _fields = ('test', 'body')

    def __init__(self, test: Expression, body: Statement, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.WHILE_STATEMENT, location)
        self.test = test
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_while_statement(self)


@dataclass(eq=False)
class DoWhileStatement(Statement):
    """``do body while (test)``"""
    body: Statement
    test: Expression

    _fields = ('body', 'test')

    def __init__(self, body: Statement, test: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.DO_WHILE_STATEMENT, location)
        self.body = body
        self.test = test

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_do_while_statement(self)


@dataclass(eq=False)
class ReturnStatement(Statement):
    """``return [argument]``"""
    argument: Optional[Expression]

    _fields = ('argument',)

    def __init__(self, argument: Optional[Expression] = None, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.RETURN_STATEMENT, location)
        self.argument = argument

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_return_statement(self)


@dataclass(eq=False)
class ThrowStatement(Statement):
    """``throw argument``"""
    argument: Expression

    _fields = ('argument',)

    def __init__(self, argument: Expression, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.THROW_STATEMENT, location)
        self.argument = argument

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_throw_statement(self)


@dataclass(eq=False)
class BreakStatement(Statement):
    """``break [label]``"""
    label: Optional[Identifier]

    _fields = ('label',)

    def __init__(self, label: Optional[Identifier] = None, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.BREAK_STATEMENT, location)
        self.label = label

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_break_statement(self)


@dataclass(eq=False)
class ContinueStatement(Statement):
    """``continue [label]``"""
    label: Optional[Identifier]

    _fields = ('label',)

    def __init__(self, label: Optional[Identifier] = None, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.CONTINUE_STATEMENT, location)
        self.label = label

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_continue_statement(self)


@dataclass(eq=False)
class CatchClause(ASTNode):
    """``catch (param) body``"""
    param: Identifier
    body: BlockStatement

    _fields = ('param', 'body')

    def __init__(self, param: Identifier, body: BlockStatement, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.CATCH_CLAUSE, location)
        self.param = param
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_catch_clause(self)


@dataclass(eq=False)
class TryStatement(Statement):
    """``try block [catch handler] [finally finalizer]``"""
    block: BlockStatement
    handler: Optional[CatchClause]
    finalizer: Optional[BlockStatement]

    _fields = ('block', 'handler', 'finalizer')

    def __init__(self, block: BlockStatement, handler: Optional[CatchClause] = None,
                 finalizer: Optional[BlockStatement] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.TRY_STATEMENT, location)
        self.block = block
        self.handler = handler
        self.finalizer = finalizer

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_try_statement(self)


@dataclass(eq=False)
class LabeledStatement(Statement):
    """``label: body``"""
    label: Identifier
    body: Statement

    _fields = ('label', 'body')

    def __init__(self, label: Identifier, body: Statement, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.LABELED_STATEMENT, location)
        self.label = label
        self.body = body

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_labeled_statement(self)


# =============================================================================
# Modules
# =============================================================================

@dataclass(eq=False)
class ImportSpecifier(ASTNode):
    """``{ imported as local }``; ``{ name }`` shares one node in both slots"""
    imported: Identifier
    local: Identifier

    _fields = ('imported', 'local')

    def __init__(self, imported: Identifier, local: Optional[Identifier] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.IMPORT_SPECIFIER, location)
        self.imported = imported
        self.local = local if local is not None else imported

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_import_specifier(self)


@dataclass(eq=False)
class ImportDefaultSpecifier(ASTNode):
    """``import local from "m"``"""
    local: Identifier

    _fields = ('local',)

    def __init__(self, local: Identifier, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.IMPORT_DEFAULT_SPECIFIER, location)
        self.local = local

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_import_default_specifier(self)


@dataclass(eq=False)
class ImportNamespaceSpecifier(ASTNode):
    """``import * as local from "m"``"""
    local: Identifier

    _fields = ('local',)

    def __init__(self, local: Identifier, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.IMPORT_NAMESPACE_SPECIFIER, location)
        self.local = local

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_import_namespace_specifier(self)


ImportClause = Union[ImportSpecifier, ImportDefaultSpecifier, ImportNamespaceSpecifier]


@dataclass(eq=False)
class ImportDeclaration(Statement):
    """``import specifiers from source``"""
    specifiers: List[ImportClause]
    source: Literal

    _fields = ('specifiers', 'source')

    def __init__(self, specifiers: List[ImportClause], source: Literal,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.IMPORT_DECLARATION, location)
        self.specifiers = specifiers
        self.source = source

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_import_declaration(self)


@dataclass(eq=False)
class ExportSpecifier(ASTNode):
    """``{ local as exported }``; ``{ name }`` shares one node in both slots"""
    local: Identifier
    exported: Identifier

    _fields = ('local', 'exported')

    def __init__(self, local: Identifier, exported: Optional[Identifier] = None,
                 location: Optional[SourceLocation] = None):
        super().__init__(NodeType.EXPORT_SPECIFIER, location)
        self.local = local
        self.exported = exported if exported is not None else local

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_export_specifier(self)


@dataclass(eq=False)
class ExportNamedDeclaration(Statement):
    """``export <declaration>`` or ``export { specifiers } [from source]``"""
    declaration: Optional[Statement]
    specifiers: List[ExportSpecifier]
    source: Optional[Literal]

    _fields = ('declaration', 'specifiers', 'source')

    def __init__(self, declaration: Optional[Statement], specifiers: Optional[List[ExportSpecifier]] = None,
                 source: Optional[Literal] = None, location: Optional[SourceLocation] = None):
        super().__init__(NodeType.EXPORT_NAMED_DECLARATION, location)
        self.declaration = declaration
        self.specifiers = specifiers if specifiers is not None else []
        self.source = source

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_export_named_declaration(self)


@dataclass(eq=False)
class ExportDefaultDeclaration(Statement):
    """``export default <declaration or expression>``"""
    declaration: Union[Statement, Expression]

    _fields = ('declaration',)

    def __init__(self, declaration: Union[Statement, Expression], location: Optional[SourceLocation] = None):
        super().__init__(NodeType.EXPORT_DEFAULT_DECLARATION, location)
        self.declaration = declaration

    def accept(self, visitor: 'ASTVisitor[T]') -> 'T':
        return visitor.visit_export_default_declaration(self)


def is_scope_anchor(node: Any) -> bool:
    """True for nodes that may anchor a lexical scope (program, functions, catch, class expressions)."""
    return isinstance(node, (Program, Function, CatchClause, ClassExpression))
