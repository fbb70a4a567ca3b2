"""
esscope AST Transformer
Converts the Lark parse tree to ESTree-shaped nodes
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Type, Union

from lark import Transformer, v_args
from lark.lexer import Token

from ...shared.errors import EsscopeSourceError
from ...shared.nodes import (
    ArrayExpression, AssignmentExpression, AssignmentPattern, BinaryExpression, BlockStatement,
    BreakStatement, CallExpression, CatchClause, ClassBody, ClassDeclaration, ClassExpression,
    ConditionalExpression, ContinueStatement, DoWhileStatement, EmptyStatement, ExportDefaultDeclaration,
    ExportNamedDeclaration, ExportSpecifier, Expression, ExpressionStatement, ForInStatement, ForStatement,
    FunctionDeclaration, FunctionExpression, Identifier, IfStatement, ImportDeclaration,
    ImportDefaultSpecifier, ImportNamespaceSpecifier, ImportSpecifier, LabeledStatement, Literal,
    LogicalExpression, MemberExpression, MethodDefinition, NewExpression, ObjectExpression, Param, Program,
    Property, ReturnStatement, SequenceExpression, Statement, Super, ThisExpression, ThrowStatement,
    TryStatement, UnaryExpression, UpdateExpression, VariableDeclaration, VariableDeclarator, WhileStatement,
)
from ...shared.source_location import SourceLocation
from ...utils.config import PARSE_ERROR_CODE
from .literals import LiteralParser

logger = logging.getLogger(__name__)


@dataclass
class ComputedKey:
    """Internal type for a ``[expr]`` property or method key"""
    expression: Expression


PropertyKey = Union[Identifier, Literal, ComputedKey]


def _split_key(key: PropertyKey) -> Tuple[Expression, bool]:
    if isinstance(key, ComputedKey):
        return key.expression, True
    return key, False


def _mark_directives(statements: List[Statement]) -> List[Statement]:
    """Flag the leading string-literal statements of a body as its directive prologue."""
    for statement in statements:
        if not (isinstance(statement, ExpressionStatement)
                and isinstance(statement.expression, Literal)
                and isinstance(statement.expression.value, str)
                and statement.expression.raw is not None):
            break
        statement.directive = statement.expression.value
    return statements


@v_args(inline=True, meta=True)
class EsscopeTransformer(Transformer):
    """
    Parse tree to AST.

    Every method receives the rule's meta first; rules with optional parts
    take ``*children`` and sort them by type.
    """

    def __init__(self) -> None:
        super().__init__()
        self.current_file: str = ""  # Set by Parser before each transform

    # ------------------------------------------------------------------
    # Location helpers
    # ------------------------------------------------------------------

    def _location(self, meta: Any) -> Optional[SourceLocation]:
        if meta is None or getattr(meta, "empty", True):
            return None
        return SourceLocation(
            file=self.current_file,
            line=meta.line,
            column=meta.column,
            start=meta.start_pos,
            end=meta.end_pos,
            end_line=meta.end_line,
            end_column=meta.end_column,
        )

    def _token_location(self, token: Token) -> SourceLocation:
        return SourceLocation(
            file=self.current_file,
            line=token.line,
            column=token.column,
            start=token.start_pos or 0,
            end=token.end_pos or 0,
            end_line=token.end_line or 0,
            end_column=token.end_column or 0,
        )

    def _identifier(self, token: Token) -> Identifier:
        return Identifier(str(token), self._token_location(token))

    def _expect_word(self, token: Token, word: str) -> None:
        """``as`` and ``from`` are ordinary names to the lexer; check them here."""
        if str(token) != word:
            raise EsscopeSourceError(
                f"expected '{word}', found '{token}'",
                self._token_location(token),
                error_code=PARSE_ERROR_CODE,
                label=f"expected '{word}'",
            )

    def _function(self, cls: Type[Union[FunctionDeclaration, FunctionExpression]], meta: Any,
                  children: Sequence[Any]) -> Union[FunctionDeclaration, FunctionExpression]:
        name: Optional[Identifier] = None
        params: List[Param] = []
        body = children[-1]
        for child in children[:-1]:
            if isinstance(child, Token):
                name = self._identifier(child)
            elif isinstance(child, list):
                params = child
        return cls(name, params, body, self._location(meta))

    def _class(self, cls: Type[Union[ClassDeclaration, ClassExpression]], meta: Any,
               children: Sequence[Any]) -> Union[ClassDeclaration, ClassExpression]:
        name: Optional[Identifier] = None
        superclass: Optional[Expression] = None
        body: Optional[ClassBody] = None
        for child in children:
            if isinstance(child, Token):
                name = self._identifier(child)
            elif isinstance(child, ClassBody):
                body = child
            else:
                superclass = child
        return cls(name, superclass, body, self._location(meta))

    def _method_parts(self, rest: Sequence[Any]) -> Tuple[List[Param], BlockStatement]:
        params = rest[0] if len(rest) == 2 else []
        return params, rest[-1]

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------

    def program(self, meta, *statements):
        program = Program(_mark_directives(list(statements)), self._location(meta))
        logger.debug(f"Transformed {len(program.body)} top-level statements from {self.current_file}")
        return program

    def block(self, meta, *statements):
        return BlockStatement(list(statements), self._location(meta))

    def function_body(self, meta, *statements):
        return BlockStatement(_mark_directives(list(statements)), self._location(meta))

    def empty_statement(self, meta):
        return EmptyStatement(self._location(meta))

    def expression_statement(self, meta, expression):
        return ExpressionStatement(expression, location=self._location(meta))

    def var_kind(self, meta, token):
        return str(token)

    def variable_statement(self, meta, kind, *declarators):
        return VariableDeclaration(kind, list(declarators), self._location(meta))

    for_declaration = variable_statement

    def variable_declarator(self, meta, name, init=None):
        return VariableDeclarator(self._identifier(name), init, self._location(meta))

    def if_statement(self, meta, test, consequent, alternate=None):
        return IfStatement(test, consequent, alternate, self._location(meta))

    def for_statement(self, meta, init, test, update, body):
        return ForStatement(init, test, update, body, self._location(meta))

    def optional_expr(self, meta, expression=None):
        return expression

    def for_in_statement(self, meta, kind, name, right, body):
        target = self._identifier(name)
        left = VariableDeclaration(kind, [VariableDeclarator(target, None, target.location)], target.location)
        return ForInStatement(left, right, body, self._location(meta))

    def while_statement(self, meta, test, body):
        return WhileStatement(test, body, self._location(meta))

    def do_while_statement(self, meta, body, test):
        return DoWhileStatement(body, test, self._location(meta))

    def return_statement(self, meta, argument=None):
        return ReturnStatement(argument, self._location(meta))

    def throw_statement(self, meta, argument):
        return ThrowStatement(argument, self._location(meta))

    def break_statement(self, meta, label=None):
        return BreakStatement(self._identifier(label) if label is not None else None, self._location(meta))

    def continue_statement(self, meta, label=None):
        return ContinueStatement(self._identifier(label) if label is not None else None, self._location(meta))

    def try_statement(self, meta, block, *clauses):
        handler = None
        finalizer = None
        for clause in clauses:
            if isinstance(clause, CatchClause):
                handler = clause
            else:
                finalizer = clause
        return TryStatement(block, handler, finalizer, self._location(meta))

    def catch_clause(self, meta, name, body):
        return CatchClause(self._identifier(name), body, self._location(meta))

    def finally_clause(self, meta, block):
        return block

    def labeled_statement(self, meta, name, body):
        return LabeledStatement(self._identifier(name), body, self._location(meta))

    # ------------------------------------------------------------------
    # Functions and classes
    # ------------------------------------------------------------------

    def function_declaration(self, meta, *children):
        return self._function(FunctionDeclaration, meta, children)

    def function_expression(self, meta, *children):
        return self._function(FunctionExpression, meta, children)

    def parameters(self, meta, *params):
        return list(params)

    def simple_parameter(self, meta, name):
        return self._identifier(name)

    def default_parameter(self, meta, name, value):
        return AssignmentPattern(self._identifier(name), value, self._location(meta))

    def class_declaration(self, meta, *children):
        return self._class(ClassDeclaration, meta, children)

    def class_expression(self, meta, *children):
        return self._class(ClassExpression, meta, children)

    def class_heritage(self, meta, superclass):
        return superclass

    def class_body(self, meta, *members):
        return ClassBody(list(members), self._location(meta))

    def method_definition(self, meta, key, *rest):
        params, body = self._method_parts(rest)
        key_node, computed = _split_key(key)
        kind = "method"
        if not computed and (
            (isinstance(key_node, Identifier) and key_node.name == "constructor")
            or (isinstance(key_node, Literal) and key_node.value == "constructor")
        ):
            kind = "constructor"
        location = self._location(meta)
        value = FunctionExpression(None, params, body, location)
        return MethodDefinition(key_node, value, kind, computed, False, location)

    def static_method(self, meta, method):
        method.static = True
        method.kind = "method"
        return method

    # ------------------------------------------------------------------
    # Modules
    # ------------------------------------------------------------------

    def import_declaration(self, meta, specifiers, from_word, source):
        self._expect_word(from_word, "from")
        return ImportDeclaration(specifiers, self.string_literal(meta, source), self._location(meta))

    def side_effect_import(self, meta, source):
        return ImportDeclaration([], self.string_literal(meta, source), self._location(meta))

    def import_clause(self, meta, *parts):
        specifiers = []
        for part in parts:
            if isinstance(part, list):
                specifiers.extend(part)
            else:
                specifiers.append(part)
        return specifiers

    def default_import(self, meta, name):
        return ImportDefaultSpecifier(self._identifier(name), self._location(meta))

    def namespace_import(self, meta, as_word, name):
        self._expect_word(as_word, "as")
        return ImportNamespaceSpecifier(self._identifier(name), self._location(meta))

    def named_imports(self, meta, *specifiers):
        return list(specifiers)

    def import_specifier(self, meta, imported, as_word=None, local=None):
        if as_word is None:
            return ImportSpecifier(self._identifier(imported), location=self._location(meta))
        self._expect_word(as_word, "as")
        return ImportSpecifier(self._identifier(imported), self._identifier(local), self._location(meta))

    def export_default_declaration(self, meta, declaration):
        return ExportDefaultDeclaration(declaration, self._location(meta))

    def export_named_declaration(self, meta, declaration):
        return ExportNamedDeclaration(declaration, location=self._location(meta))

    def export_named_specifiers(self, meta, specifiers, from_word=None, source=None):
        source_node = None
        if from_word is not None:
            self._expect_word(from_word, "from")
            source_node = self.string_literal(meta, source)
        return ExportNamedDeclaration(None, specifiers, source_node, self._location(meta))

    def export_clause(self, meta, *specifiers):
        return list(specifiers)

    def export_specifier(self, meta, local, as_word=None, exported=None):
        if as_word is None:
            return ExportSpecifier(self._identifier(local), location=self._location(meta))
        self._expect_word(as_word, "as")
        return ExportSpecifier(self._identifier(local), self._identifier(exported), self._location(meta))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def sequence_expression(self, meta, left, right):
        if isinstance(left, SequenceExpression):
            left.expressions.append(right)
            return left
        return SequenceExpression([left, right], self._location(meta))

    def assignment_expression(self, meta, left, operator, right):
        return AssignmentExpression(operator, left, right, self._location(meta))

    def conditional_expression(self, meta, test, consequent, alternate):
        return ConditionalExpression(test, consequent, alternate, self._location(meta))

    def logical_expression(self, meta, left, operator, right):
        return LogicalExpression(operator, left, right, self._location(meta))

    def binary_expression(self, meta, left, operator, right):
        return BinaryExpression(operator, left, right, self._location(meta))

    def unary_expression(self, meta, operator, argument):
        return UnaryExpression(operator, argument, self._location(meta))

    def prefix_update(self, meta, operator, argument):
        return UpdateExpression(operator, argument, True, self._location(meta))

    def postfix_update(self, meta, argument, operator):
        return UpdateExpression(operator, argument, False, self._location(meta))

    def new_without_arguments(self, meta, callee):
        return NewExpression(callee, [], self._location(meta))

    def new_expression(self, meta, callee, arguments):
        return NewExpression(callee, arguments, self._location(meta))

    def call_expression(self, meta, callee, arguments):
        return CallExpression(callee, arguments, self._location(meta))

    def member_expression(self, meta, obj, prop):
        return MemberExpression(obj, prop, False, self._location(meta))

    def computed_member_expression(self, meta, obj, prop):
        return MemberExpression(obj, prop, True, self._location(meta))

    def arguments(self, meta, *args):
        return list(args)

    def identifier(self, meta, name):
        return self._identifier(name)

    def this_expression(self, meta):
        return ThisExpression(self._location(meta))

    def super_expression(self, meta):
        return Super(self._location(meta))

    def number_literal(self, meta, token):
        return LiteralParser.parse_number(str(token), self._token_location(token))

    def string_literal(self, meta, token):
        return LiteralParser.parse_string(str(token), self._token_location(token))

    def true_literal(self, meta):
        return Literal(True, "true", self._location(meta))

    def false_literal(self, meta):
        return Literal(False, "false", self._location(meta))

    def null_literal(self, meta):
        return Literal(None, "null", self._location(meta))

    def array_literal(self, meta, *elements):
        return ArrayExpression(list(elements), self._location(meta))

    def object_literal(self, meta, *properties):
        return ObjectExpression(list(properties), self._location(meta))

    def property(self, meta, key, value):
        key_node, computed = _split_key(key)
        return Property(key_node, value, computed, location=self._location(meta))

    def shorthand_property(self, meta, name):
        node = self._identifier(name)
        return Property(node, node, shorthand=True, location=self._location(meta))

    def method_property(self, meta, key, *rest):
        params, body = self._method_parts(rest)
        key_node, computed = _split_key(key)
        location = self._location(meta)
        return Property(key_node, FunctionExpression(None, params, body, location), computed,
                        method=True, location=location)

    def string_key(self, meta, token):
        return self.string_literal(meta, token)

    def number_key(self, meta, token):
        return self.number_literal(meta, token)

    def computed_key(self, meta, expression):
        return ComputedKey(expression)

    def prop_name(self, meta, token):
        return self._identifier(token)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def assign_op(self, meta, token):
        return str(token)

    logical_or_op = logical_and_op = assign_op
    bitwise_or_op = bitwise_xor_op = bitwise_and_op = assign_op
    equality_op = relational_op = shift_op = assign_op
    additive_op = multiplicative_op = unary_op = update_op = assign_op
