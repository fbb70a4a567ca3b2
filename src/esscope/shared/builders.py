"""
Node builders for synthesized code.

Injected declarations and call-builder expressions are assembled from these
helpers; every built node has no source location.
"""

from typing import Optional, Sequence, Union

from .nodes import (
    ArrayExpression, CallExpression, Expression, ExpressionStatement, Identifier,
    Literal, LiteralValue, MemberExpression, ThisExpression, VariableDeclaration,
    VariableDeclarator,
)

ExpressionLike = Union[Expression, LiteralValue]


def identifier(name: str) -> Identifier:
    return Identifier(name)


def literal(value: LiteralValue) -> Literal:
    return Literal(value)


def as_expression(value: ExpressionLike) -> Expression:
    """Wrap Python scalars as literals; pass nodes through."""
    if isinstance(value, Expression):
        return value
    if value is None or isinstance(value, (str, int, float, bool)):
        return Literal(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to an expression node")


def member(obj: ExpressionLike, prop: Union[str, Expression], computed: bool = False) -> MemberExpression:
    """``obj.prop``; a str property becomes an Identifier unless computed."""
    if isinstance(prop, str):
        prop_node: Expression = Literal(prop) if computed else Identifier(prop)
    else:
        prop_node = prop
    return MemberExpression(as_expression(obj), prop_node, computed)


def member_chain(dotted: str) -> Expression:
    """``"Object.prototype.hasOwnProperty"`` → nested MemberExpression."""
    parts = dotted.split(".")
    expr: Expression = Identifier(parts[0])
    for part in parts[1:]:
        expr = MemberExpression(expr, Identifier(part), False)
    return expr


def call(callee: Expression, arguments: Sequence[ExpressionLike] = ()) -> CallExpression:
    return CallExpression(callee, [as_expression(arg) for arg in arguments])


def array(elements: Sequence[ExpressionLike]) -> ArrayExpression:
    return ArrayExpression([as_expression(element) for element in elements])


def this_expression() -> ThisExpression:
    return ThisExpression()


def expression_statement(expression: Expression) -> ExpressionStatement:
    return ExpressionStatement(expression)


def var_declaration(target: Identifier, init: Optional[Expression] = None, kind: str = "var") -> VariableDeclaration:
    return VariableDeclaration(kind, [VariableDeclarator(target, init)])
