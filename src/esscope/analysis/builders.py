"""
Call builders over shared native members.

Each builder injects (once per scope) a shared reference such as
``var $__Array$prototype$slice = Array.prototype.slice;`` and returns a call
through it. Argument lists given as Python sequences are spliced into a
``.call(receiver, ...)``; a single expression argument is only known at run
time, so the receiver is prepended with ``.apply(fn, [context].concat(args))``.
"""

from typing import Optional, Sequence, Union

from ..shared.builders import ExpressionLike, array, call, member, member_chain
from ..shared.nodes import CallExpression, Expression, Identifier
from ..shared.scope import Scope
from .injection import inject_shared

HAS_OWN_PROPERTY = "Object.prototype.hasOwnProperty"
GET_OWN_PROPERTY_DESCRIPTOR = "Object.getOwnPropertyDescriptor"
GET_PROTOTYPE_OF = "Object.getPrototypeOf"
ARRAY_SLICE = "Array.prototype.slice"
FUNCTION_BIND = "Function.prototype.bind"


def shared_member(scope: Scope, dotted: str) -> Identifier:
    """
    A fresh reference to the shared declaration of ``dotted``.

    The declared identifier stays in its declarator; callers get a new node
    each time so no Identifier occupies two slots.
    """
    declared = inject_shared(scope, dotted, member_chain(dotted))
    return Identifier(declared.name)


def call_has_own_property(scope: Scope, obj: ExpressionLike, prop: ExpressionLike) -> CallExpression:
    """``$__Object$prototype$hasOwnProperty.call(obj, prop)``"""
    return call(member(shared_member(scope, HAS_OWN_PROPERTY), "call"), [obj, prop])


def call_get_own_property_descriptor(scope: Scope, obj: ExpressionLike, prop: ExpressionLike) -> CallExpression:
    return call(shared_member(scope, GET_OWN_PROPERTY_DESCRIPTOR), [obj, prop])


def call_get_prototype_of(scope: Scope, obj: ExpressionLike) -> CallExpression:
    return call(shared_member(scope, GET_PROTOTYPE_OF), [obj])


def call_array_slice(scope: Scope, obj: ExpressionLike, begin: Optional[ExpressionLike] = None,
                     end: Optional[ExpressionLike] = None) -> CallExpression:
    """
    ``$__Array$prototype$slice.call(obj[, begin[, end]])``.

    Missing bounds are omitted; an end without a begin starts at 0.
    """
    arguments = [obj]
    if begin is not None or end is not None:
        arguments.append(0 if begin is None else begin)
    if end is not None:
        arguments.append(end)
    return call(member(shared_member(scope, ARRAY_SLICE), "call"), arguments)


def call_function_bind(scope: Scope, fn: ExpressionLike, context: ExpressionLike,
                       args: Union[Sequence[ExpressionLike], Expression]) -> CallExpression:
    bind = shared_member(scope, FUNCTION_BIND)
    if isinstance(args, Expression):
        bound = call(member(array([context]), "concat"), [args])
        return call(member(bind, "apply"), [fn, bound])
    if isinstance(args, str):
        raise TypeError("args must be a sequence of arguments or an expression node, not str")
    return call(member(bind, "call"), [fn, context, *args])


__all__ = [
    "shared_member", "call_has_own_property", "call_get_own_property_descriptor",
    "call_get_prototype_of", "call_array_slice", "call_function_bind",
]
