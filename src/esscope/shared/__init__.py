"""
Shared components: the ESTree node model, the scope arena, traversal and
diagnostics used by the frontend, the analyses and the printer.
"""

from .source_location import SourceLocation
from .errors import (
    Error, ErrorReporter, EsscopeError, EsscopeSourceError, EsscopeImplementationError,
    InjectionError, ScopeLookupError,
)
from .nodes import (
    ASTNode, Expression, Statement, Program, NodeType,
    Identifier, Literal, ThisExpression, Super, ArrayExpression, Property, ObjectExpression,
    BlockStatement, AssignmentPattern, Function, FunctionExpression, FunctionDeclaration,
    MethodDefinition, ClassBody, Class, ClassExpression, ClassDeclaration,
    UnaryExpression, UpdateExpression, BinaryExpression, LogicalExpression, AssignmentExpression,
    ConditionalExpression, SequenceExpression, CallExpression, NewExpression, MemberExpression,
    ExpressionStatement, EmptyStatement, VariableDeclarator, VariableDeclaration,
    IfStatement, ForStatement, ForInStatement, WhileStatement, DoWhileStatement,
    ReturnStatement, ThrowStatement, BreakStatement, ContinueStatement,
    CatchClause, TryStatement, LabeledStatement,
    ImportSpecifier, ImportDefaultSpecifier, ImportNamespaceSpecifier, ImportDeclaration,
    ExportSpecifier, ExportNamedDeclaration, ExportDefaultDeclaration,
)
from .scope import Scope, ScopeKind, ScopeTree
from .ast_visitor import ASTVisitor, NodePath, iter_paths, traverse
