"""
Source Printer

Deterministic, precedence-aware printer from the AST back to ECMAScript text.
Output is normalized rather than faithful: two-space indentation,
double-quoted strings, one statement per line, and parentheses only where
precedence or statement-start ambiguity requires them.
"""

import json
import math
from typing import List, Optional

from ..shared.ast_visitor import ASTVisitor
from ..shared.nodes import (
    ArrayExpression, AssignmentExpression, AssignmentPattern, ASTNode, BinaryExpression, BlockStatement,
    BreakStatement, CallExpression, CatchClause, Class, ClassBody, ClassDeclaration, ClassExpression,
    ConditionalExpression, ContinueStatement, DoWhileStatement, EmptyStatement, ExportDefaultDeclaration,
    ExportNamedDeclaration, ExportSpecifier, Expression, ExpressionStatement, ForInStatement, ForStatement,
    Function, FunctionDeclaration, FunctionExpression, Identifier, IfStatement, ImportDeclaration,
    ImportDefaultSpecifier, ImportNamespaceSpecifier, ImportSpecifier, LabeledStatement, Literal,
    LogicalExpression, MemberExpression, MethodDefinition, NewExpression, ObjectExpression, Program,
    Property, ReturnStatement, SequenceExpression, Statement, Super, ThisExpression, ThrowStatement,
    TryStatement, UnaryExpression, UpdateExpression, VariableDeclaration, VariableDeclarator, WhileStatement,
)
from ..utils.config import INDENT

# Precedence levels, loosest first
SEQUENCE = 0
ASSIGNMENT = 1
CONDITIONAL = 2
UNARY = 13
POSTFIX = 14
CALL = 15
MEMBER = 16
PRIMARY = 17

BINARY_PRECEDENCE = {
    "||": 3,
    "&&": 4,
    "|": 5,
    "^": 6,
    "&": 7,
    "==": 8, "!=": 8, "===": 8, "!==": 8,
    "<": 9, ">": 9, "<=": 9, ">=": 9, "instanceof": 9, "in": 9,
    "<<": 10, ">>": 10, ">>>": 10,
    "+": 11, "-": 11,
    "*": 12, "/": 12, "%": 12,
}

_WORD_OPERATORS = ("typeof", "void", "delete")


def precedence_of(node: Expression) -> int:
    if isinstance(node, SequenceExpression):
        return SEQUENCE
    if isinstance(node, AssignmentExpression):
        return ASSIGNMENT
    if isinstance(node, ConditionalExpression):
        return CONDITIONAL
    if isinstance(node, (BinaryExpression, LogicalExpression)):
        return BINARY_PRECEDENCE[node.operator]
    if isinstance(node, UnaryExpression):
        return UNARY
    if isinstance(node, UpdateExpression):
        return UNARY if node.prefix else POSTFIX
    if isinstance(node, CallExpression):
        return CALL
    if isinstance(node, (MemberExpression, NewExpression)):
        return MEMBER
    return PRIMARY


def _leftmost(node: Expression) -> Expression:
    """The expression whose text begins the printed form of node."""
    while True:
        if isinstance(node, CallExpression):
            node = node.callee
        elif isinstance(node, MemberExpression):
            node = node.object
        elif isinstance(node, (BinaryExpression, LogicalExpression, AssignmentExpression)):
            node = node.left
        elif isinstance(node, ConditionalExpression):
            node = node.test
        elif isinstance(node, SequenceExpression) and node.expressions:
            node = node.expressions[0]
        elif isinstance(node, UpdateExpression) and not node.prefix:
            node = node.argument
        else:
            return node


def _contains_call(node: Expression) -> bool:
    while isinstance(node, MemberExpression):
        node = node.object
    return isinstance(node, CallExpression)


def _indent(text: str) -> str:
    return "\n".join(INDENT + line if line else line for line in text.split("\n"))


def format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


class Printer(ASTVisitor[str]):
    """
    Render nodes as source text.

    Statements render without a trailing newline; blocks indent every line of
    their children, so multi-line expressions (function bodies) nest cleanly.
    """

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def expr(self, node: Expression, min_precedence: int = SEQUENCE) -> str:
        text = node.accept(self)
        if precedence_of(node) < min_precedence:
            return f"({text})"
        return text

    def _statement_body(self, node: Statement) -> str:
        """Sub-statement of if/for/while: blocks stay on the header line."""
        if isinstance(node, BlockStatement):
            return " " + node.accept(self)
        return "\n" + _indent(node.accept(self))

    def _params(self, params: List[ASTNode]) -> str:
        return ", ".join(param.accept(self) for param in params)

    def _function(self, node: Function) -> str:
        name = f" {node.id.name}" if node.id is not None else ""
        return f"function{name}({self._params(node.params)}) {node.body.accept(self)}"

    def _class(self, node: Class) -> str:
        parts = ["class"]
        if node.id is not None:
            parts.append(node.id.name)
        if node.superclass is not None:
            parts.append(f"extends {self.expr(node.superclass, CALL)}")
        parts.append(node.body.accept(self))
        return " ".join(parts)

    def _key(self, key: Expression, computed: bool) -> str:
        if computed:
            return f"[{self.expr(key, ASSIGNMENT)}]"
        return key.accept(self)

    def _declarations(self, node: VariableDeclaration) -> str:
        declarators = ", ".join(declarator.accept(self) for declarator in node.declarations)
        return f"{node.kind} {declarators}"

    def _expression_statement_text(self, expression: Expression) -> str:
        text = self.expr(expression)
        if isinstance(_leftmost(expression), (FunctionExpression, ClassExpression, ObjectExpression)):
            return f"({text})"
        return text

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------

    def visit_program(self, node: Program) -> str:
        return "\n".join(statement.accept(self) for statement in node.body)

    def visit_block_statement(self, node: BlockStatement) -> str:
        if not node.body:
            return "{}"
        inner = "\n".join(statement.accept(self) for statement in node.body)
        return "{\n" + _indent(inner) + "\n}"

    def visit_empty_statement(self, node: EmptyStatement) -> str:
        return ";"

    def visit_expression_statement(self, node: ExpressionStatement) -> str:
        return self._expression_statement_text(node.expression) + ";"

    def visit_variable_declaration(self, node: VariableDeclaration) -> str:
        return self._declarations(node) + ";"

    def visit_variable_declarator(self, node: VariableDeclarator) -> str:
        if node.init is None:
            return node.id.name
        return f"{node.id.name} = {self.expr(node.init, ASSIGNMENT)}"

    def visit_function_declaration(self, node: FunctionDeclaration) -> str:
        return self._function(node)

    def visit_class_declaration(self, node: ClassDeclaration) -> str:
        return self._class(node)

    def visit_if_statement(self, node: IfStatement) -> str:
        consequent = node.consequent
        if node.alternate is not None and isinstance(consequent, IfStatement):
            # Keep the else attached to this if
            consequent = BlockStatement([consequent])
        text = f"if ({self.expr(node.test)})" + self._statement_body(consequent)
        if node.alternate is None:
            return text
        separator = " " if isinstance(consequent, BlockStatement) else "\n"
        if isinstance(node.alternate, (BlockStatement, IfStatement)):
            return f"{text}{separator}else {node.alternate.accept(self)}"
        return f"{text}{separator}else" + self._statement_body(node.alternate)

    def visit_for_statement(self, node: ForStatement) -> str:
        if node.init is None:
            init = ""
        elif isinstance(node.init, VariableDeclaration):
            init = self._declarations(node.init)
        else:
            init = self.expr(node.init)
        test = f" {self.expr(node.test)}" if node.test is not None else ""
        update = f" {self.expr(node.update)}" if node.update is not None else ""
        return f"for ({init};{test};{update})" + self._statement_body(node.body)

    def visit_for_in_statement(self, node: ForInStatement) -> str:
        return (f"for ({self._declarations(node.left)} in {self.expr(node.right)})"
                + self._statement_body(node.body))

    def visit_while_statement(self, node: WhileStatement) -> str:
        return f"while ({self.expr(node.test)})" + self._statement_body(node.body)

    def visit_do_while_statement(self, node: DoWhileStatement) -> str:
        body = self._statement_body(node.body)
        separator = " " if isinstance(node.body, BlockStatement) else "\n"
        return f"do{body}{separator}while ({self.expr(node.test)});"

    def visit_return_statement(self, node: ReturnStatement) -> str:
        if node.argument is None:
            return "return;"
        return f"return {self.expr(node.argument)};"

    def visit_throw_statement(self, node: ThrowStatement) -> str:
        return f"throw {self.expr(node.argument)};"

    def visit_break_statement(self, node: BreakStatement) -> str:
        return f"break {node.label.name};" if node.label is not None else "break;"

    def visit_continue_statement(self, node: ContinueStatement) -> str:
        return f"continue {node.label.name};" if node.label is not None else "continue;"

    def visit_try_statement(self, node: TryStatement) -> str:
        text = f"try {node.block.accept(self)}"
        if node.handler is not None:
            text += " " + node.handler.accept(self)
        if node.finalizer is not None:
            text += f" finally {node.finalizer.accept(self)}"
        return text

    def visit_catch_clause(self, node: CatchClause) -> str:
        return f"catch ({node.param.name}) {node.body.accept(self)}"

    def visit_labeled_statement(self, node: LabeledStatement) -> str:
        return f"{node.label.name}: {node.body.accept(self)}"

    # ------------------------------------------------------------------
    # Modules
    # ------------------------------------------------------------------

    def visit_import_declaration(self, node: ImportDeclaration) -> str:
        source = node.source.accept(self)
        if not node.specifiers:
            return f"import {source};"
        leading: List[str] = []
        named: List[str] = []
        for specifier in node.specifiers:
            if isinstance(specifier, ImportSpecifier):
                named.append(specifier.accept(self))
            else:
                leading.append(specifier.accept(self))
        if named or not leading:
            leading.append("{ " + ", ".join(named) + " }" if named else "{}")
        return f"import {', '.join(leading)} from {source};"

    def visit_import_specifier(self, node: ImportSpecifier) -> str:
        if node.local is node.imported or node.local.name == node.imported.name:
            return node.imported.name
        return f"{node.imported.name} as {node.local.name}"

    def visit_import_default_specifier(self, node: ImportDefaultSpecifier) -> str:
        return node.local.name

    def visit_import_namespace_specifier(self, node: ImportNamespaceSpecifier) -> str:
        return f"* as {node.local.name}"

    def visit_export_named_declaration(self, node: ExportNamedDeclaration) -> str:
        if node.declaration is not None:
            return f"export {node.declaration.accept(self)}"
        specifiers = ", ".join(specifier.accept(self) for specifier in node.specifiers)
        clause = "{ " + specifiers + " }" if specifiers else "{}"
        if node.source is not None:
            return f"export {clause} from {node.source.accept(self)};"
        return f"export {clause};"

    def visit_export_specifier(self, node: ExportSpecifier) -> str:
        if node.exported is node.local or node.exported.name == node.local.name:
            return node.local.name
        return f"{node.local.name} as {node.exported.name}"

    def visit_export_default_declaration(self, node: ExportDefaultDeclaration) -> str:
        declaration = node.declaration
        if isinstance(declaration, (FunctionDeclaration, ClassDeclaration)):
            return f"export default {declaration.accept(self)}"
        return f"export default {self._expression_statement_text(declaration)};"

    # ------------------------------------------------------------------
    # Functions and classes
    # ------------------------------------------------------------------

    def visit_function_expression(self, node: FunctionExpression) -> str:
        return self._function(node)

    def visit_assignment_pattern(self, node: AssignmentPattern) -> str:
        return f"{node.left.name} = {self.expr(node.right, ASSIGNMENT)}"

    def visit_class_expression(self, node: ClassExpression) -> str:
        return self._class(node)

    def visit_class_body(self, node: ClassBody) -> str:
        if not node.body:
            return "{}"
        inner = "\n".join(method.accept(self) for method in node.body)
        return "{\n" + _indent(inner) + "\n}"

    def visit_method_definition(self, node: MethodDefinition) -> str:
        prefix = "static " if node.static else ""
        function = node.value
        return f"{prefix}{self._key(node.key, node.computed)}({self._params(function.params)}) {function.body.accept(self)}"

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def visit_identifier(self, node: Identifier) -> str:
        return node.name

    def visit_literal(self, node: Literal) -> str:
        value = node.value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return json.dumps(value, ensure_ascii=False)
        if node.raw is not None:
            return node.raw
        return format_number(value)

    def visit_this_expression(self, node: ThisExpression) -> str:
        return "this"

    def visit_super(self, node: Super) -> str:
        return "super"

    def visit_array_expression(self, node: ArrayExpression) -> str:
        return "[" + ", ".join(self.expr(element, ASSIGNMENT) for element in node.elements) + "]"

    def visit_object_expression(self, node: ObjectExpression) -> str:
        if not node.properties:
            return "{}"
        return "{ " + ", ".join(prop.accept(self) for prop in node.properties) + " }"

    def visit_property(self, node: Property) -> str:
        if node.shorthand:
            return node.key.accept(self)
        key = self._key(node.key, node.computed)
        if node.method:
            function = node.value
            return f"{key}({self._params(function.params)}) {function.body.accept(self)}"
        return f"{key}: {self.expr(node.value, ASSIGNMENT)}"

    def visit_unary_expression(self, node: UnaryExpression) -> str:
        argument = self.expr(node.argument, UNARY)
        if node.operator in _WORD_OPERATORS or (node.operator in ("+", "-") and argument.startswith(node.operator)):
            return f"{node.operator} {argument}"
        return f"{node.operator}{argument}"

    def visit_update_expression(self, node: UpdateExpression) -> str:
        if node.prefix:
            return f"{node.operator}{self.expr(node.argument, UNARY)}"
        return f"{self.expr(node.argument, CALL)}{node.operator}"

    def visit_binary_expression(self, node: BinaryExpression) -> str:
        precedence = BINARY_PRECEDENCE[node.operator]
        return f"{self.expr(node.left, precedence)} {node.operator} {self.expr(node.right, precedence + 1)}"

    visit_logical_expression = visit_binary_expression

    def visit_assignment_expression(self, node: AssignmentExpression) -> str:
        return f"{self.expr(node.left, CALL)} {node.operator} {self.expr(node.right, ASSIGNMENT)}"

    def visit_conditional_expression(self, node: ConditionalExpression) -> str:
        return (f"{self.expr(node.test, CONDITIONAL + 1)} ? {self.expr(node.consequent, ASSIGNMENT)}"
                f" : {self.expr(node.alternate, ASSIGNMENT)}")

    def visit_sequence_expression(self, node: SequenceExpression) -> str:
        return ", ".join(self.expr(expression, ASSIGNMENT) for expression in node.expressions)

    def _arguments(self, arguments: List[Expression]) -> str:
        return "(" + ", ".join(self.expr(argument, ASSIGNMENT) for argument in arguments) + ")"

    def visit_call_expression(self, node: CallExpression) -> str:
        return self.expr(node.callee, CALL) + self._arguments(node.arguments)

    def visit_new_expression(self, node: NewExpression) -> str:
        callee = self.expr(node.callee, MEMBER)
        if _contains_call(node.callee) and not callee.startswith("("):
            callee = f"({callee})"
        return f"new {callee}{self._arguments(node.arguments)}"

    def visit_member_expression(self, node: MemberExpression) -> str:
        obj = self.expr(node.object, CALL)
        if isinstance(node.object, Literal) and isinstance(node.object.value, (int, float)) \
                and not isinstance(node.object.value, bool) and obj[-1:].isdigit() and "." not in obj:
            obj = f"({obj})"
        if node.computed:
            return f"{obj}[{self.expr(node.property)}]"
        return f"{obj}.{node.property.accept(self)}"


def print_node(node: ASTNode, printer: Optional[Printer] = None) -> str:
    """Render any node (usually a Program) as source text."""
    return node.accept(printer or Printer())


def normalize(source: str) -> str:
    """Parse then print, giving a canonical spelling for source comparison."""
    from ..frontend.parser import parse
    return print_node(parse(source))
