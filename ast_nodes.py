"""
Monkey abstract syntax tree
Immutable statement/expression nodes. Every node keeps the token that introduced it
and renders back to canonical source text, which re-parses to the same tree.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from tokens import Token


class Node:
    """Base of every AST node"""
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


class Statement(Node):
    pass


class Expression(Node):
    pass


def join_statements(statements: Sequence[Statement], separator: str) -> str:
    """Render statements so that consecutive expression statements stay separate"""
    parts = []
    last = len(statements) - 1
    for index, statement in enumerate(statements):
        text = str(statement)
        if isinstance(statement, ExpressionStatement) and index < last:
            text += ";"
        parts.append(text)
    return separator.join(parts)


# ============================================================================
# PROGRAM AND STATEMENTS
# ============================================================================

@dataclass(frozen=True)
class Program(Node):
    """Root node: the ordered statements of a source text"""
    statements: Tuple[Statement, ...] = ()

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return join_statements(self.statements, "\n")


@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: "Identifier"
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    return_value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token
    statements: Tuple[Statement, ...] = ()

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        return "{ " + join_statements(self.statements, " ") + " }"


# ============================================================================
# EXPRESSIONS
# ============================================================================

@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    token: Token
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class StringLiteral(Expression):
    token: Token
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        text = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            text += f" else {self.alternative}"
        return text


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token  # the '(' token
    function: Expression
    arguments: Tuple[Expression, ...]

    def __str__(self) -> str:
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.function}({args})"


@dataclass(frozen=True)
class UnparsedExpression(Expression):
    """Placeholder for an expression that failed to parse"""
    token: Token

    def __str__(self) -> str:
        return "<unparsed>"
