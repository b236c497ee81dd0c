"""
AST rendering tests for Monkey
Canonical source text of hand-built nodes
"""

from ast_nodes import (
  BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement, FunctionLiteral,
  Identifier, IfExpression, InfixExpression, IntegerLiteral, LetStatement, Program,
  ReturnStatement, StringLiteral, UnparsedExpression
)
from tokens import Token, TokenKind


def ident(name):
  return Identifier(Token(TokenKind.IDENT, name), name)


def integer(value):
  return IntegerLiteral(Token(TokenKind.INT, str(value)), value)


def expr_stmt(expression):
  return ExpressionStatement(expression.token, expression)


def block(*statements):
  return BlockStatement(Token(TokenKind.LBRACE, "{"), tuple(statements))


class TestStatementRendering:
  """Statements and programs"""

  def test_let_statement(self):
    program = Program((
        LetStatement(Token(TokenKind.LET, "let"), ident("myVar"), ident("anotherVar")),
    ))
    assert str(program) == "let myVar = anotherVar;"
    assert program.token_literal() == "let"

  def test_return_statement(self):
    statement = ReturnStatement(Token(TokenKind.RETURN, "return"), integer(5))
    assert str(statement) == "return 5;"

  def test_expression_statements_are_separated_when_followed(self):
    program = Program((expr_stmt(ident("a")), expr_stmt(ident("b"))))
    assert str(program) == "a;\nb"

  def test_empty_program(self):
    program = Program()
    assert str(program) == ""
    assert program.token_literal() == ""

  def test_blocks(self):
    assert str(block()) == "{ }"
    assert str(block(expr_stmt(ident("x")))) == "{ x }"
    let = LetStatement(Token(TokenKind.LET, "let"), ident("a"), integer(1))
    assert str(block(let, expr_stmt(ident("a")))) == "{ let a = 1; a }"
    assert str(block(expr_stmt(ident("a")), expr_stmt(ident("b")))) == "{ a; b }"


class TestExpressionRendering:
  """Expressions are rendered fully parenthesised"""

  def test_literals(self):
    assert str(integer(42)) == "42"
    assert str(BooleanLiteral(Token(TokenKind.TRUE, "true"), True)) == "true"
    assert str(BooleanLiteral(Token(TokenKind.FALSE, "false"), False)) == "false"
    assert str(StringLiteral(Token(TokenKind.STRING, "hi there"), "hi there")) == '"hi there"'

  def test_infix_expression(self):
    node = InfixExpression(Token(TokenKind.PLUS, "+"), ident("a"), "+", integer(1))
    assert str(node) == "(a + 1)"
    assert node.token_literal() == "+"

  def test_if_expression(self):
    condition = InfixExpression(Token(TokenKind.LT, "<"), ident("x"), "<", ident("y"))
    node = IfExpression(
        Token(TokenKind.IF, "if"), condition,
        block(expr_stmt(ident("x"))), block(expr_stmt(ident("y"))))
    assert str(node) == "if ((x < y)) { x } else { y }"

  def test_function_and_call(self):
    body = block(expr_stmt(
        InfixExpression(Token(TokenKind.PLUS, "+"), ident("x"), "+", ident("y"))))
    function = FunctionLiteral(Token(TokenKind.FUNCTION, "fn"), (ident("x"), ident("y")), body)
    assert str(function) == "fn(x, y) { (x + y) }"

    call = CallExpression(Token(TokenKind.LPAREN, "("), ident("add"), (integer(1), integer(2)))
    assert str(call) == "add(1, 2)"
    assert call.token_literal() == "("

  def test_unparsed_placeholder(self):
    node = UnparsedExpression(Token(TokenKind.SEMICOLON, ";"))
    assert str(node) == "<unparsed>"
