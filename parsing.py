"""
Monkey Programming Language Parser
Pratt (precedence-climbing) parser producing the AST, with error accumulation
"""

from dataclasses import fields
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from ast_nodes import (
    BlockStatement, BooleanLiteral, CallExpression, Expression, ExpressionStatement,
    FunctionLiteral, Identifier, IfExpression, InfixExpression, IntegerLiteral,
    LetStatement, Node, PrefixExpression, Program, ReturnStatement, Statement,
    StringLiteral, UnparsedExpression
)
from error_handling import MonkeyParseError
from lexer import Lexer
from tokens import Token, TokenKind


# Integers are signed 64-bit at the literal level
MAX_INTEGER = 2 ** 63 - 1


class Precedence(IntEnum):
    """Binding power, lowest first"""
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # fn(x)


PRECEDENCES: Dict[TokenKind, Precedence] = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}


PrefixParseFn = Callable[[], Expression]
InfixParseFn = Callable[[Expression], Expression]


class Parser:
    """Pratt parser over a Lexer. Syntax errors are collected in self.errors."""

    def __init__(self, lexer: Lexer, debug: bool = False):
        self.lexer = lexer
        self.debug = debug
        self.errors: List[str] = []

        self.prefix_parse_fns: Dict[TokenKind, PrefixParseFn] = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.TRUE: self.parse_boolean_literal,
            TokenKind.FALSE: self.parse_boolean_literal,
            TokenKind.STRING: self.parse_string_literal,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns: Dict[TokenKind, InfixParseFn] = {
            kind: self.parse_infix_expression
            for kind in PRECEDENCES if kind is not TokenKind.LPAREN
        }
        self.infix_parse_fns[TokenKind.LPAREN] = self.parse_call_expression

        # Read two tokens so cur_token and peek_token are both set
        self.cur_token: Token = self.lexer.next_token()
        self.peek_token: Token = self.lexer.next_token()

    # ==================== TOKEN CURSOR ====================

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenKind) -> bool:
        return self.cur_token.kind is kind

    def peek_token_is(self, kind: TokenKind) -> bool:
        return self.peek_token.kind is kind

    def expect_peek(self, kind: TokenKind) -> bool:
        """Advance if the next token has the given kind, otherwise record an error"""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_error(self, kind: TokenKind) -> None:
        self.errors.append(
            f"expected next token to be {kind.name}, got {self.peek_token.kind.name} instead")

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    # ==================== STATEMENTS ====================

    def parse_program(self) -> Program:
        """Parse statements until end of input; failed statements are dropped"""
        statements = []
        while not self.cur_token_is(TokenKind.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()
        return Program(tuple(statements))

    def parse_statement(self) -> Optional[Statement]:
        if self.debug:
            print(f"Parsing statement at {self.cur_token}")

        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        let_token = self.cur_token

        if not self.expect_peek(TokenKind.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenKind.ASSIGN):
            return None
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return LetStatement(let_token, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        return_token = self.cur_token
        self.next_token()

        return_value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ReturnStatement(return_token, return_value)

    def parse_expression_statement(self) -> ExpressionStatement:
        statement = ExpressionStatement(self.cur_token, self.parse_expression(Precedence.LOWEST))
        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return statement

    def parse_block_statement(self) -> BlockStatement:
        """Parse statements up to the matching '}' (cur_token is '{' on entry)"""
        block_token = self.cur_token
        statements = []
        self.next_token()

        while not self.cur_token_is(TokenKind.RBRACE) and not self.cur_token_is(TokenKind.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()

        if self.cur_token_is(TokenKind.EOF):
            self.errors.append(
                f"expected next token to be {TokenKind.RBRACE.name}, got {TokenKind.EOF.name} instead")
        return BlockStatement(block_token, tuple(statements))

    # ==================== EXPRESSIONS ====================

    def parse_expression(self, precedence: Precedence) -> Expression:
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            self.errors.append(f"no prefix parse function for {self.cur_token.kind.name} found")
            return UnparsedExpression(self.cur_token)
        left = prefix()

        while not self.peek_token_is(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Expression:
        try:
            value = int(self.cur_token.literal)
        except ValueError:
            value = None
        if value is None or value > MAX_INTEGER:
            self.errors.append(f"could not parse {self.cur_token.literal} as integer")
            return UnparsedExpression(self.cur_token)
        return IntegerLiteral(self.cur_token, value)

    def parse_boolean_literal(self) -> Expression:
        return BooleanLiteral(self.cur_token, self.cur_token_is(TokenKind.TRUE))

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_prefix_expression(self) -> Expression:
        token = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression:
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        # Same precedence on the right keeps binary operators left-associative
        right = self.parse_expression(precedence)
        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self) -> Expression:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenKind.RPAREN):
            return UnparsedExpression(self.cur_token)
        return expression

    def parse_if_expression(self) -> Expression:
        token = self.cur_token
        if not self.expect_peek(TokenKind.LPAREN):
            return UnparsedExpression(token)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        if not self.expect_peek(TokenKind.RPAREN):
            return UnparsedExpression(token)
        if not self.expect_peek(TokenKind.LBRACE):
            return UnparsedExpression(token)
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            if not self.expect_peek(TokenKind.LBRACE):
                return UnparsedExpression(token)
            alternative = self.parse_block_statement()

        return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self) -> Expression:
        token = self.cur_token
        if not self.expect_peek(TokenKind.LPAREN):
            return UnparsedExpression(token)

        parameters = self.parse_list(self.parse_parameter, "parameter")
        if parameters is None:
            return UnparsedExpression(token)

        if not self.expect_peek(TokenKind.LBRACE):
            return UnparsedExpression(token)
        return FunctionLiteral(token, tuple(parameters), self.parse_block_statement())

    def parse_call_expression(self, function: Expression) -> Expression:
        token = self.cur_token
        arguments = self.parse_list(self.parse_argument, "argument")
        if arguments is None:
            return UnparsedExpression(token)
        return CallExpression(token, function, tuple(arguments))

    # ==================== LISTS ====================

    def parse_parameter(self) -> Optional[Identifier]:
        if not self.expect_peek(TokenKind.IDENT):
            return None
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_argument(self) -> Optional[Expression]:
        self.next_token()
        return self.parse_expression(Precedence.LOWEST)

    def parse_list(self, parse_item: Callable[[], Optional[Node]], description: str) -> Optional[List[Node]]:
        """
        Parse a comma-separated list closed by ')' (cur_token is '(' on entry).

        Every item must be separated by exactly one comma. Hitting end of input
        before the closing parenthesis records "invalid <description> list".
        Returns None on failure.
        """
        items = []
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return items

        while True:
            if self.peek_token_is(TokenKind.EOF):
                self.errors.append(f"invalid {description} list")
                return None
            item = parse_item()
            if item is None:
                return None
            items.append(item)
            if not self.peek_token_is(TokenKind.COMMA):
                break
            self.next_token()

        if self.peek_token_is(TokenKind.EOF):
            self.errors.append(f"invalid {description} list")
            return None
        if not self.expect_peek(TokenKind.RPAREN):
            return None
        return items


# ============================================================================
# ENTRY POINTS
# ============================================================================

def parse(source: str, debug: bool = False) -> Tuple[Program, List[str]]:
    """Parse source text, returning the program and every syntax error found"""
    parser = Parser(Lexer(source, debug=debug), debug=debug)
    program = parser.parse_program()
    return program, parser.errors


class MonkeyParser:
    """Main Monkey parser facade combining lexer and Pratt parser"""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def parse_file(self, filepath: str) -> Program:
        """Parse a Monkey source file"""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise MonkeyParseError([f"file not found: {filepath}"], filepath)
        except UnicodeDecodeError as e:
            raise MonkeyParseError([f"cannot decode file {filepath}: {e}"], filepath)
        return self.parse_string(content, filepath)

    def parse_string(self, text: str, filename: Optional[str] = None) -> Program:
        """Parse Monkey source code from string, raising on syntax errors"""
        program, errors = parse(text, debug=self.debug)
        if errors:
            raise MonkeyParseError(errors, filename)
        return program

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize Monkey source code"""
        return Lexer(text, debug=self.debug).tokenize()


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> MonkeyParser:
    """Create a Monkey parser"""
    return MonkeyParser(debug=debug)


def create_debug_parser() -> MonkeyParser:
    """Create a Monkey parser with debug enabled"""
    return MonkeyParser(debug=True)


def pretty_print_ast(node: Node, indent: int = 0) -> str:
    """Pretty print an AST node for debugging"""
    result = "  " * indent + type(node).__name__
    children = []
    for field in fields(node):
        if field.name == "token":
            continue
        value = getattr(node, field.name)
        if isinstance(value, Node):
            children.append(value)
        elif isinstance(value, tuple):
            children.extend(value)
        elif value is not None:
            result += f"({value!r})"
    result += "\n"

    for child in children:
        result += pretty_print_ast(child, indent + 1)

    return result
