"""
Lexer tests for Monkey
Token kinds, literals, lookahead and end-of-input behaviour
"""

import pytest
from lexer import Lexer
from tokens import Token, TokenKind, lookup_ident


def kinds_and_literals(source):
  return [(token.kind, token.literal) for token in Lexer(source).tokenize()]


class TestSingleTokens:
  """Operators and delimiters"""

  def test_single_character_tokens(self):
    assert kinds_and_literals("=+(){},;") == [
        (TokenKind.ASSIGN, "="),
        (TokenKind.PLUS, "+"),
        (TokenKind.LPAREN, "("),
        (TokenKind.RPAREN, ")"),
        (TokenKind.LBRACE, "{"),
        (TokenKind.RBRACE, "}"),
        (TokenKind.COMMA, ","),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.EOF, ""),
    ]

  def test_more_single_character_operators(self):
    source = "!-/*5;\n5 < 10 > 5;"
    assert kinds_and_literals(source) == [
        (TokenKind.BANG, "!"),
        (TokenKind.MINUS, "-"),
        (TokenKind.SLASH, "/"),
        (TokenKind.ASTERISK, "*"),
        (TokenKind.INT, "5"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.INT, "5"),
        (TokenKind.LT, "<"),
        (TokenKind.INT, "10"),
        (TokenKind.GT, ">"),
        (TokenKind.INT, "5"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.EOF, ""),
    ]

  def test_two_character_operators(self):
    assert kinds_and_literals("10 == 10; 10 != 9;") == [
        (TokenKind.INT, "10"),
        (TokenKind.EQ, "=="),
        (TokenKind.INT, "10"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.INT, "10"),
        (TokenKind.NOT_EQ, "!="),
        (TokenKind.INT, "9"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.EOF, ""),
    ]

  def test_lone_assign_and_bang_do_not_consume_next_character(self):
    assert kinds_and_literals("=!x") == [
        (TokenKind.ASSIGN, "="),
        (TokenKind.BANG, "!"),
        (TokenKind.IDENT, "x"),
        (TokenKind.EOF, ""),
    ]
    assert kinds_and_literals("!==") == [
        (TokenKind.NOT_EQ, "!="),
        (TokenKind.ASSIGN, "="),
        (TokenKind.EOF, ""),
    ]


class TestProgramTokens:
  """Whole programs"""

  def test_simplified_program(self):
    source = """
let five = 5;
let ten = 10;

let add = fn(x, y) {
  x + y;
};

let result = add(five, ten);
"""
    expected = [
        (TokenKind.LET, "let"), (TokenKind.IDENT, "five"), (TokenKind.ASSIGN, "="),
        (TokenKind.INT, "5"), (TokenKind.SEMICOLON, ";"),
        (TokenKind.LET, "let"), (TokenKind.IDENT, "ten"), (TokenKind.ASSIGN, "="),
        (TokenKind.INT, "10"), (TokenKind.SEMICOLON, ";"),
        (TokenKind.LET, "let"), (TokenKind.IDENT, "add"), (TokenKind.ASSIGN, "="),
        (TokenKind.FUNCTION, "fn"), (TokenKind.LPAREN, "("), (TokenKind.IDENT, "x"),
        (TokenKind.COMMA, ","), (TokenKind.IDENT, "y"), (TokenKind.RPAREN, ")"),
        (TokenKind.LBRACE, "{"), (TokenKind.IDENT, "x"), (TokenKind.PLUS, "+"),
        (TokenKind.IDENT, "y"), (TokenKind.SEMICOLON, ";"), (TokenKind.RBRACE, "}"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.LET, "let"), (TokenKind.IDENT, "result"), (TokenKind.ASSIGN, "="),
        (TokenKind.IDENT, "add"), (TokenKind.LPAREN, "("), (TokenKind.IDENT, "five"),
        (TokenKind.COMMA, ","), (TokenKind.IDENT, "ten"), (TokenKind.RPAREN, ")"),
        (TokenKind.SEMICOLON, ";"),
        (TokenKind.EOF, ""),
    ]
    assert kinds_and_literals(source) == expected

  def test_keywords(self):
    source = "if (5 < 10) { return true; } else { return false; }"
    kinds = [kind for kind, _ in kinds_and_literals(source)]
    assert kinds == [
        TokenKind.IF, TokenKind.LPAREN, TokenKind.INT, TokenKind.LT, TokenKind.INT,
        TokenKind.RPAREN, TokenKind.LBRACE, TokenKind.RETURN, TokenKind.TRUE,
        TokenKind.SEMICOLON, TokenKind.RBRACE, TokenKind.ELSE, TokenKind.LBRACE,
        TokenKind.RETURN, TokenKind.FALSE, TokenKind.SEMICOLON, TokenKind.RBRACE,
        TokenKind.EOF,
    ]

  @pytest.mark.parametrize("text,kind", [
      ("fn", TokenKind.FUNCTION),
      ("let", TokenKind.LET),
      ("return", TokenKind.RETURN),
      ("lets", TokenKind.IDENT),
      ("foo_bar", TokenKind.IDENT),
  ])
  def test_lookup_ident(self, text, kind):
    assert lookup_ident(text) is kind


class TestLiterals:
  """Identifiers, integers and strings"""

  def test_identifiers_are_letters_and_underscores(self):
    assert kinds_and_literals("_foo bar_baz") == [
        (TokenKind.IDENT, "_foo"),
        (TokenKind.IDENT, "bar_baz"),
        (TokenKind.EOF, ""),
    ]

  def test_digits_end_an_identifier(self):
    assert kinds_and_literals("abc123") == [
        (TokenKind.IDENT, "abc"),
        (TokenKind.INT, "123"),
        (TokenKind.EOF, ""),
    ]

  def test_sign_is_a_separate_token(self):
    assert kinds_and_literals("-42") == [
        (TokenKind.MINUS, "-"),
        (TokenKind.INT, "42"),
        (TokenKind.EOF, ""),
    ]

  def test_string_literals(self):
    assert kinds_and_literals('"foobar" "foo bar"') == [
        (TokenKind.STRING, "foobar"),
        (TokenKind.STRING, "foo bar"),
        (TokenKind.EOF, ""),
    ]

  def test_string_keeps_tabs_and_spaces(self):
    assert kinds_and_literals('"a\tb  c"')[0] == (TokenKind.STRING, "a\tb  c")

  def test_empty_and_unterminated_strings(self):
    assert kinds_and_literals('""') == [(TokenKind.STRING, ""), (TokenKind.EOF, "")]
    assert kinds_and_literals('"abc') == [(TokenKind.STRING, "abc"), (TokenKind.EOF, "")]


class TestIllegalAndEof:
  """Degenerate input never raises"""

  def test_unknown_characters_are_illegal(self):
    assert kinds_and_literals("5 @ #") == [
        (TokenKind.INT, "5"),
        (TokenKind.ILLEGAL, "@"),
        (TokenKind.ILLEGAL, "#"),
        (TokenKind.EOF, ""),
    ]

  def test_eof_repeats(self):
    lexer = Lexer("x")
    assert lexer.next_token() == Token(TokenKind.IDENT, "x")
    for _ in range(3):
      assert lexer.next_token() == Token(TokenKind.EOF, "")

  def test_empty_and_whitespace_input(self):
    assert kinds_and_literals("") == [(TokenKind.EOF, "")]
    assert kinds_and_literals(" \t\r\n ") == [(TokenKind.EOF, "")]

  def test_position_is_monotonic(self):
    lexer = Lexer("let x = 10;")
    positions = []
    while lexer.next_token().kind is not TokenKind.EOF:
      positions.append(lexer.position)
    assert positions == sorted(positions)
    assert lexer.position == len("let x = 10;")
