"""
Monkey lexer
Turns source text into a token stream. The lexical rules are pyparsing elements
combined into a single token grammar that is scanned lazily, one match per token.
"""

from typing import Iterator, List

from pyparsing import MatchFirst, ParserElement, Regex, Word, alphas, nums, one_of

from tokens import EOF_TOKEN, SYMBOLS, Token, TokenKind, lookup_ident


WHITESPACE = " \t\r\n\f\v"


def _make_token_grammar() -> ParserElement:
    """Build the token grammar; first matching rule wins"""

    # Identifiers and keywords (letters and underscore only)
    identifier = Word(alphas + "_")
    identifier.set_parse_action(lambda toks: Token(lookup_ident(toks[0]), toks[0]))

    # Integer literals, sign is a separate prefix operator
    integer = Word(nums)
    integer.set_parse_action(lambda toks: Token(TokenKind.INT, toks[0]))

    # String literals run to the closing quote or end of input
    string = Regex(r'"[^"]*"?')
    string.set_parse_action(lambda toks: Token(TokenKind.STRING, _string_body(toks[0])))

    # one_of prefers the longest alternative, so "==" wins over "="
    symbol = one_of(list(SYMBOLS))
    symbol.set_parse_action(lambda toks: Token(SYMBOLS[toks[0]], toks[0]))

    # Anything else degrades to a single illegal character
    illegal = Regex(r"\S")
    illegal.set_parse_action(lambda toks: Token(TokenKind.ILLEGAL, toks[0]))

    rules = [identifier, integer, string, symbol, illegal]
    for rule in rules:
        rule.set_whitespace_chars(WHITESPACE)

    grammar = MatchFirst(rules)
    grammar.set_whitespace_chars(WHITESPACE)
    return grammar.parse_with_tabs()


def _string_body(text: str) -> str:
    if len(text) >= 2 and text.endswith('"'):
        return text[1:-1]
    return text[1:]


TOKEN_GRAMMAR = _make_token_grammar()


class Lexer:
    """Monkey lexer with a monotonic next_token() contract"""

    def __init__(self, source: str, debug: bool = False):
        self.source = source
        self.debug = debug
        self.position = 0
        self._matches = TOKEN_GRAMMAR.scan_string(source)
        self._exhausted = False

    def next_token(self) -> Token:
        """Return the next token; EOF forever once the input is consumed"""
        if self._exhausted:
            return EOF_TOKEN

        match = next(self._matches, None)
        if match is None:
            self._exhausted = True
            self.position = len(self.source)
            token = EOF_TOKEN
        else:
            tokens, _start, end = match
            self.position = end
            token = tokens[0]

        if self.debug:
            print(f"Token: {token}")
        return token

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF"""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return

    def tokenize(self) -> List[Token]:
        return list(self)
