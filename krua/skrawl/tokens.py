"""Scanner that splits skrawl source text into tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class TokenType(IntEnum):
    """Token kinds. The first twenty follow the order of the operator string."""

    PLUS = 0
    STAR = 1
    MINUS = 2
    DIVIDE = 3
    DOT = 4
    BANG = 5
    PIPE = 6
    AND = 7
    LANGLE = 8
    RANGLE = 9
    EQUAL = 10
    TILDE = 11
    QMARK = 12
    COMMA = 13
    AT = 14
    HASH = 15
    USCORE = 16
    CARET = 17
    DOLLAR = 18
    COLON = 19
    FSLASH = 20
    BSLASH = 21
    APOSTROPHE = 22
    EACHL = 23
    EACHR = 24
    EACHPRIOR = 25
    ID = 26
    NUMBER = 27
    FLOAT = 28
    STRING = 29
    SYMBOL = 30
    DOUBLECOLON = 31
    SEMICOLON = 32
    LPAREN = 33
    RPAREN = 34
    LSQUARE = 35
    RSQUARE = 36
    UNCLOSED_STRING = 37
    EOF = 38
    ERROR = 39
    UNKNOWN = 40


OPS = "+*-%.!|&<>=~?,@#_^$:/\\'\\/'"

_SINGLE = {
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    "%": TokenType.DIVIDE,
    "!": TokenType.BANG,
    "&": TokenType.AND,
    "|": TokenType.PIPE,
    ",": TokenType.COMMA,
    "@": TokenType.AT,
    "#": TokenType.HASH,
    "^": TokenType.CARET,
    "$": TokenType.DOLLAR,
    "~": TokenType.TILDE,
    "=": TokenType.EQUAL,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    "?": TokenType.QMARK,
    "_": TokenType.USCORE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LSQUARE,
    "]": TokenType.RSQUARE,
    ";": TokenType.SEMICOLON,
    "\0": TokenType.EOF,
}

_WITH_COLON = {
    "/": TokenType.EACHR,
    "\\": TokenType.EACHL,
    "'": TokenType.EACHPRIOR,
    ":": TokenType.DOUBLECOLON,
}

_ALONE = {
    "/": TokenType.FSLASH,
    "\\": TokenType.BSLASH,
    "'": TokenType.APOSTROPHE,
    ":": TokenType.COLON,
}


def _is_alpha(c: str) -> bool:
    return "A" <= c <= "Z" or "a" <= c <= "z"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    start: int


class Scanner:
    """Yields tokens one at a time from a source string."""

    def __init__(self, source: str):
        self.source = source
        self.start = 0
        self.current = 0

    def _at(self, i: int) -> str:
        return self.source[i] if 0 <= i < len(self.source) else "\0"

    def _make(self, kind: TokenType) -> Token:
        return Token(kind, self.source[self.start:self.current], self.start)

    def next_token(self) -> Token:
        while self._at(self.current) in ("\n", "\r", " "):
            self.current += 1
        self.start = self.current
        c = self._at(self.current)
        self.current += 1
        if _is_alpha(c):
            return self._word(TokenType.ID)
        if _is_digit(c):
            return self._number(0)
        if c == '"':
            return self._string()
        if c == "`":
            return self._word(TokenType.SYMBOL)
        if c == "-":
            return self._minus()
        if c == ".":
            return self._number(1) if _is_digit(self._at(self.current)) else self._make(TokenType.DOT)
        if c == "/":
            return self._forward_slash()
        if c in _ALONE:
            return self._digraph()
        return self._make(_SINGLE.get(c, TokenType.UNKNOWN))

    def peek_token(self) -> Token:
        """The next token, leaving the scanner where it was."""
        saved = (self.start, self.current)
        token = self.next_token()
        self.start, self.current = saved
        return token

    def _word(self, kind: TokenType) -> Token:
        while _is_alpha(self._at(self.current)) or _is_digit(self._at(self.current)):
            self.current += 1
        return self._make(kind)

    def _string(self) -> Token:
        while True:
            if self._at(self.current) == "\0":
                self.current -= 1
                return self._make(TokenType.UNCLOSED_STRING)
            ch = self._at(self.current)
            self.current += 1
            if ch == '"':
                return self._make(TokenType.STRING)

    def _number(self, dots: int) -> Token:
        while _is_digit(self._at(self.current)) or self._at(self.current) == ".":
            if self._at(self.current) == ".":
                dots += 1
            self.current += 1
        kind = {0: TokenType.NUMBER, 1: TokenType.FLOAT}.get(dots, TokenType.ERROR)
        return self._make(kind)

    def _minus(self) -> Token:
        """A '-' starts a negative number at the start or after a space, bracket or operator."""
        if _is_digit(self._at(self.current)):
            before = self._at(self.start - 1)
            if self.start == 0 or before in " ([{" or before in OPS:
                return self._number(0)
        return self._make(TokenType.MINUS)

    def _digraph(self) -> Token:
        first = self._at(self.start)
        if self._at(self.current) == ":":
            self.current += 1
            return self._make(_WITH_COLON[first])
        return self._make(_ALONE[first])

    def _forward_slash(self) -> Token:
        """A '/' at the start of input or after whitespace opens a comment."""
        if self.start == 0 or self._at(self.start - 1) in (" ", "\n"):
            while self._at(self.current) not in ("\0", "\n"):
                self.current += 1
            return self.next_token()
        return self._digraph()


def tokenize(source: str) -> list[Token]:
    """All tokens of source, ending with EOF or stopping at an unclosed string."""
    scanner = Scanner(source)
    tokens = []
    while True:
        token = scanner.next_token()
        tokens.append(token)
        if token.type in (TokenType.EOF, TokenType.UNCLOSED_STRING):
            return tokens