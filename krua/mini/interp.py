"""Tokenizer and right-to-left evaluator of the minimal K interpreter, and its REPL."""

from __future__ import annotations

import argparse
import re
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from krua.mini import verbs
from krua.mini.kobject import (
    E_NYI,
    K,
    KError,
    KType,
    char_atom,
    float_atom,
    format_k,
    general,
    int_atom,
    null,
    squeeze,
    vector,
)


class TokenType(Enum):
    """Lexical token kinds."""

    LP = auto()
    RP = auto()
    LR = auto()
    LB = auto()
    RB = auto()
    LS = auto()
    RS = auto()
    SC = auto()
    CL = auto()
    EQ = auto()
    LA = auto()
    RA = auto()
    PI = auto()
    QM = auto()
    PL = auto()
    HY = auto()
    ST = auto()
    DV = auto()
    DL = auto()
    US = auto()
    BA = auto()
    AM = auto()
    QT = auto()
    AT = auto()
    TL = auto()
    HS = auto()
    CM = auto()
    DT = auto()
    AP = auto()
    FS = auto()
    BS = auto()
    EL = auto()
    ER = auto()
    EP = auto()
    INT = auto()
    FLT = auto()
    STR = auto()
    ID = auto()
    END = auto()
    NR = auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str


T = TokenType

_SINGLE = {
    "*": T.ST, "+": T.PL, "%": T.DV, "!": T.BA, "@": T.AT, "~": T.TL,
    "#": T.HS, ",": T.CM, ")": T.RP, "$": T.DL, "{": T.LB, "}": T.RB,
    "[": T.LS, "]": T.RS, "<": T.LA, ">": T.RA, ";": T.SC, ":": T.CL,
    "?": T.QM, "|": T.PI, "=": T.EQ, "&": T.AM, "_": T.US,
}


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_alpha(c: str) -> bool:
    return "a" <= c <= "z" or "A" <= c <= "Z"


class _Lexer:
    def __init__(self, source: str):
        self.src = source
        self.pos = 0
        self.start = 0
        self.tokens: list[Token] = []

    def _peek(self) -> str:
        return self.src[self.pos] if self.pos < len(self.src) else "\0"

    def _make(self, kind: TokenType) -> Token:
        return Token(kind, self.src[self.start:self.pos])

    def next(self) -> Token:
        while self._peek() in (" ", "\n"):
            self.pos += 1
        self.start = self.pos
        c = self._peek()
        self.pos += 1
        if _is_digit(c):
            return self._number()
        if _is_alpha(c):
            while _is_alpha(self._peek()) or _is_digit(self._peek()):
                self.pos += 1
            return self._make(T.ID)
        if c == '"':
            while self._peek() != '"':
                if self.pos >= len(self.src):
                    raise KError("'parse")
                self.pos += 1
            self.pos += 1
            return self._make(T.STR)
        if c == "/":
            if not self.tokens or self.src[self.start - 1] == " ":
                return self._comment()
            return self._colon_pair(T.ER, T.FS)
        if c == "\\":
            return self._colon_pair(T.EL, T.BS)
        if c == "'":
            return self._colon_pair(T.EP, T.AP)
        if c == "(":
            if self._peek() == ")":
                self.pos += 1
                return self._make(T.LR)
            return self._make(T.LP)
        if c == "-":
            return self._minus()
        if c == ".":
            return self._number() if _is_digit(self._peek()) else self._make(T.DT)
        if c == "\0":
            return self._make(T.END)
        return self._make(_SINGLE.get(c, T.NR))

    def _colon_pair(self, with_colon: TokenType, alone: TokenType) -> Token:
        if self._peek() == ":":
            self.pos += 1
            return self._make(with_colon)
        return self._make(alone)

    def _number(self) -> Token:
        is_float = self.src[self.start] == "."
        while _is_digit(self._peek()) or self._peek() == ".":
            is_float = is_float or self._peek() == "."
            self.pos += 1
        return self._make(T.FLT if is_float else T.INT)

    def _minus(self) -> Token:
        prev = self.tokens[-1].type if self.tokens else None
        if prev in (T.INT, T.FLT, T.RP) and (
            self.src[self.start - 1] != " " or self._peek() == " "
        ):
            return self._make(T.HY)
        if _is_digit(self._peek()):
            return self._number()
        return self._make(T.HY)

    def _comment(self) -> Token:
        while self._peek() not in ("\n", "\0"):
            self.pos += 1
        if self._peek() == "\n":
            self.pos += 1
        return self.next()


def tokenize(source: str) -> list[Token]:
    """Split source into tokens; the list always ends with an END token."""
    lexer = _Lexer(source)
    while True:
        token = lexer.next()
        lexer.tokens.append(token)
        if token.type is T.END:
            return lexer.tokens


_OPERATORS = frozenset({
    T.EQ, T.LA, T.RA, T.PI, T.QM, T.PL, T.HY, T.ST, T.DV,
    T.BA, T.AT, T.TL, T.HS, T.CM, T.DT, T.AM, T.DL,
})
_ADVERBS = frozenset({T.AP, T.FS, T.BS, T.ER, T.EL, T.EP})
_TERMINATORS = frozenset({T.END, T.RP, T.SC})

_MONADS: dict[TokenType, Callable] = {
    T.PI: verbs.reverse,
    T.HY: verbs.negate,
    T.ST: verbs.first,
    T.BA: verbs.til,
    T.AT: verbs.type_of,
    T.TL: verbs.logical_not,
    T.HS: verbs.count,
    T.CM: verbs.enlist,
    T.AM: verbs.where,
    T.DL: verbs.string,
}

# Verbs that adverbs may modify.
_ADVERB_DYADS: dict[TokenType, Callable] = {
    T.EQ: verbs.equal,
    T.LA: verbs.less,
    T.RA: verbs.greater,
    T.PI: verbs.maximum,
    T.PL: verbs.add,
    T.HY: verbs.subtract,
    T.ST: verbs.multiply,
    T.DV: verbs.divide,
    T.AT: verbs.at,
    T.TL: verbs.match,
    T.HS: verbs.take,
    T.CM: verbs.join,
    T.AM: verbs.minimum,
}

_DYADS: dict[TokenType, Callable] = {
    T.PL: verbs.add,
    T.ST: verbs.multiply,
    T.DV: verbs.divide,
    T.HY: verbs.subtract,
    T.EQ: verbs.equal,
    T.LA: verbs.less,
    T.RA: verbs.greater,
    T.CM: verbs.join,
    T.BA: verbs.bang,
    T.AT: verbs.at,
    T.DT: lambda x, y: verbs.fold_with(verbs.at, x, y),
    T.PI: verbs.maximum,
    T.AM: verbs.minimum,
    T.HS: verbs.take,
    T.US: verbs.drop,
    T.TL: verbs.match,
    T.QM: verbs.find,
}

_FLOAT_PREFIX = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)")


def _to_float(text: str) -> float:
    found = _FLOAT_PREFIX.match(text)
    return float(found.group(0)) if found else 0.0


def _require(f: Callable | None) -> Callable:
    if f is None:
        raise KError(E_NYI)
    return f


class _Evaluation:
    """Evaluates one token list right to left against an interpreter's variables."""

    def __init__(self, interpreter: Interpreter, tokens: list[Token]):
        self.interpreter = interpreter
        self.tokens = tokens

    def run(self) -> K:
        return self._eval(0)

    def _eval(self, i: int) -> K:
        tk = self.tokens
        t = tk[i].type
        leading = tk[0].type
        if t is T.END:
            if leading is T.END:
                return null()
            raise KError("'end")
        if t is T.BS and tk[i + 1].type is T.BS and leading is T.BS:
            return K(KType.QUIT, [])
        nxt = tk[i + 1].type
        if nxt in _TERMINATORS:
            return self._factor(i)
        if t in _OPERATORS:
            if nxt in _ADVERBS:
                return self._monadic_adverb(t, nxt, self._eval(i + 2))
            return _require(_MONADS.get(t))(self._eval(i + 1))
        if nxt is T.CL:
            value = self._eval(i + 2)
            self.interpreter.set(tk[i].text, value)
            return value
        end = self._operand_end(i)
        if tk[end + 1].type in _TERMINATORS:
            return self._factor(i)
        op = tk[end + 1].type
        adverb = tk[end + 2].type
        y = self._eval(end + 3 if adverb in _ADVERBS else end + 2)
        x = self._factor(i)
        if adverb in _ADVERBS:
            return self._dyadic_adverb(op, adverb, x, y)
        return _require(_DYADS.get(op))(x, y)

    def _monadic_adverb(self, op: TokenType, adverb: TokenType, x: K) -> K:
        if adverb is T.AP:
            return verbs.each(_require(_MONADS.get(op)), x)
        f = _require(_ADVERB_DYADS.get(op))
        if adverb is T.FS:
            return verbs.fold(f, x, False)
        if adverb is T.BS:
            return verbs.fold(f, x, True)
        if adverb is T.EP:
            return verbs.each_prior_default(f, x)
        raise KError(E_NYI)

    def _dyadic_adverb(self, op: TokenType, adverb: TokenType, x: K, y: K) -> K:
        f = _require(_ADVERB_DYADS.get(op))
        handlers = {
            T.ER: verbs.each_right,
            T.EL: verbs.each_left,
            T.FS: verbs.fold_with,
            T.BS: verbs.scan,
            T.EP: verbs.each_prior,
        }
        return _require(handlers.get(adverb))(f, x, y)

    def _operand_end(self, i: int) -> int:
        """Index of the last token of the left operand starting at i."""
        tk = self.tokens
        t = tk[i].type
        if t is T.LP:
            return self._scan_parens(i)[0]
        end = i
        if t in (T.INT, T.FLT):
            while tk[end + 1].type in (T.INT, T.FLT):
                end += 1
        return end

    def _scan_parens(self, i: int) -> tuple[int, list[int]]:
        """Find the closing paren for the one at i, and where each item starts."""
        depth, j, starts = 1, i, [i + 1]
        while depth:
            j += 1
            t = self.tokens[j].type
            if t is T.END:
                raise KError("'parse")
            if t is T.SC and depth == 1:
                starts.append(j + 1)
            depth += (t is T.LP) - (t is T.RP)
        return j, starts

    def _factor(self, i: int) -> K:
        token = self.tokens[i]
        t = token.type
        if t in (T.INT, T.FLT):
            return self._number(i)
        if t is T.LP:
            _, starts = self._scan_parens(i)
            if len(starts) == 1:
                return self._eval(i + 1)
            items: list = [None] * len(starts)
            for n in reversed(range(len(starts))):
                items[n] = self._eval(starts[n])
            return squeeze(general(items))
        if t is T.STR:
            text = token.text[1:-1]
            return char_atom(text) if len(text) == 1 else vector(KType.CHAR, text)
        if t is T.LR:
            return general([])
        if t is T.ID:
            return self.interpreter.get(token.text)
        raise KError(E_NYI)

    def _number(self, i: int) -> K:
        literal = []
        for token in self.tokens[i:]:
            if token.type not in (T.INT, T.FLT):
                break
            literal.append(token)
        if any(token.type is T.FLT for token in literal):
            values = [_to_float(token.text) for token in literal]
            return float_atom(values[0]) if len(values) == 1 else vector(KType.FLOAT, values)
        ints = [int(token.text) for token in literal]
        return int_atom(ints[0]) if len(ints) == 1 else vector(KType.INT, ints)


class Interpreter:
    """Evaluates lines of K, keeping global variables named a to z."""

    def __init__(self):
        self.variables: dict[str, K] = {}

    def evaluate(self, source: str) -> K:
        """Evaluate one line. Returns a NULL object for empty input and QUIT for a double backslash."""
        return _Evaluation(self, tokenize(source)).run()

    @staticmethod
    def _check_name(name: str) -> None:
        if len(name) != 1 or not "a" <= name <= "z":
            raise KError(E_NYI)

    def get(self, name: str) -> K:
        self._check_name(name)
        value = self.variables.get(name)
        if value is None:
            raise KError("'" + name)
        return value

    def set(self, name: str, value: K) -> K:
        self._check_name(name)
        self.variables[name] = value
        return value


def main(argv=None) -> int:
    """Read lines from standard input and print each result."""
    argparse.ArgumentParser(prog="krua", description="Interactive K interpreter.").parse_args(argv)
    interpreter = Interpreter()
    out = sys.stdout
    out.write(" ")
    for line in sys.stdin:
        try:
            result = interpreter.evaluate(line)
            if result.t == KType.QUIT:
                break
            if result.t != KType.NULL:
                out.write(format_k(result) + "\n")
        except KError as err:
            out.write(err.message + "\n")
        out.write(" ")
    out.write("\n")
    return 0