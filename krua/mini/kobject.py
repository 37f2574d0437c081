"""Core objects of the minimal K interpreter: atoms, vectors, lists and dicts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class KType(IntEnum):
    """Object types. Atoms carry the negated type of their vector."""

    GENERAL = 0
    CHAR = 1
    INT = 2
    FLOAT = 3
    DICT = 5
    NULL = 7
    QUIT = 8


class KError(Exception):
    """An error raised by evaluation, carrying a K style message such as 'typ."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


E_NYI = "'nyi"
E_LEN = "'len"
E_TYP = "'typ"


@dataclass
class K:
    """A K value. ``data`` holds Python scalars, nested K objects or [keys, values]."""

    t: int
    data: list = field(default_factory=list)

    def is_atom(self) -> bool:
        return self.t < 0

    def __len__(self) -> int:
        return len(self.data)


def int_atom(value: int) -> K:
    return K(-KType.INT, [int(value)])


def float_atom(value: float) -> K:
    return K(-KType.FLOAT, [float(value)])


def char_atom(value: str) -> K:
    if len(value) != 1:
        raise ValueError("a char atom holds exactly one character")
    return K(-KType.CHAR, [value])


def vector(t: int, values) -> K:
    """A simple vector of the given type (CHAR, INT or FLOAT)."""
    t = abs(int(t))
    if t == KType.CHAR:
        return K(t, list(values))
    if t == KType.INT:
        return K(t, [int(v) for v in values])
    if t == KType.FLOAT:
        return K(t, [float(v) for v in values])
    raise KError(E_TYP)


def general(items) -> K:
    return K(KType.GENERAL, list(items))


def make_dict(keys: K, values: K) -> K:
    return K(KType.DICT, [keys, values])


def null() -> K:
    return K(KType.NULL, [])


_ATOM_MAKERS = {
    KType.INT: int_atom,
    KType.FLOAT: float_atom,
    KType.CHAR: char_atom,
}


def expand(x: K) -> K:
    """Turn a vector or atom into a general list of atoms: 1 2 3 -> (1;2;3)."""
    if x.t == KType.GENERAL:
        return x
    maker = _ATOM_MAKERS.get(abs(x.t))
    if maker is None:
        raise KError(E_TYP)
    return general(maker(v) for v in x.data)


def squeeze(x: K) -> K:
    """Collapse a general list of same-typed atoms into a vector: (1;2;3) -> 1 2 3."""
    if x.t != KType.GENERAL or not x.data:
        return x
    t = x.data[-1].t
    if t >= 0:
        return x.data[0] if len(x.data) == 1 else x
    if any(item.t != t for item in x.data):
        return x
    return vector(-t, (item.data[0] for item in x.data))


def parse_ints(text: str) -> K:
    """Parse whitespace separated integers: an atom for one, a vector for more."""
    values = [int(tok) for tok in text.split()]
    if not values:
        raise KError(E_TYP)
    return int_atom(values[0]) if len(values) == 1 else vector(KType.INT, values)


def parse_floats(text: str) -> K:
    """Parse whitespace separated floats: an atom for one, a vector for more."""
    values = [float(tok) for tok in text.split()]
    if not values:
        raise KError(E_TYP)
    return float_atom(values[0]) if len(values) == 1 else vector(KType.FLOAT, values)


def ints_to_floats(x: K) -> K:
    """Cast an int atom or vector to float, keeping atom-ness."""
    if abs(x.t) != KType.INT:
        raise KError(E_TYP)
    sign = -1 if x.t < 0 else 1
    return K(sign * KType.FLOAT, [float(v) for v in x.data])


def _format_float(v: float) -> str:
    text = f"{v:f}.6"[:8]
    return text.rstrip("0")


def _format_simple(x: K) -> str:
    kind = abs(x.t)
    if kind == KType.INT:
        return " ".join(str(v) for v in x.data) if x.data else '"j"$()'
    if kind == KType.FLOAT:
        return " ".join(_format_float(v) for v in x.data) if x.data else '"f"$()'
    if kind == KType.CHAR:
        return '"' + "".join(x.data) + '"'
    raise KError(E_TYP)


def _format_inner(x: K) -> str:
    prefix = "," if x.t > 0 and len(x.data) == 1 else ""
    if x.t == KType.GENERAL:
        body = ";".join(_format_inner(item) for item in x.data)
        return body and "," + body if len(x.data) == 1 else "(" + body + ")"
    return prefix + _format_simple(x)


def format_k(x: K) -> str:
    """Render a value the way the REPL shows it (without the trailing newline)."""
    if x.t == KType.NULL:
        return ""
    prefix = "," if x.t > 0 and len(x.data) == 1 else ""
    if x.t == KType.GENERAL:
        if not x.data:
            return prefix + "()"
        lead = "," if len(x.data) == 1 else ""
        return prefix + lead + "\n".join(_format_inner(item) for item in x.data)
    if x.t == KType.DICT:
        keys, values = x.data
        return prefix + _format_inner(keys) + "!" + _format_inner(values)
    return prefix + _format_simple(x)