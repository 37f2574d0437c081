"""Objects of the skrawl interpreter: atoms, lists, dicts, tables and functions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from krua.skrawl.tokens import OPS, TokenType


class KType(IntEnum):
    """Object types. Atoms carry the negated type of their list."""

    ERROR = -128
    GENERAL = 0
    CHAR = 1
    INT = 2
    FLOAT = 3
    SYMBOL = 4
    DICT = 5
    TABLE = 6
    MONAD = 7
    DYAD = 8
    ADVERB = 9
    OVER = 10
    SCAN = 11
    EACH = 12
    EACH_LEFT = 13
    EACH_RIGHT = 14
    EACH_PRIOR = 15
    PROJECTION = 16
    COMPOSITION = 17
    NULL = 18


LIST_TYPES = "KCIFSDTUVAWWWWWWPQN"
ATOM_TYPES = " cifs"
SYMBOL_WIDTH = 8


class KError(Exception):
    """An error raised while evaluating, carrying a readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass
class K:
    """A value. ``data`` holds Python scalars, operator indices or nested K objects."""

    t: int
    data: list = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.data)

    def is_scalar(self) -> bool:
        """True for anything that is not a list, dict or table."""
        return not KType.GENERAL <= self.t <= KType.TABLE


def _is_higher_order(x: K) -> bool:
    return KType.OVER <= x.t <= KType.EACH_PRIOR


def make_symbol(text: str) -> str:
    """Symbols hold at most eight characters."""
    return str(text)[:SYMBOL_WIDTH]


def ki(value: int) -> K:
    return K(-KType.INT, [int(value)])


def kf(value: float) -> K:
    return K(-KType.FLOAT, [float(value)])


def kc(value: str) -> K:
    if len(value) != 1:
        raise ValueError("a char atom holds exactly one character")
    return K(-KType.CHAR, [value])


def ks(value: str) -> K:
    return K(-KType.SYMBOL, [make_symbol(value)])


def _op_index(op) -> int:
    if isinstance(op, int):
        if not 0 <= op < len(OPS):
            raise ValueError(f"operator index out of range: {op}")
        return op
    index = OPS.find(op)
    if len(op) != 1 or index < 0:
        raise ValueError(f"unknown operator: {op!r}")
    return index


def kv(t: int, op) -> K:
    """A monad, dyad or adverb, given by its operator character or index."""
    if t not in (KType.MONAD, KType.DYAD, KType.ADVERB):
        raise ValueError(f"not an operator type: {t}")
    return K(int(t), [_op_index(op)])


def ka(t, x: K) -> K:
    """Modify x with the adverb whose operator index (or character) is t."""
    kind = _op_index(t) - (TokenType.FSLASH - KType.OVER)
    if not KType.OVER <= kind <= KType.EACH_PRIOR:
        raise ValueError(f"not an adverb: {t!r}")
    return K(kind, [x])


def kp(x: K, y: K) -> K:
    """A projection: x is the int rank left, y is (function; args...)."""
    return K(KType.PROJECTION, [x, y])


def kq(x: K, y: K) -> K:
    """A composition of x after y."""
    return K(KType.COMPOSITION, [x, y])


def knull() -> K:
    return K(KType.NULL, [])


def general(items) -> K:
    return K(KType.GENERAL, list(items))


_CONVERTERS = {
    KType.CHAR: str,
    KType.INT: int,
    KType.FLOAT: float,
    KType.SYMBOL: make_symbol,
}


def vector(t: int, values) -> K:
    """A simple list of chars, ints, floats or symbols."""
    kind = abs(int(t))
    convert = _CONVERTERS.get(kind)
    if convert is None:
        raise KError(f"type error! can't make a simple list of type {kind}")
    return K(kind, [convert(v) for v in values])


def k_count(x: K) -> int:
    """Count as the language sees it: keys of a dict, rows of a table, 1 for null."""
    if x.t == KType.DICT:
        return len(x.data[0])
    if x.t == KType.TABLE:
        return len(x.data[0].data[1].data[0])
    if x.t == KType.NULL:
        return 1
    return len(x)


_ATOM_MAKERS = {
    KType.INT: ki,
    KType.FLOAT: kf,
    KType.CHAR: kc,
    KType.SYMBOL: ks,
}


def _flip_lists(x: K) -> K:
    """Transpose a general list of equal-length lists."""
    if not x.data:
        return general([])
    n = len(x.data[0])
    if any(len(item) != n for item in x.data):
        raise KError("length error!")
    rows = []
    for item in x.data:
        if item.t == KType.GENERAL:
            rows.append(item.data)
        elif item.t > 0:
            rows.append(expand(item).data)
        else:
            rows.append([item])
    return general(squeeze(general(row[j] for row in rows)) for j in range(n))


def _squeeze_dicts(x: K) -> K:
    if any(item.t != KType.DICT for item in x.data):
        return x
    if any(item.data[0].t != KType.SYMBOL for item in x.data):
        return x
    keys = x.data[0].data[0]
    if any(item.data[0].data != keys.data for item in x.data[1:]):
        return x
    cols = _flip_lists(general(item.data[1] for item in x.data))
    return K(KType.TABLE, [K(KType.DICT, [keys, cols])])


def squeeze(x: K) -> K:
    """Compact a general list: (1;2;3) -> 1 2 3, and a list of like dicts -> table."""
    if x.t != KType.GENERAL or not x.data:
        return x
    kind = x.data[0].t
    if kind == KType.DICT:
        return _squeeze_dicts(x)
    if kind >= 0:
        return x
    if any(item.t != kind for item in x.data[1:]):
        return x
    if -kind not in _CONVERTERS:
        return x
    return K(-kind, [item.data[0] for item in x.data])


def expand(x: K) -> K:
    """Turn a simple list or atom into a general list: 1 2 3 -> (1;2;3)."""
    if x.t == KType.GENERAL:
        return x
    if x.t in (
        KType.DICT, KType.MONAD, KType.DYAD, KType.ADVERB, KType.PROJECTION, KType.NULL
    ) or _is_higher_order(x):
        return general([x])
    maker = _ATOM_MAKERS.get(abs(x.t))
    if maker is not None:
        return general(maker(v) for v in x.data)
    if x.t == KType.TABLE:
        keys, cols = x.data[0].data
        rows = _flip_lists(cols)
        return general(K(KType.DICT, [keys, row]) for row in rows.data)
    raise KError("type error! can't expand")


def rank_of(x: K) -> int:
    """Rank of an applicable value; 0 means 'rank 1 or 2' for a modified dyad, or not applicable."""
    if x.t == KType.MONAD:
        return 1
    if x.t == KType.DYAD:
        return 2
    if x.t == KType.PROJECTION:
        return x.data[0].data[0]
    if _is_higher_order(x):
        rank = rank_of(x.data[0])
        if x.t in (KType.OVER, KType.SCAN) and rank == 2:
            return 0
        return rank
    if x.t == KType.COMPOSITION:
        return rank_of(x.data[1])
    return 0


def _list_prefix(x: K) -> str:
    return "," if x.t > 0 and len(x) == 1 else ""


def _format_float(v: float) -> str:
    return f"{v:f}.6"[:8].rstrip("0")


def _needs_fencing(x: K) -> bool:
    return (
        x.t >= KType.DICT
        or (x.t != KType.GENERAL and len(x) == 0)
        or (x.t >= 0 and len(x) == 1)
    )


def _format_projection(x: K) -> str:
    rank = x.data[0].data[0]
    parts = x.data[1].data
    f, args = parts[0], parts[1:]
    if f.t == KType.DYAD and len(parts) <= 3 and rank == 1 and args[0].t != -KType.NULL:
        arg = _render(args[0], True)
        if _needs_fencing(args[0]):
            arg = "(" + arg + ")"
        return arg + _render(f, True)
    return _render(f, True) + "[" + ";".join(_render(a, True) for a in args) + "]"


def _render(x: K, flat: bool) -> str:
    t = x.t
    kind = abs(t)
    if t == KType.GENERAL:
        if len(x) == 1:
            return "," + _render(x.data[0], True)
        sep = ";" if flat else "\n "
        return "(" + sep.join(_render(item, True) for item in x.data) + ")"
    if t == -KType.NULL:
        return ""
    if t == KType.NULL:
        return "::" if flat else ""
    if kind == KType.CHAR:
        if not x.data:
            return '""'
        return _list_prefix(x) + '"' + "".join(x.data) + '"'
    if kind == KType.INT:
        if not x.data:
            return "0#0"
        return _list_prefix(x) + " ".join(str(v) for v in x.data)
    if kind == KType.FLOAT:
        if not x.data:
            return "0#0."
        return _list_prefix(x) + " ".join(_format_float(v) for v in x.data)
    if kind == KType.SYMBOL:
        if not x.data:
            return "0#`"
        return _list_prefix(x) + "".join("`" + s for s in x.data)
    if t == KType.DICT:
        return _render(x.data[0], True) + "!" + _render(x.data[1], True)
    if t == KType.TABLE:
        return "+" + _render(x.data[0], True)
    if t in (KType.MONAD, KType.DYAD, KType.ADVERB):
        index = x.data[0]
        colon = t == KType.MONAD or index in (
            TokenType.EACHL, TokenType.EACHR, TokenType.EACHPRIOR
        )
        return OPS[index] + (":" if colon else "")
    if t == KType.PROJECTION:
        return _format_projection(x)
    if t == KType.COMPOSITION:
        return _render(x.data[0], True) + _render(x.data[1], True)
    if _is_higher_order(x):
        suffix = ":" if t in (KType.EACH_LEFT, KType.EACH_RIGHT, KType.EACH_PRIOR) else ""
        return _render(x.data[0], True) + OPS[t + KType.OVER] + suffix
    if t == KType.ERROR:
        return "'" + "".join(x.data)
    return f"can't print type: {t}"


def format_k(x: K, flat: bool = False) -> str:
    """Render x; a non-flat rendering ends in a newline, except for null."""
    text = _render(x, flat)
    if flat or x.t == KType.NULL:
        return text
    return text + "\n"