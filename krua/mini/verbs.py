"""Monadic and dyadic verbs and adverbs of the minimal K interpreter."""

from __future__ import annotations

from typing import Callable

from krua.mini.kobject import (
    E_LEN,
    E_NYI,
    E_TYP,
    K,
    KError,
    KType,
    char_atom,
    expand,
    float_atom,
    general,
    int_atom,
    make_dict,
    squeeze,
    vector,
)

_INT64 = 1 << 64


def _wrap(v: int) -> int:
    v &= _INT64 - 1
    return v - _INT64 if v >= 1 << 63 else v


def _items(y: K) -> list:
    """Elements of y as K objects."""
    if y.t == KType.GENERAL:
        return list(y.data)
    return list(expand(y).data)


# monads

def negate(x: K) -> K:
    if abs(x.t) not in (KType.INT, KType.FLOAT):
        raise KError(E_TYP)
    return K(x.t, [-v for v in x.data])


def logical_not(x: K) -> K:
    if abs(x.t) not in (KType.INT, KType.FLOAT):
        raise KError(E_TYP)
    return vector(KType.INT, (int(v == 0) for v in x.data))


def type_of(x: K) -> K:
    return int_atom(x.t)


def til(x: K) -> K:
    if x.t != -KType.INT:
        raise KError(E_TYP)
    return vector(KType.INT, range(x.data[0]))


def count(x: K) -> K:
    return int_atom(len(x))


def enlist(x: K) -> K:
    if x.t >= 0:
        return general([x])
    return vector(-x.t, x.data)


def first(x: K) -> K:
    if x.t in (-KType.INT, -KType.FLOAT):
        return x
    if x.t not in (KType.GENERAL, KType.INT, KType.FLOAT):
        raise KError(E_TYP)
    if not x.data:
        raise KError(E_LEN)
    if x.t == KType.GENERAL:
        return x.data[0]
    return K(-x.t, [x.data[0]])


def where(x: K) -> K:
    if x.t != KType.INT:
        raise KError(E_TYP)
    return vector(KType.INT, (i for i, n in enumerate(x.data) if n > 0 for _ in range(n)))


def reverse(x: K) -> K:
    n = len(x)
    return at(x, vector(KType.INT, range(n - 1, -1, -1)))


def string(x: K) -> K:
    if x.t == KType.GENERAL:
        z = general(string(item) for item in x.data)
    elif abs(x.t) == KType.INT:
        z = general(vector(KType.CHAR, str(v)) for v in x.data)
    elif abs(x.t) == KType.CHAR:
        z = general(enlist(char_atom(c)) for c in x.data)
    else:
        raise KError(E_NYI)
    if x.t < 0:
        return z.data[0]
    return z


# dyads

def _cell(v, kind: int):
    return ord(v) if kind == KType.CHAR else v


def _dyad(f: Callable, maxt: int, op: Callable, x: K, y: K) -> K:
    if (x.t < 0 or y.t < 0) and (
        (x.t == KType.GENERAL and not x.data) or (y.t == KType.GENERAL and not y.data)
    ):
        return general([])
    if x.t >= 0 and y.t >= 0 and len(x) != len(y):
        raise KError(E_LEN)
    if x.t == KType.GENERAL or y.t == KType.GENERAL:
        if KType.DICT in (x.t, y.t):
            raise KError(E_TYP)
        if x.t >= 0 and y.t >= 0:
            pairs = zip(_items(x), _items(y))
        elif x.t == KType.GENERAL:
            pairs = ((a, y) for a in x.data)
        else:
            pairs = ((x, b) for b in y.data)
        return general(f(a, b) for a, b in pairs)
    if x.t == KType.DICT or y.t == KType.DICT:
        if x.t == y.t:
            raise KError(E_NYI)
        if x.t == KType.DICT:
            return key(x.data[0], f(x.data[1], y))
        return key(y.data[0], f(x, y.data[1]))
    xk, yk = abs(x.t), abs(y.t)
    kinds = {xk, yk}
    if not kinds <= {KType.INT, KType.FLOAT, KType.CHAR} or kinds == {KType.FLOAT, KType.CHAR}:
        raise KError(E_NYI)
    zt = min(maxt, max(xk, yk))
    xs = [_cell(v, xk) for v in x.data]
    ys = [_cell(v, yk) for v in y.data]
    if len(xs) == len(ys):
        values = [op(a, b) for a, b in zip(xs, ys)]
    elif len(xs) > len(ys):
        values = [op(a, ys[0]) for a in xs]
    else:
        values = [op(xs[0], b) for b in ys]
    if zt == KType.INT:
        values = [_wrap(int(v)) for v in values]
    elif zt == KType.CHAR:
        values = [chr(int(v) & 0xFF) for v in values]
    else:
        values = [float(v) for v in values]
    t = -zt if x.t < 0 and y.t < 0 else zt
    return K(t, values)


def add(x: K, y: K) -> K:
    return _dyad(add, KType.FLOAT, lambda a, b: a + b, x, y)


def subtract(x: K, y: K) -> K:
    return _dyad(subtract, KType.FLOAT, lambda a, b: a - b, x, y)


def multiply(x: K, y: K) -> K:
    return _dyad(multiply, KType.FLOAT, lambda a, b: a * b, x, y)


def _fdiv(a, b):
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or a != a:
            return float("nan")
        return float("inf") if (a > 0) == (str(float(b))[0] != "-") else float("-inf")


def divide(x: K, y: K) -> K:
    """Division always yields floats."""
    if abs(x.t) == KType.INT and abs(y.t) == KType.INT:
        y = K(y.t // abs(y.t) * KType.FLOAT, [float(v) for v in y.data])
    result = _dyad(divide, KType.FLOAT, _fdiv, x, y)
    if abs(result.t) in (KType.INT, KType.CHAR):
        sign = -1 if result.t < 0 else 1
        result = K(sign * KType.FLOAT, [float(_cell(v, abs(result.t))) for v in result.data])
    return result


def _cmod(a: int, b: int) -> int:
    if b == 0:
        raise KError("'div")
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return a - b * q


def modulo(x: K, y: K) -> K:
    if abs(x.t) != KType.INT or y.t != -KType.INT:
        raise KError(E_NYI)
    return _dyad(modulo, KType.INT, _cmod, x, y)


def equal(x: K, y: K) -> K:
    return _dyad(equal, KType.INT, lambda a, b: a == b, x, y)


def less(x: K, y: K) -> K:
    return _dyad(less, KType.INT, lambda a, b: a < b, x, y)


def greater(x: K, y: K) -> K:
    return _dyad(greater, KType.INT, lambda a, b: a > b, x, y)


def maximum(x: K, y: K) -> K:
    return _dyad(maximum, KType.FLOAT, max, x, y)


def minimum(x: K, y: K) -> K:
    return _dyad(minimum, KType.FLOAT, min, x, y)


def join(x: K, y: K) -> K:
    if KType.DICT in (x.t, y.t):
        raise KError(E_NYI)
    if abs(x.t) == abs(y.t):
        return K(abs(x.t), list(x.data) + list(y.data))
    return general(_items(x) + _items(y))


def _at_index(x: K, y: K) -> K:
    if abs(y.t) != KType.INT:
        raise KError(E_TYP)
    n = len(x)
    for i in y.data:
        if not 0 <= i < n:
            raise KError("'index")
    picked = [x.data[i] for i in y.data]
    t = abs(x.t) * (-1 if y.t < 0 else 1)
    z = K(t, picked)
    if x.t == KType.GENERAL and len(y) == 1 and y.t > 0:
        return z
    return squeeze(z)


def at(x: K, y: K) -> K:
    if x.t == KType.DICT:
        return at(x.data[1], find(x.data[0], y))
    if abs(y.t) == KType.INT:
        return _at_index(x, y)
    if y.t != KType.GENERAL:
        raise KError(E_TYP)
    return general(at(x, item) for item in y.data)


def take(x: K, y: K) -> K:
    if abs(x.t) != KType.INT:
        raise KError(E_TYP)
    if y.t == KType.DICT:
        raise KError(E_TYP)
    n = x.data[0]
    size = len(y)
    if size == 0:
        raise KError(E_LEN)
    offset = size - abs(n) % size if n < 0 else 0
    values = [y.data[(offset + i) % size] for i in range(abs(n))]
    return squeeze(K(abs(y.t), values))


def drop(x: K, y: K) -> K:
    if abs(x.t) != KType.INT or y.t < 0:
        raise KError(E_TYP)
    if x.t == KType.INT:
        raise KError(E_NYI)
    if y.t not in (KType.GENERAL, KType.INT, KType.FLOAT, KType.CHAR):
        raise KError(E_TYP)
    n = x.data[0]
    if n < 0:
        raise KError(E_NYI)
    return squeeze(K(y.t, list(y.data[n:])))


def _matches(x: K, y: K) -> bool:
    if x.t != y.t or len(x) != len(y):
        return False
    if x.t in (KType.GENERAL, KType.DICT):
        return all(_matches(a, b) for a, b in zip(x.data, y.data))
    return x.data == y.data


def match(x: K, y: K) -> K:
    return int_atom(_matches(x, y))


def find(x: K, y: K) -> K:
    if x.t == KType.DICT:
        return at(x.data[0], find(x.data[1], y))
    xs = _items(x)
    result = []
    for item in _items(y):
        pos = next((j for j, cand in enumerate(xs) if _matches(item, cand)), len(xs))
        result.append(pos)
    return vector(KType.INT, result)


def key(x: K, y: K) -> K:
    if len(x) != len(y):
        raise KError(E_LEN)
    return make_dict(x, y)


def bang(x: K, y: K) -> K:
    """x!y: debugging hook for negative int atoms, dict for lists, else modulo."""
    if x.t == -KType.INT and x.data[0] < 0:
        if x.data[0] == -1:
            return type_of(y)
        raise KError(E_NYI)
    if x.t >= 0 and y.t >= 0:
        return key(x, y)
    return modulo(x, y)


# adverbs

def each(f: Callable, x: K) -> K:
    return squeeze(general(f(item) for item in _items(x)))


def each_right(f: Callable, x: K, y: K) -> K:
    return squeeze(general(f(x, item) for item in _items(y)))


def each_left(f: Callable, x: K, y: K) -> K:
    return squeeze(general(f(item, y) for item in _items(x)))


def _identity(f: Callable) -> K:
    if f is add:
        return int_atom(0)
    if f is multiply:
        return int_atom(1)
    if f is join or f is match:
        return general([])
    raise KError(E_NYI)


def each_prior_default(f: Callable, x: K) -> K:
    return each_prior(f, _identity(f), x)


def each_prior(f: Callable, x: K, y: K) -> K:
    items = _items(y)
    if not items:
        return general([])
    results = [f(x, items[0])]
    results.extend(f(cur, prev) for prev, cur in zip(items, items[1:]))
    return squeeze(general(results))


def each_pair(f: Callable, x: K, y: K) -> K:
    return general(f(a, b) for a, b in zip(_items(x), _items(y)))


def fold(f: Callable, x: K, scan_mode: bool) -> K:
    start = _identity(f)
    return scan(f, start, x) if scan_mode else fold_with(f, start, x)


def fold_with(f: Callable, x: K, y: K) -> K:
    z = x
    for item in _items(y):
        z = f(z, item)
    return squeeze(z)


def scan(f: Callable, x: K, y: K) -> K:
    z = x
    results = []
    for item in _items(y):
        z = f(z, item)
        results.append(z)
    return squeeze(general(results))