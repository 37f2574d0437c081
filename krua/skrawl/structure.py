"""Structural verbs of the skrawl interpreter: matching, searching, joining and reshaping."""

from __future__ import annotations

import struct

from krua.skrawl.kobject import (
    ATOM_TYPES,
    LIST_TYPES,
    K,
    KError,
    KType,
    expand,
    general,
    k_count,
    ki,
    ks,
    squeeze,
    vector,
)

_NESTED = {
    KType.GENERAL,
    KType.DICT,
    KType.TABLE,
    KType.PROJECTION,
    KType.COMPOSITION,
}


def _is_higher_order(x: K) -> bool:
    return KType.OVER <= x.t <= KType.EACH_PRIOR


def _float_bits(v: float) -> bytes:
    return struct.pack("<d", v)


def merge_sort_index(values, ascending: bool = True) -> list[int]:
    """Indices that sort values, stable for equal values in either direction."""
    values = list(values)
    return sorted(range(len(values)), key=values.__getitem__, reverse=not ascending)


def _matches(x: K, y: K) -> bool:
    if x.t != y.t or len(x) != len(y):
        return False
    if x.t in _NESTED or _is_higher_order(x):
        return all(_matches(a, b) for a, b in zip(x.data, y.data))
    if abs(x.t) == KType.FLOAT:
        return all(_float_bits(a) == _float_bits(b) for a, b in zip(x.data, y.data))
    return x.data == y.data


def match(x: K, y: K) -> K:
    """x~y: 1 when x and y have the same type, count and contents, else 0."""
    return ki(_matches(x, y))


def key(x: K, y: K) -> K:
    """x!y: a dict from two lists of equal count."""
    if x.t < 0 or y.t < 0:
        raise KError("type error! can't key non-list args")
    if len(x) != len(y):
        raise KError("length error! can't key args of different lengths")
    return K(KType.DICT, [x, y])


def find(x: K, y: K) -> K:
    """x?y: index of the first occurrence of each y in x, or the count of x if absent."""
    if x.t < 0:
        raise KError("type error! x arg must be list")
    atom = y.t < 0 or y.t == KType.DICT
    xs = expand(x).data
    result = [
        next((j for j, cand in enumerate(xs) if _matches(cand, item)), len(xs))
        for item in expand(y).data
    ]
    return K(-KType.INT if atom else KType.INT, result)


def upsert_dicts(x: K, y: K) -> K:
    """Join two symbol-keyed dicts: update matching keys, append new ones."""
    xkeys, xvals_obj = x.data
    ykeys, yvals_obj = y.data
    if xkeys.t != KType.SYMBOL or ykeys.t != KType.SYMBOL:
        raise KError("type error! can only join dicts with sym keys.")
    keys = list(xkeys.data)
    vals = list(expand(xvals_obj).data)
    yvals = expand(yvals_obj).data
    original = list(xkeys.data)
    for i, name in enumerate(ykeys.data):
        if name in original:
            vals[original.index(name)] = yvals[i]
        else:
            keys.append(name)
            vals.append(yvals[i])
    return key(vector(KType.SYMBOL, keys), squeeze(general(vals)))


def _cat_into_dict(keys: K, joined: K) -> K:
    if len(keys) == len(joined):
        return key(keys, joined)
    return joined


def cat(x: K, y: K) -> K:
    """x,y: join two values into one list; dicts are upserted."""
    if x.t == KType.DICT and y.t == KType.DICT:
        return upsert_dicts(x, y)
    if x.t == KType.DICT and y.t != KType.TABLE:
        keys, vals = x.data
        return _cat_into_dict(keys, cat(vals, y))
    if y.t == KType.DICT and x.t != KType.TABLE:
        keys, vals = y.data
        return _cat_into_dict(keys, cat(x, vals))
    return squeeze(general(expand(x).data + expand(y).data))


def take(x: K, y: K) -> K:
    """x#y: take x items of y cyclically; a negative x takes from the end backwards."""
    if x.t != -KType.INT:
        raise KError("type error! #(take) left operand must be type `i")
    if y.t == KType.DICT:
        keys, vals = y.data
        return key(take(x, keys), take(x, vals))
    n = x.data[0]
    items = expand(y).data
    if n and not items:
        raise KError("length error! can't take from an empty list")
    size = len(items)
    if n > 0:
        picked = [items[i % size] for i in range(n)]
    else:
        picked = [items[size - 1 - i % size] for i in range(-n)]
    return squeeze(general(picked))


def drop(x: K, y: K) -> K:
    """x_y: drop x items from the front of y, or from the back when x is negative."""
    if x.t != -KType.INT:
        raise KError("type error! _(drop) left operand must be type `i")
    if y.t == KType.DICT:
        keys, vals = y.data
        return key(drop(x, keys), drop(x, vals))
    n = x.data[0]
    items = expand(y).data
    size = max(0, len(items) - abs(n))
    start = n if n > 0 else 0
    return squeeze(general(items[start:start + size]))


def _flip_dict_or_table(x: K) -> K:
    if x.t == KType.TABLE:
        return x.data[0]
    keys, vals = x.data
    if keys.t != KType.SYMBOL:
        raise KError("type error! dict key must be symbol")
    if vals.t != KType.GENERAL:
        raise KError("rank error! dict value must be general list")
    if any(col.t < 0 for col in vals.data):
        raise KError("rank error! dict values must not be atoms")
    if vals.data:
        n = len(vals.data[0])
        if any(k_count(col) != n for col in vals.data[1:]):
            raise KError("length error! dict values must be equal length")
    return K(KType.TABLE, [x])


def flip(x: K) -> K:
    """+x: transpose a rectangular general list, or turn a dict into a table and back."""
    if x.t not in (KType.GENERAL, KType.DICT, KType.TABLE):
        raise KError("rank error!")
    if x.t != KType.GENERAL:
        return _flip_dict_or_table(x)
    if not x.data:
        return general([])
    n = len(x.data[0])
    if any(len(item) != n for item in x.data[1:]):
        raise KError("length error!")
    rows = [expand(item).data if item.t > 0 else
            (item.data if item.t == KType.GENERAL else [item]) for item in x.data]
    return general(squeeze(general(row[j] for row in rows)) for j in range(n))


_EMPTY_ATOM = {KType.INT: 0, KType.FLOAT: 0.0, KType.CHAR: " ", KType.SYMBOL: ""}


def first(x: K) -> K:
    """*x: the first item of a list, the first value of a dict, or x itself for an atom."""
    if x.is_scalar():
        return x
    if x.t == KType.DICT:
        return first(x.data[1])
    if x.t == KType.TABLE:
        rows = expand(x).data
        if not rows:
            raise KError("length error! table is empty")
        return rows[0]
    if x.t > 0:
        if x.t not in _EMPTY_ATOM:
            raise KError("type error!")
        return K(-x.t, [x.data[0] if x.data else _EMPTY_ATOM[x.t]])
    return x.data[0] if x.data else x


def value(x: K) -> K:
    """.x: the values of a dict, or the function an adverb modifies."""
    if x.t == KType.DICT:
        return x.data[1]
    if _is_higher_order(x):
        return x.data[0]
    raise KError("type error! arg type to monadic . (value) not yet implemented.")


def til(x: K) -> K:
    """!n: the ints 0 to n-1."""
    if x.t != -KType.INT:
        raise KError("type error! arg must be int atom")
    return vector(KType.INT, range(x.data[0]))


def get_key(x: K) -> K:
    """!d: the keys of a dict or table."""
    if x.t == KType.DICT:
        return x.data[0]
    if x.t == KType.TABLE:
        return x.data[0].data[0]
    raise KError("type error! can only get key of dict and table.")


def bang_monad(x: K) -> K:
    """Monadic !: enumerate an int atom, or the keys of a dict or table."""
    if x.t == -KType.INT:
        return til(x)
    if x.t in (KType.DICT, KType.TABLE):
        return get_key(x)
    raise KError("type error! invalid opernd for monadic ! (key/enumerate).")


def reverse(x: K) -> K:
    """|x: the items of x in reverse order."""
    if x.t == KType.DICT:
        keys, vals = x.data
        return key(reverse(keys), reverse(vals))
    return squeeze(general(reversed(expand(x).data)))


def enlist(x: K) -> K:
    """,x: a one-item list holding x."""
    return squeeze(general([x]))


def where(x: K) -> K:
    """&x: each index i repeated x[i] times."""
    if x.t != KType.INT:
        raise KError("type error! &(where) arg must be int list")
    return vector(KType.INT, (i for i, n in enumerate(x.data) if n > 0 for _ in range(n)))


def _grade(x: K, ascending: bool) -> K:
    if x.t != KType.INT:
        raise KError("rank error! can only sort int vectors")
    return vector(KType.INT, merge_sort_index(x.data, ascending))


def asc(x: K) -> K:
    """<x: indices that sort x ascending."""
    return _grade(x, True)


def desc(x: K) -> K:
    """>x: indices that sort x descending."""
    return _grade(x, False)


def distinct(x: K) -> K:
    """?x: the unique items of x in order of first appearance."""
    if x.is_scalar():
        raise KError("type error! arg to ? (distinct) must be list.")
    if k_count(x) in (0, 1):
        return x
    if x.t == KType.DICT:
        x = value(x)
    unique: list[K] = []
    for item in expand(x).data:
        if not any(_matches(item, seen) for seen in unique):
            unique.append(item)
    return squeeze(general(unique))


def type_of(x: K) -> K:
    """@x: the type of x as a one-letter symbol."""
    if x.t < 0:
        if -x.t >= len(ATOM_TYPES):
            raise KError("type error! type has no name")
        return ks(ATOM_TYPES[-x.t])
    return ks(LIST_TYPES[x.t])


def count(x: K) -> K:
    """#x: the number of items in x."""
    return ki(k_count(x))