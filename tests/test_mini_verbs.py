import pytest

from krua.mini.kobject import KError, KType, char_atom, float_atom, general, int_atom, make_dict, vector
from krua.mini import verbs as v


def ints(*xs):
    return vector(KType.INT, xs)


def test_til_and_count():
    r = v.til(int_atom(4))
    assert r.data == list(range(4))
    assert v.count(r) == int_atom(4)


def test_reverse_involution():
    x = ints(1, 5, 9)
    assert v.reverse(x).data == list(reversed(x.data))
    assert v.reverse(v.reverse(x)) == x


def test_where():
    assert v.where(ints(2, 0, 1)).data == [0, 0, 2]


def test_negate_twice():
    x = ints(1, -2, 3)
    assert v.negate(v.negate(x)) == x
    with pytest.raises(KError):
        v.negate(char_atom("a"))


def test_not():
    assert v.logical_not(ints(0, 3)).data == [1, 0]


def test_add_commutes_and_subtract_inverts():
    x, y = ints(1, 2, 3), ints(10, 20, 30)
    assert v.add(x, y) == v.add(y, x)
    assert v.subtract(v.add(x, y), y) == x


def test_broadcast_atom():
    x = ints(1, 2, 3)
    assert v.add(int_atom(0), x) == x
    assert v.add(x, int_atom(0)) == x


def test_length_error():
    with pytest.raises(KError):
        v.add(ints(1, 2), ints(1, 2, 3))


def test_divide_float():
    r = v.divide(int_atom(6), int_atom(3))
    assert r.t == -KType.FLOAT
    assert r.data == [2.0]


def test_general_arith():
    g = general([ints(1, 2), int_atom(3)])
    assert v.subtract(v.add(g, int_atom(5)), int_atom(5)) == g


def test_match_and_find():
    x = ints(4, 5, 6)
    assert v.match(x, x) == int_atom(1)
    assert v.match(x, ints(4, 5)) == int_atom(0)
    assert v.find(x, x).data == list(range(3))
    assert v.find(x, int_atom(99)).data == [len(x)]


def test_take_drop():
    data = [1, 2, 3, 4, 5]
    x = vector(KType.INT, data)
    assert v.take(int_atom(3), x).data == data[:3]
    assert v.take(int_atom(-2), x).data == data[-2:]
    assert v.drop(int_atom(2), x).data == data[2:]
    with pytest.raises(KError):
        v.take(char_atom("a"), x)


def test_join():
    a, b = ints(1, 2), ints(3)
    assert v.join(a, b).data == a.data + b.data
    mixed = v.join(a, vector(KType.CHAR, "z"))
    assert mixed.t == KType.GENERAL and len(mixed) == 3


def test_string():
    s = v.string(int_atom(42))
    assert "".join(s.data) == str(42)


def test_fold_and_scan():
    x = ints(1, 2, 3, 4)
    folded = v.fold(v.add, x, False)
    scanned = v.fold(v.add, x, True)
    assert scanned.data[-1] == folded.data[0]
    assert len(scanned) == len(x)


def test_each_matches_vector_op():
    x = ints(1, 2, 3)
    assert v.each(v.negate, x) == v.negate(x)
    assert v.each_right(v.add, int_atom(0), x) == x


def test_each_prior_identity_required():
    with pytest.raises(KError):
        v.each_prior_default(v.subtract, ints(1, 2))


def test_bang():
    y = ints(1)
    assert v.bang(int_atom(-1), y) == v.type_of(y)
    with pytest.raises(KError):
        v.modulo(ints(1, 2), ints(1, 2))


def test_float_mixing():
    r = v.add(int_atom(1), float_atom(0.5))
    assert r.t == -KType.FLOAT