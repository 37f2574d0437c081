import pytest

from krua.skrawl.kobject import (
    K,
    KError,
    KType,
    expand,
    format_k,
    general,
    k_count,
    ka,
    kc,
    kf,
    ki,
    knull,
    kp,
    kq,
    ks,
    kv,
    make_symbol,
    rank_of,
    squeeze,
    vector,
)


def _magic():
    return K(-KType.NULL, [])


def _dict(keys, values):
    return K(KType.DICT, [vector(KType.SYMBOL, keys), vector(KType.INT, values)])


def test_symbols_truncate_to_eight():
    assert make_symbol("abcdefghij") == "abcdefgh"
    assert ks("abcdefghij").data == ["abcdefgh"]


def test_atoms_have_negative_types():
    assert ki(3).t == -KType.INT
    assert kf(1.5).t == -KType.FLOAT
    assert kc("a").t == -KType.CHAR
    with pytest.raises(ValueError):
        kc("ab")


def test_len_and_count():
    d = _dict(["a", "b", "c"], [1, 2, 3])
    assert len(d) == 2
    assert k_count(d) == 3
    assert k_count(knull()) == 1
    assert k_count(vector(KType.INT, [1, 2])) == 2


def test_is_scalar():
    assert ki(1).is_scalar()
    assert kv(KType.DYAD, "+").is_scalar()
    assert not vector(KType.INT, [1]).is_scalar()
    assert not _dict(["a"], [1]).is_scalar()


def test_expand_squeeze_round_trip():
    for v in (
        vector(KType.INT, [1, 2, 3]),
        vector(KType.FLOAT, [1.5, 2.5]),
        vector(KType.CHAR, "abc"),
        vector(KType.SYMBOL, ["x", "y"]),
    ):
        e = expand(v)
        assert e.t == KType.GENERAL
        assert len(e) == len(v)
        assert squeeze(e) == v


def test_squeeze_mixed_is_unchanged():
    x = general([ki(1), kf(2.0)])
    assert squeeze(x) is x
    empty = general([])
    assert squeeze(empty) is empty


def test_expand_wraps_functions():
    f = kv(KType.DYAD, "+")
    assert expand(f) == general([f])


def test_expand_composition_raises():
    with pytest.raises(KError):
        expand(kq(kv(KType.MONAD, "-"), kv(KType.DYAD, "+")))


def test_dicts_squeeze_to_table_and_back():
    d1 = _dict(["a", "b"], [1, 2])
    d2 = _dict(["a", "b"], [3, 4])
    table = squeeze(general([d1, d2]))
    assert table.t == KType.TABLE
    assert k_count(table) == 2
    assert expand(table) == general([d1, d2])


def test_dicts_with_different_keys_stay_a_list():
    x = general([_dict(["a", "b"], [1, 2]), _dict(["a", "c"], [3, 4])])
    assert squeeze(x) is x


def test_rank_of():
    plus = kv(KType.DYAD, "+")
    neg = kv(KType.MONAD, "-")
    assert rank_of(neg) == 1
    assert rank_of(plus) == 2
    assert rank_of(ka("/", plus)) == 0
    assert rank_of(ka("'", plus)) == 2
    assert rank_of(kq(neg, plus)) == 2
    assert rank_of(kp(ki(1), general([plus, ki(1), _magic()]))) == 1
    assert rank_of(ki(5)) == 0


def test_adverb_types():
    plus = kv(KType.DYAD, "+")
    assert ka("/", plus).t == KType.OVER
    assert ka("\\", plus).t == KType.SCAN
    assert ka(int(KType.EACH_PRIOR) + 10, plus).t == KType.EACH_PRIOR


def test_format_empty_lists():
    assert format_k(vector(KType.INT, []), True) == "0#0"
    assert format_k(vector(KType.FLOAT, []), True) == "0#0."
    assert format_k(vector(KType.SYMBOL, []), True) == "0#`"
    assert format_k(vector(KType.CHAR, ""), True) == '""'


def test_format_null():
    assert format_k(knull(), True) == "::"
    assert format_k(knull()) == ""


def test_format_simple_values():
    ints = vector(KType.INT, [1, 2, 3])
    assert format_k(ints, True) == "1 2 3"
    assert format_k(ints) == "1 2 3\n"
    assert format_k(vector(KType.INT, [7]), True) == ",7"
    assert format_k(vector(KType.CHAR, "abc"), True) == '"abc"'
    assert format_k(vector(KType.SYMBOL, ["a", "b"]), True) == "`a`b"


def test_format_float_drops_trailing_zeros():
    assert format_k(kf(2.5), True) == "2.5"


def test_format_dict_and_operators():
    assert format_k(_dict(["a", "b"], [1, 2]), True) == "`a`b!1 2"
    assert format_k(kv(KType.MONAD, "+"), True) == "+:"
    assert format_k(kv(KType.DYAD, "+"), True) == "+"
    assert format_k(ka("/", kv(KType.DYAD, "+")), True) == "+/"


def test_format_projection():
    plus = kv(KType.DYAD, "+")
    assert format_k(kp(ki(1), general([plus, ki(1), _magic()])), True) == "1+"
    assert format_k(kp(ki(1), general([plus, _magic(), ki(2)])), True) == "+[;2]"


def test_format_general_list_separators():
    x = general([ki(1), vector(KType.CHAR, "ab")])
    assert format_k(x, True) == '(1;"ab")'
    assert format_k(x) == '(1\n "ab")\n'
    assert format_k(general([]), True) == "()"


def test_vector_rejects_non_simple_type():
    with pytest.raises(KError):
        vector(KType.DICT, [1])