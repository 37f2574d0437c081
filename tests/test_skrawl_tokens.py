import pytest

from krua.skrawl.tokens import Scanner, TokenType, tokenize

TT = TokenType


def types(source):
    return [t.type for t in tokenize(source)][:-1]


def test_simple_expression():
    assert [t.type for t in tokenize("1+2")] == [TT.NUMBER, TT.PLUS, TT.NUMBER, TT.EOF]


def test_token_texts_and_offsets():
    tokens = tokenize("abc 12 `sym")
    assert [t.text for t in tokens] == ["abc", "12", "`sym", ""]
    assert [t.start for t in tokens[:3]] == [0, 4, 7]


@pytest.mark.parametrize(
    "source, expected",
    [
        ("-3", [TT.NUMBER]),
        ("1-3", [TT.NUMBER, TT.MINUS, TT.NUMBER]),
        ("1 -3", [TT.NUMBER, TT.NUMBER]),
        ("x-1", [TT.ID, TT.MINUS, TT.NUMBER]),
        ("(-1)", [TT.LPAREN, TT.NUMBER, TT.RPAREN]),
        ("+-1", [TT.PLUS, TT.NUMBER]),
        ("- 1", [TT.MINUS, TT.NUMBER]),
    ],
)
def test_minus_handling(source, expected):
    assert types(source) == expected


def test_negative_number_text():
    assert tokenize("1 -3")[1].text == "-3"


@pytest.mark.parametrize(
    "source, expected",
    [("42", TT.NUMBER), ("1.5", TT.FLOAT), (".5", TT.FLOAT), ("1.2.3", TT.ERROR), ("-1.5", TT.FLOAT)],
)
def test_numbers(source, expected):
    assert types(source) == [expected]


@pytest.mark.parametrize(
    "source, expected",
    [
        ("x/:y", [TT.ID, TT.EACHR, TT.ID]),
        ("x\\:y", [TT.ID, TT.EACHL, TT.ID]),
        ("x':y", [TT.ID, TT.EACHPRIOR, TT.ID]),
        ("x::", [TT.ID, TT.DOUBLECOLON]),
        ("x:1", [TT.ID, TT.COLON, TT.NUMBER]),
        ("+/x", [TT.PLUS, TT.FSLASH, TT.ID]),
        ("+\\x", [TT.PLUS, TT.BSLASH, TT.ID]),
        ("f'x", [TT.ID, TT.APOSTROPHE, TT.ID]),
    ],
)
def test_adverbs_and_digraphs(source, expected):
    assert types(source) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("/ all comment", []),
        ("1 /c\n2", [TT.NUMBER, TT.NUMBER]),
        ("x\n/c", [TT.ID]),
    ],
)
def test_comments(source, expected):
    assert types(source) == expected


def test_operator_order_matches_operator_string():
    for index, c in enumerate("+*-%.!|&<>=~?,@#_^$:"):
        assert tokenize("x" + c)[1].type == index


def test_string_token():
    tokens = tokenize('"hi there"')
    assert tokens[0].type == TT.STRING
    assert tokens[0].text == '"hi there"'


def test_unclosed_string_stops_scanning():
    tokens = tokenize('"ab')
    assert [t.type for t in tokens] == [TT.UNCLOSED_STRING]


def test_brackets_and_unknown():
    assert types("([]);") == [TT.LPAREN, TT.LSQUARE, TT.RSQUARE, TT.RPAREN, TT.SEMICOLON]
    assert types("{") == [TT.UNKNOWN]


def test_whitespace_including_carriage_return():
    assert types(" a\r\n b ") == [TT.ID, TT.ID]


def test_identifiers_include_digits():
    tokens = tokenize("a1b2")
    assert tokens[0].type == TT.ID
    assert tokens[0].text == "a1b2"


def test_peek_does_not_advance():
    scanner = Scanner("a+b")
    peeked = scanner.peek_token()
    assert scanner.next_token() == peeked
    assert scanner.next_token().type == TT.PLUS


def test_eof_repeats():
    scanner = Scanner("a")
    scanner.next_token()
    assert scanner.next_token().type == TT.EOF
    assert scanner.next_token().type == TT.EOF