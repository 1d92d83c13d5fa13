import pytest
from reglang.analysis.tokenizers import (
    LONGEST,
    SHORTEST,
    SymbolTokenizer,
    UnmatchedInputError,
    tokenize,
)
from reglang.automata.fsa import EPSILON, InvalidSymbolError, Symbol


def texts(symbols):
    return [s.text for s in symbols]


def test_single_chars():
    assert texts(tokenize("abba", ["a", "b"])) == ["a", "b", "b", "a"]
    assert tokenize("", ["a"]) == []
    assert tokenize("", []) == []


def test_returns_alphabet_symbols():
    result = tokenize("ab", [Symbol("a"), "b"])
    assert result == [Symbol("a"), Symbol("b")]


def test_multichar():
    alphabet = ["if", "then", "else", " ", "x"]
    assert texts(tokenize("if x then x", alphabet)) == [
        "if", " ", "x", " ", "then", " ", "x",
    ]


def test_longest_policy():
    alphabet = ["a", "aa", "aaa"]
    assert texts(tokenize("aaaa", alphabet)) == ["aaa", "a"]
    assert texts(tokenize("aaaa", alphabet, LONGEST)) == ["aaa", "a"]


def test_shortest_policy():
    alphabet = ["a", "aa", "aaa"]
    assert texts(tokenize("aaaa", alphabet, SHORTEST)) == ["a", "a", "a", "a"]


def test_no_backtracking():
    # "a" + "bc" would work, but the longest match "ab" is taken first
    with pytest.raises(UnmatchedInputError) as exc:
        tokenize("abc", ["a", "ab", "bc"])
    assert exc.value.position == 2
    assert exc.value.remainder == "c"
    assert texts(tokenize("abc", ["a", "ab", "bc"], SHORTEST)) == ["a", "bc"]


def test_unmatched():
    with pytest.raises(UnmatchedInputError) as exc:
        tokenize("abxab", ["a", "b"])
    assert exc.value.position == 2
    assert exc.value.remainder == "xab"
    assert "xab" in str(exc.value)

    with pytest.raises(ValueError):
        tokenize("a", [])


def test_empty_symbol_rejected():
    with pytest.raises(InvalidSymbolError):
        SymbolTokenizer(["a", ""])
    with pytest.raises(InvalidSymbolError):
        SymbolTokenizer([EPSILON])


def test_unknown_policy():
    with pytest.raises(ValueError):
        SymbolTokenizer(["a"], policy="first")


def test_positions_and_chars():
    tk = SymbolTokenizer(["ab", "c"])
    result = [
        (t.text, t.pos, t.startchar, t.endchar)
        for t in tk("abcab", positions=True, chars=True)
    ]
    assert result == [("ab", 0, 0, 2), ("c", 1, 2, 3), ("ab", 2, 3, 5)]

    result = [
        (t.pos, t.startchar)
        for t in tk("cab", positions=True, chars=True, start_pos=10, start_char=100)
    ]
    assert result == [(10, 100), (11, 101)]


def test_token_reuse():
    tk = SymbolTokenizer(["a", "b"])
    tokens = list(tk("ab"))
    # One token object is yielded over and over
    assert tokens[0] is tokens[1]
    copies = [t.copy() for t in tk("ab")]
    assert [t.text for t in copies] == ["a", "b"]
    assert copies[0].symbol == Symbol("a")


def test_match():
    tk = SymbolTokenizer(["a", "ab"])
    assert tk.match("abc") == Symbol("ab")
    assert tk.match("abc", 1) is None
    assert tk.match("abc", 3) is None
    assert SymbolTokenizer(["a", "ab"], SHORTEST).match("abc") == Symbol("a")


def test_reuse_tokenizer():
    tk = SymbolTokenizer(["x", "y"])
    assert texts(tokenize("xy", tk)) == ["x", "y"]
    assert tk == SymbolTokenizer(["y", "x"])
    assert tk != SymbolTokenizer(["y", "x"], SHORTEST)
    assert len(tk.alphabet()) == 2


def test_docstring_example():
    tk = SymbolTokenizer(["a", "ab", "c"])
    assert [t.text for t in tk("abca")] == ["ab", "c", "a"]
