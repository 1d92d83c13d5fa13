import pytest
from loguru import logger
from reglang.analysis.tokenizers import UnmatchedInputError
from reglang.automata.fsa import Automaton


def scenario_a():
    fsa = Automaton(["a", "b"], ["q0", "q1"], start="q0", finals=["q1"])
    fsa.add_transition("q0", "a", "q1")
    return fsa


def test_single_transition():
    fsa = scenario_a()
    assert fsa.accepts("a")
    # "b" is in the alphabet but has no transition
    assert not fsa.accepts("b")
    assert not fsa.accepts("aa")
    assert not fsa.accepts("")
    assert fsa("a")


def test_epsilon_chain():
    # Only a full closure sees q2 from q0; one epsilon step stops at q1
    fsa = Automaton([], ["q0", "q1", "q2"], start="q0", finals=["q2"])
    fsa.add_epsilon("q0", "q1")
    fsa.add_epsilon("q1", "q2")
    assert fsa.accepts("")


def test_epsilon_chain_after_symbol():
    fsa = Automaton(["a"], ["q0", "q1", "q2", "q3"], start="q0", finals=["q3"])
    fsa.add_transition("q0", "a", "q1")
    fsa.add_epsilon("q1", "q2")
    fsa.add_epsilon("q2", "q3")
    assert fsa.accepts("a")
    assert not fsa.accepts("")


def test_nondeterminism():
    fsa = Automaton(["a"], ["q0", "q1", "q2"], start="q0", finals=["q2"])
    fsa.add_transition("q0", "a", "q1")
    fsa.add_transition("q0", "a", "q2")
    assert fsa.accepts("a")


def test_nondeterministic_branches_merge():
    # (ab|ac)d
    fsa = Automaton(
        ["a", "b", "c", "d"],
        ["s", "x", "y", "z", "f"],
        start="s",
        finals=["f"],
    )
    fsa.add_transition("s", "a", "x")
    fsa.add_transition("s", "a", "y")
    fsa.add_transition("x", "b", "z")
    fsa.add_transition("y", "c", "z")
    fsa.add_transition("z", "d", "f")
    assert fsa.accepts("abd")
    assert fsa.accepts("acd")
    assert not fsa.accepts("ad")
    assert not fsa.accepts("abcd")


def test_empty_string():
    fsa = Automaton(["a"], ["q0"], start="q0")
    assert not fsa.accepts("")
    fsa.mark_final("q0")
    assert fsa.accepts("")


def test_unmatched_input():
    fsa = scenario_a()
    with pytest.raises(UnmatchedInputError) as exc:
        fsa.accepts("ac")
    assert exc.value.position == 1
    assert exc.value.remainder == "c"


def test_unmatched_input_after_dead_end():
    # The whole string is tokenized before simulation starts
    fsa = scenario_a()
    with pytest.raises(UnmatchedInputError):
        fsa.accepts("bbx")


def test_deterministic_outcome():
    fsa = scenario_a()
    results = [fsa.accepts(s) for s in ("a", "b", "aa", "") * 5]
    assert results == [True, False, False, False] * 5
    assert fsa.final_states() == {"q1"}
    assert fsa.closure(["q0"]) == {"q0"}


def test_multichar_symbols():
    # Keywords "if" and "then" over states in a line
    fsa = Automaton(["if", "then", "x"], ["q0", "q1", "q2", "q3", "q4"])
    fsa.set_start("q0")
    fsa.mark_final("q4")
    fsa.add_transition("q0", "if", "q1")
    fsa.add_transition("q1", "x", "q2")
    fsa.add_transition("q2", "then", "q3")
    fsa.add_transition("q3", "x", "q4")
    assert fsa.accepts("ifxthenx")
    assert not fsa.accepts("ifx")
    with pytest.raises(UnmatchedInputError):
        fsa.accepts("ifxthe")


def test_loop():
    # a*b
    fsa = Automaton(["a", "b"], ["q0", "q1"], start="q0", finals=["q1"])
    fsa.add_transition("q0", "a", "q0")
    fsa.add_transition("q0", "b", "q1")
    for n in range(6):
        assert fsa.accepts("a" * n + "b")
        assert not fsa.accepts("a" * n)
    assert not fsa.accepts("bb")


def test_epsilon_loop():
    # (ab)* with an epsilon back edge
    fsa = Automaton(["a", "b"], ["q0", "q1", "q2"], start="q0", finals=["q0"])
    fsa.add_transition("q0", "a", "q1")
    fsa.add_transition("q1", "b", "q2")
    fsa.add_epsilon("q2", "q0")
    assert fsa.accepts("")
    assert fsa.accepts("ab")
    assert fsa.accepts("ababab")
    assert not fsa.accepts("aba")
    assert not fsa.accepts("ba")


def test_policy_changes_split():
    # With "longest" the input is split "ab", "c"; with "shortest" "a", "bc"
    fsa = Automaton(["a", "ab", "bc", "c"], ["q0", "q1", "q2"])
    fsa.set_start("q0")
    fsa.mark_final("q2")
    fsa.add_transition("q0", "a", "q1")
    fsa.add_transition("q1", "bc", "q2")
    assert not fsa.accepts("abc")
    fsa.policy = "shortest"
    assert fsa.accepts("abc")


def test_changes_after_query():
    fsa = scenario_a()
    assert not fsa.accepts("ab")
    fsa.add_transition("q1", "b", "q1")
    assert fsa.accepts("ab")
    fsa.unmark_final("q1")
    assert not fsa.accepts("ab")


def test_trace_logging():
    fsa = scenario_a()
    messages = []
    logger.enable("reglang")
    handler = logger.add(messages.append, level="TRACE", format="{message}")
    try:
        assert fsa.accepts("a")
    finally:
        logger.remove(handler)
        logger.disable("reglang")

    lines = [str(m).strip() for m in messages]
    assert "start -> ['q0']" in lines
    assert "'a' -> ['q1']" in lines
