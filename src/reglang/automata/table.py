# Copyright 2019 Matt Chaput. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY MATT CHAPUT ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL MATT CHAPUT OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of Matt Chaput.


"""
Transition tables: rendering an automaton as a text table, and building an
automaton from one.

A rendered table looks like this::

    ------------------
    |    |(ε)| a | b |
    |----|---|---|---|
    |->q0| q0| q1|   |
    |*q1 | q1|   | q1|
    ------------------

The start state is marked with ``->`` and final states with ``*``.
"""

import re
import sys

from reglang.analysis.tokenizers import DEFAULT_POLICY
from reglang.automata.fsa import EPSILON, Automaton

EPSILON_HEADER = "(ε)"

_cell_split = re.compile(r"[\s{},]+")


def _state_label(fsa, state):
    label = state.name
    if state.final:
        label = "*" + label
    if state.name == fsa.start:
        label = "->" + label
    return label


def _line(widths):
    return "-" * (sum(widths) + len(widths) + 1)


def _row(cells, widths):
    return "|" + "|".join(cell.center(w) for cell, w in zip(cells, widths)) + "|"


def format_table(fsa):
    """
    Returns the transition table of ``fsa`` as a string.

    Rows are the states in the order they were added, columns are epsilon
    followed by the alphabet in the order it was added. Each cell lists the
    destination state names, sorted and separated by commas.
    """

    symbols = [EPSILON] + fsa.symbols()
    header = [""] + [EPSILON_HEADER] + [sym.text for sym in fsa.symbols()]
    rows = []
    for state in fsa.states():
        row = [_state_label(fsa, state)]
        for sym in symbols:
            row.append(",".join(sorted(state.successors(sym))))
        rows.append(row)

    widths = [max(3, len(text)) for text in header]
    for row in rows:
        widths = [max(w, len(text)) for w, text in zip(widths, row)]

    lines = [_line(widths), _row(header, widths)]
    lines.append("|" + "|".join("-" * w for w in widths) + "|")
    lines.extend(_row(row, widths) for row in rows)
    lines.append(_line(widths))
    return "\n".join(lines)


def dump(fsa, stream=sys.stdout):
    """
    Prints the transition table of ``fsa`` to the specified stream.

    Args:
        fsa (Automaton): The automaton to print.
        stream (file): The stream to print to. Defaults to sys.stdout.
    """
    print(format_table(fsa), file=stream)


def _is_epsilon(symbol):
    return symbol == "" or symbol == EPSILON


def from_table(states, symbols, cells, start, finals=(), policy=DEFAULT_POLICY):
    """
    Builds an automaton from a transition table.

    Args:
        states (Sequence[str]): The state names, one per row.
        symbols (Sequence[str]): The symbols, one per column. An empty string
            (or :data:`EPSILON`) marks the epsilon column.
        cells (Sequence[str]): One cell per (state, symbol) pair in row-major
            order. A cell lists destination states, for example
            ``"{q1, q2}"``; braces and blanks are optional and an empty cell
            means no transition.
        start (str): The start state.
        finals (Iterable[str]): The final states.
        policy (str): The tokenizer match policy of the new automaton.

    Returns:
        Automaton: The new automaton.

    Raises:
        ValueError: If the number of cells does not match the table size.
        UnknownReferenceError: If a cell, ``start`` or ``finals`` names an
            unknown state.
    """

    states = list(states)
    symbols = list(symbols)
    cells = list(cells)
    if len(cells) != len(states) * len(symbols):
        raise ValueError(
            f"Expected {len(states) * len(symbols)} cells for "
            f"{len(states)} states and {len(symbols)} symbols, got {len(cells)}"
        )

    fsa = Automaton(
        [sym for sym in symbols if not _is_epsilon(sym)],
        states,
        policy=policy,
    )
    cell_iter = iter(cells)
    for src in states:
        for sym in symbols:
            for dest in _cell_split.split(next(cell_iter)):
                if dest:
                    fsa.add_transition(src, sym, dest)
    fsa.set_start(start)
    for name in finals:
        fsa.mark_final(name)
    return fsa
