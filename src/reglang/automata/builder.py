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
A chainable builder for :class:`~reglang.automata.fsa.Automaton` objects.

The builder only records what it is told. Every name is checked once, in
:meth:`AutomatonBuilder.build`, so calls can come in any order (a state may be
marked final before it is added, for example)::

    fsa = (
        AutomatonBuilder()
        .add_symbols(["a", "b"])
        .add_final("q1")
        .add_transition("q0", "a", "q1")
        .add_states(["q0", "q1"])
        .set_start("q0")
        .build()
    )
"""

from loguru import logger

from reglang.analysis.tokenizers import DEFAULT_POLICY
from reglang.automata.fsa import EPSILON, Automaton, IncompleteAutomatonError


class AutomatonBuilder:
    """
    Collects symbols, states, the start state, final states and transitions,
    and turns them into an automaton in one validated step.

    All methods except :meth:`build` return the builder itself.
    """

    def __init__(self, policy=DEFAULT_POLICY):
        self._symbols = []
        self._states = []
        self._start = None
        self._finals = []
        self._transitions = []
        self._policy = policy

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(symbols={self._symbols!r}, "
            f"states={self._states!r}, start={self._start!r})"
        )

    # Symbols

    def add_symbol(self, text):
        self._symbols.append(text)
        return self

    def add_symbols(self, texts):
        for text in texts:
            self.add_symbol(text)
        return self

    # States

    def add_state(self, name):
        self._states.append(name)
        return self

    def add_states(self, names):
        for name in names:
            self.add_state(name)
        return self

    def set_start(self, name):
        """Sets the start state. A later call replaces an earlier one."""
        self._start = name
        return self

    def add_final(self, name):
        self._finals.append(name)
        return self

    def add_finals(self, names):
        for name in names:
            self.add_final(name)
        return self

    # Transitions

    def add_transition(self, src, symbol, dest):
        self._transitions.append((src, symbol, dest))
        return self

    def add_epsilon(self, src, dest):
        return self.add_transition(src, EPSILON, dest)

    def set_policy(self, policy):
        """Sets the tokenizer match policy of the automaton to build."""
        self._policy = policy
        return self

    def build(self):
        """
        Returns a new automaton built from everything recorded so far.

        The builder is not changed, so it can be extended and built again.

        Raises:
            IncompleteAutomatonError: If no start state was set.
            UnknownReferenceError: If the start state, a final state or a
                transition refers to a state or symbol that was never added.
            InvalidSymbolError: If an empty symbol was added.
            ValueError: If the match policy is unknown.
        """

        if self._start is None:
            raise IncompleteAutomatonError("No start state was set")

        fsa = Automaton(policy=self._policy)
        for text in self._symbols:
            fsa.add_symbol(text)
        for name in self._states:
            fsa.add_state(name)
        fsa.set_start(self._start)
        for name in self._finals:
            fsa.mark_final(name)
        for src, symbol, dest in self._transitions:
            fsa.add_transition(src, symbol, dest)

        logger.debug("Built {!r}", fsa)
        return fsa
