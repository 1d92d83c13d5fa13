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
Finite automata with multi-character symbols and epsilon transitions.

An :class:`Automaton` owns its states in an arena keyed by name. States only
refer to each other by name, and the automaton resolves those names when it
computes closures or simulates input.

Membership is decided by subset simulation: the automaton tracks the set of
every state it could currently be in, stepping the whole set over each input
symbol and expanding it along epsilon transitions, so nondeterminism never
has to be resolved ahead of time.

>>> fsa = Automaton(["a", "b"], ["q0", "q1"], start="q0", finals=["q1"])
>>> fsa.add_transition("q0", "a", "q1")
True
>>> fsa.accepts("a")
True
>>> fsa.accepts("b")
False
"""

from cached_property import threaded_cached_property
from loguru import logger

from reglang.analysis.tokenizers import (
    DEFAULT_POLICY,
    SymbolTokenizer,
    check_policy,
    tokenize,
)
from reglang.automata.symbols import EPSILON, AutomatonError, InvalidSymbolError, Symbol

__all__ = [
    "EPSILON",
    "Symbol",
    "State",
    "Automaton",
    "epsilon_closure",
    "AutomatonError",
    "InvalidSymbolError",
    "UnknownReferenceError",
    "IncompleteAutomatonError",
]


# Exceptions


class UnknownReferenceError(AutomatonError, KeyError):
    """
    Raised when a construction or query call names a state or symbol the
    automaton does not have.

    Attributes:
        kind (str): ``"state"`` or ``"symbol"``.
        name (str): The name that could not be found.
    """

    def __init__(self, kind, name):
        self.kind = kind
        self.name = name
        super().__init__(f"Can't find a {kind} with given name: {name!r}")

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.message


class IncompleteAutomatonError(AutomatonError):
    """
    Raised when an automaton is queried (or built) before it has a start
    state.
    """

    pass


def _name(state):
    return state.name if isinstance(state, State) else state


# States


class State:
    """
    A named node of an automaton.

    The name is the state's identity: two states with the same name compare
    equal. Outgoing transitions map a :class:`Symbol` to the set of
    destination state *names*. A new state always has an epsilon transition to
    itself.
    """

    def __init__(self, name):
        self.name = name
        self.final = False
        self._next = {EPSILON: {name}}

    def __eq__(self, other):
        return other.__class__ is self.__class__ and other.name == self.name

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        flag = " final" if self.final else ""
        return f"<{self.__class__.__name__} {self.name!r}{flag}>"

    def add_transition(self, symbol, dest):
        """
        Registers ``dest`` as reachable from this state on ``symbol``.

        Args:
            symbol (Symbol): The symbol consumed by the transition. Use
                :data:`EPSILON` for an epsilon transition.
            dest (Union[str, State]): The destination state or its name.

        Returns:
            bool: True if this is a new (symbol, destination) pair, False if it
            was already registered.
        """
        dest = _name(dest)
        dests = self._next.setdefault(symbol, set())
        if dest in dests:
            return False
        dests.add(dest)
        return True

    def successors(self, symbol):
        """
        Returns the names of the states one ``symbol`` transition away. This
        is a direct lookup, not a closure.
        """
        return frozenset(self._next.get(symbol, ()))

    def epsilon_successors(self):
        """
        Returns the direct epsilon successors, which always include this
        state's own name.
        """
        return self.successors(EPSILON)

    def labels(self):
        """Returns the symbols this state has outgoing transitions for."""
        return [sym for sym, dests in self._next.items() if dests]

    def items(self):
        """Returns (symbol, frozenset of destination names) pairs."""
        return [(sym, frozenset(dests)) for sym, dests in self._next.items()]

    def is_final(self):
        return self.final

    def set_final(self, value=True):
        self.final = bool(value)


# Closure


def epsilon_closure(fsa, states):
    """
    Returns every state reachable from ``states`` through zero or more epsilon
    transitions.

    The closure is computed to a fixed point, so chains of several epsilon
    transitions (and cycles through them) are followed all the way. The input
    states are always part of the result.

    Args:
        fsa (Automaton): The automaton whose transitions are followed.
        states (Iterable[Union[str, State]]): The states to expand.

    Returns:
        frozenset: The names of the states in the closure.

    Raises:
        UnknownReferenceError: If one of ``states`` is not in the automaton.
    """

    expanded = set()
    for state in states:
        expanded.add(fsa.get_state(_name(state)).name)

    frontier = set(expanded)
    while frontier:
        name = frontier.pop()
        new_states = fsa.get_state(name).epsilon_successors().difference(expanded)
        frontier.update(new_states)
        expanded.update(new_states)
    return frozenset(expanded)


# Automaton


class Automaton:
    """
    A nondeterministic finite automaton with epsilon transitions over an
    alphabet of string symbols.

    The automaton is built incrementally (states, symbols, start state, final
    states, transitions) and then queried with :meth:`accepts`. Queries only
    read the automaton, so several threads may run them at once on an
    automaton that is no longer being modified. Construction is not
    synchronized.

    Args:
        symbols (Iterable[str]): The alphabet. Empty strings are rejected.
        states (Iterable[str]): State names.
        start (str): The name of the start state, if already known.
        finals (Iterable[str]): The names of the final states.
        policy (str): The tokenizer match policy used when an input string is
            split into symbols (``"longest"`` or ``"shortest"``).

    Raises:
        InvalidSymbolError: If an alphabet symbol is empty.
        UnknownReferenceError: If ``start`` or ``finals`` name unknown states.
    """

    def __init__(self, symbols=(), states=(), start=None, finals=(), policy=DEFAULT_POLICY):
        self._states = {}
        self._symbols = {}
        self._start = None
        self._policy = check_policy(policy)

        for text in symbols:
            self.add_symbol(text)
        for name in states:
            self.add_state(name)
        if start is not None:
            self.set_start(start)
        for name in finals:
            self.mark_final(name)

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} {len(self._states)} states, "
            f"{len(self._symbols)} symbols, start={self._start!r}>"
        )

    def __len__(self):
        return len(self._states)

    def __contains__(self, name):
        return _name(name) in self._states

    def __call__(self, value):
        return self.accepts(value)

    # Configuration

    @property
    def policy(self):
        return self._policy

    @policy.setter
    def policy(self, policy):
        self._policy = check_policy(policy)
        self.__dict__.pop("tokenizer", None)

    @threaded_cached_property
    def tokenizer(self):
        """
        The :class:`SymbolTokenizer` for the current alphabet and policy.
        Rebuilt after the alphabet or the policy changes.
        """
        return SymbolTokenizer(self._symbols.values(), self._policy)

    # Construction

    def add_state(self, name):
        """
        Adds a state called ``name``.

        Returns:
            bool: True if the state is new, False if it already existed.
        """
        if name in self._states:
            return False
        self._states[name] = State(name)
        logger.debug("Added state {!r}", name)
        return True

    def add_symbol(self, text):
        """
        Adds a symbol to the alphabet.

        Args:
            text (Union[str, Symbol]): The symbol text. Must not be empty.

        Returns:
            bool: True if the symbol is new, False if it already existed.

        Raises:
            InvalidSymbolError: If the symbol is empty.
        """
        sym = text if isinstance(text, Symbol) else Symbol(text)
        if sym.is_epsilon():
            raise InvalidSymbolError("Alphabet symbols must not be empty")
        if sym.text in self._symbols:
            return False
        self._symbols[sym.text] = sym
        self.__dict__.pop("tokenizer", None)
        logger.debug("Added symbol {!r}", sym.text)
        return True

    def set_start(self, name):
        """
        Makes the state called ``name`` the start state.

        Returns:
            bool: True once the start state is set to ``name``, whether or not
            it already was the start state.

        Raises:
            UnknownReferenceError: If there is no such state.
        """
        state = self.get_state(name)
        self._start = state.name
        logger.debug("Start state is now {!r}", state.name)
        return True

    def mark_final(self, name):
        """
        Makes the state called ``name`` a final state.

        Returns:
            bool: True if the state was not final before.

        Raises:
            UnknownReferenceError: If there is no such state.
        """
        state = self.get_state(name)
        if state.final:
            return False
        state.set_final(True)
        return True

    def unmark_final(self, name):
        """
        Makes the state called ``name`` a non-final state.

        Returns:
            bool: True if the state was final before.

        Raises:
            UnknownReferenceError: If there is no such state.
        """
        state = self.get_state(name)
        if not state.final:
            return False
        state.set_final(False)
        return True

    def add_transition(self, src, symbol, dest):
        """
        Adds the transition ``src --symbol--> dest``.

        All three references are resolved before anything is changed, so a
        failed call leaves the automaton as it was.

        Args:
            src (str): The source state name.
            symbol (Union[str, Symbol]): An alphabet symbol, or ``""`` /
                :data:`EPSILON` for an epsilon transition.
            dest (str): The destination state name.

        Returns:
            bool: True if the transition is new, False if it already existed.

        Raises:
            UnknownReferenceError: If a state or the symbol is unknown.
        """
        source = self.get_state(src)
        sym = self.get_symbol(symbol)
        destination = self.get_state(dest)
        return source.add_transition(sym, destination.name)

    def add_epsilon(self, src, dest):
        """Shortcut for ``add_transition(src, EPSILON, dest)``."""
        return self.add_transition(src, EPSILON, dest)

    # Queries

    @property
    def start(self):
        """The name of the start state, or None if it is not set."""
        return self._start

    def start_state(self):
        if self._start is None:
            return None
        return self._states[self._start]

    def states(self):
        """Returns the states in the order they were added."""
        return list(self._states.values())

    def symbols(self):
        """Returns the alphabet (without epsilon) in the order it was added."""
        return list(self._symbols.values())

    def final_states(self):
        """Returns the names of the final states."""
        return frozenset(name for name, state in self._states.items() if state.final)

    def has_state(self, name):
        return name in self._states

    def get_state(self, name):
        """
        Returns the state called ``name``.

        Raises:
            UnknownReferenceError: If there is no such state.
        """
        try:
            return self._states[name]
        except (KeyError, TypeError):
            raise UnknownReferenceError("state", name) from None

    def get_symbol(self, symbol):
        """
        Returns the alphabet symbol for ``symbol`` (a string or a
        :class:`Symbol`). The empty string and :data:`EPSILON` return
        :data:`EPSILON`.

        Raises:
            UnknownReferenceError: If the symbol is not in the alphabet.
        """
        text = symbol.text if isinstance(symbol, Symbol) else symbol
        if text == "":
            return EPSILON
        try:
            return self._symbols[text]
        except (KeyError, TypeError):
            raise UnknownReferenceError("symbol", text) from None

    def successors(self, name, symbol):
        """
        Returns the names of the states directly reachable from ``name`` on
        ``symbol``.
        """
        return self.get_state(name).successors(self.get_symbol(symbol))

    def triples(self):
        """
        Generates a ``(source name, symbol, destination name)`` triple for every
        transition, including each state's epsilon loop to itself.
        """
        for name, state in self._states.items():
            for sym, dests in state.items():
                for dest in sorted(dests):
                    yield name, sym, dest

    def closure(self, states):
        """Returns :func:`epsilon_closure` of ``states`` in this automaton."""
        return epsilon_closure(self, states)

    # Membership

    def accepts(self, value):
        """
        Checks if ``value`` is a word of the language this automaton
        recognizes.

        The string is first split into alphabet symbols. Starting from the
        epsilon closure of the start state, every symbol moves the whole set of
        active states along its transitions, and the result is expanded with
        its epsilon closure again. The string is accepted if a final state is
        active once all symbols are consumed.

        Args:
            value (str): The input string.

        Returns:
            bool: True if the string is accepted.

        Raises:
            UnmatchedInputError: If the string is not made of alphabet symbols.
            IncompleteAutomatonError: If no start state is set.
        """

        if self._start is None:
            raise IncompleteAutomatonError("The automaton has no start state")

        tokens = tokenize(value, self.tokenizer)
        active = epsilon_closure(self, (self._start,))
        logger.opt(lazy=True).trace("start -> {}", lambda: sorted(active))

        for sym in tokens:
            if not active:
                return False
            stepped = set()
            for name in active:
                stepped.update(self._states[name].successors(sym))
            active = epsilon_closure(self, stepped)
            logger.opt(lazy=True).trace(
                "{!r} -> {}", lambda: sym.text, lambda: sorted(active)
            )

        return bool(self.final_states().intersection(active))
