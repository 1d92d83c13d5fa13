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
Splits raw input strings into sequences of alphabet symbols.

Symbols may be longer than one character, so an input string is cut by
repeatedly matching an alphabet symbol against the front of the remaining
text. When the alphabet is not prefix-free (one symbol is a prefix of
another) more than one symbol can match at the same position; the match
policy decides which one is taken:

* ``"longest"`` (the default) takes the longest matching symbol.
* ``"shortest"`` takes the shortest matching symbol.

Symbol texts are unique within an alphabet, so either policy always picks
exactly one candidate. The tokenizer never backtracks: if the chosen symbol
leaves a remainder that cannot be matched, :class:`UnmatchedInputError` is
raised even when a different split would have succeeded.
"""

from loguru import logger

from reglang.analysis.acore import Token
from reglang.automata.symbols import InvalidSymbolError, Symbol

LONGEST = "longest"
SHORTEST = "shortest"
DEFAULT_POLICY = LONGEST

_policies = {
    LONGEST: lambda sym: (-len(sym.text), sym.text),
    SHORTEST: lambda sym: (len(sym.text), sym.text),
}


def check_policy(policy):
    """
    Returns ``policy`` if it names a known match policy.

    Raises:
        ValueError: If the policy is unknown.
    """
    if policy not in _policies:
        raise ValueError(f"Unknown match policy {policy!r}")
    return policy


# Exceptions


class UnmatchedInputError(ValueError):
    """
    Raised when no alphabet symbol is a prefix of the remaining input.

    Attributes:
        position (int): The character offset at which matching failed.
        remainder (str): The unmatched rest of the input.
    """

    def __init__(self, position, remainder):
        self.position = position
        self.remainder = remainder
        super().__init__(
            f"No symbol of the alphabet matches {remainder!r} at position {position}"
        )


# Tokenizers


class SymbolTokenizer:
    """
    Breaks text into alphabet symbols by prefix matching.

    Example:
    >>> tk = SymbolTokenizer(["a", "ab", "c"])
    >>> [t.text for t in tk("abca")]
    ['ab', 'c', 'a']

    Args:
        alphabet (Iterable[Union[str, Symbol]]): The symbols to match. Strings
            are wrapped in :class:`Symbol` objects.
        policy (str): ``"longest"`` or ``"shortest"``; see the module
            documentation.

    Raises:
        InvalidSymbolError: If the alphabet contains an empty symbol, which
            would match without consuming input.
        ValueError: If the policy name is unknown.
    """

    def __init__(self, alphabet, policy=DEFAULT_POLICY):
        check_policy(policy)

        symbols = set()
        for sym in alphabet:
            if not isinstance(sym, Symbol):
                sym = Symbol(sym)
            if sym.is_epsilon():
                raise InvalidSymbolError("Alphabet symbols must not be empty")
            symbols.add(sym)

        self.policy = policy
        # Candidates are grouped by first character and kept in policy order,
        # so the first candidate that matches is the one the policy selects
        self._candidates = {}
        for sym in sorted(symbols, key=_policies[policy]):
            self._candidates.setdefault(sym.text[0], []).append(sym)

    def __eq__(self, other):
        return (
            self.__class__ is other.__class__
            and self.policy == other.policy
            and self._candidates == other._candidates
        )

    def __repr__(self):
        return f"{self.__class__.__name__}({self.alphabet()!r}, policy={self.policy!r})"

    def alphabet(self):
        """
        Returns the symbols this tokenizer matches, in policy order per
        starting character.
        """
        return [sym for group in self._candidates.values() for sym in group]

    def match(self, value, start=0):
        """
        Returns the symbol selected by the policy at offset ``start`` of
        ``value``, or None if no symbol matches there.
        """
        if start >= len(value):
            return None
        for sym in self._candidates.get(value[start], ()):
            if value.startswith(sym.text, start):
                return sym
        return None

    def __call__(self, value, positions=False, chars=False, start_pos=0, start_char=0):
        """
        Tokenize the input value.

        Args:
            value (str): The string to tokenize.
            positions (bool): Whether to record token positions in the token.
            chars (bool): Whether to record character offsets in the token.
            start_pos (int): The position number of the first token.
            start_char (int): The offset of the first character of the first token.

        Yields:
            Token: The generated tokens.

        Raises:
            UnmatchedInputError: When no symbol matches the rest of the input.
        """

        assert isinstance(value, str), f"{repr(value)} is not a string"

        t = Token(positions, chars)
        offset = 0
        pos = start_pos
        while offset < len(value):
            sym = self.match(value, offset)
            if sym is None:
                logger.debug("Unmatched input at {}: {!r}", offset, value[offset:])
                raise UnmatchedInputError(start_char + offset, value[offset:])

            t.text = sym.text
            t.symbol = sym
            if positions:
                t.pos = pos
                pos += 1
            if chars:
                t.startchar = start_char + offset
                t.endchar = start_char + offset + len(sym.text)
            yield t

            offset += len(sym.text)


def tokenize(value, alphabet, policy=DEFAULT_POLICY):
    """
    Splits ``value`` into a list of symbols drawn from ``alphabet``.

    Args:
        value (str): The input string.
        alphabet (Union[SymbolTokenizer, Iterable[Union[str, Symbol]]]): The
            symbols to match, or an already built tokenizer.
        policy (str): The match policy, ignored if ``alphabet`` is a
            tokenizer.

    Returns:
        list: The matched :class:`Symbol` objects, in input order.

    Raises:
        UnmatchedInputError: When part of the input matches no symbol.
    """

    if isinstance(alphabet, SymbolTokenizer):
        tokenizer = alphabet
    else:
        tokenizer = SymbolTokenizer(alphabet, policy)
    return [t.symbol for t in tokenizer(value)]
