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
Alphabet symbols and the epsilon marker.
"""


# Exceptions


class AutomatonError(Exception):
    """
    Base class for errors raised while building or querying an automaton.

    Attributes:
        message -- explanation of the error
    """

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class InvalidSymbolError(AutomatonError, ValueError):
    """
    Raised when an empty string is used as an alphabet symbol. An empty
    symbol matches without consuming any input, so it can only stand for
    epsilon.
    """

    pass


# Symbols


class Symbol:
    """
    An immutable alphabet token. A symbol may be several characters long.

    Two symbols are equal if their text is equal, so ``Symbol("ab")`` created
    in two places denotes the same symbol.

    Example:
        >>> Symbol("if") == Symbol("if")
        True
        >>> Symbol("") == EPSILON
        True
    """

    __slots__ = ("_text",)

    def __init__(self, text):
        if not isinstance(text, str):
            raise TypeError(f"Symbol text must be a string, not {text!r}")
        object.__setattr__(self, "_text", text)

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} objects are immutable")

    @property
    def text(self):
        return self._text

    def is_epsilon(self):
        """Returns True if this is the empty (epsilon) symbol."""
        return not self._text

    def __eq__(self, other):
        return other.__class__ is self.__class__ and other._text == self._text

    def __ne__(self, other):
        return not self.__eq__(other)

    def __lt__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self._text < other._text

    def __hash__(self):
        return hash(self._text)

    def __repr__(self):
        if self.is_epsilon():
            return "<EPSILON>"
        return f"{self.__class__.__name__}({self._text!r})"

    def __str__(self):
        return self._text

    def __reduce__(self):
        return (Symbol, (self._text,))


EPSILON = Symbol("")
