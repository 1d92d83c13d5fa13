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
Token objects produced by the symbol tokenizer.
"""


# Token object
class Token:
    """
    Represents a single alphabet symbol matched in an input string.

    Because object instantiation in Python is slow, tokenizers create ONE
    SINGLE Token object and YIELD IT OVER AND OVER, changing the attributes
    each time.

    This means consumers of tokens must never hold onto the token object
    between loop iterations or convert the token generator into a list.
    Save the attributes between iterations instead::

        symbols = [t.symbol for t in tokenizer(text)]

    ...or call token.copy() to get a copy of the token object.
    """

    def __init__(self, positions=False, chars=False, **kwargs):
        """
        Initializes a Token object.

        :param positions: Whether tokens should have the token position in the
            'pos' attribute.
        :param chars: Whether tokens should have character offsets in the
            'startchar' and 'endchar' attributes.
        :param kwargs: Additional keyword arguments to be stored as attributes
            of the Token object.
        """

        self.positions = positions
        self.chars = chars
        self.text = ""
        self.symbol = None
        self.__dict__.update(kwargs)

    def __repr__(self):
        parms = ", ".join(f"{name}={value!r}" for name, value in self.__dict__.items())
        return f"{self.__class__.__name__}({parms})"

    def copy(self):
        """
        Creates a copy of the Token object.

        :return: A copy of the Token object.
        """

        # This is faster than using the copy module
        return Token(**self.__dict__)
