"""The lexer for stack-effect signatures and small programs."""

import dataclasses
import re
import sys
from typing import Iterator, List, Optional, Tuple

from catinfer.location import Location
from catinfer.typecheck.errors import LexicalError


TokenTuple = Tuple[str, str, Location, Location]

# Order matters: the arrows must be tried before NAME and NUMBER swallow
# their first character.
_token_patterns = [
    ('WHITESPACE', r'[ \t\r]+'),
    ('NEWLINE', r'\n'),
    ('COMMENT', r'//[^\n]*'),
    ('ARROW', r'->'),
    ('EFFECT_ARROW', r'~>'),
    ('LPAR', r'\('),
    ('RPAR', r'\)'),
    ('LSQB', r'\['),
    ('RSQB', r'\]'),
    ('EQUAL', r'='),
    ('STRING', r'"(?:[^"\\\n]|\\.)*"'),
    ('CHAR', r"'(?:[^'\\\n]|\\.)'"),
    ('VARIABLE', r"'[A-Za-z_][A-Za-z0-9_]*"),
    ('NUMBER', r'-?[0-9]+(?:\.[0-9]+)?(?![^\s()\[\]])'),
    ('NAME', r'''(?:[^\s()\[\]='"~-]|-(?!>)|~(?!>))+'''),
]
_token_regex = re.compile(
    '|'.join(
        '(?P<{}>{})'.format(name, regex) for name, regex in _token_patterns
    )
)


@dataclasses.dataclass
class Token:
    """Class to represent tokens.

    self.type - token type, as string.
    self.value - token value, as string.
    self.start - starting position of token in source, as (line, col)
    self.end - ending position of token in source, as (line, col)
    """

    type: str = ''
    value: str = ''
    start: Location = (1, 0)
    end: Location = (1, 0)


class Lexer:
    """Lexes the input given at initialization.

    Use token() to get the next token.
    """

    def input(self, data: str) -> None:
        """Initialize the Lexer object with the data to tokenize."""
        self.data = data
        self.lineno = 1
        self.lexpos = 0
        self._line_start = 0
        self._done = False

    def token(self) -> Optional[Token]:
        """Return the next token as a Token object."""
        if self._done:
            return None
        while self.lexpos < len(self.data):
            match = _token_regex.match(self.data, self.lexpos)
            start = self._location(self.lexpos)
            if match is None:
                raise LexicalError(self.data[self.lexpos], start)
            type = match.lastgroup
            assert type is not None
            self.lexpos = match.end()
            end = self._location(self.lexpos)
            if type == 'NEWLINE':
                self.lineno += 1
                self._line_start = self.lexpos
                continue
            if type in {'WHITESPACE', 'COMMENT'}:
                continue
            return Token(type, match.group(), start, end)
        self._done = True
        location = self._location(self.lexpos)
        return Token('ENDMARKER', '', location, location)

    def _location(self, position: int) -> Location:
        return self.lineno, position - self._line_start


def tokenize(code: str) -> List[Token]:
    lexer = Lexer()
    lexer.input(code)
    return list(_tokens(lexer))


def _tokens(lexer: Lexer) -> Iterator[Token]:
    token = lexer.token()
    while token is not None:
        yield token
        token = lexer.token()


def to_tokens(*tok_tuples: TokenTuple) -> List[Token]:
    return [Token(*tuple) for tuple in tok_tuples]


if __name__ == '__main__':
    for token in tokenize(sys.stdin.read()):
        print(repr(token))
