"""Lexical analysis for the lam language. Converts source text into tokens, produced one at a time.

Tokens can be loosely defined as follows:

```
<number>     ::= ["-"] <digit>+             ; arbitrary precision integer
<identifier> ::= <letter> (<letter> | <digit>)*
<bool>       ::= "true" | "false"           ; identifiers that are reclassified as bools
<paren>      ::= "(" | ")"
```

Numbers, identifiers and bools must be followed by a boundary character (whitespace, ")" or the end of input).
Anything else produces an error token, after which the lexer should not be relied upon.
"""

from dataclasses import dataclass, field
from enum import Enum

from laminterp.lang.error import ParseError


class TokenType(Enum):
    """Kinds of tokens. The values are the names used in error messages."""
    ERROR = "error"
    EOF = "EOF"
    NUMBER = "number"
    BOOL = "bool"
    IDENTIFIER = "identifier"
    LEFT_PAREN = "'('"
    RIGHT_PAREN = "')'"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Token:
    """Token returned from the lexer. For error tokens, val holds the error message. start and end delimit the source
    text the token was scanned from; they are not compared.
    """
    type: TokenType
    val: str
    start: int = field(default=0, compare=False)
    end: int = field(default=0, compare=False)

    def error(self):
        """The ParseError described by an error token."""
        return ParseError(self.val, self.start, self.end)

    def __str__(self):
        if self.type is TokenType.EOF:
            return "EOF"
        return f"<{self.type.name}:'{self.val}'>"


SPACES = " \t\r\n"


def is_space(char):
    return char != "" and char in SPACES


def is_letter(char):
    return "a" <= char <= "z" or "A" <= char <= "Z"


def is_digit(char):
    return "0" <= char <= "9"


def is_boundary(char):
    """Whether char terminates a run of letters or digits ("" is the end of input). Analogous to '\\b' in regex."""
    return char == "" or char == ")" or is_space(char)


class Lexer:
    """Lexer state over a single source string. Call next_token repeatedly, or iterate over the lexer."""

    def __init__(self, source):
        self.source = source
        self.pos = 0    # current position in source
        self.start = 0  # start of current token in source

    def _peek(self):
        """Next character, or "" at the end of input."""
        return self.source[self.pos:self.pos + 1]

    def _next(self):
        char = self._peek()
        self.pos += len(char)
        return char

    def _val(self):
        """Characters accumulated for the current token so far."""
        return self.source[self.start:self.pos]

    def _emit(self, token_type):
        token = Token(token_type, self._val(), self.start, self.pos)
        self.start = self.pos
        return token

    def _error(self, msg):
        token = Token(TokenType.ERROR, msg, self.start, self.pos)
        self.start = self.pos
        return token

    def _error_run(self, kind):
        """Error token for a malformed number/identifier, covering the offending character and the letters/digits
        following it.
        """
        if not is_boundary(self._peek()):
            self._next()
        while is_letter(self._peek()) or is_digit(self._peek()):
            self._next()
        return self._error(f"bad {kind} syntax: '{self._val()}'")

    def _skip_spaces(self):
        while is_space(self._peek()):
            self._next()
        self.start = self.pos

    def _lex_number(self):
        """Scans a number. Precondition: the next character is either a minus sign or a digit."""
        if self._peek() == "-":
            self._next()
        if not is_digit(self._peek()):
            return self._error_run("number")

        while is_digit(self._peek()):
            self._next()
        if not is_boundary(self._peek()):
            return self._error_run("number")

        return self._emit(TokenType.NUMBER)

    def _lex_identifier(self):
        """Scans an identifier, or a bool (which is a special case of identifier). Precondition: the next character is
        a letter.
        """
        while is_letter(self._peek()) or is_digit(self._peek()):
            self._next()
        if not is_boundary(self._peek()):
            return self._error_run("identifier")

        if self._val() in ("true", "false"):
            return self._emit(TokenType.BOOL)
        return self._emit(TokenType.IDENTIFIER)

    def next_token(self):
        """Returns the next token. Once the end of input is reached, an EOF token is returned on every call."""
        self._skip_spaces()

        char = self._peek()
        if char == "-" or is_digit(char):
            return self._lex_number()
        elif is_letter(char):
            return self._lex_identifier()
        elif char == "(":
            self._next()
            return self._emit(TokenType.LEFT_PAREN)
        elif char == ")":
            self._next()
            return self._emit(TokenType.RIGHT_PAREN)
        elif char == "":
            return self._emit(TokenType.EOF)

        self._next()
        return self._error(f"illegal character: '{char}'")

    def __iter__(self):
        """Yields tokens up to and including the first error or EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.type in (TokenType.ERROR, TokenType.EOF):
                return


def tokenize(source):
    """List of all tokens in source, ending with an error or EOF token."""
    return list(Lexer(source))
