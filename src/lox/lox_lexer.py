"""
Lexical analyzer for the Lox language.

This module converts raw source text into a flat, ordered list of tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, raw value, literal and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Functions:
    lex(source): Tokenize a whole source string, whitespace tokens included.
    significant_tokens(tokens): Drop the whitespace tokens before parsing.

Features:
    - Emits explicit SPACE / TAB / NEWLINE tokens so positions survive until parsing
    - Skips `//` line comments without producing a token
    - Longest-match recognition of two-character operators (`==` before `=`)
    - Recognizes identifiers, keywords, integer and float numbers, and strings

Raises:
    LexError: On an unterminated string, a number with two decimal points, or
        a character that starts no token. Scanning stops at the first failure.

Example:
    >>> [tok.type for tok in significant_tokens(lex("print 1;"))]
    ['PRINT', 'NUMBER', 'SEMICOLON']
"""

from typing import Any

from lox.lox_constants import (
    WHITESPACE_TOKENS,
    keyword_hashmap,
    token_hashmap,
    whitespace_hashmap,
)
from lox.lox_errors import LexError
from lox.lox_value import Number


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_ident_start(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_ident_part(ch: str) -> bool:
    return _is_ident_start(ch) or _is_digit(ch)


class CharacterStream:
    """Source text with a read position and 1-based line/column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """Consumes one character. Raises EOFError past the end."""
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Lox language.

    Attributes:
        type (str): The canonical token type (e.g. 'IDENT', 'NUMBER', 'EOF').
        value (str): The raw lexeme; for strings, the text between the quotes.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
        literal (Number | str | None): Parsed payload of NUMBER and STRING tokens.
    """

    def __init__(
        self,
        type_: str,
        value: str,
        line: int = 0,
        col: int = 0,
        literal: Number | str | None = None,
    ):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col
        self.literal = literal

    def lexeme(self) -> str:
        """Returns the token as it appeared in source."""
        if self.type == "STRING":
            return f'"{self.value}"'
        if self.type == "EOF":
            return ""
        return self.value

    def is_whitespace(self) -> bool:
        return self.type in WHITESPACE_TOKENS

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r})"

    def __str__(self) -> str:
        return self.lexeme() if self.type != "EOF" else "end of input"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class Lexer:
    """Lexical analyzer for the Lox language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_comment(self) -> None:
        """Advances through the stream until (not including) the end of the line."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest operator from the current position."""
        line, col = self.stream.line, self.stream.column
        two = self.peek() + self.peek(1)
        if len(two) == 2 and two in token_hashmap:
            self.advance()
            self.advance()
            return Token(token_hashmap[two], two, line, col)
        one = self.peek()
        if one in token_hashmap:
            self.advance()
            return Token(token_hashmap[one], one, line, col)
        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns an EOF token once the source is exhausted.

        Raises:
            LexError: If a malformed token is encountered.
        """
        # Comments produce nothing; loop until something does
        while self.peek() == "/" and self.peek(1) == "/":
            self.skip_comment()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token("EOF", "", line, col)

        ch = self.peek()

        # 1. Whitespace
        if ch in whitespace_hashmap:
            self.advance()
            return Token(whitespace_hashmap[ch], ch, line, col)

        # 2. Identifier or keyword
        if _is_ident_start(ch):
            ident = ""
            while not self.stream.end_of_file() and _is_ident_part(self.peek()):
                ident += self.advance()
            if ident in keyword_hashmap:
                return Token(keyword_hashmap[ident], ident, line, col)
            return Token("IDENT", ident, line, col)

        # 3. Integer or float
        if _is_digit(ch):
            num = ""
            has_dot = False
            while not self.stream.end_of_file() and (
                _is_digit(self.peek()) or self.peek() == "."
            ):
                if self.peek() == ".":
                    if has_dot:
                        raise LexError(
                            f"Malformed number '{num}.': second decimal point",
                            self.stream.line,
                            self.stream.column,
                        )
                    has_dot = True
                num += self.advance()
            return Token("NUMBER", num, line, col, Number.from_lexeme(num))

        # 4. String
        if ch == '"':
            self.advance()
            val = ""
            while not self.stream.end_of_file() and self.peek() != '"':
                val += self.advance()
            if self.stream.end_of_file():
                raise LexError("Unterminated string", line, col)
            self.advance()
            return Token("STRING", val, line, col, val)

        # 5. Compound or symbolic operator
        token = self.match_operator()
        if token:
            return token

        raise LexError(f"Unexpected character {ch!r}", line, col)

    def tokenize(self) -> list[Token]:
        """Drains the stream into a list of tokens, excluding the final EOF."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            if tok.type == "EOF":
                return tokens
            tokens.append(tok)


def lex(source: str) -> list[Token]:
    """Tokenize `source`, whitespace tokens included."""
    return Lexer(CharacterStream(source, 0, 1, 1)).tokenize()


def significant_tokens(tokens: list[Token]) -> list[Token]:
    """Returns `tokens` without whitespace markers, ready for the parser."""
    return [tok for tok in tokens if not tok.is_whitespace()]


__all__ = [
    "CharacterStream",
    "Lexer",
    "Token",
    "lex",
    "significant_tokens",
    "token_hashmap",
]
