"""
Token vocabulary for the Lox language.

Maps source lexemes to canonical token types. The lexer uses these tables for
longest-match operator recognition and keyword detection; the parser refers to
the canonical type strings only.

Exports:
    - token_hashmap: operator and punctuation lexemes to token types
    - keyword_hashmap: reserved words to token types
    - whitespace_hashmap: whitespace characters to token types
    - WHITESPACE_TOKENS: token types the parser never sees
"""

token_hashmap: dict[str, str] = {
    "(": "LEFT_PAREN",
    ")": "RIGHT_PAREN",
    "{": "LEFT_BRACE",
    "}": "RIGHT_BRACE",
    ",": "COMMA",
    ".": "DOT",
    "-": "MINUS",
    "+": "PLUS",
    ";": "SEMICOLON",
    "*": "STAR",
    "/": "SLASH",
    "!": "BANG",
    "!=": "BANG_EQUAL",
    "=": "EQUAL",
    "==": "EQUAL_EQUAL",
    ">": "GREATER",
    ">=": "GREATER_EQUAL",
    "<": "LESS",
    "<=": "LESS_EQUAL",
}

keyword_hashmap: dict[str, str] = {
    word: word.upper()
    for word in (
        "and",
        "class",
        "else",
        "false",
        "fun",
        "for",
        "if",
        "nil",
        "or",
        "print",
        "return",
        "super",
        "this",
        "true",
        "var",
        "while",
    )
}

whitespace_hashmap: dict[str, str] = {
    " ": "SPACE",
    "\t": "TAB",
    "\n": "NEWLINE",
    "\r": "CARRIAGE_RETURN",
}

WHITESPACE_TOKENS: frozenset[str] = frozenset(whitespace_hashmap.values())

__all__ = [
    "WHITESPACE_TOKENS",
    "keyword_hashmap",
    "token_hashmap",
    "whitespace_hashmap",
]
