import pytest
from hypothesis import given
from hypothesis import strategies as st

from lox.lox_constants import keyword_hashmap
from lox.lox_errors import LexError
from lox.lox_lexer import CharacterStream, Lexer, Token, lex, significant_tokens
from lox.lox_value import Number


def types(source: str) -> list[str]:
    return [tok.type for tok in significant_tokens(lex(source))]


def test_single_char_tokens() -> None:
    code = "( ) { } , . - + ; * / ! = > <"
    expected = [
        "LEFT_PAREN",
        "RIGHT_PAREN",
        "LEFT_BRACE",
        "RIGHT_BRACE",
        "COMMA",
        "DOT",
        "MINUS",
        "PLUS",
        "SEMICOLON",
        "STAR",
        "SLASH",
        "BANG",
        "EQUAL",
        "GREATER",
        "LESS",
    ]
    assert types(code) == expected


def test_two_char_operators_match_greedily() -> None:
    assert types("!= == >= <=") == [
        "BANG_EQUAL",
        "EQUAL_EQUAL",
        "GREATER_EQUAL",
        "LESS_EQUAL",
    ]
    assert types("===") == ["EQUAL_EQUAL", "EQUAL"]
    assert types("!!=") == ["BANG", "BANG_EQUAL"]


@pytest.mark.parametrize(
    "source,last",
    [
        ("x;", "SEMICOLON"),
        ("(1)", "RIGHT_PAREN"),
        ("{}", "RIGHT_BRACE"),
        ("a =", "EQUAL"),
        ("1 <", "LESS"),
        ("!", "BANG"),
        ("print 1;", "SEMICOLON"),
    ],
)  # type: ignore[misc]
def test_operator_at_end_of_input(source: str, last: str) -> None:
    tokens = lex(source)
    assert tokens[-1].type == last
    assert tokens[-1].col == len(source)


def test_whitespace_tokens_are_emitted() -> None:
    assert [tok.type for tok in lex("a\tb\nc d")] == [
        "IDENT",
        "TAB",
        "IDENT",
        "NEWLINE",
        "IDENT",
        "SPACE",
        "IDENT",
    ]


def test_carriage_return_is_whitespace() -> None:
    assert types("print 1;\r\nprint 2;") == [
        "PRINT",
        "NUMBER",
        "SEMICOLON",
        "PRINT",
        "NUMBER",
        "SEMICOLON",
    ]


def test_significant_tokens_drops_whitespace() -> None:
    tokens = lex(" 1 \n ")
    assert len(tokens) == 5
    assert [tok.type for tok in significant_tokens(tokens)] == ["NUMBER"]


def test_line_comment_produces_no_token() -> None:
    assert [tok.type for tok in lex("1 // a comment\n2")] == [
        "NUMBER",
        "SPACE",
        "NEWLINE",
        "NUMBER",
    ]


def test_comment_at_end_of_input() -> None:
    assert types("print 1; // trailing") == ["PRINT", "NUMBER", "SEMICOLON"]


def test_slash_alone_is_division() -> None:
    assert types("4 / 2") == ["NUMBER", "SLASH", "NUMBER"]


def test_string_token() -> None:
    [tok] = lex('"hello world"')
    assert tok.type == "STRING"
    assert tok.value == "hello world"
    assert tok.literal == "hello world"
    assert tok.lexeme() == '"hello world"'


def test_string_may_span_lines() -> None:
    tokens = lex('"a\nb" x')
    assert tokens[0].value == "a\nb"
    x = tokens[-1]
    assert (x.type, x.line, x.col) == ("IDENT", 2, 4)


def test_unterminated_string_raises() -> None:
    with pytest.raises(LexError, match="Unterminated string") as e:
        lex('print "abc')
    assert (e.value.line, e.value.col) == (1, 7)


def test_integer_token() -> None:
    [tok] = lex("123")
    assert tok.type == "NUMBER"
    assert tok.value == "123"
    assert tok.literal == Number.integer(123)


def test_float_token() -> None:
    [tok] = lex("3.14")
    assert tok.value == "3.14"
    assert tok.literal == Number.float_(3.14)


def test_trailing_dot_makes_a_float() -> None:
    [tok] = lex("1.")
    assert tok.literal == Number.float_(1.0)


def test_second_decimal_point_raises() -> None:
    with pytest.raises(LexError, match="second decimal point"):
        lex("1.2.3")


def test_identifier_token() -> None:
    [tok] = lex("_my_var1")
    assert tok.type == "IDENT"
    assert tok.value == "_my_var1"


@pytest.mark.parametrize("word", sorted(keyword_hashmap))  # type: ignore[misc]
def test_keywords(word: str) -> None:
    [tok] = lex(word)
    assert tok.type == word.upper()
    assert tok.value == word


def test_keywords_are_case_sensitive() -> None:
    assert types("And PRINT") == ["IDENT", "IDENT"]


def test_keyword_prefix_is_identifier() -> None:
    assert types("orchid variable") == ["IDENT", "IDENT"]


def test_unexpected_character_raises() -> None:
    with pytest.raises(LexError, match="Unexpected character '@'") as e:
        lex("1 @ 2")
    assert (e.value.line, e.value.col) == (1, 3)


def test_line_and_column_tracking() -> None:
    tokens = significant_tokens(lex("var x = 1;\nprint x;"))
    print_tok = tokens[5]
    assert print_tok.type == "PRINT"
    assert (print_tok.line, print_tok.col) == (2, 1)
    assert (tokens[6].line, tokens[6].col) == (2, 7)


def test_token_eof() -> None:
    lexer = Lexer(CharacterStream(""))
    assert lexer.next_token().type == "EOF"
    assert lex("") == []


def test_token_equality() -> None:
    assert Token("IDENT", "x", 1, 1) == Token("IDENT", "x", 1, 1)
    assert Token("IDENT", "x", 1, 1) != Token("IDENT", "x", 1, 2)
    assert repr(Token("IDENT", "x")) == "Token(IDENT, 'x')"


def test_character_stream_past_end_raises() -> None:
    stream = CharacterStream("a")
    assert stream.next() == "a"
    assert stream.peek() == ""
    with pytest.raises(EOFError):
        stream.next()


FRAGMENTS = [
    "(", ")", "{", "}", ",", ".", "-", "+", ";", "*", "/", "!", "!=", "=",
    "==", ">", ">=", "<", "<=", "\t", "\n", "var", "x_1", "42", "3.5",
    '"str ing"', "print", "and", "nil",
]


@given(st.lists(st.sampled_from(FRAGMENTS), max_size=30))  # type: ignore[misc]
def test_lexing_is_lossless(fragments: list[str]) -> None:
    source = " ".join(fragments)
    assert "".join(tok.lexeme() for tok in lex(source)) == source


@given(
    st.from_regex(r"[a-zA-Z_][a-zA-Z0-9_]{0,10}", fullmatch=True).filter(
        lambda x: x not in keyword_hashmap
    )
)  # type: ignore[misc]
def test_identifiers_lex_as_single_token(name: str) -> None:
    [tok] = lex(name)
    assert tok.type == "IDENT"
    assert tok.value == name


@given(st.integers(min_value=0, max_value=10**15))  # type: ignore[misc]
def test_integers_lex_to_integer_numbers(n: int) -> None:
    [tok] = lex(str(n))
    assert tok.literal == Number.integer(n)
