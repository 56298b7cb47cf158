import pytest

import calc_parser as cp


def kinds(text):
    return [tok[0] for tok in cp.lex(text)]


def test_operators_and_parens():
    assert kinds("+ - * / ( )") == [
        cp.PLUS, cp.MINUS, cp.MULTIPLY, cp.DIVIDE, cp.LPAREN, cp.RPAREN, cp.END,
    ]


def test_number_payload_and_offset():
    toks = list(cp.lex("  12.5+.5"))
    assert toks[0] == (cp.NUMBER, 12.5, 2)
    assert toks[1] == (cp.PLUS, None, 6)
    assert toks[2] == (cp.NUMBER, 0.5, 7)
    assert toks[3] == (cp.END, None, 9)


def test_token_properties():
    tok = next(cp.lex("7"))
    assert tok.kind == cp.NUMBER
    assert tok.value == 7.0
    assert tok.offset == 0


def test_empty_and_blank_input_is_just_end():
    assert kinds("") == [cp.END]
    assert kinds(" \t\r\n") == [cp.END]


def test_end_is_idempotent():
    tokenizer = cp.Tokenizer("1 ")
    assert tokenizer.next()[0] == cp.NUMBER
    for _ in range(3):
        assert tokenizer.next() == (cp.END, None, 2)
    assert tokenizer.pos == 2


def test_number_scan_is_greedy_without_separator():
    # "1 2" is two numbers, "1(2" splits on the paren
    assert kinds("1 2") == [cp.NUMBER, cp.NUMBER, cp.END]
    assert kinds("1(2") == [cp.NUMBER, cp.LPAREN, cp.NUMBER, cp.END]


def test_trailing_dot_is_a_valid_literal():
    assert next(cp.lex("3."))[1] == 3.0


@pytest.mark.parametrize("literal", [".", "1.2.3", "..5"])
def test_malformed_number(literal):
    with pytest.raises(cp.NumberFormatError) as ei:
        list(cp.lex("1 + " + literal))
    assert ei.value.literal == literal
    assert ei.value.offset == 4


@pytest.mark.parametrize("text,char,offset", [
    ("2 & 3", "&", 2),
    ("x", "x", 0),
    ("1e5", "e", 1),
    ("٣", "٣", 0),  # non-ASCII digit
])
def test_invalid_character(text, char, offset):
    with pytest.raises(cp.InvalidCharacter) as ei:
        list(cp.lex(text))
    assert ei.value.char == char
    assert ei.value.offset == offset
    assert f"offset {offset}" in str(ei.value)


def test_tokenizer_errors_are_syntax_errors():
    with pytest.raises(SyntaxError):
        list(cp.lex("$"))
