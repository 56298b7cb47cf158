# calc_parser.py
# Hand-rolled arithmetic tokenizer and single-pass evaluator
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT, EVALUATED IN PLACE
# =============================================================================
#
# Grammar as implemented:
#
#     expression := term ( ('+' | '-' | '*' | '/') expression )?
#     term       := NUMBER | '(' expression ')' | '-' NUMBER
#
# All four binary operators share one grammar level and the right operand of
# each is a full expression, so chains associate to the right:
# "2 - 3 - 4" is 2 - (3 - 4) = 3 and "8 - 2 * 3" is 8 - (2 * 3) = 2.
# This matches the calculator this module replaces and is kept as-is.
#
# Each rule returns a float directly; no syntax tree is built. The parser
# holds exactly one token of lookahead and pulls the next one from the
# tokenizer on every successful consume [craftinginterpreters.com, Parsing
# Expressions].
#
# Division follows IEEE 754 (x/0 is +-inf, 0/0 is NaN) instead of raising
# ZeroDivisionError [IEEE 754-2019, section 7.3].
#
# An operator chain is folded from the right in a loop, so only parentheses
# recurse. The depth guard counts parenthesis nesting and defaults to 256,
# well under CPython's default recursion limit (two frames per level). A
# RecursionError from a larger max_depth surfaces as DepthLimitExceeded.
#
# Input after the first complete expression is ignored, but the lookahead
# fetch still tokenizes it: "2+3 4" is 5 while "2+3 garbage" raises
# InvalidCharacter at the "g". Pass strict=True to reject trailing tokens.
#
# =============================================================================

import argparse
import math
import re
import sys
from typing import Iterator, List, Optional, Tuple

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 256    # parenthesis nesting; operator chains do not count

NUMBER   = "NUMBER"
PLUS     = "PLUS"
MINUS    = "MINUS"
MULTIPLY = "MULTIPLY"
DIVIDE   = "DIVIDE"
LPAREN   = "LPAREN"
RPAREN   = "RPAREN"
END      = "END"

_PUNCTUATION = {
    "+": PLUS,
    "-": MINUS,
    "*": MULTIPLY,
    "/": DIVIDE,
    "(": LPAREN,
    ")": RPAREN,
}

# ---------------------------------------------------------------------------
# REGEX BLUEPRINT
# ---------------------------------------------------------------------------
# ASCII only: str.isdigit() and \s would also accept Unicode digits and spaces.
_WHITESPACE_RE = re.compile(r"[ \t\n\v\f\r]*")
_NUMBER_RE     = re.compile(r"[0-9.]+")
_NUMBER_START  = "0123456789."

# ---------------------------------------------------------------------------
# ERROR TAXONOMY
# ---------------------------------------------------------------------------
class CalcError(SyntaxError):
    """Base class for every failure raised by evaluate()."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class InvalidCharacter(CalcError):
    def __init__(self, char: str, offset: int):
        super().__init__(f"invalid character {char!r} at offset {offset}")
        self.char = char
        self.offset = offset


class NumberFormatError(CalcError):
    """The scanned run of digits and dots is not a valid float, e.g. '.' or '1.2.3'."""

    def __init__(self, literal: str, offset: int, reason: str = "malformed number"):
        super().__init__(f"{reason} '{literal}' at offset {offset}")
        self.literal = literal
        self.offset = offset


class UnexpectedToken(CalcError):
    def __init__(self, expected: str, actual: "Token"):
        kind, _, pos = actual
        super().__init__(f"unexpected token {kind} at offset {pos} - expected {expected}")
        self.expected = expected
        self.actual = actual


class InvalidSyntax(CalcError):
    """A term was expected but the lookahead cannot start one."""

    def __init__(self, token: "Token"):
        kind, _, pos = token
        super().__init__(f"invalid syntax at offset {pos} - term expected, got {kind}")
        self.token = token


class DepthLimitExceeded(CalcError):
    def __init__(self, limit: int):
        super().__init__(f"depth limit exceeded ({limit})")
        self.limit = limit

# ---------------------------------------------------------------------------
# TOKEN RECORD
# ---------------------------------------------------------------------------
class Token(Tuple[str, Optional[float], int]):
    """
    Immutable token record: (kind, value, absolute_offset).

    value is the parsed float for NUMBER tokens and None for everything else.
    END tokens carry the length of the source text as their offset.
    """

    @property
    def kind(self) -> str:
        return self[0]

    @property
    def value(self) -> Optional[float]:
        return self[1]

    @property
    def offset(self) -> int:
        return self[2]

# ---------------------------------------------------------------------------
# TOKENIZER
# ---------------------------------------------------------------------------
class Tokenizer:
    """
    Pull-based tokenizer: each call to next() scans exactly one token.

    The cursor only moves forward and stops at len(text); once the input is
    exhausted every further call returns another END token.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def next(self) -> Token:
        text = self.text
        self.pos = _WHITESPACE_RE.match(text, self.pos).end()
        start = self.pos

        if start >= len(text):
            return Token((END, None, len(text)))

        ch = text[start]
        if ch in _NUMBER_START:
            self.pos = _NUMBER_RE.match(text, start).end()
            literal = text[start:self.pos]
            try:
                value = float(literal)
            except ValueError:
                raise NumberFormatError(literal, start) from None
            if math.isinf(value):
                raise NumberFormatError(literal, start, "number out of range")
            return Token((NUMBER, value, start))

        kind = _PUNCTUATION.get(ch)
        if kind is None:
            raise InvalidCharacter(ch, start)
        self.pos += 1
        return Token((kind, None, start))


def lex(text: str) -> Iterator[Token]:
    """Yield every token of text, ending with a single END token."""
    tokenizer = Tokenizer(text)
    while True:
        tok = tokenizer.next()
        yield tok
        if tok[0] == END:
            return

# ---------------------------------------------------------------------------
# ARITHMETIC
# ---------------------------------------------------------------------------
def _divide(left: float, right: float) -> float:
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


_BINARY_OPS = {
    PLUS:     lambda a, b: a + b,
    MINUS:    lambda a, b: a - b,
    MULTIPLY: lambda a, b: a * b,
    DIVIDE:   _divide,
}

# ---------------------------------------------------------------------------
# PARSER / EVALUATOR
# ---------------------------------------------------------------------------
class Parser:
    """
    Recursive-descent parser that evaluates while it parses.

    current always holds the token immediately after everything consumed so
    far; it is primed from the tokenizer on construction.
    """

    def __init__(self, tokenizer: Tokenizer, *, max_depth: int = DEPTH_LIMIT_DEFAULT):
        self.tokenizer = tokenizer
        self.max_depth = max_depth
        self.current = tokenizer.next()

    def parse(self) -> float:
        """Evaluate one expression. Tokens left after it are not examined."""
        try:
            return self._expression(1)
        except RecursionError:
            raise DepthLimitExceeded(self.max_depth) from None

    def parse_all(self) -> float:
        """Evaluate one expression and require the input to end there."""
        result = self.parse()
        if self.current[0] != END:
            raise UnexpectedToken(END, self.current)
        return result

    def _consume(self, kind: str) -> Token:
        tok = self.current
        if tok[0] != kind:
            raise UnexpectedToken(kind, tok)
        self.current = self.tokenizer.next()
        return tok

    def _expression(self, depth: int) -> float:
        if depth > self.max_depth:
            raise DepthLimitExceeded(self.max_depth)
        operands = [self._term(depth)]
        ops = []
        while self.current[0] in _BINARY_OPS:
            ops.append(_BINARY_OPS[self._consume(self.current[0])[0]])
            operands.append(self._term(depth))
        # a - b - c is a - (b - c)
        result = operands.pop()
        while ops:
            result = ops.pop()(operands.pop(), result)
        return result

    def _term(self, depth: int) -> float:
        kind = self.current[0]
        if kind == NUMBER:
            return self._consume(NUMBER)[1]
        if kind == LPAREN:
            self._consume(LPAREN)
            result = self._expression(depth + 1)
            self._consume(RPAREN)
            return result
        if kind == MINUS:
            # Negation binds to a single literal only: "-(1)" and "--1" fail here.
            self._consume(MINUS)
            return -self._consume(NUMBER)[1]
        raise InvalidSyntax(self.current)

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def evaluate(text: str, *, max_depth: int = DEPTH_LIMIT_DEFAULT, strict: bool = False) -> float:
    """
    Evaluate an arithmetic expression and return its value as a float.

    By default anything after the first complete expression is ignored, so
    "2+3 4" evaluates to 5. The lookahead fetch still tokenizes the character
    that follows the expression, which means "2+3 x" raises InvalidCharacter.
    With strict=True the expression must be followed by the end of input.

    Raises a CalcError subclass on malformed input.
    """
    parser = Parser(Tokenizer(text), max_depth=max_depth)
    if strict:
        return parser.parse_all()
    return parser.parse()

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _read_source(args) -> str:
    if args.expr is not None:
        return args.expr
    if args.file is not None:
        with open(args.file, "r", encoding="utf-8") as fh:
            return fh.read()
    if sys.stdin.isatty():
        print("Enter an expression: ", end="", file=sys.stderr, flush=True)
    return sys.stdin.readline().rstrip("\r\n")


def _cli(argv: List[str]) -> int:
    """
    Command-line interface for one-shot evaluation.

    Exit codes: 0 on success, 1 on a CalcError, 2 when the source file cannot
    be read (argparse also uses 2 for usage errors).
    """
    ap = argparse.ArgumentParser(description="Evaluate an arithmetic expression")
    ap.add_argument("file", nargs="?", help="file holding the expression (default: one line of stdin)")
    ap.add_argument("-e", "--expr", help="expression given inline; overrides FILE")
    ap.add_argument("--debug", action="store_true", help="dump token stream and exit")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    ap.add_argument("--strict", action="store_true", help="reject input left after the expression")
    args = ap.parse_args(argv)

    try:
        text = _read_source(args)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        if args.debug:
            for tok in lex(text):
                print(tok)
            return 0
        result = evaluate(text, max_depth=args.max_depth, strict=args.strict)
    except CalcError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"{result:g}")
    return 0


def main() -> int:
    return _cli(sys.argv[1:])

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
