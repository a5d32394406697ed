# Core of the arithmetic calculator: tokenizer, shunting-yard converter and postfix evaluator.
#
# The pipeline is three pure functions that each consume the previous stage's output:
#
#     text --tokenize--> infix tokens --to_postfix--> postfix tokens --evaluate--> float
#
# Only tokenization can reject input text. Conversion never fails. Evaluation raises EvalError
# for postfix sequences that do not reduce to a single value.
#
# Nothing here keeps state between calls; configuration (operand order) is passed in.

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Union, assert_never

logger = logging.getLogger(__name__)

U32_MAX = 2**32 - 1

CONVENTIONAL = "conventional"
REVERSED = "reversed"
OPERAND_ORDERS = (CONVENTIONAL, REVERSED)

# --------------------------
# Exceptions
# --------------------------

class CalcError(Exception):
    """Base class for all calculator errors."""
    pass

class ParseError(CalcError):
    """Raised when the input text cannot be tokenized."""

    def __init__(self, message: str, position: int):
        super().__init__(message)
        self.position = position

class BadToken(ParseError):
    """Raised for a character that is not a digit, operator, bracket or whitespace."""

    def __init__(self, char: str, position: int):
        super().__init__(f"unexpected character {char!r} at position {position}", position)
        self.char = char

class MismatchedParens(ParseError):
    """Raised for a ')' with no matching '(' or a '(' that is never closed."""

    def __init__(self, position: int):
        super().__init__(f"mismatched parenthesis at position {position}", position)

class NumberOverflow(ParseError):
    """Raised when an integer literal does not fit in an unsigned 32-bit value."""

    def __init__(self, digits: str, position: int):
        super().__init__(f"integer literal {digits} exceeds {U32_MAX} at position {position}", position)
        self.digits = digits

class EvalError(CalcError):
    """Raised when a postfix sequence does not reduce to a single value."""
    pass

class InsufficientOperands(EvalError):
    def __init__(self, operator: "Operator", available: int):
        super().__init__(f"operator '{operator.value}' needs 2 operands, found {available}")
        self.operator = operator

class LeftoverOperands(EvalError):
    def __init__(self, count: int):
        super().__init__(f"expression left {count} values on the stack, expected 1")
        self.count = count

# --------------------------
# Tokens
# --------------------------

class Operator(enum.Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'

# Higher number = binds tighter. Add/Sub and Mul/Div share a tier, which together with the
# ">=" comparison in to_postfix gives left associativity.
PRECEDENCE: Dict[Operator, int] = {
    Operator.ADD: 1,
    Operator.SUB: 1,
    Operator.MUL: 2,
    Operator.DIV: 2,
}

def precedence(op: Operator) -> int:
    """Return the precedence tier of an operator."""
    return PRECEDENCE[op]

@dataclass(frozen=True)
class Number:
    value: int

    def __str__(self) -> str:
        return str(self.value)

@dataclass(frozen=True)
class Op:
    op: Operator

    def __str__(self) -> str:
        return self.op.value

@dataclass(frozen=True)
class Bracket:
    which: str  # '(' or ')'

    def __str__(self) -> str:
        return self.which

    @property
    def is_open(self) -> bool:
        return self.which == '('

Token = Union[Number, Op, Bracket]

OPEN = Bracket('(')
CLOSE = Bracket(')')

_OPERATOR_CHARS: Dict[str, Operator] = {op.value: op for op in Operator}
_IGNORED_CHARS = frozenset(' \n\t\r')

def format_tokens(tokens: List[Token]) -> str:
    """Render a token sequence as space separated text, e.g. '3 4 2 * +'."""
    return ' '.join(str(t) for t in tokens)

# --------------------------
# Tokenizer
# --------------------------

def tokenize(text: str) -> List[Token]:
    """Convert raw text into a list of tokens in source order.

    Consecutive digits accumulate into a single Number, including across ignored
    whitespace: "1 2" is the literal 12.

    Raises:
        BadToken: for any character outside digits, '+-*/', '()' and whitespace.
        MismatchedParens: for an unmatched ')' or an unclosed '('.
        NumberOverflow: for a literal larger than an unsigned 32-bit integer.
    """
    tokens: List[Token] = []
    # positions of currently open brackets
    parens: List[int] = []
    number_start = 0

    for pos, ch in enumerate(text):
        if '0' <= ch <= '9':
            digit = ord(ch) - ord('0')
            last = tokens[-1] if tokens else None
            if isinstance(last, Number):
                value = last.value * 10 + digit
                if value > U32_MAX:
                    digits = ''.join(c for c in text[number_start:pos + 1] if c.isdigit())
                    raise NumberOverflow(digits, pos)
                tokens[-1] = Number(value)
            else:
                number_start = pos
                tokens.append(Number(digit))
        elif ch == '(':
            tokens.append(OPEN)
            parens.append(pos)
        elif ch == ')':
            tokens.append(CLOSE)
            if not parens:
                raise MismatchedParens(pos)
            parens.pop()
        elif ch in _OPERATOR_CHARS:
            tokens.append(Op(_OPERATOR_CHARS[ch]))
        elif ch in _IGNORED_CHARS:
            continue
        else:
            raise BadToken(ch, pos)

    if parens:
        raise MismatchedParens(parens[-1])

    logger.debug("tokenized %r -> %s", text, format_tokens(tokens))
    return tokens

# --------------------------
# Infix -> postfix (shunting-yard)
# --------------------------

def to_postfix(tokens: List[Token]) -> List[Token]:
    """Reorder infix tokens into postfix order. Never fails.

    Operators leave the stack while the top has equal or higher precedence; an open
    bracket on the stack stops them. Brackets are consumed and never emitted.
    """
    output: List[Token] = []
    stack: List[Token] = []

    for token in tokens:
        if isinstance(token, Number):
            output.append(token)
        elif isinstance(token, Op):
            tier = precedence(token.op)
            while stack:
                top = stack[-1]
                if not isinstance(top, Op) or precedence(top.op) < tier:
                    break
                output.append(stack.pop())
            stack.append(token)
        elif isinstance(token, Bracket):
            if token.is_open:
                stack.append(token)
            else:
                while stack and stack[-1] != OPEN:
                    output.append(stack.pop())
                if stack:
                    stack.pop()
        else:
            assert_never(token)

    while stack:
        top = stack.pop()
        if isinstance(top, Op):
            output.append(top)

    logger.debug("postfix -> %s", format_tokens(output))
    return output

# --------------------------
# Postfix evaluator
# --------------------------

def _apply(op: Operator, left: float, right: float) -> float:
    if op is Operator.ADD:
        return left + right
    if op is Operator.SUB:
        return left - right
    if op is Operator.MUL:
        return left * right
    if op is Operator.DIV:
        if right == 0:
            # IEEE semantics instead of ZeroDivisionError: x/0 is +-inf, 0/0 is nan.
            if left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)
        return left / right
    assert_never(op)

def evaluate(postfix: List[Token], operand_order: str = CONVENTIONAL) -> Optional[float]:
    """Evaluate a postfix token sequence with a value stack.

    For each operator the first value popped is A and the second is B. With the
    conventional order the result is ``B op A`` (so "10 2 /" is 5). The reversed order
    computes ``A op B`` instead, which is how the first releases of this calculator
    behaved ("10 2 /" is 0.2).

    Returns None for an empty sequence.

    Raises:
        InsufficientOperands: an operator found fewer than two values.
        LeftoverOperands: more than one value remained at the end.
    """
    if operand_order not in OPERAND_ORDERS:
        raise ValueError(f"unknown operand order: {operand_order!r}")

    stack: List[float] = []
    for token in postfix:
        if isinstance(token, Number):
            # u32 literal widened to float before any arithmetic
            stack.append(float(token.value))
        elif isinstance(token, Op):
            if len(stack) < 2:
                logger.debug("not enough operands for %s: %s", token, stack)
                raise InsufficientOperands(token.op, len(stack))
            a = stack.pop()
            b = stack.pop()
            if operand_order == REVERSED:
                stack.append(_apply(token.op, a, b))
            else:
                stack.append(_apply(token.op, b, a))
        elif isinstance(token, Bracket):
            continue
        else:
            assert_never(token)

    if len(stack) > 1:
        logger.debug("leftover values on stack: %s", stack)
        raise LeftoverOperands(len(stack))
    if not stack:
        return None
    return stack[0]

def calculate(text: str, operand_order: str = CONVENTIONAL) -> Optional[float]:
    """Run the full pipeline on one expression: tokenize, convert, evaluate."""
    tokens = tokenize(text)
    postfix = to_postfix(tokens)
    return evaluate(postfix, operand_order=operand_order)

def format_value(value: Optional[float]) -> str:
    """Format a result for display: integral values without a fractional part."""
    if value is None:
        return "(none)"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return repr(value)
