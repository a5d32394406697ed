"""Integer arithmetic expression evaluator: tokenize, shunting-yard, postfix evaluation."""

from rpncalc.calc import (
    CalcError,
    ParseError,
    EvalError,
    tokenize,
    to_postfix,
    evaluate,
    calculate,
)

__all__ = [
    'CalcError', 'ParseError', 'EvalError',
    'tokenize', 'to_postfix', 'evaluate', 'calculate',
]
