"""
RPN Runtime - Expression Conversion and Evaluation

This package converts expressions in mixed notation to Reverse Polish
Notation and evaluates them with arbitrary-precision decimals:

**Pipeline:**
- Tokenizer: expression text to tokens, registering inline {...} operators
- Shunting-Yard: infix tokens to RPN order
- Evaluator: RPN tokens to a single result against a variable context

**Operators:**
- Operator table seeded with the standard operators, extended per expression
  by custom operator declarations

**Interfaces:**
- Machine: to_rpn() and run() over expression text
- rpncalc: command line (repl, rpn, run)

Version: 0.1.0
"""

__version__ = '0.1.0'

# ============================================================================
# Token Model
# ============================================================================

from .tokens import (
    Fixity, Assoc, Token, Number, String, Variable, Operator, List,
    LeftParen, RightParen, LeftBracket, RightBracket, LeftBrace, RightBrace,
    LeftRef, RightRef, render, render_rpn,
)

# ============================================================================
# Errors
# ============================================================================

from .errors import (
    RPNError, UnknownOperator, UndefinedVariable, TypeMismatch,
    EmptyResult, MissingOperand, MalformedLiteral, MalformedExpression,
    UnbalancedGrouping, DivisionByZero, InvalidExponent, ArithmeticFailure,
)

# ============================================================================
# Pipeline
# ============================================================================

from .operators import (
    OperatorDef, OperatorTable, Behavior, standard_operators,
    classify_custom, resolve, to_number,
)
from .tokenizer import Tokenizer, tokenize
from .shunting_yard import ShuntingYard, shunting_yard
from .evaluator import RPNEvaluator, evaluate
from .machine import Machine, to_rpn, run
from .config import Settings, get_settings

# ============================================================================
# Exports
# ============================================================================

__all__ = [
    # Version
    '__version__',

    # Tokens
    'Fixity', 'Assoc', 'Token', 'Number', 'String', 'Variable', 'Operator', 'List',
    'LeftParen', 'RightParen', 'LeftBracket', 'RightBracket', 'LeftBrace', 'RightBrace',
    'LeftRef', 'RightRef', 'render', 'render_rpn',

    # Errors
    'RPNError', 'UnknownOperator', 'UndefinedVariable', 'TypeMismatch',
    'EmptyResult', 'MissingOperand', 'MalformedLiteral', 'MalformedExpression',
    'UnbalancedGrouping', 'DivisionByZero', 'InvalidExponent', 'ArithmeticFailure',

    # Operators
    'OperatorDef', 'OperatorTable', 'Behavior', 'standard_operators',
    'classify_custom', 'resolve', 'to_number',

    # Pipeline
    'Tokenizer', 'tokenize', 'ShuntingYard', 'shunting_yard',
    'RPNEvaluator', 'evaluate',

    # Runtime
    'Machine', 'to_rpn', 'run',

    # Configuration
    'Settings', 'get_settings',
]
