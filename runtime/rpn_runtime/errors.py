"""
RPN Runtime - Error Definitions

Every failure of the runtime is an RPNError carrying a stable error code and
a human readable message. The command line surface prints the message; the
core never terminates the process.
"""

from typing import Sequence


# ============================================================================
# Error Codes
# ============================================================================

E_UNKNOWN_OPERATOR = "E_UNKNOWN_OPERATOR"
E_UNDEFINED_VARIABLE = "E_UNDEFINED_VARIABLE"
E_TYPE_MISMATCH = "E_TYPE_MISMATCH"
E_EMPTY_RESULT = "E_EMPTY_RESULT"
E_MALFORMED_LITERAL = "E_MALFORMED_LITERAL"
E_MALFORMED_EXPRESSION = "E_MALFORMED_EXPRESSION"
E_UNBALANCED_GROUPING = "E_UNBALANCED_GROUPING"
E_DIVISION_BY_ZERO = "E_DIVISION_BY_ZERO"
E_INVALID_EXPONENT = "E_INVALID_EXPONENT"
E_ARITHMETIC = "E_ARITHMETIC"


class RPNError(Exception):
    """Base exception for RPN runtime errors"""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class UnknownOperator(RPNError):
    """No operator registered for a symbol with the required fixity"""
    def __init__(self, symbol: str, fixity: str):
        self.symbol = symbol
        self.fixity = fixity
        super().__init__(E_UNKNOWN_OPERATOR, f"Unknown {fixity} operator: {symbol}")


class UndefinedVariable(RPNError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(E_UNDEFINED_VARIABLE, f"Undefined variable: {name}")


class TypeMismatch(RPNError):
    """Operation applied to operands of unsupported kinds"""
    def __init__(self, operation: str, kinds: Sequence[str]):
        self.operation = operation
        self.kinds = tuple(kinds)
        super().__init__(
            E_TYPE_MISMATCH,
            f"Operation '{operation}' does not support operands ({', '.join(self.kinds)})",
        )


class EmptyResult(RPNError):
    """Nothing left on the stack to return"""
    def __init__(self, message: str = "Expression produced no value"):
        super().__init__(E_EMPTY_RESULT, message)


class MissingOperand(EmptyResult):
    """Operator popped from a stack holding fewer operands than it needs"""
    def __init__(self, symbol: str, expected: int, found: int):
        self.symbol = symbol
        self.expected = expected
        self.found = found
        super().__init__(f"Operator '{symbol}' expects {expected} operand(s), found {found}")


class MalformedLiteral(RPNError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(E_MALFORMED_LITERAL, f"Malformed number literal: '{text}'")


class MalformedExpression(RPNError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(E_MALFORMED_EXPRESSION, reason)


class UnbalancedGrouping(RPNError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(E_UNBALANCED_GROUPING, reason)


class DivisionByZero(RPNError):
    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(E_DIVISION_BY_ZERO, f"Division by zero in '{symbol}'")


class InvalidExponent(RPNError):
    """Power operator only accepts non-negative integer exponents"""
    def __init__(self, exponent):
        self.exponent = exponent
        super().__init__(
            E_INVALID_EXPONENT,
            f"Exponent must be a non-negative integer, got {exponent}",
        )


class ArithmeticFailure(RPNError):
    """Decimal arithmetic signalled a condition (overflow, impossible division)"""
    def __init__(self, symbol: str, condition: str):
        self.symbol = symbol
        self.condition = condition
        super().__init__(E_ARITHMETIC, f"Arithmetic failure in '{symbol}': {condition}")


__all__ = [
    'RPNError',
    'UnknownOperator',
    'UndefinedVariable',
    'TypeMismatch',
    'EmptyResult',
    'MissingOperand',
    'MalformedLiteral',
    'MalformedExpression',
    'UnbalancedGrouping',
    'DivisionByZero',
    'InvalidExponent',
    'ArithmeticFailure',
    'E_UNKNOWN_OPERATOR',
    'E_UNDEFINED_VARIABLE',
    'E_TYPE_MISMATCH',
    'E_EMPTY_RESULT',
    'E_MALFORMED_LITERAL',
    'E_MALFORMED_EXPRESSION',
    'E_UNBALANCED_GROUPING',
    'E_DIVISION_BY_ZERO',
    'E_INVALID_EXPONENT',
    'E_ARITHMETIC',
]
