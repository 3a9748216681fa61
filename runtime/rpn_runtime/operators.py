"""
RPN Runtime - Operator Table

Operators are descriptors (symbol, precedence, associativity, fixity) paired
with a behavior object. The evaluator dispatches on (symbol, fixity) and calls
behavior.apply(stack, context); behaviors pop their operands, resolve them
when they need values, and push at most one result.

The table starts with the standard operators. Custom operators declared in
the expression text as {...} blocks are appended while tokenizing.
"""

import logging
import operator
import re
from dataclasses import dataclass
from decimal import Decimal, DecimalException
from typing import Callable, Dict, Iterator, MutableSequence, Optional, Sequence

from .errors import (
    ArithmeticFailure,
    DivisionByZero,
    InvalidExponent,
    MissingOperand,
    TypeMismatch,
    UndefinedVariable,
)
from .tokens import (
    Assoc, Fixity, List, Number, Operator, String, Token, Variable,
)

logger = logging.getLogger(__name__)

Context = Dict[str, Token]
Stack = MutableSequence[Token]

CUSTOM_PRECEDENCE = 20
UNDEFINED_RESULT = "undefined"
LEFT_NAME = "left"
RIGHT_NAME = "right"

_LEFT_WORD = re.compile(r"\bleft\b")
_RIGHT_WORD = re.compile(r"\bright\b")

_ONE = Decimal(1)
_ZERO = Decimal(0)


# ============================================================================
# Operand Resolution and Coercion
# ============================================================================

def resolve(token: Token, context: Context) -> Token:
    """
    Replace a Variable by its bound value; other tokens are returned as is.

    Variables bound to variables are followed until a value is reached. A
    chain that loops back on itself has no value and is reported as
    undefined under the name that started it.
    """
    if not isinstance(token, Variable):
        return token
    start = token.name
    seen = set()
    while isinstance(token, Variable):
        if token.name in seen:
            raise UndefinedVariable(start)
        seen.add(token.name)
        value = context.get(token.name)
        if value is None:
            raise UndefinedVariable(token.name)
        token = value
    return token


def to_number(token: Token, operation: str) -> Decimal:
    """Numeric value of a resolved operand (strings and lists count their length)"""
    if isinstance(token, Number):
        return token.value
    if isinstance(token, String):
        return Decimal(len(token.value))
    if isinstance(token, List):
        return Decimal(len(token.items))
    raise TypeMismatch(operation, [token.kind])


def _flag(condition: bool) -> Number:
    return Number(_ONE if condition else _ZERO)


def _condition_name(error: DecimalException) -> str:
    # The C implementation raises with the list of signalled conditions
    signals = error.args[0] if error.args and isinstance(error.args[0], list) else [type(error)]
    return ", ".join(signal.__name__ for signal in signals)


def pop_operands(stack: Stack, count: int, symbol: str) -> Sequence[Token]:
    """Pop the top `count` tokens, oldest first"""
    if len(stack) < count:
        raise MissingOperand(symbol, count, len(stack))
    if count == 0:
        return []
    operands = list(stack[-count:])
    del stack[-count:]
    return operands


# ============================================================================
# Behaviors
# ============================================================================

class Behavior:
    """
    Evaluation behavior of one operator.

    Subclasses set `arity` and `resolves` and implement compute(). apply()
    pops the operands, resolves them when `resolves` is true, and pushes the
    computed token unless compute() returns None. Decimal signals raised while
    computing surface as ArithmeticFailure.
    """

    arity = 0
    resolves = True

    def __init__(self, symbol: str):
        self.symbol = symbol

    def apply(self, stack: Stack, context: Context) -> None:
        operands = pop_operands(stack, self.arity, self.symbol)
        if self.resolves:
            operands = [resolve(operand, context) for operand in operands]
        try:
            result = self.compute(operands, context)
        except DecimalException as e:
            raise ArithmeticFailure(self.symbol, _condition_name(e)) from e
        if result is not None:
            stack.append(result)

    def compute(self, operands: Sequence[Token], context: Context) -> Optional[Token]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol!r})"


class Arithmetic(Behavior):
    """Binary numeric operator"""

    arity = 2

    def __init__(self, symbol: str, func: Callable[[Decimal, Decimal], Decimal]):
        super().__init__(symbol)
        self.func = func

    def compute(self, operands, context):
        left, right = (to_number(operand, self.symbol) for operand in operands)
        return Number(self.func(left, right))


class Division(Arithmetic):
    """Division and remainder; a zero divisor is an error"""

    def compute(self, operands, context):
        left, right = (to_number(operand, self.symbol) for operand in operands)
        if right == 0:
            raise DivisionByZero(self.symbol)
        return Number(self.func(left, right))


class Power(Behavior):
    """Power with a non-negative integer exponent"""

    arity = 2

    def compute(self, operands, context):
        base, exponent = (to_number(operand, self.symbol) for operand in operands)
        if exponent < 0 or exponent != exponent.to_integral_value():
            raise InvalidExponent(exponent)
        if exponent == 0:
            return Number(_ONE)
        return Number(base ** int(exponent))


class Comparison(Behavior):
    """Numeric comparison yielding 1 or 0"""

    arity = 2

    def __init__(self, symbol: str, predicate: Callable[[Decimal, Decimal], bool]):
        super().__init__(symbol)
        self.predicate = predicate

    def compute(self, operands, context):
        left, right = (to_number(operand, self.symbol) for operand in operands)
        return _flag(self.predicate(left, right))


class Logical(Behavior):
    """Boolean connective over numeric truth (non-zero is true), yielding 1 or 0"""

    arity = 2

    def __init__(self, symbol: str, predicate: Callable[[bool, bool], bool]):
        super().__init__(symbol)
        self.predicate = predicate

    def compute(self, operands, context):
        left, right = (to_number(operand, self.symbol) != 0 for operand in operands)
        return _flag(self.predicate(left, right))


class Unary(Behavior):
    arity = 1

    def __init__(self, symbol: str, func: Callable[[Decimal], Decimal]):
        super().__init__(symbol)
        self.func = func

    def compute(self, operands, context):
        return Number(self.func(to_number(operands[0], self.symbol)))


class Assignment(Behavior):
    """Bind the right operand to the variable on the left and yield the value"""

    arity = 2
    resolves = False

    def compute(self, operands, context):
        target, value = operands
        if not isinstance(target, Variable):
            raise TypeMismatch(self.symbol, [target.kind, value.kind])
        context[target.name] = value
        return value


class ListCons(Behavior):
    """Append to a list on the left, or start a new two-element list"""

    arity = 2
    resolves = False

    def compute(self, operands, context):
        left, right = operands
        if isinstance(left, List):
            return List(left.items + (right,))
        return List((left, right))


class Inert(Behavior):
    """Placeholder operator: leaves the stack untouched"""

    arity = 0
    resolves = False

    def compute(self, operands, context):
        logger.info(f"Inert operator '{self.symbol}' applied")
        return None


class CustomInvocation(Behavior):
    """
    Behavior of an operator declared inline as {...}.

    The operands are exposed to the body under the reserved names 'left'
    and 'right' while it runs; the result is String("undefined").
    """

    resolves = False

    _NAMES = {
        Fixity.INFIX: (LEFT_NAME, RIGHT_NAME),
        Fixity.PREFIX: (RIGHT_NAME,),
        Fixity.POSTFIX: (LEFT_NAME,),
    }

    def __init__(self, symbol: str, fixity: str):
        super().__init__(symbol)
        self.names = self._NAMES[fixity]
        self.arity = len(self.names)

    def compute(self, operands, context):
        try:
            for name, operand in zip(self.names, operands):
                context[name] = operand
            return self.run_body(context)
        finally:
            for name in self.names:
                context.pop(name, None)

    def run_body(self, context: Context) -> Token:
        return String(UNDEFINED_RESULT)


# ============================================================================
# Operator Descriptors
# ============================================================================

@dataclass
class OperatorDef:
    """Operator descriptor"""
    symbol: str
    precedence: int
    assoc: str
    fixity: str
    behavior: Behavior
    custom: bool = False

    def token(self) -> Operator:
        return Operator(self.symbol, self.fixity)


def _infix(symbol: str, precedence: int, behavior: Behavior, assoc: str = Assoc.LEFT) -> OperatorDef:
    return OperatorDef(symbol, precedence, assoc, Fixity.INFIX, behavior)


def standard_operators() -> Sequence[OperatorDef]:
    """Fresh list of the standard operators, loosest binding first"""
    return [
        _infix(":", 1, Assignment(":"), Assoc.RIGHT),
        _infix("||", 3, Logical("||", lambda left, right: left or right)),
        _infix("&&", 4, Logical("&&", lambda left, right: left and right)),
        _infix("|", 5, Logical("|", operator.or_)),
        _infix("^", 6, Logical("^", operator.xor)),
        _infix("&", 7, Logical("&", operator.and_)),
        _infix("=", 8, Comparison("=", operator.eq)),
        _infix("<>", 8, Comparison("<>", operator.ne)),
        _infix(">", 9, Comparison(">", operator.gt)),
        _infix("<", 9, Comparison("<", operator.lt)),
        _infix(">=", 9, Comparison(">=", operator.ge)),
        _infix("<=", 9, Comparison("<=", operator.le)),
        _infix("+", 11, Arithmetic("+", operator.add)),
        _infix("-", 11, Arithmetic("-", operator.sub)),
        _infix("$", 11, Inert("$")),
        _infix("*", 12, Arithmetic("*", operator.mul)),
        _infix("/", 12, Division("/", operator.truediv)),
        _infix("%", 12, Division("%", operator.mod)),
        _infix("**", 13, Power("**"), Assoc.RIGHT),
        OperatorDef("-", 14, Assoc.RIGHT, Fixity.PREFIX, Unary("-", operator.neg)),
        OperatorDef("+", 14, Assoc.RIGHT, Fixity.PREFIX, Unary("+", operator.pos)),
        OperatorDef("~", 14, Assoc.RIGHT, Fixity.PREFIX, Inert("~")),
        OperatorDef("?", 16, Assoc.LEFT, Fixity.POSTFIX, Inert("?")),
        _infix(",", 16, ListCons(",")),
        _infix(";", 16, Inert(";")),
        _infix(".", 16, Inert(".")),
    ]


def classify_custom(op_string: str) -> str:
    """
    Fixity of a custom operator from its declaration text

    Example:
        >>> classify_custom("left + right")
        'infix'
        >>> classify_custom(" right * 2")
        'prefix'
        >>> classify_custom("left * 2")
        'postfix'
    """
    if _LEFT_WORD.search(op_string) and _RIGHT_WORD.search(op_string):
        return Fixity.INFIX
    if " right " in op_string:
        return Fixity.PREFIX
    return Fixity.POSTFIX


# ============================================================================
# Operator Table
# ============================================================================

class OperatorTable:
    """Ordered operator descriptors; standard operators always come first"""

    def __init__(self, operators: Optional[Sequence[OperatorDef]] = None):
        self._operators = list(operators) if operators is not None else list(standard_operators())

    def __iter__(self) -> Iterator[OperatorDef]:
        return iter(self._operators)

    def __len__(self) -> int:
        return len(self._operators)

    def find(self, symbol: str, fixity: Optional[str] = None) -> Optional[OperatorDef]:
        """First operator with this symbol (and fixity, when given)"""
        for entry in self._operators:
            if entry.symbol == symbol and (fixity is None or entry.fixity == fixity):
                return entry
        return None

    def lookup(self, token: Operator) -> Optional[OperatorDef]:
        return self.find(token.symbol, token.fixity)

    def add_custom(self, op_string: str) -> Operator:
        """Register the operator declared by {op_string} and return a token for it"""
        fixity = classify_custom(op_string)
        symbol = "{" + op_string + "}"
        existing = self.find(symbol, fixity)
        if existing is not None:
            return existing.token()

        entry = OperatorDef(
            symbol=symbol,
            precedence=CUSTOM_PRECEDENCE,
            assoc=Assoc.LEFT,
            fixity=fixity,
            behavior=CustomInvocation(symbol, fixity),
            custom=True,
        )
        self._operators.append(entry)
        logger.debug(f"Registered custom {fixity} operator {symbol}")
        return entry.token()

    @property
    def custom_operators(self) -> Sequence[OperatorDef]:
        return [entry for entry in self._operators if entry.custom]

    def copy(self) -> "OperatorTable":
        """Independent table with the same descriptors"""
        return OperatorTable(self._operators)


__all__ = [
    'Behavior',
    'Arithmetic',
    'Division',
    'Power',
    'Comparison',
    'Logical',
    'Unary',
    'Assignment',
    'ListCons',
    'Inert',
    'CustomInvocation',
    'OperatorDef',
    'OperatorTable',
    'standard_operators',
    'classify_custom',
    'resolve',
    'to_number',
    'pop_operands',
    'CUSTOM_PRECEDENCE',
    'UNDEFINED_RESULT',
]
