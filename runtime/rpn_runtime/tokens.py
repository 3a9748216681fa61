"""
RPN Runtime - Token Model

Tokens are immutable values. Every token kind is its own frozen dataclass
deriving from Token, so the set of kinds is closed and matched with
isinstance(). Composite results (lists) are always new tokens.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Tuple


# ============================================================================
# Operator Attributes
# ============================================================================

class Fixity:
    """Operator position constants"""
    PREFIX = "prefix"
    INFIX = "infix"
    POSTFIX = "postfix"


class Assoc:
    """Operator associativity constants"""
    LEFT = "left"
    RIGHT = "right"


# ============================================================================
# Token Kinds
# ============================================================================

@dataclass(frozen=True)
class Token:
    """Base token"""

    @property
    def kind(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class Number(Token):
    """Exact decimal literal or computed value"""
    value: Decimal


@dataclass(frozen=True)
class String(Token):
    """Quoted literal"""
    value: str


@dataclass(frozen=True)
class Variable(Token):
    """Identifier resolved against the context at evaluation time"""
    name: str


@dataclass(frozen=True)
class Operator(Token):
    """Operator use; (symbol, fixity) identifies its descriptor"""
    symbol: str
    fixity: str


@dataclass(frozen=True)
class List(Token):
    """Ordered sequence built by the list-cons operator"""
    items: Tuple[Token, ...] = ()


@dataclass(frozen=True)
class LeftParen(Token):
    pass


@dataclass(frozen=True)
class RightParen(Token):
    pass


@dataclass(frozen=True)
class LeftBracket(Token):
    pass


@dataclass(frozen=True)
class RightBracket(Token):
    pass


@dataclass(frozen=True)
class LeftBrace(Token):
    pass


@dataclass(frozen=True)
class RightBrace(Token):
    pass


@dataclass(frozen=True)
class LeftRef(Token):
    """Reserved name 'left' inside custom operator bodies"""
    pass


@dataclass(frozen=True)
class RightRef(Token):
    """Reserved name 'right' inside custom operator bodies"""
    pass


_STRUCTURAL_TEXT = {
    LeftParen: "(",
    RightParen: ")",
    LeftBracket: "[",
    RightBracket: "]",
    LeftBrace: "{",
    RightBrace: "}",
    LeftRef: "left",
    RightRef: "right",
}


# ============================================================================
# Rendering
# ============================================================================

def render(token: Token) -> str:
    """
    Canonical text of a single token

    Example:
        >>> render(String("hi"))
        '"hi"'
        >>> render(Operator("**", Fixity.INFIX))
        '**'
    """
    if isinstance(token, Number):
        return str(token.value)
    if isinstance(token, String):
        return f'"{token.value}"'
    if isinstance(token, Variable):
        return token.name
    if isinstance(token, Operator):
        return token.symbol
    if isinstance(token, List):
        return "[" + ", ".join(render(item) for item in token.items) + "]"
    return _STRUCTURAL_TEXT[type(token)]


def render_rpn(tokens: Iterable[Token]) -> str:
    """Space-joined rendering of a token sequence"""
    return " ".join(render(token) for token in tokens)


__all__ = [
    'Fixity',
    'Assoc',
    'Token',
    'Number',
    'String',
    'Variable',
    'Operator',
    'List',
    'LeftParen',
    'RightParen',
    'LeftBracket',
    'RightBracket',
    'LeftBrace',
    'RightBrace',
    'LeftRef',
    'RightRef',
    'render',
    'render_rpn',
]
