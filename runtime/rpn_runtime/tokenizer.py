"""
RPN Runtime - Tokenizer

Single left-to-right pass over the expression text. Symbolic operators are
matched greedily and their fixity is taken from the previous token: at the
start of an operand (start of input, after a prefix or infix operator, after
'(') a symbol is a prefix operator, anywhere else it is infix or postfix.

Inline declarations {...} register a custom operator in the table and are
themselves a use of that operator.

Syntax Examples:
    2 + 3 * 4
    x: 1 - 1
    "test" - +1
    1, 2, 3
    1 {left + right} 2
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from .errors import MalformedLiteral, UnknownOperator
from .operators import OperatorDef, OperatorTable
from .tokens import (
    Fixity,
    LeftBracket,
    LeftParen,
    LeftRef,
    Number,
    Operator,
    RightBrace,
    RightBracket,
    RightParen,
    RightRef,
    String,
    Token,
    Variable,
)

logger = logging.getLogger(__name__)

# Besides brackets and braces, a symbol run ends where a string ('"') or a
# number ('.') begins, so '-"a"' and '-.5' keep their prefix operator. The
# standard '.' operator is therefore never produced by the tokenizer.
SYMBOL_STOP_CHARS = '()[]{}".'

_SINGLE_CHAR_TOKENS = {
    '(': LeftParen,
    ')': RightParen,
    '[': LeftBracket,
    ']': RightBracket,
    '}': RightBrace,
}


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def _is_identifier_start(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch == '_')


class Tokenizer:
    """Tokenize an expression against an operator table"""

    def __init__(self, source: str, table: OperatorTable, strict: bool = False):
        self.source = source
        self.table = table
        self.strict = strict
        self.pos = 0
        self.tokens = []

    def tokenize(self) -> Sequence[Token]:
        """Tokenize entire source"""
        while self.pos < len(self.source):
            ch = self.source[self.pos]

            if _is_digit(ch) or ch == '.':
                self._read_number()
            elif ch == '"':
                self._read_string()
            elif ch in _SINGLE_CHAR_TOKENS:
                self.tokens.append(_SINGLE_CHAR_TOKENS[ch]())
                self.pos += 1
            elif ch == '{':
                self._read_custom_operator()
            elif _is_identifier_start(ch):
                self._read_identifier()
            elif ch.isspace():
                self.pos += 1
            else:
                self._read_symbol()

        logger.debug(f"Tokenized {self.source!r} into {len(self.tokens)} tokens")
        return self.tokens

    def _read_number(self):
        """Read decimal literal (digits and dots, validated by Decimal)"""
        start = self.pos
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if _is_digit(ch) or ch == '.':
                self.pos += 1
            else:
                break

        text = self.source[start:self.pos]
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise MalformedLiteral(text) from None
        self.tokens.append(Number(value))

    def _read_string(self):
        """Read string literal; end of input closes it"""
        self.pos += 1  # Skip opening quote
        end = self.source.find('"', self.pos)
        if end == -1:
            end = len(self.source)

        self.tokens.append(String(self.source[self.pos:end]))
        self.pos = end + 1  # Skip closing quote

    def _read_custom_operator(self):
        """Read {...} declaration and emit the operator it declares"""
        self.pos += 1  # Skip opening brace
        end = self.source.find('}', self.pos)
        if end == -1:
            end = len(self.source)

        op_string = self.source[self.pos:end]
        self.pos = end + 1  # Skip closing brace
        self.tokens.append(self.table.add_custom(op_string))

    def _read_identifier(self):
        """Read identifier or reserved reference"""
        start = self.pos
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch.isalnum() or ch == '_':
                self.pos += 1
            else:
                break

        text = self.source[start:self.pos]
        if text == 'left':
            self.tokens.append(LeftRef())
        elif text == 'right':
            self.tokens.append(RightRef())
        else:
            self.tokens.append(Variable(text))

    def _read_symbol(self):
        """Read operator symbol and resolve its fixity from the previous token"""
        start = self.pos
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch.isalnum() or ch.isspace() or ch in SYMBOL_STOP_CHARS:
                break
            self.pos += 1

        symbol = self.source[start:self.pos]
        if self._expects_operand():
            entry = self.table.find(symbol, Fixity.PREFIX)
            fixity = Fixity.PREFIX
        else:
            entry = self._find_after_operand(symbol)
            fixity = Fixity.INFIX

        if entry is not None:
            self.tokens.append(entry.token())
            return

        if self.strict:
            raise UnknownOperator(symbol, fixity)
        # Skip only the first character of the run and rescan the rest
        logger.debug(f"Skipping unrecognized character {self.source[start]!r} at position {start}")
        self.pos = start + 1

    def _find_after_operand(self, symbol: str) -> Optional[OperatorDef]:
        # Postfix is the fallback after an operand; without it '?' and custom
        # postfix operators could never be written
        entry = self.table.find(symbol, Fixity.INFIX)
        if entry is None:
            entry = self.table.find(symbol, Fixity.POSTFIX)
        return entry

    def _expects_operand(self) -> bool:
        """True at the start of input, after '(' and after a prefix or infix operator"""
        if not self.tokens:
            return True
        previous = self.tokens[-1]
        if isinstance(previous, LeftParen):
            return True
        # A postfix operator completes the operand before it
        return isinstance(previous, Operator) and previous.fixity != Fixity.POSTFIX


def tokenize(expression: str, table: OperatorTable, strict: bool = False) -> Sequence[Token]:
    """
    Tokenize an expression (convenience function)

    Example:
        >>> tokenize('1 + 2', OperatorTable())
        [Number(value=Decimal('1')), Operator(symbol='+', fixity='infix'), Number(value=Decimal('2'))]
    """
    return Tokenizer(expression, table, strict=strict).tokenize()


__all__ = [
    'Tokenizer',
    'tokenize',
]
