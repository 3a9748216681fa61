"""
RPN Runtime - Shunting-Yard Converter

Reorders an infix token sequence into RPN with an operator stack and an
output queue. Operands go straight to the output, postfix operators too;
prefix operators and '(' are stacked; an infix operator first pops every
stacked operator that binds at least as tight, judged by the stacked
operator's own precedence and associativity.
"""

import logging
from typing import Sequence

from .errors import UnbalancedGrouping
from .operators import OperatorTable
from .tokens import Assoc, Fixity, LeftParen, Operator, RightParen, Token

logger = logging.getLogger(__name__)


class ShuntingYard:
    """Convert infix tokens to RPN"""

    def __init__(self, tokens: Sequence[Token], table: OperatorTable, strict: bool = False):
        self.tokens = tokens
        self.table = table
        self.strict = strict
        self.output = []
        self.stack = []

    def convert(self) -> Sequence[Token]:
        for token in self.tokens:
            if isinstance(token, Operator):
                self._push_operator(token)
            elif isinstance(token, LeftParen):
                self.stack.append(token)
            elif isinstance(token, RightParen):
                self._close_group()
            else:
                self.output.append(token)

        while self.stack:
            top = self.stack.pop()
            if isinstance(top, LeftParen):
                if self.strict:
                    raise UnbalancedGrouping("Unclosed '('")
                continue
            self.output.append(top)

        return self.output

    def _push_operator(self, token: Operator):
        if token.fixity == Fixity.PREFIX:
            self.stack.append(token)
        elif token.fixity == Fixity.POSTFIX:
            self.output.append(token)
        else:
            while self.stack and self._pops_before(self.stack[-1], token):
                self.output.append(self.stack.pop())
            self.stack.append(token)

    def _pops_before(self, top: Token, current: Operator) -> bool:
        """Whether the stacked operator must be emitted before `current`"""
        if not isinstance(top, Operator):
            return False
        # Stacked operators are ranked by their first entry for the symbol, so a
        # stacked prefix '-' ranks as the infix '-' (-2 ** 2 is -(2 ** 2))
        top_def = self.table.find(top.symbol)
        current_def = self.table.find(current.symbol, Fixity.INFIX)
        if top_def is None:
            return False
        precedence = current_def.precedence if current_def is not None else 0

        if top_def.assoc == Assoc.LEFT:
            return top_def.precedence >= precedence
        return top_def.precedence > precedence

    def _close_group(self):
        while self.stack:
            top = self.stack.pop()
            if isinstance(top, LeftParen):
                return
            self.output.append(top)
        if self.strict:
            raise UnbalancedGrouping("Unmatched ')'")


def shunting_yard(tokens: Sequence[Token], table: OperatorTable, strict: bool = False) -> Sequence[Token]:
    """Convert an infix token sequence to RPN order (convenience function)"""
    rpn = ShuntingYard(tokens, table, strict=strict).convert()
    logger.debug(f"Converted {len(tokens)} tokens to {len(rpn)} RPN tokens")
    return rpn


__all__ = [
    'ShuntingYard',
    'shunting_yard',
]
