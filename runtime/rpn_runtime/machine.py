"""
RPN Runtime - Machine

Runtime interface tying the pipeline together:
    expression text -> Tokenizer -> Shunting-Yard -> Evaluator -> result token

A machine owns an operator table. Each call tokenizes against a copy of it,
so custom operators declared by one expression are forgotten afterwards,
unless the machine keeps operators (as the interactive loop does), in which
case declarations accumulate in the machine's own table.
"""

import logging
from typing import Dict, Optional, Sequence

from .config import Settings, get_settings
from .evaluator import RPNEvaluator
from .operators import OperatorTable
from .shunting_yard import shunting_yard
from .tokenizer import tokenize
from .tokens import Token, render_rpn

logger = logging.getLogger(__name__)


class Machine:
    """Main RPN runtime interface"""

    def __init__(
        self,
        table: Optional[OperatorTable] = None,
        settings: Optional[Settings] = None,
        keep_operators: Optional[bool] = None,
        strict: Optional[bool] = None,
        precision: Optional[int] = None,
    ):
        settings = settings or get_settings()
        self.operators = table if table is not None else OperatorTable()
        self.keep_operators = settings.keep_operators if keep_operators is None else keep_operators
        self.strict = settings.strict if strict is None else strict
        self.precision = settings.precision if precision is None else precision

    def _table_for_call(self) -> OperatorTable:
        if self.keep_operators:
            return self.operators
        return self.operators.copy()

    def tokenize(self, expression: str, table: Optional[OperatorTable] = None) -> Sequence[Token]:
        """Tokenize expression text"""
        table = table if table is not None else self._table_for_call()
        return tokenize(expression, table, strict=self.strict)

    def convert(self, tokens: Sequence[Token], table: Optional[OperatorTable] = None) -> Sequence[Token]:
        """Reorder infix tokens into RPN"""
        table = table if table is not None else self.operators
        return shunting_yard(tokens, table, strict=self.strict)

    def evaluate(
        self,
        rpn: Sequence[Token],
        context: Optional[Dict[str, Token]] = None,
        table: Optional[OperatorTable] = None,
    ) -> Token:
        """Evaluate RPN tokens"""
        table = table if table is not None else self.operators
        return RPNEvaluator(table, precision=self.precision).evaluate(rpn, context)

    def to_rpn(self, expression: str) -> str:
        """Convert expression text to space-joined RPN text"""
        table = self._table_for_call()
        rpn = self.convert(self.tokenize(expression, table), table)
        return render_rpn(rpn)

    def run(self, expression: str, context: Optional[Dict[str, Token]] = None) -> Token:
        """
        Tokenize, convert and evaluate expression text

        Raises:
            RPNError: on the first failure
        """
        table = self._table_for_call()
        rpn = self.convert(self.tokenize(expression, table), table)
        logger.debug(f"RPN for {expression!r}: {render_rpn(rpn)}")
        return self.evaluate(rpn, context, table)


# ============================================================================
# Convenience Functions
# ============================================================================

def to_rpn(expression: str) -> str:
    """
    Convert expression text to RPN text (convenience function)

    Example:
        >>> to_rpn('(1 + 2) * 3')
        '1 2 + 3 *'
    """
    return Machine().to_rpn(expression)


def run(expression: str) -> Token:
    """
    Evaluate expression text (convenience function)

    Example:
        >>> run('2 + 3 * 4')
        Number(value=Decimal('14'))
    """
    return Machine().run(expression)


__all__ = [
    'Machine',
    'to_rpn',
    'run',
]
