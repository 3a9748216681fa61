"""
RPN Runtime - Evaluator

Executes an RPN token sequence with one value stack and one variable context.
Operands are pushed as they are (variables stay unresolved until an operator
needs their value); operators dispatch to the behavior registered in the
operator table for their (symbol, fixity).
"""

import logging
from decimal import MAX_EMAX, MIN_EMIN, localcontext
from typing import Dict, Optional, Sequence

from .errors import EmptyResult, MalformedExpression, UnknownOperator
from .operators import LEFT_NAME, RIGHT_NAME, OperatorTable
from .tokens import (
    LeftRef, List, Number, Operator, RightRef, String, Token, Variable, render, render_rpn,
)

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 100

_PUSHED_AS_IS = (Number, String, Variable, List)


class RPNEvaluator:
    """Evaluate RPN token sequences"""

    def __init__(self, table: OperatorTable, precision: int = DEFAULT_PRECISION):
        self.table = table
        self.precision = precision

    def evaluate(self, rpn: Sequence[Token], context: Optional[Dict[str, Token]] = None) -> Token:
        """
        Evaluate RPN tokens and return the single remaining value

        Args:
            rpn: Tokens in RPN order
            context: Variable bindings; a new empty mapping when omitted.
                Assignments are written into it.

        Returns:
            The result token
        """
        if context is None:
            context = {}
        stack = []

        with localcontext() as ctx:
            ctx.prec = self.precision
            ctx.Emax = MAX_EMAX
            ctx.Emin = MIN_EMIN
            for token in rpn:
                self._step(token, stack, context)

        if not stack:
            raise EmptyResult()
        if len(stack) > 1:
            raise MalformedExpression(
                f"Expression left {len(stack)} values on the stack: {render_rpn(stack)}"
            )

        result = stack[0]
        logger.debug(f"Evaluated {len(rpn)} RPN tokens to {render(result)}")
        return result

    def _step(self, token: Token, stack, context):
        if isinstance(token, _PUSHED_AS_IS):
            stack.append(token)
        elif isinstance(token, LeftRef):
            stack.append(Variable(LEFT_NAME))
        elif isinstance(token, RightRef):
            stack.append(Variable(RIGHT_NAME))
        elif isinstance(token, Operator):
            entry = self.table.lookup(token)
            if entry is None:
                raise UnknownOperator(token.symbol, token.fixity)
            entry.behavior.apply(stack, context)
        else:
            raise MalformedExpression(f"Unexpected token: {render(token)}")


def evaluate(
    rpn: Sequence[Token],
    table: OperatorTable,
    context: Optional[Dict[str, Token]] = None,
    precision: int = DEFAULT_PRECISION,
) -> Token:
    """Evaluate RPN tokens (convenience function)"""
    return RPNEvaluator(table, precision=precision).evaluate(rpn, context)


__all__ = [
    'RPNEvaluator',
    'evaluate',
    'DEFAULT_PRECISION',
]
