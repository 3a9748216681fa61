"""
Test suite for the RPN evaluator
Feeds hand-built RPN token sequences straight to the evaluator
"""

import pytest
import sys
import os
from decimal import Decimal

# Add grandparent directory to path for imports (to find rpn_runtime package)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from rpn_runtime.errors import (
    DivisionByZero, EmptyResult, MalformedExpression, TypeMismatch,
    UndefinedVariable, UnknownOperator,
)
from rpn_runtime.evaluator import RPNEvaluator, evaluate
from rpn_runtime.tokens import (
    Fixity, LeftParen, LeftRef, Number, Operator, String, Variable,
)


def num(text):
    return Number(Decimal(text))


def op(symbol, fixity=Fixity.INFIX):
    return Operator(symbol, fixity)


class TestEvaluation:
    """Test evaluation of well-formed RPN"""

    def test_addition(self, table):
        assert evaluate([num('1'), num('2'), op('+')], table) == num('3')

    def test_nested(self, table):
        rpn = [num('2'), num('3'), num('4'), op('*'), op('+')]
        assert evaluate(rpn, table) == num('14')

    def test_prefix_minus(self, table):
        assert evaluate([num('1'), op('-', Fixity.PREFIX)], table) == num('-1')

    def test_lone_variable_stays_unresolved(self, table):
        assert evaluate([Variable('x')], table) == Variable('x')

    def test_context_read(self, table):
        rpn = [Variable('x'), num('1'), op('+')]
        assert evaluate(rpn, table, context={'x': num('41')}) == num('42')

    def test_assignment_writes_context(self, table):
        context = {}
        result = evaluate([Variable('x'), num('5'), op(':')], table, context=context)
        assert result == num('5')
        assert context == {'x': num('5')}

    def test_string_operand(self, table):
        assert evaluate([String('test'), num('1'), op('-')], table) == num('3')


class TestFailures:
    """Test evaluation errors"""

    def test_unknown_operator(self, table):
        with pytest.raises(UnknownOperator) as exc:
            evaluate([num('1'), num('2'), op('@')], table)
        assert exc.value.symbol == '@'

    def test_wrong_fixity_is_unknown(self, table):
        with pytest.raises(UnknownOperator):
            evaluate([num('1'), op('*', Fixity.PREFIX)], table)

    def test_empty_input(self, table):
        with pytest.raises(EmptyResult):
            evaluate([], table)

    def test_leftover_values(self, table):
        with pytest.raises(MalformedExpression) as exc:
            evaluate([num('1'), num('2')], table)
        assert '1 2' in exc.value.message

    def test_structural_token(self, table):
        with pytest.raises(MalformedExpression):
            evaluate([LeftParen(), num('1')], table)

    def test_undefined_variable(self, table):
        with pytest.raises(UndefinedVariable) as exc:
            evaluate([num('1'), Variable('undefinedVar'), op('+')], table)
        assert exc.value.name == 'undefinedVar'

    def test_reserved_reference_outside_custom_operator(self, table):
        with pytest.raises(UndefinedVariable) as exc:
            evaluate([LeftRef(), num('1'), op('+')], table)
        assert exc.value.name == 'left'

    def test_assignment_to_number(self, table):
        with pytest.raises(TypeMismatch):
            evaluate([num('1'), num('2'), op(':')], table)

    def test_division_by_zero(self, table):
        with pytest.raises(DivisionByZero):
            evaluate([num('1'), num('0'), op('/')], table)

    def test_remainder_by_zero(self, table):
        with pytest.raises(DivisionByZero):
            evaluate([num('1'), num('0'), op('%')], table)


class TestPrecision:
    """Test the decimal context used during evaluation"""

    def test_limited_precision(self, table):
        result = RPNEvaluator(table, precision=5).evaluate([num('1'), num('3'), op('/')])
        assert result == num('0.33333')

    def test_default_precision(self, table):
        result = RPNEvaluator(table).evaluate([num('1'), num('3'), op('/')])
        assert len(str(result.value)) == 102

    def test_precision_does_not_leak(self, table):
        from decimal import getcontext

        before = getcontext().prec
        RPNEvaluator(table, precision=7).evaluate([num('1'), num('3'), op('/')])
        assert getcontext().prec == before


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
