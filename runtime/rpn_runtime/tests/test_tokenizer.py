"""
Test suite for the tokenizer
Verifies literal scanning, operator fixity resolution and inline declarations
"""

import pytest
import sys
import os
from decimal import Decimal

# Add grandparent directory to path for imports (to find rpn_runtime package)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from rpn_runtime.errors import MalformedLiteral, UnknownOperator
from rpn_runtime.tokenizer import Tokenizer, tokenize
from rpn_runtime.tokens import (
    Fixity, LeftBracket, LeftParen, LeftRef, Number, Operator, RightBrace,
    RightBracket, RightParen, RightRef, String, Variable,
)


def infix(symbol):
    return Operator(symbol, Fixity.INFIX)


def prefix(symbol):
    return Operator(symbol, Fixity.PREFIX)


class TestLiterals:
    """Test number and string literals"""

    def test_integer(self, table):
        assert tokenize('42', table) == [Number(Decimal('42'))]

    def test_decimal(self, table):
        assert tokenize('3.14', table) == [Number(Decimal('3.14'))]

    def test_leading_dot(self, table):
        assert tokenize('.5', table) == [Number(Decimal('0.5'))]

    def test_multiple_dots(self, table):
        with pytest.raises(MalformedLiteral) as exc:
            tokenize('1.2.3', table)
        assert exc.value.text == '1.2.3'

    def test_lone_dot(self, table):
        with pytest.raises(MalformedLiteral):
            tokenize('.', table)

    def test_string(self, table):
        assert tokenize('"hello world"', table) == [String('hello world')]

    def test_empty_string(self, table):
        assert tokenize('""', table) == [String('')]

    def test_unterminated_string_runs_to_end(self, table):
        assert tokenize('"abc', table) == [String('abc')]

    def test_no_escape_sequences(self, table):
        assert tokenize('"a\\nb"', table) == [String('a\\nb')]


class TestIdentifiers:
    """Test variables and reserved references"""

    def test_variable(self, table):
        assert tokenize('x_1', table) == [Variable('x_1')]

    def test_leading_underscore(self, table):
        assert tokenize('_tmp', table) == [Variable('_tmp')]

    def test_reserved_references(self, table):
        tokens = tokenize('left + right', table)
        assert tokens == [LeftRef(), infix('+'), RightRef()]

    def test_reserved_prefix_is_plain_variable(self, table):
        assert tokenize('leftover', table) == [Variable('leftover')]


class TestOperators:
    """Test symbol scanning and fixity resolution"""

    def test_infix(self, table):
        tokens = tokenize('1 + 2', table)
        assert tokens == [Number(Decimal('1')), infix('+'), Number(Decimal('2'))]

    def test_prefix_at_start(self, table):
        assert tokenize('-1', table) == [prefix('-'), Number(Decimal('1'))]

    def test_prefix_after_operator(self, table):
        tokens = tokenize('"test" - +1', table)
        assert tokens == [String('test'), infix('-'), prefix('+'), Number(Decimal('1'))]

    def test_prefix_after_left_paren(self, table):
        tokens = tokenize('(-1)', table)
        assert tokens == [LeftParen(), prefix('-'), Number(Decimal('1')), RightParen()]

    def test_infix_after_right_paren(self, table):
        tokens = tokenize('(1 - 1) + -1', table)
        assert tokens[5] == infix('+')
        assert tokens[6] == prefix('-')

    def test_multi_character_symbols(self, table):
        tokens = tokenize('1 ** 2 <= 3 <> 4 || 5 && 6', table)
        symbols = [token.symbol for token in tokens if isinstance(token, Operator)]
        assert symbols == ['**', '<=', '<>', '||', '&&']

    def test_postfix_after_operand(self, table):
        assert tokenize('1?', table) == [Number(Decimal('1')), Operator('?', Fixity.POSTFIX)]

    def test_infix_after_postfix(self, table):
        tokens = tokenize('1? + 2', table)
        assert tokens[2] == infix('+')

    def test_minus_before_leading_dot(self, table):
        assert tokenize('-.5', table) == [prefix('-'), Number(Decimal('0.5'))]

    def test_minus_before_string(self, table):
        assert tokenize('-"a"', table) == [prefix('-'), String('a')]

    def test_string_ends_symbol_run(self, table):
        tokens = tokenize('1 +"a"', table)
        assert tokens == [Number(Decimal('1')), infix('+'), String('a')]

    def test_whitespace_variants(self, table):
        tokens = tokenize('1\t+\n2', table)
        assert tokens == [Number(Decimal('1')), infix('+'), Number(Decimal('2'))]


class TestUnrecognizedSymbols:
    """Test lenient and strict handling of unknown symbols"""

    def test_unknown_symbol_skipped(self, table):
        tokens = tokenize('1 @ 2', table)
        assert tokens == [Number(Decimal('1')), Number(Decimal('2'))]

    def test_only_first_character_skipped(self, table):
        tokens = tokenize('1 @+ 2', table)
        assert tokens == [Number(Decimal('1')), infix('+'), Number(Decimal('2'))]

    def test_strict_unknown_infix(self, table):
        with pytest.raises(UnknownOperator) as exc:
            tokenize('1 @ 2', table, strict=True)
        assert exc.value.symbol == '@'
        assert exc.value.fixity == Fixity.INFIX

    def test_strict_unknown_prefix(self, table):
        with pytest.raises(UnknownOperator) as exc:
            Tokenizer('*1', table, strict=True).tokenize()
        assert exc.value.fixity == Fixity.PREFIX


class TestStructuralTokens:
    """Test bracket and brace markers"""

    def test_brackets(self, table):
        tokens = tokenize('[1]', table)
        assert tokens == [LeftBracket(), Number(Decimal('1')), RightBracket()]

    def test_stray_closing_brace(self, table):
        assert tokenize('}', table) == [RightBrace()]


class TestCustomOperators:
    """Test inline {...} declarations"""

    def test_infix_declaration(self, table):
        tokens = tokenize('1 {left + right} 2', table)
        assert tokens[1] == infix('{left + right}')
        assert table.find('{left + right}', Fixity.INFIX) is not None

    def test_prefix_declaration(self, table):
        tokens = tokenize('{ right * 2} 3', table)
        assert tokens == [prefix('{ right * 2}'), Number(Decimal('3'))]

    def test_postfix_declaration(self, table):
        tokens = tokenize('5 {left * 2}', table)
        assert tokens[1] == Operator('{left * 2}', Fixity.POSTFIX)

    def test_unterminated_declaration(self, table):
        tokens = tokenize('1 {left', table)
        assert tokens[1] == Operator('{left}', Fixity.POSTFIX)

    def test_declaration_appends_to_table(self, table):
        size = len(table)
        tokenize('1 {left + right} 2 {left + right} 3', table)
        assert len(table) == size + 1


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
