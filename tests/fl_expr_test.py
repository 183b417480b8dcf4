# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the license-string grammars, parser and extractor."""

from __future__ import annotations

import pytest
from fedora_license._types import LicenseFormat
from fedora_license.errors import MalformedExpressionError
from fedora_license.expr import (
    LEGACY_GRAMMAR,
    SPDX_GRAMMAR,
    And,
    Identifier,
    Or,
    grammar_for,
    license_ids,
    parse_expression,
)

# ── SPDX grammar ─────────────────────────────────────────────────────────


class TestSpdxGrammar:
    """Tests for the SPDX grammar."""

    def test_single_id(self) -> None:
        """Test single id."""
        assert SPDX_GRAMMAR.parse('MIT') == Identifier('MIT')

    def test_hyphenated_dotted_id(self) -> None:
        """Test hyphenated and dotted id."""
        assert SPDX_GRAMMAR.parse('GPL-1.0-or-later') == Identifier('GPL-1.0-or-later')

    def test_whitespace_ignored(self) -> None:
        """Test surrounding whitespace is ignored."""
        assert SPDX_GRAMMAR.parse('  MIT  ') == Identifier('MIT')

    def test_two_licenses(self) -> None:
        """Test two licenses joined by AND."""
        assert SPDX_GRAMMAR.parse('MIT AND GPL') == And(Identifier('MIT'), Identifier('GPL'))

    def test_and_chain_is_right_associative(self) -> None:
        """Test AND chains lean right."""
        result = SPDX_GRAMMAR.parse('MIT AND BSD-3-Clause AND Apache-2.0')
        assert result == And(
            Identifier('MIT'),
            And(Identifier('BSD-3-Clause'), Identifier('Apache-2.0')),
        )

    def test_or_chain_is_right_associative(self) -> None:
        """Test OR chains lean right."""
        result = SPDX_GRAMMAR.parse('MIT OR Apache-2.0 OR GPL-3.0-only')
        assert result == Or(
            Identifier('MIT'),
            Or(Identifier('Apache-2.0'), Identifier('GPL-3.0-only')),
        )

    def test_parenthesized_group(self) -> None:
        """Test parenthesized group."""
        result = SPDX_GRAMMAR.parse('(GPL-1.0-or-later OR Artistic-1.0-Perl) AND MIT')
        assert result == And(
            Or(Identifier('GPL-1.0-or-later'), Identifier('Artistic-1.0-Perl')),
            Identifier('MIT'),
        )

    def test_keyword_inside_word_is_identifier(self) -> None:
        """Test a word that merely starts with OR is an identifier."""
        assert SPDX_GRAMMAR.parse('ORACLE AND MIT') == And(Identifier('ORACLE'), Identifier('MIT'))

    def test_no_space_around_parentheses(self) -> None:
        """Test parentheses need no surrounding whitespace."""
        assert SPDX_GRAMMAR.parse('(MIT)') == Identifier('MIT')

    def test_lowercase_keyword_is_not_an_operator(self) -> None:
        """Test lowercase and is left over as trailing input."""
        with pytest.raises(MalformedExpressionError, match="unexpected 'and' after expression") as exc_info:
            SPDX_GRAMMAR.parse('MIT and GPL')
        assert exc_info.value.position == 4

    def test_whitespace_inside_identifier_rejected(self) -> None:
        """Test multi-word names are not SPDX identifiers."""
        with pytest.raises(MalformedExpressionError, match="unexpected '2.0'"):
            SPDX_GRAMMAR.parse('ASL 2.0')

    def test_plus_suffix_rejected(self) -> None:
        """Test the + suffix is not an SPDX identifier character."""
        with pytest.raises(MalformedExpressionError, match="unexpected character '\\+'") as exc_info:
            SPDX_GRAMMAR.parse('MIT AND GPL-2.0+')
        assert exc_info.value.position == 15


# ── Legacy grammar ───────────────────────────────────────────────────────


class TestLegacyGrammar:
    """Tests for the legacy grammar."""

    def test_single_word(self) -> None:
        """Test single word."""
        assert LEGACY_GRAMMAR.parse('GPLv2+') == Identifier('GPLv2+')

    def test_multi_word_identifier(self) -> None:
        """Test identifiers may contain spaces."""
        assert LEGACY_GRAMMAR.parse('ASL 2.0 or MIT') == Or(Identifier('ASL 2.0'), Identifier('MIT'))

    def test_internal_whitespace_kept_verbatim(self) -> None:
        """Test internal whitespace is not collapsed."""
        assert LEGACY_GRAMMAR.parse('Artistic  2.0') == Identifier('Artistic  2.0')

    def test_trailing_whitespace_not_in_identifier(self) -> None:
        """Test trailing whitespace is stripped from identifiers."""
        assert LEGACY_GRAMMAR.parse(' (GPL+ ) or MIT ') == Or(Identifier('GPL+'), Identifier('MIT'))

    def test_nested_groups(self) -> None:
        """Test nested groups."""
        result = LEGACY_GRAMMAR.parse('GPLv3+ and (ASL 2.0 or MIT)')
        assert result == And(
            Identifier('GPLv3+'),
            Or(Identifier('ASL 2.0'), Identifier('MIT')),
        )

    def test_and_chain_is_right_associative(self) -> None:
        """Test and chains lean right."""
        result = LEGACY_GRAMMAR.parse('A and B and C')
        assert result == And(Identifier('A'), And(Identifier('B'), Identifier('C')))

    def test_keyword_inside_word_is_identifier(self) -> None:
        """Test and/or inside a word do not split it."""
        assert LEGACY_GRAMMAR.parse('Sandbox Fork') == Identifier('Sandbox Fork')

    def test_keyword_bounded_by_parenthesis(self) -> None:
        """Test a keyword directly before a parenthesis."""
        result = LEGACY_GRAMMAR.parse('GPL and(MIT or BSD)')
        assert result == And(Identifier('GPL'), Or(Identifier('MIT'), Identifier('BSD')))

    def test_uppercase_keyword_is_part_of_identifier(self) -> None:
        """Test uppercase AND is an ordinary word in legacy strings."""
        assert LEGACY_GRAMMAR.parse('Copyright AND Only') == Identifier('Copyright AND Only')

    def test_hyphen_rejected(self) -> None:
        """Test hyphens are not legacy identifier characters."""
        with pytest.raises(MalformedExpressionError, match="unexpected character '-'") as exc_info:
            LEGACY_GRAMMAR.parse('GPL-2.0 or MIT')
        assert exc_info.value.position == 3
        assert exc_info.value.license_format == LicenseFormat.LEGACY


# ── Operator precedence ─────────────────────────────────────────────────


class TestPrecedence:
    """Tests for precedence."""

    def test_and_binds_tighter_than_or_on_the_right(self) -> None:
        """Test A or B and C is A or (B and C)."""
        result = LEGACY_GRAMMAR.parse('A or B and C')
        assert result == Or(Identifier('A'), And(Identifier('B'), Identifier('C')))

    def test_and_binds_tighter_than_or_on_the_left(self) -> None:
        """Test A AND B OR C is (A AND B) OR C."""
        result = SPDX_GRAMMAR.parse('A AND B OR C')
        assert result == Or(And(Identifier('A'), Identifier('B')), Identifier('C'))


# ── Malformed input ──────────────────────────────────────────────────────


class TestMalformed:
    """Tests for malformed expressions."""

    @pytest.mark.parametrize(
        ('text', 'position', 'detail'),
        [
            ('', 0, 'empty license string'),
            ('   ', 0, 'empty license string'),
            ('MIT AND', 7, 'got end of input'),
            ('AND MIT', 0, "got 'AND'"),
            ('MIT AND AND GPL', 8, "got 'AND'"),
            ('()', 1, "got ')'"),
            ('(MIT', 4, 'expected ")", got end of input'),
            ('MIT)', 3, "unexpected ')' after expression"),
            ('MIT GPL', 4, "unexpected 'GPL' after expression"),
            ('MIT AND G;PL', 9, "unexpected character ';'"),
        ],
    )
    def test_spdx_errors(self, text: str, position: int, detail: str) -> None:
        """Test SPDX error positions and details."""
        with pytest.raises(MalformedExpressionError) as exc_info:
            SPDX_GRAMMAR.parse(text)
        assert exc_info.value.position == position
        assert detail in exc_info.value.detail
        assert exc_info.value.license_format == LicenseFormat.SPDX
        assert exc_info.value.expression == text

    def test_legacy_consecutive_operators(self) -> None:
        """Test two operators in a row."""
        with pytest.raises(MalformedExpressionError, match="got 'and'") as exc_info:
            LEGACY_GRAMMAR.parse('MIT and and GPL')
        assert exc_info.value.position == 8

    def test_legacy_dangling_operator(self) -> None:
        """Test an operator at the end."""
        with pytest.raises(MalformedExpressionError, match='got end of input'):
            LEGACY_GRAMMAR.parse('GPLv2 or')

    def test_message_has_caret(self) -> None:
        """Test the error message points at the failing position."""
        with pytest.raises(MalformedExpressionError) as exc_info:
            SPDX_GRAMMAR.parse('MIT AND')
        lines = str(exc_info.value).splitlines()
        assert lines[0].startswith('Malformed SPDX license string at position 7')
        assert lines[1] == '  MIT AND'
        assert lines[2] == '         ^'

    def test_is_value_error(self) -> None:
        """Test MalformedExpressionError is a ValueError."""
        with pytest.raises(ValueError):
            SPDX_GRAMMAR.parse('(')

    def test_deep_nesting_reported_as_malformed(self) -> None:
        """Test nesting beyond the recursion limit is a parse error."""
        text = '(' * 5000 + 'MIT' + ')' * 5000
        with pytest.raises(MalformedExpressionError, match='nested too deeply'):
            SPDX_GRAMMAR.parse(text)


# ── Long operator chains ────────────────────────────────────────────────


class TestLongChains:
    """Tests for operator chains far longer than the recursion limit."""

    def test_spdx_and_chain(self) -> None:
        """Test a 2000-operand AND chain parses into a right-leaning tree."""
        names = [f'L{i}' for i in range(2000)]
        expr = SPDX_GRAMMAR.parse(' AND '.join(names))
        assert isinstance(expr, And)
        assert expr.left == Identifier('L0')
        assert isinstance(expr.right, And)
        assert expr.right.left == Identifier('L1')
        assert license_ids(expr) == sorted(names)

    def test_spdx_or_chain_renders(self) -> None:
        """Test a 2000-operand OR chain renders back unchanged."""
        text = ' OR '.join(f'L{i}' for i in range(2000))
        assert SPDX_GRAMMAR.render(SPDX_GRAMMAR.parse(text)) == text

    def test_legacy_mixed_chain(self) -> None:
        """Test a long legacy chain mixing and/or keeps its licenses."""
        text = ' or '.join(f'GPLv{i} and MIT' for i in range(1000))
        expr = LEGACY_GRAMMAR.parse(text)
        assert isinstance(expr, Or)
        assert expr.left == And(Identifier('GPLv0'), Identifier('MIT'))
        assert len(license_ids(expr)) == 1001
        assert LEGACY_GRAMMAR.render(expr) == text


# ── License extraction ──────────────────────────────────────────────────


class TestLicenseIds:
    """Tests for license_ids()."""

    def test_single(self) -> None:
        """Test single identifier."""
        assert license_ids(Identifier('MIT')) == ['MIT']

    def test_sorted(self) -> None:
        """Test results are sorted ascending."""
        expr = SPDX_GRAMMAR.parse('MIT AND GPL AND Apache-2.0')
        assert license_ids(expr) == ['Apache-2.0', 'GPL', 'MIT']

    def test_deduplicated(self) -> None:
        """Test duplicate identifiers appear once."""
        expr = LEGACY_GRAMMAR.parse('(GPL+ or Artistic) and Artistic 2.0 and (MIT or GPL+)')
        assert license_ids(expr) == ['Artistic', 'Artistic 2.0', 'GPL+', 'MIT']

    def test_exact_string_equality(self) -> None:
        """Test no case folding happens."""
        expr = SPDX_GRAMMAR.parse('MIT OR mit')
        assert license_ids(expr) == ['MIT', 'mit']

    def test_grouping_does_not_change_result(self) -> None:
        """Test differently grouped expressions give the same set."""
        a = SPDX_GRAMMAR.parse('(A AND B) AND C')
        b = SPDX_GRAMMAR.parse('A AND (B AND C)')
        assert a != b
        assert license_ids(a) == license_ids(b)


# ── Rendering ────────────────────────────────────────────────────────────


class TestRender:
    """Tests for Grammar.render()."""

    def test_spdx_render(self) -> None:
        """Test SPDX rendering parenthesizes OR under AND."""
        expr = And(Or(Identifier('A'), Identifier('B')), Identifier('C'))
        assert SPDX_GRAMMAR.render(expr) == '(A OR B) AND C'

    def test_legacy_render(self) -> None:
        """Test legacy rendering uses lowercase keywords."""
        text = 'GPLv3+ and (ASL 2.0 or MIT)'
        assert LEGACY_GRAMMAR.render(LEGACY_GRAMMAR.parse(text)) == text

    def test_and_under_or_needs_no_parentheses(self) -> None:
        """Test AND under OR is rendered bare."""
        expr = Or(Identifier('A'), And(Identifier('B'), Identifier('C')))
        assert SPDX_GRAMMAR.render(expr) == 'A OR B AND C'


class TestGrammarFor:
    """Tests for grammar_for() and parse_expression()."""

    def test_lookup(self) -> None:
        """Test each format maps to its grammar."""
        assert grammar_for(LicenseFormat.LEGACY) is LEGACY_GRAMMAR
        assert grammar_for(LicenseFormat.SPDX) is SPDX_GRAMMAR

    def test_parse_expression_matches_method(self) -> None:
        """Test the function and the method agree."""
        assert parse_expression('MIT OR GPL', SPDX_GRAMMAR) == SPDX_GRAMMAR.parse('MIT OR GPL')
