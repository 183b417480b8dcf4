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

r"""Grammars, parser and license extraction for Fedora license strings.

A Fedora ``License:`` value is a boolean expression over license
identifiers.  Two conventions exist, and both share one grammar shape::

    start      = expression EOF
    expression = and_expr (OR and_expr)*
    and_expr   = atom (AND atom)*
    atom       = "(" expression ")" / identifier

Operator precedence (tightest to loosest)::

    AND  >  OR

Both operators chain to the right, so ``A and B and C`` becomes
``And(A, And(B, C))``.  Grouping never changes the extracted license
set, because AND and OR are associative here.

The two conventions differ only in their keywords and identifiers::

    ┌──────────┬──────────────┬──────────────────────────────────────────┐
    │ Format   │ Keywords     │ Identifier                               │
    ├──────────┼──────────────┼──────────────────────────────────────────┤
    │ LEGACY   │ and / or     │ Words of [\w.+] joined by whitespace,    │
    │          │              │ e.g. ``ASL 2.0``, ``GPLv2+``.            │
    ├──────────┼──────────────┼──────────────────────────────────────────┤
    │ SPDX     │ AND / OR     │ One run of [\w.-], e.g. ``Apache-2.0``.  │
    └──────────┴──────────────┴──────────────────────────────────────────┘

Keywords are whole words: ``Sandbox`` and ``ORACLE`` are identifiers.

Usage::

    from fedora_license.expr import LEGACY_GRAMMAR, SPDX_GRAMMAR, And, Identifier, Or, license_ids

    expr = SPDX_GRAMMAR.parse('(GPL-1.0-or-later OR Artistic-1.0-Perl) AND MIT')
    assert license_ids(expr) == ['Artistic-1.0-Perl', 'GPL-1.0-or-later', 'MIT']

    expr = LEGACY_GRAMMAR.parse('GPLv3+ and (ASL 2.0 or MIT)')
    assert expr == And(Identifier('GPLv3+'), Or(Identifier('ASL 2.0'), Identifier('MIT')))
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from fedora_license._types import LicenseFormat
from fedora_license.errors import MalformedExpressionError

__all__ = [
    'And',
    'ExprNode',
    'Grammar',
    'Identifier',
    'LEGACY_GRAMMAR',
    'Or',
    'SPDX_GRAMMAR',
    'grammar_for',
    'license_ids',
    'parse_expression',
]


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Identifier:
    """A single license name as written in the license string.

    Attributes:
        token: The identifier text (e.g. ``"MIT"``, ``"ASL 2.0"``).
    """

    token: str

    def __str__(self) -> str:
        """Return the identifier text."""
        return self.token


@dataclass(frozen=True)
class And:
    """Conjunctive combination: both licenses apply.

    Attributes:
        left: Left operand.
        right: Right operand.
    """

    left: ExprNode
    right: ExprNode


@dataclass(frozen=True)
class Or:
    """Disjunctive combination: either license may be chosen.

    Attributes:
        left: Left operand.
        right: Right operand.
    """

    left: ExprNode
    right: ExprNode


# Union of all AST node types.
ExprNode = Identifier | And | Or


# ---------------------------------------------------------------------------
# Grammars
# ---------------------------------------------------------------------------

_TOK_AND = 'AND'
_TOK_OR = 'OR'
_TOK_LPAREN = '('
_TOK_RPAREN = ')'
_TOK_ID = 'ID'
_TOK_EOF = 'EOF'

# Whitespace between two words of a multi-word identifier.
_GAP_RE = re.compile(r'\s+')


@dataclass(frozen=True)
class Grammar:
    """One of the two license-string grammars.

    Instances are immutable and built once at import time; use
    :data:`LEGACY_GRAMMAR` and :data:`SPDX_GRAMMAR`.

    Attributes:
        license_format: The format this grammar accepts.
        and_keyword: The conjunction keyword.
        or_keyword: The disjunction keyword.
        word_re: Matches one maximal run of identifier characters.
        multi_word: Whether an identifier may span several words
            separated by whitespace.
    """

    license_format: LicenseFormat
    and_keyword: str
    or_keyword: str
    word_re: re.Pattern[str]
    multi_word: bool

    def parse(self, text: str) -> ExprNode:
        """Parse *text* with this grammar.  See :func:`parse_expression`."""
        return parse_expression(text, self)

    def render(self, node: ExprNode) -> str:
        """Return *node* written back with this grammar's keywords.

        An ``Or`` nested under an ``And`` is parenthesized; nothing
        else needs grouping.
        """
        if isinstance(node, Identifier):
            return node.token
        if isinstance(node, And):
            return f' {self.and_keyword} '.join(self._operand(op) for op in _flatten(node, And))
        return f' {self.or_keyword} '.join(self.render(op) for op in _flatten(node, Or))

    def _operand(self, node: ExprNode) -> str:
        if isinstance(node, Or):
            return f'({self.render(node)})'
        return self.render(node)

    def _keyword_kind(self, word: str) -> str | None:
        if word == self.and_keyword:
            return _TOK_AND
        if word == self.or_keyword:
            return _TOK_OR
        return None


#: Old Fedora short names: ``GPLv2+ and (ASL 2.0 or MIT)``.
LEGACY_GRAMMAR = Grammar(
    license_format=LicenseFormat.LEGACY,
    and_keyword='and',
    or_keyword='or',
    word_re=re.compile(r'[\w.+]+'),
    multi_word=True,
)

#: SPDX identifiers: ``(GPL-1.0-or-later OR Artistic-1.0-Perl) AND MIT``.
SPDX_GRAMMAR = Grammar(
    license_format=LicenseFormat.SPDX,
    and_keyword='AND',
    or_keyword='OR',
    word_re=re.compile(r'[\w.\-]+'),
    multi_word=False,
)

_GRAMMARS: dict[LicenseFormat, Grammar] = {
    LicenseFormat.LEGACY: LEGACY_GRAMMAR,
    LicenseFormat.SPDX: SPDX_GRAMMAR,
}


def grammar_for(license_format: LicenseFormat) -> Grammar:
    """Return the grammar that parses *license_format* strings."""
    return _GRAMMARS[license_format]


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


@dataclass
class _Token:
    kind: str
    value: str
    pos: int


def _tokenize(text: str, grammar: Grammar) -> list[_Token]:
    """Split *text* into keyword, parenthesis and identifier tokens."""
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch.isspace():
            pos += 1
            continue
        if ch == '(':
            tokens.append(_Token(_TOK_LPAREN, ch, pos))
            pos += 1
            continue
        if ch == ')':
            tokens.append(_Token(_TOK_RPAREN, ch, pos))
            pos += 1
            continue
        m = grammar.word_re.match(text, pos)
        if m is None:
            raise MalformedExpressionError(text, pos, f'unexpected character {ch!r}', grammar.license_format)
        kind = grammar._keyword_kind(m.group())  # noqa: SLF001
        if kind is not None:
            tokens.append(_Token(kind, m.group(), pos))
            pos = m.end()
            continue
        end = m.end()
        if grammar.multi_word:
            end = _extend_identifier(text, end, grammar)
        tokens.append(_Token(_TOK_ID, text[pos:end], pos))
        pos = end
    tokens.append(_Token(_TOK_EOF, '', len(text)))
    return tokens


def _extend_identifier(text: str, end: int, grammar: Grammar) -> int:
    """Absorb following words into a multi-word identifier.

    Stops before a keyword, a parenthesis, a disallowed character or
    the end of input.  Trailing whitespace is never absorbed.
    """
    while True:
        gap = _GAP_RE.match(text, end)
        if gap is None:
            return end
        m = grammar.word_re.match(text, gap.end())
        if m is None or grammar._keyword_kind(m.group()) is not None:  # noqa: SLF001
            return end
        end = m.end()


# ---------------------------------------------------------------------------
# Recursive descent parser
# ---------------------------------------------------------------------------


def _describe(tok: _Token) -> str:
    if tok.kind == _TOK_EOF:
        return 'end of input'
    return repr(tok.value)


class _Parser:
    """Recursive descent parser over a token list."""

    def __init__(self, text: str, tokens: list[_Token], grammar: Grammar) -> None:
        self._text = text
        self._tokens = tokens
        self._grammar = grammar
        self._pos = 0

    def _peek(self) -> _Token:
        return self._tokens[self._pos]

    def _advance(self) -> _Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _error(self, tok: _Token, detail: str) -> MalformedExpressionError:
        return MalformedExpressionError(self._text, tok.pos, detail, self._grammar.license_format)

    # start = expression EOF
    def parse_start(self) -> ExprNode:
        node = self._parse_expression()
        tok = self._peek()
        if tok.kind != _TOK_EOF:
            raise self._error(tok, f'unexpected {_describe(tok)} after expression')
        return node

    # expression = and_expr (OR and_expr)*, folded to the right
    def _parse_expression(self) -> ExprNode:
        operands = [self._parse_and_expr()]
        while self._peek().kind == _TOK_OR:
            self._advance()
            operands.append(self._parse_and_expr())
        return _fold_right(operands, Or)

    # and_expr = atom (AND atom)*, folded to the right
    def _parse_and_expr(self) -> ExprNode:
        operands = [self._parse_atom()]
        while self._peek().kind == _TOK_AND:
            self._advance()
            operands.append(self._parse_atom())
        return _fold_right(operands, And)

    # atom = "(" expression ")" / identifier
    def _parse_atom(self) -> ExprNode:
        tok = self._peek()
        if tok.kind == _TOK_LPAREN:
            self._advance()
            node = self._parse_expression()
            close = self._peek()
            if close.kind != _TOK_RPAREN:
                raise self._error(close, f'expected ")", got {_describe(close)}')
            self._advance()
            return node
        if tok.kind == _TOK_ID:
            self._advance()
            return Identifier(tok.value)
        raise self._error(tok, f'expected license identifier or "(", got {_describe(tok)}')


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_expression(text: str, grammar: Grammar) -> ExprNode:
    """Parse a license string into an AST using *grammar*.

    The whole string must be consumed; leading and trailing whitespace
    is ignored.

    Args:
        text: The raw ``License:`` field value.
        grammar: :data:`LEGACY_GRAMMAR` or :data:`SPDX_GRAMMAR`.

    Returns:
        The root :data:`ExprNode` of the parsed AST.

    Raises:
        MalformedExpressionError: If *text* does not match *grammar*.

    Examples::

        >>> parse_expression('MIT AND GPL', SPDX_GRAMMAR)
        And(left=Identifier(token='MIT'), right=Identifier(token='GPL'))

        >>> parse_expression('ASL 2.0 or MIT', LEGACY_GRAMMAR)
        Or(left=Identifier(token='ASL 2.0'), right=Identifier(token='MIT'))
    """
    if not text.strip():
        raise MalformedExpressionError(text, 0, 'empty license string', grammar.license_format)
    tokens = _tokenize(text, grammar)
    # Only parenthesis depth recurses; operator chains are read in a loop.
    try:
        return _Parser(text, tokens, grammar).parse_start()
    except RecursionError:
        raise MalformedExpressionError(text, 0, 'expression nested too deeply', grammar.license_format) from None


def license_ids(node: ExprNode) -> list[str]:
    """Return the distinct identifiers of *node*, sorted ascending.

    Examples::

        >>> license_ids(parse_expression('MIT AND (GPL OR MIT)', SPDX_GRAMMAR))
        ['GPL', 'MIT']
    """
    acc: list[str] = []
    _collect_ids(node, acc)
    return sorted(set(acc))


def _collect_ids(node: ExprNode, acc: list[str]) -> None:
    """Append identifier tokens of *node* to *acc* in pre-order."""
    for leaf in _flatten(node, (And, Or)):
        if isinstance(leaf, Identifier):
            acc.append(leaf.token)


def _flatten(node: ExprNode, kinds: type | tuple[type, ...]) -> list[ExprNode]:
    """Return the operands of the *kinds* chain rooted at *node*, left to right.

    Walks with an explicit stack, so a chain of any length is safe.
    """
    out: list[ExprNode] = []
    stack: list[ExprNode] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, kinds):
            stack.append(current.right)  # type: ignore[union-attr]
            stack.append(current.left)  # type: ignore[union-attr]
        else:
            out.append(current)
    return out


def _fold_right(operands: list[ExprNode], kind: type[And] | type[Or]) -> ExprNode:
    """Combine *operands* into a right-leaning chain: ``a, b, c`` -> ``kind(a, kind(b, c))``."""
    node = operands[-1]
    for operand in reversed(operands[:-1]):
        node = kind(operand, node)
    return node
