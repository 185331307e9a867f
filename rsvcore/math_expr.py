"""Arithmetic expressions over column values, e.g. ``@1 + (@2 ^ 2) / 3``.

Columns are written ``@N`` or ``cN``. Supported operators are ``+ - * / % ^``
and parentheses; ``%`` is floor division and ``^`` raises to an integer power.
Sub-expressions that do not depend on any column are evaluated once at parse time.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence
from dataclasses import dataclass

from .util import CliError

_OPERATORS = frozenset("()+-*/^%")
_WHITESPACE = frozenset(" \t\n\r")
_NUMBER_CHARS = frozenset("0123456789._e")
_PRECEDENCE = {"+": 20, "-": 20, "*": 40, "/": 40, "%": 40, "^": 60}


class TokenKind(enum.Enum):
    COL = "col"
    LITERAL = "literal"
    OPERATOR = "operator"


@dataclass(frozen=True)
class Token:
    """One lexical token: a column index, a number or an operator character."""

    kind: TokenKind
    value: int | float | str


def _scan(source: str) -> tuple[list[Token], list[int], int]:
    src = source.replace(" ", "")
    tokens: list[Token] = []
    used: list[int] = []
    max_col = 0
    pos = 0
    n = len(src)
    while pos < n:
        ch = src[pos]
        if ch in _WHITESPACE:
            pos += 1
            continue
        if ch in _OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, ch))
            pos += 1
        elif ch.isascii() and ch.isdigit():
            start = pos
            while pos < n and src[pos] in _NUMBER_CHARS:
                pos += 1
            text = src[start:pos]
            try:
                if "_" in text:
                    raise ValueError(text)
                value = float(text)
            except ValueError:
                raise CliError(f"<{text}> is not a valid number in Expr.") from None
            tokens.append(Token(TokenKind.LITERAL, value))
        elif ch in "@c":
            pos += 1
            start = pos
            while pos < n and src[pos] in _NUMBER_CHARS:
                pos += 1
            text = src[start:pos]
            if not (text.isascii() and text.isdigit()):
                raise CliError(f"<{ch}{text}> is not a valid column in Expr.")
            col = int(text)
            used.append(col)
            max_col = max(max_col, col)
            tokens.append(Token(TokenKind.COL, col))
        else:
            raise CliError(f"{ch} is not recognized in Expr.")
    return tokens, used, max_col


def tokenize(source: str) -> list[Token]:
    """Split an expression into tokens."""
    return _scan(source)[0]


def _div(l: float, r: float) -> float:
    if r == 0:
        if l == 0 or math.isnan(l):
            return math.nan
        return math.copysign(math.inf, l) * math.copysign(1.0, r)
    return l / r


def _powi(base: float, exp: float) -> float:
    n = 0 if math.isnan(exp) else int(max(min(exp, 2**31 - 1), -(2**31)))
    try:
        return float(base**n)
    except ZeroDivisionError:
        return math.inf
    except OverflowError:
        return math.inf if base > 0 or n % 2 == 0 else -math.inf


def _apply(op: str, l: float, r: float) -> float:
    if op == "+":
        return l + r
    if op == "-":
        return l - r
    if op == "*":
        return l * r
    if op == "/":
        return _div(l, r)
    if op == "%":
        q = _div(l, r)
        return float(math.floor(q)) if math.isfinite(q) else q
    if op == "^":
        return _powi(l, r)
    raise CliError("Node evaluate error.")


@dataclass
class _Node:
    token: Token
    column_related: bool
    val: float = 0.0
    calculated: bool = False
    lhs: _Node | None = None
    rhs: _Node | None = None

    @classmethod
    def from_col(cls, col: int) -> _Node:
        return cls(Token(TokenKind.COL, col), column_related=True)

    @classmethod
    def from_number(cls, val: float) -> _Node:
        return cls(Token(TokenKind.LITERAL, val), column_related=False, val=val, calculated=True)

    def evaluate(self, cols: Sequence[float] | None) -> float:
        if self.calculated:
            return self.val
        kind, value = self.token.kind, self.token.value
        if kind is TokenKind.COL:
            if cols is None:
                raise CliError("expression refers to columns but no values were given.")
            return cols[value]
        if kind is TokenKind.LITERAL:
            return float(value)
        assert self.lhs is not None and self.rhs is not None
        return _apply(value, self.lhs.evaluate(cols), self.rhs.evaluate(cols))


class CompiledExpr:
    """A parsed expression ready to be evaluated against row values."""

    def __init__(
        self,
        node: _Node | None = None,
        used_columns: Sequence[int] = (),
        max_column: int = 0,
    ) -> None:
        self._node = node if node is not None else _Node.from_number(0.0)
        self._used_columns = list(used_columns)
        self._max_column = max_column

    def evaluate(self, cols: Sequence[float] | None = None) -> float:
        """Evaluate with ``cols[i]`` standing for column ``i``."""
        return self._node.evaluate(cols)

    def contains_column(self, col: int) -> bool:
        return col in self._used_columns

    def max_column(self) -> int:
        return self._max_column


class _AstBuilder:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._index = 0

    @property
    def _current(self) -> Token | None:
        return self._tokens[self._index] if self._index < len(self._tokens) else None

    def _advance(self) -> Token | None:
        self._index += 1
        return self._current

    def _precedence(self) -> int:
        tok = self._current
        if tok is None or tok.kind is not TokenKind.OPERATOR:
            return -1
        return _PRECEDENCE.get(tok.value, -1)

    def parse_expression(self) -> _Node | None:
        lhs = self._parse_primary()
        if lhs is None:
            return None
        return self._parse_bin_op_rhs(0, lhs)

    def _parse_primary(self) -> _Node | None:
        tok = self._current
        if tok is None:
            return None
        if tok.kind is TokenKind.COL:
            expr: _Node | None = _Node.from_col(tok.value)
        elif tok.kind is TokenKind.LITERAL:
            expr = _Node.from_number(tok.value)
        else:
            if tok.value != "(":
                raise CliError(f"start operation <{tok.value}> is not recognized")
            self._advance()
            expr = self.parse_expression()
        self._advance()
        return expr

    def _parse_bin_op_rhs(self, exec_prec: int, lhs: _Node) -> _Node | None:
        while True:
            tok_prec = self._precedence()
            if tok_prec < exec_prec:
                return lhs
            op = self._current.value
            if self._advance() is None:
                return lhs
            rhs = self._parse_primary()
            if rhs is None:
                return None
            if tok_prec < self._precedence():
                rhs = self._parse_bin_op_rhs(exec_prec + 1, rhs)
                if rhs is None:
                    return None
            node = _Node(
                Token(TokenKind.OPERATOR, op),
                column_related=lhs.column_related or rhs.column_related,
                lhs=lhs,
                rhs=rhs,
            )
            if not node.column_related:
                node.val = node.evaluate(None)
                node.calculated = True
            lhs = node


def parse_expr(source: str) -> CompiledExpr:
    """Parse an expression; an empty one evaluates to 0."""
    tokens, used, max_col = _scan(source)
    if not tokens:
        return CompiledExpr()
    node = _AstBuilder(tokens).parse_expression()
    if node is None:
        raise CliError(f"incomplete expression <{source}>.")
    return CompiledExpr(node, used, max_col)