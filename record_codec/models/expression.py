"""Validation-expression AST.

A field's ``validate`` tag is parsed once into one of the node types
below and evaluated for every value the field carries:

- ``Equals``     — ``==A||B``  value must equal one of the operands.
- ``NotEquals``  — ``!=A&&B``  value must differ from every operand.
- ``Compare``    — ``<=10``, ``<<10``, ``>=10``, ``>>10`` numeric comparison.
- ``Predicate``  — ``:=method`` zero-argument predicate on the record.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ExpressionOperator(enum.Enum):
    """Two-character operators recognised by the expression parser."""

    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS_EQUAL = "<="
    LESS = "<<"
    GREATER_EQUAL = ">="
    GREATER = ">>"
    PREDICATE = ":="


@dataclass(frozen=True, slots=True)
class Equals:
    """Value must equal (case-insensitively) one of ``values``."""

    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class NotEquals:
    """Value must differ (case-insensitively) from every entry of ``values``."""

    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Compare:
    """Numeric comparison of the value against ``operand``.

    The operand is kept as written; both sides must parse as numbers when
    the expression is evaluated.
    """

    operator: ExpressionOperator
    operand: str

    def holds(self, value: float, operand: float) -> bool:
        """Return ``True`` when ``value <op> operand`` is satisfied."""
        if self.operator is ExpressionOperator.LESS_EQUAL:
            return value <= operand
        if self.operator is ExpressionOperator.LESS:
            return value < operand
        if self.operator is ExpressionOperator.GREATER_EQUAL:
            return value >= operand
        return value > operand


@dataclass(frozen=True, slots=True)
class Predicate:
    """Zero-argument method on the record returning ``bool`` or an error."""

    method: str


Expression = Equals | NotEquals | Compare | Predicate
