# (c) Copyright Datacraft, 2026
"""
Translation of policy filter expressions into SQLAlchemy clauses.

Every leaf is guarded with `IS NOT NULL` and a column/value type check so
that the emitted SQL is two-valued and selects exactly the rows for which
`evaluate_filter` over `row_fields(row)` is true.
"""
import logging
from typing import Any

from sqlalchemy import Boolean, Float, Integer, Numeric, String, and_, false, not_, or_, true
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.sql.elements import ColumnElement

from iamkit.core.features.policies.filters import (
	And, FalseExpr, FieldCompare, FieldEquals, FieldIn, FilterExpr, Not, Or, TrueExpr,
)

logger = logging.getLogger(__name__)


def _column(model, field: str):
	mapper = sa_inspect(model)
	if field not in mapper.column_attrs:
		return None
	return getattr(model, field)


def _is_numeric(value: Any) -> bool:
	return isinstance(value, (int, float)) and not isinstance(value, bool)


def _compatible(column, value: Any) -> bool:
	"""Whether `value` compares against `column` the way Python compares it."""
	column_type = column.type
	if isinstance(column_type, Boolean):
		return isinstance(value, bool)
	if isinstance(column_type, String):
		return isinstance(value, str)
	if isinstance(column_type, (Integer, Numeric, Float)):
		return _is_numeric(value)
	return False


def to_sqlalchemy(expr: FilterExpr, model) -> ColumnElement[bool]:
	"""Translate `expr` into a WHERE clause over `model`'s columns."""
	match expr:
		case TrueExpr():
			return true()
		case FalseExpr():
			return false()
		case And(left, right):
			return and_(to_sqlalchemy(left, model), to_sqlalchemy(right, model))
		case Or(left, right):
			return or_(to_sqlalchemy(left, model), to_sqlalchemy(right, model))
		case Not(inner):
			return not_(to_sqlalchemy(inner, model))
		case FieldIn(field, values):
			column = _column(model, field)
			if column is None or not values:
				return false()
			return and_(column.is_not(None), column.in_(sorted(values)))
		case FieldEquals(field, value):
			column = _column(model, field)
			if column is None or not _compatible(column, value):
				return false()
			return and_(column.is_not(None), column == value)
		case FieldCompare(field, op, value):
			column = _column(model, field)
			if column is None or not _compatible(column, value) or isinstance(column.type, Boolean):
				return false()
			match op:
				case "lt":
					clause = column < value
				case "lte":
					clause = column <= value
				case "gt":
					clause = column > value
				case "gte":
					clause = column >= value
				case _:
					logger.warning(f"Unknown comparison: {op}")
					return false()
			return and_(column.is_not(None), clause)
	raise TypeError(f"Unknown filter expression: {expr!r}")


def row_fields(row) -> dict[str, Any]:
	"""Column values of an ORM instance, keyed by attribute name."""
	mapper = sa_inspect(row).mapper
	return {attr.key: getattr(row, attr.key) for attr in mapper.column_attrs}
