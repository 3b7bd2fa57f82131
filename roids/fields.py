# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Struct field-list shape queries and in-place growth.

A declaration is in one of four shapes: unit (`struct S;`), named
(`struct S { a: u32 }`), tuple (`struct S(u32);`) or not a struct at all (an
enum). Appending may widen unit to named or tuple, and grows named/tuple in
place; named and tuple never convert into each other.

Appends check the shape before touching anything, so a rejected append leaves
the declaration exactly as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from roids.ast import Declaration, FieldList, FieldsNamed, FieldsUnit, FieldsUnnamed, StructData
from roids.errors import ShapeMismatchError

logger = logging.getLogger(__name__)

ERR_MUST_BE_STRUCT = "This macro must be used on a struct."
ERR_MUST_BE_UNIT = "This macro must be used on a unit struct."
ERR_MUST_BE_NAMED = "This macro must be used on a struct with named fields."
ERR_MUST_BE_UNNAMED = "This macro must be used on a struct with unnamed fields."
ERR_MUST_BE_UNIT_OR_NAMED = (
	"Macro must be used on either a unit struct or a struct with named fields.\n"
	"This derive does not work on tuple structs."
)
ERR_MUST_BE_UNIT_OR_UNNAMED = (
	"Macro must be used on either a unit struct or tuple struct.\n"
	"This derive does not work on structs with named fields."
)


class FieldShape(Enum):
	UNIT = "unit"
	NAMED = "named"
	TUPLE = "tuple"
	NOT_A_STRUCT = "not_a_struct"


_SHAPE_ERRORS = {
	FieldShape.UNIT: ERR_MUST_BE_UNIT,
	FieldShape.NAMED: ERR_MUST_BE_NAMED,
	FieldShape.TUPLE: ERR_MUST_BE_UNNAMED,
	FieldShape.NOT_A_STRUCT: ERR_MUST_BE_STRUCT,
}

FieldsOrDecl = Union[Declaration, FieldsUnit, FieldsNamed, FieldsUnnamed]


def _fields_shape(fields: FieldList) -> FieldShape:
	if isinstance(fields, FieldsNamed):
		return FieldShape.NAMED
	if isinstance(fields, FieldsUnnamed):
		return FieldShape.TUPLE
	if isinstance(fields, FieldsUnit):
		return FieldShape.UNIT
	raise TypeError(f"not a field list: {fields!r}")


def shape(target: FieldsOrDecl) -> FieldShape:
	"""Classify a declaration (or a bare field list). Never raises for declarations."""
	if isinstance(target, Declaration):
		if not isinstance(target.data, StructData):
			return FieldShape.NOT_A_STRUCT
		return _fields_shape(target.data.fields)
	return _fields_shape(target)


def is_unit(target: FieldsOrDecl) -> bool:
	return shape(target) is FieldShape.UNIT


def is_named(target: FieldsOrDecl) -> bool:
	return shape(target) is FieldShape.NAMED


def is_tuple(target: FieldsOrDecl) -> bool:
	return shape(target) is FieldShape.TUPLE


def data_struct(decl: Declaration) -> StructData:
	if not isinstance(decl.data, StructData):
		raise ShapeMismatchError(ERR_MUST_BE_STRUCT, loc=decl.loc)
	return decl.data


def fields(decl: Declaration) -> FieldList:
	return data_struct(decl).fields


def fields_named(decl: Declaration) -> FieldsNamed:
	if not is_named(decl):
		raise ShapeMismatchError(ERR_MUST_BE_NAMED, loc=decl.loc)
	return decl.data.fields


def fields_unnamed(decl: Declaration) -> FieldsUnnamed:
	if not is_tuple(decl):
		raise ShapeMismatchError(ERR_MUST_BE_UNNAMED, loc=decl.loc)
	return decl.data.fields


def assert_shape(decl: Declaration, expected: FieldShape) -> None:
	"""
	Raise ShapeMismatchError unless `decl` has the `expected` shape.

	`FieldShape.NOT_A_STRUCT` as `expected` means "any struct": it fails only
	for non-structs.
	"""
	actual = shape(decl)
	if expected is FieldShape.NOT_A_STRUCT:
		if actual is FieldShape.NOT_A_STRUCT:
			raise ShapeMismatchError(ERR_MUST_BE_STRUCT, loc=decl.loc)
		return
	if actual is not expected:
		raise ShapeMismatchError(_SHAPE_ERRORS[expected], loc=decl.loc)


def assert_fields_unit(decl: Declaration) -> None:
	assert_shape(decl, FieldShape.UNIT)


def assert_fields_named(decl: Declaration) -> None:
	assert_shape(decl, FieldShape.NAMED)


def assert_fields_unnamed(decl: Declaration) -> None:
	assert_shape(decl, FieldShape.TUPLE)


def append_named(target: FieldsOrDecl, additional: FieldsNamed) -> FieldList:
	"""
	Append named fields to a unit or named struct.

	A unit struct becomes a braced struct holding `additional`. Duplicate field
	names are not checked; the compiler reports them later.

	Returns the resulting field list. For a bare `FieldsUnit` that is a new
	object; store it back yourself.
	"""
	if isinstance(target, Declaration):
		if not isinstance(target.data, StructData) or is_tuple(target.data.fields):
			raise ShapeMismatchError(ERR_MUST_BE_UNIT_OR_NAMED, loc=target.loc)
		before = shape(target)
		target.data.fields = append_named(target.data.fields, additional)
		target.data.semi = False
		logger.debug(
			"appended %d named fields to `%s` (%s -> named)",
			len(additional.named),
			target.ident,
			before.value,
		)
		return target.data.fields

	if isinstance(target, FieldsNamed):
		target.named.extend(additional.named)
		return target
	if isinstance(target, FieldsUnit):
		return FieldsNamed(list(additional.named))
	raise ShapeMismatchError(ERR_MUST_BE_UNIT_OR_NAMED)


def append_unnamed(target: FieldsOrDecl, additional: FieldsUnnamed) -> FieldList:
	"""
	Append positional fields to a unit or tuple struct.

	A unit struct becomes a tuple struct holding `additional`. Positions are
	implied by list order.
	"""
	if isinstance(target, Declaration):
		if not isinstance(target.data, StructData) or is_named(target.data.fields):
			raise ShapeMismatchError(ERR_MUST_BE_UNIT_OR_UNNAMED, loc=target.loc)
		before = shape(target)
		target.data.fields = append_unnamed(target.data.fields, additional)
		logger.debug(
			"appended %d unnamed fields to `%s` (%s -> tuple)",
			len(additional.unnamed),
			target.ident,
			before.value,
		)
		return target.data.fields

	if isinstance(target, FieldsUnnamed):
		target.unnamed.extend(additional.unnamed)
		return target
	if isinstance(target, FieldsUnit):
		return FieldsUnnamed(list(additional.unnamed))
	raise ShapeMismatchError(ERR_MUST_BE_UNIT_OR_UNNAMED)


@dataclass(frozen=True)
class ConstructionForm:
	"""
	Pattern naming every field of a value: ``, `(_0, _1,)` or `{ a, b, }`.

	`delimiter` is "" (unit), "()" (tuple) or "{}" (named).
	"""

	delimiter: str
	bindings: Tuple[str, ...] = ()

	def is_empty(self) -> bool:
		return not self.delimiter

	def __str__(self) -> str:
		if self.delimiter == "()":
			return "(" + " ".join(f"{name}," for name in self.bindings) + ")"
		if self.delimiter == "{}":
			if not self.bindings:
				return "{}"
			return "{ " + " ".join(f"{name}," for name in self.bindings) + " }"
		return ""


def construction_form(target: FieldsOrDecl) -> ConstructionForm:
	"""
	Returns the pattern that binds every field, e.g. to destructure or rebuild.

	Tuple fields are bound as `_0`, `_1`, ...; the trailing comma keeps a
	single binding a tuple pattern. Named fields without a name are skipped.
	"""
	field_list = fields(target) if isinstance(target, Declaration) else target
	if isinstance(field_list, FieldsUnnamed):
		return ConstructionForm("()", tuple(f"_{n}" for n in range(len(field_list.unnamed))))
	if isinstance(field_list, FieldsNamed):
		return ConstructionForm("{}", tuple(f.name for f in field_list.named if f.name is not None))
	return ConstructionForm("")


__all__ = [
	"ConstructionForm",
	"ERR_MUST_BE_NAMED",
	"ERR_MUST_BE_STRUCT",
	"ERR_MUST_BE_UNIT",
	"ERR_MUST_BE_UNIT_OR_NAMED",
	"ERR_MUST_BE_UNIT_OR_UNNAMED",
	"ERR_MUST_BE_UNNAMED",
	"FieldShape",
	"append_named",
	"append_unnamed",
	"assert_fields_named",
	"assert_fields_unit",
	"assert_fields_unnamed",
	"assert_shape",
	"construction_form",
	"data_struct",
	"fields",
	"fields_named",
	"fields_unnamed",
	"is_named",
	"is_tuple",
	"is_unit",
	"shape",
]
