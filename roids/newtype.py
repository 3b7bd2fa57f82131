# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Accessors for newtype structs (`struct Wrapper(Inner);`)."""

from __future__ import annotations

from roids.ast import Declaration, Field, FieldsUnnamed, StructData
from roids.errors import NewtypeArityError, ShapeMismatchError

_ADVANCED_TYPES_REF = (
	"See https://doc.rust-lang.org/book/ch19-04-advanced-types.html#advanced-types "
	"for more information."
)
NEWTYPE_MUST_HAVE_ONLY_ONE_FIELD = "Newtype struct must only have one field.\n" + _ADVANCED_TYPES_REF
MACRO_MUST_BE_USED_ON_NEWTYPE_STRUCT = "This macro must be used on a newtype struct.\n" + _ADVANCED_TYPES_REF


def inner_type(decl: Declaration) -> Field:
	"""
	Returns the single field of a newtype struct.

	Raises ShapeMismatchError if `decl` is not a tuple struct, and
	NewtypeArityError if it is one without exactly one field.
	"""
	if not (isinstance(decl.data, StructData) and isinstance(decl.data.fields, FieldsUnnamed)):
		raise ShapeMismatchError(MACRO_MUST_BE_USED_ON_NEWTYPE_STRUCT, loc=decl.loc)
	unnamed = decl.data.fields.unnamed
	if len(unnamed) != 1:
		raise NewtypeArityError(NEWTYPE_MUST_HAVE_ONLY_ONE_FIELD, field_count=len(unnamed), loc=decl.loc)
	return unnamed[0]


def inner_type_mut(decl: Declaration) -> Field:
	"""
	Same as `inner_type`; the returned `Field` is the live node, so edits to it
	(type, attributes) land in `decl`.
	"""
	return inner_type(decl)


def is_newtype(decl: Declaration) -> bool:
	"""True for a tuple struct with exactly one field."""
	if isinstance(decl.data, StructData) and isinstance(decl.data.fields, FieldsUnnamed):
		return len(decl.data.fields.unnamed) == 1
	return False


__all__ = [
	"MACRO_MUST_BE_USED_ON_NEWTYPE_STRUCT",
	"NEWTYPE_MUST_HAVE_ONLY_ONE_FIELD",
	"inner_type",
	"inner_type_mut",
	"is_newtype",
]
