# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Per-field helpers: type names and field-level `#[namespace(tag(..))]` lookups."""

from __future__ import annotations

from typing import List, Optional

from roids.ast import Field, NestedEntry
from roids.attrs import PathLike, contains_tag, tag_parameter, tag_parameters
from roids.config.settings import DEFAULT_CONFIG, RoidsConfig
from roids.errors import ShapeMismatchError


def type_name(field: Field) -> str:
	"""
	Returns the last segment of the field's type path (`PhantomData` for
	`std::marker::PhantomData<T>`).

	Raises ShapeMismatchError for non-path types (references, tuples).
	"""
	if field.ty.kind == "path" and field.ty.path is not None:
		return field.ty.path.last()
	name = f"`{field.name}` " if field.name is not None else ""
	raise ShapeMismatchError(f"Expected {name}field type to be a `Path` with a segment.", loc=field.loc)


def is_phantom_data(field: Field) -> bool:
	return type_name(field) == "PhantomData"


def field_contains_tag(
	field: Field,
	namespace: PathLike,
	tag: PathLike,
	*,
	config: RoidsConfig = DEFAULT_CONFIG,
) -> bool:
	return contains_tag(field.attrs, namespace, tag, config=config)


def field_tag_parameter(
	field: Field,
	namespace: PathLike,
	tag: PathLike,
	*,
	config: RoidsConfig = DEFAULT_CONFIG,
) -> Optional[NestedEntry]:
	return tag_parameter(field.attrs, namespace, tag, config=config)


def field_tag_parameters(field: Field, namespace: PathLike, tag: PathLike) -> List[NestedEntry]:
	return tag_parameters(field.attrs, namespace, tag)


__all__ = [
	"field_contains_tag",
	"field_tag_parameter",
	"field_tag_parameters",
	"is_phantom_data",
	"type_name",
]
