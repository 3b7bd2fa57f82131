# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Helpers for derive-style code generators working on a declaration tree.

- `roids.attrs`: find `#[namespace(tag(..))]` attributes and their parameters.
- `roids.derive`: append to `#[derive(..)]`, refusing duplicates.
- `roids.fields` / `roids.newtype`: inspect and grow struct field lists.
- `roids.ident`: build identifiers by concatenation.

Example::

	decl = parse_decl("#[derive(Debug)] struct S;")
	append_derives(decl, ["Clone", "Copy"])
	# -> #[derive(Debug, Clone, Copy)] struct S;
"""

from roids.attrs import (
	contains_namespace,
	contains_tag,
	find_by_namespace,
	find_tag,
	meta_list_contains,
	namespace_meta_lists,
	namespace_meta_lists_iter,
	namespace_parameter,
	namespace_parameters,
	nested_meta_to_ident,
	nested_meta_to_path,
	tag_meta_lists,
	tag_meta_lists_iter,
	tag_parameter,
	tag_parameters,
)
from roids.config import DEFAULT_CONFIG, RoidsConfig, TagMatch, configure_logging
from roids.derive import append_derives
from roids.errors import (
	DeriveConflictError,
	Diagnostic,
	MetaParseError,
	NewtypeArityError,
	ParameterArityError,
	RoidsError,
	ShapeMismatchError,
)
from roids.field_ext import field_contains_tag, field_tag_parameter, field_tag_parameters, is_phantom_data, type_name
from roids.fields import (
	ConstructionForm,
	FieldShape,
	append_named,
	append_unnamed,
	assert_fields_named,
	assert_fields_unit,
	assert_fields_unnamed,
	assert_shape,
	construction_form,
	data_struct,
	fields,
	fields_named,
	fields_unnamed,
	is_named,
	is_tuple,
	is_unit,
	shape,
)
from roids.ident import Ident, ident_concat
from roids.newtype import inner_type, inner_type_mut, is_newtype
from roids.path import format_path, path_eq, path_is_ident

__all__ = [
	"ConstructionForm",
	"DEFAULT_CONFIG",
	"DeriveConflictError",
	"Diagnostic",
	"FieldShape",
	"Ident",
	"MetaParseError",
	"NewtypeArityError",
	"ParameterArityError",
	"RoidsConfig",
	"RoidsError",
	"ShapeMismatchError",
	"TagMatch",
	"append_derives",
	"append_named",
	"append_unnamed",
	"assert_fields_named",
	"assert_fields_unit",
	"assert_fields_unnamed",
	"assert_shape",
	"configure_logging",
	"construction_form",
	"contains_namespace",
	"contains_tag",
	"data_struct",
	"field_contains_tag",
	"field_tag_parameter",
	"field_tag_parameters",
	"fields",
	"fields_named",
	"fields_unnamed",
	"find_by_namespace",
	"find_tag",
	"format_path",
	"ident_concat",
	"inner_type",
	"inner_type_mut",
	"is_named",
	"is_newtype",
	"is_phantom_data",
	"is_tuple",
	"is_unit",
	"meta_list_contains",
	"namespace_meta_lists",
	"namespace_meta_lists_iter",
	"namespace_parameter",
	"namespace_parameters",
	"nested_meta_to_ident",
	"nested_meta_to_path",
	"path_eq",
	"path_is_ident",
	"shape",
	"tag_meta_lists",
	"tag_meta_lists_iter",
	"tag_parameter",
	"tag_parameters",
	"type_name",
]
