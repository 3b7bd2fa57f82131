# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest
from lark.exceptions import UnexpectedInput

from roids.ast import (
	EnumData,
	FieldsNamed,
	FieldsUnit,
	FieldsUnnamed,
	KeyValuePayload,
	ListEntry,
	ListPayload,
	Lit,
	LitKind,
	Marker,
	Path,
	PathEntry,
	StructData,
	TypeExpr,
	Verbatim,
)
from roids.errors import MetaParseError
from roids.ident import Ident
from roids.test_support import NotMetaError, parse_attr, parse_decl, parse_nested, parse_path, parse_type


def test_parse_unit_struct() -> None:
	decl = parse_decl("pub struct Unit;")
	assert decl.ident == Ident("Unit")
	assert decl.data == StructData(fields=FieldsUnit(), semi=True)
	assert decl.attrs == []


def test_parse_named_struct_is_braced() -> None:
	decl = parse_decl("struct Named { pub a: u32, b: Vec<String>, }")
	assert decl.data.semi is False
	assert isinstance(decl.data.fields, FieldsNamed)
	assert [(f.name, str(f.ty)) for f in decl.data.fields.named] == [("a", "u32"), ("b", "Vec<String>")]


def test_parse_tuple_struct() -> None:
	decl = parse_decl("struct Tuple(u32, &mut str);")
	assert isinstance(decl.data.fields, FieldsUnnamed)
	assert [str(f.ty) for f in decl.data.fields.unnamed] == ["u32", "&mut str"]
	assert all(f.name is None for f in decl.data.fields.unnamed)


def test_parse_enum() -> None:
	decl = parse_decl(
		"""
		#[derive(Debug)]
		enum E {
			A,
			#[ns(tag)]
			B(u32),
			C { x: i8 },
		}
		"""
	)
	assert isinstance(decl.data, EnumData)
	assert [str(v.ident) for v in decl.data.variants] == ["A", "B", "C"]
	assert isinstance(decl.data.variants[2].fields, FieldsNamed)
	assert str(decl.data.variants[1].attrs[0]) == "#[ns(tag)]"


def test_parse_attribute_payloads() -> None:
	assert parse_attr("#[marker]").payload == Marker()
	assert parse_attr('#[doc = "text"]').payload == KeyValuePayload(Lit(LitKind.STR, "text"))
	assert parse_attr("#[ns(tag(One), flag)]").payload == ListPayload(
		(
			ListEntry(Path(("tag",)), (PathEntry(Path(("One",))),)),
			PathEntry(Path(("flag",))),
		)
	)
	assert parse_attr("#[ns()]").payload == ListPayload(())


def test_parse_malformed_attribute_is_verbatim() -> None:
	attr = parse_attr("#[ns(a b, c)]")
	assert attr.payload == Verbatim("(a b , c)")
	with pytest.raises(MetaParseError):
		attr.parse_meta()
	assert isinstance(parse_attr("#[ns(a,, b)]").payload, Verbatim)
	assert isinstance(parse_attr("#[ns(a::)]").payload, Verbatim)
	assert parse_attr("#[ns = 1 2]").payload == Verbatim("= 1 2")


def test_parse_string_escapes() -> None:
	(entry,) = parse_nested(r'key = "a \"quoted\" café"')
	assert entry.lit == Lit(LitKind.STR, 'a "quoted" café')


def test_parse_nested_rejects_non_meta() -> None:
	with pytest.raises(NotMetaError):
		parse_nested("a b")


def test_parse_path_and_type() -> None:
	assert parse_path("std::marker::PhantomData") == Path(("std", "marker", "PhantomData"))
	assert parse_type("Option<(u8, u16)>") == TypeExpr(
		path=Path(("Option",)),
		args=(TypeExpr(kind="tuple", args=(TypeExpr.named("u8"), TypeExpr.named("u16"))),),
	)


def test_syntax_errors_propagate() -> None:
	with pytest.raises(UnexpectedInput):
		parse_decl("struct;")
