# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from roids.ast import (
	Annotation,
	KeyValueEntry,
	KeyValuePayload,
	ListEntry,
	ListPayload,
	Lit,
	LitKind,
	LiteralEntry,
	Marker,
	Path,
	PathEntry,
	Verbatim,
)
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
from roids.config import RoidsConfig, TagMatch
from roids.errors import ParameterArityError
from roids.ident import Ident
from roids.test_support import parse_attr, parse_decl, parse_nested


def _attrs(source: str) -> list[Annotation]:
	return parse_decl(source).attrs


def test_find_by_namespace_preserves_order_and_skips_other_paths() -> None:
	attrs = _attrs(
		"""
		#[namespace(One)]
		#[other(Two)]
		#[namespace = "x"]
		#[namespace]
		struct S;
		"""
	)
	found = find_by_namespace(attrs, "namespace")
	assert [a.payload for a in found] == [
		ListPayload((PathEntry(Path(("One",))),)),
		KeyValuePayload(Lit(LitKind.STR, "x")),
		Marker(),
	]
	assert contains_namespace(attrs, "namespace")
	assert not contains_namespace(attrs, "missing")


def test_namespace_paths_match_exactly() -> None:
	attrs = _attrs("#[my::derive(One)] #[my(Two)] struct S;")
	assert contains_namespace(attrs, Path(("my", "derive")))
	assert contains_namespace(attrs, "my")
	assert not contains_namespace(attrs, "derive")
	assert not contains_namespace(attrs, "my::derive::extra")


def test_namespace_meta_lists_only_returns_list_payloads() -> None:
	attrs = _attrs(
		"""
		#[namespace(One)]
		#[namespace(two = "")]
		#[namespace = "three"]
		struct S;
		"""
	)
	lists = namespace_meta_lists(attrs, "namespace")
	assert lists == [
		ListPayload(parse_nested("One")),
		ListPayload(parse_nested('two = ""')),
	]


def test_namespace_meta_lists_iter_is_reiterable_and_sees_edits() -> None:
	decl = parse_decl("#[namespace(One)] struct S;")
	view = namespace_meta_lists_iter(decl.attrs, "namespace")
	assert list(view) == list(view)
	decl.attrs.append(parse_attr("#[namespace(Two)]"))
	assert list(view.parameters()) == parse_nested("One, Two")


def test_tag_meta_lists_returns_tag_entries() -> None:
	attrs = _attrs(
		"""
		#[namespace(tag(One))]
		#[namespace(tag(two = ""), other(Three))]
		struct S;
		"""
	)
	ns_lists = namespace_meta_lists(attrs, "namespace")
	lists = tag_meta_lists(ns_lists, "tag")
	assert lists == [
		ListEntry(Path(("tag",)), tuple(parse_nested("One"))),
		ListEntry(Path(("tag",)), tuple(parse_nested('two = ""'))),
	]
	# Backed by a list, the view can be walked twice.
	view = tag_meta_lists_iter(ns_lists, "tag")
	assert list(view) == list(view) == lists


def test_find_tag_flattens_across_annotations_in_order() -> None:
	attrs = _attrs(
		"""
		#[namespace(tag(a, b))]
		#[other(tag(x))]
		#[namespace(skip(y), tag(c))]
		struct S;
		"""
	)
	assert find_tag(attrs, "namespace", "tag") == parse_nested("a, b, c")


def test_contains_tag_requires_exact_namespace_and_tag() -> None:
	only_other_param = _attrs("#[my::derive(other)] struct S;")
	other_namespace = _attrs("#[other::ns(tag::name)] struct S;")
	matching = _attrs("#[my::derive(tag::name)] struct S;")
	ns = Path(("my", "derive"))
	tag = Path(("tag", "name"))
	assert not contains_tag(only_other_param, ns, tag)
	assert not contains_tag(other_namespace, ns, tag)
	assert contains_tag(matching, ns, tag)


def test_contains_tag_accepts_bare_listed_and_key_value_tags() -> None:
	assert contains_tag(_attrs("#[my_derive(tag_name)] struct S;"), "my_derive", "tag_name")
	assert contains_tag(_attrs("#[my_derive(tag_name(One))] struct S;"), "my_derive", "tag_name")
	assert contains_tag(_attrs('#[my_derive(tag_name = "x")] struct S;'), "my_derive", "tag_name")
	assert not contains_tag(_attrs("#[my_derive] struct S;"), "my_derive", "tag_name")
	assert not contains_tag(_attrs('#[my_derive("tag_name")] struct S;'), "my_derive", "tag_name")


def test_contains_tag_list_only_policy() -> None:
	config = RoidsConfig(tag_match=TagMatch.LIST_ONLY)
	bare = _attrs("#[my_derive(tag_name)] struct S;")
	listed = _attrs("#[my_derive(tag_name(One))] struct S;")
	assert not contains_tag(bare, "my_derive", "tag_name", config=config)
	assert contains_tag(listed, "my_derive", "tag_name", config=config)


def test_malformed_annotations_are_skipped() -> None:
	attrs = _attrs(
		"""
		#[namespace = a b]
		#[namespace(tag(One) Two)]
		#[namespace(tag(Three))]
		struct S;
		"""
	)
	assert isinstance(attrs[0].payload, Verbatim)
	assert isinstance(attrs[1].payload, Verbatim)
	assert len(find_by_namespace(attrs, "namespace")) == 1
	assert tag_parameter(attrs, "namespace", "tag") == PathEntry(Path(("Three",)))


def test_namespace_parameter_returns_single_parameter() -> None:
	attrs = _attrs("#[namespace(One)] struct S;")
	assert namespace_parameter(attrs, "namespace") == PathEntry(Path(("One",)))


def test_namespace_parameter_returns_none_when_absent() -> None:
	assert namespace_parameter(_attrs("#[other(One)] struct S;"), "namespace") is None
	assert namespace_parameter(_attrs("#[namespace] struct S;"), "namespace") is None


def test_namespace_parameter_rejects_multiple_parameters() -> None:
	attrs = _attrs("#[namespace(One, Two)] struct S;")
	with pytest.raises(ParameterArityError) as excinfo:
		namespace_parameter(attrs, "namespace")
	assert str(excinfo.value) == "Expected exactly one parameter for `#[namespace(..)]`."
	assert excinfo.value.parameters == parse_nested("One, Two")


def test_namespace_parameter_rejects_repeated_namespace() -> None:
	attrs = _attrs("#[my::ns(One)] #[my::ns(Two)] struct S;")
	with pytest.raises(ParameterArityError) as excinfo:
		namespace_parameter(attrs, "my::ns")
	assert str(excinfo.value) == "Expected exactly one parameter for `#[my::ns(..)]`."


def test_namespace_parameter_counts_marker_and_list_forms() -> None:
	attrs = _attrs("#[ns] #[ns(a)] struct S;")
	with pytest.raises(ParameterArityError) as excinfo:
		namespace_parameter(attrs, "ns")
	assert str(excinfo.value) == "Expected exactly one parameter for `#[ns(..)]`."
	assert excinfo.value.parameters == parse_nested("a")

	with pytest.raises(ParameterArityError):
		namespace_parameter(_attrs('#[ns(a)] #[ns = "b"] struct S;'), "ns")


def test_namespace_parameter_rejects_empty_list() -> None:
	with pytest.raises(ParameterArityError):
		namespace_parameter(_attrs("#[namespace()] struct S;"), "namespace")


def test_namespace_parameters_flattens_all_lists() -> None:
	attrs = _attrs(
		"""
		#[namespace(One)]
		#[namespace(two = "", 3, tag(four))]
		struct S;
		"""
	)
	assert namespace_parameters(attrs, "namespace") == [
		PathEntry(Path(("One",))),
		KeyValueEntry(Path(("two",)), Lit(LitKind.STR, "")),
		LiteralEntry(Lit(LitKind.INT, 3)),
		ListEntry(Path(("tag",)), (PathEntry(Path(("four",))),)),
	]
	assert namespace_parameters(attrs, "missing") == []


def test_tag_parameter_returns_none_when_not_present() -> None:
	attrs = _attrs("#[my_derive] struct S;")
	assert tag_parameter(attrs, "my_derive", "tag_name") is None


def test_tag_parameter_returns_parameter_when_present() -> None:
	attrs = _attrs("#[my_derive(tag_name(Magic))] struct S;")
	assert tag_parameter(attrs, "my_derive", "tag_name") == PathEntry(Path(("Magic",)))
	assert tag_parameter(attrs, "my_derive", "tag_other") is None


def test_tag_parameter_rejects_multiple_parameters() -> None:
	attrs = _attrs("#[my_derive(tag_name(Magic, Magic2))] struct S;")
	with pytest.raises(ParameterArityError) as excinfo:
		tag_parameter(attrs, "my_derive", "tag_name")
	assert str(excinfo.value) == "Expected exactly one identifier for `#[my_derive(tag_name(..))]`."


def test_tag_parameter_counts_across_annotations() -> None:
	attrs = _attrs("#[ns(tag(a))] #[ns(tag(b))] struct S;")
	with pytest.raises(ParameterArityError):
		tag_parameter(attrs, "ns", "tag")


def test_tag_parameter_message_uses_configured_separator() -> None:
	attrs = _attrs("#[my::ns(tag::name(a, b))] struct S;")
	with pytest.raises(ParameterArityError) as excinfo:
		tag_parameter(attrs, "my::ns", "tag::name", config=RoidsConfig(path_separator="."))
	assert str(excinfo.value) == "Expected exactly one identifier for `#[my.ns(tag.name(..))]`."


def test_tag_parameters_preserve_literal_kinds() -> None:
	attrs = _attrs(
		"""
		#[namespace(tag(One))]
		#[namespace(tag(two = "", 3, 4.5, true))]
		struct S;
		"""
	)
	assert tag_parameters(attrs, "namespace", "tag") == [
		PathEntry(Path(("One",))),
		KeyValueEntry(Path(("two",)), Lit(LitKind.STR, "")),
		LiteralEntry(Lit(LitKind.INT, 3)),
		LiteralEntry(Lit(LitKind.FLOAT, 4.5)),
		LiteralEntry(Lit(LitKind.BOOL, True)),
	]
	assert LiteralEntry(Lit(LitKind.INT, 1)) != LiteralEntry(Lit(LitKind.BOOL, True))


def test_lit_of_infers_kind_from_value() -> None:
	assert Lit.of(True) == Lit(LitKind.BOOL, True)
	assert Lit.of(1) == Lit(LitKind.INT, 1)
	assert Lit.of(1) != Lit.of(True)
	assert Lit.of(4.5) == Lit(LitKind.FLOAT, 4.5)
	assert Lit.of("x") == Lit(LitKind.STR, "x")
	with pytest.raises(TypeError):
		Lit.of(None)


def test_meta_list_contains_uses_structural_equality() -> None:
	derives = parse_attr("#[derive(Clone, my::Copy)]").payload
	assert meta_list_contains(derives, PathEntry(Path(("Clone",))))
	assert meta_list_contains(derives, PathEntry(Path(("my", "Copy"))))
	assert not meta_list_contains(derives, PathEntry(Path(("Copy",))))


def test_nested_meta_to_path_and_ident() -> None:
	one, qualified, literal = parse_nested('One, a::b, "lit"')
	assert nested_meta_to_path(one) == Path(("One",))
	assert nested_meta_to_ident(one) == Ident("One")
	assert nested_meta_to_path(qualified) == Path(("a", "b"))
	assert nested_meta_to_ident(qualified) is None
	assert nested_meta_to_path(literal) is None
	assert nested_meta_to_ident(literal) is None
