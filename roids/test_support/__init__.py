# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Fixture reader for tests: declaration snippets -> `roids.ast` nodes.

Writing `parse_decl("#[derive(Debug)] struct S;")` reads much closer to what a
front-end hands to the helpers than nesting dataclass constructors. The
grammar covers the subset the tests need: attributes, `pub`, unit / braced /
tuple structs, enums, and path, reference and tuple types.

Attribute arguments are parsed as token trees first and then interpreted as
metadata; arguments that do not form metadata become `Verbatim` payloads, the
same way a malformed attribute reaches the helpers in real use.
"""

from __future__ import annotations

import codecs
from pathlib import Path as FsPath
from typing import List, Optional, Sequence

from lark import Lark, Token, Tree

from roids.ast import (
	Annotation,
	Declaration,
	EnumData,
	Field,
	FieldList,
	FieldsNamed,
	FieldsUnit,
	FieldsUnnamed,
	KeyValueEntry,
	KeyValuePayload,
	ListEntry,
	ListPayload,
	Lit,
	LiteralEntry,
	Located,
	Marker,
	NestedEntry,
	Path,
	PathEntry,
	Payload,
	StructData,
	TypeExpr,
	Variant,
	Verbatim,
)
from roids.ident import Ident

_GRAMMAR_PATH = FsPath(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start=["decl", "attribute", "path", "type"],
	propagate_positions=True,
	maybe_placeholders=False,
)

_LITERAL_TOKENS = {"STRING", "INT", "FLOAT", "TRUE", "FALSE"}


class NotMetaError(ValueError):
	"""Token tree does not form attribute metadata."""


def parse_decl(source: str) -> Declaration:
	return _build_decl(_PARSER.parse(source, start="decl"))


def parse_attr(source: str) -> Annotation:
	"""Parse one attribute, e.g. `#[ns(tag(One))]`."""
	return _build_attribute(_PARSER.parse(source, start="attribute"))


def parse_path(source: str) -> Path:
	return _build_path(_PARSER.parse(source, start="path"))


def parse_type(source: str) -> TypeExpr:
	return _build_type(_PARSER.parse(source, start="type"))


def parse_nested(source: str) -> List[NestedEntry]:
	"""Parse a parameter list body, e.g. `Clone, Copy` or `tag(a), key = 1`."""
	attr = parse_attr(f"#[_({source})]")
	if isinstance(attr.payload, Verbatim):
		raise NotMetaError(f"not a parameter list: `{source}`")
	assert isinstance(attr.payload, ListPayload)
	return list(attr.payload.entries)


def parse_fields_named(source: str) -> FieldsNamed:
	"""Parse `{ a: u32, b: i32 }`."""
	fields = _struct_fields(f"struct _ {source}")
	if not isinstance(fields, FieldsNamed):
		raise ValueError(f"not a named field list: `{source}`")
	return fields


def parse_fields_unnamed(source: str) -> FieldsUnnamed:
	"""Parse `(i64, usize)`."""
	fields = _struct_fields(f"struct _ {source};")
	if not isinstance(fields, FieldsUnnamed):
		raise ValueError(f"not an unnamed field list: `{source}`")
	return fields


def _struct_fields(source: str) -> FieldList:
	decl = parse_decl(source)
	assert isinstance(decl.data, StructData)
	return decl.data.fields


# Tree builders.


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


def _loc(tree: Tree) -> Optional[Located]:
	meta = tree.meta
	if getattr(meta, "empty", True):
		return None
	return Located(line=meta.line, column=meta.column)


def _subtrees(tree: Tree, name: str) -> List[Tree]:
	return [c for c in tree.children if isinstance(c, Tree) and _name(c) == name]


def _first_subtree(tree: Tree, names: Sequence[str]) -> Optional[Tree]:
	return next((c for c in tree.children if isinstance(c, Tree) and _name(c) in names), None)


def _name_token(tree: Tree) -> Token:
	return next(c for c in tree.children if isinstance(c, Token) and c.type == "NAME")


def _build_decl(tree: Tree) -> Declaration:
	attrs = [_build_attribute(a) for a in _subtrees(tree, "attribute")]
	body = _first_subtree(tree, ("struct_def", "enum_def"))
	if body is None:
		raise ValueError("declaration missing struct/enum body")
	ident = Ident(_name_token(body).value)
	if _name(body) == "struct_def":
		struct_body = next(c for c in body.children if isinstance(c, Tree))
		fields = _build_fields(struct_body)
		data = StructData(fields=fields, semi=_name(struct_body) != "named_body")
		return Declaration(ident=ident, data=data, attrs=attrs, loc=_loc(tree))
	variants_node = _first_subtree(body, ("variants",))
	variants = [_build_variant(v) for v in _subtrees(variants_node, "variant")] if variants_node else []
	return Declaration(ident=ident, data=EnumData(variants=variants), attrs=attrs, loc=_loc(tree))


def _build_fields(body: Tree) -> FieldList:
	kind = _name(body)
	if kind == "unit_body":
		return FieldsUnit()
	if kind in {"named_body", "variant_named"}:
		node = _first_subtree(body, ("named_fields",))
		named = [_build_field(f, named=True) for f in _subtrees(node, "named_field")] if node else []
		return FieldsNamed(named)
	if kind in {"tuple_body", "variant_tuple"}:
		node = _first_subtree(body, ("unnamed_fields",))
		unnamed = [_build_field(f, named=False) for f in _subtrees(node, "unnamed_field")] if node else []
		return FieldsUnnamed(unnamed)
	raise ValueError(f"unexpected struct body `{kind}`")


def _build_field(tree: Tree, *, named: bool) -> Field:
	attrs = [_build_attribute(a) for a in _subtrees(tree, "attribute")]
	type_node = _first_subtree(tree, ("path_type", "ref_type", "ref_mut_type", "tuple_type"))
	assert type_node is not None
	name = _name_token(tree).value if named else None
	return Field(ty=_build_type(type_node), name=name, attrs=attrs, loc=_loc(tree))


def _build_variant(tree: Tree) -> Variant:
	attrs = [_build_attribute(a) for a in _subtrees(tree, "attribute")]
	fields_node = _first_subtree(tree, ("variant_named", "variant_tuple"))
	fields = _build_fields(fields_node) if fields_node is not None else FieldsUnit()
	return Variant(ident=Ident(_name_token(tree).value), fields=fields, attrs=attrs, loc=_loc(tree))


def _build_path(tree: Tree) -> Path:
	return Path(tuple(c.value for c in tree.children if isinstance(c, Token) and c.type == "NAME"))


def _build_type(tree: Tree) -> TypeExpr:
	kind = _name(tree)
	if kind == "path_type":
		path = _build_path(_first_subtree(tree, ("path",)))
		args_node = _first_subtree(tree, ("generic_args",))
		args = [_build_type(a) for a in args_node.children if isinstance(a, Tree)] if args_node else []
		return TypeExpr(path=path, args=tuple(args))
	inner = [_build_type(c) for c in tree.children if isinstance(c, Tree)]
	if kind == "ref_type":
		return TypeExpr(args=tuple(inner), kind="ref")
	if kind == "ref_mut_type":
		return TypeExpr(args=tuple(inner), kind="ref_mut")
	if kind == "tuple_type":
		return TypeExpr(args=tuple(inner), kind="tuple")
	raise ValueError(f"unexpected type node `{kind}`")


# Attributes: token trees -> metadata.


def _build_attribute(tree: Tree) -> Annotation:
	path = _build_path(_first_subtree(tree, ("path",)))
	args = _first_subtree(tree, ("paren_args", "eq_args"))
	return Annotation(path=path, payload=_build_payload(args), loc=_loc(tree))


def _build_payload(args: Optional[Tree]) -> Payload:
	if args is None:
		return Marker()
	tts = [c for c in args.children if isinstance(c, Tree)]
	try:
		if _name(args) == "paren_args":
			return ListPayload(_entries(tts))
		if len(tts) != 1 or not _is_literal(tts[0]):
			raise NotMetaError("expected a single literal after `=`")
		return KeyValuePayload(_lit(tts[0].children[0]))
	except NotMetaError:
		prefix = "= " if _name(args) == "eq_args" else ""
		body = " ".join(_render_tt(t) for t in tts)
		return Verbatim(f"{prefix}{body}" if prefix else f"({body})")


def _entries(tts: List[Tree]) -> List[NestedEntry]:
	entries: List[NestedEntry] = []
	current: List[Tree] = []
	for tt in tts:
		if _token_type(tt) == "COMMA":
			if not current:
				raise NotMetaError("empty parameter")
			entries.append(_entry(current))
			current = []
		else:
			current.append(tt)
	if current:
		entries.append(_entry(current))
	return entries


def _entry(tts: List[Tree]) -> NestedEntry:
	if len(tts) == 1 and _is_literal(tts[0]):
		return LiteralEntry(_lit(tts[0].children[0]))
	path, rest = _take_path(tts)
	if not rest:
		return PathEntry(path)
	if len(rest) == 1 and _name(rest[0]) == "tt_group":
		inner = [c for c in rest[0].children if isinstance(c, Tree)]
		return ListEntry(path, tuple(_entries(inner)))
	if len(rest) == 2 and _token_type(rest[0]) == "EQ" and _is_literal(rest[1]):
		return KeyValueEntry(path, _lit(rest[1].children[0]))
	raise NotMetaError("malformed parameter")


def _take_path(tts: List[Tree]) -> tuple[Path, List[Tree]]:
	segments: List[str] = []
	i = 0
	while i < len(tts) and _token_type(tts[i]) == "NAME":
		segments.append(tts[i].children[0].value)
		i += 1
		if i < len(tts) and _token_type(tts[i]) == "PATHSEP":
			i += 1
			continue
		break
	if not segments or _token_type(tts[i - 1]) == "PATHSEP":
		raise NotMetaError("expected a path")
	return Path(tuple(segments)), tts[i:]


def _token_type(tt: Tree) -> Optional[str]:
	if _name(tt) != "tt_token":
		return None
	return tt.children[0].type


def _is_literal(tt: Tree) -> bool:
	return _token_type(tt) in _LITERAL_TOKENS


def _lit(tok: Token) -> Lit:
	if tok.type == "STRING":
		return Lit.of(_decode_string_token(tok))
	if tok.type == "INT":
		return Lit.of(int(tok.value))
	if tok.type == "FLOAT":
		return Lit.of(float(tok.value))
	return Lit.of(tok.type == "TRUE")


def _decode_string_token(tok: Token) -> str:
	"""
	Decode STRING tokens. Python-style escapes are interpreted first, then the
	code points are reinterpreted as latin-1 bytes and decoded as UTF-8 so
	non-ASCII source text survives.
	"""
	content = tok.value[1:-1]
	unescaped = codecs.decode(content, "unicode_escape")
	return unescaped.encode("latin-1").decode("utf-8")


def _render_tt(tt: Tree) -> str:
	if _name(tt) == "tt_group":
		inner = [c for c in tt.children if isinstance(c, Tree)]
		return "(" + " ".join(_render_tt(c) for c in inner) + ")"
	return tt.children[0].value


__all__ = [
	"NotMetaError",
	"parse_attr",
	"parse_decl",
	"parse_fields_named",
	"parse_fields_unnamed",
	"parse_nested",
	"parse_path",
	"parse_type",
]
