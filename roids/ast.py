# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration tree consumed by the attribute/field helpers.

The tree mirrors what a front-end hands to a derive-style code generator: one
`Declaration` (struct or enum), its annotations (`#[...]` attributes) and its
field list. Nodes are plain dataclasses so callers can build them directly or
through `roids.test_support` fixtures.

Leaf values (`Path`, `Lit`, nested entries, payloads) are frozen and compare
structurally. Container nodes (`Annotation`, `Field`, field lists,
`Declaration`) are mutable because the helpers grow them in place. Source
locations never take part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from roids.errors import MetaParseError
from roids.ident import Ident


@dataclass(frozen=True)
class Located:
	line: int
	column: int


@dataclass(frozen=True)
class Path:
	"""
	A non-empty, ordered sequence of name segments (`my::derive`).

	Equality is segment-wise and order-sensitive.
	"""

	segments: Tuple[str, ...]

	def __post_init__(self) -> None:
		if isinstance(self.segments, str):
			raise TypeError(f"Path segments must be a sequence of names, not {self.segments!r}; use Path.parse")
		segments = tuple(self.segments)
		if not segments:
			raise ValueError("Path must have at least one segment")
		if any(not seg for seg in segments):
			raise ValueError(f"Path segments must be non-empty: {segments!r}")
		object.__setattr__(self, "segments", segments)

	@classmethod
	def parse(cls, text: str) -> "Path":
		"""Split `a::b` or `a.b` into a path."""
		sep = "::" if "::" in text else "."
		return cls(tuple(part.strip() for part in text.split(sep)))

	@classmethod
	def ident(cls, name: str) -> "Path":
		return cls((name,))

	def get_ident(self) -> Optional[str]:
		"""Return the single segment, or None for multi-segment paths."""
		if len(self.segments) == 1:
			return self.segments[0]
		return None

	def last(self) -> str:
		return self.segments[-1]

	def __str__(self) -> str:
		return "::".join(self.segments)


class LitKind(Enum):
	STR = "str"
	INT = "int"
	FLOAT = "float"
	BOOL = "bool"


@dataclass(frozen=True)
class Lit:
	"""
	A literal with its source kind.

	The kind takes part in equality so `1` and `true` never compare equal even
	though Python treats `True == 1`.
	"""

	kind: LitKind
	value: Union[str, int, float, bool]

	@classmethod
	def of(cls, value: Union[str, int, float, bool]) -> "Lit":
		if isinstance(value, bool):
			return cls(LitKind.BOOL, value)
		if isinstance(value, int):
			return cls(LitKind.INT, value)
		if isinstance(value, float):
			return cls(LitKind.FLOAT, value)
		if isinstance(value, str):
			return cls(LitKind.STR, value)
		raise TypeError(f"Unsupported literal value: {value!r}")

	def __str__(self) -> str:
		if self.kind is LitKind.STR:
			escaped = str(self.value).replace("\\", "\\\\").replace('"', '\\"')
			return f'"{escaped}"'
		if self.kind is LitKind.BOOL:
			return "true" if self.value else "false"
		return repr(self.value)


# Nested entries: one item inside an annotation's (or a tag's) parameter list.


@dataclass(frozen=True)
class PathEntry:
	"""Bare path parameter: `Clone` in `#[derive(Clone)]`."""

	path: Path


@dataclass(frozen=True)
class ListEntry:
	"""Path with nested parameters: `tag(a, b)` in `#[ns(tag(a, b))]`."""

	path: Path
	entries: Tuple["NestedEntry", ...] = ()

	def __post_init__(self) -> None:
		object.__setattr__(self, "entries", tuple(self.entries))


@dataclass(frozen=True)
class LiteralEntry:
	"""Literal parameter; has no path and never matches a tag lookup."""

	lit: Lit


@dataclass(frozen=True)
class KeyValueEntry:
	"""`key = "value"` parameter."""

	path: Path
	lit: Lit


NestedEntry = Union[PathEntry, ListEntry, LiteralEntry, KeyValueEntry]


def entry_path(entry: NestedEntry) -> Optional[Path]:
	"""Return the path of a nested entry, or None for literals."""
	if isinstance(entry, LiteralEntry):
		return None
	return entry.path


def format_entry(entry: NestedEntry) -> str:
	"""Render a nested entry the way it is written inside `#[...]`."""
	if isinstance(entry, PathEntry):
		return str(entry.path)
	if isinstance(entry, ListEntry):
		inner = ", ".join(format_entry(e) for e in entry.entries)
		return f"{entry.path}({inner})"
	if isinstance(entry, KeyValueEntry):
		return f"{entry.path} = {entry.lit}"
	return str(entry.lit)


# Annotation payloads.


@dataclass(frozen=True)
class Marker:
	"""`#[name]` with no arguments."""


@dataclass(frozen=True)
class ListPayload:
	"""`#[name(a, b(c), d = 1)]`."""

	entries: Tuple[NestedEntry, ...] = ()

	def __post_init__(self) -> None:
		object.__setattr__(self, "entries", tuple(self.entries))


@dataclass(frozen=True)
class KeyValuePayload:
	"""`#[name = "value"]`."""

	lit: Lit


@dataclass(frozen=True)
class Verbatim:
	"""
	Arguments that do not form well-formed metadata (`#[name = a b]`).

	Kept as raw text so the annotation survives a round trip through the
	helpers; matching skips it.
	"""

	text: str


Payload = Union[Marker, ListPayload, KeyValuePayload, Verbatim]
Meta = Union[Marker, ListPayload, KeyValuePayload]


@dataclass
class Annotation:
	path: Path
	payload: Payload = field(default_factory=Marker)
	loc: Optional[Located] = field(default=None, compare=False)

	def parse_meta(self) -> Meta:
		"""
		Return the structured payload.

		Raises MetaParseError when the arguments are not well-formed metadata.
		"""
		if isinstance(self.payload, Verbatim):
			raise MetaParseError(
				f"expected attribute arguments in parentheses or `= literal`, found `{self.payload.text}`",
				loc=self.loc,
			)
		return self.payload

	def __str__(self) -> str:
		payload = self.payload
		if isinstance(payload, ListPayload):
			inner = ", ".join(format_entry(e) for e in payload.entries)
			return f"#[{self.path}({inner})]"
		if isinstance(payload, KeyValuePayload):
			return f"#[{self.path} = {payload.lit}]"
		if isinstance(payload, Verbatim):
			return f"#[{self.path} {payload.text}]"
		return f"#[{self.path}]"


# Types and fields.


@dataclass(frozen=True)
class TypeExpr:
	"""
	Field type.

	`kind` is "path" for `u32` / `std::marker::PhantomData<T>` (path set, args
	are generic arguments), "ref"/"ref_mut" for references (args[0] is the
	referent) and "tuple" for tuple types (args are the elements).
	"""

	path: Optional[Path] = None
	args: Tuple["TypeExpr", ...] = ()
	kind: str = "path"

	def __post_init__(self) -> None:
		object.__setattr__(self, "args", tuple(self.args))
		if self.kind == "path" and self.path is None:
			raise ValueError("path types require a path")

	@classmethod
	def named(cls, name: str, *args: "TypeExpr") -> "TypeExpr":
		return cls(path=Path.parse(name), args=args)

	def __str__(self) -> str:
		if self.kind == "ref":
			return f"&{self.args[0]}"
		if self.kind == "ref_mut":
			return f"&mut {self.args[0]}"
		if self.kind == "tuple":
			inner = ", ".join(str(a) for a in self.args)
			return f"({inner},)" if len(self.args) == 1 else f"({inner})"
		if not self.args:
			return str(self.path)
		return f"{self.path}<{', '.join(str(a) for a in self.args)}>"


@dataclass
class Field:
	ty: TypeExpr
	name: Optional[str] = None
	attrs: List[Annotation] = field(default_factory=list)
	loc: Optional[Located] = field(default=None, compare=False)


@dataclass
class FieldsUnit:
	pass


@dataclass
class FieldsNamed:
	named: List[Field] = field(default_factory=list)


@dataclass
class FieldsUnnamed:
	unnamed: List[Field] = field(default_factory=list)


FieldList = Union[FieldsUnit, FieldsNamed, FieldsUnnamed]


# Declarations.


@dataclass
class StructData:
	fields: FieldList = field(default_factory=FieldsUnit)
	# Trailing `;` of `struct S;` / `struct S(u32);`. Braced structs have none.
	semi: bool = True


@dataclass
class Variant:
	ident: Ident
	fields: FieldList = field(default_factory=FieldsUnit)
	attrs: List[Annotation] = field(default_factory=list)
	loc: Optional[Located] = field(default=None, compare=False)


@dataclass
class EnumData:
	variants: List[Variant] = field(default_factory=list)


Data = Union[StructData, EnumData]


@dataclass
class Declaration:
	ident: Ident
	data: Data = field(default_factory=StructData)
	attrs: List[Annotation] = field(default_factory=list)
	loc: Optional[Located] = field(default=None, compare=False)


__all__ = [
	"Annotation",
	"Data",
	"Declaration",
	"EnumData",
	"Field",
	"FieldList",
	"FieldsNamed",
	"FieldsUnit",
	"FieldsUnnamed",
	"KeyValueEntry",
	"KeyValuePayload",
	"ListEntry",
	"ListPayload",
	"Lit",
	"LitKind",
	"Located",
	"Marker",
	"Meta",
	"NestedEntry",
	"Path",
	"PathEntry",
	"LiteralEntry",
	"Payload",
	"StructData",
	"TypeExpr",
	"Variant",
	"Verbatim",
	"entry_path",
	"format_entry",
]
