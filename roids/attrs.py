# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Namespaced attribute lookups.

Terminology, using `#[my::ns(tag(One, two = ""), flag)]`:
- namespace: the annotation path (`my::ns`);
- tag: a path inside the namespace list (`tag`, `flag`);
- parameters: the entries of a tag's own list (`One`, `two = ""`), or, for
  namespace-level lookups, the entries of the namespace list itself.

All lookups are best-effort: annotations whose arguments are not well-formed
metadata are skipped, never reported.

`namespace_meta_lists_iter` and `tag_meta_lists_iter` return lazy views that
can be iterated more than once; each iteration walks the annotation list
again, so the views see in-place edits made between iterations.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from roids.ast import (
	Annotation,
	ListEntry,
	ListPayload,
	LiteralEntry,
	Meta,
	NestedEntry,
	Path,
	entry_path,
)
from roids.config.settings import DEFAULT_CONFIG, RoidsConfig, TagMatch
from roids.errors import MetaParseError, ParameterArityError
from roids.ident import Ident
from roids.path import as_path, format_path, path_eq

logger = logging.getLogger(__name__)

PathLike = Union[Path, str]


def well_formed_metas(attrs: Iterable[Annotation]) -> Iterator[Tuple[Annotation, Meta]]:
	"""Yield `(annotation, meta)` for every annotation with parseable arguments."""
	for attr in attrs:
		try:
			meta = attr.parse_meta()
		except MetaParseError as err:
			logger.debug("skipping malformed attribute `%s`: %s", attr.path, err)
			continue
		yield attr, meta


def find_by_namespace(attrs: Iterable[Annotation], namespace: PathLike) -> List[Annotation]:
	"""Return every well-formed annotation whose path is `namespace`, in order."""
	ns = as_path(namespace)
	return [attr for attr, _meta in well_formed_metas(attrs) if path_eq(attr.path, ns)]


def contains_namespace(attrs: Iterable[Annotation], namespace: PathLike) -> bool:
	"""Returns whether the attributes contain `#[namespace..]` in any form."""
	return bool(find_by_namespace(attrs, namespace))


class NamespaceLists:
	"""
	Lazy view over the `#[namespace(..)]` lists of an item.

	Each element is the `ListPayload` of one matching annotation. Marker and
	key/value forms (`#[namespace]`, `#[namespace = ".."]`) carry no list and
	are not included.
	"""

	def __init__(self, attrs: Sequence[Annotation], namespace: PathLike) -> None:
		self._attrs = attrs
		self.namespace = as_path(namespace)

	def __iter__(self) -> Iterator[ListPayload]:
		for attr, meta in well_formed_metas(self._attrs):
			if path_eq(attr.path, self.namespace) and isinstance(meta, ListPayload):
				yield meta

	def parameters(self) -> Iterator[NestedEntry]:
		"""Every entry of every matching list, flattened in order."""
		for meta_list in self:
			yield from meta_list.entries

	def tags(self, tag: PathLike) -> "TagLists":
		return TagLists(self, tag)


class TagLists:
	"""
	Lazy view over the `tag(..)` entries found inside namespace lists.

	Re-iterable as long as `namespace_lists` is (a list, a tuple or a
	`NamespaceLists` view).
	"""

	def __init__(self, namespace_lists: Iterable[ListPayload], tag: PathLike) -> None:
		self._namespace_lists = namespace_lists
		self.tag = as_path(tag)

	def __iter__(self) -> Iterator[ListEntry]:
		for meta_list in self._namespace_lists:
			for entry in meta_list.entries:
				# `entry` is the `tag(..)` item.
				if isinstance(entry, ListEntry) and path_eq(entry.path, self.tag):
					yield entry

	def parameters(self) -> Iterator[NestedEntry]:
		for tag_list in self:
			yield from tag_list.entries


def namespace_meta_lists_iter(attrs: Sequence[Annotation], namespace: PathLike) -> NamespaceLists:
	"""Returns the meta lists of the form `#[namespace(..)]` as a lazy view."""
	return NamespaceLists(attrs, namespace)


def namespace_meta_lists(attrs: Sequence[Annotation], namespace: PathLike) -> List[ListPayload]:
	"""Returns the meta lists of the form `#[namespace(..)]`."""
	return list(namespace_meta_lists_iter(attrs, namespace))


def tag_meta_lists_iter(namespace_lists: Iterable[ListPayload], tag: PathLike) -> TagLists:
	"""Returns the `tag(..)` entries found in `#[namespace(tag(..))]` lists."""
	return TagLists(namespace_lists, tag)


def tag_meta_lists(namespace_lists: Iterable[ListPayload], tag: PathLike) -> List[ListEntry]:
	return list(tag_meta_lists_iter(namespace_lists, tag))


def find_tag(attrs: Sequence[Annotation], namespace: PathLike, tag: PathLike) -> List[NestedEntry]:
	"""
	Returns the parameters of every `#[namespace(tag(..))]`, flattened.

	Order follows the annotations, then the entries within each tag list.
	"""
	return list(namespace_meta_lists_iter(attrs, namespace).tags(tag).parameters())


def contains_tag(
	attrs: Sequence[Annotation],
	namespace: PathLike,
	tag: PathLike,
	*,
	config: RoidsConfig = DEFAULT_CONFIG,
) -> bool:
	"""
	Returns whether an item's attributes contain `#[namespace(tag..)]`.

	With the default `TagMatch.ANY_ENTRY`, the tag counts as present whether it
	is written bare (`tag`), with parameters (`tag(..)`) or as a key/value pair
	(`tag = ..`). `TagMatch.LIST_ONLY` only accepts `tag(..)`.
	"""
	tag_path = as_path(tag)
	for meta_list in namespace_meta_lists_iter(attrs, namespace):
		for entry in meta_list.entries:
			if config.tag_match is TagMatch.LIST_ONLY and not isinstance(entry, ListEntry):
				continue
			path = entry_path(entry)
			if path is not None and path_eq(path, tag_path):
				return True
	return False


def namespace_parameter(
	attrs: Sequence[Annotation],
	namespace: PathLike,
	*,
	config: RoidsConfig = DEFAULT_CONFIG,
) -> Optional[NestedEntry]:
	"""
	Returns the parameter from `#[namespace(parameter)]`.

	Returns None when the item has no `#[namespace..]`, or when its only
	`#[namespace..]` carries no list (`#[namespace]`, `#[namespace = ..]`).

	Raises ParameterArityError if `#[namespace..]` appears more than once in
	any form, or if its list does not hold exactly one parameter.
	"""
	ns = as_path(namespace)
	matching = find_by_namespace(attrs, ns)
	if not matching:
		return None
	error_message = f"Expected exactly one parameter for `#[{format_path(ns, config=config)}(..)]`."
	if len(matching) > 1:
		raise ParameterArityError(
			error_message,
			parameters=[
				entry
				for attr in matching
				if isinstance(attr.payload, ListPayload)
				for entry in attr.payload.entries
			],
			loc=matching[1].loc,
		)
	payload = matching[0].payload
	if not isinstance(payload, ListPayload):
		return None
	if len(payload.entries) != 1:
		raise ParameterArityError(error_message, parameters=payload.entries, loc=matching[0].loc)
	return payload.entries[0]


def namespace_parameters(attrs: Sequence[Annotation], namespace: PathLike) -> List[NestedEntry]:
	"""Returns the parameters from every `#[namespace(param1, param2, ..)]`."""
	return list(namespace_meta_lists_iter(attrs, namespace).parameters())


def tag_parameter(
	attrs: Sequence[Annotation],
	namespace: PathLike,
	tag: PathLike,
	*,
	config: RoidsConfig = DEFAULT_CONFIG,
) -> Optional[NestedEntry]:
	"""
	Returns the parameter from `#[namespace(tag(parameter))]`.

	Raises ParameterArityError if the tag lists hold more than one parameter
	between them.
	"""
	ns = as_path(namespace)
	tag_path = as_path(tag)
	parameters = find_tag(attrs, ns, tag_path)
	if not parameters:
		return None
	if len(parameters) > 1:
		raise ParameterArityError(
			"Expected exactly one identifier for "
			f"`#[{format_path(ns, config=config)}({format_path(tag_path, config=config)}(..))]`.",
			parameters=parameters,
		)
	return parameters[0]


def tag_parameters(attrs: Sequence[Annotation], namespace: PathLike, tag: PathLike) -> List[NestedEntry]:
	"""Returns the parameters from `#[namespace(tag(param1, param2, ..))]`."""
	return find_tag(attrs, namespace, tag)


def meta_list_contains(entries: Union[ListPayload, Iterable[NestedEntry]], operand: NestedEntry) -> bool:
	"""
	Returns whether the list contains an entry structurally equal to `operand`.

	This can be used to check if a `#[derive(..)]` contains `SomeDerive`.
	"""
	if isinstance(entries, ListPayload):
		entries = entries.entries
	return any(entry == operand for entry in entries)


def nested_meta_to_path(entry: NestedEntry) -> Optional[Path]:
	"""Returns the path of a nested entry. Literals have none."""
	return entry_path(entry)


def nested_meta_to_ident(entry: NestedEntry) -> Optional[Ident]:
	"""Returns the identifier of a single-segment path entry, else None."""
	if isinstance(entry, LiteralEntry):
		return None
	name = entry.path.get_ident()
	return Ident(name) if name is not None else None


__all__ = [
	"NamespaceLists",
	"TagLists",
	"contains_namespace",
	"contains_tag",
	"find_by_namespace",
	"find_tag",
	"meta_list_contains",
	"namespace_meta_lists",
	"namespace_meta_lists_iter",
	"namespace_parameter",
	"namespace_parameters",
	"nested_meta_to_ident",
	"nested_meta_to_path",
	"tag_meta_lists",
	"tag_meta_lists_iter",
	"tag_parameter",
	"tag_parameters",
	"well_formed_metas",
]
