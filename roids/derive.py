# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Appending to `#[derive(..)]`.

Attribute macros that synthesize a capability (say `Clone`) also add it to the
item's derive list. If the user already listed it, silently dropping or
duplicating the entry would hide a mistake, so the merge aborts and names
every overlapping derive instead.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple, Union

from roids.ast import Annotation, Declaration, ListPayload, LiteralEntry, NestedEntry, Path, PathEntry
from roids.attrs import meta_list_contains, well_formed_metas
from roids.config.settings import DEFAULT_CONFIG, RoidsConfig
from roids.errors import DeriveConflictError, debug_str_list
from roids.path import format_path, path_eq

logger = logging.getLogger(__name__)

DERIVE_CONFLICT_MESSAGE = "The following are automatically derived when this attribute is used:\n{overlap}"


def _derive_entry(value: Union[NestedEntry, str]) -> NestedEntry:
	if isinstance(value, str):
		return PathEntry(Path.parse(value))
	return value


def _format_derive(entry: NestedEntry, config: RoidsConfig) -> str:
	if isinstance(entry, LiteralEntry):
		return str(entry.lit)
	return format_path(entry.path, config=config)


def _find_derive(decl: Declaration, derive_path: Path) -> Optional[Tuple[int, ListPayload]]:
	for attr, meta in well_formed_metas(decl.attrs):
		if path_eq(attr.path, derive_path) and isinstance(meta, ListPayload):
			# Identity lookup: equal annotations may appear more than once.
			index = next(i for i, candidate in enumerate(decl.attrs) if candidate is attr)
			return index, meta
	return None


def append_derives(
	decl: Declaration,
	derives: Iterable[Union[NestedEntry, str]],
	*,
	config: RoidsConfig = DEFAULT_CONFIG,
) -> None:
	"""
	Appends derives to the declaration's `#[derive(..)]`.

	* If there is no `derive` attribute, `#[derive(derives..)]` is appended to
	  the attribute list.
	* If there is one and none of `derives` is already in it, its list becomes
	  the existing entries followed by `derives`, at the same attribute index.
	* Otherwise DeriveConflictError is raised listing the overlapping derives
	  in `derives` order, and the declaration is left untouched.
	"""
	to_append: List[NestedEntry] = [_derive_entry(d) for d in derives]
	existing = _find_derive(decl, config.derive_path)

	if existing is None:
		decl.attrs.append(Annotation(path=config.derive_path, payload=ListPayload(to_append)))
		logger.debug(
			"added `#[%s(..)]` to `%s` with %d entries",
			format_path(config.derive_path, config=config),
			decl.ident,
			len(to_append),
		)
		return

	index, derives_existing = existing
	superfluous = [
		_format_derive(entry, config)
		for entry in to_append
		if meta_list_contains(derives_existing, entry)
	]
	if superfluous:
		raise DeriveConflictError(
			DERIVE_CONFLICT_MESSAGE.format(overlap=debug_str_list(superfluous)),
			overlap=superfluous,
			loc=decl.attrs[index].loc,
		)

	old = decl.attrs[index]
	decl.attrs[index] = Annotation(
		path=old.path,
		payload=ListPayload(derives_existing.entries + tuple(to_append)),
		loc=old.loc,
	)
	logger.debug("extended derive list of `%s` with %d entries", decl.ident, len(to_append))


__all__ = ["DERIVE_CONFLICT_MESSAGE", "append_derives"]
