# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Errors raised by the attribute/field helpers.

Every violation aborts the current expansion: the helpers never recover, and
the host tool turns the exception into a build-time diagnostic. Message text
is part of the contract (downstream snapshot tests compare it verbatim), so
`str(err)` is always exactly the message.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
	from roids.ast import Located, NestedEntry


@dataclass
class Diagnostic:
	"""Host-facing rendering of an aborted expansion."""

	message: str
	code: Optional[str] = None
	severity: str = "error"
	loc: Optional["Located"] = None
	notes: List[str] = field(default_factory=list)


class RoidsError(ValueError):
	"""Base class for helper aborts."""

	code = "E-ROIDS"

	def __init__(self, message: str, *, loc: "Located | None" = None) -> None:
		super().__init__(message)
		self.message = message
		self.loc = loc

	def __str__(self) -> str:
		return self.message

	def notes(self) -> List[str]:
		return []

	def to_diagnostic(self) -> Diagnostic:
		return Diagnostic(message=self.message, code=self.code, loc=self.loc, notes=self.notes())


class ShapeMismatchError(RoidsError):
	"""A field-list operation was used on a declaration of the wrong shape."""

	code = "E-SHAPE"


class NewtypeArityError(ShapeMismatchError):
	"""`inner_type` on a tuple struct that does not have exactly one field."""

	code = "E-NEWTYPE"

	def __init__(self, message: str, *, field_count: int, loc: "Located | None" = None) -> None:
		super().__init__(message, loc=loc)
		self.field_count = field_count

	def notes(self) -> List[str]:
		return [f"found {self.field_count} fields"]


class DeriveConflictError(RoidsError):
	"""Derives requested by the caller are already listed on the declaration."""

	code = "E-DERIVE"

	def __init__(self, message: str, *, overlap: Sequence[str], loc: "Located | None" = None) -> None:
		super().__init__(message, loc=loc)
		self.overlap = list(overlap)

	def notes(self) -> List[str]:
		return [f"remove `{name}` from the existing `derive` list" for name in self.overlap]


class ParameterArityError(RoidsError):
	"""A single-parameter lookup found zero or several parameters."""

	code = "E-ARITY"

	def __init__(
		self,
		message: str,
		*,
		parameters: Sequence["NestedEntry"] = (),
		loc: "Located | None" = None,
	) -> None:
		super().__init__(message, loc=loc)
		self.parameters = list(parameters)


class MetaParseError(RoidsError):
	"""
	Annotation arguments are not well-formed metadata.

	Only `Annotation.parse_meta()` raises this; the matching helpers skip such
	annotations instead of propagating it.
	"""

	code = "E-META"


def debug_str_list(items: Sequence[str]) -> str:
	"""Render `["a", "b"]` with double-quoted, escaped items."""
	rendered = []
	for item in items:
		escaped = item.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\t", "\\t")
		rendered.append(f'"{escaped}"')
	return "[" + ", ".join(rendered) + "]"


__all__ = [
	"Diagnostic",
	"DeriveConflictError",
	"MetaParseError",
	"NewtypeArityError",
	"ParameterArityError",
	"RoidsError",
	"ShapeMismatchError",
	"debug_str_list",
]
