# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Identifier values and concatenation helpers.

No validation is performed: callers pass fragments that combine into a legal
identifier (`Foo` + `Builder` -> `FooBuilder`). No case conversion either.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Ident:
	name: str

	def append(self, suffix: "IdentFragment") -> "Ident":
		"""Return `{self}{suffix}`."""
		return ident_concat(self.name, _fragment(suffix))

	def prepend(self, prefix: "IdentFragment") -> "Ident":
		"""Return `{prefix}{self}`."""
		return ident_concat(_fragment(prefix), self.name)

	def __str__(self) -> str:
		return self.name


IdentFragment = Union[str, int, Ident]


def _fragment(value: IdentFragment) -> str:
	if isinstance(value, Ident):
		return value.name
	if isinstance(value, bool):
		raise TypeError("bool is not an identifier fragment")
	if isinstance(value, (str, int)):
		return str(value)
	raise TypeError(f"Unsupported identifier fragment: {value!r}")


def ident_concat(left: str, right: str) -> Ident:
	"""Returns an `Ident` by concatenating `left` and `right` verbatim."""
	return Ident(left + right)


__all__ = ["Ident", "IdentFragment", "ident_concat"]
