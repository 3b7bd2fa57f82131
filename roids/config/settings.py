# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Knobs shared by the attribute helpers.

Hosts normally use `DEFAULT_CONFIG`. A tool that reserves a different derive
namespace, renders paths with `.` or wants tags to carry parameters builds its
own `RoidsConfig` and passes it as `config=`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Mapping

from roids.ast import Path


class TagMatch(Enum):
	# `#[ns(tag)]`, `#[ns(tag(..))]` and `#[ns(tag = ..)]` all contain `tag`.
	ANY_ENTRY = "any_entry"
	# Only `#[ns(tag(..))]` contains `tag`.
	LIST_ONLY = "list_only"


@dataclass(frozen=True)
class RoidsConfig:
	derive_path: Path = field(default_factory=lambda: Path.ident("derive"))
	path_separator: str = "::"
	tag_match: TagMatch = TagMatch.ANY_ENTRY

	def __post_init__(self) -> None:
		if not self.path_separator:
			raise ValueError("path_separator must be non-empty")

	@classmethod
	def from_mapping(cls, data: Mapping[str, Any]) -> "RoidsConfig":
		"""
		Build a config from plain data (e.g. a host tool's own settings table).

		`derive_path` may be a string (`"derive"`, `"my::derive"`) and
		`tag_match` the enum value string. Unknown keys are rejected.
		"""
		known = {f.name for f in fields(cls)}
		unknown = sorted(set(data) - known)
		if unknown:
			raise ValueError(f"unknown config keys: {', '.join(unknown)}")
		kwargs: dict[str, Any] = dict(data)
		derive_path = kwargs.get("derive_path")
		if isinstance(derive_path, str):
			kwargs["derive_path"] = Path.parse(derive_path)
		tag_match = kwargs.get("tag_match")
		if isinstance(tag_match, str):
			kwargs["tag_match"] = TagMatch(tag_match)
		return cls(**kwargs)


DEFAULT_CONFIG = RoidsConfig()


__all__ = ["DEFAULT_CONFIG", "RoidsConfig", "TagMatch"]
