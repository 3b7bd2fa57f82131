# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Path comparison and rendering used by every annotation lookup."""

from __future__ import annotations

from roids.ast import Path
from roids.config.settings import DEFAULT_CONFIG, RoidsConfig


def path_eq(a: Path, b: Path) -> bool:
	"""Segment-wise equality. No prefix matching, no case folding."""
	return a.segments == b.segments


def path_is_ident(path: Path, name: str) -> bool:
	"""True if `path` is the single segment `name`."""
	return path.get_ident() == name


def format_path(path: Path, *, config: RoidsConfig = DEFAULT_CONFIG) -> str:
	"""Returns a `Path` as a string without whitespace between segments."""
	return config.path_separator.join(path.segments)


def as_path(value: Path | str) -> Path:
	"""Accept `Path` objects or their string form (`"my::derive"`)."""
	if isinstance(value, Path):
		return value
	return Path.parse(value)


__all__ = ["as_path", "format_path", "path_eq", "path_is_ident"]
