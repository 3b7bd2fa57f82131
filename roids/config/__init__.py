# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from roids.config.logging import configure_logging
from roids.config.settings import DEFAULT_CONFIG, RoidsConfig, TagMatch

__all__ = ["DEFAULT_CONFIG", "RoidsConfig", "TagMatch", "configure_logging"]
