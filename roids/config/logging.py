# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
structlog wiring for hosts that want to see what the helpers did.

The helpers log through stdlib loggers under the `roids` namespace (DEBUG for
tree mutations and skipped malformed annotations). Nothing is emitted unless
the host configures logging; `configure_logging` is the one-call way to do it.
"""

from __future__ import annotations

import logging
import sys

import structlog

_HANDLER_NAME = "roids.structlog"


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
	"""
	Route `roids` log records through structlog's formatter on stderr.

	Only the `roids` logger is touched: the handler is attached there and
	propagation is turned off, so the host's root handlers stay as they are.
	Calling this again replaces the handler it installed before.

	Args:
	  verbose: show `roids` DEBUG records; otherwise WARNING and above only.
	  log_json: render JSON lines instead of the console renderer.
	"""
	roids_level = logging.DEBUG if verbose else logging.WARNING

	shared_processors: list[structlog.types.Processor] = [
		structlog.contextvars.merge_contextvars,
		structlog.stdlib.add_log_level,
		structlog.stdlib.add_logger_name,
		structlog.processors.TimeStamper(fmt="iso"),
		structlog.processors.StackInfoRenderer(),
		structlog.processors.UnicodeDecoder(),
	]

	if log_json:
		renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
	else:
		renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

	formatter = structlog.stdlib.ProcessorFormatter(
		foreign_pre_chain=shared_processors,
		processors=[
			structlog.stdlib.ProcessorFormatter.remove_processors_meta,
			renderer,
		],
	)

	handler = logging.StreamHandler(sys.stderr)
	handler.setFormatter(formatter)
	handler.set_name(_HANDLER_NAME)

	roids_logger = logging.getLogger("roids")
	for existing in list(roids_logger.handlers):
		if existing.get_name() == _HANDLER_NAME:
			roids_logger.removeHandler(existing)
	roids_logger.addHandler(handler)
	roids_logger.setLevel(roids_level)
	roids_logger.propagate = False


__all__ = ["configure_logging"]
