"""
Entry point of the rewrite pass.

Enable the DEBUG level on the `jsx_if_for` logger to trace the rewrites, and
on `jsx_if_for.transform.file` / `jsx_if_for.transform.tree` to dump each
tree before and after the pass as code and as a structural outline.
"""

from __future__ import annotations

import logging

from jsx_if_for.config import TransformOptions
from jsx_if_for.debug import pretty
from jsx_if_for.handlers import Rewriter
from jsx_if_for.nodes import Node, emit
from jsx_if_for.walker import walk

logger = logging.getLogger(__name__)


def transform(
	tree: Node,
	file: str | None = None,
	*,
	options: TransformOptions | None = None,
	log: logging.Logger | None = None,
) -> Node:
	"""Desugar every control-flow element in `tree`, in place.

	`file` labels the tree in log output and errors. `log` replaces the module
	logger as the parent of the diagnostic channels. Raises TransformError on
	the first malformed construct; the tree is then partially rewritten and
	should be discarded.
	"""
	log = log or logger
	label = file or "<tree>"
	file_log = log.getChild("file")
	tree_log = log.getChild("tree")

	_dump(file_log, tree_log, "OLD", label, tree)

	rewriter = Rewriter(options, file=file, log=log)
	result = walk(tree, leave=rewriter.leave)
	if result is None:
		raise ValueError(f"Rewriting removed the root node of {label}")

	_dump(file_log, tree_log, "NEW", label, result)
	return result


def _dump(
	file_log: logging.Logger, tree_log: logging.Logger, tag: str, label: str, tree: Node
) -> None:
	if file_log.isEnabledFor(logging.DEBUG):
		file_log.debug("%s %s\n%s\n", tag, label, emit(tree))
	if tree_log.isEnabledFor(logging.DEBUG):
		tree_log.debug("%s %s\n%s", tag, label, pretty(tree))
