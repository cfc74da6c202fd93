from __future__ import annotations

from collections.abc import Sequence
from typing import NoReturn

from jsx_if_for.nodes import Node, Position, SourceLocation

SOURCE = "jsx-if-for"


class TransformError(Exception):
	"""Fatal error that aborts the whole rewrite pass.

	Carries a human-readable `reason`, the `source` namespace of the pass and,
	when one of the offending nodes had location metadata, the `place` it
	covers (with byte offsets when the host parser recorded a range).
	"""

	reason: str
	source: str
	place: SourceLocation | None
	file: str | None
	fatal: bool

	def __init__(
		self,
		reason: str,
		*,
		place: SourceLocation | None = None,
		file: str | None = None,
		source: str = SOURCE,
	) -> None:
		super().__init__(reason)
		self.reason = reason
		self.place = place
		self.file = file
		self.source = source
		self.fatal = True

	@property
	def line(self) -> int | None:
		return self.place.start.line if self.place else None

	@property
	def column(self) -> int | None:
		return self.place.start.column if self.place else None

	def __str__(self) -> str:
		parts: list[str] = []
		if self.file:
			parts.append(self.file)
		if self.place is not None:
			start, end = self.place.start, self.place.end
			parts.append(f"{start.line}:{start.column}-{end.line}:{end.column}")
		if parts:
			return f"{':'.join(parts)}: {self.reason}"
		return self.reason


def locate(context: Sequence[Node | None]) -> SourceLocation | None:
	"""Location of the most specific node in `context` that has one."""
	for node in reversed(context):
		if node is None or node.loc is None:
			continue
		start, end = node.loc.start, node.loc.end
		if node.range is not None:
			start = Position(start.line, start.column, node.range[0])
			end = Position(end.line, end.column, node.range[1])
		return SourceLocation(start, end)
	return None


def fail(
	reason: str, context: Sequence[Node | None] = (), file: str | None = None
) -> NoReturn:
	"""Raise a TransformError anchored at the innermost located context node.

	`context` is ordered from ancestor to descendant.
	"""
	raise TransformError(reason, place=locate(context), file=file)
