"""
Postorder tree walker with in-place node replacement and removal.

The walker visits every node reachable through `Node.child_keys()`, children
before parents and left to right among siblings. The `leave` callback gets a
`NodePath` for the node being left and may replace or remove that node; the
walk then continues from the next sibling (or the parent, if it was the last
child) without visiting the replacement.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from jsx_if_for.nodes import Node

LeaveFn = Callable[["NodePath"], None]


@dataclass(slots=True)
class NodePath:
	"""The position of a visited node: its parent, slot and list index."""

	node: Node
	parent: Node | None = None
	key: str | None = None
	index: int | None = None
	replacement: Node | None = field(default=None, repr=False)
	removed: bool = field(default=False, repr=False)

	@property
	def siblings(self) -> list[Node | None] | None:
		"""The list holding the node, or None if the node sits in a single slot."""
		if self.parent is None or self.key is None or self.index is None:
			return None
		return self.parent.get_child(self.key)

	def replace(self, node: Node) -> None:
		"""Replace the current node once the callback returns."""
		if not isinstance(node, Node):  # pyright: ignore[reportUnnecessaryIsInstance]
			raise TypeError(f"Cannot replace a node with {type(node).__name__}")
		self.replacement = node
		self.removed = False

	def remove(self) -> None:
		"""Remove the current node from its parent once the callback returns."""
		self.removed = True
		self.replacement = None


def walk(root: Node, *, leave: LeaveFn) -> Node | None:
	"""Walk `root` in postorder, calling `leave` on every node.

	Returns the root, which differs from the input if the callback replaced
	it, or None if the callback removed it.
	"""
	return _visit(root, None, None, None, leave)


def _visit(
	node: Node,
	parent: Node | None,
	key: str | None,
	index: int | None,
	leave: LeaveFn,
) -> Node | None:
	for child_key in node.child_keys():
		value = node.get_child(child_key)
		if isinstance(value, list):
			i = 0
			while i < len(value):  # pyright: ignore[reportUnknownArgumentType]
				item = value[i]  # pyright: ignore[reportUnknownVariableType]
				if isinstance(item, Node) and _visit(item, node, child_key, i, leave) is None:
					# removed: the next sibling now sits at index i
					continue
				i += 1
		elif isinstance(value, Node):
			_visit(value, node, child_key, None, leave)

	path = NodePath(node, parent, key, index)
	leave(path)

	if path.removed:
		_remove(parent, key, index)
		return None
	if path.replacement is not None:
		_replace(parent, key, index, path.replacement)
		return path.replacement
	return node


def _replace(parent: Node | None, key: str | None, index: int | None, node: Node) -> None:
	if parent is None or key is None:
		return
	if index is None:
		parent.set_child(key, node)
	else:
		parent.get_child(key)[index] = node


def _remove(parent: Node | None, key: str | None, index: int | None) -> None:
	if parent is None or key is None:
		return
	if index is None:
		parent.set_child(key, None)
	else:
		del parent.get_child(key)[index]
