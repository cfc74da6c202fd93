from __future__ import annotations

from jsx_if_for.nodes import (
	ConditionalExpression,
	JSXExpressionContainer,
	JSXFragment,
	JSXText,
	Node,
	is_null_literal,
)
from jsx_if_for.walker import NodePath


def find_open_branch(path: NodePath) -> ConditionalExpression | None:
	"""Find the open end of the conditional chain preceding `path.node`.

	The preceding sibling is what an earlier <if>/<else-if> was rewritten
	into: `{cond ? a : null}` or `<>{cond ? a : null}</>`, possibly with
	further conditionals nested in the alternate. Returns the conditional
	whose `alternate` is the null sentinel, so the caller can fill it in
	place, or None if there is no chain or the chain was already closed by
	an <else>.

	Whitespace-only text spanning a line break is skipped, as JSX drops it;
	a plain space between siblings is kept by JSX and ends the search.
	"""
	siblings = path.siblings
	if siblings is None or path.index is None:
		return None

	i = path.index - 1
	while i >= 0 and _is_blank(siblings[i]):
		i -= 1
	if i < 0:
		return None
	node: Node | None = siblings[i]

	while isinstance(node, JSXFragment):
		node = node.children[-1] if node.children else None
	if isinstance(node, JSXExpressionContainer):
		node = node.expression

	if not isinstance(node, ConditionalExpression):
		return None
	while isinstance(node.alternate, ConditionalExpression):
		node = node.alternate
	if not is_null_literal(node.alternate):
		return None
	return node


def _is_blank(node: Node | None) -> bool:
	return isinstance(node, JSXText) and not node.value.strip() and "\n" in node.value
