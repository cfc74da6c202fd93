from __future__ import annotations

from collections.abc import Sequence

from jsx_if_for.nodes import (
	JSXEmptyExpression,
	JSXExpressionContainer,
	JSXFragment,
	Node,
)


def wrap_expr_for_parent(expr: Node, parent: Node | None) -> Node:
	"""Wrap a produced expression so it can replace a JSX element in `parent`.

	Among markup children or as an attribute value the bare `{expr}` container
	is enough; anywhere else (an expression slot, including the inside of
	another `{...}`, a return argument, the tree root) the container goes
	inside an empty fragment: `<>{expr}</>`.
	"""
	container = JSXExpressionContainer(expr)
	if (
		parent is not None
		and parent.is_jsx
		and not isinstance(parent, JSXExpressionContainer)
	):
		return container
	return JSXFragment([container])


def wrap_nodes_for_expr(nodes: Sequence[Node]) -> Node:
	"""Turn a list of JSX children into a single expression.

	A lone non-markup child is returned as is, and a lone `{expr}` child as
	its bare expression. Zero or several children, or a single markup child,
	become a fragment holding all of them.
	"""
	if len(nodes) == 1:
		only = nodes[0]
		if not only.is_jsx:
			return only
		if isinstance(only, JSXExpressionContainer) and not isinstance(
			only.expression, JSXEmptyExpression
		):
			return only.expression
	return JSXFragment(list(nodes))
