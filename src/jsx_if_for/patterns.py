"""Conversion of destructuring-capable expressions into binding patterns."""

from __future__ import annotations

from collections.abc import Sequence

from jsx_if_for.errors import fail
from jsx_if_for.nodes import (
	ArrayExpression,
	ArrayPattern,
	Identifier,
	Node,
	ObjectExpression,
	ObjectPattern,
	Property,
	PatternProperty,
	emit,
)


def pattern_from_expr(
	node: Node, context: Sequence[Node | None] = (), file: str | None = None
) -> Node:
	"""Convert an expression into the binding pattern with the same shape.

	`x` -> `x`, `[a, [b, c]]` -> `[a, [b, c]]`, `{a, b: [c]}` -> `{a, b: [c]}`.
	Anything else (spreads, computed keys, methods, literals, calls, ...) is
	rejected with a TransformError. `context` lists the enclosing nodes, used
	only to locate the error.
	"""
	if isinstance(node, Identifier):
		return node

	if isinstance(node, ArrayExpression):
		inner = [*context, node]
		return ArrayPattern(
			[
				None if e is None else pattern_from_expr(e, inner, file)
				for e in node.elements
			],
			loc=node.loc,
			range=node.range,
		)

	if isinstance(node, ObjectExpression):
		inner = [*context, node]
		props: list[Node] = []
		for p in node.properties:
			if (
				not isinstance(p, Property)
				or p.computed
				or p.method
				or p.kind != "init"
				or not isinstance(p.key, Identifier)
			):
				fail(f"Bad object pattern {emit(node)}", [*inner, p], file)
			props.append(
				PatternProperty(
					p.key,
					pattern_from_expr(p.value, inner, file),
					loc=p.loc,
					range=p.range,
				)
			)
		return ObjectPattern(props, loc=node.loc, range=node.range)

	fail(f"Bad pattern {emit(node)}", [*context, node], file)
