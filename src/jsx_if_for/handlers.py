"""
Element handlers for the control-flow constructs and the node-kind dispatcher.

Every handler validates the construct's attributes, builds the replacement
expression and either replaces the element (`if`, `for`, `let`) or fills the
open branch of the preceding chain and removes itself (`else-if`, `else`):

	<for var={x} of={xs}>...</for>      ->  {xs.map((x) => ...)}
	<if test={a}>...</if>               ->  {a ? ... : null}
	<else-if test={b}>...</else-if>     ->  fills null with: b ? ... : null
	<else>...</else>                    ->  fills null with: ...
	<let var={x} value={v}>...</let>    ->  {((x) => ...)(v)}
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import cast

from jsx_if_for.chain import find_open_branch
from jsx_if_for.config import Construct, TransformOptions
from jsx_if_for.errors import fail
from jsx_if_for.nodes import (
	ArrowFunctionExpression,
	CallExpression,
	ConditionalExpression,
	EmptyStatement,
	Identifier,
	JSXAttribute,
	JSXElement,
	JSXEmptyExpression,
	JSXExpressionContainer,
	JSXFragment,
	JSXIdentifier,
	Literal,
	MemberExpression,
	Node,
	emit,
	null_literal,
)
from jsx_if_for.patterns import pattern_from_expr
from jsx_if_for.walker import NodePath
from jsx_if_for.wrapping import wrap_expr_for_parent, wrap_nodes_for_expr

logger = logging.getLogger(__name__)

ElementHandler = Callable[[JSXElement, NodePath], None]


class Rewriter:
	"""Dispatches visited nodes to the construct handlers.

	One instance serves one pass over one tree; `leave` is the walker
	callback.
	"""

	options: TransformOptions
	file: str | None
	log: logging.Logger
	element_handlers: dict[str, ElementHandler]

	def __init__(
		self,
		options: TransformOptions | None = None,
		*,
		file: str | None = None,
		log: logging.Logger | None = None,
	) -> None:
		self.options = options or TransformOptions()
		self.file = file
		self.log = log or logger
		handlers: dict[Construct, ElementHandler] = {
			Construct.FOR: self.rewrite_for,
			Construct.IF: self.rewrite_if,
			Construct.ELSE_IF: self.rewrite_else_if,
			Construct.ELSE: self.rewrite_else,
			Construct.LET: self.rewrite_let,
		}
		self.element_handlers = {
			tag: handlers[construct] for tag, construct in self.options.tags().items()
		}

	# --- Dispatch ------------------------------------------------------------

	def leave(self, path: NodePath) -> None:
		node = path.node
		if isinstance(node, JSXElement):
			tag = node.tag_name
			if tag is not None and (handler := self.element_handlers.get(tag)):
				handler(node, path)
		elif isinstance(node, CallExpression):
			self.disable_reference_check(node, path)

	def disable_reference_check(self, node: CallExpression, path: NodePath) -> None:
		"""Neutralize the host's `checkFn("name")` for construct names.

		MDX inserts a check for every referenced component name. The
		construct elements are gone after this pass, so their checks would
		fail at runtime.
		"""
		if not (
			isinstance(node.callee, Identifier)
			and node.callee.name == self.options.check_fn
			and node.arguments
			and isinstance(node.arguments[0], Literal)
		):
			return
		name = node.arguments[0].value
		if isinstance(name, str) and name in self.element_handlers:
			self.log.debug("Disabling %s", emit(node))
			path.replace(EmptyStatement(loc=node.loc, range=node.range))

	# --- Constructs ----------------------------------------------------------

	def rewrite_for(self, node: JSXElement, path: NodePath) -> None:
		"""<for var={name} of={expr}>...</for> -> {expr.map((name) => ...)}"""
		self._log_rewrite(node)
		context = [path.parent, node, node.opening_element]
		attrs = self._attributes(node, context, var="name", of="expression")
		var_attr, of_attr = attrs["var"], attrs["of"]

		new_expr = CallExpression(
			MemberExpression(_expression(of_attr), Identifier("map")),
			[
				ArrowFunctionExpression(
					[self._pattern(var_attr, [*context, var_attr])],
					wrap_nodes_for_expr(node.children),
				)
			],
			loc=node.loc,
			range=node.range,
		)
		path.replace(wrap_expr_for_parent(new_expr, path.parent))

	def rewrite_if(self, node: JSXElement, path: NodePath) -> None:
		"""<if test={expr}>...</if> -> {expr ? ... : null}"""
		self._log_rewrite(node)
		context = [path.parent, node, node.opening_element]
		attrs = self._attributes(node, context, test="expression")

		new_expr = self._branch(attrs["test"], node)
		path.replace(wrap_expr_for_parent(new_expr, path.parent))

	def rewrite_else_if(self, node: JSXElement, path: NodePath) -> None:
		"""<else-if test={expr}>...</else-if> continues the preceding chain."""
		self._log_rewrite(node)
		context = [path.parent, node, node.opening_element]
		attrs = self._attributes(node, context, test="expression")

		branch = self._open_branch(node, path, context)
		branch.alternate = self._branch(attrs["test"], node)
		path.remove()

	def rewrite_else(self, node: JSXElement, path: NodePath) -> None:
		"""<else>...</else> closes the preceding chain."""
		self._log_rewrite(node)
		context = [path.parent, node, node.opening_element]
		self._attributes(node, context)

		branch = self._open_branch(node, path, context)
		body = wrap_nodes_for_expr(node.children)
		if isinstance(body, ConditionalExpression):
			# a closed chain must not end in an open conditional
			body = JSXFragment(list(node.children))
		branch.alternate = body
		path.remove()

	def rewrite_let(self, node: JSXElement, path: NodePath) -> None:
		"""<let var={name} value={expr}>...</let> -> {((name) => ...)(expr)}"""
		self._log_rewrite(node)
		context = [path.parent, node, node.opening_element]
		attrs = self._attributes(node, context, var="name", value="expression")
		var_attr, value_attr = attrs["var"], attrs["value"]

		new_expr = CallExpression(
			ArrowFunctionExpression(
				[self._pattern(var_attr, [*context, var_attr])],
				wrap_nodes_for_expr(node.children),
			),
			[_expression(value_attr)],
			loc=node.loc,
			range=node.range,
		)
		path.replace(wrap_expr_for_parent(new_expr, path.parent))

	# --- Helpers -------------------------------------------------------------

	def _log_rewrite(self, node: JSXElement) -> None:
		if self.log.isEnabledFor(logging.DEBUG):
			self.log.debug("Rewriting %s", emit(node.opening_element))

	def _attributes(
		self, node: JSXElement, context: list[Node | None], **required: str
	) -> dict[str, JSXAttribute]:
		"""Validate the attributes of a construct element.

		`required` maps each attribute name to the placeholder shown in the
		error message, e.g. var="name" -> "Need var={name} in ...". Every
		required attribute must hold a non-empty `{...}` value; any other
		attribute (including spreads and duplicates) is an error.
		"""
		opening = node.opening_element
		found: dict[str, JSXAttribute] = {}
		extra: list[Node] = []
		for attr in node.attributes:
			if (
				isinstance(attr, JSXAttribute)
				and isinstance(attr.name, JSXIdentifier)
				and attr.name.name in required
				and attr.name.name not in found
			):
				found[attr.name.name] = attr
			else:
				extra.append(attr)

		for name, placeholder in required.items():
			attr = found.get(name)
			if (
				attr is None
				or not isinstance(attr.value, JSXExpressionContainer)
				or isinstance(attr.value.expression, JSXEmptyExpression)
			):
				fail(
					f"Need {name}={{{placeholder}}} in {emit(opening)}",
					context,
					self.file,
				)
		if extra:
			fail(f"Bad attribute in {emit(opening)}", [*context, extra[0]], self.file)
		return found

	def _pattern(self, attr: JSXAttribute, context: list[Node | None]) -> Node:
		return pattern_from_expr(_expression(attr), context, self.file)

	def _branch(self, test_attr: JSXAttribute, node: JSXElement) -> ConditionalExpression:
		return ConditionalExpression(
			_expression(test_attr),
			wrap_nodes_for_expr(node.children),
			null_literal(),
			loc=node.loc,
			range=node.range,
		)

	def _open_branch(
		self, node: JSXElement, path: NodePath, context: list[Node | None]
	) -> ConditionalExpression:
		branch = find_open_branch(path)
		if branch is None:
			if_tag = self.options.tag(Construct.IF)
			else_if_tag = self.options.tag(Construct.ELSE_IF)
			fail(
				f"Need <{if_tag}> or <{else_if_tag}> before {emit(node.opening_element)}",
				context,
				self.file,
			)
		return branch


def _expression(attr: JSXAttribute) -> Node:
	"""The expression inside an attribute already validated as `{...}`."""
	return cast(JSXExpressionContainer, attr.value).expression
