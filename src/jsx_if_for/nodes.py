from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, override

# =============================================================================
# Source locations
# =============================================================================


@dataclass(frozen=True, slots=True)
class Position:
	"""A point in the source: 1-based line, 0-based column, optional offset."""

	line: int
	column: int
	offset: int | None = None


@dataclass(frozen=True, slots=True)
class SourceLocation:
	start: Position
	end: Position


# =============================================================================
# Base classes
# =============================================================================


@dataclass(slots=True)
class Node(ABC):
	"""Base class for all ESTree/JSX nodes.

	Nodes are mutable records. `type` is the ESTree type name of the concrete
	class. `loc` and `range` are source metadata carried over from the host
	parser; they never take part in equality, and neither does `extra`.
	"""

	type: ClassVar[str] = ""

	loc: SourceLocation | None = field(
		default=None, kw_only=True, compare=False, repr=False
	)
	range: tuple[int, int] | None = field(
		default=None, kw_only=True, compare=False, repr=False
	)
	# ESTree keys the model does not cover, kept for round-tripping
	extra: dict[str, Any] = field(
		default_factory=dict, kw_only=True, compare=False, repr=False
	)

	@property
	def is_jsx(self) -> bool:
		"""True for markup nodes (elements, fragments, attributes, text, ...)."""
		return self.type.startswith("JSX")

	@abstractmethod
	def emit(self, out: list[str]) -> None:
		"""Emit this node as JavaScript/JSX code into the output buffer."""

	# -------------------------------------------------------------------------
	# Child access, shared by the walker and the chain locator
	# -------------------------------------------------------------------------

	def child_keys(self) -> list[str]:
		"""Names of the slots that may hold child nodes, in source order."""
		return [f.name for f in fields(self) if f.name not in _META_FIELDS]

	def get_child(self, key: str) -> Any:
		return getattr(self, key)

	def set_child(self, key: str, value: Any) -> None:
		setattr(self, key, value)


_META_FIELDS = frozenset({"loc", "range", "extra"})


class Expression(Node, ABC):
	"""Base class for expression nodes."""

	__slots__: tuple[str, ...] = ()

	def precedence(self) -> int:
		"""Operator precedence (higher = binds tighter). Default: primary (20)."""
		return 20


class Pattern(Node, ABC):
	"""Base class for binding patterns (legal only in binding positions)."""

	__slots__: tuple[str, ...] = ()


class Statement(Node, ABC):
	"""Base class for statement nodes."""

	__slots__: tuple[str, ...] = ()


@dataclass(slots=True)
class OpaqueNode(Node):
	"""Any ESTree node this package does not model.

	Node-valued props are still visited by the walker, so constructs nested
	inside e.g. a function body are rewritten too.
	"""

	type: str  # pyright: ignore[reportIncompatibleVariableOverride]
	props: dict[str, Any] = field(default_factory=dict)

	@override
	def child_keys(self) -> list[str]:
		return list(self.props)

	@override
	def get_child(self, key: str) -> Any:
		return self.props.get(key)

	@override
	def set_child(self, key: str, value: Any) -> None:
		self.props[key] = value

	@override
	def emit(self, out: list[str]) -> None:
		out.append("/* ")
		out.append(self.type)
		out.append(" */")


# =============================================================================
# Statements
# =============================================================================


@dataclass(slots=True)
class Program(Node):
	type: ClassVar[str] = "Program"

	body: list[Node] = field(default_factory=list)
	source_type: str = "module"

	@override
	def emit(self, out: list[str]) -> None:
		for i, stmt in enumerate(self.body):
			if i > 0:
				out.append("\n")
			stmt.emit(out)


@dataclass(slots=True)
class ExpressionStatement(Statement):
	"""JS expression statement: expr;"""

	type: ClassVar[str] = "ExpressionStatement"

	expression: Node

	@override
	def emit(self, out: list[str]) -> None:
		if isinstance(self.expression, (ObjectExpression, ArrowFunctionExpression)):
			out.append("(")
			self.expression.emit(out)
			out.append(")")
		else:
			self.expression.emit(out)
		out.append(";")


@dataclass(slots=True)
class EmptyStatement(Statement):
	type: ClassVar[str] = "EmptyStatement"

	@override
	def emit(self, out: list[str]) -> None:
		out.append(";")


@dataclass(slots=True)
class ReturnStatement(Statement):
	"""JS return statement: return expr;"""

	type: ClassVar[str] = "ReturnStatement"

	argument: Node | None = None

	@override
	def emit(self, out: list[str]) -> None:
		out.append("return")
		if self.argument is not None:
			out.append(" ")
			self.argument.emit(out)
		out.append(";")


# =============================================================================
# Expressions
# =============================================================================


@dataclass(slots=True)
class Identifier(Expression, Pattern):
	"""JS identifier: x, foo, myFunc. Valid as an expression and as a pattern."""

	type: ClassVar[str] = "Identifier"

	name: str

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.name)


@dataclass(slots=True)
class Literal(Expression):
	"""JS literal: 42, "hello", true, null"""

	type: ClassVar[str] = "Literal"

	value: int | float | str | bool | None
	raw: str | None = field(default=None, compare=False)

	@override
	def emit(self, out: list[str]) -> None:
		if self.raw is not None:
			out.append(self.raw)
		elif self.value is None:
			out.append("null")
		elif isinstance(self.value, bool):
			out.append("true" if self.value else "false")
		elif isinstance(self.value, str):
			out.append('"')
			out.append(_escape_string(self.value))
			out.append('"')
		else:
			out.append(str(self.value))


def null_literal() -> Literal:
	"""The sentinel that fills an open branch of a conditional chain."""
	return Literal(None)


def is_null_literal(node: Any) -> bool:
	return isinstance(node, Literal) and node.value is None and node.raw in (None, "null")


@dataclass(slots=True)
class ArrayExpression(Expression):
	"""JS array: [a, b, c]. `None` elements are holes: [a, , c]"""

	type: ClassVar[str] = "ArrayExpression"

	elements: list[Node | None] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		out.append("[")
		_emit_elements(self.elements, out)
		out.append("]")


@dataclass(slots=True)
class Property(Node):
	"""Object literal entry: key: value, shorthand, computed or method."""

	type: ClassVar[str] = "Property"

	key: Node
	value: Node
	kind: str = "init"
	computed: bool = False
	method: bool = False
	shorthand: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		if self.shorthand and self.kind == "init":
			self.value.emit(out)
			return
		if self.kind in {"get", "set"}:
			out.append(self.kind)
			out.append(" ")
		if self.computed:
			out.append("[")
			self.key.emit(out)
			out.append("]")
		else:
			self.key.emit(out)
		if self.method or self.kind in {"get", "set"}:
			# value is a FunctionExpression the emitter does not model
			self.value.emit(out)
			return
		out.append(": ")
		self.value.emit(out)


@dataclass(slots=True)
class SpreadElement(Node):
	"""JS spread: ...expr"""

	type: ClassVar[str] = "SpreadElement"

	argument: Node

	@override
	def emit(self, out: list[str]) -> None:
		out.append("...")
		self.argument.emit(out)


@dataclass(slots=True)
class ObjectExpression(Expression):
	"""JS object: { key: value }"""

	type: ClassVar[str] = "ObjectExpression"

	properties: list[Node] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		if not self.properties:
			out.append("{}")
			return
		out.append("{ ")
		for i, p in enumerate(self.properties):
			if i > 0:
				out.append(", ")
			p.emit(out)
		out.append(" }")


@dataclass(slots=True)
class MemberExpression(Expression):
	"""JS member access: obj.prop, obj[key], obj?.prop"""

	type: ClassVar[str] = "MemberExpression"

	object: Node
	property: Node
	computed: bool = False
	optional: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		_emit_primary(self.object, out)
		if self.computed:
			out.append("?.[" if self.optional else "[")
			self.property.emit(out)
			out.append("]")
		else:
			out.append("?." if self.optional else ".")
			self.property.emit(out)


@dataclass(slots=True)
class CallExpression(Expression):
	"""JS function call: fn(args)"""

	type: ClassVar[str] = "CallExpression"

	callee: Node
	arguments: list[Node] = field(default_factory=list)
	optional: bool = False

	@override
	def emit(self, out: list[str]) -> None:
		_emit_primary(self.callee, out)
		if self.optional:
			out.append("?.")
		out.append("(")
		_emit_elements(self.arguments, out)
		out.append(")")


@dataclass(slots=True)
class UnaryExpression(Expression):
	"""JS unary expression: -x, !x, typeof x"""

	type: ClassVar[str] = "UnaryExpression"

	operator: str
	argument: Node
	prefix: bool = True

	@override
	def precedence(self) -> int:
		return 17

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.operator)
		if self.operator.isalpha():
			out.append(" ")
		elif isinstance(self.argument, UnaryExpression) and self.argument.operator[0] == self.operator:
			out.append(" ")
		_emit_paren(self.argument, 17, "right", out)


@dataclass(slots=True)
class BinaryExpression(Expression):
	"""JS binary expression: x + y, a === b"""

	type: ClassVar[str] = "BinaryExpression"

	left: Node
	operator: str
	right: Node

	@override
	def precedence(self) -> int:
		return _PRECEDENCE.get(self.operator, 0)

	@override
	def emit(self, out: list[str]) -> None:
		prec = self.precedence()
		_emit_paren(self.left, prec, "left", out, self.operator)
		out.append(" ")
		out.append(self.operator)
		out.append(" ")
		_emit_paren(self.right, prec, "right", out, self.operator)


@dataclass(slots=True)
class LogicalExpression(BinaryExpression):
	"""JS logical expression: a && b, a || b, a ?? b"""

	type: ClassVar[str] = "LogicalExpression"


@dataclass(slots=True)
class ConditionalExpression(Expression):
	"""JS ternary expression: test ? consequent : alternate"""

	type: ClassVar[str] = "ConditionalExpression"

	test: Node
	consequent: Node
	alternate: Node

	@override
	def precedence(self) -> int:
		return _PRECEDENCE["?:"]

	@override
	def emit(self, out: list[str]) -> None:
		_emit_paren(self.test, _PRECEDENCE["?:"] + 1, "left", out)
		out.append(" ? ")
		self.consequent.emit(out)
		out.append(" : ")
		self.alternate.emit(out)


@dataclass(slots=True)
class ArrowFunctionExpression(Expression):
	"""JS arrow function with a single expression body: (x) => expr"""

	type: ClassVar[str] = "ArrowFunctionExpression"

	params: list[Node] = field(default_factory=list)
	body: Node = field(default_factory=lambda: Literal(None))
	is_async: bool = False

	@override
	def precedence(self) -> int:
		return _PRECEDENCE["=>"]

	@override
	def emit(self, out: list[str]) -> None:
		if self.is_async:
			out.append("async ")
		out.append("(")
		_emit_elements(self.params, out)
		out.append(") => ")
		if isinstance(self.body, ObjectExpression):
			out.append("(")
			self.body.emit(out)
			out.append(")")
		else:
			self.body.emit(out)


# =============================================================================
# Patterns
# =============================================================================


@dataclass(slots=True)
class ArrayPattern(Pattern):
	"""Array destructuring: [a, , b]"""

	type: ClassVar[str] = "ArrayPattern"

	elements: list[Node | None] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		out.append("[")
		_emit_elements(self.elements, out)
		out.append("]")


@dataclass(slots=True)
class PatternProperty(Node):
	"""Named slot of an object pattern: {key} or {key: pattern}"""

	type: ClassVar[str] = "Property"

	key: Identifier
	value: Node

	@property
	def shorthand(self) -> bool:
		return isinstance(self.value, Identifier) and self.value.name == self.key.name

	@override
	def emit(self, out: list[str]) -> None:
		if self.shorthand:
			self.key.emit(out)
			return
		self.key.emit(out)
		out.append(": ")
		self.value.emit(out)


@dataclass(slots=True)
class ObjectPattern(Pattern):
	"""Object destructuring: {a, b: [c, d]}"""

	type: ClassVar[str] = "ObjectPattern"

	properties: list[Node] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		if not self.properties:
			out.append("{}")
			return
		out.append("{ ")
		for i, p in enumerate(self.properties):
			if i > 0:
				out.append(", ")
			p.emit(out)
		out.append(" }")


# =============================================================================
# JSX
# =============================================================================


@dataclass(slots=True)
class JSXIdentifier(Node):
	type: ClassVar[str] = "JSXIdentifier"

	name: str

	@override
	def emit(self, out: list[str]) -> None:
		out.append(self.name)


@dataclass(slots=True)
class JSXMemberExpression(Node):
	"""Dotted tag name: <motion.div>"""

	type: ClassVar[str] = "JSXMemberExpression"

	object: Node
	property: JSXIdentifier

	@override
	def emit(self, out: list[str]) -> None:
		self.object.emit(out)
		out.append(".")
		self.property.emit(out)


@dataclass(slots=True)
class JSXNamespacedName(Node):
	"""Namespaced tag or attribute name: <svg:rect>, xlink:href"""

	type: ClassVar[str] = "JSXNamespacedName"

	namespace: JSXIdentifier
	name: JSXIdentifier

	@override
	def emit(self, out: list[str]) -> None:
		self.namespace.emit(out)
		out.append(":")
		self.name.emit(out)


@dataclass(slots=True)
class JSXEmptyExpression(Node):
	"""The nothing inside `{}` or `{/* comment */}`"""

	type: ClassVar[str] = "JSXEmptyExpression"

	@override
	def emit(self, out: list[str]) -> None:
		pass


@dataclass(slots=True)
class JSXExpressionContainer(Node):
	"""Embedded expression: {expr}, as an attribute value or as a child"""

	type: ClassVar[str] = "JSXExpressionContainer"

	expression: Node

	@override
	def emit(self, out: list[str]) -> None:
		out.append("{")
		self.expression.emit(out)
		out.append("}")


@dataclass(slots=True)
class JSXText(Node):
	type: ClassVar[str] = "JSXText"

	value: str
	raw: str | None = field(default=None, compare=False)

	@override
	def emit(self, out: list[str]) -> None:
		if self.raw is not None:
			out.append(self.raw)
		else:
			out.append(_escape_jsx_text(self.value))


@dataclass(slots=True)
class JSXAttribute(Node):
	"""JSX prop: name, name="text" or name={expr}"""

	type: ClassVar[str] = "JSXAttribute"

	name: Node
	value: Node | None = None

	@override
	def emit(self, out: list[str]) -> None:
		self.name.emit(out)
		if self.value is None:
			return
		out.append("=")
		if isinstance(self.value, Literal) and isinstance(self.value.value, str):
			out.append('"')
			out.append(_escape_jsx_attr(self.value.value))
			out.append('"')
		else:
			self.value.emit(out)


@dataclass(slots=True)
class JSXSpreadAttribute(Node):
	"""JSX spread prop: {...props}"""

	type: ClassVar[str] = "JSXSpreadAttribute"

	argument: Node

	@override
	def emit(self, out: list[str]) -> None:
		out.append("{...")
		self.argument.emit(out)
		out.append("}")


@dataclass(slots=True)
class JSXOpeningElement(Node):
	type: ClassVar[str] = "JSXOpeningElement"

	name: Node
	attributes: list[Node] = field(default_factory=list)
	self_closing: bool = False

	@property
	def tag_name(self) -> str | None:
		"""Plain identifier-style tag name, or None for dotted/namespaced tags."""
		if isinstance(self.name, JSXIdentifier):
			return self.name.name
		return None

	@override
	def emit(self, out: list[str]) -> None:
		out.append("<")
		self.name.emit(out)
		for attr in self.attributes:
			out.append(" ")
			attr.emit(out)
		out.append(" />" if self.self_closing else ">")


@dataclass(slots=True)
class JSXClosingElement(Node):
	type: ClassVar[str] = "JSXClosingElement"

	name: Node

	@override
	def emit(self, out: list[str]) -> None:
		out.append("</")
		self.name.emit(out)
		out.append(">")


@dataclass(slots=True)
class JSXElement(Expression):
	"""A JSX element. Self-closing elements have no children and no closing tag."""

	type: ClassVar[str] = "JSXElement"

	opening_element: JSXOpeningElement
	children: list[Node] = field(default_factory=list)
	closing_element: JSXClosingElement | None = None

	@property
	def tag_name(self) -> str | None:
		return self.opening_element.tag_name

	@property
	def attributes(self) -> list[Node]:
		return self.opening_element.attributes

	@override
	def emit(self, out: list[str]) -> None:
		self.opening_element.emit(out)
		if self.opening_element.self_closing:
			return
		for c in self.children:
			c.emit(out)
		if self.closing_element is not None:
			self.closing_element.emit(out)
		else:
			out.append("</")
			self.opening_element.name.emit(out)
			out.append(">")


@dataclass(slots=True)
class JSXFragment(Expression):
	"""A fragment: <>...</>. Groups children without introducing markup."""

	type: ClassVar[str] = "JSXFragment"

	children: list[Node] = field(default_factory=list)

	@override
	def emit(self, out: list[str]) -> None:
		out.append("<>")
		for c in self.children:
			c.emit(out)
		out.append("</>")


# ESTree type name -> node class, used by the ESTree loader.
# PatternProperty is absent: "Property" inside an ObjectPattern is resolved
# by the loader from context.
NODE_TYPES: dict[str, type[Node]] = {
	cls.type: cls
	for cls in (
		Program,
		ExpressionStatement,
		EmptyStatement,
		ReturnStatement,
		Identifier,
		Literal,
		ArrayExpression,
		Property,
		SpreadElement,
		ObjectExpression,
		MemberExpression,
		CallExpression,
		UnaryExpression,
		BinaryExpression,
		LogicalExpression,
		ConditionalExpression,
		ArrowFunctionExpression,
		ArrayPattern,
		ObjectPattern,
		JSXIdentifier,
		JSXMemberExpression,
		JSXNamespacedName,
		JSXEmptyExpression,
		JSXExpressionContainer,
		JSXText,
		JSXAttribute,
		JSXSpreadAttribute,
		JSXOpeningElement,
		JSXClosingElement,
		JSXElement,
		JSXFragment,
	)
}


# =============================================================================
# Emit logic
# =============================================================================


def emit(node: Node) -> str:
	"""Emit a node as JavaScript/JSX code."""
	out: list[str] = []
	node.emit(out)
	return "".join(out)


# Operator precedence table (higher = binds tighter)
_PRECEDENCE: dict[str, int] = {
	# Exponentiation (right-assoc)
	"**": 16,
	# Multiplicative
	"*": 15,
	"/": 15,
	"%": 15,
	# Additive
	"+": 14,
	"-": 14,
	# Shift
	"<<": 13,
	">>": 13,
	">>>": 13,
	# Relational
	"<": 12,
	"<=": 12,
	">": 12,
	">=": 12,
	"instanceof": 12,
	"in": 12,
	# Equality
	"==": 11,
	"!=": 11,
	"===": 11,
	"!==": 11,
	# Bitwise
	"&": 10,
	"^": 9,
	"|": 8,
	# Logical
	"&&": 7,
	"||": 6,
	"??": 6,
	# Ternary
	"?:": 4,
	# Arrow / assignment
	"=>": 3,
}

_RIGHT_ASSOC = {"**"}


def _precedence(node: Node) -> int:
	if isinstance(node, Expression):
		return node.precedence()
	return 20


def _escape_string(s: str) -> str:
	"""Escape for double-quoted JS string literals."""
	return (
		s.replace("\\", "\\\\")
		.replace('"', '\\"')
		.replace("\n", "\\n")
		.replace("\r", "\\r")
		.replace("\t", "\\t")
		.replace("\b", "\\b")
		.replace("\f", "\\f")
		.replace("\v", "\\v")
		.replace("\x00", "\\x00")
		.replace("\u2028", "\\u2028")
		.replace("\u2029", "\\u2029")
	)


def _escape_jsx_text(s: str) -> str:
	"""Escape text content for JSX."""
	return (
		s.replace("&", "&amp;")
		.replace("<", "&lt;")
		.replace(">", "&gt;")
		.replace("{", "&#123;")
		.replace("}", "&#125;")
	)


def _escape_jsx_attr(s: str) -> str:
	"""Escape attribute value for JSX."""
	return s.replace("&", "&amp;").replace('"', "&quot;")


def _emit_elements(items: list[Node] | list[Node | None], out: list[str]) -> None:
	"""Emit a comma-separated list; `None` items are array holes."""
	for i, item in enumerate(items):
		if i > 0:
			out.append(", ")
		if item is not None:
			item.emit(out)
	if items and items[-1] is None:
		out.append(",")


def _emit_paren(
	node: Node, parent_prec: int, side: str, out: list[str], parent_op: str = ""
) -> None:
	"""Emit child with parens if needed for precedence."""
	child_prec = _precedence(node)
	needs_parens = False
	if child_prec < parent_prec:
		needs_parens = True
	elif child_prec == parent_prec and isinstance(node, BinaryExpression):
		# Handle associativity
		if parent_op in _RIGHT_ASSOC:
			needs_parens = side == "left"
		else:
			needs_parens = side == "right"

	if needs_parens:
		out.append("(")
		node.emit(out)
		out.append(")")
	else:
		node.emit(out)


def _emit_primary(node: Node, out: list[str]) -> None:
	"""Emit with parens if not primary precedence."""
	if _precedence(node) < 20 or isinstance(node, (ObjectExpression, JSXElement, JSXFragment)):
		out.append("(")
		node.emit(out)
		out.append(")")
	else:
		node.emit(out)
