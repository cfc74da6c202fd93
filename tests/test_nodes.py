"""
Tests for node equality and code emission.
"""

import pytest
from jsx_if_for.nodes import (
	ArrayExpression,
	ArrowFunctionExpression,
	BinaryExpression,
	CallExpression,
	ConditionalExpression,
	EmptyStatement,
	ExpressionStatement,
	Identifier,
	JSXAttribute,
	JSXEmptyExpression,
	JSXExpressionContainer,
	JSXFragment,
	JSXIdentifier,
	JSXMemberExpression,
	JSXNamespacedName,
	JSXSpreadAttribute,
	JSXText,
	Literal,
	LogicalExpression,
	MemberExpression,
	ObjectExpression,
	OpaqueNode,
	Program,
	Property,
	ReturnStatement,
	SpreadElement,
	UnaryExpression,
	emit,
	is_null_literal,
)

from tree_builders import attr, el, expr, frag, ident, loc, text

# =============================================================================
# Node basics
# =============================================================================


class TestNodeBasics:
	def test_equality_ignores_location(self):
		assert Identifier("x", loc=loc(1, 0, 1, 1), range=(0, 1)) == Identifier("x")

	def test_equality_ignores_extra(self):
		assert Identifier("x", extra={"optional": False}) == Identifier("x")

	def test_equality_ignores_raw(self):
		assert Literal(1, raw="0x1") == Literal(1)

	def test_is_jsx(self):
		assert frag().is_jsx
		assert text("a").is_jsx
		assert not ident("x").is_jsx
		assert OpaqueNode("JSXOpeningFragment").is_jsx

	def test_child_keys(self):
		node = ConditionalExpression(ident("a"), ident("b"), ident("c"))
		assert node.child_keys() == ["test", "consequent", "alternate"]

	def test_opaque_child_keys(self):
		node = OpaqueNode("IfStatement", {"test": ident("t"), "alternate": None})
		assert node.child_keys() == ["test", "alternate"]
		node.set_child("alternate", ident("e"))
		assert node.get_child("alternate") == ident("e")

	def test_null_literal(self):
		assert is_null_literal(Literal(None))
		assert is_null_literal(Literal(None, raw="null"))
		assert not is_null_literal(Literal(0))
		assert not is_null_literal(Literal(None, raw="/a/"))
		assert not is_null_literal(ident("null"))


# =============================================================================
# Expressions
# =============================================================================


class TestEmitExpressions:
	@pytest.mark.parametrize(
		("node", "code"),
		[
			(Literal(None), "null"),
			(Literal(True), "true"),
			(Literal(False), "false"),
			(Literal(42), "42"),
			(Literal(1.5), "1.5"),
			(Literal("hi"), '"hi"'),
			(Literal('say "hi"\n'), '"say \\"hi\\"\\n"'),
			(Literal("a\u2028b"), '"a\\u2028b"'),
			(Literal(1, raw="0x1"), "0x1"),
		],
	)
	def test_literal(self, node, code):
		assert emit(node) == code

	def test_array(self):
		assert emit(ArrayExpression([ident("a"), ident("b")])) == "[a, b]"
		assert emit(ArrayExpression([])) == "[]"

	def test_array_holes(self):
		assert emit(ArrayExpression([ident("a"), None, ident("b")])) == "[a, , b]"
		assert emit(ArrayExpression([ident("a"), None])) == "[a, ,]"

	def test_object(self):
		node = ObjectExpression(
			[
				Property(ident("a"), ident("a"), shorthand=True),
				Property(ident("b"), Literal(1)),
				Property(ident("k"), ident("v"), computed=True),
				SpreadElement(ident("rest")),
			]
		)
		assert emit(node) == "{ a, b: 1, [k]: v, ...rest }"
		assert emit(ObjectExpression([])) == "{}"

	def test_member(self):
		assert emit(MemberExpression(ident("a"), ident("b"))) == "a.b"
		assert emit(MemberExpression(ident("a"), ident("i"), computed=True)) == "a[i]"
		assert emit(MemberExpression(ident("a"), ident("b"), optional=True)) == "a?.b"
		node = MemberExpression(ident("a"), Literal(0), computed=True, optional=True)
		assert emit(node) == "a?.[0]"

	def test_member_of_binary_object(self):
		node = MemberExpression(BinaryExpression(ident("a"), "+", ident("b")), ident("c"))
		assert emit(node) == "(a + b).c"

	def test_member_of_markup(self):
		node = MemberExpression(frag(text("x")), ident("props"))
		assert emit(node) == "(<>x</>).props"

	def test_call(self):
		node = CallExpression(ident("f"), [ident("a"), Literal(1)])
		assert emit(node) == "f(a, 1)"
		assert emit(CallExpression(ident("f"), [], optional=True)) == "f?.()"

	def test_call_of_arrow(self):
		node = CallExpression(ArrowFunctionExpression([ident("x")], ident("x")), [Literal(1)])
		assert emit(node) == "((x) => x)(1)"

	def test_unary(self):
		assert emit(UnaryExpression("!", ident("x"))) == "!x"
		assert emit(UnaryExpression("typeof", ident("x"))) == "typeof x"
		assert emit(UnaryExpression("-", UnaryExpression("-", ident("x")))) == "- -x"
		node = UnaryExpression("!", BinaryExpression(ident("a"), "&&", ident("b")))
		assert emit(node) == "!(a && b)"

	@pytest.mark.parametrize(
		("node", "code"),
		[
			(
				BinaryExpression(BinaryExpression(ident("a"), "+", ident("b")), "*", ident("c")),
				"(a + b) * c",
			),
			(
				BinaryExpression(ident("a"), "+", BinaryExpression(ident("b"), "*", ident("c"))),
				"a + b * c",
			),
			(
				BinaryExpression(BinaryExpression(ident("a"), "-", ident("b")), "-", ident("c")),
				"a - b - c",
			),
			(
				BinaryExpression(ident("a"), "-", BinaryExpression(ident("b"), "-", ident("c"))),
				"a - (b - c)",
			),
			(
				BinaryExpression(ident("a"), "**", BinaryExpression(ident("b"), "**", ident("c"))),
				"a ** b ** c",
			),
			(
				BinaryExpression(BinaryExpression(ident("a"), "**", ident("b")), "**", ident("c")),
				"(a ** b) ** c",
			),
			(
				LogicalExpression(
					LogicalExpression(ident("a"), "||", ident("b")), "&&", ident("c")
				),
				"(a || b) && c",
			),
		],
	)
	def test_precedence(self, node, code):
		assert emit(node) == code

	def test_conditional(self):
		node = ConditionalExpression(ident("a"), ident("b"), ident("c"))
		assert emit(node) == "a ? b : c"

	def test_nested_conditional_alternate(self):
		node = ConditionalExpression(
			ident("a"),
			ident("A"),
			ConditionalExpression(ident("b"), ident("B"), Literal(None)),
		)
		assert emit(node) == "a ? A : b ? B : null"

	def test_conditional_as_test(self):
		inner = ConditionalExpression(ident("a"), ident("b"), ident("c"))
		node = ConditionalExpression(inner, ident("d"), ident("e"))
		assert emit(node) == "(a ? b : c) ? d : e"

	def test_arrow(self):
		node = ArrowFunctionExpression([ident("a"), ident("b")], ident("a"))
		assert emit(node) == "(a, b) => a"
		assert emit(ArrowFunctionExpression([], Literal(1))) == "() => 1"

	def test_arrow_object_body(self):
		node = ArrowFunctionExpression([], ObjectExpression([]))
		assert emit(node) == "() => ({})"


# =============================================================================
# Statements
# =============================================================================


class TestEmitStatements:
	def test_program(self):
		node = Program([ExpressionStatement(ident("a")), EmptyStatement()])
		assert emit(node) == "a;\n;"

	def test_statement_with_object(self):
		assert emit(ExpressionStatement(ObjectExpression([]))) == "({});"

	def test_statement_with_arrow(self):
		node = ExpressionStatement(ArrowFunctionExpression([], ident("x")))
		assert emit(node) == "(() => x);"

	def test_return(self):
		assert emit(ReturnStatement(ident("x"))) == "return x;"
		assert emit(ReturnStatement()) == "return;"

	def test_opaque(self):
		assert emit(OpaqueNode("DebuggerStatement")) == "/* DebuggerStatement */"


# =============================================================================
# JSX
# =============================================================================


class TestEmitJSX:
	def test_element(self):
		assert emit(el("div", children=[text("hi")])) == "<div>hi</div>"

	def test_self_closing(self):
		assert emit(el("br")) == "<br />"

	def test_attributes(self):
		node = el(
			"a",
			JSXAttribute(JSXIdentifier("href"), Literal('say "x" & y')),
			attr("onClick", ident("go")),
			JSXAttribute(JSXIdentifier("disabled")),
			JSXSpreadAttribute(ident("props")),
			children=[],
		)
		assert (
			emit(node)
			== '<a href="say &quot;x&quot; &amp; y" onClick={go} disabled {...props}></a>'
		)

	def test_text_escaping(self):
		assert emit(JSXText("a < b {c}")) == "a &lt; b &#123;c&#125;"
		assert emit(JSXText("a < b", raw="a &lt; b")) == "a &lt; b"

	def test_fragment(self):
		assert emit(frag(text("a"), expr(ident("b")))) == "<>a{b}</>"
		assert emit(JSXFragment([])) == "<></>"

	def test_empty_expression(self):
		assert emit(JSXExpressionContainer(JSXEmptyExpression())) == "{}"

	def test_member_and_namespaced_names(self):
		name = JSXMemberExpression(JSXIdentifier("motion"), JSXIdentifier("div"))
		assert emit(name) == "motion.div"
		ns = JSXNamespacedName(JSXIdentifier("svg"), JSXIdentifier("rect"))
		assert emit(ns) == "svg:rect"

	def test_tag_name(self):
		assert el("if").tag_name == "if"
		node = el("x")
		node.opening_element.name = JSXMemberExpression(
			JSXIdentifier("a"), JSXIdentifier("b")
		)
		assert node.tag_name is None
