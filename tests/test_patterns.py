"""
Tests for expression -> binding pattern conversion.
"""

import pytest
from jsx_if_for import TransformError, emit
from jsx_if_for.nodes import (
	ArrayExpression,
	ArrayPattern,
	CallExpression,
	Literal,
	MemberExpression,
	ObjectExpression,
	ObjectPattern,
	PatternProperty,
	Property,
	SpreadElement,
)
from jsx_if_for.patterns import pattern_from_expr

from tree_builders import ident, loc


class TestConvertible:
	def test_identifier_passes_through(self):
		x = ident("x")
		assert pattern_from_expr(x) is x

	def test_array(self):
		pattern = pattern_from_expr(ArrayExpression([ident("a"), ident("b")]))
		assert pattern == ArrayPattern([ident("a"), ident("b")])
		assert emit(pattern) == "[a, b]"

	def test_array_with_holes(self):
		pattern = pattern_from_expr(ArrayExpression([None, ident("b")]))
		assert pattern == ArrayPattern([None, ident("b")])
		assert emit(pattern) == "[, b]"

	def test_object_shorthand(self):
		pattern = pattern_from_expr(
			ObjectExpression([Property(ident("a"), ident("a"), shorthand=True)])
		)
		assert pattern == ObjectPattern([PatternProperty(ident("a"), ident("a"))])
		assert emit(pattern) == "{ a }"

	def test_object_renaming(self):
		pattern = pattern_from_expr(ObjectExpression([Property(ident("a"), ident("b"))]))
		assert emit(pattern) == "{ a: b }"

	def test_nested(self):
		expr = ArrayExpression(
			[
				ObjectExpression(
					[
						Property(ident("id"), ident("id"), shorthand=True),
						Property(ident("tags"), ArrayExpression([ident("first")])),
					]
				),
				ident("index"),
			]
		)
		pattern = pattern_from_expr(expr)
		assert pattern == ArrayPattern(
			[
				ObjectPattern(
					[
						PatternProperty(ident("id"), ident("id")),
						PatternProperty(ident("tags"), ArrayPattern([ident("first")])),
					]
				),
				ident("index"),
			]
		)
		assert emit(pattern) == "[{ id, tags: [first] }, index]"

	def test_empty_object_and_array(self):
		assert pattern_from_expr(ObjectExpression([])) == ObjectPattern([])
		assert pattern_from_expr(ArrayExpression([])) == ArrayPattern([])

	def test_location_is_kept(self):
		expr = ArrayExpression([ident("a")], loc=loc(1, 2, 1, 5), range=(2, 5))
		pattern = pattern_from_expr(expr)
		assert pattern.loc == loc(1, 2, 1, 5)
		assert pattern.range == (2, 5)


class TestRejected:
	@pytest.mark.parametrize(
		"expr",
		[
			Literal(1),
			Literal(None),
			CallExpression(ident("f"), []),
			MemberExpression(ident("a"), ident("b")),
		],
	)
	def test_bad_pattern(self, expr):
		with pytest.raises(TransformError, match="Bad pattern"):
			pattern_from_expr(expr)

	def test_spread_in_array(self):
		with pytest.raises(TransformError, match=r"Bad pattern \.\.\.rest"):
			pattern_from_expr(ArrayExpression([ident("a"), SpreadElement(ident("rest"))]))

	def test_nested_bad_element(self):
		with pytest.raises(TransformError, match="Bad pattern 1"):
			pattern_from_expr(ArrayExpression([ArrayExpression([Literal(1)])]))

	def test_spread_in_object(self):
		with pytest.raises(TransformError, match="Bad object pattern"):
			pattern_from_expr(ObjectExpression([SpreadElement(ident("rest"))]))

	def test_computed_key(self):
		with pytest.raises(TransformError, match=r"Bad object pattern \{ \[k\]: v \}"):
			pattern_from_expr(
				ObjectExpression([Property(ident("k"), ident("v"), computed=True)])
			)

	def test_method(self):
		with pytest.raises(TransformError, match="Bad object pattern"):
			pattern_from_expr(
				ObjectExpression([Property(ident("m"), ident("fn"), method=True)])
			)

	def test_getter(self):
		with pytest.raises(TransformError, match="Bad object pattern"):
			pattern_from_expr(
				ObjectExpression([Property(ident("g"), ident("fn"), kind="get")])
			)

	def test_literal_key(self):
		with pytest.raises(TransformError, match="Bad object pattern"):
			pattern_from_expr(ObjectExpression([Property(Literal("a"), ident("a"))]))

	def test_bad_value_in_object(self):
		with pytest.raises(TransformError, match=r"Bad pattern f\(\)"):
			pattern_from_expr(
				ObjectExpression([Property(ident("a"), CallExpression(ident("f"), []))])
			)

	def test_error_located_at_innermost_node(self):
		bad = Literal(1, loc=loc(3, 8, 3, 9))
		outer = ArrayExpression([ident("a"), bad], loc=loc(3, 4, 3, 10))
		with pytest.raises(TransformError) as exc_info:
			pattern_from_expr(outer, [], "f.mdx")
		assert exc_info.value.column == 8
		assert exc_info.value.file == "f.mdx"

	def test_error_uses_enclosing_location(self):
		outer = ArrayExpression([Literal(1)], loc=loc(3, 4, 3, 10))
		with pytest.raises(TransformError) as exc_info:
			pattern_from_expr(outer)
		assert exc_info.value.column == 4
