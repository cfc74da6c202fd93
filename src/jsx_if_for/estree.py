"""
ESTree JSON <-> node conversion.

`from_estree` accepts the plain dict form produced by ESTree-compatible
parsers (acorn with the JSX plugin, MDX's recma stage, ...). Node types the
model does not cover become `OpaqueNode`s and keys it does not cover are
kept in `Node.extra`, so `to_estree(from_estree(data))` preserves the
document apart from the rewrites.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import MISSING, fields
from typing import Any, cast

from jsx_if_for.nodes import (
	NODE_TYPES,
	ArrowFunctionExpression,
	Identifier,
	JSXFragment,
	Node,
	ObjectPattern,
	OpaqueNode,
	PatternProperty,
	Position,
	SourceLocation,
)

# Python field name -> ESTree key, where camel-casing the name is not enough
_KEY_OVERRIDES: dict[str, str] = {"is_async": "async"}

# ESTree keys rebuilt from `loc`/`range` rather than stored
_META_KEYS = frozenset({"type", "loc", "range", "start", "end"})


def from_estree(data: Mapping[str, Any]) -> Node:
	"""Build a node tree from an ESTree dict."""
	if not isinstance(data, Mapping) or not isinstance(data.get("type"), str):  # pyright: ignore[reportUnnecessaryIsInstance]
		raise ValueError(f"Not an ESTree node: {_preview(data)}")
	return _load_node(data)


def to_estree(node: Node) -> dict[str, Any]:
	"""Convert a node tree back into an ESTree dict."""
	if isinstance(node, OpaqueNode):
		data: dict[str, Any] = {"type": node.type}
		for key, value in node.props.items():
			data[key] = _dump_value(value)
	elif isinstance(node, PatternProperty):
		data = {
			"type": "Property",
			"key": to_estree(node.key),
			"value": _dump_value(node.value),
			"kind": "init",
			"method": False,
			"shorthand": node.shorthand,
			"computed": False,
		}
	elif isinstance(node, JSXFragment):
		data = {
			"type": node.type,
			"openingFragment": {"type": "JSXOpeningFragment"},
			"children": _dump_value(node.children),
			"closingFragment": {"type": "JSXClosingFragment"},
		}
	else:
		data = {"type": node.type}
		for f in fields(node):
			if f.name in {"loc", "range", "extra"}:
				continue
			value = getattr(node, f.name)
			if f.name == "raw" and value is None:
				continue
			data[_estree_key(f.name)] = _dump_value(value)
		if isinstance(node, ArrowFunctionExpression):
			data.setdefault("id", None)
			data["expression"] = node.body.type != "BlockStatement"
			data.setdefault("generator", False)

	for key, value in node.extra.items():
		data.setdefault(key, value)
	if node.range is not None:
		data["start"], data["end"] = node.range
		data["range"] = list(node.range)
	if node.loc is not None:
		data["loc"] = {
			"start": _dump_position(node.loc.start),
			"end": _dump_position(node.loc.end),
		}
	return data


# =============================================================================
# Loading
# =============================================================================


def _load_node(data: Mapping[str, Any]) -> Node:
	type_name: str = data["type"]
	meta = _load_meta(data)

	# regex and bigint literals have no faithful Python value
	if type_name == "Literal" and ("regex" in data or "bigint" in data):
		return _load_opaque(data, meta)
	if type_name == "ObjectPattern":
		return _load_object_pattern(data, meta)

	cls = NODE_TYPES.get(type_name)
	if cls is None:
		return _load_opaque(data, meta)

	kwargs: dict[str, Any] = {}
	known: set[str] = set()
	for f in fields(cls):
		if f.name in {"loc", "range", "extra"}:
			continue
		key = _estree_key(f.name)
		known.add(key)
		if key in data:
			kwargs[f.name] = _load_value(data[key])
		elif f.default is MISSING and f.default_factory is MISSING:
			raise ValueError(f"{type_name} node is missing '{key}'")
	extra = {k: v for k, v in data.items() if k not in known and k not in _META_KEYS}
	return cls(**kwargs, extra=extra, **meta)


def _load_object_pattern(data: Mapping[str, Any], meta: dict[str, Any]) -> Node:
	props: list[Node] = []
	for p in data.get("properties", []):
		if (
			isinstance(p, Mapping)
			and p.get("type") == "Property"
			and not p.get("computed", False)
			and isinstance(p.get("key"), Mapping)
			and p["key"].get("type") == "Identifier"
		):
			key = cast(Identifier, _load_node(p["key"]))
			props.append(
				PatternProperty(key, _load_value(p["value"]), **_load_meta(p))
			)
		else:
			props.append(_load_value(p))
	extra = {
		k: v for k, v in data.items() if k != "properties" and k not in _META_KEYS
	}
	return ObjectPattern(props, extra=extra, **meta)


def _load_opaque(data: Mapping[str, Any], meta: dict[str, Any]) -> OpaqueNode:
	props = {k: _load_value(v) for k, v in data.items() if k not in _META_KEYS}
	return OpaqueNode(data["type"], props, **meta)


def _load_value(value: Any) -> Any:
	if isinstance(value, Mapping):
		if isinstance(value.get("type"), str):
			return _load_node(value)  # pyright: ignore[reportUnknownArgumentType]
		return {k: _load_value(v) for k, v in value.items()}  # pyright: ignore[reportUnknownVariableType]
	if isinstance(value, list):
		return [_load_value(v) for v in value]  # pyright: ignore[reportUnknownVariableType]
	return value


def _load_meta(data: Mapping[str, Any]) -> dict[str, Any]:
	meta: dict[str, Any] = {}
	loc = data.get("loc")
	if isinstance(loc, Mapping) and "start" in loc and "end" in loc:
		meta["loc"] = SourceLocation(
			_load_position(loc["start"]), _load_position(loc["end"])
		)
	rng = data.get("range")
	if isinstance(rng, (list, tuple)) and len(rng) == 2:  # pyright: ignore[reportUnknownArgumentType]
		meta["range"] = (int(rng[0]), int(rng[1]))
	elif isinstance(data.get("start"), int) and isinstance(data.get("end"), int):
		meta["range"] = (data["start"], data["end"])
	return meta


def _load_position(data: Mapping[str, Any]) -> Position:
	try:
		return Position(int(data["line"]), int(data["column"]), data.get("offset"))
	except (KeyError, TypeError) as exc:
		raise ValueError(f"Bad source position: {_preview(data)}") from exc


# =============================================================================
# Dumping
# =============================================================================


def _dump_value(value: Any) -> Any:
	if isinstance(value, Node):
		return to_estree(value)
	if isinstance(value, list):
		return [_dump_value(v) for v in value]  # pyright: ignore[reportUnknownVariableType]
	if isinstance(value, dict):
		return {k: _dump_value(v) for k, v in value.items()}  # pyright: ignore[reportUnknownVariableType]
	return value


def _dump_position(pos: Position) -> dict[str, int]:
	data = {"line": pos.line, "column": pos.column}
	if pos.offset is not None:
		data["offset"] = pos.offset
	return data


def _estree_key(name: str) -> str:
	if name in _KEY_OVERRIDES:
		return _KEY_OVERRIDES[name]
	head, *rest = name.split("_")
	return head + "".join(part.title() for part in rest)


def _preview(value: Any) -> str:
	text = repr(value)
	return text if len(text) <= 60 else text[:57] + "..."
