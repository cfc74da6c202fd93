from __future__ import annotations

import json
from typing import Any

from jsx_if_for.nodes import Node


def pretty(tree: Any, pre: str = "") -> str:
	"""Structural outline of a tree, one field per line.

	Source metadata (`loc`, `range`) is left out:

		[JSXElement]
		  opening_element: [JSXOpeningElement]
		    name: [JSXIdentifier]
		      name: "if"
		  ...
	"""
	if isinstance(tree, list):
		if not tree:
			return "[]\n"
		return "\n" + "".join(
			f"{pre}  #{i} {pretty(item, f'{pre}  ')}" for i, item in enumerate(tree)
		)
	if isinstance(tree, Node):
		keys = tree.child_keys()
		return f"[{tree.type}]\n" + "".join(
			f"{pre}  {k}: {pretty(tree.get_child(k), f'{pre}  ')}" for k in keys
		)
	if isinstance(tree, dict):
		if not tree:
			return "{}\n"
		return "\n" + "".join(
			f"{pre}  {k}: {pretty(v, f'{pre}  ')}" for k, v in tree.items()
		)
	return json.dumps(tree) + "\n"
