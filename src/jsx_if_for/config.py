from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

ENV_JSX_IF_FOR_PREFIX = "JSX_IF_FOR_PREFIX"
ENV_JSX_IF_FOR_CHECK_FN = "JSX_IF_FOR_CHECK_FN"

# Name of the function MDX injects to assert that a referenced component exists
DEFAULT_CHECK_FN = "_missingMdxReference"


class Construct(StrEnum):
	"""The control-flow elements rewritten by the pass."""

	IF = "if"
	ELSE_IF = "else-if"
	ELSE = "else"
	FOR = "for"
	LET = "let"


@dataclass(frozen=True, slots=True)
class TransformOptions:
	"""Options for one rewrite pass.

	prefix: prepended to every construct name, e.g. "$" to rewrite <$if>,
		<$for>, ... (the convention for MDX, where lowercase tags are plain
		HTML).
	check_fn: the host's component-existence check, neutralized for
		construct names.
	"""

	prefix: str = ""
	check_fn: str = DEFAULT_CHECK_FN

	def tag(self, construct: Construct) -> str:
		return f"{self.prefix}{construct.value}"

	def tags(self) -> dict[str, Construct]:
		return {self.tag(c): c for c in Construct}

	@classmethod
	def from_env(cls, environ: Mapping[str, str] | None = None) -> TransformOptions:
		environ = os.environ if environ is None else environ
		return cls(
			prefix=environ.get(ENV_JSX_IF_FOR_PREFIX, ""),
			check_fn=environ.get(ENV_JSX_IF_FOR_CHECK_FN) or DEFAULT_CHECK_FN,
		)
