"""Version of the jsx-if-for distribution."""

from __future__ import annotations

import tomllib
from importlib import metadata
from pathlib import Path

__all__ = ["DISTRIBUTION", "get_version", "__version__"]

DISTRIBUTION = "jsx-if-for"

# src/jsx_if_for/version.py -> checkout root
PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_tree_version(pyproject: Path = PYPROJECT) -> str | None:
	try:
		with pyproject.open("rb") as f:
			project = tomllib.load(f).get("project", {})
	except (OSError, tomllib.TOMLDecodeError):
		return None
	if project.get("name") != DISTRIBUTION:
		return None
	return project.get("version")


def get_version() -> str:
	"""Installed metadata first, then the pyproject.toml of a source checkout."""
	try:
		return metadata.version(DISTRIBUTION)
	except metadata.PackageNotFoundError:
		return _source_tree_version() or "0.0.0"


__version__: str = get_version()
