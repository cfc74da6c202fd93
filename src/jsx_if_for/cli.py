"""
Command-line interface for jsx-if-for.

Reads ESTree JSON documents (as produced by acorn with the JSX plugin or by
an MDX compiler's recma stage), runs the rewrite pass and prints the result.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import dataclasses
import json
import logging
import sys
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

from jsx_if_for.config import TransformOptions
from jsx_if_for.debug import pretty
from jsx_if_for.errors import TransformError
from jsx_if_for.estree import from_estree, to_estree
from jsx_if_for.nodes import Node, emit
from jsx_if_for.transform import transform
from jsx_if_for.version import __version__

cli = typer.Typer(
	name="jsx-if-for",
	help="Desugar <if>/<else-if>/<else>/<for>/<let> elements in ESTree JSON documents",
	no_args_is_help=True,
)


class OutputFormat(str, Enum):
	json = "json"
	jsx = "jsx"


@cli.command("transform")
def transform_cmd(
	input_file: str = typer.Argument(..., help="ESTree JSON file, or '-' for stdin"),
	output: Path | None = typer.Option(
		None, "--output", "-o", help="Write the result here instead of stdout"
	),
	fmt: OutputFormat = typer.Option(
		OutputFormat.json, "--format", "-f", help="json: ESTree JSON, jsx: code"
	),
	prefix: str | None = typer.Option(
		None, "--prefix", help="Construct name prefix, e.g. '$' for <$if>"
	),
	check_fn: str | None = typer.Option(
		None, "--check-fn", help="Name of the host's component existence check"
	),
	debug: bool = typer.Option(False, "--debug", help="Log rewrites and tree dumps"),
):
	"""Rewrite the control-flow elements of an ESTree JSON document."""
	if debug:
		_enable_debug_logging()

	options = TransformOptions.from_env()
	if prefix is not None:
		options = dataclasses.replace(options, prefix=prefix)
	if check_fn:
		options = dataclasses.replace(options, check_fn=check_fn)

	tree, label = _load(input_file)
	try:
		tree = transform(tree, label, options=options)
	except TransformError as exc:
		typer.echo(f"❌ {exc}", err=True)
		raise typer.Exit(1) from None

	if fmt is OutputFormat.json:
		text = json.dumps(to_estree(tree), indent=2) + "\n"
	else:
		text = emit(tree) + "\n"

	if output is None:
		typer.echo(text, nl=False)
	else:
		output.write_text(text, encoding="utf-8")
		typer.echo(f"✅ Wrote {output}", err=True)


@cli.command("show")
def show_cmd(
	input_file: str = typer.Argument(..., help="ESTree JSON file, or '-' for stdin"),
	tree_outline: bool = typer.Option(
		False, "--tree", help="Print the structural outline instead of code"
	),
):
	"""Print an ESTree JSON document as JSX code, without rewriting it."""
	tree, _ = _load(input_file)
	if tree_outline:
		typer.echo(pretty(tree), nl=False)
		return
	code = emit(tree)
	if sys.stdout.isatty():
		Console().print(Syntax(code, "jsx"))
	else:
		typer.echo(code)


@cli.command("version")
def version_cmd():
	"""Print the installed version."""
	typer.echo(__version__)


def _load(input_file: str) -> tuple[Node, str]:
	try:
		if input_file == "-":
			text, label = sys.stdin.read(), "<stdin>"
		else:
			text, label = Path(input_file).read_text(encoding="utf-8"), input_file
		return from_estree(json.loads(text)), label
	except OSError as exc:
		typer.echo(f"❌ Cannot read {input_file}: {exc.strerror or exc}", err=True)
		raise typer.Exit(1) from None
	except ValueError as exc:
		typer.echo(f"❌ Invalid ESTree document {input_file}: {exc}", err=True)
		raise typer.Exit(1) from None


def _enable_debug_logging() -> None:
	log = logging.getLogger("jsx_if_for")
	log.setLevel(logging.DEBUG)
	if not any(isinstance(h, RichHandler) for h in log.handlers):
		log.addHandler(RichHandler(console=Console(stderr=True), show_path=False))


def main():
	"""Main CLI entry point."""
	try:
		cli()
	except Exception:
		console = Console()
		console.print_exception()
		raise typer.Exit(1) from None


if __name__ == "__main__":
	main()
