"""Command-line interface for shortdebug code generation."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from shortdebug.generator import python
from shortdebug.generator.bounds import UnsupportedFieldTypeError
from shortdebug.generator.classify import EmissionRule, VariantPlan, plan_type
from shortdebug.generator.parser import ValidationError, parse
from shortdebug.generator.types import TypeDescriptor

_RULE_LABELS = {
    EmissionRule.ALWAYS: "always",
    EmissionRule.IF_PRESENT: "if present",
    EmissionRule.IF_NON_EMPTY: "if non-empty",
}


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log generator details")
def cli(verbose: bool) -> None:
    """shortdebug debug formatting code generator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load(input_file: str) -> list[TypeDescriptor]:
    with open(input_file, encoding="utf-8") as f:
        text = f.read()

    try:
        return parse(text)
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input descriptor file (JSON)")
@click.option("--output", "-o", "output_file", required=True, help="Output file")
@click.option(
    "--runtime-import",
    "runtime_import",
    is_flag=False,
    flag_value="shortdebug.runtime",
    default=None,
    help="Import path for runtime. No value=shortdebug.runtime, omit=shortdebug_runtime",
)
@click.option(
    "--extern",
    "extern",
    multiple=True,
    help="Type name defined elsewhere that is known to be debug-formattable",
)
def gen(
    input_file: str, output_file: str, runtime_import: str | None, extern: tuple[str, ...]
) -> None:
    """Generate debug formatting code from a descriptor file."""
    types = _load(input_file)

    # Default to "shortdebug_runtime" (vendored copy) if not specified
    import_path = runtime_import if runtime_import is not None else "shortdebug_runtime"
    try:
        generated_file = python.render(types, runtime_import=import_path, extern=extern)
    except UnsupportedFieldTypeError as e:
        print(f"Error: {e}")
        sys.exit(1)

    with open(output_file, "w", encoding="utf-8") as f:
        f.write(generated_file)


@cli.command()
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
@click.option("--name", default="shortdebug_runtime", help="Runtime folder name")
def runtime(output_path: str, name: str) -> None:
    """Generate runtime support code."""
    runtime_dir = Path(output_path) / name
    runtime_dir.mkdir(parents=True, exist_ok=True)
    for filename, content in python.runtime().items():
        (runtime_dir / filename).write_text(content)
    print(f"Generated Python runtime in {runtime_dir}")


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input descriptor file (JSON)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, output_json: bool) -> None:
    """Display how each field of each type will be rendered."""
    types = _load(input_file)
    plans = {t.name: plan_type(t) for t in types}

    if output_json:
        _output_json(types, plans)
    else:
        _output_plain(types, plans)


def _output_json(types: list[TypeDescriptor], plans: dict[str, list[VariantPlan]]) -> None:
    """Output type info as JSON."""
    data: dict = {}

    for t in types:
        data[t.name] = {
            "kind": t.kind.value,
            "variants": [
                {
                    "name": plan.variant.name,
                    "path": plan.path,
                    "form": plan.form.value,
                    "fields": [
                        {
                            "name": fp.field.name,
                            "type": str(fp.field.type),
                            "kind": fp.kind.value,
                            "rule": fp.rule.value,
                        }
                        for fp in plan.fields
                    ],
                }
                for plan in plans[t.name]
            ],
        }

    print(json.dumps(data, indent=2))


def _output_plain(types: list[TypeDescriptor], plans: dict[str, list[VariantPlan]]) -> None:
    """Output type info using rich text formatting."""
    console = Console()

    for t in types:
        console.print(f"[bold cyan]{t.name}[/bold cyan] [dim]({t.kind.value})[/dim]")

        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Variant", style="white")
        table.add_column("Form", style="dim")
        table.add_column("Field", style="white")
        table.add_column("Type", style="yellow")
        table.add_column("Printed", style="green")

        for plan in plans[t.name]:
            if not plan.fields:
                table.add_row(plan.variant.name, plan.form.value, "", "", "")
                continue
            for index, fp in enumerate(plan.fields):
                table.add_row(
                    plan.variant.name if index == 0 else "",
                    plan.form.value if index == 0 else "",
                    fp.field.name or str(index),
                    escape(str(fp.field.type)),
                    _RULE_LABELS[fp.rule],
                )

        console.print(table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
