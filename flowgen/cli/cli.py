from datetime import date
from pathlib import Path

import click
from rich import pretty
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from flowgen.config import load_generator_properties
from flowgen.errors import GeneratorError
from flowgen.gen_logging import configure_gen_logging
from flowgen.generator import ProjectGenerator, write_artifacts
from flowgen.loader import load_flow_request

pretty.install()
console = Console()


def _stamp() -> str:
    return f"[{date.today().strftime('%Y-%m-%d')}]"


def _build_generator(config_path, mask_secrets, templates_override) -> ProjectGenerator:
    properties = load_generator_properties(config_path).with_overrides(
        secret_masking_enabled=mask_secrets,
        override_path=templates_override,
    )
    return ProjectGenerator(properties)


config_option = click.option(
    "--config", "config_path", type=click.Path(exists=True, dir_okay=False),
    default=None, help="YAML generator configuration file.",
)
mask_option = click.option(
    "--mask-secrets/--no-mask-secrets", "mask_secrets", default=None,
    help="Replace secret endpoint values with property placeholders.",
)
override_option = click.option(
    "--templates-override", "templates_override", default=None,
    help="Template directory searched before the default templates.",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show per-step detail.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
@click.pass_context
def cli(context, verbose, quiet):
    context.ensure_object(dict)
    configure_gen_logging(verbose=verbose, quiet=quiet)


@cli.command("validate", help="Check that a flow request file is well formed.")
@click.pass_context
@click.argument("flow_path")
def validate(context, flow_path):
    try:
        request = load_flow_request(flow_path)
    except GeneratorError as e:
        console.print(f"{_stamp()} Validation failed with error(s): {escape(str(e))}", style="red")
        context.exit(1)
    console.print(
        f"{_stamp()} Flow '{escape(request.integration.name)}' is valid "
        f"({len(request.integration.steps)} step(s)).",
        style="green",
    )


@cli.command("inspect", help="Print the steps of a flow and the route elements they compile to.")
@click.pass_context
@click.argument("flow_path")
@config_option
@mask_option
@override_option
def inspect_cmd(context, flow_path, config_path, mask_secrets, templates_override):
    try:
        request = load_flow_request(flow_path)
        generator = _build_generator(config_path, mask_secrets, templates_override)
        flow = generator.generate_flow(request)
    except GeneratorError as e:
        console.print(f"{_stamp()} Inspect failed with error(s): {escape(str(e))}", style="red")
        context.exit(1)

    table = Table(title=request.integration.name)
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Name")
    for index, step in enumerate(request.integration.steps, start=1):
        table.add_row(str(index), step.kind, step.name or "")
    console.print(table)

    for element in flow.steps:
        console.print(element.as_dict())


@cli.command("generate", help="Emit the project for a flow request.")
@click.pass_context
@click.argument("flow_path")
@click.option("--out", "out_dir", default="generated", help="Output directory (default: ./generated)")
@config_option
@mask_option
@override_option
def generate(context, flow_path, out_dir, config_path, mask_secrets, templates_override):
    try:
        request = load_flow_request(flow_path)
        generator = _build_generator(config_path, mask_secrets, templates_override)
        artifacts = generator.generate(request)
    except GeneratorError as e:
        console.print(f"{_stamp()} Generate failed with error(s): {escape(str(e))}", style="red")
        context.exit(1)

    out_path = write_artifacts(artifacts, Path(out_dir).resolve())
    console.print(f"{_stamp()} {len(artifacts)} file(s) emitted to: {out_path}", style="green")


@cli.command("pom", help="Print the build descriptor for a flow request.")
@click.pass_context
@click.argument("flow_path")
@config_option
@override_option
def pom(context, flow_path, config_path, templates_override):
    try:
        request = load_flow_request(flow_path)
        generator = _build_generator(config_path, None, templates_override)
        content = generator.generate_pom(request.integration)
    except GeneratorError as e:
        console.print(f"{_stamp()} Build descriptor generation failed: {escape(str(e))}", style="red")
        context.exit(1)
    click.echo(content.decode("utf-8"), nl=False)
