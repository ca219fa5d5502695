"""
gcemodel CLI entry point.
"""
import os
import sys
from typing import List, Optional, Tuple

import click
from google.auth.exceptions import DefaultCredentialsError
from google.cloud.exceptions import GoogleCloudError
from rich.console import Console
from rich.table import Table

from gcemodel import __version__
from gcemodel.config import FORMATS, load_settings
from gcemodel.errors import ComputeModelError
from gcemodel.loader import parse_directory
from gcemodel.models.identity import zone_name
from gcemodel.models.machine_type import MachineType
from gcemodel.reporters import html_reporter, json_reporter, markdown
from gcemodel.storage.move import move_object

console = Console(stderr=True)

_STATUS_COLORS = {
    "ACTIVE": "green",
    "DEPRECATED": "yellow",
    "OBSOLETE": "red",
    "DELETED": "bold red",
}


def _collect_machine_types(paths: Tuple[str, ...], skip_invalid: bool) -> List[MachineType]:
    machine_types: List[MachineType] = []
    for p in paths:
        if os.path.exists(p):
            machine_types.extend(parse_directory(p, skip_invalid=skip_invalid))
        else:
            console.print(f"[yellow]Warning:[/yellow] '{p}' does not exist, skipping.")
    return machine_types


def _filter(
    machine_types: List[MachineType], zone: Optional[str], usable_only: bool
) -> List[MachineType]:
    wanted = zone_name(zone)
    return [
        mt for mt in machine_types
        if (wanted is None or mt.machine_type_id.zone == wanted)
        and (mt.is_usable or not usable_only)
    ]


def _print_table(machine_types: List[MachineType], no_color: bool) -> None:
    tbl = Table(title="Machine Types", show_header=True, header_style="bold")
    tbl.add_column("Zone", style="dim")
    tbl.add_column("Name")
    tbl.add_column("vCPUs", justify="right")
    tbl.add_column("Memory (MB)", justify="right")
    tbl.add_column("Scratch (GB)")
    tbl.add_column("Max PDs", justify="right")
    tbl.add_column("Status")

    for mt in sorted(machine_types, key=lambda m: (m.machine_type_id.zone, m.name)):
        status = mt.deprecation_status.status.value if mt.deprecation_status else "ACTIVE"
        color = _STATUS_COLORS.get(status, "") if not no_color else ""
        tbl.add_row(
            mt.machine_type_id.zone,
            mt.name,
            "" if mt.cpus is None else str(mt.cpus),
            "" if mt.memory_mb is None else str(mt.memory_mb),
            markdown.scratch_label(mt),
            "" if mt.maximum_persistent_disks is None else str(mt.maximum_persistent_disks),
            f"[{color}]{status}[/{color}]" if color else status,
        )

    Console(no_color=no_color).print(tbl)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(__version__)
@click.pass_context
def cli(ctx):
    """gcemodel: Compute Engine machine type models."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option(
    "--format", "output_format",
    type=click.Choice(list(FORMATS), case_sensitive=False),
    default=None,
    help="Output format (default: from config, else table).",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Write the catalog to this file (default: stdout).",
)
@click.option("--zone", default=None, help="Only show machine types in this zone.")
@click.option(
    "--usable-only",
    is_flag=True,
    default=False,
    help="Hide OBSOLETE and DELETED machine types.",
)
@click.option(
    "--skip-invalid",
    is_flag=True,
    default=False,
    help="Skip machine types that fail to map instead of aborting.",
)
@click.option("--config", "config_path", type=click.Path(), default=None, help="Settings file.")
@click.option("--no-color", is_flag=True, default=False, help="Disable rich terminal color output.")
def describe(
    paths: Tuple[str, ...],
    output_format: Optional[str],
    output: Optional[str],
    zone: Optional[str],
    usable_only: bool,
    skip_invalid: bool,
    config_path: Optional[str],
    no_color: bool,
) -> None:
    """
    Describe machine types stored in Compute Engine wire form.

    PATHS can be JSON/YAML files or directories; multiple values accepted.
    With --output, the table format is written as Markdown.
    """
    settings = load_settings(config_path)
    stderr = Console(stderr=True, no_color=no_color)
    fmt = (output_format or settings.format).lower()
    zone = zone or settings.zone

    try:
        machine_types = _collect_machine_types(paths, skip_invalid)
    except ComputeModelError as exc:
        stderr.print(f"[red]Mapping error:[/red] {exc}")
        sys.exit(2)

    machine_types = _filter(machine_types, zone, usable_only)
    if not machine_types:
        stderr.print("[yellow]No machine types found.[/yellow]")
        sys.exit(0)

    stderr.print(f"Found [bold]{len(machine_types)}[/bold] machine types.")

    if fmt == "table" and not output:
        _print_table(machine_types, no_color)
        sys.exit(0)

    source_label = ", ".join(paths)
    if fmt == "json":
        report_content = json_reporter.build_report(machine_types, source_label)
    elif fmt == "html":
        report_content = html_reporter.build_report(machine_types, source_label)
    else:
        report_content = markdown.build_report(machine_types, source_label)

    if output:
        try:
            with open(output, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(report_content)
        except OSError as exc:
            stderr.print(f"[red]Could not write report:[/red] {exc}")
            sys.exit(2)
        stderr.print(f"Catalog written to [bold]{output}[/bold]")
    else:
        click.echo(report_content)

    sys.exit(0)


@cli.command()
@click.argument("source_bucket")
@click.argument("object_name")
@click.argument("target_bucket")
@click.option("--project", default=None, help="Project id (default: from config).")
@click.option("--config", "config_path", type=click.Path(), default=None, help="Settings file.")
def move(
    source_bucket: str,
    object_name: str,
    target_bucket: str,
    project: Optional[str],
    config_path: Optional[str],
) -> None:
    """Move OBJECT_NAME from SOURCE_BUCKET to TARGET_BUCKET (copy, then delete)."""
    project = project or load_settings(config_path).project
    if not project:
        console.print("[red]No project given:[/red] pass --project or set 'project' in gcemodel.yaml.")
        sys.exit(2)

    try:
        move_object(project, source_bucket, object_name, target_bucket)
    except (GoogleCloudError, DefaultCredentialsError) as exc:
        console.print(f"[red]Move failed:[/red] {exc}")
        sys.exit(2)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
