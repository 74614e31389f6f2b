from pathlib import Path

import click
from click.core import Context
from rich.console import Console

from gwrqa.services.config import ConfigManager
from gwrqa.services.terminal_printers import TerminalBase as t
from gwrqa.types.base import WorkflowConfigs
from gwrqa.utils import UtilsBase as utils
from gwrqa.workflows.base import WkflCompareAll

console = Console()


@click.group()
@click.option(
    "--configs",
    "configs_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the configs file (defaults to configs.json next to the package).",
)
@click.pass_context
def cli(ctx: Context, configs_path: Path | None):
    """
    GWR / OSM address comparison command line interface

    Main CLI group. ctx.obj holds the ConfigManager shared between commands.
    """
    ctx.obj = ConfigManager(configs_path)


@cli.command()
@click.argument("data_root", type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path))
@click.option(
    "--output", "-o",
    "output_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for GeoJSON output (defaults to DATA_ROOT/output).",
)
@click.pass_obj
def init(config_manager: ConfigManager, data_root: Path, output_root: Path | None):
    """Initialize the project with a data directory"""
    config_manager.generate(data_root, output_root)
    utils.generate_data_dirs(data_root)
    console.print(f"Initialized with data directory: \n{data_root}")
    console.print(f"Config file location: \n{config_manager.path}")
    console.print("Project data directories created. Copy the raw extracts into the 'raw' directory.\n")
    t.print_data_root_tree(data_root)


@cli.command()
@click.option("--municipality", "-m", default=None, help="Only compare the municipality with this name.")
@click.option(
    "--limit", "-l",
    "official_valid_limit",
    type=click.FloatRange(0, 1),
    default=None,
    help="Fraction of official GWR addresses above which the official flag is trusted.",
)
@click.option(
    "--output", "-o",
    "output_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for GeoJSON output.",
)
@click.option("--workers", "-w", type=click.IntRange(min=1), default=None, help="Number of worker threads.")
@click.pass_obj
def compare(
    config_manager: ConfigManager,
    municipality: str | None,
    official_valid_limit: float | None,
    output_root: Path | None,
    workers: int | None,
):
    """Compare GWR and OSM addresses for all (or one) municipalities"""
    t.print_with_dots("Searching for project settings")
    if not config_manager.exists:
        t.print_with_dots("No configs file was found. Run `gwrqa init /path/to/your/root/data/dir`", style="yellow")
        raise click.Abort()
    try:
        configs: WorkflowConfigs = config_manager.workflow_configs(
            municipality=municipality,
            official_valid_limit=official_valid_limit,
            output_root=output_root,
            workers=workers,
        )
    except ValueError as e:
        raise click.UsageError(str(e))
    WkflCompareAll(configs).execute()


if __name__ == "__main__":
    cli()
