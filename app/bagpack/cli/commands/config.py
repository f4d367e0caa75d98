"""Config commands.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import typer
from rich.table import Table

from bagpack.cli.types import require_config
from bagpack.core.config import BagpackConfig, ConfigError, save_config
from bagpack.core.paths import get_config_path
from bagpack.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show or initialize bagpack configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration (file plus environment overrides)."""
    config = require_config()

    table = Table(
        title=f"Configuration ({get_config_path()})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value", style="info")

    for key, value in config.model_dump(mode="json").items():
        table.add_row(key, "-" if value is None else str(value))

    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_warning(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        written = save_config(BagpackConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {written}")
