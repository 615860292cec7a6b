"""CLI entry point."""

import typer

app = typer.Typer(
    name="crate-report",
    help="crate-report - unsafe code metrics for Rust crates",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import commands to register them
from .analyze import main as _main_command  # noqa: F401, E402
