"""Main report command."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..analysis import analyze_crate
from ..baseline import load_baseline
from ..candidates import CandidateKind, scan_candidates
from ..diff import compare
from ..exceptions import CrateReportError
from ..formatters import OutputFormat, render
from ..logging_config import setup_logging
from ..scanning import has_cargo_manifest
from . import app
from ._common import console, display_candidates, err_console, resolve_config, write_report


@app.command()
def main(
    crate_root: Path = typer.Argument(
        Path("."),
        help="Root directory of the crate to analyze",
        file_okay=False,
        dir_okay=True,
    ),
    baseline: Optional[Path] = typer.Option(
        None,
        "--baseline",
        help="Baseline CSV file to compare against",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output",
        help="Output file path (defaults to stdout)",
        dir_okay=False,
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.MARKDOWN,
        "-f",
        "--format",
        help="Output format",
        case_sensitive=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: auto-detect)",
        min=1,
        max=32,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    fail_on_regression: bool = typer.Option(
        False,
        "--fail-on-regression",
        help="Exit 1 if the baseline comparison is a regression or mixed",
    ),
    safe_candidates: bool = typer.Option(
        False,
        "--safe-candidates",
        help="List unsafe functions without raw pointer parameters",
    ),
    bool_candidates: bool = typer.Option(
        False,
        "--bool-candidates",
        help="List i32 functions that only return 0 or 1",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Analyze unsafe code usage in a Rust crate.

    Counts unsafe functions, statements in unsafe blocks, static mut items
    and unwrap calls per file. With a baseline, reports what changed and
    whether the change is an improvement or a regression.

    [bold cyan]Examples:[/bold cyan]

      crate-report path/to/crate

      crate-report -f csv -o baseline.csv

      crate-report --baseline baseline.csv -f pr-comment --fail-on-regression
    """
    from .. import __version__

    if version:
        console.print(f"[bold cyan]crate-report[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    logger = setup_logging(verbose=verbose, quiet=quiet)

    if output_format == OutputFormat.PR_COMMENT and baseline is None:
        raise typer.BadParameter("--format pr-comment requires --baseline", param_hint="--format")
    if safe_candidates and bool_candidates:
        raise typer.BadParameter(
            "--safe-candidates and --bool-candidates are mutually exclusive",
            param_hint="--bool-candidates",
        )

    try:
        settings = resolve_config(config=config, workers=workers, verbose=verbose, quiet=quiet)
        if settings.verbosity != "normal" and not (verbose or quiet):
            logger = setup_logging(
                verbose=settings.verbosity == "verbose", quiet=settings.verbosity == "quiet"
            )

        if settings.require_cargo_toml and not has_cargo_manifest(crate_root):
            err_console.print(
                f"[red]Error:[/red] No Cargo.toml found in '{escape(str(crate_root.resolve()))}'",
                highlight=False,
            )
            err_console.print("Please specify a valid Rust crate directory.")
            raise typer.Exit(1)

        if safe_candidates or bool_candidates:
            kind = CandidateKind.SAFE if safe_candidates else CandidateKind.BOOL
            display_candidates(kind, scan_candidates(crate_root, kind, settings))
            raise typer.Exit(0)

        project = analyze_crate(crate_root, settings)

        diff = None
        if baseline is not None:
            diff = compare(load_baseline(baseline), project)
            logger.info(f"Baseline comparison: {diff.verdict.value}")

        write_report(render(output_format, project, diff), output)

        if project.failures:
            err_console.print(
                f"[yellow]Warning:[/yellow] {len(project.failures)} file(s) could not be parsed"
            )

        if fail_on_regression and diff is not None and diff.verdict.is_failure:
            err_console.print(f"[red]Safety check failed:[/red] verdict is {diff.verdict.value}")
            raise typer.Exit(1)

    except typer.Exit:
        raise

    except CrateReportError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        err_console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
