"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..candidates import CandidateKind, FileCandidates
from ..config import ReportConfig, load_config
from ..exceptions import ReportWriteError

console = Console()
err_console = Console(stderr=True)

CANDIDATE_INTROS = {
    CandidateKind.SAFE: (
        "If a function is unsafe and has no raw pointers as parameters, "
        "it may be a good candidate for making safe."
    ),
    CandidateKind.BOOL: (
        "If a function returns i32 and all return statements return literal 0 or 1 values, "
        "it may be a good candidate for converting to return bool."
    ),
}

NO_CANDIDATES = {
    CandidateKind.SAFE: "No candidates found for functions to convert from unsafe to safe.",
    CandidateKind.BOOL: "No candidates found for functions to convert from i32 to bool.",
}


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ReportConfig:
    """Build configuration from CLI options."""
    return load_config(config_file=config, workers=workers, verbose=verbose, quiet=quiet)


def write_report(text: str, output: Optional[Path] = None) -> None:
    """Write a rendered report to ``output``, or to stdout when it is None.

    Raises:
        ReportWriteError: If the output file cannot be written
    """
    if output is None:
        # Plain echo: the report must reach stdout byte for byte, without Rich markup
        typer.echo(text, nl=False)
        return
    try:
        with open(output, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise ReportWriteError(output, e.strerror or str(e))


def display_candidates(kind: CandidateKind, results: list[FileCandidates]) -> None:
    if not results:
        console.print(NO_CANDIDATES[kind])
        return

    console.print("These candidates are chosen using a very simple heuristic.")
    console.print(CANDIDATE_INTROS[kind])
    console.print("Note that there may be other reasons why these functions shouldn't be converted.\n")

    for file_result in results:
        console.print(f"[bold]{escape(file_result.path)}[/bold]:")
        for candidate in file_result.candidates:
            console.print(f"    {escape(str(candidate))}", highlight=False)

    total = sum(len(r.candidates) for r in results)
    console.print(f"\nFound [bold]{total}[/bold] candidates over {len(results)} files")
