from pathlib import Path
from typing import List, Optional

import typer

from agecensus import Census, CensusConfig, CensusError, DirectorySourceFactory
from agecensus.config import DEFAULT_DATA_ROOT, DEFAULT_SUFFIX
from agecensus.logging_utils import configure_logging

app = typer.Typer()


@app.command("top-ages")
def top_ages(
    regions: List[str] = typer.Argument(..., help="Region identifiers to rank (one file per region)."),
    data_root: Path = typer.Option(
        DEFAULT_DATA_ROOT,
        "--data-root",
        exists=False,
        file_okay=False,
        dir_okay=True,
        help="Directory holding one age file per region.",
    ),
    suffix: str = typer.Option(DEFAULT_SUFFIX, "--suffix", help="File suffix appended to each region name."),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        min=1,
        help="Worker threads for multi-region queries (defaults to the executor's choice).",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."),
) -> None:
    """
    Print the three most common ages for one region, or across several regions combined.
    """
    try:
        configure_logging(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc

    census = Census(DirectorySourceFactory(data_root, suffix=suffix), CensusConfig(max_workers=workers))

    if len(regions) == 1:
        try:
            lines = census.top_ages(regions[0])
        except CensusError as exc:
            typer.echo(f"[census] {exc}", err=True)
            raise typer.Exit(code=1) from exc
    else:
        lines = census.top_ages_across(regions)

    for line in lines:
        typer.echo(line)


@app.command("regions")
def list_regions(
    data_root: Path = typer.Option(DEFAULT_DATA_ROOT, "--data-root", file_okay=False, dir_okay=True),
    suffix: str = typer.Option(DEFAULT_SUFFIX, "--suffix"),
) -> None:
    """List region identifiers that have a data file under --data-root."""
    for region in DirectorySourceFactory(data_root, suffix=suffix).available_regions():
        typer.echo(region)


if __name__ == "__main__":
    app()
