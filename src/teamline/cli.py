"""Command-line interface for Teamline."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml

from .columns import DateColumnIndex
from .config import TimelineConfig, discover_config
from .exceptions import TeamlineError
from .loader import merge_details, read_details, read_records
from .logger import setup_logger
from .timeline import TimelineBuilder

app = typer.Typer(
    name="teamline",
    help="Pack overlapping assignments into a compact day-by-day timeline grid",
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity: 0=warnings, 1=adjustments, 2=placements, 3=column map",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to config file (default: teamline.yaml)"),
    ] = None,
) -> None:
    """Global options for teamline commands."""
    setup_logger(verbose)
    ctx.obj = config


def _parse_date(date_str: str, option_name: str) -> date:
    """Parse a YYYY-MM-DD CLI value, exiting with an error if malformed."""
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        typer.echo(
            f"Error: Invalid {option_name} '{date_str}'. Use YYYY-MM-DD format.",
            err=True,
        )
        raise typer.Exit(1) from None


def _parse_date_option(date_str: str | None, option_name: str) -> date | None:
    if date_str is None:
        return None
    return _parse_date(date_str, option_name)


def _load_config(
    ctx: typer.Context, near: Path | None, include_weekends: bool | None
) -> TimelineConfig:
    """Load config (the --config path is kept in ctx.obj), applying command-line overrides."""
    try:
        config = discover_config(ctx.obj, near)
    except TeamlineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if include_weekends is not None:
        config = config.model_copy(update={"include_weekends": include_weekends})
    return config


def _emit(data: dict[str, Any], output_format: str, output: Path | None) -> None:
    """Serialize data and write it to a file or stdout."""
    if output_format == "json":
        text = json.dumps(data, indent=2) + "\n"
    else:
        text = yaml.safe_dump(data, sort_keys=False)

    if output:
        output.write_text(text, encoding="utf-8")
        typer.echo(f"Timeline written to {output}")
    else:
        typer.echo(text, nl=False)


def _validate_format(output_format: str) -> None:
    if output_format not in ("yaml", "json"):
        typer.echo(
            f"Error: Invalid format '{output_format}'. Must be 'yaml' or 'json'.", err=True
        )
        raise typer.Exit(1)


@app.command()
def build(  # noqa: PLR0913 - CLI command needs multiple options
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Interval rows (CSV or YAML)")],
    *,
    details: Annotated[
        Path | None,
        typer.Option("--details", "-d", help="CSV of per-id details filling blank fields"),
    ] = None,
    today: Annotated[
        str | None,
        typer.Option("--today", help="Reference day (YYYY-MM-DD). Defaults to today"),
    ] = None,
    include_weekends: Annotated[
        bool | None,
        typer.Option(
            "--include-weekends/--work-week",
            help="Give weekends their own columns (overrides config)",
        ),
    ] = None,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format (yaml or json)")
    ] = "yaml",
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
) -> None:
    """Lay out intervals on a timeline grid and print the layout."""
    _validate_format(output_format)
    reference_day = _parse_date_option(today, "--today") or date.today()  # noqa: DTZ011
    config = _load_config(ctx, file, include_weekends)

    try:
        records = read_records(file, config.columns)
        if details is not None:
            records = merge_details(records, read_details(details, config.detail_columns))
    except TeamlineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    result = TimelineBuilder(config).build_from_records(records, today=reference_day)
    if not result.grid.rows:
        typer.echo("No valid intervals found; the timeline is empty.", err=True)

    grid = result.grid
    data = grid.to_dict()
    data["columns"]["today"] = grid.column_index.today_column(reference_day)
    data["columns"]["hidden_before_today"] = grid.column_index.hidden_column_count(
        reference_day
    )
    data["skipped"] = [{"id": s.item_id, "reason": s.reason} for s in result.skipped]
    data["colors"] = result.colors

    _emit(data, output_format, output)


@app.command()
def headers(
    ctx: typer.Context,
    start: Annotated[str, typer.Argument(help="First day to cover (YYYY-MM-DD)")],
    end: Annotated[str, typer.Argument(help="Last day to cover (YYYY-MM-DD)")],
    *,
    include_weekends: Annotated[
        bool | None,
        typer.Option(
            "--include-weekends/--work-week",
            help="Give weekends their own columns (overrides config)",
        ),
    ] = None,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format (yaml or json)")
    ] = "yaml",
) -> None:
    """Print the week and term header segments for a date range."""
    _validate_format(output_format)
    start_day = _parse_date(start, "start date")
    end_day = _parse_date(end, "end date")
    config = _load_config(ctx, None, include_weekends)

    index = DateColumnIndex.build(
        start_day,
        end_day,
        include_weekends=config.include_weekends,
        first_column=config.first_data_column,
    )
    terms = config.term_resolver()
    data = {
        "weeks": [
            {"columns": [w.start_column, w.end_column], "label": w.label, "color": w.color}
            for w in index.week_segments(terms, config.neutral_color)
        ],
        "terms": [
            {"columns": [t.start_column, t.end_column], "label": t.label, "color": t.color}
            for t in index.term_segments(terms, config.neutral_color)
        ],
    }
    _emit(data, output_format, None)


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
