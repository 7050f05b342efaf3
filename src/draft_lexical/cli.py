"""Click CLI for the Draft → Lexical converter.

Commands:
    convert   — Draft raw content JSON → Lexical editor-state JSON
    shorten   — Compact a Lexical JSON file (short keys, no defaults)
    expand    — Restore a compacted Lexical JSON file to full form
    proposal  — Convert Draft documents embedded in a proposal JSON file
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from draft_lexical.config import Config
from draft_lexical.exceptions import ConverterError
from draft_lexical.pipeline import Pipeline


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to a YAML configuration file.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Convert Draft.js raw content to Lexical editor state."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = Config.load(config_path)
    except ConverterError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
    if verbose:
        config.verbose = True

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["pipeline"] = Pipeline(config)


@main.command()
@click.argument("input_json", type=click.Path(exists=True, path_type=Path))
@click.argument("output_json", type=click.Path(path_type=Path), required=False)
@click.option("--shorten", is_flag=True, help="Shorten keys and strip default values.")
@click.option("--bare-root", is_flag=True, help="Write the root node without the editorState wrapper.")
@click.option("--report", is_flag=True, help="Save conversion report JSON alongside output.")
@click.option(
    "--report-path",
    type=click.Path(path_type=Path),
    default=None,
    help="Custom path for the report JSON file.",
)
@click.pass_context
def convert(
    ctx: click.Context,
    input_json: Path,
    output_json: Path | None,
    shorten: bool,
    bare_root: bool,
    report: bool,
    report_path: Path | None,
) -> None:
    """Convert a Draft JSON file to Lexical JSON."""
    pipeline: Pipeline = ctx.obj["pipeline"]

    if shorten:
        pipeline.config.output.shorten_keys = True
        pipeline.config.output.strip_defaults = True
    if bare_root:
        pipeline.config.output.wrap_editor_state = False

    if output_json is None:
        output_json = input_json.with_suffix(".lexical.json")

    try:
        result = pipeline.convert(
            input_json,
            output_json,
            save_report=report,
            report_path=report_path,
        )
        click.echo(f"Generated: {result}")

        if report and pipeline.last_report:
            rpt = pipeline.last_report
            click.echo(
                f"Report: {rpt.paragraph_count} paragraphs, "
                f"{rpt.list_count} lists, {rpt.table_count} tables, "
                f"{len(rpt.warnings)} warnings"
            )
    except ConverterError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("input_json", type=click.Path(exists=True, path_type=Path))
@click.argument("output_json", type=click.Path(path_type=Path))
@click.pass_context
def shorten(ctx: click.Context, input_json: Path, output_json: Path) -> None:
    """Compact a Lexical JSON file."""
    pipeline: Pipeline = ctx.obj["pipeline"]

    try:
        click.echo(f"Generated: {pipeline.shorten(input_json, output_json)}")
    except ConverterError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("input_json", type=click.Path(exists=True, path_type=Path))
@click.argument("output_json", type=click.Path(path_type=Path))
@click.pass_context
def expand(ctx: click.Context, input_json: Path, output_json: Path) -> None:
    """Expand a compacted Lexical JSON file."""
    pipeline: Pipeline = ctx.obj["pipeline"]

    try:
        click.echo(f"Generated: {pipeline.expand(input_json, output_json)}")
    except ConverterError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("input_json", type=click.Path(exists=True, path_type=Path))
@click.argument("output_json", type=click.Path(path_type=Path))
@click.pass_context
def proposal(ctx: click.Context, input_json: Path, output_json: Path) -> None:
    """Convert the Draft documents embedded in a proposal JSON file."""
    pipeline: Pipeline = ctx.obj["pipeline"]

    try:
        click.echo(f"Generated: {pipeline.proposal(input_json, output_json)}")
    except ConverterError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
