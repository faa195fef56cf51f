#!/usr/bin/env python3
"""
Corpus Sentiment CLI - Command Line Interface

Usage:
    corpus-sentiment score RECORDS      Score a records table and print buckets
    corpus-sentiment compare RECORDS    Compare net sentiment across lexicons
    corpus-sentiment words RECORDS      Top contributing words per polarity
    corpus-sentiment lexicons           List builtin lexicons
    corpus-sentiment config             Show effective configuration
"""

import logging
import math
from pathlib import Path
from typing import Optional

import click
import pandas as pd
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()
logger = logging.getLogger("corpus_sentiment.cli")


def get_components(group_by: Optional[str] = None, window_size: Optional[int] = None, tz: Optional[str] = None):
    """Lazy load configuration and pipeline settings"""
    from core.config import get_config
    from sentiment.pipeline import SentimentPipelineConfig

    config = get_config()
    logging.basicConfig(
        level=getattr(logging, str(config.logging.level).upper(), logging.INFO),
        format=config.logging.format,
    )

    pipeline_cfg = SentimentPipelineConfig.from_settings(config)
    if group_by is not None:
        pipeline_cfg.group_by = group_by
    if window_size is not None:
        pipeline_cfg.window_size = int(window_size)
    if tz is not None:
        pipeline_cfg.timezone = tz
    return config, pipeline_cfg


def read_records(path: Path):
    """Read a records table (CSV, JSON or JSON lines) into TextRecords"""
    from data.schema import records_from_frame

    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        df = pd.read_json(path, lines=True)
    elif suffix == ".json":
        df = pd.read_json(path)
    else:
        df = pd.read_csv(path, low_memory=False)
    records = records_from_frame(df)
    logger.info("Loaded %d records from %s", len(records), path)
    return records


def resolve_lexicon(config, name: Optional[str]):
    from sentiment.lexicon import load_lexicon

    return load_lexicon(
        name or config.lexicon.default,
        auto_download=config.lexicon.auto_download,
        data_dir=config.lexicon.nltk_data_dir,
    )


def _format_pct(value: float) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "[dim]n/a[/dim]"
    style = "green" if value > 0 else "red" if value < 0 else "white"
    return f"[{style}]{value:+.2f}%[/{style}]"


def render_buckets(df: pd.DataFrame, title: str, limit: int = 50):
    table = Table(title=title)
    value_cols = {"negative_count", "positive_count", "total_words", "net", "percentage"}
    key_cols = [c for c in df.columns if c not in value_cols]
    for col in key_cols:
        table.add_column(col, style="cyan")
    table.add_column("Neg", justify="right")
    table.add_column("Pos", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Net", justify="right")
    table.add_column("Pct", justify="right")

    for row in df.head(limit).itertuples(index=False):
        data = row._asdict()
        table.add_row(
            *[str(data[c]) for c in key_cols],
            str(data["negative_count"]),
            str(data["positive_count"]),
            str(data["total_words"]),
            f"{int(data['net']):+d}",
            _format_pct(data["percentage"]),
        )

    console.print(table)
    if len(df) > limit:
        console.print(f"[dim]... {len(df) - limit} more rows[/dim]")


group_by_option = click.option(
    "--group-by",
    "-g",
    type=click.Choice(["document", "window", "chapter", "category", "hour"]),
    help="Grouping key",
)


@click.group()
@click.version_option(version="0.1.0", prog_name="corpus-sentiment")
def cli():
    """Corpus Sentiment - word-level lexicon scoring"""
    pass


@cli.command()
@click.argument("records_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--lexicon", "-l", "lexicon_name", help="Builtin lexicon name or CSV path")
@group_by_option
@click.option("--window-size", "-w", type=click.IntRange(min=1), help="Lines per window (window grouping)")
@click.option("--tz", help="Timezone for hour grouping")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write the bucket table as CSV")
@click.option("--limit", default=50, show_default=True, help="Rows to print")
def score(records_path: Path, lexicon_name: str, group_by: str, window_size: int, tz: str, output: Path, limit: int):
    """Score records and print per-bucket sentiment"""
    from sentiment.pipeline import score_records

    config, pipeline_cfg = get_components(group_by, window_size, tz)
    records = read_records(records_path)
    lexicon = resolve_lexicon(config, lexicon_name)

    with console.status("[bold green]Scoring...[/bold green]"):
        table, meta = score_records(records, lexicon, config=pipeline_cfg)

    render_buckets(table, f"Sentiment by {pipeline_cfg.group_by} ({lexicon.name})", limit=limit)
    console.print(
        f"Records: {meta['record_count']}  Tokens: {meta['token_count']}  "
        f"Matched: {meta['matched_count']}  Empty groups: {meta['empty_group_count']}"
    )

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(output, index=False)
        console.print(f"[green]Saved {len(table)} rows to {output}[/green]")


@cli.command()
@click.argument("records_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--lexicon", "-l", "lexicon_names", multiple=True, required=True, help="Repeat for each lexicon")
@group_by_option
@click.option("--window-size", "-w", type=click.IntRange(min=1), help="Lines per window (window grouping)")
@click.option("--tz", help="Timezone for hour grouping")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write the combined table as CSV")
def compare(records_path: Path, lexicon_names: tuple, group_by: str, window_size: int, tz: str, output: Path):
    """Run the same grouping under several lexicons"""
    from sentiment.pipeline import compare_lexicons

    config, pipeline_cfg = get_components(group_by, window_size, tz)
    records = read_records(records_path)
    lexicons = [resolve_lexicon(config, name) for name in lexicon_names]

    with console.status("[bold green]Scoring...[/bold green]"):
        table, meta = compare_lexicons(records, lexicons, config=pipeline_cfg)

    for lexicon in lexicons:
        subset = table[table["lexicon"] == lexicon.name].drop(columns="lexicon")
        render_buckets(subset, f"Sentiment by {pipeline_cfg.group_by} ({lexicon.name})")

    agreement = meta.get("sign_agreement")
    if agreement:
        rate = agreement["agreement_rate"]
        rate_text = "n/a" if isinstance(rate, float) and math.isnan(rate) else f"{rate:.1%}"
        console.print(Panel(
            f"Groups compared: {agreement['compared_groups']}\n"
            f"Same sign of net: {agreement['agreeing_groups']} ({rate_text})",
            title="Lexicon agreement",
        ))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(output, index=False)
        console.print(f"[green]Saved {len(table)} rows to {output}[/green]")


@cli.command()
@click.argument("records_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--lexicon", "-l", "lexicon_name", help="Builtin lexicon name or CSV path")
@click.option("--top", "-n", default=10, show_default=True, help="Words per polarity")
def words(records_path: Path, lexicon_name: str, top: int):
    """Most frequent matched words per polarity"""
    from sentiment.pipeline import word_contributions

    config, pipeline_cfg = get_components()
    records = read_records(records_path)
    lexicon = resolve_lexicon(config, lexicon_name)
    ranked = word_contributions(records, lexicon, top_n=top, config=pipeline_cfg)

    table = Table(title=f"Top words ({lexicon.name})")
    table.add_column("Polarity", style="cyan")
    table.add_column("Word")
    table.add_column("Count", justify="right")
    for word, polarity, count in ranked.itertuples(index=False, name=None):
        style = "green" if polarity == "positive" else "red"
        table.add_row(f"[{style}]{polarity}[/{style}]", word, str(count))
    console.print(table)


@cli.command()
def lexicons():
    """List builtin lexicons"""
    from sentiment.lexicon import BUILTIN_LEXICONS

    table = Table(title="Builtin Lexicons")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    for name, description in BUILTIN_LEXICONS.items():
        table.add_row(name, description)
    console.print(table)


@cli.command("config")
def show_config():
    """Show effective configuration"""
    config, _ = get_components()

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for key in (
        "pipeline.group_by",
        "pipeline.window_size",
        "pipeline.timezone",
        "pipeline.include_empty_groups",
        "pipeline.remove_stopwords",
        "lexicon.default",
        "logging.level",
        "output_dir",
    ):
        table.add_row(key, str(config.get(key)))
    console.print(table)


def main():
    """Main entry point"""
    cli()


if __name__ == "__main__":
    main()
