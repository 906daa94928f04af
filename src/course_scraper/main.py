# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides commands for scraping sources, inspecting label segmentation, and logging status

import json
from pathlib import Path

import asyncclick as click
from rich.console import Console

from course_scraper.config import get_config
from course_scraper.core.models import CombinedDocument
from course_scraper.core.service import ScrapeService
from course_scraper.extraction.labels import segment_label
from course_scraper.extraction.sources import source_from_location
from course_scraper.utils.logging import (
    LoggingMode,
    configure_logging,
    get_logging_status,
    with_scrape_context,
)
from course_scraper.utils.rich_tables import (
    create_logging_status_table,
    create_metadata_table,
    create_segmented_label_table,
    create_statistics_table,
    print_rich_table,
)

console = Console()


def _display_scrape_results(document: CombinedDocument, output: Path | None) -> None:
    """Display the scrape summary in a clean format."""
    if document.is_empty:
        console.print("[yellow]🔍 No course content found in any source.[/yellow]")
        return

    print_rich_table(console, create_metadata_table(document))
    print_rich_table(console, create_statistics_table(document))

    if output is not None:
        console.print(f"[green]💾 Saved to {output}[/green]")


@click.command()
@click.argument("sources", nargs=-1, required=True)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the combined document to this file",
)
@click.pass_context
async def scrape(ctx, sources: tuple[str, ...], output: Path | None):
    """
    🕷️ Combine course-page scrape results into one document.

    Each SOURCE is a saved JSON payload or an http(s) URL returning one. Sources
    are listed in priority order: when two disagree on page metadata, the
    earlier one wins.
    """
    await _scrape_async(list(sources), output, ctx.obj["json_output"])


async def _scrape_async(locations: list[str], output: Path | None, json_output: bool) -> None:
    """Scrape all sources with optional UI display."""
    config = get_config()

    with with_scrape_context(len(locations)) as logger:
        logger.info("Starting scrape", sources=locations)

        sources = [source_from_location(location, attempts=config.http_retry_attempts) for location in locations]
        service = ScrapeService(config=config)

        try:
            if json_output:
                document = await service.scrape(sources)
            else:
                with console.status("[bold cyan]🧙‍♂️ Querying sources...[/bold cyan]"):
                    document = await service.scrape(sources)
        finally:
            await service.close_sources(sources)

        logger.info("Scrape complete", total_items=document.statistics.total_items)

        rendered = document.to_json()
        if output is not None:
            output.write_text(rendered, encoding="utf-8")
            logger.info("Document written", path=str(output))

        if json_output:
            click.echo(rendered)
        else:
            _display_scrape_results(document, output)


@click.command()
@click.argument("label")
@click.pass_context
def segment(ctx, label: str):
    """
    ✂️ Split a run-on label into its title and description.
    """
    result = segment_label(label)

    if ctx.obj["json_output"]:
        click.echo(json.dumps(result._asdict()))
        return

    print_rich_table(console, create_segmented_label_table(label, result.title, result.description))


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    try:
        config = get_config()
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

        # Use config defaults when CLI parameters are not provided
        final_log_level = log_level or config.log_level
        final_log_file = log_file or (str(config.log_file) if config.log_file else None)

        configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)
    except (FileNotFoundError, PermissionError, OSError):
        # Fall back to minimal logging configuration
        mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE
        configure_logging(mode=mode, log_level=log_level or "INFO", log_file=log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON instead of rich interface")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    📚 Course Scraper - Combine e-learning page captures into one document

    Merges the results of independent extraction probes, removes duplicates and
    interface noise, and reports what was found per content type.
    """
    # Store global options in context for commands to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


app.add_command(scrape)
app.add_command(segment)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
