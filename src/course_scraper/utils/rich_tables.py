# ABOUTME: Rich table utilities for the CLI's on-screen scrape summary
# ABOUTME: Provides pre-configured table generators for metadata, statistics and logging status

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.table import Table

from course_scraper.core.models import Category, CombinedDocument

CATEGORY_LABELS = {
    Category.FLIP_CARDS: "🃏 Flip Cards",
    Category.HOTSPOTS: "📍 Hotspots",
    Category.KNOWLEDGE_CHECKS: "❓ Knowledge Checks",
    Category.ACCORDIONS: "🪗 Accordions",
    Category.TABS: "🗂️ Tab Sections",
    Category.IMAGES: "🖼️ Images",
    Category.TEXT_BLOCKS: "📝 Text Blocks",
    Category.LISTS: "📋 Lists",
    Category.TABLES: "📊 Tables",
    Category.VIDEOS: "🎬 Videos",
}


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a key-value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_metadata_table(document: CombinedDocument) -> Table:
    """Create a table describing where and when a document was scraped."""
    metadata = document.metadata
    metadata_data = {
        "🌐 URL": metadata.url or "Unknown",
        "📚 Course": metadata.course or "N/A",
        "📖 Lesson": metadata.lesson or "N/A",
        "🧭 Path": metadata.path or "N/A",
        "📅 Scraped At": metadata.scraped_at,
    }

    return create_key_value_table(
        title="🔎 Scraped Page",
        data=metadata_data,
        title_style="bold magenta",
        key_style="cyan",
        value_style="white",
    )


def create_statistics_table(document: CombinedDocument) -> Table:
    """Create the per-category summary; categories with no items are left out.

    Args:
        document: Combined scrape document

    Returns:
        Summary table with a total row
    """
    table = Table(
        title="[bold cyan]📦 Extracted Content[/bold cyan]",
        box=ROUNDED,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        row_styles=["", "dim"],
    )
    table.add_column("Type", style="bold blue")
    table.add_column("Count", style="green", justify="right")

    statistics = document.statistics
    for category in Category:
        count = statistics.count_for(category)
        if count > 0:
            table.add_row(CATEGORY_LABELS[category], str(count))

    table.add_section()
    table.add_row("[bold]Total[/bold]", f"[bold]{statistics.total_items} items[/bold]")
    return table


def create_segmented_label_table(label: str, title: str, description: str) -> Table:
    return create_key_value_table(
        title="✂️ Label Segmentation",
        data={"🏷️ Raw Label": label, "📛 Title": title or "N/A", "📄 Description": description or "N/A"},
        title_style="bold green",
        key_style="cyan",
        value_style="white",
        box_style=SIMPLE,
    )


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    if status["log_files"]["main"]:
        logging_data["📝 Main Log"] = status["log_files"]["main"]
    if status["log_files"]["json"]:
        logging_data["📊 JSON Log"] = status["log_files"]["json"]
    if status["log_files"]["errors"]:
        logging_data["🚨 Error Log"] = status["log_files"]["errors"]

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with consistent spacing.

    Args:
        console: Rich console instance
        table: Configured table to print
    """
    console.print()
    console.print(table)
    console.print()
