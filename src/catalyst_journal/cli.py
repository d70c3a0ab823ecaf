#!/usr/bin/env python3
"""
Catalyst Journal CLI.

Administration commands for the workbook service.

Usage:
    catalyst-journal init-db              # Create tables and seed the curriculum
    catalyst-journal validate-catalog     # Check every cross-step reference
    catalyst-journal curriculum --day 1   # Show days and steps
    catalyst-journal tools "5 Whys"       # Show tool reference cards
    catalyst-journal serve --port 8000    # Run the API server
"""

import argparse
import logging
import sys
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import get_settings
from .curriculum.catalog import Catalog, get_catalog
from .curriculum.tools import TOOL_LIBRARY, get_tool
from .db.database import JournalDatabase
from .exceptions import CatalogError, ToolNotFoundError

console = Console()


def cmd_init_db(args):
    """Create the schema, seed the curriculum and show table counts."""
    console.print()
    console.print(Panel("[bold]Catalyst Journal - Database[/bold]"))
    console.print()

    db = JournalDatabase(args.db)
    stats = db.get_stats()

    table = Table(box=box.ROUNDED)
    table.add_column("Table", style="cyan")
    table.add_column("Rows", style="white", justify="right")

    table.add_row("Database", str(db.db_path))
    for name, count in stats.items():
        table.add_row(name, str(count))

    console.print(table)
    console.print()


def cmd_validate_catalog(args, catalog: Catalog) -> int:
    """Validate the catalog. Returns the process exit code."""
    problems = catalog.problems()
    if not problems:
        console.print(
            f"[green]Catalog OK:[/green] {len(catalog)} steps, {len(catalog.tools)} tools"
        )
        return 0

    console.print(f"[red]Catalog has {len(problems)} problem(s):[/red]")
    for problem in problems:
        console.print(f"  - {problem}")
    return 1


def cmd_curriculum(args, catalog: Catalog):
    """Show the days, or the steps of one day."""
    console.print()
    console.print(Panel("[bold]Catalyst Journal - Curriculum[/bold]"))
    console.print()

    if args.day is None:
        table = Table(box=box.ROUNDED)
        table.add_column("Day", style="cyan", justify="right")
        table.add_column("Title", style="bold")
        table.add_column("Subtitle")
        table.add_column("Steps", justify="right")
        for day in catalog.days:
            table.add_row(str(day.number), day.title, day.subtitle, str(len(day.steps)))
        console.print(table)
        console.print()
        return

    day = catalog.get_day(args.day)
    if day is None:
        console.print(f"[red]No day {args.day} in the curriculum.[/red]")
        return

    table = Table(title=day.title, box=box.ROUNDED)
    table.add_column("Step", style="cyan", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Tools")
    table.add_column("Fields", justify="right")
    for step in day.steps:
        table.add_row(
            str(step.step),
            step.title,
            ", ".join(step.tools),
            str(len(step.field_templates())),
        )
    console.print(table)
    console.print()


def cmd_tools(args) -> int:
    """List tool cards, or show one in full."""
    if not args.name:
        table = Table(box=box.ROUNDED)
        table.add_column("Tool", style="cyan")
        table.add_column("Description")
        for name, card in TOOL_LIBRARY.items():
            table.add_row(name, card.description)
        console.print(table)
        return 0

    try:
        card = get_tool(args.name)
    except ToolNotFoundError:
        console.print(f"[red]Unknown tool:[/red] {args.name}")
        return 1

    steps = "\n".join(f"  {i}. {line}" for i, line in enumerate(card.how_to, 1))
    body = f"""
{card.description}

[cyan]When to use:[/cyan] {card.when}

[cyan]How to:[/cyan]
{steps}

[cyan]Tips:[/cyan] {card.tips}
"""
    if card.example:
        body += f"\n[cyan]Example:[/cyan] {card.example}\n"
    console.print(Panel(body, title=card.title, box=box.ROUNDED))
    return 0


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "catalyst_journal.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Catalyst Journal - multi-day problem-solving workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  catalyst-journal init-db --db ./journal.db
  catalyst-journal validate-catalog
  catalyst-journal curriculum --day 3
  catalyst-journal tools SWOT analysis
  catalyst-journal serve --port 8000 --reload
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_p = subparsers.add_parser("init-db", help="Create tables and seed the curriculum")
    init_p.add_argument("--db", help="SQLite database path (defaults to settings)")

    subparsers.add_parser("validate-catalog", help="Validate curriculum references")

    curriculum_p = subparsers.add_parser("curriculum", help="Show days and steps")
    curriculum_p.add_argument("--day", "-d", type=int, help="Show the steps of one day")

    tools_p = subparsers.add_parser("tools", help="Show tool reference cards")
    tools_p.add_argument("name", nargs="*", help="Tool name, e.g. '5 Whys'")

    serve_p = subparsers.add_parser("serve", help="Run the API server")
    serve_p.add_argument("--host", help="Bind address")
    serve_p.add_argument("--port", "-p", type=int, help="Port")
    serve_p.add_argument("--reload", action="store_true", help="Reload on code changes")

    args = parser.parse_args(argv)
    if args.command == "tools":
        args.name = " ".join(args.name)

    # Route to appropriate command
    if args.command == "init-db":
        cmd_init_db(args)
    elif args.command == "validate-catalog":
        return cmd_validate_catalog(args, get_catalog())
    elif args.command == "curriculum":
        cmd_curriculum(args, get_catalog())
    elif args.command == "tools":
        return cmd_tools(args)
    elif args.command == "serve":
        try:
            get_catalog().validate()
        except CatalogError as e:
            console.print(f"[red]{e.message}[/red]")
            return 1
        cmd_serve(args)
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
