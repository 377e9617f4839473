#!/usr/bin/env python3
"""
Seed the standard mailing lists.

Usage:
    uv run python -m modules.mailing_lists.seed
"""

import asyncio

from rich.console import Console
from rich.table import Table

from api.dependencies import get_container
from .models import DEFAULT_MAILING_LISTS

console = Console()


async def seed() -> None:
    service = get_container().mailing_lists

    console.print("[blue]Seeding mailing lists...[/blue]")
    created = {mailing_list.slug for mailing_list in await service.seed_default_lists()}

    table = Table(title="Mailing Lists")
    table.add_column("Slug", style="cyan")
    table.add_column("Name")
    table.add_column("Default")
    table.add_column("Active")
    table.add_column("Status")

    for request in DEFAULT_MAILING_LISTS:
        table.add_row(
            request.slug,
            request.name,
            "yes" if request.is_default else "",
            "yes" if request.is_active else "[dim]no[/dim]",
            "[green]Created[/green]" if request.slug in created else "[yellow]Exists[/yellow]",
        )

    console.print(table)


def main() -> None:
    asyncio.run(seed())


if __name__ == "__main__":
    main()
