# src/cli/runner.py

"""Headless runner: executes the plugin against the local node store."""

import json
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.models.product import EnrichedProduct
from src.services.source_nodes import SourceRun, source_nodes
from src.storage.node_store import NodeStore

logger = logging.getLogger("ml_source.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _products_to_dicts(
    products: list[EnrichedProduct],
) -> list[dict[str, object]]:
    """Serialise enriched products to plain dicts for JSON output."""
    return [
        {
            "itemID": p.item_id,
            "title": p.detail.title,
            "price": p.detail.price,
            "currency": p.detail.currency_id,
            "permalink": p.detail.permalink,
            "images": len(p.item_images),
            "hasDescription": p.item_description is not None,
        }
        for p in products
    ]


def _print_table(products: list[EnrichedProduct]) -> None:
    """Render a Rich table of imported products to stdout."""
    sorted_products = sorted(
        products,
        key=lambda p: p.detail.price if p.detail.price > 0 else float("inf"),
    )
    table = Table(
        title="Imported Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Item", style="magenta")
    table.add_column("Title", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Images", justify="center")
    table.add_column("URL", overflow="fold", style="dim")

    for idx, p in enumerate(sorted_products, 1):
        price_str = (
            f"{p.detail.currency_id} {p.detail.price:,.2f}"
            if p.detail.price > 0
            else "N/A"
        )
        table.add_row(
            str(idx),
            p.item_id,
            p.detail.title[:60],
            price_str,
            str(len(p.item_images)),
            p.detail.permalink,
        )

    Console().print(table)


def _print_summary(run: SourceRun) -> None:
    parts: list[str] = []
    if run.failures:
        parts.append(f"{len(run.failures)} failed")
    detail = f" ({', '.join(parts)})" if parts else ""
    _err.print(
        f"[green]✓ {len(run.products)} products"
        f" of {run.total_products}{detail},"
        f" {len(run.nodes)} nodes created[/green]"
    )
    for failure in run.failures:
        _err.print(f"[red]{failure.product_id}: {failure.error}[/red]")


async def cli_source(
    site_id: str,
    username: str,
    output_format: str,
    output_dir: str | None,
) -> int:
    """Run one sync and return an exit code (0=nodes created, 1=none)."""
    if output_dir is not None:
        Settings.RESULTS_DIR = Path(output_dir)

    store = NodeStore()
    _err.print(
        f"[bold]Sourcing:[/bold] {username}  [dim]site={site_id}[/dim]"
    )

    run = await source_nodes(
        store, {"site_id": site_id, "username": username}
    )

    if run.aborted:
        _err.print(f"[yellow]Nothing imported: {run.aborted}[/yellow]")
        return 1

    _print_summary(run)

    try:
        path = store.save(f"{site_id}_{username}")
        _err.print(f"[dim]Saved nodes → {path}[/dim]")
    except OSError as exc:
        logger.error("Save failed: %s", exc, exc_info=True)
        _err.print(f"[red]Save failed: {exc}[/red]")

    if output_format == "table":
        _print_table(run.products)
    else:
        print(
            json.dumps(
                _products_to_dicts(run.products),
                ensure_ascii=False,
                indent=2,
            )
        )
    return 0
