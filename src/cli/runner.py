# src/cli/runner.py

"""Headless CLI commands built on the card service."""

import json
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.progress import Progress
from rich.table import Table

from src.cards.category_classifier import classify
from src.config.settings import Settings
from src.errors import EmptyPackageError, ShopeeAPIError
from src.filters.product_validator import ProductValidator
from src.models.product import Product
from src.pricing.price_calculator import (
    displayed_discount,
    format_count,
    format_price,
)
from src.scrapers.shopee_client import ShopeeClient
from src.services.card_service import CardGenerationOptions, CardService
from src.services.description_service import DescriptionService
from src.storage.backend import FileBackend
from src.storage.file_manager import FileManager

logger = logging.getLogger("promo_cards.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _print_table(products: list[Product]) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title="Best Sellers",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Item ID", style="dim")
    table.add_column("Product", max_width=50)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Was", justify="right", style="dim")
    table.add_column("Rating", justify="center")
    table.add_column("Sales", justify="right")
    table.add_column("Category", style="magenta")

    for idx, p in enumerate(products, 1):
        discount = displayed_discount(p)
        table.add_row(
            str(idx),
            p.item_id,
            p.product_name[:50],
            format_price(p.price),
            format_price(discount[1]) if discount is not None else "-",
            f"{p.rating_star:.1f}" if p.rating_star else "-",
            format_count(p.sales),
            classify(p.product_name).value,
        )

    Console().print(table)


def _load_products_file(path: str) -> list[Product]:
    """Read one product record or a list of them from a JSON file."""
    with open(path, encoding="utf-8") as f:
        raw: Any = json.load(f)
    records = raw if isinstance(raw, list) else [raw]
    products = [Product.from_record(r) for r in records if isinstance(r, dict)]
    valid, dropped = ProductValidator.validate(products)
    if dropped:
        _err.print(f"[yellow]Skipped {dropped} invalid product(s)[/yellow]")
    return valid


def _description_service(use_ai: bool, cache: bool) -> DescriptionService:
    """Description service, caching on disk under cache/ when asked."""
    if not cache:
        return DescriptionService(use_ai=use_ai)
    backend = FileBackend(default_ttl=Settings.DESCRIPTION_CACHE_TTL)
    logger.info("Caching descriptions under %s", backend.directory)
    return DescriptionService(cache=backend, use_ai=use_ai)


def run_best_sellers(
    limit: int,
    output_format: str,
    save: bool,
) -> int:
    """List best sellers as a table or JSON; exit code 0 on success."""
    client = ShopeeClient()
    try:
        products = client.get_best_sellers(limit=limit)
    except ShopeeAPIError as exc:
        logger.error("Best sellers fetch failed: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1

    if not products:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    if save:
        path = FileManager().save_products("best_sellers", products)
        _err.print(f"[dim]Saved → {path}[/dim]")

    if output_format == "table":
        _print_table(products)
    else:
        Console().print_json(
            json.dumps([p.to_record() for p in products], ensure_ascii=False)
        )
    return 0


def run_generate(
    item_id: str | None,
    product_file: str | None,
    options: CardGenerationOptions,
    output_dir: str | None,
    cache: bool = False,
) -> int:
    """Generate cards for one item id or every product in a JSON file."""
    if item_id:
        try:
            product = ShopeeClient().get_product(item_id)
        except ShopeeAPIError as exc:
            logger.error("Product lookup failed: %s", exc)
            _err.print(f"[red]{exc}[/red]")
            return 1
        products = [product] if product else []
    elif product_file:
        products = _load_products_file(product_file)
    else:
        _err.print("[red]Provide --item-id or --file[/red]")
        return 2

    if not products:
        _err.print("[yellow]No products to generate.[/yellow]")
        return 1

    file_manager = FileManager(Path(output_dir) if output_dir else None)
    service = CardService(_description_service(options.use_ai, cache))
    failures = 0

    with Progress(console=_err) as progress:
        task = progress.add_task("Generating cards...", total=len(products))
        for product in products:
            result = service.generate(product, options)
            for error_msg in result.errors:
                _err.print(f"[red]Error: {error_msg}[/red]")
            if result.image_placeholder:
                _err.print(
                    f"[yellow]{product.item_id}: image unavailable, "
                    "placeholder used[/yellow]"
                )

            try:
                download = CardService.build_download(result)
            except EmptyPackageError:
                failures += 1
                progress.advance(task)
                continue

            saved = [
                file_manager.save_asset(product, asset) for asset in result.assets
            ]
            file_manager.save_description(product, result.description)
            # A single card is its own download; it is already on disk
            if len(result.assets) > 1:
                path = file_manager.save_package(
                    product, download.filename, download.data
                )
            else:
                path = saved[0]
            _err.print(f"[green]✓ {product.item_id} → {path}[/green]")
            progress.advance(task)

    return 1 if failures == len(products) else 0


def run_describe(product_file: str, use_ai: bool, cache: bool = False) -> int:
    """Print a description for each product in a JSON file."""
    products = _load_products_file(product_file)
    if not products:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    service = _description_service(use_ai, cache)
    for product in products:
        Console().rule(f"{product.item_id} {product.product_name[:40]}")
        Console().print(service.describe(product), markup=False)
    return 0
