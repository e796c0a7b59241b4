"""CLI interface for catalog-admin."""

import asyncio
import sys
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from .commit import CommitResult
from .config.constants import ORDER_STATUSES, Limits
from .config.logging import get_logger, setup_logging
from .config.settings import get_settings
from .exceptions import AssetValidationError, CatalogAdminError, ConfigurationError
from .listing import DeleteStatus, ListController
from .models import UploadFile
from .services import AssetEntityService, CollectionForm, ProductForm
from .wiring import Services, build_services

app = typer.Typer(
    name="catalog-admin",
    help="Manage catalog products, collections, the gallery hero and orders.",
    rich_markup_mode="rich",
)
products_app = typer.Typer(help="Add, edit, list and delete products.")
collections_app = typer.Typer(help="Add, edit, list and delete collections.")
gallery_app = typer.Typer(help="Show or replace the gallery hero image.")
orders_app = typer.Typer(help="List orders and change their status.")
app.add_typer(products_app, name="products")
app.add_typer(collections_app, name="collections")
app.add_typer(gallery_app, name="gallery")
app.add_typer(orders_app, name="orders")

console = Console()
logger = get_logger(__name__)


def _services() -> Services:
    """Load settings and wire services, exiting with a readable message on failure."""
    try:
        return build_services(get_settings())
    except ValidationError as e:
        logger.error("Configuration validation error: %s", e)
        console.print(
            "[red]Configuration error:[/red] Invalid configuration values.\n"
            "Check your CATALOG_ADMIN_* environment variables or .env file.\n"
            f"Details: {e}"
        )
        raise typer.Exit(1)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        console.print(
            Panel(
                f"[red]{e.message}[/red]\n\n{e.details or ''}".rstrip(),
                title="Configuration Error",
                border_style="red",
            )
        )
        raise typer.Exit(1)


def _render(controller: ListController, columns: list[tuple[str, str]], title: str) -> None:
    """Print the controller's visible page as a table."""
    rows = controller.visible_rows()
    if not controller.rows:
        console.print(f"[dim]No {title.lower()} found.[/dim]")
        return
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    for _, label in columns:
        table.add_column(label)
    for row in rows:
        table.add_row(row.id, *[str(row.value(column)) for column, _ in columns])
    console.print(table)
    console.print(
        f"[dim]Page {controller.page_index + 1} of {max(controller.page_count, 1)}"
        f" ({len(controller.filtered_rows())} of {len(controller.rows)} rows)[/dim]"
    )


def _configure(
    controller: ListController,
    query: str,
    sort: str | None,
    desc: bool,
    page: int,
    page_size: int | None,
) -> None:
    if page_size:
        if page_size not in Limits.PAGE_SIZE_CHOICES:
            choices = ", ".join(str(c) for c in Limits.PAGE_SIZE_CHOICES)
            raise typer.BadParameter(f"Page size must be one of {choices}")
        controller.set_page_size(page_size)
    controller.set_filter(query)
    controller.set_sort(sort, descending=desc)
    controller.set_page(page - 1)


def _report(result: CommitResult, success_message: str) -> None:
    if result.success:
        console.print(f"[green]{success_message}[/green]")
        return
    console.print(f"[red]Error:[/red] {result.error}")
    raise typer.Exit(1)


async def _delete(controller: ListController, row_id: str, yes: bool) -> None:
    confirm = None if yes else (lambda message: Confirm.ask(message, default=False))
    outcome = await controller.delete_row(row_id, confirm)
    if outcome.status is DeleteStatus.DELETED:
        console.print(f"[green]Deleted {row_id}.[/green]")
    elif outcome.status is DeleteStatus.CANCELLED:
        console.print("[yellow]Delete cancelled.[/yellow]")
    else:
        console.print(f"[red]Error:[/red] {outcome.error}")
        raise typer.Exit(1)


def _load_upload(path: Path) -> UploadFile:
    try:
        return UploadFile.from_path(path)
    except OSError as e:
        console.print(f"[red]Cannot read {path}:[/red] {e}")
        raise typer.Exit(1)


def _load_uploads(paths: list[Path] | None, service: AssetEntityService) -> list[UploadFile]:
    """Read and pre-validate image files before anything is uploaded."""
    uploads = [_load_upload(path) for path in paths or []]
    try:
        service.validate_files(uploads)
    except AssetValidationError as e:
        console.print(f"[red]Invalid image:[/red] {e.message}")
        raise typer.Exit(1)
    return uploads


def _overrides(**values) -> dict:
    """Options the operator actually passed."""
    return {key: value for key, value in values.items() if value is not None}


QueryOption = typer.Option("", "--filter", "-f", help="Free-text filter")
SortOption = typer.Option(None, "--sort", "-s", help="Column to sort by")
DescOption = typer.Option(False, "--desc", help="Sort descending")
PageOption = typer.Option(1, "--page", "-p", min=1, help="Page number")
PageSizeOption = typer.Option(None, "--page-size", help="Rows per page (10, 20, 30, 40 or 50)")
YesOption = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt")


@products_app.command("list")
def products_list(
    query: str = QueryOption,
    sort: str | None = SortOption,
    desc: bool = DescOption,
    page: int = PageOption,
    page_size: int | None = PageSizeOption,
) -> None:
    """List products.

    Examples:
        catalog-admin products list --filter coat
        catalog-admin products list --sort price --desc
    """
    services = _services()
    controller = asyncio.run(services.products.list_controller())
    _configure(controller, query, sort, desc, page, page_size)
    _render(
        controller,
        [("title", "Title"), ("price", "Price"), ("stock", "Stock"), ("rating", "Rating")],
        "Products",
    )


@products_app.command("delete")
def products_delete(
    product_id: str = typer.Argument(..., help="Product document id"),
    yes: bool = YesOption,
) -> None:
    """Delete a product and all of its images."""
    services = _services()

    async def run() -> None:
        await _delete(await services.products.list_controller(), product_id, yes)

    asyncio.run(run())


@products_app.command("add")
def products_add(
    name: str = typer.Argument(..., help="Product name"),
    price: str = typer.Option("", "--price", help="Price, e.g. 120"),
    stock: str = typer.Option("", "--stock", help="Units in stock"),
    original_price: str = typer.Option("", "--original-price", help="Price before the sale"),
    category: str = typer.Option("", "--category", help="Defaults to Uncategorized"),
    subcategory: str = typer.Option("", "--subcategory"),
    era: str = typer.Option("", "--era"),
    sizes: str = typer.Option("", "--sizes", help="Comma separated, e.g. 'S, M, L'"),
    color: str = typer.Option("", "--color", help="Defaults to N/A"),
    condition: str = typer.Option("", "--condition"),
    description: str = typer.Option("", "--description"),
    is_sale: bool = typer.Option(True, "--sale/--not-sale", help="Show in the sale listing"),
    no_stock: bool = typer.Option(False, "--no-stock", help="Mark as out of stock"),
    images: list[Path] | None = typer.Option(
        None, "--image", "-i", exists=True, dir_okay=False, help="Product image (repeat up to 6 times)"
    ),
) -> None:
    """Create a product, uploading its images first.

    Examples:
        catalog-admin products add "Winter Coat" --price 120 --sizes "M, L" -i front.jpg -i back.jpg
    """
    services = _services()
    uploads = _load_uploads(images, services.products)
    form = ProductForm(
        name=name,
        price=price,
        stock=stock,
        original_price=original_price,
        category=category,
        subcategory=subcategory,
        era=era,
        sizes=sizes,
        color=color,
        condition=condition,
        description=description,
        is_sale=is_sale,
        no_stock=no_stock,
    )
    result = asyncio.run(services.products.create(form, uploads))
    _report(result, f"Created product {result.entity_id} with {len(result.assets)} image(s).")


@products_app.command("edit")
def products_edit(
    product_id: str = typer.Argument(..., help="Product document id"),
    name: str | None = typer.Option(None, "--name"),
    price: str | None = typer.Option(None, "--price"),
    stock: str | None = typer.Option(None, "--stock"),
    original_price: str | None = typer.Option(None, "--original-price"),
    category: str | None = typer.Option(None, "--category"),
    subcategory: str | None = typer.Option(None, "--subcategory"),
    era: str | None = typer.Option(None, "--era"),
    sizes: str | None = typer.Option(None, "--sizes"),
    color: str | None = typer.Option(None, "--color"),
    condition: str | None = typer.Option(None, "--condition"),
    description: str | None = typer.Option(None, "--description"),
    is_sale: bool | None = typer.Option(None, "--sale/--not-sale"),
    no_stock: bool | None = typer.Option(None, "--no-stock/--in-stock"),
    images: list[Path] | None = typer.Option(
        None, "--image", "-i", exists=True, dir_okay=False, help="Replaces every existing image"
    ),
) -> None:
    """Edit a product; omitted options keep their current values.

    Examples:
        catalog-admin products edit abc123 --price 99
        catalog-admin products edit abc123 -i new-front.jpg
    """
    services = _services()
    uploads = _load_uploads(images, services.products)
    changes = _overrides(
        name=name,
        price=price,
        stock=stock,
        original_price=original_price,
        category=category,
        subcategory=subcategory,
        era=era,
        sizes=sizes,
        color=color,
        condition=condition,
        description=description,
        is_sale=is_sale,
        no_stock=no_stock,
    )

    async def run() -> CommitResult:
        try:
            product = await services.products.get(product_id)
        except CatalogAdminError as e:
            return CommitResult.failure(e.message, product_id)
        form = ProductForm(
            name=product.name,
            price=product.price,
            stock=product.stock,
            original_price=product.original_price,
            category=product.category,
            subcategory=product.subcategory,
            era=product.era,
            sizes=product.sizes,
            color=product.color,
            condition=product.condition,
            description=product.description,
            is_sale=product.is_sale,
            no_stock=product.no_stock,
        ).model_copy(update=changes)
        return await services.products.update(product_id, form, uploads, previous_keys=product.image_keys)

    _report(asyncio.run(run()), f"Updated product {product_id}.")


@collections_app.command("list")
def collections_list(
    query: str = QueryOption,
    sort: str | None = SortOption,
    desc: bool = DescOption,
    page: int = PageOption,
    page_size: int | None = PageSizeOption,
) -> None:
    """List collections."""
    services = _services()
    controller = asyncio.run(services.collections.list_controller())
    _configure(controller, query, sort, desc, page, page_size)
    _render(controller, [("name", "Name"), ("products_count", "Products")], "Collections")


@collections_app.command("delete")
def collections_delete(
    collection_id: str = typer.Argument(..., help="Collection document id"),
    yes: bool = YesOption,
) -> None:
    """Delete a collection and its cover photo."""
    services = _services()

    async def run() -> None:
        await _delete(await services.collections.list_controller(), collection_id, yes)

    asyncio.run(run())


@collections_app.command("add")
def collections_add(
    name: str = typer.Argument(..., help="Collection name"),
    description: str = typer.Option("", "--description"),
    products: list[str] | None = typer.Option(None, "--product", help="Product id (repeatable, kept in order)"),
    channels: list[str] | None = typer.Option(None, "--channel", help="Publishing channel (repeatable)"),
    caption: str = typer.Option("", "--caption", help="Cover photo caption"),
    image: Path | None = typer.Option(None, "--image", "-i", exists=True, dir_okay=False, help="Cover photo"),
) -> None:
    """Create a collection with an optional cover photo."""
    services = _services()
    uploads = _load_uploads([image] if image else None, services.collections)
    form = CollectionForm(
        name=name,
        description=description,
        products=products or [],
        publishing_channels=channels or [],
        caption=caption,
    )
    result = asyncio.run(services.collections.create(form, uploads))
    _report(result, f"Created collection {result.entity_id}.")


@collections_app.command("edit")
def collections_edit(
    collection_id: str = typer.Argument(..., help="Collection document id"),
    name: str | None = typer.Option(None, "--name"),
    description: str | None = typer.Option(None, "--description"),
    products: list[str] | None = typer.Option(None, "--product", help="Replaces the product list"),
    channels: list[str] | None = typer.Option(None, "--channel", help="Replaces the channel list"),
    caption: str | None = typer.Option(None, "--caption"),
    image: Path | None = typer.Option(
        None, "--image", "-i", exists=True, dir_okay=False, help="Replaces the cover photo"
    ),
) -> None:
    """Edit a collection; omitted options keep their current values."""
    services = _services()
    uploads = _load_uploads([image] if image else None, services.collections)
    changes = _overrides(
        name=name,
        description=description,
        products=products or None,
        publishing_channels=channels or None,
        caption=caption,
    )

    async def run() -> CommitResult:
        try:
            collection = await services.collections.get(collection_id)
        except CatalogAdminError as e:
            return CommitResult.failure(e.message, collection_id)
        form = CollectionForm(
            name=collection.name,
            description=collection.description,
            products=collection.products,
            publishing_channels=collection.publishing_channels,
            caption=collection.caption,
        ).model_copy(update=changes)
        return await services.collections.update(collection_id, form, uploads)

    _report(asyncio.run(run()), f"Updated collection {collection_id}.")


@gallery_app.command("show")
def gallery_show() -> None:
    """Show the current hero image."""
    services = _services()
    hero = asyncio.run(services.gallery.load())
    if hero is None or hero.asset is None:
        console.print("[dim]No hero image yet.[/dim]")
        return
    details = Table(show_header=False, box=None)
    details.add_column("Field", style="cyan")
    details.add_column("Value")
    details.add_row("URL", hero.asset.url)
    details.add_row("Key", hero.asset.key or "[dim]unknown[/dim]")
    details.add_row("Caption", hero.caption or "[dim]none[/dim]")
    if hero.updated_at:
        details.add_row("Updated", hero.updated_at.isoformat())
    console.print(Panel(details, title="Gallery Hero", border_style="blue"))


@gallery_app.command("set")
def gallery_set(
    image: Path | None = typer.Option(
        None, "--image", "-i", exists=True, dir_okay=False, help="New hero image"
    ),
    caption: str | None = typer.Option(None, "--caption", "-c", help="New caption"),
) -> None:
    """Replace the hero image and/or its caption.

    Examples:
        catalog-admin gallery set --image hero.jpg --caption "Autumn drop"
        catalog-admin gallery set --caption "New caption only"
    """
    services = _services()
    uploads = _load_uploads([image] if image else None, services.gallery)
    upload = uploads[0] if uploads else None

    async def run() -> CommitResult:
        try:
            current = await services.gallery.load()
        except CatalogAdminError as e:
            return CommitResult.failure(e.message)
        text = caption if caption is not None else (current.caption if current else "")
        return await services.gallery.save(text, upload)

    _report(asyncio.run(run()), "Hero image saved.")


@orders_app.command("list")
def orders_list(
    query: str = QueryOption,
    sort: str | None = SortOption,
    desc: bool = DescOption,
    page: int = PageOption,
    page_size: int | None = PageSizeOption,
) -> None:
    """List orders."""
    services = _services()
    controller = asyncio.run(services.orders.list_controller())
    _configure(controller, query, sort, desc, page, page_size)
    _render(
        controller,
        [("order_number", "Order"), ("items_count", "Items"), ("status", "Status"), ("total", "Total")],
        "Orders",
    )


@orders_app.command("status")
def orders_status(
    order_id: str = typer.Argument(..., help="Order document id"),
    status: str = typer.Argument(..., help=f"One of: {', '.join(ORDER_STATUSES)}"),
    note: str = typer.Option("", "--note", "-n", help="Admin note stored with the change"),
) -> None:
    """Change an order's status."""
    services = _services()
    result = asyncio.run(services.orders.update_status(order_id, status, note))
    _report(result, f"Order {order_id} is now {status.strip().lower()}.")


def main() -> None:
    """Entry point for the CLI."""
    try:
        log_level = get_settings().log_level
    except ValidationError:
        log_level = "INFO"

    setup_logging(level=log_level)
    try:
        app()
    except CatalogAdminError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
