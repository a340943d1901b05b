"""Click-based CLI for savesync - offline-first saved item sync."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from savesync import __version__
from savesync.config import (
    SavesyncConfig,
    ensure_config_exists,
    generate_default_config,
    get_config_path,
    load_config,
    validate_config_file,
)
from savesync.errors import ConfigError, SavesyncError
from savesync.logging_config import setup_logging
from savesync.output.console import Console, create_console
from savesync.remote.graphql import GraphQLGateway
from savesync.sync.handlers import ActionHandlers, ActionResult
from savesync.sync.item import SavedItem, SyncStatus
from savesync.sync.status import ItemAction
from savesync.sync.store import YamlRecordStore
from savesync.sync.sweep import ReconciliationSweep, SweepResult


def _fail(console: Console, message: str) -> None:
    console.print_error(message)
    sys.exit(1)


def _load(ctx: click.Context) -> tuple[SavesyncConfig, Console]:
    """Load configuration and set up console and logging for a command."""
    config_path: Optional[Path] = ctx.obj.get("config_path")
    verbose: bool = ctx.obj.get("verbose", False)

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValidationError, ConfigError) as e:
        _fail(create_console(), str(e))

    console = create_console(verbose=verbose or config.output.verbose, colored=config.output.colored)
    log_file = Path(config.output.log_file) if config.output.log_file else None
    setup_logging(
        log_level="DEBUG" if verbose else config.output.log_level.value,
        log_file=log_file,
    )
    return config, console


def _make_gateway(config: SavesyncConfig) -> GraphQLGateway:
    if not config.remote.base_url:
        raise ConfigError("remote.base_url is not set. Edit the configuration file first.")
    return GraphQLGateway(
        config.remote.base_url,
        token=config.remote.get_token(),
        timeout=config.remote.timeout,
    )


async def _perform(config: SavesyncConfig, store: YamlRecordStore, action: ItemAction, item_id: str) -> ActionResult:
    async with _make_gateway(config) as gateway:
        handlers = ActionHandlers(
            store,
            gateway,
            max_workers=config.engine.max_workers,
            remote_on_missing=config.engine.remote_on_missing,
        )
        return await handlers.run(action, item_id)


async def _sweep(config: SavesyncConfig, store: YamlRecordStore) -> SweepResult:
    async with _make_gateway(config) as gateway:
        handlers = ActionHandlers(
            store,
            gateway,
            max_workers=config.engine.max_workers,
            remote_on_missing=config.engine.remote_on_missing,
        )
        return await ReconciliationSweep(store, handlers).run()


@click.group()
@click.version_option(version=__version__, prog_name="savesync")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: ~/.config/savesync/config.yaml or $SAVESYNC_CONFIG)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """savesync - offline-first sync of saved items.

    Archive, unarchive and delete are applied to the local store first and
    confirmed with the server afterwards. Anything the server has not
    confirmed stays pending until the next 'savesync sync'.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


@cli.command("list")
@click.option("--pending", is_flag=True, help="Only show items awaiting server confirmation")
@click.pass_context
def list_items(ctx: click.Context, pending: bool) -> None:
    """List saved items and their sync status."""
    config, console = _load(ctx)
    store = YamlRecordStore(config.store_path)

    try:
        items = store.pending() if pending else store.all()
    except SavesyncError as e:
        _fail(console, str(e))

    console.print_items(items, title="Pending Items" if pending else "Saved Items")


@cli.command()
@click.argument("item_id")
@click.pass_context
def show(ctx: click.Context, item_id: str) -> None:
    """Show a single saved item."""
    config, console = _load(ctx)
    store = YamlRecordStore(config.store_path)

    try:
        item = store.find_by_id(item_id)
    except SavesyncError as e:
        _fail(console, str(e))

    if item is None:
        _fail(console, f"Item '{item_id}' not found")
    console.print_item(item)


@cli.command()
@click.argument("item_id")
@click.option("--title", default=None, help="Item title")
@click.option("--url", default=None, help="Item URL")
@click.option("--archived", is_flag=True, help="Store the item as archived")
@click.option("--force", "-f", is_flag=True, help="Replace an existing item")
@click.pass_context
def add(ctx: click.Context, item_id: str, title: Optional[str], url: Optional[str], archived: bool, force: bool) -> None:
    """Add an item already known to the server to the local store."""
    config, console = _load(ctx)
    store = YamlRecordStore(config.store_path)

    payload = {}
    if title:
        payload["title"] = title
    if url:
        payload["url"] = url

    try:
        if store.find_by_id(item_id) is not None and not force:
            _fail(console, f"Item '{item_id}' already exists (use --force to replace)")
        store.update(SavedItem(id=item_id, is_archived=archived, server_sync_status=SyncStatus.SYNCED, payload=payload))
    except SavesyncError as e:
        _fail(console, str(e))

    console.print_success(f"Added {item_id}")


def _run_action(ctx: click.Context, action: ItemAction, item_id: str) -> None:
    config, console = _load(ctx)
    store = YamlRecordStore(config.store_path)

    try:
        result = asyncio.run(_perform(config, store, action, item_id))
    except SavesyncError as e:
        _fail(console, str(e))

    console.print_action_result(result)


@cli.command()
@click.argument("item_id")
@click.pass_context
def archive(ctx: click.Context, item_id: str) -> None:
    """Archive a saved item."""
    _run_action(ctx, ItemAction.ARCHIVE, item_id)


@cli.command()
@click.argument("item_id")
@click.pass_context
def unarchive(ctx: click.Context, item_id: str) -> None:
    """Move a saved item back out of the archive."""
    _run_action(ctx, ItemAction.UNARCHIVE, item_id)


@cli.command()
@click.argument("item_id")
@click.pass_context
def delete(ctx: click.Context, item_id: str) -> None:
    """Delete a saved item."""
    _run_action(ctx, ItemAction.DELETE, item_id)


@cli.command()
@click.pass_context
def sync(ctx: click.Context) -> None:
    """Retry the server call for every pending item."""
    config, console = _load(ctx)
    store = YamlRecordStore(config.store_path)

    try:
        result = asyncio.run(_sweep(config, store))
    except SavesyncError as e:
        _fail(console, str(e))

    console.print_sweep_result(result)


@cli.group("config")
def config_group() -> None:
    """Manage the configuration file."""


@config_group.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration")
@click.pass_context
def config_init(ctx: click.Context, force: bool) -> None:
    """Create a default configuration file."""
    console = create_console()
    config_path = ctx.obj.get("config_path") or get_config_path()

    if force and config_path.exists():
        config_path.unlink()

    path, created = ensure_config_exists(config_path)
    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_warning(f"Configuration already exists: {path} (use --force to overwrite)")


@config_group.command("show")
@click.option("--default", "show_default", is_flag=True, help="Show the default configuration instead")
@click.pass_context
def config_show(ctx: click.Context, show_default: bool) -> None:
    """Show the effective configuration."""
    if show_default:
        click.echo(generate_default_config())
        return

    config, console = _load(ctx)
    config_path = ctx.obj.get("config_path") or get_config_path()
    console.print_config_summary(str(config_path), config.store.path, config.remote.base_url)
    if console.verbose:
        console.print(config.model_dump(mode="json"))


@config_group.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate the configuration file."""
    console = create_console()
    config_path = ctx.obj.get("config_path") or get_config_path()

    is_valid, errors = validate_config_file(config_path)
    if is_valid:
        console.print_success(f"Configuration is valid: {config_path}")
        return

    for error in errors:
        console.print_error(error)
    sys.exit(1)


@config_group.command("path")
@click.pass_context
def config_path_cmd(ctx: click.Context) -> None:
    """Print the configuration file path."""
    click.echo(str(ctx.obj.get("config_path") or get_config_path()))


if __name__ == "__main__":
    cli()
