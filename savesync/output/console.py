# Savesync Console Output
# Rich-based console output for user-friendly display

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from savesync.sync.handlers import ActionResult, ResultStatus
from savesync.sync.item import SavedItem, SyncStatus
from savesync.sync.sweep import SweepResult


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for saved items and action results.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_items(self, items: list[SavedItem], *, title: str = "Saved Items") -> None:
        """
        Print saved items as a table.

        Args:
            items: Items to display.
            title: Table title.
        """
        if not items:
            self._console.print("[dim]No saved items[/dim]")
            return

        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("ID", style="cyan")
        table.add_column("Title")
        table.add_column("Archived", justify="center")
        table.add_column("Sync Status")
        if self.verbose:
            table.add_column("URL", style="dim")

        for item in items:
            archived = "[green]✓[/green]" if item.is_archived else "[dim]–[/dim]"
            row = [escape(item.id), escape(item.title), archived, self._format_status(item.server_sync_status)]
            if self.verbose:
                row.append(escape(str(item.payload.get("url", ""))))
            table.add_row(*row)

        self._console.print(table)

    def print_item(self, item: SavedItem) -> None:
        """Print a single item in detail."""
        lines = [
            f"ID: {escape(item.id)}",
            f"Archived: {'yes' if item.is_archived else 'no'}",
            f"Sync status: {self._format_status(item.server_sync_status)}",
        ]
        for key, value in sorted(item.payload.items()):
            lines.append(f"{escape(str(key))}: {escape(str(value))}")

        self._console.print(Panel("\n".join(lines), title=escape(item.title or item.id), border_style="blue"))

    def _format_status(self, status: SyncStatus) -> str:
        styles = {
            SyncStatus.SYNCED: "[green]synced[/green]",
            SyncStatus.NEEDS_UPDATE: "[yellow]needs update[/yellow]",
            SyncStatus.NEEDS_DELETION: "[red]needs deletion[/red]",
        }
        return styles.get(status, status.value)

    def print_action_result(self, result: ActionResult) -> None:
        """Print the result of a single action."""
        verb = result.action.value
        item_id = escape(result.item_id)

        if result.status == ResultStatus.SYNCED:
            self._console.print(f"[green]✓[/green] {verb} [bold]{item_id}[/bold] confirmed")
        elif result.status == ResultStatus.REMOVED:
            self._console.print(f"[green]✓[/green] {verb} [bold]{item_id}[/bold] confirmed, item removed")
        elif result.status == ResultStatus.NOT_FOUND:
            self._console.print(f"[dim]○ {item_id} not found locally, nothing to {verb}[/dim]")
        else:
            self._console.print(
                f"[yellow]…[/yellow] {verb} [bold]{item_id}[/bold] saved locally, "
                f"pending server confirmation"
            )
            if result.reason:
                self._console.print(f"    [dim]{result.outcome.kind.value}: {escape(result.reason)}[/dim]")
            self._console.print("    [dim]→ Retry later: savesync sync[/dim]")

    def print_sweep_result(self, result: SweepResult) -> None:
        """Print reconciliation sweep summary."""
        if result.scanned == 0:
            self._console.print("[green]✓[/green] Nothing pending, everything is in sync")
            return

        if self.verbose or not result.success:
            for action_result in result.results:
                self.print_action_result(action_result)
            self._console.print()

        skipped = f", already settled: {result.skipped}" if result.skipped else ""
        status_text = "[green]Sync completed[/green]" if result.success else "[yellow]Sync incomplete[/yellow]"
        self._console.print(
            Panel(
                f"{status_text}\n"
                f"Pending: {result.scanned}\n"
                f"Confirmed: {result.confirmed} ({result.removed} removed), still pending: {result.still_pending}"
                f"{skipped}",
                title="Summary",
                border_style="green" if result.success else "yellow",
            )
        )

    def print_config_summary(self, config_path: str, store_path: str, base_url: str | None) -> None:
        """Print configuration summary."""
        self._console.print(
            Panel(
                f"Config: {escape(config_path)}\nStore: {escape(store_path)}\n"
                f"Remote: {escape(base_url) if base_url else '[dim]not set[/dim]'}",
                title="savesync Configuration",
                border_style="blue",
            )
        )


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """Create a console instance."""
    return Console(verbose=verbose, colored=colored)
