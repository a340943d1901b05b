# Tests for savesync.output.console
# Rich-based console output

from io import StringIO

from rich.console import Console as RichConsole

from savesync.output.console import Console, create_console
from savesync.sync.gateway import RemoteOutcome
from savesync.sync.handlers import ActionResult, ResultStatus
from savesync.sync.item import SavedItem, SyncStatus
from savesync.sync.status import ItemAction
from savesync.sync.sweep import SweepResult


def _make_console(verbose: bool = False) -> Console:
    """Create a console with captured output."""
    console = Console(verbose=verbose, colored=False)
    console._console = RichConsole(file=StringIO(), no_color=True, width=120)
    return console


def _get_output(console: Console) -> str:
    """Get captured output from console."""
    console._console.file.seek(0)
    return console._console.file.read()


class TestConsoleBasic:
    """Tests for basic console methods."""

    def test_print_error(self):
        c = _make_console()
        c.print_error("something failed")
        output = _get_output(c)
        assert "Error:" in output
        assert "something failed" in output

    def test_print_warning(self):
        c = _make_console()
        c.print_warning("be careful")
        assert "Warning:" in _get_output(c)

    def test_create_console(self):
        c = create_console(verbose=True)
        assert c.verbose is True


class TestConsoleItems:
    """Tests for item display."""

    def test_print_no_items(self):
        c = _make_console()
        c.print_items([])
        assert "No saved items" in _get_output(c)

    def test_print_items(self):
        c = _make_console()
        c.print_items(
            [
                SavedItem(id="a", payload={"title": "Alpha"}),
                SavedItem(id="b", is_archived=True, server_sync_status=SyncStatus.NEEDS_DELETION),
            ]
        )
        output = _get_output(c)
        assert "Alpha" in output
        assert "synced" in output
        assert "needs deletion" in output

    def test_print_item(self):
        c = _make_console()
        c.print_item(SavedItem(id="a", payload={"title": "Alpha", "url": "https://x"}))
        output = _get_output(c)
        assert "Alpha" in output
        assert "https://x" in output


class TestConsoleResults:
    """Tests for action and sweep results."""

    def test_synced_result(self):
        c = _make_console()
        c.print_action_result(ActionResult("a", ItemAction.ARCHIVE, ResultStatus.SYNCED, RemoteOutcome.ok()))
        assert "confirmed" in _get_output(c)

    def test_pending_result(self):
        c = _make_console()
        c.print_action_result(
            ActionResult("a", ItemAction.DELETE, ResultStatus.PENDING, RemoteOutcome.unreachable("offline"))
        )
        output = _get_output(c)
        assert "pending" in output
        assert "offline" in output
        assert "savesync sync" in output

    def test_not_found_result(self):
        c = _make_console()
        c.print_action_result(ActionResult("a", ItemAction.DELETE, ResultStatus.NOT_FOUND))
        assert "not found" in _get_output(c)

    def test_empty_sweep(self):
        c = _make_console()
        c.print_sweep_result(SweepResult())
        assert "Nothing pending" in _get_output(c)

    def test_incomplete_sweep(self):
        c = _make_console()
        result = SweepResult(
            scanned=2,
            confirmed=1,
            still_pending=1,
            results=[
                ActionResult("a", ItemAction.DELETE, ResultStatus.REMOVED, RemoteOutcome.ok()),
                ActionResult("b", ItemAction.ARCHIVE, ResultStatus.PENDING, RemoteOutcome.rejected("NOT_FOUND")),
            ],
        )
        c.print_sweep_result(result)
        output = _get_output(c)
        assert "Sync incomplete" in output
        assert "still pending: 1" in output
        assert "NOT_FOUND" in output

    def test_sweep_reports_settled_records(self):
        c = _make_console()
        c.print_sweep_result(SweepResult(scanned=2, confirmed=1, skipped=1))
        output = _get_output(c)
        assert "Sync completed" in output
        assert "already settled: 1" in output
