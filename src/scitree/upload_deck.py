"""Upload Deck - a TUI for registering exports and watching the size budget."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.message import Message
from textual.widgets import (
    Button,
    DataTable,
    DirectoryTree,
    Footer,
    Header,
    Input,
    Label,
    Log,
    Rule,
    Static,
)

from scitree.config import MAX_SIZE, UPLOAD_CHUNK_SIZE
from scitree.models import FileRecord
from scitree.registry import FileRegistry
from scitree.sources import get_source
from scitree.utils.validation import scan_blob


class BudgetPanel(Static):
    """Registry totals against the size budget."""

    def compose(self) -> ComposeResult:
        yield Static(id="budget-content")

    def update_display(self, registry: FileRegistry) -> None:
        content = self.query_one("#budget-content", Static)
        capped = sum(1 for flag in registry.capped.values() if flag)
        used_color = "red" if registry.total_mib > registry.max_size else "green"

        content.update(f"""[b]FILES[/b]
  Registered  [cyan]{len(registry):,}[/]
  Valid       [green]{len(registry.valid_files()):,}[/]
  Capped      [red]{capped:,}[/]

[b]SIZE[/b]
  Used        [{used_color}]{registry.total_mib:.2f} MiB[/]
  Budget      [cyan]{registry.max_size:g} MiB[/]""")


class UploadTable(DataTable):
    """Registered files in registration order."""

    def on_mount(self) -> None:
        self.add_columns("File", "Size", "Progress", "Capped", "Valid")
        self.cursor_type = "row"

    def show(self, registry: FileRegistry) -> None:
        cursor = self.cursor_row
        self.clear()
        for record in registry:
            progress = registry.progress.get(record.identity) or 0.0
            display_name = record.name
            if len(display_name) > 30:
                display_name = display_name[:27] + "..."
            self.add_row(
                display_name,
                f"{record.size_mib:.2f}MiB",
                f"{progress:.0%}",
                "[red]capped[/]" if registry.is_capped(record.identity) else "[dim]--[/]",
                "[green]yes[/]" if record.valid else "[dim]no[/]",
                key=record.identity,
            )
        if self.row_count:
            self.move_cursor(row=min(cursor, self.row_count - 1))

    def selected_identity(self) -> str | None:
        if not self.row_count:
            return None
        row_key, _ = self.coordinate_to_cell_key(self.cursor_coordinate)
        return row_key.value


class UploadDeck(App):
    """The scitree Upload Deck."""

    # Messages for thread-safe communication
    class RecordRead(Message):
        def __init__(self, record: FileRecord) -> None:
            self.record = record
            super().__init__()

    class ProgressReported(Message):
        def __init__(self, identity: str, value: float) -> None:
            self.identity = identity
            self.value = value
            super().__init__()

    class RecordValidated(Message):
        def __init__(self, identity: str, valid: bool) -> None:
            self.identity = identity
            self.valid = valid
            super().__init__()

    class LogMessage(Message):
        def __init__(self, message: str) -> None:
            self.message = message
            super().__init__()

    CSS = """
    #main-container {
        layout: horizontal;
        height: 100%;
    }

    #left-panel {
        width: 35;
        background: $surface-darken-1;
        border-right: solid $primary-darken-2;
        padding: 1;
    }

    #center-panel {
        width: 1fr;
        padding: 1;
    }

    #right-panel {
        width: 30;
        background: $surface-darken-1;
        border-left: solid $primary-darken-2;
        padding: 1;
    }

    BudgetPanel {
        height: auto;
        padding: 1;
        background: $surface-darken-2;
        border: round $primary;
        margin-bottom: 1;
    }

    #action-buttons {
        layout: horizontal;
        height: 3;
        margin-bottom: 1;
    }

    #action-buttons Button {
        margin-right: 1;
    }

    UploadTable {
        height: 1fr;
        border: round $primary-darken-1;
    }

    #log-panel {
        height: 12;
        border: round $primary-darken-2;
        background: $surface-darken-2;
    }

    .section-title {
        text-style: bold;
        margin-bottom: 1;
    }

    DirectoryTree {
        height: 100%;
        border: round $primary-darken-1;
    }
    """

    BINDINGS = [
        Binding("u", "upload", "Upload", show=True),
        Binding("x", "remove", "Remove", show=True),
        Binding("m", "move", "Move up", show=True),
        Binding("c", "clear", "Clear", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    TITLE = "scitree Upload Deck"
    SUB_TITLE = "Exports, progress and size budget"

    def __init__(self, max_size: float = MAX_SIZE) -> None:
        super().__init__()
        self.registry = FileRegistry(max_size=max_size)
        self._unsubscribe = self.registry.subscribe(self._on_valid_files)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Container(id="main-container"):
            with Vertical(id="left-panel"):
                yield Label("BUDGET", classes="section-title")
                yield BudgetPanel()
                yield Rule()
                yield Label("Source Path")
                yield Input(placeholder="Export file, folder or .zip...", id="source-input")
                with Horizontal(id="action-buttons"):
                    yield Button("UPLOAD", id="upload-btn", variant="success")
                    yield Button("Clear", id="clear-btn", variant="warning")

            with Vertical(id="center-panel"):
                yield Label("UPLOADS", classes="section-title")
                yield UploadTable(id="upload-table")
                yield Rule()
                yield Label("SYSTEM LOG", classes="section-title")
                yield Log(id="log-panel", highlight=True, auto_scroll=True)

            with Vertical(id="right-panel"):
                yield Label("FILE BROWSER", classes="section-title")
                yield DirectoryTree(Path.cwd(), id="dir-tree")

        yield Footer()

    def on_mount(self) -> None:
        self._refresh()
        self._log("Enter an export path and press UPLOAD")

    def on_unmount(self) -> None:
        self._unsubscribe()
        self.registry.clear()

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.query_one("#log-panel", Log).write_line(f"[{timestamp}] {message}")

    def _refresh(self) -> None:
        self.query_one(BudgetPanel).update_display(self.registry)
        self.query_one("#upload-table", UploadTable).show(self.registry)

    def _on_valid_files(self, files: tuple[FileRecord, ...]) -> None:
        if self.is_running:
            self._log(f"{len(files)} valid file(s) ready")

    # Message handlers for thread-safe updates
    def on_upload_deck_record_read(self, event: RecordRead) -> None:
        registered = self.registry.add(event.record)
        self._refresh()
        if registered is not event.record:
            # Same identity: the existing entry keeps its progress
            self._log(f"{event.record.name}: same content as {registered.name}")
            return
        self.scan_record(event.record)

    def on_upload_deck_progress_reported(self, event: ProgressReported) -> None:
        if self.registry.track(event.identity, event.value):
            self._refresh()

    def on_upload_deck_record_validated(self, event: RecordValidated) -> None:
        if self.registry.update(event.identity, valid=event.valid):
            self._refresh()

    def on_upload_deck_log_message(self, event: LogMessage) -> None:
        self._log(event.message)

    def on_directory_tree_file_selected(self, event: DirectoryTree.FileSelected) -> None:
        self.query_one("#source-input", Input).value = str(event.path)

    def on_directory_tree_directory_selected(
        self, event: DirectoryTree.DirectorySelected
    ) -> None:
        self.query_one("#source-input", Input).value = str(event.path)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "upload-btn":
            self.action_upload()
        elif event.button.id == "clear-btn":
            self.action_clear()

    def action_upload(self) -> None:
        source = self.query_one("#source-input", Input).value.strip()
        if not source:
            self._log("[red]ERROR: No source path specified[/]")
            return
        self.run_upload(source)

    def action_remove(self) -> None:
        identity = self.query_one("#upload-table", UploadTable).selected_identity()
        if identity is not None and self.registry.remove(identity):
            self._refresh()

    def action_move(self) -> None:
        identity = self.query_one("#upload-table", UploadTable).selected_identity()
        if identity is not None and self.registry.move(identity):
            self._refresh()

    def action_clear(self) -> None:
        self.registry.clear()
        self.query_one("#log-panel", Log).clear()
        self._refresh()
        self._log("Cleared - ready for new uploads")

    @work(thread=True)
    def run_upload(self, source: str) -> None:
        """Read uploads in a background thread."""
        source_path = Path(source)
        if not source_path.exists():
            self.post_message(self.LogMessage(f"[red]ERROR: Path not found: {source}[/]"))
            return

        reader = get_source(source_path)
        if reader is None:
            self.post_message(self.LogMessage("[red]ERROR: Unsupported source[/]"))
            return

        for record in reader.records(source_path):
            self.post_message(self.RecordRead(record))

    @work(thread=True)
    def scan_record(self, record: FileRecord) -> None:
        """Validate a newly registered upload, reporting progress."""

        def report(value: float) -> None:
            self.post_message(self.ProgressReported(record.identity, value))

        valid = scan_blob(record.blob, UPLOAD_CHUNK_SIZE, report)
        self.post_message(self.RecordValidated(record.identity, valid))
        if not valid:
            self.post_message(
                self.LogMessage(f"[yellow]{record.name} is not a text export[/]")
            )


def main(max_size: float = MAX_SIZE) -> None:
    """Run the Upload Deck TUI."""
    app = UploadDeck(max_size=max_size)
    app.run()


if __name__ == "__main__":
    main()
