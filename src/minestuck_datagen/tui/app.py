from __future__ import annotations

from ..config import EffectiveConfig
from ..datapack import Datapack, PackMetadata
from ..editor import CostEntry, ExportError, GristField, entries_from_datapack, export_entries
from ..paths import resolve_pack_paths
from .rows import entry_row, grist_row, mark_valid, parse_field_id
from .textual import (
    App,
    Button,
    ComposeResult,
    Footer,
    Header,
    Horizontal,
    Input,
    Label,
    ListItem,
    ListView,
    Static,
    Vertical,
    VerticalScroll,
)
from .theme import APP_CSS


class EditorApp(App):
    TITLE = "Minestuck Datapack Generator"
    CSS = APP_CSS
    BINDINGS = [("ctrl+s", "export", "Export"), ("ctrl+n", "add_entry", "Add item"), ("q", "quit", "Quit")]

    def __init__(self, cfg: EffectiveConfig) -> None:
        super().__init__()
        self.cfg = cfg
        self.pack_root = resolve_pack_paths(cfg).root
        self.datapack = Datapack.load(
            self.pack_root,
            PackMetadata(pack_format=cfg.pack.pack_format, description=cfg.pack.description),
        )
        self.entries: list[CostEntry] = entries_from_datapack(self.datapack)
        self.entries.append(CostEntry(grist=[GristField()]))
        self.errors: list[ExportError] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            yield VerticalScroll(*self._entry_rows(), id="entries")
            with Vertical(id="side-panel"):
                yield Button("Export", id="export", variant="primary")
                yield Button("Add item", id="add-entry")
                yield Static(str(self.pack_root), id="pack-root")
                yield Label("Errors")
                yield ListView(id="errors")
        yield Footer()

    def on_input_changed(self, event: Input.Changed) -> None:
        kind, i, j = parse_field_id(event.input.id)
        if not 0 <= i < len(self.entries):
            return
        entry = self.entries[i]
        if kind == "item":
            entry.set_item_id(event.value)
            mark_valid(event.input, entry.item_id == "" or entry.valid_item)
            return
        if not 0 <= j < len(entry.grist):
            return
        grist = entry.grist[j]
        if kind == "grist":
            grist.set_name(event.value)
            mark_valid(event.input, grist.name == "" or grist.valid_name)
        elif kind == "amount":
            grist.amount_text = event.value
            mark_valid(event.input, grist.amount_text == "" or grist.amount is not None)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        kind, i, _ = parse_field_id(event.button.id)
        if event.button.id == "export":
            await self.action_export()
        elif event.button.id == "add-entry":
            await self.action_add_entry()
        elif kind == "addgrist" and 0 <= i < len(self.entries):
            entry = self.entries[i]
            entry.grist.append(GristField())
            j = len(entry.grist) - 1
            await self.query_one(f"#gristlist-{i}", Vertical).mount(grist_row(i, j, entry.grist[j]))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if event.list_view.id != "errors":
            return
        index = event.list_view.index
        if index is None or not 0 <= index < len(self.errors):
            return
        position = self.errors[index].position
        try:
            self.query_one(f"#entry-{position}").scroll_visible()
        except Exception:
            pass

    async def action_add_entry(self) -> None:
        self.entries.append(CostEntry(grist=[GristField()]))
        i = len(self.entries) - 1
        await self.query_one("#entries", VerticalScroll).mount(entry_row(i, self.entries[i]))

    async def action_export(self) -> None:
        datapack, self.errors = export_entries(self.entries, self.cfg.priority, base=self.datapack)
        result = datapack.save(self.pack_root)
        self.datapack = datapack
        self.notify(f"Wrote {len(result.written)} recipes to {self.pack_root}")
        await self._rebuild_entries()
        error_list = self.query_one("#errors", ListView)
        await error_list.clear()
        for error in self.errors:
            classes = "error-invalid" if error.invalid else ""
            await error_list.append(ListItem(Label(error.text), classes=classes))

    async def _rebuild_entries(self) -> None:
        container = self.query_one("#entries", VerticalScroll)
        await container.remove_children()
        self.entries.append(CostEntry(grist=[GristField()]))
        await container.mount(*self._entry_rows())

    def _entry_rows(self) -> list[Vertical]:
        return [entry_row(i, entry) for i, entry in enumerate(self.entries)]
