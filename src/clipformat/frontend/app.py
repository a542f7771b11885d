"""Main Textual app for the clipformat scratchpad."""

from __future__ import annotations

from typing import Any, Optional

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Footer, Input, Static, Switch

from clipformat.core.ports import EffectRunnerPort
from clipformat.core.processor import FormatOutcome, TextProcessor

from .constants import ACCENT, CLIP_WIDTH
from .state import ScratchpadState


class ScratchpadApp(App):
    """Type an expression, see what each detector makes of it."""

    BINDINGS = [
        ("ctrl+e", "run_effect", "Run effect"),
        ("ctrl+t", "toggle_seed", "Seed mode"),
        ("ctrl+l", "clear", "Clear"),
        ("q", "quit", "Quit"),
    ]

    CSS_PATH = "app.tcss"

    def __init__(self, processor: TextProcessor, runner: Optional[EffectRunnerPort] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._processor = processor
        self._runner = runner
        self.state = ScratchpadState()

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            yield Static(self._title_text(), id="title")
        with Horizontal(id="input-row"):
            yield Input(placeholder="2(3+4), 12/30 to 1/2, 100km to mi, 9am + 2h ...", id="expression")
            yield Static("seed mode", id="seed-label")
            yield Switch(value=False, id="seed-switch")
        yield Static("", id="result")
        with Horizontal(id="tables"):
            with Vertical():
                yield Static("Matches")
                yield DataTable(id="matches-table", cursor_type="row")
            with Vertical():
                yield Static("History")
                yield DataTable(id="history-table", cursor_type="row")
        with Horizontal(id="actions"):
            yield Button("Run effect", id="effect-btn", disabled=True)
            yield Button("Clear", id="clear-btn")
        yield Footer()

    def on_mount(self) -> None:
        matches = self.query_one("#matches-table", DataTable)
        matches.add_column("detector", key="detector", width=16)
        matches.add_column("output", key="output", width=CLIP_WIDTH)
        history = self.query_one("#history-table", DataTable)
        history.add_column("input", key="input", width=24)
        history.add_column("result", key="result", width=CLIP_WIDTH)
        history.zebra_stripes = True
        self.query_one("#expression", Input).focus()

    @on(Input.Submitted, "#expression")
    def _on_submitted(self, event: Input.Submitted) -> None:
        self._evaluate(event.value)

    @on(Switch.Changed, "#seed-switch")
    def _on_seed_changed(self, event: Switch.Changed) -> None:
        self.state.seed_mode = event.value
        value = self.query_one("#expression", Input).value
        if value.strip():
            self._evaluate(value)

    @on(Button.Pressed, "#effect-btn")
    def _on_effect_pressed(self) -> None:
        self.action_run_effect()

    @on(Button.Pressed, "#clear-btn")
    def _on_clear_pressed(self) -> None:
        self.action_clear()

    def action_toggle_seed(self) -> None:
        switch = self.query_one("#seed-switch", Switch)
        switch.value = not switch.value

    def action_clear(self) -> None:
        self.query_one("#expression", Input).value = ""
        self.query_one("#matches-table", DataTable).clear()
        self.state.last_outcome = None
        self._show_result(None)

    def action_run_effect(self) -> None:
        outcome = self.state.last_outcome
        if outcome is None or outcome.side_effect is None:
            return
        if self._runner is None:
            self.notify("No effect runner configured", severity="warning")
            return
        if self._runner.run(outcome.side_effect):
            self.notify(outcome.side_effect.message)
        else:
            self.notify("Side effect failed", severity="error")

    def _evaluate(self, value: str) -> None:
        if self.state.seed_mode:
            outcome = self._processor.format_seed(value)
        else:
            outcome = self._processor.format_text(value)
        self.state.last_outcome = outcome
        self._show_result(outcome)
        self._show_matches(outcome)
        if outcome.changed:
            self.state.remember(value, outcome.text)
            self._show_history()

    def _show_result(self, outcome: Optional[FormatOutcome]) -> None:
        result = self.query_one("#result", Static)
        effect_btn = self.query_one("#effect-btn", Button)
        result.remove_class("status-changed", "status-effect", "status-none")
        effect_btn.disabled = True
        if outcome is None:
            result.update("")
        elif outcome.side_effect is not None:
            result.update(f"{outcome.side_effect.message}: {outcome.side_effect.payload}")
            result.add_class("status-effect")
            effect_btn.disabled = False
        elif outcome.changed:
            result.update(outcome.text)
            result.add_class("status-changed")
        else:
            result.update("no change")
            result.add_class("status-none")

    def _show_matches(self, outcome: FormatOutcome) -> None:
        table = self.query_one("#matches-table", DataTable)
        table.clear()
        if outcome.result is None:
            return
        for entry in outcome.result.matches:
            table.add_row(entry.detector_id, self._clip_text(entry.raw))

    def _show_history(self) -> None:
        table = self.query_one("#history-table", DataTable)
        table.clear()
        for source, formatted in self.state.history:
            table.add_row(self._clip_text(source, 24), self._clip_text(formatted))

    @staticmethod
    def _clip_text(value: str, limit: int = CLIP_WIDTH) -> str:
        if len(value) <= limit:
            return value
        return value[: limit - 3] + "..."

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("CLIP", ACCENT),
            ("FORMAT > Scratchpad", "bold"),
        )
