"""Text entry and confirmation modal screens."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

_MODAL_CSS = """
{name} {{
    align: center middle;
    background: $background 60%;
}}

.prompt-dialog {{
    width: 56;
    height: auto;
    border: round $secondary;
    background: $panel;
    padding: 1 2;
}}

.prompt-title {{
    text-style: bold;
    margin-bottom: 1;
    color: white;
}}

.prompt-value {{
    border: heavy $secondary;
    padding: 0 1;
    color: white;
    margin-bottom: 1;
}}

.prompt-help {{
    color: #dddddd;
}}
"""


class TextPromptModal(ModalScreen[str | None]):
    """Prompt for a single line of text; numeric prompts accept number characters only."""

    CSS = _MODAL_CSS.format(name="TextPromptModal")

    _NUMERIC_CHARS = set("0123456789-.")

    def __init__(self, title: str, value: str = "", numeric: bool = False) -> None:
        super().__init__()
        self.title_text = title
        self.value = value
        self.numeric = numeric

    def compose(self) -> ComposeResult:
        with Container(classes="prompt-dialog"):
            yield Static(self.title_text, classes="prompt-title")
            yield Static(id="prompt-value", classes="prompt-value")
            yield Static("Enter confirm. Backspace delete. Esc cancel.", classes="prompt-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self.dismiss(self.value)
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if self.numeric and event.character not in self._NUMERIC_CHARS:
                event.stop()
                return
            self.value += event.character
            self._refresh_content()
            event.stop()

    def _refresh_content(self) -> None:
        self.query_one("#prompt-value", Static).update(f"{self.value}|")


class ConfirmModal(ModalScreen[bool]):
    """Yes/no question; Y confirms, N or Esc declines."""

    CSS = _MODAL_CSS.format(name="ConfirmModal")

    def __init__(self, question: str) -> None:
        super().__init__()
        self.question = question

    def compose(self) -> ComposeResult:
        with Container(classes="prompt-dialog"):
            yield Static(self.question, classes="prompt-title")
            yield Static("Y confirm. N / Esc cancel.", classes="prompt-help")

    def on_key(self, event: Key) -> None:
        if event.key == "y":
            self.dismiss(True)
        elif event.key in {"n", "escape", "ctrl+c", "q"}:
            self.dismiss(False)
        event.stop()
