"""Checkout form modal screen."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from marketbarrio.config import PAYMENT_METHODS
from marketbarrio.models import CartSummary, CustomerInfo
from marketbarrio.rendering import format_summary

_TEXT_FIELDS: tuple[tuple[str, str], ...] = (
    ("name", "Nombre"),
    ("phone", "Teléfono"),
    ("address", "Dirección"),
)
_PAYMENT_FIELD_INDEX = len(_TEXT_FIELDS)
_MAX_FIELD_LENGTH = 120


def next_payment_method(current: str, delta: int = 1) -> str:
    """Cycle through the recognised payment methods; unknown values restart the cycle."""
    if current not in PAYMENT_METHODS:
        return PAYMENT_METHODS[0]
    idx = PAYMENT_METHODS.index(current)
    return PAYMENT_METHODS[(idx + delta) % len(PAYMENT_METHODS)]


class CheckoutModal(ModalScreen[CustomerInfo]):
    """Collect customer details and submit the order.

    Dismisses with the current form values so a cancelled checkout keeps
    what was typed.
    """

    CSS = """
    CheckoutModal {
        align: center middle;
        background: $background 60%;
    }

    #checkout-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #checkout-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #checkout-fields {
        color: white;
        margin-bottom: 1;
    }

    #checkout-summary {
        border: tall $surface;
        padding: 0 1;
        margin-bottom: 1;
    }

    #checkout-help {
        color: #dddddd;
    }
    """

    def __init__(
        self,
        form: CustomerInfo,
        summary: CartSummary,
        on_submit: Callable[[CustomerInfo], bool],
    ) -> None:
        super().__init__()
        self.form = form
        self.summary = summary
        self.on_submit = on_submit
        self.field_index = 0

    def compose(self) -> ComposeResult:
        with Container(id="checkout-dialog"):
            yield Static("Finalizar pedido", id="checkout-title")
            yield Static(id="checkout-fields")
            yield Static(id="checkout-summary")
            yield Static(
                "Tab/↑/↓ campo. ←/→/Espacio pago. Enter confirmar. Esc cancelar.",
                id="checkout-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(self.form)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key in {"tab", "down"}:
            self._move_field(1)
            event.stop()
            return

        if event.key in {"shift+tab", "up"}:
            self._move_field(-1)
            event.stop()
            return

        if self.field_index == _PAYMENT_FIELD_INDEX:
            if event.key in {"left", "right", "space"}:
                delta = -1 if event.key == "left" else 1
                self.form = replace(self.form, payment_method=next_payment_method(self.form.payment_method, delta))
                self._refresh_content()
            event.stop()
            return

        field_name = _TEXT_FIELDS[self.field_index][0]
        value = getattr(self.form, field_name)

        if event.key == "backspace":
            if value:
                self.form = replace(self.form, **{field_name: value[:-1]})
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            if len(value) < _MAX_FIELD_LENGTH:
                self.form = replace(self.form, **{field_name: value + event.character})
            self._refresh_content()
            event.stop()

    def _move_field(self, delta: int) -> None:
        self.field_index = (self.field_index + delta) % (_PAYMENT_FIELD_INDEX + 1)
        self._refresh_content()

    def _confirm(self) -> None:
        # The app reports validation problems itself; stay open so the user can fix them.
        if not self.on_submit(self.form):
            return
        self.dismiss(CustomerInfo())

    def _refresh_content(self) -> None:
        fields_widget = self.query_one("#checkout-fields", Static)
        summary_widget = self.query_one("#checkout-summary", Static)

        content = Text(style="white")
        for idx, (field_name, label) in enumerate(_TEXT_FIELDS):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.field_index else "  "
            value = getattr(self.form, field_name)
            cursor = "|" if idx == self.field_index else ""
            content.append(f"{pointer}{label}: ", style="bold white")
            content.append(f"{value}{cursor}")

        content.append("\n")
        pointer = "➤ " if self.field_index == _PAYMENT_FIELD_INDEX else "  "
        content.append(f"{pointer}Pago: ", style="bold white")
        content.append(f"‹ {self.form.payment_method} ›")

        fields_widget.update(content)
        summary_widget.update(format_summary(self.summary))
