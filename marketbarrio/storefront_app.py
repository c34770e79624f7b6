"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from marketbarrio.checkout_modal import CheckoutModal
from marketbarrio.config import FREE_DELIVERY_THRESHOLD, TOAST_TIMEOUT_SECONDS
from marketbarrio.data import categories, filter_products
from marketbarrio.errors import CheckoutError
from marketbarrio.models import CartItem, CustomerInfo, Product
from marketbarrio.rendering import (
    format_cart_line,
    format_delivery,
    format_money,
    format_order_block,
    format_product_label,
    format_summary,
)
from marketbarrio.session import StorefrontSession

logger = logging.getLogger(__name__)

VIEWS: tuple[str, ...] = ("home", "cart", "orders")
VIEW_TITLES: dict[str, str] = {
    "home": "🏠 Inicio",
    "cart": "🛒 Carrito",
    "orders": "📦 Pedidos",
}


def window_bounds(total: int, rows: int, selected: int | None) -> tuple[int, int]:
    """Return the [start, end) slice of a list that keeps ``selected`` in view."""
    if total <= 0:
        return (0, 0)

    rows = max(1, rows)
    if total <= rows:
        return (0, total)

    if selected is None:
        start = 0
    else:
        half = rows // 2
        start = selected - half
        start = max(0, start)
        start = min(start, total - rows)

    return (start, start + rows)


class StorefrontApp(App):
    """A Textual storefront: browse the catalog, manage the cart, place orders."""

    TITLE = "MarketBarrio"
    SUB_TITLE = "Tu bodega online"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #main-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #side-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #main-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #stats {
        margin-bottom: 1;
    }

    #side-summary {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    current_view = reactive("home")
    input_state = reactive("normal")
    search_query = reactive("")
    category_index = reactive(0)
    selected_index = reactive(0)

    BINDINGS = [
        ("up", "move_selection(-1)", "Previous"),
        ("down", "move_selection(1)", "Next"),
        ("enter", "activate_selected", "Add / confirm"),
        ("backspace", "backspace_query", "Delete query char"),
        Binding("ctrl+s", "open_checkout", "Checkout", priority=True),
        ("ctrl+c", "cancel_search", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: StorefrontSession) -> None:
        super().__init__()
        self.session = session
        self.session.notify = self._show_notice
        self.category_options = categories(session.catalog)
        self.checkout_form = CustomerInfo()

    def _show_notice(self, title: str, message: str) -> None:
        self.notify(message, title=title, timeout=TOAST_TIMEOUT_SECONDS)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="main-pane"):
                yield Static(id="view-title", classes="pane-title")
                yield Static(id="search-bar")
                yield Static(id="main-list")
            with Vertical(id="side-pane"):
                yield Static("Resumen", classes="pane-title")
                yield Static(id="stats")
                yield Static(id="side-summary")

    def on_mount(self) -> None:
        self._refresh_all()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def on_key(self, event: Key) -> None:
        if self._modal_open():
            return

        if self.input_state == "active":
            if event.key == "escape":
                self.input_state = "normal"
                self._refresh_all()
                event.stop()
                return
            if event.is_printable and event.character and event.key not in {"enter", "backspace"}:
                self.search_query += event.character
                self.selected_index = 0
                self._refresh_all()
                event.stop()
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        key = event.character.lower()
        handled = True
        if key == "h":
            self._show_view("home")
        elif key == "c":
            self._show_view("cart")
        elif key == "o":
            self._show_view("orders")
        elif key == "j":
            self.action_move_selection(1)
        elif key == "k":
            self.action_move_selection(-1)
        elif key in {"/", "s"} and self.current_view == "home":
            self.input_state = "active"
            self._refresh_all()
        elif key == "f" and self.current_view == "home":
            self._cycle_category()
        elif key in {"a", "+"}:
            self._increase_selected()
        elif key == "-":
            self._decrease_selected()
        elif key == "d" and self.current_view == "cart":
            self._remove_selected()
        elif key == "x":
            self._clear_current()
        elif key == "p":
            self.action_open_checkout()
        else:
            handled = False

        if handled:
            event.stop()

    def action_move_selection(self, delta: int) -> None:
        if self._modal_open():
            return
        total = self._row_count()
        if total == 0:
            self.selected_index = 0
        else:
            self.selected_index = (self.selected_index + delta) % total
        self._refresh_main()

    def action_activate_selected(self) -> None:
        if self._modal_open():
            return
        if self.input_state == "active":
            self.input_state = "normal"
            self._refresh_all()
            return
        if self.current_view == "home":
            self._increase_selected()

    def action_backspace_query(self) -> None:
        if self._modal_open():
            return
        if self.input_state != "active" or not self.search_query:
            return
        self.search_query = self.search_query[:-1]
        self.selected_index = 0
        self._refresh_all()

    def action_cancel_search(self) -> None:
        if self._modal_open():
            return
        if self.input_state == "normal" and not self.search_query:
            return
        self.input_state = "normal"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_all()

    def action_open_checkout(self) -> None:
        if self._modal_open():
            return
        if self.session.cart.is_empty():
            self._show_notice("Carrito vacío", "Agrega productos antes de finalizar")
            return
        self.push_screen(
            CheckoutModal(self.checkout_form, self.session.summary(), on_submit=self._submit_order),
            self._on_checkout_closed,
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def _submit_order(self, form: CustomerInfo) -> bool:
        try:
            order = self.session.place_order(form)
        except CheckoutError as exc:
            logger.debug("checkout_rejected error=%r", exc)
            self.checkout_form = form
            return False

        self.checkout_form = CustomerInfo()
        self.current_view = "orders"
        self.selected_index = 0
        logger.debug("checkout_done order_id=%d", order.order_id)
        return True

    def _on_checkout_closed(self, form: CustomerInfo | None) -> None:
        if form is not None:
            self.checkout_form = form
        self._refresh_all()

    def _increase_selected(self) -> None:
        if self.current_view == "home":
            product = self._selected_product()
            if product is not None:
                self.session.add_to_cart(product.product_id)
        elif self.current_view == "cart":
            item = self._selected_cart_row()
            if item is not None:
                self.session.update_cart_item(item.product_id, item.quantity + 1)
        self._refresh_all()

    def _decrease_selected(self) -> None:
        if self.current_view == "home":
            product = self._selected_product()
            if product is None:
                return
            product_id = product.product_id
        elif self.current_view == "cart":
            item = self._selected_cart_row()
            if item is None:
                return
            product_id = item.product_id
        else:
            return

        quantity = self.session.cart.quantity_of(product_id)
        if quantity == 0:
            return
        self.session.update_cart_item(product_id, quantity - 1)
        self._refresh_all()

    def _remove_selected(self) -> None:
        item = self._selected_cart_row()
        if item is None:
            return
        self.session.remove_from_cart(item.product_id)
        self._refresh_all()

    def _clear_current(self) -> None:
        if self.current_view == "cart" and not self.session.cart.is_empty():
            self.session.clear_cart()
        elif self.current_view == "orders" and not self.session.orders.is_empty():
            self.session.clear_orders()
        else:
            return
        self.selected_index = 0
        self._refresh_all()

    def _cycle_category(self) -> None:
        self.category_index = (self.category_index + 1) % len(self.category_options)
        self.selected_index = 0
        self._refresh_all()

    def _show_view(self, view: str) -> None:
        if view == self.current_view:
            return
        self.current_view = view
        self.input_state = "normal"
        self.selected_index = 0
        self._refresh_all()

    # ------------------------------------------------------------------
    # Selection helpers
    # ------------------------------------------------------------------
    def _modal_open(self) -> bool:
        return isinstance(self.screen, CheckoutModal)

    def _current_category(self) -> str:
        return self.category_options[self.category_index]

    def _filtered_products(self) -> list[Product]:
        return filter_products(self.session.catalog, self.search_query, self._current_category())

    def _row_count(self) -> int:
        if self.current_view == "home":
            return len(self._filtered_products())
        if self.current_view == "cart":
            return len(self.session.cart)
        return len(self.session.orders)

    def _selected_product(self) -> Product | None:
        results = self._filtered_products()
        if not (0 <= self.selected_index < len(results)):
            return None
        return results[self.selected_index]

    def _selected_cart_row(self) -> CartItem | None:
        items = self.session.cart.items
        if not (0 <= self.selected_index < len(items)):
            return None
        return items[self.selected_index]

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _refresh_all(self) -> None:
        try:
            self._refresh_header()
            self._refresh_main()
            self._refresh_side()
        except NoMatches:
            return

    def _refresh_header(self) -> None:
        title = Text()
        for idx, view in enumerate(VIEWS):
            if idx > 0:
                title.append("   ")
            style = "bold reverse" if view == self.current_view else "dim"
            title.append(VIEW_TITLES[view], style=style)
        self.query_one("#view-title", Static).update(title)

        bar = self.query_one("#search-bar", Static)
        if self.current_view == "home":
            text = Text()
            if self.input_state == "active":
                text.append("Buscar: ", style="bold")
                text.append(f"{self.search_query}|")
            else:
                text.append("Buscar: ", style="dim")
                text.append(self.search_query or "(/ para buscar)")
            text.append(f"\nCategoría: {self._current_category()} (f cambia)")
            count = len(self._filtered_products())
            text.append(f" • {count} {'producto' if count == 1 else 'productos'} disponibles", style="dim")
            bar.update(text)
        elif self.current_view == "cart":
            bar.update("a/+ sumar  - restar  d quitar  x vaciar  p finalizar\nh inicio  o pedidos  Ctrl+Q salir")
        else:
            bar.update("x borrar historial\nh inicio  c carrito  Ctrl+Q salir")

    def _refresh_main(self) -> None:
        list_widget = self.query_one("#main-list", Static)
        if self.current_view == "home":
            rows = [
                format_product_label(product, self.session.cart.quantity_of(product.product_id))
                for product in self._filtered_products()
            ]
            empty = "No hay productos para esta búsqueda"
        elif self.current_view == "cart":
            rows = [format_cart_line(item, self.session.products_by_id) for item in self.session.cart]
            empty = "Tu carrito está vacío (h para ver productos)"
        else:
            rows = [format_order_block(order, self.session.products_by_id) for order in self.session.orders]
            empty = "Aún no tienes pedidos"

        if not rows:
            self.selected_index = 0
            list_widget.update(empty)
            return

        if self.selected_index >= len(rows):
            self.selected_index = len(rows) - 1

        visible_rows = self._visible_rows(list_widget)
        if self.current_view == "orders":
            # Order blocks span several lines each.
            visible_rows = max(1, visible_rows // 7)
        start, end = window_bounds(len(rows), visible_rows, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n\n" if self.current_view == "orders" else "\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(rows[idx])

        if end < len(rows):
            lines.append("\n⋮", style="dim")

        list_widget.update(lines)

    def _refresh_side(self) -> None:
        cart = self.session.cart
        stats = Text()
        stats.append(f"Productos {len(self.session.catalog)}")
        stats.append(f"   Carrito {cart.item_count()}")
        stats.append(f"   Pedidos {len(self.session.orders)}")
        self.query_one("#stats", Static).update(stats)

        summary_widget = self.query_one("#side-summary", Static)
        if cart.is_empty():
            summary_widget.update("Carrito vacío")
            return

        text = Text()
        for item in cart:
            text.append_text(format_cart_line(item, self.session.products_by_id))
            text.append("\n")
        summary = self.session.summary()
        text.append("\n")
        text.append_text(format_summary(summary))
        if summary.delivery:
            text.append(f"\n\nEnvío {format_delivery(summary.delivery)}; gratis desde {format_money(FREE_DELIVERY_THRESHOLD)}", style="dim")
        text.append("\n\np / Ctrl+S para finalizar", style="dim")
        summary_widget.update(text)
