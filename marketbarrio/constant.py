"""Editable static catalog and status display configuration."""

from __future__ import annotations

ALL_CATEGORIES_LABEL = "Todos"

# Canonical product values consumed by marketbarrio.data (which wraps these into Product dataclass instances).
# Prices are strings so they load into Decimal without float rounding.
PRODUCT_ROWS: list[dict[str, str]] = [
    {"id": "arroz_costeno", "name": "Arroz Costeño", "description": "Arroz extra graneado", "category": "Abarrotes", "price": "4.50", "unit": "1 kg", "emoji": "🍚"},
    {"id": "azucar_rubia", "name": "Azúcar Rubia", "description": "Azúcar rubia de caña", "category": "Abarrotes", "price": "3.90", "unit": "1 kg", "emoji": "🍬"},
    {"id": "aceite_primor", "name": "Aceite Vegetal", "description": "Aceite vegetal premium", "category": "Abarrotes", "price": "9.80", "unit": "900 ml", "emoji": "🫗"},
    {"id": "fideos_spaghetti", "name": "Fideos Spaghetti", "description": "Pasta de trigo durum", "category": "Abarrotes", "price": "2.70", "unit": "500 g", "emoji": "🍝"},
    {"id": "atun_florida", "name": "Atún en Trozos", "description": "Atún en aceite vegetal", "category": "Abarrotes", "price": "6.20", "unit": "170 g", "emoji": "🐟"},
    {"id": "leche_gloria", "name": "Leche Evaporada", "description": "Leche evaporada entera", "category": "Lácteos", "price": "4.20", "unit": "400 g", "emoji": "🥛"},
    {"id": "yogurt_fresa", "name": "Yogurt de Fresa", "description": "Yogurt bebible sabor fresa", "category": "Lácteos", "price": "7.50", "unit": "1 L", "emoji": "🍓"},
    {"id": "queso_fresco", "name": "Queso Fresco", "description": "Queso fresco de vaca", "category": "Lácteos", "price": "12.90", "unit": "500 g", "emoji": "🧀"},
    {"id": "huevos_docena", "name": "Huevos Pardos", "description": "Huevos de granja", "category": "Frescos", "price": "8.40", "unit": "12 und", "emoji": "🥚"},
    {"id": "pan_frances", "name": "Pan Francés", "description": "Pan del día, crocante", "category": "Frescos", "price": "0.30", "unit": "1 und", "emoji": "🥖"},
    {"id": "platano_seda", "name": "Plátano de Seda", "description": "Plátano maduro", "category": "Frescos", "price": "3.50", "unit": "1 kg", "emoji": "🍌"},
    {"id": "palta_fuerte", "name": "Palta Fuerte", "description": "Palta cremosa", "category": "Frescos", "price": "9.00", "unit": "1 kg", "emoji": "🥑"},
    {"id": "gaseosa_inca", "name": "Gaseosa Amarilla", "description": "Gaseosa sabor original", "category": "Bebidas", "price": "7.90", "unit": "1.5 L", "emoji": "🥤"},
    {"id": "agua_mineral", "name": "Agua sin Gas", "description": "Agua de mesa", "category": "Bebidas", "price": "2.50", "unit": "2.5 L", "emoji": "💧"},
    {"id": "cafe_molido", "name": "Café Molido", "description": "Café peruano tostado", "category": "Bebidas", "price": "14.50", "unit": "250 g", "emoji": "☕"},
    {"id": "detergente", "name": "Detergente en Polvo", "description": "Limpieza profunda", "category": "Limpieza", "price": "11.90", "unit": "800 g", "emoji": "🧺"},
    {"id": "lejia", "name": "Lejía Tradicional", "description": "Desinfectante multiusos", "category": "Limpieza", "price": "3.20", "unit": "1 L", "emoji": "🧴"},
    {"id": "papel_higienico", "name": "Papel Higiénico", "description": "Doble hoja", "category": "Limpieza", "price": "13.50", "unit": "4 rollos", "emoji": "🧻"},
]

# Ordered (keyword, glyph) rules matched case-insensitively against order status; first match wins.
STATUS_GLYPH_RULES: tuple[tuple[str, str], ...] = (
    ("camino", "🚚"),
    ("entreg", "✅"),
    ("cancel", "⛔"),
)
DEFAULT_STATUS_GLYPH = "🧾"

CATEGORY_BADGE_STYLES: dict[str, str] = {
    "Abarrotes": "bold #0b1f0f on #5fbf72",
    "Lácteos": "bold #ffffff on #2f6db5",
    "Frescos": "bold #1f1a0b on #e0b84a",
    "Bebidas": "bold #ffffff on #7a4fb5",
    "Limpieza": "bold #ffffff on #b23a48",
}
