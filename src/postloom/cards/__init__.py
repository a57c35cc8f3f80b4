"""Social card rendering."""

from postloom.cards.fonts import FontRegistry, default_registry
from postloom.cards.layout import wrap_words
from postloom.cards.renderer import CardContent, CardRenderer, render_cards

__all__ = ["CardContent", "CardRenderer", "FontRegistry", "default_registry", "render_cards", "wrap_words"]
