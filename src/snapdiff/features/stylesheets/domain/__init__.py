"""Domain types for stylesheet resolution."""

from .models import CSSBlock, StylesheetDescriptor

__all__ = ["CSSBlock", "StylesheetDescriptor"]
