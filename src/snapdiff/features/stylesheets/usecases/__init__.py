"""Use cases for stylesheet resolution."""

from .ports import StylesheetLoaderPort
from .resolver import resolve_css_blocks

__all__ = ["StylesheetLoaderPort", "resolve_css_blocks"]
