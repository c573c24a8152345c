# Where: snapdiff.features.stylesheets.__init__
# What: Expose the CSS block resolver and its types.
# Why: Provide a cohesive import surface for the orchestration layer.

from .adapters import FileStylesheetLoader
from .domain import CSSBlock, StylesheetDescriptor
from .usecases import StylesheetLoaderPort, resolve_css_blocks

__all__ = [
    "CSSBlock",
    "FileStylesheetLoader",
    "StylesheetDescriptor",
    "StylesheetLoaderPort",
    "resolve_css_blocks",
]
