"""Concrete stylesheet loaders."""

from .file_loader import FileStylesheetLoader

__all__ = ["FileStylesheetLoader"]
