"""Domain types for asset packaging."""

from .models import AssetsPackage

__all__ = ["AssetsPackage"]
