"""Concrete uploaders."""

from .http_uploader import HttpAssetUploader

__all__ = ["HttpAssetUploader"]
