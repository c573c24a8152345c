"""Use cases for packaging and deduplicated upload of assets."""

from .cache import AssetPackageCache
from .packaging import (
    build_assets_package,
    build_static_package,
    create_static_package,
    prepare_assets_package,
)
from .ports import PackageablePayload, UploaderPort

__all__ = [
    "AssetPackageCache",
    "PackageablePayload",
    "UploaderPort",
    "build_assets_package",
    "build_static_package",
    "create_static_package",
    "prepare_assets_package",
]
