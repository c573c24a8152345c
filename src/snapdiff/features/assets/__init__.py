# Where: snapdiff.features.assets.__init__
# What: Expose asset packaging, the upload cache and the HTTP uploader.
# Why: Provide a cohesive import surface for the orchestration layer.

from .adapters import HttpAssetUploader
from .domain import AssetsPackage
from .usecases import (
    AssetPackageCache,
    PackageablePayload,
    UploaderPort,
    build_assets_package,
    build_static_package,
    create_static_package,
    prepare_assets_package,
)

__all__ = [
    "AssetPackageCache",
    "AssetsPackage",
    "HttpAssetUploader",
    "PackageablePayload",
    "UploaderPort",
    "build_assets_package",
    "build_static_package",
    "create_static_package",
    "prepare_assets_package",
]
