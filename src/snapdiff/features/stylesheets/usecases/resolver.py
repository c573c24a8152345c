"""src/snapdiff/features/stylesheets/usecases/resolver.py
What: Turn declared stylesheets and plugin CSS into ordered CSS blocks.
Why: Every target must receive the same blocks in declaration order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from snapdiff.platform.logging import logger
from snapdiff.shared import StylesheetLoadError

from ..domain.models import CSSBlock, StylesheetDescriptor
from .ports import StylesheetLoaderPort


async def _load_block(descriptor: StylesheetDescriptor, loader: StylesheetLoaderPort) -> CSSBlock:
    try:
        css = await loader.load(descriptor.source)
    except StylesheetLoadError:
        raise
    except Exception as exc:
        raise StylesheetLoadError(descriptor.source, str(exc) or type(exc).__name__) from exc
    return CSSBlock(
        css=css,
        source=descriptor.source,
        id=descriptor.id,
        conditional=descriptor.conditional,
    )


async def resolve_css_blocks(
    stylesheets: Sequence[str | Mapping[str, Any]],
    plugin_css: Iterable[str | None],
    loader: StylesheetLoaderPort,
) -> list[CSSBlock]:
    """Load every declared stylesheet concurrently and append plugin CSS.

    Args:
        stylesheets: Declared sources, as strings or ``{source, id, conditional}``.
        plugin_css: Inline CSS contributed by plugins, in registration order.
        loader: Loader used for file-based sources.

    Returns:
        Blocks in declaration order followed by plugin blocks.

    Raises:
        StylesheetLoadError: If any declared source fails to load.
    """
    descriptors = [StylesheetDescriptor.parse(sheet) for sheet in stylesheets]
    blocks = list(
        await asyncio.gather(*(_load_block(descriptor, loader) for descriptor in descriptors))
    )
    for css in plugin_css:
        if css:
            blocks.append(CSSBlock(css=css))

    logger.debug(
        "Resolved %d CSS block(s) (%d declared, %d from plugins)",
        len(blocks),
        len(descriptors),
        len(blocks) - len(descriptors),
    )
    return blocks


__all__ = ["resolve_css_blocks"]
