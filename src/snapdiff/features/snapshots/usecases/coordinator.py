"""src/snapdiff/features/snapshots/usecases/coordinator.py
What: Drive capture, packaging, upload and execution for every target.
Why: Prerendering is CPU and memory heavy so it runs one target at a time,
     while direct mode fans out to all targets at once.
"""

from __future__ import annotations

import asyncio
import json
import tempfile
from collections.abc import Mapping, Sequence
from functools import partial
from pathlib import Path

from snapdiff.config.file_ops import write_text_file
from snapdiff.config.settings import VERBOSE
from snapdiff.features.assets import (
    AssetPackageCache,
    UploaderPort,
    create_static_package,
    prepare_assets_package,
)
from snapdiff.features.stylesheets import CSSBlock
from snapdiff.platform.logging import BuildLogger
from snapdiff.shared import (
    BuildCancelledError,
    CancellationToken,
    ConfigError,
    Credentials,
    RemoteExecutionError,
    SnapdiffError,
)

from ..domain.models import ExecutionRequest, SnapPayload, TargetResult
from .error_aggregation import raise_for_render_errors
from .ports import DomProviderPort, RemoteTargetPort


async def _cancel_pending(tasks: Sequence[asyncio.Future[TargetResult]]) -> None:
    for task in tasks:
        if not task.done():
            _ = task.cancel()
    _ = await asyncio.gather(*tasks, return_exceptions=True)


class TargetExecutionCoordinator:
    """Run every configured target and collect one result per target.

    Results are always returned in declared target order. Any packaging,
    upload or execution failure aborts the whole invocation; work already
    scheduled for other targets is cancelled before the error propagates.
    """

    def __init__(
        self,
        targets: Mapping[str, RemoteTargetPort],
        *,
        uploader: UploaderPort,
        cache: AssetPackageCache,
        credentials: Credentials,
        endpoint: str,
        public_folders: Sequence[Path] = (),
        dom_provider: DomProviderPort | None = None,
        project: str | None = None,
        verbose: bool = VERBOSE,
        verbose_dir: Path | None = None,
    ) -> None:
        self._targets: dict[str, RemoteTargetPort] = dict(targets)
        self._uploader: UploaderPort = uploader
        self._cache: AssetPackageCache = cache
        self._credentials: Credentials = credentials
        self._endpoint: str = endpoint
        self._public_folders: list[Path] = list(public_folders)
        self._dom_provider: DomProviderPort | None = dom_provider
        self._project: str | None = project
        self._verbose: bool = verbose
        self._verbose_dir: Path = verbose_dir or Path(tempfile.gettempdir())
        self._discarded: set[asyncio.Future[list[TargetResult | BaseException]]] = set()

    @property
    def target_names(self) -> list[str]:
        return list(self._targets)

    async def settle(self) -> None:
        """Wait for executions left running by cancelled invocations."""

        while self._discarded:
            _ = await asyncio.gather(*self._discarded)

    async def execute(
        self,
        bundle_file: Path,
        css_blocks: Sequence[CSSBlock],
        *,
        prerender: bool,
        is_async: bool,
        logger: BuildLogger,
        token: CancellationToken | None = None,
        bundle_dir: Path | None = None,
    ) -> list[TargetResult]:
        """Execute all targets in prerender or direct mode.

        Args:
            bundle_file: Bundle produced for this run.
            css_blocks: Resolved global CSS shared by every target.
            prerender: Render examples locally before uploading them.
            is_async: Ask targets for acknowledgments instead of results.
            logger: Logger of the current build.
            token: Cancellation token checked at every suspension point.
            bundle_dir: Directory shipped as static package in direct mode;
                defaults to the bundle file's directory.

        Returns:
            One ``TargetResult`` per target, in declared order.
        """
        token = token or CancellationToken()
        if prerender:
            return await self._execute_with_prerender(
                bundle_file, css_blocks, is_async=is_async, logger=logger, token=token
            )
        return await self._execute_direct(
            bundle_dir or bundle_file.parent,
            css_blocks,
            is_async=is_async,
            logger=logger,
            token=token,
        )

    async def _execute_with_prerender(
        self,
        bundle_file: Path,
        css_blocks: Sequence[CSSBlock],
        *,
        is_async: bool,
        logger: BuildLogger,
        token: CancellationToken,
    ) -> list[TargetResult]:
        dom_provider = self._dom_provider
        if dom_provider is None:
            raise ConfigError("Prerendering requires a DOM provider; configure dom_provider or a plugin")

        loop = asyncio.get_running_loop()
        scheduled: list[asyncio.Future[TargetResult]] = []
        try:
            for name, target in self._targets.items():
                token.raise_if_cancelled()
                rendered = await dom_provider.render(
                    bundle_file,
                    target_name=name,
                    viewport=target.viewport,
                    public_folders=self._public_folders,
                )
                token.raise_if_cancelled()
                snap_payloads = rendered.snap_payloads

                if not snap_payloads:
                    logger.warning(f"No examples found for target {name}, skipping")
                    skipped: asyncio.Future[TargetResult] = loop.create_future()
                    skipped.set_result(TargetResult(name=name, result=None))
                    scheduled.append(skipped)
                    continue

                raise_for_render_errors(snap_payloads, target_name=name)

                global_css = [*css_blocks, CSSBlock(css=rendered.css)]
                package = await prepare_assets_package(global_css, snap_payloads, self._public_folders)
                token.raise_if_cancelled()

                location = await self._cache.get_or_upload(
                    package.hash,
                    partial(self._uploader.upload, package.buffer, package.hash),
                )
                token.raise_if_cancelled()

                for payload in snap_payloads:
                    payload.strip_asset_paths()

                request = ExecutionRequest(
                    target_name=name,
                    global_css=global_css,
                    credentials=self._credentials,
                    endpoint=self._endpoint,
                    async_results=is_async,
                    snap_payloads=tuple(snap_payloads),
                    assets_package=location,
                )
                task = asyncio.ensure_future(self._run_target(name, target, request, logger, token))
                scheduled.append(task)
                if not is_async:
                    _ = await task

            return list(await asyncio.gather(*scheduled))
        except BuildCancelledError:
            self._discard_when_settled(scheduled)
            raise
        except BaseException:
            await _cancel_pending(scheduled)
            raise

    async def _execute_direct(
        self,
        bundle_dir: Path,
        css_blocks: Sequence[CSSBlock],
        *,
        is_async: bool,
        logger: BuildLogger,
        token: CancellationToken,
    ) -> list[TargetResult]:
        package = await create_static_package(bundle_dir, self._public_folders)
        token.raise_if_cancelled()
        static_location = await self._cache.get_or_upload(
            package.hash,
            partial(self._uploader.upload, package.buffer, package.hash),
        )
        token.raise_if_cancelled()

        tasks = [
            asyncio.ensure_future(
                self._run_target(
                    name,
                    target,
                    ExecutionRequest(
                        target_name=name,
                        global_css=list(css_blocks),
                        credentials=self._credentials,
                        endpoint=self._endpoint,
                        async_results=is_async,
                        static_package=static_location,
                    ),
                    logger,
                    token,
                )
            )
            for name, target in self._targets.items()
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BuildCancelledError:
            self._discard_when_settled(tasks)
            raise
        except BaseException:
            await _cancel_pending(tasks)
            raise

    def _discard_when_settled(self, tasks: Sequence[asyncio.Future[TargetResult]]) -> None:
        # Dispatched executions finish on their own; their results are dropped.
        if not tasks:
            return
        drain = asyncio.gather(*tasks, return_exceptions=True)
        self._discarded.add(drain)
        drain.add_done_callback(self._discarded.discard)

    async def _run_target(
        self,
        name: str,
        target: RemoteTargetPort,
        request: ExecutionRequest,
        logger: BuildLogger,
        token: CancellationToken,
    ) -> TargetResult:
        start_time = logger.now()
        if self._verbose and request.snap_payloads:
            self._record_target_inputs(name, request.global_css, request.snap_payloads, logger)
        token.raise_if_cancelled()
        try:
            result = await target.execute(request)
        except SnapdiffError:
            raise
        except Exception as exc:
            raise RemoteExecutionError(name, str(exc) or type(exc).__name__) from exc
        logger.start(f"  - {name}", start_time=start_time)
        logger.success()
        return TargetResult(name=name, result=result)

    def _record_target_inputs(
        self,
        name: str,
        global_css: Sequence[CSSBlock],
        snap_payloads: Sequence[SnapPayload],
        logger: BuildLogger,
    ) -> None:
        project = self._project or "default"
        css_path = self._verbose_dir / f"snapdiff-verbose-{project}-{name}.css"
        snippets_path = self._verbose_dir / f"snapdiff-snippets-{project}-{name}.json"
        write_text_file(css_path, json.dumps([block.to_dict() for block in global_css]))
        write_text_file(snippets_path, json.dumps([snap.to_dict() for snap in snap_payloads]))
        logger.artifact(f'Recorded CSS for target "{name}" can be found in', css_path)
        logger.artifact(f'Recorded HTML snippets for target "{name}" can be found in', snippets_path)


__all__ = ["TargetExecutionCoordinator"]
