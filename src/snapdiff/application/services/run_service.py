"""Application service running one snapdiff orchestration, or watching for more.

This layer wires configuration into the feature use cases so that the CLI
only has to translate arguments and render the outcome.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, final

from snapdiff.config.config import Config
from snapdiff.features.assets import AssetPackageCache, HttpAssetUploader, UploaderPort
from snapdiff.features.snapshots import (
    BundlerPort,
    CommandBundler,
    Report,
    RemoteTargetPort,
    TargetExecutionCoordinator,
    TargetResult,
    build_targets,
    construct_report,
    create_dynamic_entry_point,
    load_plugins,
    plugin_css,
    resolve_dom_provider,
    write_debug_index,
)
from snapdiff.features.stylesheets import (
    CSSBlock,
    FileStylesheetLoader,
    StylesheetLoaderPort,
    resolve_css_blocks,
)
from snapdiff.features.watch import AcknowledgerPort, BuildSupervisor
from snapdiff.features.watch.usecases import ReadyCallback
from snapdiff.platform.http import HTTPClient, SnapdiffHTTPClient
from snapdiff.platform.logging import BuildLogger
from snapdiff.shared import CancellationToken, Credentials

RunOutcome = Report | list[TargetResult]


@dataclass(frozen=True)
class RunOptions:
    """Input parameters for a run.

    Attributes:
        only: Restrict examples to components whose file name contains this.
        is_async: Submit comparisons and return acknowledgments.
        on_ready: Enables watch mode; receives every non-superseded outcome.
        acknowledger: Gates superseding builds in watch mode when set.
    """

    only: str | None = None
    is_async: bool = False
    on_ready: ReadyCallback | None = None
    acknowledger: AcknowledgerPort | None = None


@dataclass(slots=True)
class RunContext:
    """Collaborators resolved from configuration for one run or watch session."""

    stylesheets: list[str | dict[str, Any]]
    plugin_css: list[str]
    loader: StylesheetLoaderPort
    coordinator: TargetExecutionCoordinator
    prerender: bool
    is_async: bool
    target_count: int


@final
class SnapRunService:
    """Orchestrate discovery, bundling and screenshot generation.

    The service owns the asset package cache, so uploads are deduplicated
    for as long as the service lives, across every build of a watch session.
    """

    def __init__(
        self,
        *,
        cache: AssetPackageCache | None = None,
        http_factory: Callable[[Credentials, str | None], HTTPClient] | None = None,
        uploader_factory: Callable[[HTTPClient, str], UploaderPort] | None = None,
        targets_factory: Callable[[Mapping[str, Mapping[str, Any]]], dict[str, RemoteTargetPort]] | None = None,
        bundler_factory: Callable[[Config, Path], BundlerPort] | None = None,
        loader_factory: Callable[[Path], StylesheetLoaderPort] | None = None,
        logger_factory: Callable[[str | None], BuildLogger] | None = None,
    ) -> None:
        """Create a service with overridable adapter factories.

        Tests inject doubles; production code relies on the HTTP and
        command-line adapters.
        """
        self._cache: AssetPackageCache = cache or AssetPackageCache()
        self._http_factory: Callable[[Credentials, str | None], HTTPClient] = (
            http_factory or _default_http_client
        )
        self._uploader_factory: Callable[[HTTPClient, str], UploaderPort] = (
            uploader_factory or HttpAssetUploader
        )
        self._targets_factory: Callable[[Mapping[str, Mapping[str, Any]]], dict[str, RemoteTargetPort]] = (
            targets_factory or build_targets
        )
        self._bundler_factory: Callable[[Config, Path], BundlerPort] = (
            bundler_factory or _default_bundler
        )
        self._loader_factory: Callable[[Path], StylesheetLoaderPort] = (
            loader_factory or FileStylesheetLoader
        )
        self._logger_factory: Callable[[str | None], BuildLogger] = logger_factory or BuildLogger

    @property
    def cache(self) -> AssetPackageCache:
        return self._cache

    def build_context(self, config: Config, options: RunOptions) -> RunContext:
        """Resolve plugins, targets and adapters described by ``config``.

        Raises:
            ConfigError: If the configuration is incomplete or inconsistent.
        """
        config.validate()
        credentials = config.credentials()
        root_dir = config.resolved_root_dir()

        plugins = load_plugins(config.plugins)
        http = self._http_factory(credentials, config.project)
        coordinator = TargetExecutionCoordinator(
            self._targets_factory(config.targets),
            uploader=self._uploader_factory(http, config.endpoint),
            cache=self._cache,
            credentials=credentials,
            endpoint=config.endpoint,
            public_folders=config.resolved_public_folders(),
            dom_provider=resolve_dom_provider(plugins, config.dom_provider),
            project=config.project,
            verbose_dir=config.resolved_tmpdir(),
        )
        return RunContext(
            stylesheets=list(config.stylesheets),
            plugin_css=plugin_css(plugins),
            loader=self._loader_factory(root_dir),
            coordinator=coordinator,
            prerender=config.prerender,
            is_async=options.is_async,
            target_count=len(coordinator.target_names),
        )

    async def generate_screenshots(
        self,
        context: RunContext,
        bundle_file: Path,
        logger: BuildLogger,
        token: CancellationToken | None = None,
    ) -> RunOutcome:
        """Resolve CSS and run every target against ``bundle_file``.

        Returns:
            The report in sync mode, the raw acknowledgments in async mode.
        """
        token = token or CancellationToken()
        try:
            css_blocks: list[CSSBlock] = await resolve_css_blocks(
                context.stylesheets, context.plugin_css, context.loader
            )
            token.raise_if_cancelled()
            logger.info(f"Generating screenshots in {context.target_count} target(s)...")
            results = await context.coordinator.execute(
                bundle_file,
                css_blocks,
                prerender=context.prerender,
                is_async=context.is_async,
                logger=logger,
                token=token,
            )
        except Exception as exc:
            logger.fail(exc)
            raise
        if context.is_async:
            return results
        return construct_report(results)

    async def run(self, config: Config, options: RunOptions | None = None) -> RunOutcome | None:
        """Discover examples, bundle them and generate screenshots.

        With ``options.on_ready`` the service watches sources and returns
        only when the watch ends; every non-superseded outcome is delivered
        to ``on_ready``.
        """
        options = options or RunOptions()
        context = self.build_context(config, options)
        logger = self._logger_factory(config.project)
        tmpdir = config.resolved_tmpdir()

        logger.start("Searching for snapdiff example files...")
        entry_point = await create_dynamic_entry_point(
            root_dir=config.resolved_root_dir(),
            include=config.include,
            tmpdir=tmpdir,
            only=options.only,
        )
        logger.success(f"({entry_point.number_of_files_processed} found)")
        _ = write_debug_index(tmpdir)

        bundler = self._bundler_factory(config, tmpdir)
        logger.start("Creating bundle...")

        if options.on_ready is not None:
            supervisor = BuildSupervisor(
                partial(self.generate_screenshots, context),
                options.on_ready,
                acknowledger=options.acknowledger,
                logger=logger,
                logger_factory=partial(self._logger_factory, config.project),
            )
            await bundler.watch(entry_point.entry_file, supervisor.on_build_ready)
            return None

        try:
            bundle_file = await bundler.build(entry_point.entry_file)
        except Exception as exc:
            logger.fail(exc)
            raise
        logger.success()
        return await self.generate_screenshots(context, bundle_file, logger)


def _default_http_client(credentials: Credentials, project: str | None) -> HTTPClient:
    return SnapdiffHTTPClient(credentials, project=project)


def _default_bundler(config: Config, tmpdir: Path) -> BundlerPort:
    return CommandBundler(
        config.bundle_command,
        output_dir=tmpdir,
        watch_root=config.resolved_root_dir(),
        interval=config.watch_interval,
    )


__all__ = ["RunContext", "RunOptions", "RunOutcome", "SnapRunService"]
