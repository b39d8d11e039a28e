"""Hozokit project install pipeline.

Generates a project as a linear sequence of stages:

DOWNLOADING_PLATFORM -- Download WordPress (skipped without the platform flag).
EXTRACTING_PLATFORM  -- Extract WordPress into the project root (skipped likewise).
DOWNLOADING_KIT      -- Resolve the latest Hozokit release and download it.
EXTRACTING_KIT       -- Extract Hozokit into the project root.
TEMPLATING           -- Rename the theme folder and render the theme files.
INSTALLING_DEPS      -- Run ``npm install`` when the Node version matches.
REPORTING            -- Print the next steps.

Each stage receives the pipeline context and returns an updated copy. The
platform stages are filtered out of the list once, before anything runs.
The first stage that raises stops the run: exactly one error is printed and
``run`` returns a result in the FAILED state. Nothing is retried and files
already written are left in place.
"""

from __future__ import annotations

import asyncio
import time
import traceback
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape

from hozokit_generator.archive import ArchiveExtractor
from hozokit_generator.config import Config
from hozokit_generator.downloader import Downloader
from hozokit_generator.errors import GeneratorError
from hozokit_generator.installer import DependencyInstaller, InstallResult
from hozokit_generator.layout import ProjectLayout
from hozokit_generator.models import ProjectParameters, ReleaseInfo
from hozokit_generator.next_steps import print_next_steps
from hozokit_generator.progress import ProgressReporter
from hozokit_generator.releases import ReleaseResolver
from hozokit_generator.scaffolder.theme import ThemeTemplater
from hozokit_generator.utils import (
    console,
    ensure_dir,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

# ---------------------------------------------------------------------------
# States & stage descriptors
# ---------------------------------------------------------------------------


class PipelineState(str, Enum):
    IDLE = "idle"
    DOWNLOADING_PLATFORM = "downloading_platform"
    EXTRACTING_PLATFORM = "extracting_platform"
    DOWNLOADING_KIT = "downloading_kit"
    EXTRACTING_KIT = "extracting_kit"
    TEMPLATING = "templating"
    INSTALLING_DEPS = "installing_deps"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class PipelineContext:
    """Everything a stage may read; stages return an updated copy."""

    params: ProjectParameters
    layout: ProjectLayout
    release: Optional[ReleaseInfo] = None
    node_version: str = ""
    template_context: dict[str, Any] = field(default_factory=dict)
    install: Optional[InstallResult] = None
    warnings: tuple[str, ...] = ()


StageFn = Callable[[PipelineContext], Awaitable[PipelineContext]]
BlockingStageFn = Callable[[PipelineContext], PipelineContext]


@dataclass(frozen=True)
class Stage:
    """One unit of the pipeline.

    Attributes:
        state: State the pipeline is in while the stage runs.
        title: Human readable name used in failure messages.
        run: ``(context) -> context`` coroutine function, or a plain function
            for blocking stages; raising fails the pipeline.
        platform_only: Stage only runs when WordPress is being installed.
        blocking: Stage holds a thread until an external process exits.
            ``run`` is a plain function that the pipeline executes through
            ``asyncio.to_thread`` so the event loop keeps spinning.
    """

    state: PipelineState
    title: str
    run: StageFn | BlockingStageFn
    platform_only: bool = False
    blocking: bool = False


@dataclass
class PipelineResult:
    """Outcome of :meth:`InstallPipeline.run`."""

    state: PipelineState
    completed: list[PipelineState] = field(default_factory=list)
    failed_stage: Optional[PipelineState] = None
    error: Optional[BaseException] = None
    release: Optional[ReleaseInfo] = None
    dependencies_installed: bool = False
    warnings: list[str] = field(default_factory=list)
    duration: str = ""

    @property
    def success(self) -> bool:
        return self.state is PipelineState.DONE


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class InstallPipeline:
    """Downloads, extracts and personalises a Hozokit project.

    Collaborators are injectable so tests can swap the network and the
    package manager out; by default they are built from ``config``.
    """

    def __init__(
        self,
        config: Config,
        params: ProjectParameters,
        base_dir: str | Path | None = None,
        *,
        downloader: Downloader | None = None,
        resolver: ReleaseResolver | None = None,
        extractor: ArchiveExtractor | None = None,
        templater: ThemeTemplater | None = None,
        installer: DependencyInstaller | None = None,
        out: Console | None = None,
        show_progress: bool = True,
    ) -> None:
        if "node_version" not in params.model_fields_set:
            params = params.model_copy(update={"node_version": config.default_node_version})
        self.config = config
        self.params = params
        self.out = out or console
        self.show_progress = show_progress
        self.layout = ProjectLayout(
            Path(base_dir) if base_dir is not None else Path.cwd(),
            params.project_folder_name,
            config.generic_theme_folder,
        )

        self.downloader = downloader or Downloader.from_config(config)
        self.resolver = resolver or ReleaseResolver.from_config(config)
        self.extractor = extractor or ArchiveExtractor(out=self.out)
        self.templater = templater or ThemeTemplater(docs_url=config.docs_url)
        self.installer = installer or DependencyInstaller(timeout=config.install_timeout)

        self.state = PipelineState.IDLE

    # ------------------------------------------------------------------
    # Stage list
    # ------------------------------------------------------------------

    def stages(self) -> list[Stage]:
        """Ordered stages for this run, with the platform branch applied."""
        all_stages = [
            Stage(PipelineState.DOWNLOADING_PLATFORM, "WordPress download",
                  self._download_platform, platform_only=True),
            Stage(PipelineState.EXTRACTING_PLATFORM, "WordPress extraction",
                  self._extract_platform, platform_only=True),
            Stage(PipelineState.DOWNLOADING_KIT, "Hozokit download", self._download_kit),
            Stage(PipelineState.EXTRACTING_KIT, "Hozokit extraction", self._extract_kit),
            Stage(PipelineState.TEMPLATING, "Theme setup", self._render_templates),
            Stage(PipelineState.INSTALLING_DEPS, "Dependency install",
                  self._install_dependencies, blocking=True),
            Stage(PipelineState.REPORTING, "Next steps", self._report),
        ]
        if self.params.install_platform:
            return all_stages
        return [stage for stage in all_stages if not stage.platform_only]

    def _progress(self, *labels: str) -> ProgressReporter:
        return ProgressReporter(labels, out=self.out, show=self.show_progress)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self) -> PipelineResult:
        """Execute every stage in order. Never raises.

        Returns:
            A ``PipelineResult`` in state DONE, or FAILED with the error and
            the stage it happened in.
        """
        start = time.monotonic()
        context = PipelineContext(
            params=self.params,
            layout=self.layout,
            node_version=self.params.node_version,
        )
        result = PipelineResult(state=PipelineState.IDLE)

        for stage in self.stages():
            self.state = stage.state
            try:
                if stage.blocking:
                    context = await asyncio.to_thread(stage.run, context)
                else:
                    context = await stage.run(context)
            except GeneratorError as exc:
                self._fail(result, stage, exc)
                print_error(f"{stage.title} failed.", self.out)
                self.out.print(escape(str(exc)), highlight=False)
                break
            except Exception as exc:  # noqa: BLE001
                self._fail(result, stage, exc)
                print_error(f"{stage.title} failed with an unexpected error.", self.out)
                self.out.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
                break
            result.completed.append(stage.state)
        else:
            self.state = PipelineState.DONE
            result.state = PipelineState.DONE

        result.release = context.release
        result.warnings = list(context.warnings)
        result.dependencies_installed = bool(context.install and context.install.installed)
        result.duration = format_duration(time.monotonic() - start)
        return result

    def _fail(self, result: PipelineResult, stage: Stage, exc: BaseException) -> None:
        self.state = PipelineState.FAILED
        result.state = PipelineState.FAILED
        result.failed_stage = stage.state
        result.error = exc

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _download_platform(self, context: PipelineContext) -> PipelineContext:
        ensure_dir(context.layout.root)
        label = "Downloading WordPress"
        async with self._progress(label) as progress:
            await progress.track(
                label,
                self.downloader.fetch(
                    self.config.wordpress_url,
                    context.layout.archive_path(self.config.wordpress_archive),
                ),
            )
        return context

    async def _extract_platform(self, context: PipelineContext) -> PipelineContext:
        label = "Extracting WordPress"
        root = context.layout.root
        async with self._progress(label) as progress:
            await progress.track(
                label,
                self.extractor.extract(
                    context.layout.archive_path(self.config.wordpress_archive), root, root
                ),
            )
        return context

    async def _download_kit(self, context: PipelineContext) -> PipelineContext:
        ensure_dir(context.layout.root)
        lookup, download = "Looking up latest Hozokit release", "Downloading Hozokit"
        async with self._progress(lookup, download) as progress:
            release = await progress.track(
                lookup, self.resolver.resolve_latest(self.config.release_api_url)
            )
            await progress.track(
                download,
                self.downloader.fetch(
                    release.zipball_url,
                    context.layout.archive_path(self.config.kit_archive),
                ),
            )
        return replace(context, release=release)

    async def _extract_kit(self, context: PipelineContext) -> PipelineContext:
        name = context.release.name if context.release else ""
        label = f"Extracting Hozokit {name}".strip()
        root = context.layout.root
        async with self._progress(label) as progress:
            await progress.track(
                label,
                self.extractor.extract(
                    context.layout.archive_path(self.config.kit_archive), root, root
                ),
            )
        return context

    async def _render_templates(self, context: PipelineContext) -> PipelineContext:
        label = "Setup Hozokit base files with given parameters"
        async with self._progress(label) as progress:
            template_context = await progress.track(
                label, self.templater.render(context.layout, context.params)
            )
        return replace(
            context,
            template_context=template_context,
            node_version=template_context.get("node_version", context.node_version),
        )

    def _install_dependencies(self, context: PipelineContext) -> PipelineContext:
        label = "Installing dependencies (this might take a while)"
        layout = context.layout
        with self._progress(label) as progress:
            install = self.installer.install(layout.theme_dir, layout.nvmrc_path)
            if install.error is not None:
                progress.mark_error(label, install.error)
            elif install.warning:
                progress.mark_warning(label, install.warning)
            else:
                progress.mark_success(label)

        # A failed install changes the guidance, it does not fail the run.
        warnings = context.warnings
        if install.error is not None:
            print_error(str(install.error), self.out)
        elif install.warning:
            print_warning(install.warning, self.out)
            warnings = (*warnings, install.warning)
        return replace(context, install=install, warnings=warnings)

    async def _report(self, context: PipelineContext) -> PipelineContext:
        installed = bool(context.install and context.install.installed)
        print_next_steps(
            context.layout,
            context.node_version,
            installed,
            docs_url=self.config.docs_url,
            out=self.out,
        )
        print_summary_table(
            {
                "Project": context.params.project_name,
                "Theme folder": str(context.layout.theme_dir),
                "WordPress": "installed" if context.params.install_platform else "skipped",
                "Hozokit release": context.release.name if context.release else "unknown",
                "Node version": context.node_version,
                "Dependencies": "installed" if installed else "not installed",
            },
            title="Hozokit Project",
            out=self.out,
        )
        print_success(f"Project ready in ./{context.layout.folder_name}", self.out)
        return context
