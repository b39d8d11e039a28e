"""Theme templating stage: personalise the extracted starter kit.

After the kit is extracted the theme still carries its generic name and
default files. This stage renames the theme folder after the project, picks
up the Node version the kit pins in ``.nvmrc`` and replaces ``base.scss``,
``.env`` and the readme with rendered versions.

Each file operation is attempted independently. Failures are collected and
reported together once every operation has been tried; nothing is rolled back.
"""

from __future__ import annotations

import asyncio
from typing import Any

from jinja2 import TemplateError

from hozokit_generator.errors import TemplateStageError
from hozokit_generator.layout import ProjectLayout
from hozokit_generator.models import ProjectParameters
from hozokit_generator.scaffolder.templates import TemplateRenderer
from hozokit_generator.utils import read_version_marker

DEFAULT_DOCS_URL = "https://github.com/csalmeida/hozokit"


def node_version_from_marker(marker: str) -> str:
    """``"v14.15.1"`` -> ``"14.15.1"``."""
    return marker[1:] if marker.startswith("v") else marker


class ThemeTemplater:
    """Renders the project specific theme files into an extracted kit."""

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        docs_url: str = DEFAULT_DOCS_URL,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.docs_url = docs_url

    async def render(self, layout: ProjectLayout, params: ProjectParameters) -> dict[str, Any]:
        """Run the stage in a worker thread.

        Returns:
            The template context that was used (including the resolved
            ``node_version``).

        Raises:
            TemplateStageError: If any file operation failed. All operations
                are attempted before this is raised.
        """
        return await asyncio.to_thread(self.render_sync, layout, params)

    def render_sync(self, layout: ProjectLayout, params: ProjectParameters) -> dict[str, Any]:
        failures: list[str] = []

        if layout.generic_theme_dir.is_dir() and layout.generic_theme_dir != layout.theme_dir:
            try:
                layout.generic_theme_dir.rename(layout.theme_dir)
            except OSError as exc:
                failures.append(
                    f"Could not rename theme folder to match project name "
                    f"({layout.folder_name}): {exc}"
                )

        if not layout.theme_dir.is_dir():
            failures.append(
                f"Theme folder {layout.theme_dir} does not exist, templates were not rendered."
            )
            raise TemplateStageError(failures)

        node_version = params.node_version
        try:
            marker = read_version_marker(layout.nvmrc_path)
        except (OSError, UnicodeDecodeError) as exc:
            failures.append(f"Could not read {layout.nvmrc_path}: {exc}")
        else:
            if marker:
                node_version = node_version_from_marker(marker)

        context = params.template_context(node_version=node_version, docs_url=self.docs_url)

        # base.scss defines the theme header WordPress reads.
        try:
            layout.base_styles_path.unlink(missing_ok=True)
            self.renderer.write("theme/base.scss.j2", layout.base_styles_path, context)
        except (OSError, TemplateError) as exc:
            failures.append(f"Could not create {layout.base_styles_path}: {exc}")

        try:
            self.renderer.write("theme/env.j2", layout.env_path, context)
        except (OSError, TemplateError) as exc:
            failures.append(f"Could not create {layout.env_path}: {exc}")

        try:
            self._archive_kit_readme(layout)
            self.renderer.write("theme/README.md.j2", layout.readme_path, context)
        except (OSError, TemplateError) as exc:
            failures.append(f"Could not rename theme README file: {exc}")

        if failures:
            raise TemplateStageError(failures)
        return context

    @staticmethod
    def _archive_kit_readme(layout: ProjectLayout) -> None:
        """Keep the kit's own readme as ``HOZOKIT-README.md`` in the theme."""
        for source in (layout.kit_readme_path, layout.readme_path):
            if source.is_file():
                source.replace(layout.archived_readme_path)
                return
