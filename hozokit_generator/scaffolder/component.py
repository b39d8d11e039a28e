"""Twig component generator.

Creates ``templates/components/<component_name>/`` inside an existing theme
with an ``index.twig`` markup template and a ``style.scss`` stylesheet.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import TemplateError

from hozokit_generator.errors import FilesystemError, ProjectNotFoundError
from hozokit_generator.layout import ProjectLayout
from hozokit_generator.models import ComponentParameters
from hozokit_generator.scaffolder.templates import TemplateRenderer

COMPONENT_FILES: dict[str, str] = {
    "index.twig": "component/index.twig.j2",
    "style.scss": "component/style.scss.j2",
}


class ComponentGenerator:
    """Generates a component file pair inside a Hozokit theme."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def generate(self, base_dir: str | Path, params: ComponentParameters) -> list[Path]:
        """Render the component files.

        Args:
            base_dir: Directory containing the project folder (usually cwd).
            params: Component answers.

        Returns:
            Paths of the files written.

        Raises:
            ProjectNotFoundError: If ``<project>/wp-content/themes/<project>``
                does not exist under *base_dir*.
            FilesystemError: If one or both files could not be written. Both
                are attempted before raising.
        """
        layout = ProjectLayout(Path(base_dir), params.project_folder_name)
        if not layout.theme_dir.is_dir():
            raise ProjectNotFoundError(layout.theme_dir)

        component_dir = layout.component_dir(params.component_name_formatted)
        try:
            component_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"Could not create {component_dir}: {exc}", path=component_dir) from exc

        context = params.model_dump()
        written: list[Path] = []
        failures: list[str] = []
        for filename, template in COMPONENT_FILES.items():
            target = component_dir / filename
            try:
                written.append(self.renderer.write(template, target, context))
            except (OSError, TemplateError) as exc:
                failures.append(f"Could not create '{target}': {exc}")

        if failures:
            raise FilesystemError("\n".join(failures), path=component_dir)
        return written
