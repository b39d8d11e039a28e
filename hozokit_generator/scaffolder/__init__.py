"""Hozokit scaffolder -- renders theme and component files from templates.

Quick usage::

    from hozokit_generator.scaffolder import ComponentGenerator, ThemeTemplater

    context = await ThemeTemplater().render(layout, params)
    files = ComponentGenerator().generate(Path.cwd(), component_params)
"""

from hozokit_generator.scaffolder.component import ComponentGenerator
from hozokit_generator.scaffolder.templates import TemplateRenderer
from hozokit_generator.scaffolder.theme import ThemeTemplater

__all__ = [
    "ComponentGenerator",
    "TemplateRenderer",
    "ThemeTemplater",
]
