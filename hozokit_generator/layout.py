"""On-disk layout of a generated Hozokit project.

Every path the pipeline and the component generator touch is derived here
from the base directory and the project folder name, so stages never build
paths by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

GENERIC_THEME_FOLDER = "hozokit"


@dataclass(frozen=True)
class ProjectLayout:
    """Paths for ``<base_dir>/<folder_name>``."""

    base_dir: Path
    folder_name: str
    generic_theme_folder: str = GENERIC_THEME_FOLDER

    @property
    def root(self) -> Path:
        """Project root; WordPress and the kit are extracted here."""
        return Path(self.base_dir) / self.folder_name

    @property
    def themes_dir(self) -> Path:
        return self.root / "wp-content" / "themes"

    @property
    def generic_theme_dir(self) -> Path:
        """Theme folder as shipped by the starter kit, before renaming."""
        return self.themes_dir / self.generic_theme_folder

    @property
    def theme_dir(self) -> Path:
        """Theme folder renamed after the project."""
        return self.themes_dir / self.folder_name

    @property
    def nvmrc_path(self) -> Path:
        return self.theme_dir / ".nvmrc"

    @property
    def base_styles_path(self) -> Path:
        return self.theme_dir / "styles" / "base.scss"

    @property
    def env_path(self) -> Path:
        return self.theme_dir / ".env"

    @property
    def readme_path(self) -> Path:
        return self.theme_dir / "README.md"

    @property
    def archived_readme_path(self) -> Path:
        return self.theme_dir / "HOZOKIT-README.md"

    @property
    def kit_readme_path(self) -> Path:
        """Where the starter kit's own readme lands after extraction."""
        return self.root / "README.md"

    @property
    def components_dir(self) -> Path:
        return self.theme_dir / "templates" / "components"

    def component_dir(self, component_folder: str) -> Path:
        return self.components_dir / component_folder

    def archive_path(self, archive_name: str) -> Path:
        """Download location for an archive (inside the project root)."""
        return self.root / archive_name
