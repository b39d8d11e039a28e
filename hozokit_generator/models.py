"""Pydantic v2 models for generator parameters and release metadata.

``ProjectParameters`` and ``ComponentParameters`` are built once from the
prompt answers and never mutated afterwards; the names derived from them
(folder names, formatted tags) are computed fields so they always agree with
the answers they came from.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from hozokit_generator.utils import dashify, format_tags, snakify

DEFAULT_THEME_URI = "https://github.com/csalmeida/hozokit"
DEFAULT_NODE_VERSION = "14.15.1"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# ---------------------------------------------------------------------------
# Project generator
# ---------------------------------------------------------------------------


class ProjectParameters(BaseModel):
    """Answers collected by the ``app`` generator."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(default="Hozokit", min_length=1)
    install_platform: bool = Field(default=True, description="Download WordPress as well")
    webserver_url: Optional[str] = Field(default=None, description="Used for hot reloading")
    theme_uri: Optional[str] = Field(default=DEFAULT_THEME_URI)
    theme_description: Optional[str] = None
    theme_author: Optional[str] = None
    theme_author_uri: Optional[str] = None
    theme_tags: str = Field(default="", description="Comma separated, appended to base.scss")
    node_version: str = Field(default=DEFAULT_NODE_VERSION)

    @field_validator(
        "webserver_url",
        "theme_uri",
        "theme_description",
        "theme_author",
        "theme_author_uri",
        mode="before",
    )
    @classmethod
    def _empty_strings_are_unset(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("theme_tags", mode="before")
    @classmethod
    def _normalise_tags(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            value = ",".join(str(tag) for tag in value)
        return format_tags(str(value))

    @computed_field  # type: ignore[misc]
    @property
    def project_folder_name(self) -> str:
        """Folder the project is generated into (``"My Theme"`` -> ``"my-theme"``)."""
        return dashify(self.project_name)

    def template_context(self, **overrides: Any) -> dict[str, Any]:
        """Variables made available to the theme templates."""
        context = self.model_dump()
        context.update(overrides)
        return context


# ---------------------------------------------------------------------------
# Component generator
# ---------------------------------------------------------------------------


class ComponentParameters(BaseModel):
    """Answers collected by the ``component`` generator."""

    model_config = ConfigDict(frozen=True)

    component_name: str = Field(default="New Component", min_length=1)
    component_description: Optional[str] = None
    component_class_prefix: str = Field(default="")
    project_folder_name: str = Field(..., min_length=1)

    @field_validator("component_description", mode="before")
    @classmethod
    def _empty_description_is_unset(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("component_class_prefix", mode="before")
    @classmethod
    def _snakify_prefix(cls, value: Any) -> str:
        if value is None:
            return ""
        return snakify(str(value).strip())

    @computed_field  # type: ignore[misc]
    @property
    def component_name_formatted(self) -> str:
        """Folder name for the component (``"Hero Section"`` -> ``"hero_section"``)."""
        return snakify(self.component_name)

    @computed_field  # type: ignore[misc]
    @property
    def component_name_dashified(self) -> str:
        """Name used in CSS class references (``"hero-section"``)."""
        return dashify(self.component_name)

    @computed_field  # type: ignore[misc]
    @property
    def component_class(self) -> str:
        """Root CSS class, prefixed when a prefix was given."""
        if self.component_class_prefix:
            return f"{self.component_class_prefix}-{self.component_name_dashified}"
        return self.component_name_dashified


# ---------------------------------------------------------------------------
# Release metadata
# ---------------------------------------------------------------------------


class ReleaseInfo(BaseModel):
    """The subset of a GitHub release the kit download needs."""

    name: str = Field(..., min_length=1, description="Human readable release name")
    zipball_url: str = Field(..., min_length=1, description="Archive download URL")
