"""Hozokit generator configuration.

Centralised, typed configuration for the generator. All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class HttpConfig(BaseModel):
    """Settings shared by every outgoing request."""

    # GitHub refuses unauthenticated API requests without a User-Agent.
    user_agent: str = Field(default="Hozokit Generator v0.0")
    timeout: float = Field(default=300.0, gt=0, description="Read timeout in seconds")
    connect_timeout: float = Field(default=15.0, gt=0)


class Config(BaseModel):
    """Global generator configuration.

    Instances are typically created once by the CLI entry point and then
    passed to the pipeline and the component generator.
    """

    wordpress_url: str = Field(default="https://wordpress.org/latest.zip")
    release_api_url: str = Field(
        default="https://api.github.com/repos/csalmeida/hozokit/releases/latest"
    )
    docs_url: str = Field(default="https://github.com/csalmeida/hozokit")
    http: HttpConfig = Field(default_factory=HttpConfig)

    wordpress_archive: str = Field(default="wordpress.zip")
    kit_archive: str = Field(default="hozokit-main.zip")
    generic_theme_folder: str = Field(default="hozokit")

    default_node_version: str = Field(default="14.15.1")
    install_timeout: float | None = Field(
        default=None, gt=0, description="npm install timeout in seconds (None waits forever)"
    )

    settings_file: Path = Field(default=Path(".hozokit-generator.json"))

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path where the file was written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            HOZOKIT_WORDPRESS_URL, HOZOKIT_RELEASE_API_URL,
            HOZOKIT_USER_AGENT, HOZOKIT_HTTP_TIMEOUT,
            HOZOKIT_INSTALL_TIMEOUT, HOZOKIT_NODE_VERSION,
            HOZOKIT_SETTINGS_FILE.
        """
        http_kwargs: dict[str, Any] = {}
        if os.environ.get("HOZOKIT_USER_AGENT"):
            http_kwargs["user_agent"] = os.environ["HOZOKIT_USER_AGENT"]
        if os.environ.get("HOZOKIT_HTTP_TIMEOUT"):
            http_kwargs["timeout"] = float(os.environ["HOZOKIT_HTTP_TIMEOUT"])

        kwargs: dict[str, Any] = {"http": HttpConfig(**http_kwargs)}
        if os.environ.get("HOZOKIT_WORDPRESS_URL"):
            kwargs["wordpress_url"] = os.environ["HOZOKIT_WORDPRESS_URL"]
        if os.environ.get("HOZOKIT_RELEASE_API_URL"):
            kwargs["release_api_url"] = os.environ["HOZOKIT_RELEASE_API_URL"]
        if os.environ.get("HOZOKIT_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = float(os.environ["HOZOKIT_INSTALL_TIMEOUT"])
        if os.environ.get("HOZOKIT_NODE_VERSION"):
            kwargs["default_node_version"] = os.environ["HOZOKIT_NODE_VERSION"]
        if os.environ.get("HOZOKIT_SETTINGS_FILE"):
            kwargs["settings_file"] = Path(os.environ["HOZOKIT_SETTINGS_FILE"])

        return cls(**kwargs)
