"""Shared pytest fixtures for the Hozokit generator test suite.

Provides reusable fixtures for:
- Zip archives shaped like the WordPress and Hozokit downloads
- An ``httpx.MockTransport`` that serves those archives and the release API
- A recording Rich console
- A fake dependency installer
"""

from __future__ import annotations

import io
import json
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from rich.console import Console

from hozokit_generator.config import Config
from hozokit_generator.layout import ProjectLayout

WORDPRESS_URL = "https://wordpress.test/latest.zip"
RELEASE_API_URL = "https://api.github.test/repos/csalmeida/hozokit/releases/latest"
ZIPBALL_URL = "https://api.github.test/repos/csalmeida/hozokit/zipball/v1.2.0"
KIT_TOP_FOLDER = "csalmeida-hozokit-1a2b3c4/"


# ---------------------------------------------------------------------------
# Zip builders
# ---------------------------------------------------------------------------

def build_zip(entries: dict[str, str | bytes]) -> bytes:
    """Return the bytes of a zip holding *entries* (``name -> content``).

    Names ending in ``/`` become directory entries.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries.items():
            if name.endswith("/"):
                archive.writestr(name, b"")
            else:
                archive.writestr(name, content)
    return buffer.getvalue()


def kit_entries() -> dict[str, str]:
    """Entries of a Hozokit release zipball."""
    theme = f"{KIT_TOP_FOLDER}wp-content/themes/hozokit/"
    return {
        KIT_TOP_FOLDER: "",
        f"{KIT_TOP_FOLDER}README.md": "# Hozokit\n\nThe kit's own documentation.\n",
        f"{theme}.nvmrc": "v14.15.1\n",
        f"{theme}package.json": json.dumps({"name": "hozokit", "private": True}),
        f"{theme}styles/base.scss": "/* Theme Name: Hozokit */\n",
        f"{theme}templates/components/.gitkeep": "",
        f"{theme}index.php": "<?php // Silence is golden.\n",
    }


def wordpress_entries() -> dict[str, str]:
    """Entries of the WordPress ``latest.zip``."""
    return {
        "wordpress/": "",
        "wordpress/index.php": "<?php require __DIR__ . '/wp-blog-header.php';\n",
        "wordpress/wp-config-sample.php": "<?php\n",
        "wordpress/wp-content/index.php": "<?php // Silence is golden.\n",
        "wordpress/wp-content/themes/index.php": "<?php // Silence is golden.\n",
    }


@pytest.fixture
def make_zip_bytes() -> Callable[[dict[str, str | bytes]], bytes]:
    return build_zip


@pytest.fixture
def kit_zip_bytes() -> bytes:
    return build_zip(kit_entries())


@pytest.fixture
def wordpress_zip_bytes() -> bytes:
    return build_zip(wordpress_entries())


@pytest.fixture
def make_zip(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a zip file under ``tmp_path``."""

    def _make(entries: dict[str, str | bytes], name: str = "archive.zip", directory: Path | None = None) -> Path:
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_bytes(build_zip(entries))
        return path

    return _make


@pytest.fixture
def make_extracted_kit(tmp_path: Path) -> Callable[..., ProjectLayout]:
    """Factory laying out a project as it looks right after kit extraction."""

    def _make(folder_name: str = "my-theme", nvmrc: str | None = "v14.15.1\n") -> ProjectLayout:
        layout = ProjectLayout(tmp_path, folder_name)
        for name, content in kit_entries().items():
            relative = name[len(KIT_TOP_FOLDER):]
            if not relative or name.endswith("/"):
                continue
            if relative.endswith(".nvmrc") and nvmrc is None:
                continue
            target = layout.root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(nvmrc if relative.endswith(".nvmrc") else content, encoding="utf-8")
        return layout

    return _make


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

class FakeRemote:
    """Routes requests to canned responses and records what was requested."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, url: str, status_code: int = 200, content: bytes | str = b"", **kwargs: Any) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, content=content, **kwargs)

        self.routes[url] = respond

    def add_json(self, url: str, payload: Any, status_code: int = 200) -> None:
        self.add(url, status_code, json.dumps(payload), headers={"Content-Type": "application/json"})

    def fail(self, url: str, exc: Exception) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[url] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, content=b"not found")
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def requested_urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]


@pytest.fixture
def remote() -> FakeRemote:
    """An empty fake remote; tests add the routes they need."""
    return FakeRemote()


@pytest.fixture
def healthy_remote(remote: FakeRemote) -> FakeRemote:
    """A remote serving WordPress, the release API and the kit zipball."""
    remote.add(WORDPRESS_URL, content=build_zip(wordpress_entries()))
    remote.add_json(RELEASE_API_URL, {"name": "v1.2.0", "zipball_url": ZIPBALL_URL, "tag_name": "v1.2.0"})
    remote.add(ZIPBALL_URL, content=build_zip(kit_entries()))
    return remote


@pytest.fixture
def zipball_url() -> str:
    return ZIPBALL_URL


@pytest.fixture
def remote_config() -> Config:
    """Config pointing at the fake remote URLs."""
    return Config(wordpress_url=WORDPRESS_URL, release_api_url=RELEASE_API_URL)


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture
def out() -> Console:
    """A Rich console that records output; read it with ``out.export_text()``."""
    return Console(record=True, file=io.StringIO(), width=200, color_system=None)


# ---------------------------------------------------------------------------
# Dependency installer
# ---------------------------------------------------------------------------

class RecordingInstallCommand:
    """Stands in for ``DependencyInstaller.run``; records the directories it ran in."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[Path] = []
        self.error = error

    def __call__(self, cwd: Path) -> None:
        self.calls.append(Path(cwd))
        if self.error is not None:
            raise self.error


@pytest.fixture
def install_command() -> RecordingInstallCommand:
    return RecordingInstallCommand()
