"""Unit tests for hozokit_generator.downloader.

Tests cover:
- Successful streaming download
- User-Agent header and redirect following
- Non-2xx status -> HttpStatusError, partial file removed
- Transport failures -> TransportError
- Missing destination directory -> FilesystemError
"""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from hozokit_generator.config import Config
from hozokit_generator.downloader import Downloader
from hozokit_generator.errors import FilesystemError, HttpStatusError, TransportError

URL = "https://downloads.test/latest.zip"


class TestFetch:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_writes_body(self, tmp_path: Path, remote):
        payload = b"PK" + b"x" * 200_000
        remote.add(URL, content=payload)
        downloader = Downloader(transport=remote.transport)

        dest = await downloader.fetch(URL, tmp_path / "latest.zip")

        assert dest == tmp_path / "latest.zip"
        assert dest.read_bytes() == payload

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sends_user_agent(self, tmp_path: Path, remote):
        remote.add(URL, content=b"data")
        downloader = Downloader(user_agent="Test Agent", transport=remote.transport)

        await downloader.fetch(URL, tmp_path / "file.zip")

        assert remote.requests[0].headers["User-Agent"] == "Test Agent"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_follows_redirects(self, tmp_path: Path, remote):
        final = "https://cdn.test/wordpress-6.zip"
        remote.add(URL, status_code=302, headers={"Location": final})
        remote.add(final, content=b"zipdata")
        downloader = Downloader(transport=remote.transport)

        dest = await downloader.fetch(URL, tmp_path / "wordpress.zip")

        assert dest.read_bytes() == b"zipdata"
        assert remote.requested_urls == [URL, final]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_error_status(self, tmp_path: Path, remote):
        remote.add(URL, status_code=404, content=b"missing")
        downloader = Downloader(transport=remote.transport)

        with pytest.raises(HttpStatusError) as exc_info:
            await downloader.fetch(URL, tmp_path / "latest.zip")

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == f"Download has failed. (404) {URL}"
        assert not (tmp_path / "latest.zip").exists()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_transport_failure(self, tmp_path: Path, remote):
        remote.fail(URL, httpx.ConnectError("connection refused"))
        downloader = Downloader(transport=remote.transport)

        with pytest.raises(TransportError) as exc_info:
            await downloader.fetch(URL, tmp_path / "latest.zip")

        assert exc_info.value.url == URL
        assert "connection refused" in exc_info.value.reason
        assert not (tmp_path / "latest.zip").exists()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_parent_directory(self, tmp_path: Path, remote):
        remote.add(URL, content=b"data")
        downloader = Downloader(transport=remote.transport)

        with pytest.raises(FilesystemError):
            await downloader.fetch(URL, tmp_path / "nope" / "latest.zip")
        assert remote.requests == []


class TestFromConfig:
    @pytest.mark.unit
    def test_uses_http_settings(self):
        config = Config()
        downloader = Downloader.from_config(config)
        assert downloader.user_agent == config.http.user_agent
        assert downloader.timeout == config.http.timeout
        assert downloader.connect_timeout == config.http.connect_timeout
