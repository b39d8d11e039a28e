"""Async downloader that streams a remote archive to disk.

Uses ``httpx.AsyncClient`` so the download never blocks the event loop.
Redirects are followed (both WordPress and GitHub redirect their archive
URLs) and every request carries the generator's User-Agent.
"""

from __future__ import annotations

from pathlib import Path

import httpx

from hozokit_generator.config import Config
from hozokit_generator.errors import FilesystemError, HttpStatusError, TransportError

_CHUNK_SIZE = 64 * 1024


def _discard(path: Path) -> None:
    """Remove a partially written download, if any."""
    try:
        path.unlink(missing_ok=True)
    except OSError:
        # The original error is more useful than a cleanup failure.
        pass


class Downloader:
    """Streams remote files to local paths.

    The caller owns progress reporting and user-facing messages; this class
    only raises ``HttpStatusError`` for a non-success status and
    ``TransportError`` when no response could be obtained.
    """

    def __init__(
        self,
        user_agent: str = "Hozokit Generator v0.0",
        timeout: float = 300.0,
        connect_timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.transport = transport

    @classmethod
    def from_config(
        cls, config: Config, transport: httpx.AsyncBaseTransport | None = None
    ) -> "Downloader":
        return cls(
            user_agent=config.http.user_agent,
            timeout=config.http.timeout,
            connect_timeout=config.http.connect_timeout,
            transport=transport,
        )

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` with our headers, timeout and transport."""
        return httpx.AsyncClient(
            headers={"User-Agent": self.user_agent},
            timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
            follow_redirects=True,
            transport=self.transport,
        )

    async def fetch(self, url: str, destination: str | Path) -> Path:
        """Download *url* into *destination*.

        Args:
            url: Remote resource to fetch.
            destination: File to write. Its parent directory must exist.

        Returns:
            The destination path.

        Raises:
            FilesystemError: If the parent directory is missing or the file
                cannot be written.
            HttpStatusError: If the server answers with a non-2xx status.
            TransportError: If the request fails before a response arrives.
        """
        dest = Path(destination)
        if not dest.parent.is_dir():
            raise FilesystemError(
                f"Cannot download to {dest}: directory {dest.parent} does not exist.",
                path=dest.parent,
            )

        try:
            async with self._client() as client:
                async with client.stream("GET", url) as response:
                    if not response.is_success:
                        raise HttpStatusError(url, response.status_code)
                    with dest.open("wb") as handle:
                        async for chunk in response.aiter_bytes(_CHUNK_SIZE):
                            handle.write(chunk)
        except HttpStatusError:
            _discard(dest)
            raise
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            _discard(dest)
            raise TransportError(url, str(exc) or type(exc).__name__) from exc
        except OSError as exc:
            _discard(dest)
            raise FilesystemError(f"Could not write {dest}: {exc}", path=dest) from exc

        return dest
