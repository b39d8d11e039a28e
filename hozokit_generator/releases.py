"""Resolve the latest starter-kit release from the GitHub releases API."""

from __future__ import annotations

import json

import httpx
from pydantic import ValidationError

from hozokit_generator.config import Config
from hozokit_generator.errors import ApiError, MissingFieldError, ParseError, TransportError
from hozokit_generator.models import ReleaseInfo

_REQUIRED_FIELDS = ("zipball_url", "name")


class ReleaseResolver:
    """Looks up release metadata (name and zipball URL).

    GitHub rejects unauthenticated API requests that do not identify the
    client, so a ``User-Agent`` header is always sent.
    """

    def __init__(
        self,
        user_agent: str = "Hozokit Generator v0.0",
        timeout: float = 30.0,
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
    ) -> "ReleaseResolver":
        return cls(
            user_agent=config.http.user_agent,
            timeout=config.http.timeout,
            connect_timeout=config.http.connect_timeout,
            transport=transport,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={
                "User-Agent": self.user_agent,
                "Accept": "application/vnd.github+json",
            },
            timeout=httpx.Timeout(self.timeout, connect=self.connect_timeout),
            follow_redirects=True,
            transport=self.transport,
        )

    async def resolve_latest(self, api_url: str) -> ReleaseInfo:
        """Fetch and parse the release document at *api_url*.

        Raises:
            TransportError: If no response could be obtained.
            ApiError: If the API answers with a non-2xx status.
            ParseError: If the body is not a JSON object.
            MissingFieldError: If ``name`` or ``zipball_url`` is absent or empty.
        """
        try:
            async with self._client() as client:
                response = await client.get(api_url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(api_url, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise ApiError(api_url, response.status_code, response.text[:500])

        try:
            payload = json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise ParseError(api_url, str(exc)) from exc
        if not isinstance(payload, dict):
            raise ParseError(api_url, f"expected a JSON object, got {type(payload).__name__}")

        for field in _REQUIRED_FIELDS:
            value = payload.get(field)
            if not isinstance(value, str) or not value.strip():
                raise MissingFieldError(api_url, field)

        try:
            return ReleaseInfo(name=payload["name"], zipball_url=payload["zipball_url"])
        except ValidationError as exc:
            raise ParseError(api_url, str(exc)) from exc
