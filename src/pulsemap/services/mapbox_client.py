"""HTTP client for checking that the configured Mapbox style is reachable."""

from __future__ import annotations

import logging

import httpx

from ..config import settings

STYLE_SCHEME = "mapbox://styles/"

logger = logging.getLogger(__name__)


def style_api_path(style_url: str) -> str:
    """Translate ``mapbox://styles/<owner>/<id>`` into the Styles API path."""
    if not style_url.startswith(STYLE_SCHEME):
        raise ValueError(f"Unsupported style URL '{style_url}'.")
    owner_and_id = style_url[len(STYLE_SCHEME):].strip("/")
    if owner_and_id.count("/") != 1:
        raise ValueError(f"Style URL '{style_url}' must look like mapbox://styles/<owner>/<id>.")
    return f"/styles/v1/{owner_and_id}"


class MapboxClient:
    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.token = token if token is not None else settings.mapbox_token
        if not self.token:
            raise ValueError("Mapbox access token is not configured.")
        self.base_url = (base_url or settings.mapbox_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.mapbox_timeout_seconds

    def _get_client(self) -> httpx.Client:
        return httpx.Client(base_url=self.base_url, timeout=httpx.Timeout(self.timeout, connect=self.timeout))

    def fetch_style(self, style_url: str | None = None) -> dict:
        path = style_api_path(style_url or settings.map_style)
        with self._get_client() as client:
            response = client.get(path, params={"access_token": self.token})
            response.raise_for_status()
            return response.json()


def check_style(client: MapboxClient | None = None) -> bool:
    try:
        style = (client or MapboxClient()).fetch_style()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Mapbox style check failed: %s", exc)
        return False
    return bool(style.get("layers"))
