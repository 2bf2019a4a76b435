import httpx
import pytest

from pulsemap.services.mapbox_client import MapboxClient, check_style, style_api_path


def test_style_api_path():
    assert style_api_path("mapbox://styles/mapbox/dark-v11") == "/styles/v1/mapbox/dark-v11"
    with pytest.raises(ValueError):
        style_api_path("https://example.com/style.json")
    with pytest.raises(ValueError):
        style_api_path("mapbox://styles/dark-v11")


def test_client_requires_token():
    with pytest.raises(ValueError):
        MapboxClient(token="")


class _StubClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    def fetch_style(self):
        if self.error:
            raise self.error
        return self.result


def test_check_style():
    assert check_style(_StubClient(result={"layers": [{"id": "background"}]})) is True
    assert check_style(_StubClient(result={"layers": []})) is False
    assert check_style(_StubClient(error=httpx.ConnectError("offline"))) is False


def test_fetch_style_uses_styles_api(monkeypatch):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["token"] = request.url.params["access_token"]
        return httpx.Response(200, json={"version": 8, "layers": [{"id": "land"}]})

    client = MapboxClient(token="pk.test", base_url="https://api.mapbox.test", timeout=1.0)
    monkeypatch.setattr(
        client,
        "_get_client",
        lambda: httpx.Client(base_url=client.base_url, transport=httpx.MockTransport(handler)),
    )

    style = client.fetch_style("mapbox://styles/mapbox/dark-v11")

    assert style["layers"][0]["id"] == "land"
    assert seen == {"path": "/styles/v1/mapbox/dark-v11", "token": "pk.test"}
