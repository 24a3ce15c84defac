from __future__ import annotations

import pytest
import requests

from quiz_solver import config


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", content: bytes = b"") -> None:
        self.status_code = status_code
        self.text = text
        self.content = content

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class FakeSession:
    """Stand-in for requests.Session: canned GET responses keyed by URL, POSTs recorded."""

    def __init__(self, responses: dict | None = None, post_response: FakeResponse | None = None) -> None:
        self.responses = responses or {}
        self.post_response = post_response or FakeResponse(200, text='{"correct": true}')
        self.gets: list[str] = []
        self.posts: list[tuple[str, dict]] = []

    def get(self, url: str, timeout: float | None = None) -> FakeResponse:
        self.gets.append(url)
        response = self.responses.get(url)
        if response is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url: str, json: dict | None = None, timeout: float | None = None) -> FakeResponse:
        self.posts.append((url, json))
        if isinstance(self.post_response, Exception):
            raise self.post_response
        return self.post_response

    def close(self) -> None:
        pass


class FakeBrowser:
    def __init__(self, artifacts, markup: str = "<html></html>", navigate_error: Exception | None = None) -> None:
        self._artifacts = artifacts
        self._markup = markup
        self.navigate_error = navigate_error
        self.visited: list[str] = []
        self.closed = False

    def __enter__(self) -> "FakeBrowser":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.closed = True
        return False

    def navigate(self, url: str, timeout_s: float | None = None) -> str:
        self.visited.append(url)
        if self.navigate_error is not None:
            raise self.navigate_error
        return url

    def artifacts(self):
        return self._artifacts

    def rendered_markup(self) -> str:
        return self._markup


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.setattr(config, "APP_SECRET", "itison")
    monkeypatch.setattr(config, "DEBUG_DIR", str(tmp_path / "debug"))
    monkeypatch.setattr(config, "TARGET_PAGE", 2)
    monkeypatch.setattr(config, "VALUE_COLUMN", "value")
    monkeypatch.setattr(config, "DEMO_ANSWER", "demo-answer-from-server")
    return config
