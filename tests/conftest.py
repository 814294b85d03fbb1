from __future__ import annotations

import json
from typing import Any

import pytest
import requests
from pytest import MonkeyPatch

_CI_VARIABLES = [
    "GITHUB_EVENT_NAME",
    "GITHUB_REF_NAME",
    "GITHUB_OUTPUT",
    "SPHINX_VERSION",
    "SPHINX_RELEASE",
    "SPHINX_URL",
    "DOCUMENTATION_DOMAIN",
    "BUNNY_PULLZONE",
    "BUNNY_API_KEY",
]

BASE_URL = "https://docs.example.org"


class DummyResponse:
    def __init__(self, status_code: int = 200, content: bytes = b"") -> None:
        self.status_code = status_code
        self.content = content

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


def manifest(*pairs: tuple[str, str], preferred: str | None = None) -> bytes:
    return json.dumps(
        [
            {
                "name": name,
                "version": release,
                "url": f"{BASE_URL}/{name}/",
                "preferred": name == preferred,
            }
            for name, release in pairs
        ]
    ).encode()


class DummyServer:
    """Stand-in for `requests.get` serving a single manifest."""

    def __init__(self) -> None:
        self.response = DummyResponse(content=b"[]")
        self.requested: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> DummyResponse:
        self.requested.append((url, kwargs))
        return self.response


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: MonkeyPatch) -> None:
    for name in _CI_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def dummy_server(monkeypatch: MonkeyPatch) -> DummyServer:
    server = DummyServer()
    monkeypatch.setattr(requests, "get", server.get)
    return server
