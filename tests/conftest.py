"""Pytest shared fixtures for CIAM client tests."""
import json
import pathlib
import sys
from types import SimpleNamespace
from typing import Any, Optional

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from ciam.core.client import Ciam, CiamClient

BASE_URL = "http://ciam.test"
TOKEN = "test-token"


def make_response(status_code: int = 200, json_body: Any = None, text: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response carrying either a JSON or a plain text body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.encoding = "utf-8"
    if text is not None:
        resp._content = text.encode("utf-8")
    elif json_body is not None:
        resp._content = json.dumps(json_body).encode("utf-8")
    else:
        resp._content = b""
    return resp


class FakeHttp:
    """Records outbound calls and replays queued responses in order."""

    def __init__(self):
        self.calls = []
        self._responses = []

    def queue(self, status_code: int = 200, json_body: Any = None, text: Optional[str] = None) -> None:
        self._responses.append(make_response(status_code, json_body, text))

    def handler(self, method: str):
        def _call(url, *args, **kwargs):
            self.calls.append(SimpleNamespace(method=method, url=url, **kwargs))
            if not self._responses:
                raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")
            return self._responses.pop(0)
        return _call


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from hitting a live CIAM instance.

    Integration tests are explicitly marked with @pytest.mark.integration and
    are allowed to perform real HTTP calls by skipping this fixture.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _refuse(url, *args, **kwargs):
        raise RuntimeError(f"Unexpected network access in tests: {url}")

    for method in ("get", "post", "delete"):
        monkeypatch.setattr(requests, method, _refuse)


@pytest.fixture()
def http(monkeypatch):
    """Stub requests.get/post/delete with a recorder that replays queued responses."""
    fake = FakeHttp()
    for method in ("get", "post", "delete"):
        monkeypatch.setattr(requests, method, fake.handler(method.upper()))
    return fake


@pytest.fixture()
def client():
    return CiamClient(TOKEN, BASE_URL)


@pytest.fixture()
def ciam(client):
    return Ciam.from_client(client)
