import sys
from typing import Any, Dict, List, Optional

import httpx
import pytest
from loguru import logger

MANIFEST_URL = "https://references.example.com/manifest.json"


class FakeRemote:
    """Serves canned json responses by url and records every request"""

    def __init__(self):
        self.routes: Dict[str, Optional[Dict[str, Any]]] = {}
        self.calls: List[str] = []

    def add(self, url: str, json: Any = None, status_code: int = 200, text: Optional[str] = None) -> None:
        if text is not None:
            self.routes[url] = {"status_code": status_code, "text": text}
        else:
            self.routes[url] = {"status_code": status_code, "json": json}

    def fail(self, url: str) -> None:
        self.routes[url] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        if url not in self.routes:
            return httpx.Response(404, text=f"no route for {url}")
        route = self.routes[url]
        if route is None:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(**route)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def add_service(self, name: str, ping: bool = True) -> str:
        """Serve an api reference for name.example.com and return its url"""
        reference_url = f"https://references.example.com/{name}/v1/api.json"
        entries = [{"name": "listThings", "route": "/things"}]
        if ping:
            entries.append({"name": "ping", "route": "/ping"})
        self.add(reference_url, json={"baseUrl": f"https://{name}.example.com/v1", "entries": entries})
        return reference_url

    def add_manifest(self, *names: str) -> None:
        self.add(MANIFEST_URL, json={name.capitalize(): self.add_service(name) for name in names})


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def client(remote: FakeRemote):
    with remote.client() as c:
        yield c


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)
