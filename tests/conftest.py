"""
Pytest configuration and shared fixtures.
"""

import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Dict, Optional

import pytest
import requests

from iconmap.logger import get_logger, reset_logger


class FakeResponse:
    def __init__(self, status_code: int, headers: Optional[Dict[str, str]] = None):
        self.status_code = status_code
        self.headers = headers or {}


class FakeSession:
    """
    Stand-in for requests.Session.head().

    ``routes`` maps URL -> status code, an exception instance to raise,
    a (delay_seconds, status_code) tuple, or a
    (delay_seconds, status_code, location) tuple for redirects. Unknown URLs
    return 404.
    A route whose value is "hang" sleeps for the request timeout and then
    raises requests.exceptions.Timeout.
    """

    def __init__(self, routes: Dict[str, object]):
        self.routes = routes
        self.calls = []
        self.completed = []
        self._lock = threading.Lock()

    def head(self, url, timeout=None, allow_redirects=False):
        with self._lock:
            self.calls.append(url)
        route = self.routes.get(url, 404)
        try:
            if route == "hang":
                time.sleep(timeout)
                raise requests.exceptions.Timeout(f"HEAD {url} timed out")
            if isinstance(route, Exception):
                raise route
            if isinstance(route, tuple):
                delay, status = route[0], route[1]
                time.sleep(delay)
                headers = {"Location": route[2]} if len(route) > 2 else None
                return FakeResponse(status, headers)
            return FakeResponse(route)
        finally:
            with self._lock:
                self.completed.append(url)

    def count(self, url: str) -> int:
        return self.calls.count(url)


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Fresh global logger per test, file output only."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def make_session():
    def _make(routes):
        return FakeSession(routes)
    return _make


@pytest.fixture
def platforms_file(tmp_path) -> Path:
    """Catalog file with comments and blank lines."""
    path = tmp_path / "platforms.txt"
    path.write_text(
        "# DEX platforms\n"
        "uniswap-v3\n"
        "\n"
        "curve-dex\n"
        "  pendle  \n"
        "# trailing comment\n",
        encoding="utf-8",
    )
    return path


class IconHandler(BaseHTTPRequestHandler):
    """Answers HEAD from ``server.routes``: path -> (status, delay, location)."""

    def do_HEAD(self):
        status, delay, location = self.server.routes.get(self.path, (404, 0, None))
        if delay:
            time.sleep(delay)
        self.send_response(status)
        if location:
            self.send_header("Location", location)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format, *args):
        pass


class IconServer(ThreadingHTTPServer):
    daemon_threads = True
    block_on_close = False

    def handle_error(self, request, client_address):
        # Client gave up after its deadline; the late write fails
        pass


@pytest.fixture
def icon_server(monkeypatch):
    """Real HTTP server on localhost. Set ``routes`` and use ``base_url``."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    server = IconServer(("127.0.0.1", 0), IconHandler)
    server.routes = {}
    server.base_url = f"http://127.0.0.1:{server.server_address[1]}"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def closed_port() -> int:
    """A localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def legacy_icon_map_js() -> str:
    """Icon map as committed by the earlier JS build script (excerpt)."""
    return """/**
 * Platform Icon Registry for Pool Table Rendering
 *
 * Data Structure:
 * - Keys: project-id from DeFiLlama API (e.g. "uniswap-v3")
 * - Values: File extension (png/jpg) or null (icon unavailable)
 *
 * @example
 * // Check if icon exists before rendering
 * const ext = PLATFORM_ICONS["uniswap-v3"]
 * if (ext) {
 *   return <img src={`/icons/uniswap-v3.${ext}`} alt="Uniswap V3" />
 * }
 */
export const PLATFORM_ICONS = {
  'aerodrome-slipstream': 'jpg',
  'camelot-v3': 'png',
  'joe-v2.1': null, // Icon unavailable (CDN 404)
  koalaswap: 'jpg',
  pendle: 'jpg',
  'uniswap-v3': 'png',
  zealousswap: 'jpg',
  'zyberswap-amm': 'jpg',
}
"""
