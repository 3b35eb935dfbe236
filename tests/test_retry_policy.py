"""
Retry behaviour of the Syndicate dispatcher against a real local HTTP server.

requests_mock bypasses the transport adapter, so these tests talk to a
throwaway server on 127.0.0.1 to exercise the urllib3 Retry policy.
"""
import json
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import patch

import pytest
from urllib3.util.retry import Retry

from idregistry_sdk.config import RelayConfig
from idregistry_sdk.dispatch import SyndicateDispatcher
from idregistry_sdk.exceptions import (
    DispatchConnectionError, DispatchResponseError, DispatchTimeoutError
)
from idregistry_sdk.payload import build_register_for_request
from conftest import TEST_API_KEY, TEST_PROJECT_ID

OK_BODY = {"transactionId": "tx-local", "projectId": TEST_PROJECT_ID}


class _RelayHandler(BaseHTTPRequestHandler):
    """Answers POSTs from the server's scripted responses, recording each path."""

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        self.rfile.read(length)
        self.server.paths.append(self.path)

        status, body, delay = self.server.responses.pop(0) if self.server.responses else (200, OK_BODY, 0)
        if delay:
            self.server.release.wait(delay)

        payload = json.dumps(body).encode()
        try:
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)
        except (BrokenPipeError, ConnectionResetError):
            # client gave up waiting
            pass

    def log_message(self, format, *args):
        pass


def _start_server(port=0, responses=None):
    server = ThreadingHTTPServer(("127.0.0.1", port), _RelayHandler)
    server.daemon_threads = True
    server.paths = []
    server.responses = list(responses or [])
    server.release = threading.Event()
    threading.Thread(target=server.serve_forever, daemon=True).start()
    return server


def _stop_server(server):
    server.release.set()
    server.shutdown()
    server.server_close()


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def _config(port, **kwargs):
    kwargs.setdefault("retry_count", 3)
    return RelayConfig(
        api_key=TEST_API_KEY,
        project_id=TEST_PROJECT_ID,
        api_url=f"http://127.0.0.1:{port}",
        **kwargs
    )


@pytest.fixture(autouse=True)
def _fast_sleep(monkeypatch):
    """Skip Retry backoff sleeps."""
    monkeypatch.setattr(time, "sleep", lambda *_a, **_kw: None)


@pytest.fixture
def relay_server():
    servers = []

    def _make(**kwargs):
        server = _start_server(**kwargs)
        servers.append(server)
        return server

    yield _make
    for server in servers:
        _stop_server(server)


def _request(config, registration_args):
    return build_register_for_request(registration_args, config)


def test_success_sends_once(relay_server, registration_args):
    server = relay_server()
    config = _config(server.server_address[1])

    with SyndicateDispatcher(config) as dispatcher:
        handle = dispatcher.send(_request(config, registration_args))

    assert handle.transaction_id == "tx-local"
    assert server.paths == ["/transact/sendTransaction"]


@pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
def test_server_error_is_not_resubmitted(relay_server, registration_args, status):
    """A delivered request that fails is surfaced, never sent again."""
    server = relay_server(responses=[(status, {"error": "relay hiccup"}, 0)])
    config = _config(server.server_address[1])

    with SyndicateDispatcher(config) as dispatcher:
        with pytest.raises(DispatchResponseError) as exc_info:
            dispatcher.send(_request(config, registration_args))

    assert exc_info.value.status_code == status
    assert server.paths == ["/transact/sendTransaction"]


def test_read_timeout_is_not_resubmitted(relay_server, registration_args):
    server = relay_server(responses=[(200, OK_BODY, 5)])
    config = _config(server.server_address[1], timeout=0.3)

    with SyndicateDispatcher(config) as dispatcher:
        with pytest.raises(DispatchTimeoutError):
            dispatcher.send(_request(config, registration_args))

    assert server.paths == ["/transact/sendTransaction"]


def test_refused_connection_is_retried(registration_args):
    port = _free_port()
    config = _config(port, retry_count=2)
    original_increment = Retry.increment

    with patch.object(Retry, "increment", autospec=True, side_effect=original_increment) as spy:
        with SyndicateDispatcher(config) as dispatcher:
            with pytest.raises(DispatchConnectionError, match="Failed to reach relay"):
                dispatcher.send(_request(config, registration_args))

    # Two retries, then the third failure exhausts the budget
    assert spy.call_count == 3


def test_refused_connection_recovers_and_sends_once(relay_server, registration_args):
    """The relay comes up between attempts; the request lands exactly once."""
    port = _free_port()
    config = _config(port)
    original_increment = Retry.increment
    started = []

    def _increment(retry, *args, **kwargs):
        if not started:
            started.append(relay_server(port=port))
        return original_increment(retry, *args, **kwargs)

    with patch.object(Retry, "increment", autospec=True, side_effect=_increment):
        with SyndicateDispatcher(config) as dispatcher:
            handle = dispatcher.send(_request(config, registration_args))

    assert handle.transaction_id == "tx-local"
    assert started[0].paths == ["/transact/sendTransaction"]
