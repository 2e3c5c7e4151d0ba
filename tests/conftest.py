# SPDX-License-Identifier: MIT
#
#  █████╗ ██████╗  █████╗ ███████╗
# ██╔══██╗██╔══██╗██╔══██╗██╔════╝
# ███████║██████╔╝███████║███████╗
# ██╔══██║██╔══██╗██╔══██║╚════██║
# ██║  ██║██║  ██║██║  ██║███████║
# ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
# Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>
#
# Licensed under the MIT License.
# See LICENSE and THIRD_PARTY_LICENSES for details.
"""Pytest fixtures: a scripted local search endpoint and config builders."""

from __future__ import annotations

import socket
import threading
import time
import urllib.parse
from collections.abc import Iterator
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

from search_bench.config import EndpointConfig, QueryDef, ReportConfig

SERVICE_PATH = "v2/searchextended"


@dataclass
class Reply:
    status: int = 200
    content_type: str = "application/json"
    body: str = '{"schema:numberOfItems": 1}'
    delay: float = 0.0


@dataclass
class ScriptedEndpoint:
    """Answers GETs from a list of replies, in order, and records each query."""

    host: str
    port: int
    replies: list[Reply] = field(default_factory=list)
    received: list[str] = field(default_factory=list)
    raw_paths: list[str] = field(default_factory=list)

    def endpoint(self, timeout: float | None = 5.0) -> EndpointConfig:
        return EndpointConfig(
            host=self.host,
            port=self.port,
            service_path=SERVICE_PATH,
            timeout=timeout,
        )


def _handler_for(state: ScriptedEndpoint) -> type[BaseHTTPRequestHandler]:
    class Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802
            state.raw_paths.append(self.path)
            prefix = f"/{SERVICE_PATH}/"
            encoded = self.path[len(prefix):] if self.path.startswith(prefix) else ""
            state.received.append(urllib.parse.unquote(encoded))

            index = len(state.received) - 1
            reply = state.replies[index] if index < len(state.replies) else Reply()
            payload = reply.body.encode("utf-8")
            if reply.delay:
                time.sleep(reply.delay)

            try:
                self.send_response(reply.status)
                if reply.content_type:
                    self.send_header("Content-Type", reply.content_type)
                self.send_header("Content-Length", str(len(payload)))
                self.end_headers()
                self.wfile.write(payload)
            except (BrokenPipeError, ConnectionResetError):
                # client gave up waiting
                pass

        def log_message(self, format, *args) -> None:  # noqa: A002
            pass

    return Handler


@pytest.fixture
def search_server() -> Iterator[ScriptedEndpoint]:
    state = ScriptedEndpoint(host="127.0.0.1", port=0)
    server = ThreadingHTTPServer(("127.0.0.1", 0), _handler_for(state))
    state.port = server.server_address[1]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield state
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def closed_port() -> int:
    """A localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def report() -> ReportConfig:
    return ReportConfig()


def make_queue(*queries: str) -> tuple[QueryDef, ...]:
    return tuple(QueryDef(name=f"q{i}", query=q) for i, q in enumerate(queries, start=1))


WORKFLOW_YAML = """
endpoint:
  host: localhost
  port: 3333
  service_path: /v2/searchextended/
variables:
  ontology_host: "0.0.0.0:3333"
queries:
  - name: books
    description: all books
    query: |
      PREFIX incunabula: <http://{{ontology_host}}/ontology/0803/incunabula/simple/v2#>
      CONSTRUCT { ?b knora-api:isMainResource true . } WHERE { ?b a incunabula:book . }
  - query: "SELECT * WHERE { ?s ?p ?o }"
"""


@pytest.fixture
def workflow_file(tmp_path: Path) -> Path:
    path = tmp_path / "workflow.yaml"
    path.write_text(WORKFLOW_YAML, encoding="utf-8")
    return path


@dataclass
class TruncatingEndpoint:
    """Promises a longer body than it sends, then drops the connection."""

    host: str
    port: int
    declared_length: int = 500
    body: bytes = b'{"schema:numberOfItems": 1}'

    def endpoint(self) -> EndpointConfig:
        return EndpointConfig(host=self.host, port=self.port, service_path=SERVICE_PATH, timeout=5.0)


@pytest.fixture
def truncating_server() -> Iterator[TruncatingEndpoint]:
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen()
    listener.settimeout(5)
    state = TruncatingEndpoint(host="127.0.0.1", port=listener.getsockname()[1])

    def serve() -> None:
        try:
            conn, _ = listener.accept()
        except OSError:
            return
        with conn:
            request = b""
            while b"\r\n\r\n" not in request:
                chunk = conn.recv(4096)
                if not chunk:
                    return
                request += chunk
            head = (
                "HTTP/1.1 200 OK\r\n"
                "Content-Type: application/json\r\n"
                f"Content-Length: {state.declared_length}\r\n"
                "Connection: close\r\n\r\n"
            ).encode("ascii")
            conn.sendall(head + state.body)

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        yield state
    finally:
        thread.join(timeout=5)
        listener.close()
