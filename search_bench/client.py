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

"""Search endpoint HTTP client using urllib.

Sends one GET per query, with the whole query percent-encoded into the
path, and returns status, content type and body text. Non-2xx answers are
returned, not raised, so the caller can classify them.
No domain logic — pure transport layer.
"""

from __future__ import annotations

import http.client
import ssl
import time
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from email.message import Message

import certifi

from search_bench.config import EndpointConfig
from search_bench.logger import get_logger
from search_bench.result import Fail, Ok, Result

log = get_logger(__name__)

_CHUNK_SIZE = 64 * 1024

_ssl_ctx = ssl.create_default_context(cafile=certifi.where())


@dataclass(frozen=True, slots=True)
class Exchange:
    """One completed request/response pair."""

    url: str
    status: int
    content_type: str
    body: str
    duration_ms: int


def encode_query(query: str) -> str:
    """Percent-encode a query so it survives as a single path segment."""
    return urllib.parse.quote(query, safe="")


def build_url(endpoint: EndpointConfig, query: str) -> str:
    return (
        f"{endpoint.scheme}://{endpoint.host}:{endpoint.port}"
        f"/{endpoint.service_path}/{encode_query(query)}"
    )


def _read_body(resp) -> bytes:
    chunks: list[bytes] = []
    for chunk in iter(lambda: resp.read(_CHUNK_SIZE), b""):
        chunks.append(chunk)
    # read(amt) returns b"" on a short stream instead of raising
    remaining = getattr(resp, "length", None)
    if remaining:
        raise http.client.IncompleteRead(b"".join(chunks), remaining)
    return b"".join(chunks)


def _decode(raw: bytes, headers: Message) -> str:
    charset = headers.get_content_charset() or "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def fetch(endpoint: EndpointConfig, query: str) -> Result[Exchange]:
    """GET one query and read its response body to the end."""
    url = build_url(endpoint, query)
    req = urllib.request.Request(url, headers={"Accept": endpoint.accept}, method="GET")
    context = _ssl_ctx if endpoint.scheme == "https" else None

    started = time.perf_counter()
    try:
        try:
            resp = urllib.request.urlopen(req, timeout=endpoint.timeout, context=context)
        except urllib.error.HTTPError as exc:
            # urllib raises on non-2xx; the error object is still a readable response
            resp = exc
        with resp:
            status = resp.getcode()
            headers = resp.headers
            raw = _read_body(resp)
    except urllib.error.URLError as exc:
        return Fail(error="connection error", context=str(exc.reason))
    except TimeoutError:
        return Fail(error="timeout", context=f"no response within {endpoint.timeout}s")
    except (http.client.HTTPException, ConnectionError) as exc:
        return Fail(error="transport error", context=f"{type(exc).__name__}: {exc}")
    duration_ms = round((time.perf_counter() - started) * 1000)

    log.debug("GET %s → %d (%d bytes, %d ms)", url, status, len(raw), duration_ms)
    return Ok(data=Exchange(
        url=url,
        status=status,
        content_type=headers.get("Content-Type", ""),
        body=_decode(raw, headers),
        duration_ms=duration_ms,
    ))
