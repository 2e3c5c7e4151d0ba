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

"""Loads a workflow YAML file into typed dataclasses.

Pure loader — no request logic. The YAML structure IS the harness
contract: one endpoint, report options, template variables and an
ordered list of queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from search_bench.result import Fail, Ok, Result

DEFAULT_SUMMARY_FIELD = "schema:numberOfItems"
DEFAULT_SEPARATOR = "++++++++++"


# ── Endpoint ───────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class EndpointConfig:
    host: str
    port: int
    service_path: str
    scheme: str = "http"
    accept: str = "application/json"
    timeout: float | None = None


# ── Report ─────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ReportConfig:
    summary_field: str = DEFAULT_SUMMARY_FIELD
    separator: str = DEFAULT_SEPARATOR


# ── Queries ────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class QueryDef:
    """One batch item. Only `query` is sent; name/description are for logs."""
    name: str
    query: str
    description: str = ""


# ── Top-level ──────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class HarnessConfig:
    endpoint: EndpointConfig
    report: ReportConfig
    queries: tuple[QueryDef, ...]
    variables: dict[str, str] = field(default_factory=dict)

    def with_overrides(
        self,
        host: str | None = None,
        port: int | None = None,
        timeout: float | None = None,
    ) -> HarnessConfig:
        """Return a copy with CLI overrides applied to the endpoint."""
        changes: dict[str, Any] = {}
        if host is not None:
            changes["host"] = host
        if port is not None:
            changes["port"] = port
        if timeout is not None:
            changes["timeout"] = timeout
        if not changes:
            return self
        return replace(self, endpoint=replace(self.endpoint, **changes))


# ── Loader ─────────────────────────────────────────────────────

def _build_endpoint(raw: dict[str, Any]) -> EndpointConfig:
    timeout = raw.get("timeout")
    if timeout is not None and float(timeout) <= 0:
        raise ValueError(f"timeout must be > 0, got {timeout}")
    return EndpointConfig(
        host=raw["host"],
        port=int(raw["port"]),
        service_path=str(raw["service_path"]).strip("/"),
        scheme=raw.get("scheme", "http"),
        accept=raw.get("accept", "application/json"),
        timeout=float(timeout) if timeout is not None else None,
    )


def _build_report(raw: dict[str, Any]) -> ReportConfig:
    return ReportConfig(
        summary_field=raw.get("summary_field", DEFAULT_SUMMARY_FIELD),
        separator=raw.get("separator", DEFAULT_SEPARATOR),
    )


def _build_queries(raw_queries: list[dict[str, Any]]) -> tuple[QueryDef, ...]:
    for i, q in enumerate(raw_queries, start=1):
        if not isinstance(q["query"], str):
            raise TypeError(f"query {i} must be a string, got {type(q['query']).__name__}")
    return tuple(
        QueryDef(
            name=q.get("name", f"query-{i}"),
            query=q["query"],
            description=q.get("description", ""),
        )
        for i, q in enumerate(raw_queries, start=1)
    )


def load_config(path: Path) -> Result[HarnessConfig]:
    """Load a workflow YAML into HarnessConfig. No validation beyond structure."""
    if not path.exists():
        return Fail(error=f"Config file not found: {path}")

    try:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        return Fail(error=f"YAML parse error: {exc}", context=str(path))

    try:
        config = HarnessConfig(
            endpoint=_build_endpoint(raw["endpoint"]),
            report=_build_report(raw.get("report") or {}),
            queries=_build_queries(raw.get("queries") or []),
            variables={str(k): str(v) for k, v in (raw.get("variables") or {}).items()},
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        return Fail(error=f"Config structure error: {exc!r}", context=str(path))

    return Ok(data=config)
