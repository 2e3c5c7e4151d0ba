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

"""Sequential batch runner — pure engine.

Walks the queue with a single cursor:
  1. GET the query at the cursor and wait for the full body
  2. Classify status + content type
  3. Parse the body as JSON and report summary, body and duration
  4. Advance the cursor by one

Exactly one request is in flight at a time. The first classification,
parse or transport error halts the batch; nothing is retried.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, TextIO

from search_bench.classifier import classify
from search_bench.client import Exchange, fetch
from search_bench.config import EndpointConfig, QueryDef, ReportConfig
from search_bench.logger import BatchSummary, get_logger
from search_bench.result import BatchResult, BatchStatus, Fail, Ok, Result

log = get_logger(__name__)

Fetcher = Callable[[EndpointConfig, str], Result[Exchange]]

_MISSING = "<missing>"


@dataclass
class Reporter:
    """Writes per-query outcomes to an output and an error stream."""

    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)

    def success(self, summary: Any, body: str, duration_ms: int, separator: str) -> None:
        if not isinstance(summary, str):
            summary = json.dumps(summary, ensure_ascii=False)
        print(summary, file=self.out)
        print(body, file=self.out)
        print(f"Duration in millis: {duration_ms}", file=self.out)
        print(separator, file=self.out, flush=True)

    def failure(self, message: str, body: str | None = None) -> None:
        print(message, file=self.err, flush=True)
        if body is not None:
            print(body, file=self.out, flush=True)


def parse_body(body: str) -> Result[Any]:
    try:
        return Ok(data=json.loads(body))
    except json.JSONDecodeError as exc:
        return Fail(error="parse error", context=str(exc))


def summary_value(payload: Any, field_name: str) -> Any:
    """Pick the progress field from a parsed payload, if it is an object."""
    if isinstance(payload, dict) and field_name in payload:
        return payload[field_name]
    return _MISSING


def _run_one(
    item: QueryDef,
    endpoint: EndpointConfig,
    report: ReportConfig,
    reporter: Reporter,
    fetcher: Fetcher,
) -> Result[int]:
    """Execute a single query. Ok carries the duration in milliseconds."""
    exchange_result = fetcher(endpoint, item.query)
    if not exchange_result.ok:
        reporter.failure(f"Got error: {exchange_result.describe()}")
        return exchange_result

    exchange: Exchange = exchange_result.data

    verdict = classify(exchange.status, exchange.content_type)
    if not verdict.ok:
        # body was already drained by the client; surface it for diagnosis
        reporter.failure(f"Request failed — {verdict.describe()}", body=exchange.body)
        return verdict

    parsed = parse_body(exchange.body)
    if not parsed.ok:
        reporter.failure(parsed.describe())
        return parsed

    reporter.success(
        summary=summary_value(parsed.data, report.summary_field),
        body=exchange.body,
        duration_ms=exchange.duration_ms,
        separator=report.separator,
    )
    return Ok(data=exchange.duration_ms)


def run_batch(
    queue: Sequence[QueryDef],
    endpoint: EndpointConfig,
    *,
    start: int = 0,
    report: ReportConfig | None = None,
    reporter: Reporter | None = None,
    fetcher: Fetcher = fetch,
) -> BatchResult:
    """Run queue[start:] strictly in order, halting on the first error.

    Args:
        queue: Ordered query definitions. Treated as read-only.
        endpoint: Target host, port and service path.
        start: Initial cursor; a cursor at or past the end runs nothing.
        report: Summary field and separator used for progress output.
        reporter: Output sink; defaults to stdout/stderr.
        fetcher: Transport; injectable for tests.
    """
    if start < 0:
        raise ValueError(f"start must be >= 0, got {start}")

    queue = tuple(queue)
    report = report or ReportConfig()
    reporter = reporter or Reporter()
    summary = BatchSummary(total=max(len(queue) - start, 0))

    cursor = start
    while cursor < len(queue):
        item = queue[cursor]
        log.info("Query %d/%d: %s", cursor + 1, len(queue), item.name)

        outcome = _run_one(item, endpoint, report, reporter, fetcher)
        if not outcome.ok:
            summary.record_failure()
            log.error("Query %d (%s) failed: %s — halting batch", cursor + 1, item.name, outcome.describe())
            log.info(summary.report())
            return BatchResult(
                status=BatchStatus.HALTED,
                total=len(queue),
                completed=cursor - start,
                halted_at=cursor,
                failure=outcome,
            )

        summary.record_ok(outcome.data)
        log.info("Query %d complete in %d ms", cursor + 1, outcome.data)
        cursor += 1

    log.info(summary.report())
    return BatchResult(status=BatchStatus.COMPLETED, total=len(queue), completed=cursor - start)
