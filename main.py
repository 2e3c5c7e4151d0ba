# SPDX-License-Identifier: MIT
"""
 █████╗ ██████╗  █████╗ ███████╗
██╔══██╗██╔══██╗██╔══██╗██╔════╝
███████║██████╔╝███████║███████╗
██╔══██║██╔══██╗██╔══██║╚════██║
██║  ██║██║  ██║██║  ██║███████║
╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>

Licensed under the MIT License.
See LICENSE and THIRD_PARTY_LICENSES for details.

Search Bench — sequential query harness

Fires a batch of search queries from a YAML workflow at one HTTP
endpoint, strictly one after another. Each response is classified,
parsed as JSON and timed; the first failure halts the batch.

Usage: python main.py --workflow=workflows/extended-search.yaml
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from search_bench.config import load_config
from search_bench.logger import get_logger
from search_bench.queries import build_queue
from search_bench.runner import run_batch

log = get_logger("main")


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="search-bench",
        description="Run search queries sequentially and report timings",
    )
    parser.add_argument(
        "--workflow",
        type=Path,
        required=True,
        help="Path to workflow YAML (e.g. workflows/extended-search.yaml)",
    )
    parser.add_argument("--start", type=int, default=0, help="Queue index to start from (default: 0)")
    parser.add_argument("--host", help="Override endpoint host")
    parser.add_argument("--port", type=int, help="Override endpoint port")
    parser.add_argument("--timeout", type=float, help="Per-request deadline in seconds (default: none)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)

    if args.start < 0:
        log.error("--start must be >= 0")
        return 1
    if args.timeout is not None and args.timeout <= 0:
        log.error("--timeout must be > 0")
        return 1

    workflow = args.workflow.resolve()
    cfg_result = load_config(workflow)
    if not cfg_result.ok:
        log.error(cfg_result.describe())
        return 1

    config = cfg_result.data.with_overrides(host=args.host, port=args.port, timeout=args.timeout)
    queue = build_queue(config)

    log.info("Workflow: %s", workflow.name)
    log.info(
        "Endpoint: %s://%s:%d/%s",
        config.endpoint.scheme,
        config.endpoint.host,
        config.endpoint.port,
        config.endpoint.service_path,
    )

    result = run_batch(queue, config.endpoint, start=args.start, report=config.report)
    if not result.ok:
        log.error(
            "Batch halted at query %d after %d completed: %s",
            result.halted_at + 1,
            result.completed,
            result.failure.describe(),
        )
        return 1

    log.info("Batch completed: %d queries", result.completed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
