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

"""Logger factory and per-batch counters.

Every module logs through get_logger() so the harness prints one
consistent, CI-friendly format on stderr.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

_FMT = "%(asctime)s [%(levelname)s] %(name)s — %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a stdlib logger configured with a consistent format."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FMT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


@dataclass
class BatchSummary:
    """Counts queries per outcome and total latency for one batch."""

    total: int
    ok: int = 0
    failed: int = 0
    elapsed_ms: int = 0

    def record_ok(self, duration_ms: int) -> None:
        self.ok += 1
        self.elapsed_ms += duration_ms

    def record_failure(self) -> None:
        self.failed += 1

    @property
    def skipped(self) -> int:
        return max(self.total - self.ok - self.failed, 0)

    def report(self) -> str:
        """Format a human-readable summary block."""
        lines: list[str] = ["", "Batch Summary", "=" * 40]
        lines.append(f"queries: {self.total}")
        lines.append(f"ok: {self.ok}  failed: {self.failed}  not run: {self.skipped}")
        if self.ok:
            lines.append(f"total: {self.elapsed_ms} ms  mean: {self.elapsed_ms // self.ok} ms")
        lines.append("=" * 40)
        return "\n".join(lines)
