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

"""Result values for the harness.

Ok[T] / Fail carry per-step outcomes without raising. BatchResult is the
terminal outcome of a whole run, so callers can tell a completed batch
from one that halted early.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying typed data."""

    data: T
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True, slots=True)
class Fail:
    """Failed result: short error reason plus the value that triggered it."""

    error: str
    context: Any = None
    ok: bool = field(default=False, init=False)

    def describe(self) -> str:
        if self.context is None or self.context == "":
            return self.error
        return f"{self.error}: {self.context}"


Result = Ok[T] | Fail


class BatchStatus(str, Enum):
    COMPLETED = "completed"
    HALTED = "halted"


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Terminal outcome of one harness run."""

    status: BatchStatus
    total: int
    completed: int
    halted_at: int | None = None
    failure: Fail | None = None

    @property
    def ok(self) -> bool:
        return self.status is BatchStatus.COMPLETED
