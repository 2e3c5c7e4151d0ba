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

"""Query queue builder.

Replaces {{variable}} placeholders in query bodies with workflow values.
Pure string interpolation — the query itself stays opaque.
"""

from __future__ import annotations

from search_bench.config import HarnessConfig, QueryDef
from search_bench.logger import get_logger

log = get_logger(__name__)


def render_template(template: str, variables: dict[str, str]) -> str:
    """Replace all {{key}} placeholders in template with variable values."""
    rendered = template
    for key, value in variables.items():
        rendered = rendered.replace("{{" + key + "}}", value)
    return rendered


def build_queue(config: HarnessConfig) -> tuple[QueryDef, ...]:
    """Render every query in workflow order. The result is never mutated."""
    queue = tuple(
        QueryDef(
            name=q.name,
            query=render_template(q.query, config.variables),
            description=q.description,
        )
        for q in config.queries
    )
    log.info("Queued %d queries", len(queue))
    return queue
