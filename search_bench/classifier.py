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

"""Response classifier — decides success vs. failure from headers alone."""

from __future__ import annotations

from search_bench.result import Fail, Ok, Result

EXPECTED_STATUS = 200
EXPECTED_MEDIA_TYPE = "application/json"


def classify(status_code: int, content_type: str | None) -> Result[str]:
    """Accept only 200 with a JSON media type.

    The media type is a case-sensitive prefix match, so parameters such as
    `; charset=utf-8` are ignored. A bad status wins over a bad type.
    """
    content_type = content_type or ""
    if status_code != EXPECTED_STATUS:
        return Fail(error="unexpected status code", context=status_code)
    if not content_type.startswith(EXPECTED_MEDIA_TYPE):
        return Fail(error="unexpected content type", context=content_type)
    return Ok(data=content_type)
