"""Utility helpers for the CineSage service."""

from __future__ import annotations

import re


YEAR_PREFIX_RE = re.compile(r"^\s*(\d{4})")
THINK_BLOCK_RE = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)

INSIGHTS_HEADING = "**AI-Powered Insights**"


def parse_year(value: object) -> int:
    """Return the year of a ``YYYY-MM-DD`` style date, or ``0`` when unknown."""

    if isinstance(value, int) and not isinstance(value, bool):
        return value if value > 0 else 0
    if not isinstance(value, str):
        return 0
    match = YEAR_PREFIX_RE.match(value)
    if not match:
        return 0
    year = int(match.group(1))
    return year if year > 0 else 0


def decade_of(year: int) -> int:
    """Return the decade bucket for a year; unknown years land in ``0``."""

    if year <= 0:
        return 0
    return year // 10 * 10


def strip_reasoning(content: str) -> str:
    """Remove ``<think>`` blocks emitted by reasoning models."""

    return THINK_BLOCK_RE.sub("", content).strip()
