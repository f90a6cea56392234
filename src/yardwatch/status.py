"""Zone status enum."""

from __future__ import annotations

from enum import StrEnum


class YardStatus(StrEnum):
    """Where an asset is relative to the yard.

    Values are the human-readable labels shown to operators.
    """

    IN_YARD = "In Yard"
    OUT_FOR_JOB = "Out for Job"
