"""Per-function queue status model."""

from __future__ import annotations

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class FunctionStatus:
    """One line of ``status`` output."""

    function: str
    in_queue: int
    jobs_running: int
    capable_workers: int

    def to_dict(self) -> dict:
        return asdict(self)
