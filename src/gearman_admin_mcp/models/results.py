"""Transaction outcome values."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConnectFailure:
    """The TCP connect did not succeed.

    Returned by every command in place of its result when the server is
    unreachable. It is falsy, so ``if not admin.status(): ...`` reads
    naturally, while still being distinguishable from an empty result
    via ``isinstance``.
    """

    reason: str

    def __bool__(self) -> bool:
        return False
