"""Connected worker model."""

from __future__ import annotations

from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class WorkerInfo:
    """One line of ``workers`` output.

    ``file_descriptor`` is the server's local socket number and carries no
    meaning outside the server process. ``functions`` is kept exactly as the
    server sent it.
    """

    file_descriptor: int
    host: str
    job_handle: str
    functions: str

    @property
    def function_names(self) -> list[str]:
        return self.functions.split()

    def to_dict(self) -> dict:
        data = asdict(self)
        data["function_names"] = self.function_names
        return data
