"""Decoders turning collected response lines into results."""

from __future__ import annotations

import logging
import re

from ..errors import MalformedResponseError
from ..models.status import FunctionStatus
from ..models.workers import WorkerInfo
from .framing import TERMINATOR

logger = logging.getLogger(__name__)

STATUS_FIELDS = 4
VERSION_PREFIX_LENGTH = 3
SUCCESS = "OK"

# FD IP-ADDRESS CLIENT-ID : FUNCTION ...
WORKER_LINE = re.compile(r"^(\d+)[ \t](.*?)[ \t](.*?) : ?(.*)")


def parse_status_line(line: str) -> FunctionStatus | None:
    """Parse ``<function>\\t<queued>\\t<running>\\t<workers>``.

    Returns None if the field count is wrong or a count is not an integer.
    """
    fields = line.split("\t")
    if len(fields) != STATUS_FIELDS:
        return None
    function, in_queue, running, capable = fields
    try:
        return FunctionStatus(
            function=function,
            in_queue=int(in_queue),
            jobs_running=int(running),
            capable_workers=int(capable),
        )
    except ValueError:
        return None


def parse_status(lines: list[str]) -> dict[str, FunctionStatus]:
    """Build the function status map; a repeated name keeps its last line.

    Malformed lines are skipped. A lone terminator, which is how a server
    with no functions answers, is skipped silently.
    """
    status: dict[str, FunctionStatus] = {}
    for line in lines:
        if line == TERMINATOR:
            continue
        entry = parse_status_line(line)
        if entry is None:
            logger.warning("Skipping malformed status line: %r", line)
            continue
        status[entry.function] = entry
    return status


def parse_version(lines: list[str]) -> str:
    """Strip the fixed three character prefix (``OK ``) from the last line."""
    if not lines:
        raise MalformedResponseError("Empty response to version command")
    return lines[-1][VERSION_PREFIX_LENGTH:]


def parse_worker_line(line: str) -> WorkerInfo | None:
    match = WORKER_LINE.match(line)
    if match is None:
        return None
    fd, host, job_handle, functions = match.groups()
    return WorkerInfo(
        file_descriptor=int(fd),
        host=host,
        job_handle=job_handle,
        functions=functions,
    )


def parse_workers(lines: list[str]) -> list[WorkerInfo]:
    """Decode ``workers`` output; lines that do not match are ignored."""
    workers: list[WorkerInfo] = []
    for line in lines:
        worker = parse_worker_line(line)
        if worker is None:
            logger.debug("Ignoring unrecognised workers line: %r", line)
            continue
        workers.append(worker)
    return workers


def parse_ok(lines: list[str]) -> bool:
    """True iff the last collected line is exactly ``OK``."""
    return bool(lines) and lines[-1] == SUCCESS
