"""Protocol layer: response framing, request builders, and response decoding."""

from .framing import read_response, parse_error_line, TERMINATOR
from .commands import Command, build_command
