import logging
import re
from dataclasses import dataclass

from .sequences import (
    CursorDown,
    CursorForward,
    MoveCursor,
    QueryCursorPosition,
    encode,
)
from .terminal import Terminal, TerminalError

logger = logging.getLogger(__name__)

# Further than any real terminal, so the cursor gets clamped to the corner
FAR_AWAY = 9999
MAX_REPLY_LENGTH = 31

CURSOR_POSITION_REPLY = re.compile(rb"(\d+);(\d+)R?")


class GeometryError(TerminalError):
    pass


@dataclass(frozen=True)
class ScreenGeometry:
    rows: int
    cols: int


def discover(terminal: Terminal) -> ScreenGeometry:
    size = terminal.window_size()

    if size is None:
        logger.info("window size unavailable, probing with the cursor")
        rows, cols = probe_screen_size(terminal)
    else:
        rows, cols = size

    if rows <= 0 or cols <= 0:
        raise GeometryError("discover", f"invalid screen size {rows}x{cols}")

    logger.info("screen size is %dx%d", rows, cols)
    return ScreenGeometry(rows, cols)


def probe_screen_size(terminal: Terminal) -> tuple[int, int]:
    original_row, original_col = query_cursor_position(terminal)

    write_exact(
        terminal,
        encode(CursorForward(FAR_AWAY), CursorDown(FAR_AWAY)),
        "probe_screen_size",
    )
    rows, cols = query_cursor_position(terminal)

    write_exact(
        terminal,
        MoveCursor(original_row, original_col).encode(),
        "probe_screen_size",
    )
    return rows, cols


def query_cursor_position(terminal: Terminal) -> tuple[int, int]:
    write_exact(terminal, QueryCursorPosition().encode(), "query_cursor_position")

    reply = bytearray()
    while len(reply) < MAX_REPLY_LENGTH:
        byte = terminal.read_byte()
        if byte is None:
            break
        reply.append(byte)
        if byte == ord("R"):
            break

    if reply[:2] != b"\x1b[":
        raise GeometryError(
            "query_cursor_position", f"unexpected reply {bytes(reply)!r}"
        )

    match = CURSOR_POSITION_REPLY.match(reply, 2)
    if match is None:
        raise GeometryError(
            "query_cursor_position", f"malformed reply {bytes(reply)!r}"
        )

    return int(match[1]), int(match[2])


def write_exact(terminal: Terminal, data: bytes, operation: str) -> None:
    written = terminal.write(data)
    if written != len(data):
        raise GeometryError(operation, f"short write ({written}/{len(data)} bytes)")
