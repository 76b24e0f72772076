import logging
from abc import ABC, abstractmethod
from typing import Protocol, override

from .buffer import PaintBuffer
from .geometry import ScreenGeometry
from .sequences import EraseLine, MoveCursor, MoveHome
from .terminal import Terminal

logger = logging.getLogger(__name__)


class Cursor(Protocol):
    @property
    def row(self) -> int: ...

    @property
    def col(self) -> int: ...


class FrameContent(ABC):
    @abstractmethod
    def row(self, y: int, geometry: ScreenGeometry) -> bytes:
        """Content of screen row `y`, counting from 1."""
        raise NotImplementedError


class Fill(FrameContent):
    fill: bytes

    def __init__(self, fill: bytes = b"~"):
        self.fill = fill

    @override
    def row(self, y: int, geometry: ScreenGeometry) -> bytes:
        return self.fill


class Welcome(Fill):
    """Filler rows with a centered banner a third of the way down."""

    banner: bytes | None

    def __init__(self, fill: bytes = b"~", banner: bytes | None = None):
        super().__init__(fill)
        self.banner = banner

    def banner_row(self, geometry: ScreenGeometry) -> int:
        return geometry.rows // 3

    @override
    def row(self, y: int, geometry: ScreenGeometry) -> bytes:
        if self.banner and y == self.banner_row(geometry):
            return center_banner(self.banner, geometry.cols)
        return super().row(y, geometry)


def center_banner(text: bytes, width: int) -> bytes:
    if len(text) >= width:
        return text[:width]

    padding = (width - len(text)) // 2
    return b" " * padding + text


class FrameRenderer:
    terminal: Terminal
    buffer: PaintBuffer

    def __init__(self, terminal: Terminal, buffer: PaintBuffer | None = None):
        self.terminal = terminal
        self.buffer = PaintBuffer() if buffer is None else buffer

    def render(
        self, geometry: ScreenGeometry, cursor: Cursor, content: FrameContent
    ) -> int:
        self.buffer.append_sequence(MoveHome())

        for y in range(1, geometry.rows + 1):
            self.buffer.append_sequence(EraseLine())
            self.buffer.append(content.row(y, geometry)[: geometry.cols])
            # a newline after the last row would scroll the screen
            if y < geometry.rows:
                self.buffer.append(b"\r\n")

        self.buffer.append_sequence(MoveCursor(cursor.row, cursor.col))

        try:
            length = len(self.buffer)
            written = self.buffer.flush(self.terminal)
        finally:
            self.buffer.reset()

        if written != length:
            logger.warning("short write while rendering: %d/%d bytes", written, length)
        return written
