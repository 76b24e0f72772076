import re
from collections import deque
from typing import override

from kilo.tui.terminal import Terminal

SEQUENCE = re.compile(rb"\x1b\[(\d*)(?:;(\d*))?([A-Za-z])")


class FakeTerminal(Terminal):
    """
    Emulates the cursor addressing subset of a VT100: absolute and relative
    moves clamped to the screen, carriage returns, line feeds and cursor
    position reports. Input is scripted, `None` stands for a read timeout.
    """

    rows: int
    cols: int
    row: int
    col: int

    reports_size: bool
    answers_queries: bool
    max_write: int | None

    input: deque[int | None]
    output: bytearray
    writes: list[bytes]

    def __init__(
        self,
        rows: int = 24,
        cols: int = 80,
        *,
        row: int = 1,
        col: int = 1,
        reports_size: bool = True,
        answers_queries: bool = True,
        max_write: int | None = None,
    ):
        super().__init__(-1, -1)
        self.rows = rows
        self.cols = cols
        self.row = row
        self.col = col
        self.reports_size = reports_size
        self.answers_queries = answers_queries
        self.max_write = max_write
        self.input = deque()
        self.output = bytearray()
        self.writes = []

    def feed(self, *items: bytes | None) -> None:
        for item in items:
            if item is None:
                self.input.append(None)
            else:
                self.input.extend(item)

    @override
    def read_byte(self) -> int | None:
        if not self.input:
            return None
        return self.input.popleft()

    @override
    def write(self, data: bytes) -> int:
        if self.max_write is not None:
            data = data[: self.max_write]
        self.writes.append(data)
        self.output += data
        self.interpret(data)
        return len(data)

    @override
    def window_size(self) -> tuple[int, int] | None:
        if not self.reports_size:
            return None
        return self.rows, self.cols

    def interpret(self, data: bytes) -> None:
        pos = 0
        while pos < len(data):
            if match := SEQUENCE.match(data, pos):
                self.apply(match[1], match[2], match[3])
                pos = match.end()
                continue

            byte = data[pos]
            pos += 1

            match byte:
                case 0x0D:
                    self.col = 1
                case 0x0A:
                    self.row = min(self.row + 1, self.rows)
                case _:
                    self.col = min(self.col + 1, self.cols)

    def apply(self, first: bytes, second: bytes | None, final: bytes) -> None:
        count = int(first or 1)

        match final:
            case b"H":
                self.row = self.clamp(int(first or 1), self.rows)
                self.col = self.clamp(int(second or 1), self.cols)
            case b"A":
                self.row = self.clamp(self.row - count, self.rows)
            case b"B":
                self.row = self.clamp(self.row + count, self.rows)
            case b"C":
                self.col = self.clamp(self.col + count, self.cols)
            case b"D":
                self.col = self.clamp(self.col - count, self.cols)
            case b"n" if first == b"6" and self.answers_queries:
                self.feed(f"\x1b[{self.row};{self.col}R".encode())
            case _:
                pass

    @staticmethod
    def clamp(value: int, limit: int) -> int:
        return max(1, min(value, limit))


def ctrl(char: str) -> int:
    """The byte a terminal sends for ctrl+`char`."""
    return ord(char) & 0x1F
