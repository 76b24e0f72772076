from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import override

CSI = b"\x1b["


class ControlSequence(ABC):
    @abstractmethod
    def encode(self) -> bytes:
        raise NotImplementedError


@dataclass(frozen=True)
class ClearScreen(ControlSequence):
    @override
    def encode(self) -> bytes:
        return CSI + b"2J"


@dataclass(frozen=True)
class MoveCursor(ControlSequence):
    row: int
    col: int

    @override
    def encode(self) -> bytes:
        return CSI + f"{self.row};{self.col}H".encode()


@dataclass(frozen=True)
class MoveHome(ControlSequence):
    @override
    def encode(self) -> bytes:
        return CSI + b"H"


@dataclass(frozen=True)
class EraseLine(ControlSequence):
    """Erase from the cursor to the end of the line."""

    @override
    def encode(self) -> bytes:
        return CSI + b"K"


@dataclass(frozen=True)
class CursorForward(ControlSequence):
    count: int

    @override
    def encode(self) -> bytes:
        return CSI + f"{self.count}C".encode()


@dataclass(frozen=True)
class CursorDown(ControlSequence):
    count: int

    @override
    def encode(self) -> bytes:
        return CSI + f"{self.count}B".encode()


@dataclass(frozen=True)
class QueryCursorPosition(ControlSequence):
    """Ask the terminal to report the cursor as `ESC [ row ; col R`."""

    @override
    def encode(self) -> bytes:
        return CSI + b"6n"


def encode(*sequences: ControlSequence) -> bytes:
    return b"".join(sequence.encode() for sequence in sequences)
