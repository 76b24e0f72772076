from dataclasses import dataclass

from .terminal import Terminal, TerminalError

ESCAPE = 0x1B


@dataclass(frozen=True)
class ByteKey:
    byte: int


@dataclass(frozen=True)
class ArrowUp:
    pass


@dataclass(frozen=True)
class ArrowDown:
    pass


@dataclass(frozen=True)
class ArrowLeft:
    pass


@dataclass(frozen=True)
class ArrowRight:
    pass


@dataclass(frozen=True)
class EscapeLiteral:
    pass


type KeyEvent = ByteKey | ArrowUp | ArrowDown | ArrowLeft | ArrowRight | EscapeLiteral

ARROWS: dict[int, KeyEvent] = {
    ord("A"): ArrowUp(),
    ord("B"): ArrowDown(),
    ord("C"): ArrowRight(),
    ord("D"): ArrowLeft(),
}

BYTE_NAMES: dict[int, str] = {
    0x00: "ctrl+space",
    0x08: "backspace",  # ^H
    0x09: "tab",
    0x0D: "enter",
    0x20: "space",
    0x7F: "backspace",
}


def key_name(key: KeyEvent) -> str:
    match key:
        case ByteKey(byte) if byte in BYTE_NAMES:
            return BYTE_NAMES[byte]
        case ByteKey(byte) if byte < 0x1B:
            return f"ctrl+{chr(byte | 0x60)}"
        case ByteKey(byte) if byte < 0x20:
            return f"ctrl+{chr(byte | 0x40)}"
        case ByteKey(byte):
            return chr(byte)
        case ArrowUp():
            return "up"
        case ArrowDown():
            return "down"
        case ArrowLeft():
            return "left"
        case ArrowRight():
            return "right"
        case EscapeLiteral():
            return "escape"


class Keyboard:
    terminal: Terminal

    def __init__(self, terminal: Terminal):
        self.terminal = terminal

    def get(self) -> KeyEvent:
        byte = self.get_byte()

        if byte != ESCAPE:
            return ByteKey(byte)

        # Only wait a single read timeout for the rest of the sequence, a lone
        # escape press does not have one. A failed read counts as a lone
        # escape too.
        first = self.read_follow_up()
        if first != ord("["):
            return EscapeLiteral()

        second = self.read_follow_up()
        if second is None:
            return EscapeLiteral()

        return ARROWS.get(second, EscapeLiteral())

    def read_follow_up(self) -> int | None:
        try:
            return self.terminal.read_byte()
        except TerminalError:
            return None

    def get_byte(self) -> int:
        while True:
            byte = self.terminal.read_byte()
            if byte is not None:
                return byte
