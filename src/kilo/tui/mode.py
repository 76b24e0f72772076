import atexit
import copy
import logging
import termios
import tty
from types import TracebackType
from typing import Any, Self

from .terminal import TerminalError

logger = logging.getLogger(__name__)

type TermAttrs = list[Any]

DEFAULT_VTIME = 1


def make_raw(attrs: TermAttrs, vtime: int = DEFAULT_VTIME) -> TermAttrs:
    raw = copy.deepcopy(attrs)

    raw[tty.IFLAG] &= ~(
        termios.IXON  # ctrl+s / ctrl+q flow control
        | termios.ICRNL  # \r -> \n
    )
    raw[tty.OFLAG] &= ~termios.OPOST  # \n -> \r\n and friends
    raw[tty.LFLAG] &= ~(
        termios.ECHO
        | termios.ICANON  # line buffering
        | termios.ISIG  # ctrl+c, ctrl+z, ctrl+\
        | termios.IEXTEN  # ctrl+v, ctrl+o
    )

    # return as soon as a byte is there, or after vtime tenths of a second
    raw[tty.CC][termios.VMIN] = 0
    raw[tty.CC][termios.VTIME] = vtime

    return raw


class RawMode:
    fd: int
    vtime: int
    original: TermAttrs | None
    active: bool

    def __init__(self, fd: int, vtime: int = DEFAULT_VTIME):
        self.fd = fd
        self.vtime = vtime
        self.original = None
        self.active = False

    def capture(self) -> None:
        if self.original is not None:
            raise RuntimeError("terminal mode already captured")

        try:
            self.original = termios.tcgetattr(self.fd)
        except termios.error as e:
            raise TerminalError("tcgetattr", e.args[-1]) from e

    def enable(self) -> None:
        if self.original is None:
            raise RuntimeError("terminal mode must be captured before enabling raw mode")

        self.set_attrs(make_raw(self.original, self.vtime))
        if not self.active:
            atexit.register(self.disable)
            self.active = True
        logger.debug("raw mode enabled on fd %d", self.fd)

    def disable(self) -> None:
        if self.original is None:
            raise RuntimeError("terminal mode was never captured")

        if not self.active:
            return

        self.active = False
        atexit.unregister(self.disable)
        self.set_attrs(self.original)
        logger.debug("raw mode disabled on fd %d", self.fd)

    def set_attrs(self, attrs: TermAttrs) -> None:
        # TCSAFLUSH drops pending input before the change
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, attrs)
        except termios.error as e:
            raise TerminalError("tcsetattr", e.args[-1]) from e

    def __enter__(self) -> Self:
        self.capture()
        self.enable()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.disable()
