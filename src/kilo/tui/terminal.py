import errno
import os
import sys

from .sequences import ClearScreen, MoveCursor, encode

# An empty read, or one of these errors on a non-blocking fd, means no key
# arrived before the timeout.
TIMEOUT_ERRNOS = frozenset({errno.EAGAIN, errno.EWOULDBLOCK})


class TerminalError(Exception):
    operation: str
    reason: str

    def __init__(self, operation: str, reason: object):
        super().__init__(f"{operation}: {reason}")
        self.operation = operation
        self.reason = str(reason)


class Terminal:
    input_fd: int
    output_fd: int

    def __init__(self, input_fd: int | None = None, output_fd: int | None = None):
        self.input_fd = sys.stdin.fileno() if input_fd is None else input_fd
        self.output_fd = sys.stdout.fileno() if output_fd is None else output_fd

    def write(self, data: bytes) -> int:
        try:
            return os.write(self.output_fd, data)
        except OSError as e:
            raise TerminalError("write", e.strerror or e) from e

    def read_byte(self) -> int | None:
        try:
            data = os.read(self.input_fd, 1)
        except OSError as e:
            if e.errno in TIMEOUT_ERRNOS:
                return None
            raise TerminalError("read", e.strerror or e) from e

        if not data:
            return None

        (byte,) = data
        return byte

    def window_size(self) -> tuple[int, int] | None:
        """Rows and columns as reported by the kernel, if it knows them."""
        try:
            size = os.get_terminal_size(self.output_fd)
        except OSError:
            return None

        if size.columns == 0:
            return None

        return size.lines, size.columns

    def clear(self) -> None:
        """Clear the screen and put the cursor back in the top left corner."""
        self.write(encode(ClearScreen(), MoveCursor(1, 1)))
