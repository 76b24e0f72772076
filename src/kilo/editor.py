import logging
from contextlib import ExitStack
from dataclasses import dataclass

from .config import Config
from .tui.buffer import PaintBuffer
from .tui.geometry import ScreenGeometry, discover
from .tui.keyboard import KeyEvent, Keyboard, key_name
from .tui.mode import RawMode
from .tui.render import FrameContent, FrameRenderer, Welcome
from .tui.terminal import Terminal

logger = logging.getLogger(__name__)


@dataclass
class CursorPosition:
    row: int = 1
    col: int = 1


class Editor:
    terminal: Terminal
    geometry: ScreenGeometry
    content: FrameContent
    config: Config

    keyboard: Keyboard
    renderer: FrameRenderer

    cursor: CursorPosition
    running: bool

    def __init__(
        self,
        terminal: Terminal,
        geometry: ScreenGeometry,
        content: FrameContent,
        config: Config,
    ):
        self.terminal = terminal
        self.geometry = geometry
        self.content = content
        self.config = config

        self.keyboard = Keyboard(terminal)
        self.renderer = FrameRenderer(
            terminal, PaintBuffer(config.screen.buffer_capacity)
        )

        self.cursor = CursorPosition()
        self.running = True

    def run(self) -> int:
        while self.running:
            self.render()
            self.handle_key(self.keyboard.get())
        return 0

    def render(self) -> None:
        self.renderer.render(self.geometry, self.cursor, self.content)

    def handle_key(self, key: KeyEvent) -> None:
        try:
            command = self.config.keymap[key_name(key)]
        except KeyError:
            return

        match command:
            case "quit":
                self.exit()
            case "cursor_up":
                self.move_cursor(-1, 0)
            case "cursor_down":
                self.move_cursor(1, 0)
            case "cursor_left":
                self.move_cursor(0, -1)
            case "cursor_right":
                self.move_cursor(0, 1)
            case _:
                pass

    def move_cursor(self, rows: int, cols: int) -> None:
        row = self.cursor.row + rows
        col = self.cursor.col + cols

        if 1 <= row <= self.geometry.rows:
            self.cursor.row = row
        if 1 <= col <= self.geometry.cols:
            self.cursor.col = col

    def exit(self) -> None:
        logger.info("quitting")
        self.running = False


def get_content(config: Config) -> FrameContent:
    banner = config.screen.banner.encode() or None
    return Welcome(config.screen.filler.encode(), banner)


def run(terminal: Terminal, config: Config) -> int:
    with ExitStack() as stack:
        # registered first so the screen is also cleared when entering raw
        # mode fails
        stack.callback(terminal.clear)
        stack.enter_context(RawMode(terminal.input_fd, config.terminal.vtime))

        geometry = discover(terminal)
        editor = Editor(terminal, geometry, get_content(config), config)
        return editor.run()
