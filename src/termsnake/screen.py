# screen.py
"""
Display backends.

The game only needs a grid of character cells it can paint and a stream of
key events. `Screen` spells out that contract; `CursesScreen` provides it in
a terminal and `PygameScreen` in a desktop window.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple
import curses
import logging
import os
import queue

# Keep pygame's greeting off stdout; the terminal belongs to curses
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # type: ignore  # noqa: E402

from .config import CELL_SIZE, WINDOW_CELLS, BG, GREEN, RED, TEXT

log = logging.getLogger(__name__)


class ScreenError(Exception):
    """Raised when a display backend cannot be started."""


class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ESCAPE = "escape"
    CTRL_C = "ctrl-c"
    CLOSE = "close"    # window closed by the user
    RUNE = "rune"      # a literal character, see KeyEvent.char
    OTHER = "other"


class Style(Enum):
    DEFAULT = 0
    SNAKE = 1
    FOOD = 2
    TEXT = 3


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: str = ""


class Screen:
    """Cell-grid display plus blocking key input."""

    def init(self) -> None:
        raise NotImplementedError

    def fini(self) -> None:
        raise NotImplementedError

    def size(self) -> Tuple[int, int]:
        """Current surface size as (width, height) in cells."""
        raise NotImplementedError

    def set_cell(self, x: int, y: int, glyph: str, style: Style = Style.DEFAULT) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def show(self) -> None:
        raise NotImplementedError

    def poll_event(self) -> KeyEvent:
        """Block until the next key event is available."""
        raise NotImplementedError

    def draw_text(self, x: int, y: int, text: str, style: Style = Style.TEXT) -> None:
        for i, ch in enumerate(text):
            self.set_cell(x + i, y, ch, style)


# ---------- Terminal (curses) ----------
_CURSES_KEYS = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    27: Key.ESCAPE,
    3: Key.CTRL_C,
}


def translate_curses_key(code: int) -> KeyEvent:
    if code in _CURSES_KEYS:
        return KeyEvent(_CURSES_KEYS[code])
    if 32 <= code < 127:
        return KeyEvent(Key.RUNE, chr(code))
    return KeyEvent(Key.OTHER)


class CursesScreen(Screen):
    """
    Renders the cell grid in the terminal.

    ncurses is not thread-safe, so every curses call stays on the thread that
    draws: show() reads pending keys without blocking and poll_event() takes
    them from a thread-safe queue.
    """

    def __init__(self, stdscr=None) -> None:
        self.stdscr = stdscr
        self._attrs = {}
        self._events: "queue.Queue[KeyEvent]" = queue.Queue()

    def init(self) -> None:
        # Escape would otherwise wait a full second for a following sequence
        os.environ.setdefault("ESCDELAY", "25")
        try:
            self.stdscr = curses.initscr()
        except curses.error as exc:
            raise ScreenError(str(exc) or "cannot open terminal") from exc
        try:
            curses.noecho()
            curses.raw()  # Ctrl-C arrives as a key, not as SIGINT
            self.stdscr.keypad(True)
            self.stdscr.nodelay(True)
            self._setup_colors()
        except curses.error as exc:
            self.fini()
            raise ScreenError(str(exc)) from exc
        try:
            curses.curs_set(0)
        except curses.error:
            log.debug("terminal cannot hide the cursor")
        log.info("terminal screen started (%dx%d)", *self.size())

    def _setup_colors(self) -> None:
        self._attrs = {style: curses.A_NORMAL for style in Style}
        if not curses.has_colors():
            return
        curses.start_color()
        curses.init_pair(1, curses.COLOR_GREEN, curses.COLOR_BLACK)
        curses.init_pair(2, curses.COLOR_RED, curses.COLOR_BLACK)
        curses.init_pair(3, curses.COLOR_WHITE, curses.COLOR_BLACK)
        self._attrs[Style.SNAKE] = curses.color_pair(1)
        self._attrs[Style.FOOD] = curses.color_pair(2)
        self._attrs[Style.TEXT] = curses.color_pair(3) | curses.A_BOLD

    def fini(self) -> None:
        if self.stdscr is None:
            return
        self.stdscr.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()
        self.stdscr = None
        log.info("terminal screen closed")

    def size(self) -> Tuple[int, int]:
        h, w = self.stdscr.getmaxyx()
        return w, h

    def set_cell(self, x: int, y: int, glyph: str, style: Style = Style.DEFAULT) -> None:
        w, h = self.size()
        if not (0 <= x < w and 0 <= y < h):
            return
        try:
            self.stdscr.addstr(y, x, glyph, self._attrs.get(style, curses.A_NORMAL))
        except curses.error:
            # curses reports an error after writing the bottom-right cell
            pass

    def clear(self) -> None:
        self.stdscr.erase()

    def show(self) -> None:
        self.stdscr.refresh()
        while True:
            code = self.stdscr.getch()
            if code == -1:
                break
            self._events.put(translate_curses_key(code))

    def poll_event(self) -> KeyEvent:
        return self._events.get()


# ---------- Window (pygame) ----------
_PYGAME_KEYS = {
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_ESCAPE: Key.ESCAPE,
}

_COLORS = {
    Style.DEFAULT: TEXT,
    Style.SNAKE: GREEN,
    Style.FOOD: RED,
    Style.TEXT: (255, 255, 255),
}


def translate_pygame_event(event) -> KeyEvent | None:
    """Map a pygame event to a KeyEvent, or None for non-key events."""
    if event.type == pygame.QUIT:
        return KeyEvent(Key.CLOSE)
    if event.type != pygame.KEYDOWN:
        return None
    if event.key == pygame.K_c and event.mod & pygame.KMOD_CTRL:
        return KeyEvent(Key.CTRL_C)
    if event.key in _PYGAME_KEYS:
        return KeyEvent(_PYGAME_KEYS[event.key])
    if event.unicode and event.unicode.isprintable():
        return KeyEvent(Key.RUNE, event.unicode)
    return KeyEvent(Key.OTHER)


class PygameScreen(Screen):
    """
    Renders the cell grid in a window.

    SDL wants its event queue pumped from the thread that opened the window,
    so show() drains pygame's events into a thread-safe queue and
    poll_event() reads from that queue instead.
    """

    def __init__(self, cells: Tuple[int, int] = WINDOW_CELLS, cell_size: int = CELL_SIZE) -> None:
        self.cells = cells
        self.cell_size = cell_size
        self.surface = None
        self.font = None
        self._events: "queue.Queue[KeyEvent]" = queue.Queue()

    def init(self) -> None:
        try:
            pygame.init()
            w, h = self.cells
            self.surface = pygame.display.set_mode((w * self.cell_size, h * self.cell_size))
            pygame.display.set_caption("Snake")
            self.font = pygame.font.SysFont("monospace", self.cell_size, bold=True)
        except pygame.error as exc:
            pygame.quit()
            raise ScreenError(str(exc)) from exc
        self.surface.fill(BG)
        log.info("window screen started (%dx%d cells)", *self.cells)

    def fini(self) -> None:
        if self.surface is None:
            return
        pygame.quit()
        self.surface = None
        log.info("window screen closed")

    def size(self) -> Tuple[int, int]:
        return self.cells

    def set_cell(self, x: int, y: int, glyph: str, style: Style = Style.DEFAULT) -> None:
        w, h = self.cells
        if not (0 <= x < w and 0 <= y < h):
            return
        color = _COLORS[style]
        rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size, self.cell_size)
        if style in (Style.SNAKE, Style.FOOD):
            pygame.draw.rect(self.surface, color, rect)
            return
        pygame.draw.rect(self.surface, BG, rect)
        txt = self.font.render(glyph, True, color)
        self.surface.blit(txt, txt.get_rect(center=rect.center))

    def clear(self) -> None:
        self.surface.fill(BG)

    def show(self) -> None:
        pygame.display.flip()
        for event in pygame.event.get():
            key_event = translate_pygame_event(event)
            if key_event is not None:
                self._events.put(key_event)

    def poll_event(self) -> KeyEvent:
        return self._events.get()


def open_screen(backend: str) -> Screen:
    """Build (but do not start) the named display backend."""
    if backend == "terminal":
        return CursesScreen()
    if backend == "window":
        return PygameScreen()
    raise ValueError(f"Unknown backend: {backend}")
