import queue
from typing import Dict, List, Tuple

import pytest

from termsnake.screen import KeyEvent, Screen, Style


class FakeScreen(Screen):
    """In-memory cell grid with a scripted list of key events."""

    def __init__(self, width: int = 20, height: int = 15, events: List[KeyEvent] = ()):
        self.width = width
        self.height = height
        self.cells: Dict[Tuple[int, int], Tuple[str, Style]] = {}
        self.events = queue.Queue()
        for ev in events:
            self.events.put(ev)
        self.frames = 0
        self.started = False
        self.closed = False

    def init(self):
        self.started = True

    def fini(self):
        self.closed = True

    def size(self):
        return self.width, self.height

    def set_cell(self, x, y, glyph, style=Style.DEFAULT):
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[(x, y)] = (glyph, style)

    def clear(self):
        self.cells = {}

    def show(self):
        self.frames += 1

    def poll_event(self):
        return self.events.get()

    def row(self, y: int) -> str:
        return "".join(self.cells.get((x, y), (" ", None))[0] for x in range(self.width)).rstrip()


@pytest.fixture
def screen():
    return FakeScreen()


@pytest.fixture
def wide_screen():
    return FakeScreen(40, 20)
