# controls.py
"""Keyboard handling: turns key events into commands for the game loop."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging
import queue
import threading
import time

from .config import UP, DOWN, LEFT, RIGHT, INPUT_POLL_DELAY_MS
from .screen import Key, KeyEvent, Screen

log = logging.getLogger(__name__)

TURN, RESTART, QUIT = "turn", "restart", "quit"

_DIRECTIONS = {
    Key.UP: UP,
    Key.DOWN: DOWN,
    Key.LEFT: LEFT,
    Key.RIGHT: RIGHT,
}
_QUIT_KEYS = (Key.ESCAPE, Key.CTRL_C, Key.CLOSE)


@dataclass(frozen=True)
class Command:
    kind: str
    direction: Optional[tuple] = None


def classify(event: KeyEvent) -> Optional[Command]:
    """Map a key event to a command. Unknown keys give None."""
    if event.key in _DIRECTIONS:
        # No reversal guard: turning back into the body is caught by the step
        return Command(TURN, _DIRECTIONS[event.key])
    if event.key in _QUIT_KEYS:
        return Command(QUIT)
    if event.key == Key.RUNE and event.char in ("r", "R"):
        return Command(RESTART)
    return None


class InputListener:
    """Background thread feeding commands from `screen` into `commands`."""

    def __init__(self, screen: Screen, commands: "queue.Queue[Command]",
                 poll_delay: float = INPUT_POLL_DELAY_MS / 1000.0) -> None:
        self.screen = screen
        self.commands = commands
        self.poll_delay = poll_delay
        self.thread = threading.Thread(target=self.run, name="input", daemon=True)

    def start(self) -> None:
        self.thread.start()

    def poll_once(self) -> Optional[Command]:
        cmd = classify(self.screen.poll_event())
        if cmd is not None:
            self.commands.put(cmd)
        return cmd

    def run(self) -> None:
        while True:
            cmd = self.poll_once()
            if cmd is not None and cmd.kind == QUIT:
                log.debug("input listener stopping")
                return
            time.sleep(self.poll_delay)
